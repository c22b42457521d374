from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from .config import settings


def make_engine(url: str, **kwargs):
	"""Build an engine; SQLite needs cross-thread access for the scheduler thread."""
	if url.startswith("sqlite"):
		kwargs.setdefault("connect_args", {"check_same_thread": False})
	else:
		kwargs.setdefault("pool_pre_ping", True)
	return create_engine(url, **kwargs)


engine = make_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base = declarative_base()


def init_db(bind=None):
	"""Create database tables defined on Base subclasses.

	This is a convenience wrapper used at startup and in tests. In production
	you should run migrations (Alembic) instead of create_all.
	"""
	# models must be imported so their tables are registered on Base
	from . import models  # noqa: F401

	Base.metadata.create_all(bind=bind or engine)
