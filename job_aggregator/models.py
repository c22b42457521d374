from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.orm import relationship
from .db import Base

job_skills = Table(
    "job_skills",
    Base.metadata,
    Column("job_offer_id", Integer, ForeignKey("job_offers.id", ondelete="CASCADE"), primary_key=True),
    Column("skill_id", Integer, ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True),
)


class JobORM(Base):
    __tablename__ = "job_offers"
    id = Column(Integer, primary_key=True)
    external_id = Column(String(255), nullable=False, unique=True)
    title = Column(String(512), nullable=False)
    city = Column(String(256), nullable=True)
    state = Column(String(256), nullable=True)
    full_address = Column(String(512), nullable=False)
    is_remote = Column(Boolean, nullable=False, default=False)
    employment_type = Column(String(128), nullable=False)
    salary_min = Column(Numeric(10, 2), nullable=True)
    salary_max = Column(Numeric(10, 2), nullable=True)
    salary_currency = Column(String(3), nullable=False, default="USD")
    salary_original_range = Column(Text, nullable=True)  # raw source text
    company_name = Column(String(256), nullable=False)
    company_industry = Column(String(256), nullable=True)
    company_website = Column(Text, nullable=True)
    experience_years = Column(Integer, nullable=True)
    posted_date = Column(DateTime(timezone=True), nullable=False)
    fetched_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    provider = Column(String(64), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    skills = relationship("SkillORM", secondary=job_skills, back_populates="jobs", order_by="SkillORM.name")

    __table_args__ = (
        Index("ix_job_offers_title_company", "title", "company_name"),
        Index("ix_job_offers_salary", "salary_min", "salary_max"),
        Index("ix_job_offers_city_state", "city", "state"),
    )


class SkillORM(Base):
    __tablename__ = "skills"
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)

    jobs = relationship("JobORM", secondary=job_skills, back_populates="skills")
