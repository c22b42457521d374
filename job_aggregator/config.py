from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Safe defaults; override via environment or .env file
    APP_NAME: str = "Job Aggregator"
    APP_ENV: str = "dev"

    DATABASE_URL: str = "postgresql+psycopg2://postgres:postgres@db:5432/postgres"

    # Upstream providers
    PROVIDER1_URL: str = "https://assignment.devotel.io/api/provider1/jobs"
    PROVIDER2_URL: str = "https://assignment.devotel.io/api/provider2/jobs"
    FETCH_TIMEOUT_SECONDS: float = 30.0  # total bound per provider fetch
    USER_AGENT: str = "Job-Aggregator/1.0"

    # Scheduling
    CRON_SCHEDULE: str = "0 */6 * * *"  # every 6 hours
    SCHEDULER_ENABLED: bool = True

    LOG_LEVEL: str = "INFO"
    API_KEY: str = ""  # empty disables the trigger auth check

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
