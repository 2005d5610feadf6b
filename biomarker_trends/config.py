from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    database_url: str = "sqlite:///./biomarker_trends.db"
    app_env: str = "dev"
    log_level: str = "INFO"

    allowed_origins: str = "http://localhost:3001"
    check_schema_on_startup: bool = True


settings = Settings()
