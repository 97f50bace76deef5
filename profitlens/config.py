from pydantic_settings import BaseSettings, SettingsConfigDict
class Settings(BaseSettings):
    APP_ENV: str = "dev"
    APP_SECRET: str
    DB_URL: str
    JWT_ISS: str | None = None  # verified only when set
    JWT_AUD: str | None = None
    TZ: str = "UTC"
    LOG_LEVEL: str = "INFO"
    DEFAULT_WINDOW_DAYS: int = 30
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
settings = Settings()
