from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite:///./vacation_offers.db"

    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:3003,http://127.0.0.1:3003"
    FRONTEND_BUILD_DIR: str | None = None

    LOG_LEVEL: str = "INFO"

    HOST: str = "localhost"
    PORT: int = 3003
    OPEN_BROWSER: bool = True

    # Fallbacks used when an offer has no person count / duration column
    DEFAULT_CURRENCY: str = "PLN"
    DEFAULT_PERSON_COUNT: int = 1
    DEFAULT_DURATION_DAYS: int = 7

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
