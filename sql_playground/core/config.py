from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./practice.db"
    DATABASE_ECHO: bool = False

    # Used to sign the session cookie
    SECRET_KEY: str = "super-secret-key"
    ALGORITHM: str = "HS256"

    SESSION_EXPIRE_MINUTES: int = 60
    SESSION_COOKIE_NAME: str = "playground.sid"

    LOG_LEVEL: str = "INFO"

    # This tells Pydantic to read from the .env file
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Create a single instance of the settings to use everywhere
settings = Settings()
