from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class DemoAccountConfig(BaseModel):
    """A fallback login that lives only in configuration."""

    email: str
    password: str
    role: str
    name: str


DEFAULT_DEMO_ACCOUNTS = [
    DemoAccountConfig(email="admin@amealio.com", password="admin123", role="ADMIN", name="Admin User"),
    DemoAccountConfig(email="hr@amealio.com", password="hr123", role="HR", name="HR Manager"),
    DemoAccountConfig(email="user@amealio.com", password="user123", role="APPLICANT", name="John Doe"),
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    DATABASE_URL: str = "sqlite:///./careers_portal.db"

    # JWT Authentication
    SECRET_KEY: str = "fallback-secret-for-development"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Password policy
    BCRYPT_ROUNDS: int = 12
    REGISTRATION_MIN_PASSWORD_LENGTH: int = 8
    HR_RESET_MIN_PASSWORD_LENGTH: int = 6

    # 401 matches the portal's historical behaviour; set 403 to separate
    # authenticated-but-forbidden from unauthenticated.
    FORBIDDEN_STATUS_CODE: int = 401

    # Demo accounts (JSON list in the environment). Off unless explicitly
    # enabled for a deployment without real accounts.
    DEMO_ACCOUNTS_ENABLED: bool = False
    DEMO_ACCOUNTS: list[DemoAccountConfig] = DEFAULT_DEMO_ACCOUNTS

    # Application
    APP_NAME: str = "Careers Portal"
    API_PREFIX: str = "/api"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    BACKEND_CORS_ORIGINS: str = (
        "http://localhost:3000,"
        "http://127.0.0.1:3000"
    )


settings = Settings()
