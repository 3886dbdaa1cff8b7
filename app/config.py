from pathlib import Path
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
DEFAULT_SA_PATH = BASE_DIR / "serviceAccountKey.json"
load_dotenv(ENV_PATH)

class Settings(BaseSettings):
    APP_NAME: str = "KanbanLite API"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    #FIREBASE
    FIREBASE_PROJECT_ID: str | None = None
    GOOGLE_APPLICATION_CREDENTIALS: str = str(DEFAULT_SA_PATH)
    FIREBASE_SERVICE_ACCOUNT_JSON: str | None = None
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    #Auth
    JWT_SECRET: str = "change-me-kanbanlite-development-secret-key"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_MINUTES: int = 60 * 24
    BCRYPT_ROUNDS: int = 10

    ## Task listing
    DEFAULT_PAGE_LIMIT: int = 10
    MAX_PAGE_LIMIT: int = 100

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

settings = Settings()
