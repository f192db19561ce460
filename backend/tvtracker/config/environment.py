from pathlib import Path
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

env_path = Path(__file__).resolve().parent.parent.parent / '.env'

# one week
DEFAULT_TOKEN_EXPIRE_MINUTES = 7 * 24 * 60


class Settings(BaseModel):
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = DEFAULT_TOKEN_EXPIRE_MINUTES
    bcrypt_rounds: int = 12

    database_url: str = "sqlite:///./tv_tracker.db"

    environment: str = "development"
    log_dir: Optional[str] = "logs"
    cors_origins: List[str] = ["*"]

    admin_email: Optional[str] = None
    admin_username: str = "admin"
    admin_password: Optional[str] = None

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


def _database_url() -> str:
    url = os.getenv('DATABASE_URL')
    if url:
        return url

    if os.getenv('USE_SQLITE', 'false').lower() == 'true':
        return f"sqlite:///{os.getenv('SQLITE_PATH', './tv_tracker.db')}"

    db_user = os.getenv('DB_USER')
    if not db_user:
        raise ValueError("DB_USER is not set")

    db_password = os.getenv('DB_PASSWORD')
    if not db_password:
        raise ValueError("DB_PASSWORD is not set")

    db_host = os.getenv('DB_HOST')
    if not db_host:
        raise ValueError("DB_HOST is not set")

    db_port = os.getenv('DB_PORT', '5432')
    db_name = os.getenv('DB_NAME', 'tv_tracker')
    return f"postgresql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"


def get_settings() -> Settings:
    """Build settings from the process environment (and .env, when present)."""
    load_dotenv(dotenv_path=env_path)

    jwt_secret_key = os.getenv('JWT_SECRET_KEY')
    if not jwt_secret_key:
        raise ValueError("JWT_SECRET_KEY is not set")

    cors_origins = os.getenv('CORS_ORIGINS', '*')

    return Settings(
        jwt_secret_key=jwt_secret_key,
        jwt_algorithm=os.getenv('JWT_ALGORITHM', 'HS256'),
        jwt_access_token_expire_minutes=int(
            os.getenv('JWT_ACCESS_TOKEN_EXPIRE_MINUTES', DEFAULT_TOKEN_EXPIRE_MINUTES)
        ),
        bcrypt_rounds=int(os.getenv('BCRYPT_ROUNDS', 12)),
        database_url=_database_url(),
        environment=os.getenv('ENVIRONMENT', 'development'),
        log_dir=os.getenv('LOG_DIR', 'logs') or None,
        cors_origins=[origin.strip() for origin in cors_origins.split(',') if origin.strip()],
        admin_email=os.getenv('ADMIN_EMAIL') or None,
        admin_username=os.getenv('ADMIN_USERNAME', 'admin'),
        admin_password=os.getenv('ADMIN_PASSWORD') or None,
    )
