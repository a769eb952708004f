"""
Dealer Back-Office - Configuration
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional
import secrets
from pathlib import Path
from dotenv import load_dotenv

# Carrega .env com override para sobrescrever variáveis do sistema
env_file = Path(__file__).parent.parent.parent / ".env"
if env_file.exists():
    load_dotenv(env_file, override=True)


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Dealer Back-Office"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Database (accepts DATABASE_URL or DEALER_DATABASE_URL)
    DATABASE_URL: Optional[str] = None
    DEALER_DATABASE_URL: str = "sqlite+aiosqlite:///./dealer.db"

    @property
    def db_url(self) -> str:
        """Returns DATABASE_URL if set, otherwise DEALER_DATABASE_URL"""
        return self.DATABASE_URL or self.DEALER_DATABASE_URL

    # Security
    SECRET_KEY: str = secrets.token_urlsafe(32)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12

    # Admin inicial (POST /api/auth/setup)
    ADMIN_EMAIL: str = "admin@autosdaserra.com.br"
    ADMIN_PASSWORD: str = "change-me-in-production"
    ADMIN_NAME: str = "Administrador"

    # CORS
    CORS_ORIGINS: list = ["*"]

    # Rate limits
    LOGIN_RATE_LIMIT: str = "10/minute"
    ACCOUNT_CREATION_LIMIT: int = 10
    ACCOUNT_CREATION_WINDOW_SECONDS: int = 60 * 60

    # Regras de negócio
    RESERVATION_VALIDITY_DAYS: int = 10
    REQUIRE_APPROVED_PROPOSAL: bool = True
    DEFAULT_DELIVERY_PERCENTAGE: float = 50
    STORE_MARGIN_RATE: float = 0.05
    CET_FACTOR: float = 1.15

    # Documentos
    LOGO_PATH: str = "static/company/logo.png"
    DEFAULT_DOCUMENT_LOCATION: str = "Lages/SC"

    # Empresa (usado quando não há company_settings salvo)
    COMPANY_NAME: str = "Autos da Serra"
    COMPANY_FANTASY_NAME: str = "AUTO DA SERRA MULTIMARCAS"
    COMPANY_CNPJ: str = "29.030.365/0001-40"
    COMPANY_STREET: str = "Av. Dom Pedro II"
    COMPANY_NEIGHBORHOOD: str = "São Cristóvão"
    COMPANY_CITY: str = "Lages"
    COMPANY_STATE: str = "SC"
    COMPANY_ZIP_CODE: str = "88509-001"
    COMPANY_PHONE: Optional[str] = None
    COMPANY_EMAIL: Optional[str] = None
    COMPANY_REP_NAME: Optional[str] = None
    COMPANY_REP_NATIONALITY: str = "Brasileiro"
    COMPANY_REP_MARITAL_STATUS: str = "solteiro(a)"
    COMPANY_REP_OCCUPATION: str = "Empresário"
    COMPANY_REP_RG: Optional[str] = None
    COMPANY_REP_CPF: Optional[str] = None

    class Config:
        extra = "ignore"
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
