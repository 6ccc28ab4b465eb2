from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./wknd.db"

    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # Paystack
    PAYSTACK_SECRET_KEY: str = ""
    PAYSTACK_BASE_URL: str = "https://api.paystack.co"
    PAYSTACK_TIMEOUT_SECONDS: float = 10.0
    CURRENCY: str = "NGN"
    SERVICE_FEE: int = 500

    # Identifiers
    REFERENCE_PREFIX: str = "234wknd"
    TICKET_PREFIX: str = "234WKND"

    # Event shown on tickets
    EVENT_TITLE: str = "A Weekend Experience"
    EVENT_DATE: str = "April 5, 2026"
    EVENT_LOCATION: str = "Amore Garden, Lagos"

    # Email
    EMAIL_USER: str = ""
    EMAIL_APP_PASSWORD: str = ""
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 465
    SUPPORT_EMAIL: str = "support@234wknd.com"

    # Application
    PROJECT_NAME: str = "234 WKND"
    CLIENT_URL: str = "http://localhost:3000"
    PORT: int = 3001
    ACK_DELAY_SECONDS: float = 2.0
    LOG_LEVEL: str = "INFO"

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CLIENT_URL.split(",") if origin.strip()]

    @property
    def payment_callback_url(self) -> Optional[str]:
        """Paystack redirect target; omitted when no client origin is configured"""
        if not self.allowed_origins:
            return None
        return f"{self.allowed_origins[0]}/payment/success"

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
