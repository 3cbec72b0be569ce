"""
Core settings and environment variables for Civic Pulse.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Create a .env file in the root directory to configure these.
    """

    # Application
    APP_NAME: str = "Civic Pulse"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS - Frontend URLs allowed to access this API
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:5173"

    # Firebase/Firestore
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_CREDENTIALS_PATH: Optional[str] = None  # Path to service account JSON

    # Mock DB mode for local development without Firebase credentials
    USE_MOCK_DB: bool = False
    MOCK_DB_PATH: Optional[str] = "./mock_db.json"

    # Officer directory source: "static" (built-in table) or "firestore" (officers collection)
    OFFICER_SOURCE: str = "static"

    # Remote vision classifier (optional, image moderation + category)
    AI_ENABLED: bool = True
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    AI_TIMEOUT_SECONDS: float = 10.0

    # Geocoding
    # - GEOCODING_PROVIDER: "nominatim" (default, no API key) or "google"
    # - GOOGLE_MAPS_API_KEY: optional; only used when provider is "google"
    GEOCODING_PROVIDER: str = "nominatim"
    GOOGLE_MAPS_API_KEY: Optional[str] = None
    GEOCODING_USER_AGENT: str = "civicpulse/1.0"
    GEOCODING_TIMEOUT_SECONDS: float = 3.0
    DEFAULT_CITY: str = "Amravati"
    DEFAULT_STATE: str = "Maharashtra"

    # Officer email (SMTP). Port 465 uses implicit TLS, anything else STARTTLS.
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 465
    SMTP_USER: Optional[str] = None
    SMTP_PASS: Optional[str] = None
    MAIL_FROM_NAME: str = "CivicPulse"
    SMTP_TIMEOUT_SECONDS: float = 10.0

    # Moderation thresholds
    CLASSIFICATION_CONFIDENCE_THRESHOLD: float = 0.6
    SPAM_REPEAT_WINDOW_DAYS: int = 7
    SPAM_REPEAT_THRESHOLD: int = 2

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"


# Global settings instance
settings = Settings()
