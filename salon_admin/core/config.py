from pydantic_settings import BaseSettings
from typing import List
import os
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    # App Settings
    APP_NAME: str = os.getenv("APP_NAME", "Nail Salon Console")
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:3000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Salon backend (REST/JSON)
    BACKEND_URL: str = os.getenv("BACKEND_URL", "http://localhost:8080")
    BACKEND_TIMEOUT: float = float(os.getenv("BACKEND_TIMEOUT", "10"))
    APPOINTMENTS_PATH: str = os.getenv("APPOINTMENTS_PATH", "/api/appointments")

    # Email/password identity provider
    AUTH_SIGN_IN_URL: str = os.getenv(
        "AUTH_SIGN_IN_URL",
        "https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword"
    )
    AUTH_API_KEY: str = os.getenv("AUTH_API_KEY", "")
    ADMIN_EMAIL: str = os.getenv("ADMIN_EMAIL", "admin@example.com")
    # Comma separated list of accounts that get the staff role
    STAFF_EMAILS: str = os.getenv("STAFF_EMAILS", "")

    # JWT Auth
    SECRET_KEY: str = os.getenv("SECRET_KEY", "your_secret_key_here")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",  # React frontend
        "http://localhost:5173",  # Vite dev server
    ]

    def staff_emails(self) -> List[str]:
        return [e.strip().lower() for e in self.STAFF_EMAILS.split(",") if e.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

settings = Settings()
