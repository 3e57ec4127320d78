from pydantic_settings import BaseSettings
from typing import List
from dotenv import load_dotenv
import os

load_dotenv()

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "AutoEcole Pro"
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Supabase
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")  # Pour SQLAlchemy (schéma)
    INIT_DB_ON_STARTUP: bool = os.getenv("INIT_DB_ON_STARTUP", "False").lower() == "true"

    # Planning
    SCHOOL_TIMEZONE: str = os.getenv("SCHOOL_TIMEZONE", "Europe/Paris")

    # Session / préférences
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "autoecole_session")
    THEME_COOKIE_NAME: str = os.getenv("THEME_COOKIE_NAME", "theme")

    # CORS
    ALLOWED_ORIGINS: str = os.getenv("ALLOWED_ORIGINS", "http://localhost:5173,http://localhost:3000")

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    class Config:
        env_file = ".env"

settings = Settings()
