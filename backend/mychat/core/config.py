from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    DATABASE_URL: str = Field(default="sqlite:///./mychat.db", description="Database connection string")
    SECRET_KEY: str = Field(default="your-secret-key-change-this-in-production", description="JWT secret key")
    ALGORITHM: str = Field(default="HS256", description="Algorithm for JWT (e.g., HS256)")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60, description="How long (in minutes) an access token is valid")
    UPLOADS_DIR: str = Field(default="uploads", description="Root directory for uploaded files, served at /uploads")
    MAX_AVATAR_SIZE: int = Field(default=5 * 1024 * 1024, description="Maximum avatar size in bytes (5 MiB)")
    CHAT_RESPONSE_DELAY_MS: int = Field(default=500, description="Simulated bot thinking time in milliseconds")
    CORS_ORIGINS: List[str] = Field(default=["http://localhost:3000", "http://localhost:5173"])
    LOG_LEVEL: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
