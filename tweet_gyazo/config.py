from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings
from typing import Optional
from dotenv import load_dotenv
from functools import lru_cache

# Load environment variables
load_dotenv()

class Settings(BaseSettings):
    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000
    ENVIRONMENT: str = "development"
    WORKERS: int = 1

    # Twitter OAuth 1.0a credentials
    TWITTER_KEY: SecretStr
    TWITTER_SECRET: SecretStr
    TWITTER_TOKEN: SecretStr
    TWITTER_TOKEN_SECRET: SecretStr

    # Gyazo
    GYAZO_TOKEN: SecretStr

    # Endpoints
    TWITTER_STATUS_SHOW_URL: str = "https://api.twitter.com/1.1/statuses/show.json"
    GYAZO_UPLOAD_URL: str = "https://upload.gyazo.com/api/upload"

    # Outbound HTTP
    HTTP_TIMEOUT: float = 30.0

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE: Optional[str] = None

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, value: str) -> str:
        if value not in ["development", "production", "testing"]:
            raise ValueError("Invalid environment")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError(f"Invalid log level: {value}")
        return value

    @property
    def twitter_credentials(self) -> dict:
        """Get the four OAuth 1.0a secrets as plain strings."""
        return {
            "consumer_key": self.TWITTER_KEY.get_secret_value(),
            "consumer_secret": self.TWITTER_SECRET.get_secret_value(),
            "access_token": self.TWITTER_TOKEN.get_secret_value(),
            "access_token_secret": self.TWITTER_TOKEN_SECRET.get_secret_value(),
        }

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

# Create cached settings instance
@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
