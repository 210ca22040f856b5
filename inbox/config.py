from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    mongo_url: str = Field(default="mongodb://localhost:27017")
    mongo_db_name: str = Field(default="inbox")
    conversations_collection: str = Field(default="conversations")
    messages_collection: str = Field(default="conversation_messages")
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, value: str) -> str:
        return value.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()
