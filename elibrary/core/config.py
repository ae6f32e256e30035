from typing import Annotated, List

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "https://library-management-client-sigma.vercel.app",
]


class Settings(BaseSettings):
    """Runtime configuration, read from ELIB_* environment variables."""

    database_url: str = Field(
        default="sqlite:///./elibrary.db",
        validation_alias=AliasChoices("ELIB_DB", "database_url"),
    )
    log_level: str = Field(default="INFO", validation_alias=AliasChoices("ELIB_LOG", "log_level"))
    list_limit: int = Field(default=10, ge=1)
    # comma separated in the environment
    cors_origins: Annotated[List[str], NoDecode] = DEFAULT_CORS_ORIGINS
    sql_echo: bool = False
    title: str = "E-Library Catalog API"

    model_config = SettingsConfigDict(
        env_prefix="ELIB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.upper()

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, v):
        if isinstance(v, str):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v
