"""Application settings for the Companies House client."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from companies_house.endpoints import DEFAULT_BASE_URL
from companies_house.gateway import DEFAULT_TTL_SECONDS


class Settings(BaseSettings):
    """Runtime settings for API access, transport and caching."""

    model_config = SettingsConfigDict(
        env_prefix="COMPANIES_HOUSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    api_key: str = Field(
        default="",
        validation_alias=AliasChoices("COMPANIES_HOUSE_API_KEY", "CH_API_KEY"),
    )
    base_url: str = DEFAULT_BASE_URL
    timeout_s: float = 10.0
    cookie_file: str = ""
    cache_dir: str = ""
    cache_ttl_s: int = DEFAULT_TTL_SECONDS
    verbose: bool = False
