from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    # AirTable
    airtable_api_key: Optional[str] = Field(None, validation_alias="AIRTABLE_API_KEY")
    airtable_base_id: str = Field("appTll6JoqW04YvJs", validation_alias="AIRTABLE_BASE_ID")
    airtable_table_name: str = Field("Form Submissions", validation_alias="AIRTABLE_TABLE_NAME")
    airtable_api_url: str = Field("https://api.airtable.com", validation_alias="AIRTABLE_API_URL")
    airtable_timeout_seconds: float = Field(30.0, validation_alias="AIRTABLE_TIMEOUT_SECONDS")

    # CORS
    cors_allow_origin: str = Field("*", validation_alias="CORS_ALLOW_ORIGIN")

    # Logging
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    log_format: str = Field("structured", validation_alias="LOG_FORMAT")

    # Rate limiting
    rate_limit_enabled: bool = Field(True, validation_alias="RATE_LIMIT_ENABLED")
    rate_limit_default: str = Field("60/minute", validation_alias="RATE_LIMIT_DEFAULT")
    rate_limit_storage_uri: Optional[str] = Field(None, validation_alias="RATE_LIMIT_STORAGE_URI")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    def is_airtable_configured(self) -> bool:
        return bool(self.airtable_api_key)

settings = Settings()

tags_metadata = [
    {
        "name": "Submissions",
        "description": "Form submission relay to AirTable.",
    },
    {
        "name": "Health",
        "description": "Health-check and diagnostics endpoints.",
    },
]
