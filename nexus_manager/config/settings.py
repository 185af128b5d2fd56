"""
Configuration Management for Nexus Manager

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Defaults that the bookkeeping and HR rules depend on (revenue account for
invoice payments, email domain for new hires, ...) live in AppSettings
so they can be changed without touching the services.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeminiSettings(BaseSettings):
    """Gemini LLM configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Optional: without a key the agents answer with a fixed message
    api_key: str = Field(
        default="",
        description="Gemini API key"
    )
    model_name: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model to use"
    )
    max_tokens: int = Field(
        default=2048,
        ge=100,
        le=8192,
        description="Maximum tokens in response"
    )
    temperature: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        description="Model temperature (lower = more deterministic)"
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        le=5,
        description="Attempts per request before falling back"
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key.strip())


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Branding
    company_name: str = Field(
        default="Nexus Manager",
        description="Name shown in the sidebar"
    )
    currency_symbol: str = Field(
        default="$",
        max_length=3,
        description="Symbol used when formatting amounts"
    )

    # Bookkeeping defaults
    invoice_revenue_account: str = Field(
        default="Sales Revenue",
        description="Account credited when an invoice is paid"
    )
    recent_transaction_count: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Transactions included in the AI financial summary"
    )

    # HR defaults
    email_domain: str = Field(
        default="company.com",
        description="Domain used for new hire email addresses"
    )
    default_department: str = Field(
        default="General",
        description="Department assigned to newly hired candidates"
    )
    default_salary_range: str = Field(
        default="$50,000 - $80,000",
        description="Placeholder salary range for generated job proformas"
    )

    @field_validator('email_domain')
    @classmethod
    def validate_email_domain(cls, v: str) -> str:
        """Strip a leading '@' so both 'acme.com' and '@acme.com' work."""
        v = v.strip().lstrip("@").lower()
        if not v:
            raise ValueError("Email domain cannot be empty")
        return v


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Note: These are loaded lazily to allow partial configuration

    @property
    def gemini(self) -> GeminiSettings:
        return GeminiSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks and the settings page.
    """
    results = {}

    settings = get_settings()

    try:
        gemini = settings.gemini
        results["gemini"] = gemini.is_configured
        if not gemini.is_configured:
            results["gemini_error"] = "GEMINI_API_KEY is not set"
    except Exception as e:
        results["gemini"] = False
        results["gemini_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
