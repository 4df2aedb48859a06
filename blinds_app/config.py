"""
Application configuration using Pydantic Settings.
Loads environment variables and provides type-safe configuration.
"""

from typing import List, Optional
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, validator
from pathlib import Path

# Get the base directory
BASE_DIR = Path(__file__).resolve().parent.parent
PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    environment: str = Field(default="development", description="Current environment")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO")

    # API Configuration
    api_title: str = Field(default="All About Blinds API")
    api_version: str = Field(default="1.0.0")
    api_prefix: str = Field(default="/api/v1")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # CORS
    cors_origins: str | List[str] = Field(
        default="http://localhost:3000"
    )
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: List[str] = Field(default=["*"])
    cors_allow_headers: List[str] = Field(default=["*"])

    # Job data
    jobs_fixture_path: Path = Field(
        default=PACKAGE_DIR / "infrastructure" / "repositories" / "fixtures" / "jobs.json",
        description="JSON file the in-memory job store is seeded from"
    )

    # Documents
    company_config_dir: Path = Field(default=BASE_DIR / "var" / "config")
    pdf_output_dir: Path = Field(default=BASE_DIR / "var" / "documents")
    document_line_budget: int = Field(default=32, description="Printed lines per A4 page")

    # Company defaults
    company_name: str = Field(default="All About Blinds")
    company_address: Optional[str] = Field(default="123 Blind Street")
    company_city: Optional[str] = Field(default="Blindville")
    company_postcode: Optional[str] = Field(default="BL1 2ND")
    company_phone: Optional[str] = Field(default="01234 567890")
    company_email: Optional[str] = Field(default="info@allaboutblinds.com")
    company_website: Optional[str] = Field(default="www.allaboutblinds.com")
    company_vat_number: Optional[str] = Field(default="GB123456789")
    company_registration_number: Optional[str] = Field(default="12345678")
    company_bank_name: Optional[str] = Field(default="Blind Bank")
    company_account_name: Optional[str] = Field(default="All About Blinds Ltd")
    company_account_number: Optional[str] = Field(default="12345678")
    company_sort_code: Optional[str] = Field(default="12-34-56")

    # Localization
    currency_symbol: str = Field(default="£")

    @validator("cors_origins", pre=True)
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            if not v or v.strip() == "":
                return ["http://localhost:3000"]
            return [origin.strip() for origin in v.split(",")]
        elif v is None:
            return ["http://localhost:3000"]
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    def default_company_profile(self) -> dict:
        """Company profile fields used when no profile has been saved."""
        return {
            "name": self.company_name,
            "address": self.company_address,
            "city": self.company_city,
            "postcode": self.company_postcode,
            "phone": self.company_phone,
            "email": self.company_email,
            "website": self.company_website,
            "vat_number": self.company_vat_number,
            "registration_number": self.company_registration_number,
            "bank_name": self.company_bank_name,
            "account_name": self.company_account_name,
            "account_number": self.company_account_number,
            "sort_code": self.company_sort_code,
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Use this function to get settings throughout the application.
    """
    return Settings()


# Create a global settings instance
settings = get_settings()
