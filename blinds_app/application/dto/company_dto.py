"""
Company profile DTOs.
"""

from typing import Optional
from pydantic import Field, field_validator

from .base_dto import RequestDTO, ResponseDTO


class CompanyProfileRequestDTO(RequestDTO):
    """DTO for saving the company profile."""

    name: str = Field(min_length=1, max_length=200, description="Business name")
    address: Optional[str] = Field(default=None, max_length=500)
    city: Optional[str] = Field(default=None, max_length=100)
    postcode: Optional[str] = Field(default=None, max_length=20)
    phone: Optional[str] = Field(default=None, max_length=50)
    email: Optional[str] = Field(default=None, max_length=200)
    website: Optional[str] = Field(default=None, max_length=200)
    vat_number: Optional[str] = Field(default=None, max_length=50)
    registration_number: Optional[str] = Field(default=None, max_length=50)
    bank_name: Optional[str] = Field(default=None, max_length=100)
    account_name: Optional[str] = Field(default=None, max_length=200)
    account_number: Optional[str] = Field(default=None, max_length=20)
    sort_code: Optional[str] = Field(default=None, max_length=10)
    logo: Optional[str] = Field(default=None, description="Logo as a base64 image data URL")

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        if v and '@' not in v:
            raise ValueError('Invalid email format')
        return v


class CompanyProfileResponseDTO(ResponseDTO):
    name: str
    address: Optional[str] = None
    city: Optional[str] = None
    postcode: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    vat_number: Optional[str] = None
    registration_number: Optional[str] = None
    bank_name: Optional[str] = None
    account_name: Optional[str] = None
    account_number: Optional[str] = None
    sort_code: Optional[str] = None
    has_logo: bool = False
