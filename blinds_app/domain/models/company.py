"""
Company profile model.
Branding, contact and banking details printed on generated documents.
"""

from dataclasses import dataclass, asdict, fields
from typing import Optional, Dict, Any

from blinds_app.domain.models.base import ValidationError


@dataclass
class CompanyProfile:
    """Company profile used for document branding. Only ``name`` is required."""
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
    logo: Optional[str] = None  # data URL
    primary_color: str = "#001755"
    accent_color: str = "#ff007f"

    def validate(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Company name is required", "name")

    @property
    def contact_line(self) -> str:
        """Footer line: name | address, city postcode | phone | email."""
        locality = " ".join(part for part in (self.city, self.postcode) if part)
        address = ", ".join(part for part in (self.address, locality) if part)
        parts = [self.name, address, self.phone, self.email]
        return " | ".join(part for part in parts if part)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompanyProfile":
        """Build a profile, ignoring keys that are not profile fields."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})
