"""
Company profile storage for document generation.
Profiles are kept as a JSON file; settings provide the defaults.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from blinds_app.domain.models.company import CompanyProfile
from blinds_app.config import settings

logger = logging.getLogger(__name__)


class TemplateManager:
    """Loads and saves the company profile used to brand documents."""

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize template manager."""
        self.config_dir = Path(config_dir or settings.company_config_dir)
        self.profile_file = self.config_dir / "company_profile.json"

    def get_company_profile(self) -> CompanyProfile:
        """
        Get the saved company profile laid over the configured default.
        Missing fields fall back to the default; an unreadable file is ignored.
        """
        defaults = self.default_company_profile().to_dict()
        if not self.profile_file.exists():
            return CompanyProfile.from_dict(defaults)

        try:
            with open(self.profile_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring unreadable company profile {self.profile_file}: {e}")
            return CompanyProfile.from_dict(defaults)

        if not isinstance(data, dict):
            logger.warning(f"Ignoring company profile {self.profile_file}: expected an object")
            return CompanyProfile.from_dict(defaults)

        merged = {**defaults, **data}
        if not isinstance(merged.get("name"), str) or not merged["name"].strip():
            merged["name"] = defaults["name"]
        return CompanyProfile.from_dict(merged)

    def save_company_profile(self, profile: CompanyProfile) -> CompanyProfile:
        """Validate and save the company profile."""
        profile.validate()
        self.config_dir.mkdir(parents=True, exist_ok=True)

        with open(self.profile_file, 'w', encoding='utf-8') as f:
            json.dump(profile.to_dict(), f, indent=2, ensure_ascii=False)

        logger.info(f"Saved company profile for '{profile.name}'")
        return profile

    def reset_company_profile(self) -> CompanyProfile:
        """Remove the saved profile so defaults apply again."""
        if self.profile_file.exists():
            self.profile_file.unlink()
        return self.default_company_profile()

    def default_company_profile(self) -> CompanyProfile:
        return CompanyProfile.from_dict(settings.default_company_profile())


# Singleton instance
template_manager = TemplateManager()
