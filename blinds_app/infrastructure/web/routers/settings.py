"""
Settings router.
Company profile used to brand generated documents.
"""

from typing import Annotated
from fastapi import APIRouter, Depends

from blinds_app.application.dto.company_dto import CompanyProfileRequestDTO, CompanyProfileResponseDTO
from blinds_app.domain.models.company import CompanyProfile
from blinds_app.infrastructure.pdf.template_manager import TemplateManager
from blinds_app.infrastructure.web.dependencies import get_template_manager


router = APIRouter()


def _to_response(profile: CompanyProfile) -> CompanyProfileResponseDTO:
    return CompanyProfileResponseDTO(**profile.to_dict(), has_logo=bool(profile.logo))


@router.get("/company", response_model=CompanyProfileResponseDTO)
async def get_company_profile(manager: Annotated[TemplateManager, Depends(get_template_manager)]):
    """Get the company profile."""
    return _to_response(manager.get_company_profile())


@router.put("/company", response_model=CompanyProfileResponseDTO)
async def update_company_profile(
    request: CompanyProfileRequestDTO,
    manager: Annotated[TemplateManager, Depends(get_template_manager)]
):
    """
    Update the company profile.

    Empty optional fields are left blank on documents.
    """
    current = manager.get_company_profile()
    profile = CompanyProfile.from_dict({
        "primary_color": current.primary_color,
        "accent_color": current.accent_color,
        **request.model_dump()
    })
    return _to_response(manager.save_company_profile(profile))
