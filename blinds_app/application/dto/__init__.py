"""
Application layer DTOs.
Data Transfer Objects for API requests and responses.
"""

from .base_dto import *
from .job_dto import *
from .company_dto import *

__all__ = [
    # Base DTOs
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",
    "NotesMixin",

    # Job DTOs
    "BlindRequestDTO",
    "BlindResponseDTO",
    "TaskRequestDTO",
    "TaskResponseDTO",
    "AdditionalCostRequestDTO",
    "UpdateCostSummaryRequestDTO",
    "CostBreakdownResponseDTO",
    "JobSummaryResponseDTO",
    "JobResponseDTO",
    "GeneratedDocumentResponseDTO",

    # Company DTOs
    "CompanyProfileRequestDTO",
    "CompanyProfileResponseDTO",
]
