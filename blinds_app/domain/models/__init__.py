"""
Domain models for the blinds job costing system.
This module exports all domain entities and document types.
"""

# Base classes
from .base import (
    BaseEntity,
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    DocumentCompositionError
)

# Documents
from .document import (
    DocumentKind,
    PageFormat,
    Branding,
    Section,
    SectionLayout,
    Placement,
    SummaryLine,
    Page,
    ComposedDocument,
    A4_PORTRAIT,
    A5_LANDSCAPE
)

# Domain entities
from .job import (
    Job,
    JobStatus,
    BlindCategory,
    BlindLineItem,
    Task,
    AdditionalCost,
    Contact,
    Survey,
    CostSummary
)

from .company import CompanyProfile

__all__ = [
    # Base classes
    "BaseEntity",
    "DomainException",
    "ValidationError",
    "BusinessRuleViolation",
    "EntityNotFoundError",
    "DocumentCompositionError",

    # Documents
    "DocumentKind",
    "PageFormat",
    "Branding",
    "Section",
    "SectionLayout",
    "Placement",
    "SummaryLine",
    "Page",
    "ComposedDocument",
    "A4_PORTRAIT",
    "A5_LANDSCAPE",

    # Job
    "Job",
    "JobStatus",
    "BlindCategory",
    "BlindLineItem",
    "Task",
    "AdditionalCost",
    "Contact",
    "Survey",
    "CostSummary",

    # Company
    "CompanyProfile",
]
