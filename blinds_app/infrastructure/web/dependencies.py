"""
FastAPI dependencies for the web layer.
"""

from functools import lru_cache

from blinds_app.config import settings
from blinds_app.domain.repositories.job_repository import JobRepository
from blinds_app.domain.services.document_composer import DocumentComposer
from blinds_app.infrastructure.pdf.pdf_service import PDFService, pdf_service
from blinds_app.infrastructure.pdf.template_manager import TemplateManager, template_manager
from blinds_app.infrastructure.repositories.job_repository import InMemoryJobRepository


@lru_cache()
def get_job_repository() -> JobRepository:
    """Process-wide job repository seeded from the configured fixture."""
    return InMemoryJobRepository.from_file(settings.jobs_fixture_path)


def get_template_manager() -> TemplateManager:
    return template_manager


def get_pdf_service() -> PDFService:
    return pdf_service


def get_document_composer() -> DocumentComposer:
    return DocumentComposer(
        line_budget=settings.document_line_budget,
        currency_symbol=settings.currency_symbol
    )
