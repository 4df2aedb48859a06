"""
Use cases for composing and rendering job documents.
Handles quotes, invoices, receipts and envelopes.
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from blinds_app.application.dto.job_dto import GeneratedDocumentResponseDTO
from blinds_app.domain.models.base import DocumentCompositionError, EntityNotFoundError
from blinds_app.domain.models.document import ComposedDocument, DocumentKind
from blinds_app.domain.repositories.job_repository import JobRepository
from blinds_app.domain.services.cost_engine import CostEngine
from blinds_app.domain.services.document_composer import DocumentComposer
from blinds_app.infrastructure.pdf.pdf_service import PDFService
from blinds_app.infrastructure.pdf.template_manager import TemplateManager

logger = logging.getLogger(__name__)


class ComposeDocumentUseCase:
    """Use case for composing a document for a job."""

    def __init__(
        self,
        job_repository: JobRepository,
        template_manager: TemplateManager,
        composer: Optional[DocumentComposer] = None,
        cost_engine: Optional[CostEngine] = None
    ):
        self.job_repository = job_repository
        self.template_manager = template_manager
        self.composer = composer or DocumentComposer()
        self.cost_engine = cost_engine or CostEngine()

    async def execute(
        self,
        job_id: str,
        kind: DocumentKind,
        generated_on: Optional[date] = None
    ) -> ComposedDocument:
        """Compose ``kind`` for a job. A job that cannot be found raises EntityNotFoundError."""
        job = await self.job_repository.find_by_id(job_id)
        if not job:
            raise EntityNotFoundError("Job", job_id)

        if kind != DocumentKind.ENVELOPE and job.cost_summary is None:
            raise DocumentCompositionError(f"Job {job_id} has no cost configuration", job_id=job_id)

        breakdown = self.cost_engine.compute(job) if job.cost_summary is not None else None
        company_profile = self.template_manager.get_company_profile()

        document = self.composer.compose(kind, job, breakdown, company_profile, generated_on)
        logger.info(f"Composed {kind.value} {document.reference} for job {job_id} ({document.page_count} pages)")

        return document


class GenerateDocumentPDFUseCase:
    """Use case for rendering a job document to a PDF file."""

    def __init__(self, compose_use_case: ComposeDocumentUseCase, pdf_service: PDFService):
        self.compose_use_case = compose_use_case
        self.pdf_service = pdf_service

    async def execute(
        self,
        job_id: str,
        kind: DocumentKind,
        generated_on: Optional[date] = None
    ) -> GeneratedDocumentResponseDTO:
        """Execute PDF generation for a job document."""
        document = await self.compose_use_case.execute(job_id, kind, generated_on)

        pdf_path = self.pdf_service.generate_document_pdf(document)
        file_path = Path(pdf_path)

        return GeneratedDocumentResponseDTO(
            file_path=pdf_path,
            filename=file_path.name,
            file_size=file_path.stat().st_size,
            generated_at=datetime.now(),
            kind=kind.value,
            reference=document.reference
        )
