"""
Document router.
Composes quotes, invoices, receipts and envelopes and serves them as PDF.
"""

from datetime import date
from typing import Annotated, Any, Dict, Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from blinds_app.application.dto.job_dto import GeneratedDocumentResponseDTO
from blinds_app.application.use_cases.document_use_cases import (
    ComposeDocumentUseCase,
    GenerateDocumentPDFUseCase,
)
from blinds_app.domain.models.document import DocumentKind
from blinds_app.domain.repositories.job_repository import JobRepository
from blinds_app.domain.services.document_composer import DocumentComposer
from blinds_app.infrastructure.pdf.pdf_service import PDFService
from blinds_app.infrastructure.pdf.template_manager import TemplateManager
from blinds_app.infrastructure.web.dependencies import (
    get_job_repository,
    get_template_manager,
    get_pdf_service,
    get_document_composer,
)


router = APIRouter()


def get_compose_use_case(
    repository: Annotated[JobRepository, Depends(get_job_repository)],
    manager: Annotated[TemplateManager, Depends(get_template_manager)],
    composer: Annotated[DocumentComposer, Depends(get_document_composer)]
) -> ComposeDocumentUseCase:
    """Dependency to get the compose use case."""
    return ComposeDocumentUseCase(repository, manager, composer)


ComposeUseCase = Annotated[ComposeDocumentUseCase, Depends(get_compose_use_case)]


@router.get("/{job_id}/documents/{kind}")
async def get_document(
    job_id: str,
    kind: DocumentKind,
    use_case: ComposeUseCase,
    on: Optional[date] = Query(None, description="Generation date (defaults to today)")
) -> Dict[str, Any]:
    """
    Compose a document and return its structure.

    - **kind**: quote, invoice, receipt or envelope
    """
    document = await use_case.execute(job_id, kind, on)
    return document.to_dict()


@router.get("/{job_id}/documents/{kind}/pdf")
async def download_document_pdf(
    job_id: str,
    kind: DocumentKind,
    use_case: ComposeUseCase,
    renderer: Annotated[PDFService, Depends(get_pdf_service)],
    on: Optional[date] = Query(None, description="Generation date (defaults to today)")
):
    """
    Render a document to PDF and download it.
    """
    document = await use_case.execute(job_id, kind, on)
    content = renderer.render_pdf(document)

    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'}
    )


@router.post(
    "/{job_id}/documents/{kind}/pdf",
    status_code=status.HTTP_201_CREATED,
    response_model=GeneratedDocumentResponseDTO
)
async def generate_document_pdf(
    job_id: str,
    kind: DocumentKind,
    use_case: ComposeUseCase,
    renderer: Annotated[PDFService, Depends(get_pdf_service)],
    on: Optional[date] = Query(None, description="Generation date (defaults to today)")
):
    """
    Render a document to a PDF file in the configured output directory.
    """
    return await GenerateDocumentPDFUseCase(use_case, renderer).execute(job_id, kind, on)
