"""
PDF generation service using WeasyPrint and Jinja2.
Renders composed documents (quotes, invoices, receipts, envelopes) to PDF.
"""

import logging
from pathlib import Path
from typing import Optional, Union
from jinja2 import Environment, FileSystemLoader, select_autoescape

from blinds_app.domain.models.document import Branding, ComposedDocument, DocumentKind
from blinds_app.config import settings

logger = logging.getLogger(__name__)


class PDFService:
    """Service for generating PDF documents from templates."""

    def __init__(self, output_dir: Optional[Path] = None):
        """Initialize the PDF service with template environment."""
        self.templates_dir = Path(__file__).parent / "templates"
        self.output_dir = Path(output_dir or settings.pdf_output_dir)

        # Setup Jinja2 environment
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(['html', 'xml'])
        )

        self.template_files = {
            DocumentKind.QUOTE: "document.html",
            DocumentKind.INVOICE: "document.html",
            DocumentKind.RECEIPT: "document.html",
            DocumentKind.ENVELOPE: "envelope.html",
        }

    def render_html(self, document: ComposedDocument) -> str:
        """Render a composed document to HTML."""
        template = self.env.get_template(self.template_files[document.kind])
        stylesheet = (self.templates_dir / "document.css").read_text(encoding="utf-8")

        return template.render(
            document=document,
            page=document.page_format,
            stylesheet=stylesheet,
            branding=document.branding or Branding(company_name="")
        )

    def render_pdf(self, document: ComposedDocument) -> bytes:
        """Render a composed document to PDF bytes."""
        return self._write_pdf(self.render_html(document))

    def generate_document_pdf(
        self,
        document: ComposedDocument,
        output_path: Optional[Union[str, Path]] = None
    ) -> str:
        """
        Generate a PDF file for a composed document.

        Args:
            document: Composed document to render
            output_path: Optional custom output path

        Returns:
            str: Path to the generated PDF file
        """
        if not output_path:
            output_path = self._generate_output_path(document.filename)

        self._write_pdf(self.render_html(document), output_path)
        logger.info(f"Generated {document.kind.value} PDF for job {document.job_id} at {output_path}")

        return str(output_path)

    def _write_pdf(self, html_content: str, target: Optional[Union[str, Path]] = None):
        """Write HTML to PDF; returns bytes when no target is given."""
        from weasyprint import HTML
        from weasyprint.text.fonts import FontConfiguration

        html_doc = HTML(string=html_content, base_url=str(self.templates_dir))
        return html_doc.write_pdf(str(target) if target else None, font_config=FontConfiguration())

    def _generate_output_path(self, filename: str) -> Path:
        """Output path for a generated document, inside the output directory."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir / filename

    def list_available_templates(self) -> list[str]:
        """List all available PDF templates."""
        return sorted(file_path.name for file_path in self.templates_dir.glob("*.html"))


# Singleton instance
pdf_service = PDFService()
