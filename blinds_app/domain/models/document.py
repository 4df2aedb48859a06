"""
Composed document model.
Structured, paginated description of a quote, invoice, receipt or envelope,
ready to be turned into a file by a document renderer.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional, List, Dict, Any
from enum import Enum


class DocumentKind(str, Enum):
    """Kinds of document that can be composed for a job."""
    QUOTE = "quote"
    INVOICE = "invoice"
    RECEIPT = "receipt"
    ENVELOPE = "envelope"

    @property
    def title(self) -> str:
        """Heading printed on the document."""
        titles = {
            DocumentKind.QUOTE: "QUOTATION",
            DocumentKind.INVOICE: "INVOICE",
            DocumentKind.RECEIPT: "RECEIPT",
            DocumentKind.ENVELOPE: "ENVELOPE",
        }
        return titles[self]

    @property
    def reference_label(self) -> str:
        """Label used in front of the reference number."""
        labels = {
            DocumentKind.QUOTE: "Quote Reference",
            DocumentKind.INVOICE: "Invoice Reference",
            DocumentKind.RECEIPT: "Receipt Reference",
            DocumentKind.ENVELOPE: "Job Reference",
        }
        return labels[self]


class SectionLayout(str, Enum):
    """How a section is laid out by the renderer."""
    TEXT = "text"
    TABLE = "table"
    SUMMARY = "summary"
    DETAILS = "details"


class Placement(str, Enum):
    """Where a section sits on the page."""
    FLOW = "flow"
    TOP_LEFT = "top-left"
    CENTER = "center"
    BOTTOM_RIGHT = "bottom-right"


@dataclass(frozen=True)
class PageFormat:
    """Physical page format in millimetres."""

    name: str
    width_mm: float
    height_mm: float
    orientation: str = "portrait"

    @property
    def css_size(self) -> str:
        """Page size as a CSS @page value."""
        return f"{self.width_mm}mm {self.height_mm}mm"


A4_PORTRAIT = PageFormat("A4", 210, 297, "portrait")
A5_LANDSCAPE = PageFormat("A5", 210, 148, "landscape")


@dataclass(frozen=True)
class Branding:
    """Header band content. Text-only when no usable logo is available."""

    company_name: str
    logo: Optional[str] = None
    primary_color: str = "#001755"
    accent_color: str = "#ff007f"

    @property
    def has_logo(self) -> bool:
        return self.logo is not None


@dataclass(frozen=True)
class SummaryLine:
    """One label/amount line in a cost summary block."""

    label: str
    amount: float
    display: str
    highlighted: bool = False


@dataclass
class Section:
    """
    A block of content on a page.

    Only the payload matching ``layout`` is populated: ``lines`` for text,
    ``columns``/``rows`` for tables, ``summary`` for cost summaries and
    ``details`` for label/value pairs.
    """

    key: str
    title: str
    layout: SectionLayout = SectionLayout.TEXT
    placement: Placement = Placement.FLOW
    lines: List[str] = field(default_factory=list)
    columns: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    summary: List[SummaryLine] = field(default_factory=list)
    details: List[List[str]] = field(default_factory=list)
    continued: bool = False

    @property
    def line_count(self) -> int:
        """Approximate number of printed lines, used for pagination."""
        heading = 1 if self.title else 0
        if self.layout == SectionLayout.TABLE:
            return heading + 1 + len(self.rows)
        if self.layout == SectionLayout.SUMMARY:
            return heading + len(self.summary)
        if self.layout == SectionLayout.DETAILS:
            return heading + len(self.details)
        return heading + len(self.lines)

    def split_rows(self, first: int) -> "tuple[Section, Section]":
        """Split a table section after ``first`` rows; the remainder repeats the header."""
        head = replace(self, rows=self.rows[:first])
        tail = replace(self, rows=self.rows[first:], continued=True)
        return head, tail

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "key": self.key,
            "title": self.title,
            "layout": self.layout.value,
            "placement": self.placement.value,
            "continued": self.continued,
        }
        if self.layout == SectionLayout.TABLE:
            data["columns"] = list(self.columns)
            data["rows"] = [list(row) for row in self.rows]
        elif self.layout == SectionLayout.SUMMARY:
            data["summary"] = [
                {
                    "label": line.label,
                    "amount": line.amount,
                    "display": line.display,
                    "highlighted": line.highlighted,
                }
                for line in self.summary
            ]
        elif self.layout == SectionLayout.DETAILS:
            data["details"] = [list(pair) for pair in self.details]
        else:
            data["lines"] = list(self.lines)
        return data


@dataclass
class Page:
    """One physical page of a composed document."""

    number: int
    sections: List[Section] = field(default_factory=list)
    footer: str = ""

    def section(self, key: str) -> Optional[Section]:
        for section in self.sections:
            if section.key == key:
                return section
        return None


@dataclass
class ComposedDocument:
    """Renderer-ready description of a generated document."""

    kind: DocumentKind
    job_id: str
    title: str
    reference: str
    page_format: PageFormat
    branding: Optional[Branding] = None
    document_date: Optional[date] = None
    due_date: Optional[date] = None
    meta_lines: List[str] = field(default_factory=list)
    pages: List[Page] = field(default_factory=list)
    footer: str = ""

    @property
    def filename(self) -> str:
        """Download filename, e.g. ``invoice-aab0001.pdf``."""
        return f"{self.kind.value}-{self.job_id.lower()}.pdf"

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def sections(self) -> List[Section]:
        """All sections in reading order, across pages."""
        return [section for page in self.pages for section in page.sections]

    def section_keys(self) -> List[str]:
        """Distinct section keys in reading order."""
        keys: List[str] = []
        for section in self.sections:
            if section.key not in keys:
                keys.append(section.key)
        return keys

    def find_sections(self, key: str) -> List[Section]:
        """All fragments of a section, a table split across pages yields several."""
        return [section for section in self.sections if section.key == key]

    def has_section(self, key: str) -> bool:
        return bool(self.find_sections(key))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "job_id": self.job_id,
            "title": self.title,
            "reference": self.reference,
            "filename": self.filename,
            "page_format": {
                "name": self.page_format.name,
                "width_mm": self.page_format.width_mm,
                "height_mm": self.page_format.height_mm,
                "orientation": self.page_format.orientation,
            },
            "branding": {
                "company_name": self.branding.company_name,
                "has_logo": self.branding.has_logo,
            } if self.branding else None,
            "document_date": self.document_date.isoformat() if self.document_date else None,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "meta_lines": list(self.meta_lines),
            "footer": self.footer,
            "pages": [
                {
                    "number": page.number,
                    "footer": page.footer,
                    "sections": [section.to_dict() for section in page.sections],
                }
                for page in self.pages
            ],
        }
