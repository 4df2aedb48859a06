"""Document composer for quotes, invoices, receipts and envelopes.
Builds a paginated, renderer-ready description of a document from a job,
its cost breakdown and the company profile. Performs no I/O.
"""

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, FrozenSet, List, Optional, Tuple

from blinds_app.domain.models.base import DocumentCompositionError
from blinds_app.domain.models.company import CompanyProfile
from blinds_app.domain.models.document import (
    A4_PORTRAIT,
    A5_LANDSCAPE,
    Branding,
    ComposedDocument,
    DocumentKind,
    Page,
    Placement,
    Section,
    SectionLayout,
    SummaryLine,
)
from blinds_app.domain.models.job import BlindCategory, Job, format_decimal
from blinds_app.domain.services.cost_engine import CostBreakdown, format_currency
from blinds_app.domain.services.numbering_service import NumberingService

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d/%m/%Y"
DEFAULT_LINE_BUDGET = 32
INVOICE_DUE_DAYS = 30

BLIND_COLUMNS = ["Type", "Location", "Dimensions", "Qty", "Unit Price", "Total"]
SERVICE_COLUMNS = ["Description", "Cost"]

_LOGO_PATTERN = re.compile(r'^data:image/[a-zA-Z0-9.+-]+;base64,(?P<payload>.+)$', re.DOTALL)

FINANCIAL_KINDS = frozenset({DocumentKind.QUOTE, DocumentKind.INVOICE, DocumentKind.RECEIPT})


def format_date(value: date) -> str:
    """Format a date as dd/mm/YYYY."""
    return value.strftime(DATE_FORMAT)


def format_rate(rate: float) -> str:
    """Print 20.0 as 20 and 17.5 as 17.5."""
    return format_decimal(rate)


@dataclass(frozen=True)
class CompositionContext:
    """Everything a section builder may read."""
    kind: DocumentKind
    job: Job
    breakdown: Optional[CostBreakdown]
    company: CompanyProfile
    reference: str
    document_date: date
    due_date: Optional[date]
    currency_symbol: str = "£"

    def money(self, amount: float) -> str:
        return format_currency(amount, self.currency_symbol)


@dataclass(frozen=True)
class SectionDescriptor:
    """
    Declarative section entry: which kinds carry it, when it applies and how
    it is built. Sections are emitted in table order.
    """
    key: str
    kinds: FrozenSet[DocumentKind]
    applies: Callable[[CompositionContext], bool]
    build: Callable[[CompositionContext], Section]


# Section builders

def _always(ctx: CompositionContext) -> bool:
    return True


def _client_lines(job: Job) -> List[str]:
    lines = [job.name]
    if job.organisation:
        lines.append(job.organisation)
    if job.address:
        lines.append(job.address)
    if job.postcode:
        lines.append(job.postcode)
    return lines


def _build_client(ctx: CompositionContext) -> Section:
    return Section(
        key="client",
        title="CLIENT DETAILS",
        layout=SectionLayout.TEXT,
        lines=_client_lines(ctx.job)
    )


def _has_blinds(ctx: CompositionContext) -> bool:
    return ctx.job.has_blinds


def _build_blinds(ctx: CompositionContext) -> Section:
    rows = []
    for category in BlindCategory:
        for blind in ctx.job.blinds_for(category):
            rows.append([
                category.label,
                blind.location,
                blind.dimensions,
                str(blind.quantity),
                ctx.money(blind.cost),
                ctx.money(blind.line_total),
            ])
    return Section(
        key="blinds",
        title="BLINDS",
        layout=SectionLayout.TABLE,
        columns=list(BLIND_COLUMNS),
        rows=rows
    )


def _has_services(ctx: CompositionContext) -> bool:
    return bool(ctx.job.tasks)


def _build_services(ctx: CompositionContext) -> Section:
    return Section(
        key="services",
        title="ADDITIONAL SERVICES",
        layout=SectionLayout.TABLE,
        columns=list(SERVICE_COLUMNS),
        rows=[[task.description, ctx.money(task.cost)] for task in ctx.job.tasks]
    )


def _summary_line(ctx: CompositionContext, label: str, amount: float, highlighted: bool = False) -> SummaryLine:
    return SummaryLine(label=label, amount=amount, display=ctx.money(amount), highlighted=highlighted)


def _build_cost_summary(ctx: CompositionContext) -> Section:
    breakdown = ctx.breakdown
    lines = [_summary_line(ctx, "Subtotal", breakdown.subtotal)]

    if breakdown.carriage > 0:
        lines.append(_summary_line(ctx, "Carriage", breakdown.carriage))
    if breakdown.fast_track > 0:
        lines.append(_summary_line(ctx, "Fast Track", breakdown.fast_track))

    for cost in ctx.job.cost_summary.additional_costs:
        if cost.description and cost.description.strip():
            lines.append(_summary_line(ctx, cost.description.strip(), cost.amount))

    lines.append(_summary_line(ctx, f"VAT ({format_rate(breakdown.vat_rate)}%)", breakdown.vat_amount))
    lines.append(_summary_line(ctx, "TOTAL", breakdown.grand_total, highlighted=True))

    return Section(
        key="cost_summary",
        title="COST SUMMARY",
        layout=SectionLayout.SUMMARY,
        summary=lines
    )


def _build_payment_details(ctx: CompositionContext) -> Section:
    company = ctx.company
    pairs = [
        ("Bank", company.bank_name),
        ("Account Name", company.account_name or company.name),
        ("Account Number", company.account_number),
        ("Sort Code", company.sort_code),
        ("Payment Terms", f"Payment due within {INVOICE_DUE_DAYS} days"),
        ("Reference", ctx.reference),
    ]
    return Section(
        key="payment_details",
        title="PAYMENT DETAILS",
        layout=SectionLayout.DETAILS,
        details=[[label, value] for label, value in pairs if value]
    )


def _build_payment_confirmation(ctx: CompositionContext) -> Section:
    return Section(
        key="payment_confirmation",
        title="PAYMENT CONFIRMATION",
        layout=SectionLayout.DETAILS,
        details=[
            ["Payment Method", "Bank Transfer"],
            ["Receipt Reference", ctx.reference],
            ["Amount Paid", ctx.money(ctx.breakdown.grand_total)],
            ["Payment Date", format_date(ctx.document_date)],
            ["Status", "PAID IN FULL"],
        ]
    )


def _build_sender(ctx: CompositionContext) -> Section:
    company = ctx.company
    lines = [company.name, company.address, company.city, company.postcode]
    return Section(
        key="sender",
        title="",
        placement=Placement.TOP_LEFT,
        lines=[line for line in lines if line]
    )


def split_address(address: Optional[str]) -> List[str]:
    """Split an address on commas and newlines, dropping blank parts."""
    if not address:
        return []
    parts = re.split(r'[,\n]', address)
    return [part.strip() for part in parts if part.strip()]


def _build_recipient(ctx: CompositionContext) -> Section:
    job = ctx.job
    lines = [job.name]
    if job.organisation:
        lines.append(job.organisation)
    lines.extend(split_address(job.address))
    if job.postcode:
        lines.append(job.postcode)
    return Section(
        key="recipient",
        title="",
        placement=Placement.CENTER,
        lines=lines
    )


def _build_job_mark(ctx: CompositionContext) -> Section:
    return Section(
        key="job_reference",
        title="",
        placement=Placement.BOTTOM_RIGHT,
        lines=[f"Ref: {ctx.reference}"]
    )


SECTION_DESCRIPTORS: Tuple[SectionDescriptor, ...] = (
    SectionDescriptor("client", FINANCIAL_KINDS, _always, _build_client),
    SectionDescriptor(
        "blinds",
        frozenset({DocumentKind.QUOTE, DocumentKind.INVOICE}),
        _has_blinds,
        _build_blinds
    ),
    SectionDescriptor(
        "services",
        frozenset({DocumentKind.QUOTE, DocumentKind.INVOICE}),
        _has_services,
        _build_services
    ),
    SectionDescriptor("cost_summary", FINANCIAL_KINDS, _always, _build_cost_summary),
    SectionDescriptor(
        "payment_details",
        frozenset({DocumentKind.INVOICE}),
        _always,
        _build_payment_details
    ),
    SectionDescriptor(
        "payment_confirmation",
        frozenset({DocumentKind.RECEIPT}),
        _always,
        _build_payment_confirmation
    ),
    SectionDescriptor("sender", frozenset({DocumentKind.ENVELOPE}), _always, _build_sender),
    SectionDescriptor("recipient", frozenset({DocumentKind.ENVELOPE}), _always, _build_recipient),
    SectionDescriptor("job_reference", frozenset({DocumentKind.ENVELOPE}), _always, _build_job_mark),
)


class DocumentComposer:
    """
    Composes documents for a job.

    One pipeline serves every kind: resolve reference and dates, run the
    section descriptor table, then lay the sections out onto pages.
    """

    def __init__(
        self,
        numbering_service: Optional[NumberingService] = None,
        line_budget: int = DEFAULT_LINE_BUDGET,
        currency_symbol: str = "£",
        descriptors: Tuple[SectionDescriptor, ...] = SECTION_DESCRIPTORS
    ):
        self.numbering_service = numbering_service or NumberingService()
        self.line_budget = line_budget
        self.currency_symbol = currency_symbol
        self.descriptors = descriptors

    def compose(
        self,
        kind: DocumentKind,
        job: Optional[Job],
        breakdown: Optional[CostBreakdown],
        company_profile: CompanyProfile,
        generated_on: Optional[date] = None
    ) -> ComposedDocument:
        """Compose a document of ``kind`` for ``job``."""
        kind = DocumentKind(kind)

        if job is None:
            raise DocumentCompositionError("Cannot compose a document without a job")

        if kind in FINANCIAL_KINDS:
            if job.cost_summary is None:
                raise DocumentCompositionError(
                    f"Job {job.id} has no cost configuration", job_id=job.id
                )
            if breakdown is None:
                raise DocumentCompositionError(
                    f"Job {job.id} has no cost breakdown", job_id=job.id
                )

        generated_on = generated_on or date.today()
        document_date = self._document_date(kind, job, generated_on)
        due_date = document_date + timedelta(days=INVOICE_DUE_DAYS) if kind == DocumentKind.INVOICE else None
        reference = self.numbering_service.document_reference(kind, job.id)

        ctx = CompositionContext(
            kind=kind,
            job=job,
            breakdown=breakdown,
            company=company_profile,
            reference=reference,
            document_date=document_date,
            due_date=due_date,
            currency_symbol=self.currency_symbol
        )

        sections = [
            descriptor.build(ctx)
            for descriptor in self.descriptors
            if kind in descriptor.kinds and descriptor.applies(ctx)
        ]

        footer = company_profile.contact_line

        if kind == DocumentKind.ENVELOPE:
            return ComposedDocument(
                kind=kind,
                job_id=job.id,
                title=kind.title,
                reference=reference,
                page_format=A5_LANDSCAPE,
                pages=[Page(number=1, sections=sections)]
            )

        meta_lines = [
            f"Date: {format_date(document_date)}",
            f"{kind.reference_label}: {reference}",
        ]
        if due_date is not None:
            meta_lines.append(f"Due Date: {format_date(due_date)}")

        return ComposedDocument(
            kind=kind,
            job_id=job.id,
            title=kind.title,
            reference=reference,
            page_format=A4_PORTRAIT,
            branding=self._branding(company_profile),
            document_date=document_date,
            due_date=due_date,
            meta_lines=meta_lines,
            pages=self._paginate(sections, footer),
            footer=footer
        )

    def _document_date(self, kind: DocumentKind, job: Job, generated_on: date) -> date:
        configured = job.cost_summary.date_for(kind) if job.cost_summary else None
        return configured or generated_on

    def _branding(self, company: CompanyProfile) -> Branding:
        logo = company.logo
        if logo and not is_valid_logo(logo):
            logger.warning(f"Ignoring malformed logo for company '{company.name}'")
            logo = None
        return Branding(
            company_name=company.name,
            logo=logo or None,
            primary_color=company.primary_color,
            accent_color=company.accent_color
        )

    def _paginate(self, sections: List[Section], footer: str) -> List[Page]:
        """
        Lay sections onto pages by line budget.
        Tables that overflow continue on the next page with their header repeated;
        other sections move whole to the next page.
        """
        pages = [Page(number=1, footer=footer)]
        used = 0

        queue = list(sections)
        while queue:
            section = queue.pop(0)
            remaining = self.line_budget - used
            needed = section.line_count

            if needed <= remaining:
                pages[-1].sections.append(section)
                used += needed
                continue

            if section.layout == SectionLayout.TABLE and section.rows:
                # heading and header row must fit with at least one data row
                fixed = needed - len(section.rows)
                fits = remaining - fixed
                if fits >= 1:
                    head, tail = section.split_rows(fits)
                    pages[-1].sections.append(head)
                    queue.insert(0, tail)
                    pages.append(Page(number=len(pages) + 1, footer=footer))
                    used = 0
                    continue

            if used == 0:
                # Oversized non-table section on an empty page
                pages[-1].sections.append(section)
                used = needed
                continue

            pages.append(Page(number=len(pages) + 1, footer=footer))
            used = 0
            queue.insert(0, section)

        return pages


def is_valid_logo(logo: str) -> bool:
    """True if ``logo`` is a base64 image data URL that decodes."""
    match = _LOGO_PATTERN.match(logo.strip())
    if not match:
        return False
    try:
        base64.b64decode(match.group("payload"), validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


def compose_document(
    kind: DocumentKind,
    job: Optional[Job],
    breakdown: Optional[CostBreakdown],
    company_profile: CompanyProfile,
    generated_on: Optional[date] = None
) -> ComposedDocument:
    """Compose a document with the default composer."""
    return DocumentComposer().compose(kind, job, breakdown, company_profile, generated_on)
