"""
Unit tests for the document composer.
"""

import logging
from dataclasses import replace
from datetime import date, timedelta

import pytest

from blinds_app.domain.models.base import DocumentCompositionError
from blinds_app.domain.models.company import CompanyProfile
from blinds_app.domain.models.document import DocumentKind, Placement, SectionLayout
from blinds_app.domain.models.job import AdditionalCost, BlindCategory, BlindLineItem
from blinds_app.domain.services.cost_engine import compute_cost_breakdown
from blinds_app.domain.services.document_composer import (
    INVOICE_DUE_DAYS,
    DocumentComposer,
    compose_document,
    format_rate,
    is_valid_logo,
    split_address,
)

FOOTER = "All About Blinds | 123 Blind Street, Blindville BL1 2ND | 01234 567890 | info@allaboutblinds.com"


@pytest.fixture
def composer():
    return DocumentComposer()


def compose(composer, kind, job, company_profile, generated_on):
    breakdown = compute_cost_breakdown(job) if job.cost_summary else None
    return composer.compose(kind, job, breakdown, company_profile, generated_on)


class TestQuoteComposition:
    """Test cases for quotes."""

    def test_section_order(self, composer, priced_job, company_profile, generation_date):
        document = compose(composer, DocumentKind.QUOTE, priced_job, company_profile, generation_date)

        assert document.section_keys() == ["client", "blinds", "services", "cost_summary"]
        assert document.title == "QUOTATION"
        assert document.reference == "AAB0001"
        assert document.page_format.name == "A4"
        assert document.page_count == 1

    def test_client_details(self, composer, priced_job, company_profile, generation_date):
        document = compose(composer, DocumentKind.QUOTE, priced_job, company_profile, generation_date)

        client = document.find_sections("client")[0]
        assert client.lines == ["Smith Residence", "Smith Family", "123 Main Street, Anytown", "AB12 3CD"]

    def test_blind_rows(self, composer, priced_job, company_profile, generation_date):
        document = compose(composer, DocumentKind.QUOTE, priced_job, company_profile, generation_date)

        blinds = document.find_sections("blinds")[0]
        assert blinds.layout == SectionLayout.TABLE
        assert blinds.rows == [
            ["Roller Blind", "Living Room", "1200mm × 1800mm", "2", "£245.50", "£491.00"]
        ]

    def test_cost_summary_lines(self, composer, priced_job, company_profile, generation_date):
        document = compose(composer, DocumentKind.QUOTE, priced_job, company_profile, generation_date)

        summary = document.find_sections("cost_summary")[0].summary
        assert [line.label for line in summary] == [
            "Subtotal", "Carriage", "Fast Track", "Special delivery", "VAT (20%)", "TOTAL"
        ]
        assert summary[0].display == "£566.00"
        assert summary[-1].display == "£951.20"
        assert summary[-1].highlighted
        assert not any(line.highlighted for line in summary[:-1])

    def test_meta_lines(self, composer, priced_job, company_profile, generation_date):
        document = compose(composer, DocumentKind.QUOTE, priced_job, company_profile, generation_date)

        assert document.meta_lines == ["Date: 20/04/2025", "Quote Reference: AAB0001"]
        assert document.due_date is None

    def test_configured_quote_date_wins(self, composer, priced_job, company_profile, generation_date):
        priced_job.cost_summary.quote_date = date(2025, 3, 1)

        document = compose(composer, DocumentKind.QUOTE, priced_job, company_profile, generation_date)

        assert document.document_date == date(2025, 3, 1)

    def test_no_blinds_section_without_blinds(self, composer, empty_job, company_profile, generation_date):
        document = compose(composer, DocumentKind.QUOTE, empty_job, company_profile, generation_date)

        assert document.section_keys() == ["client", "cost_summary"]

    def test_zero_fees_are_omitted(self, composer, empty_job, company_profile, generation_date):
        document = compose(composer, DocumentKind.QUOTE, empty_job, company_profile, generation_date)

        labels = [line.label for line in document.find_sections("cost_summary")[0].summary]
        assert labels == ["Subtotal", "VAT (0%)", "TOTAL"]

    def test_blank_additional_cost_description_is_omitted(
        self, composer, priced_job, company_profile, generation_date
    ):
        priced_job.cost_summary.additional_costs.append(AdditionalCost(id="ADD002", description="  ", amount=5.0))

        document = compose(composer, DocumentKind.QUOTE, priced_job, company_profile, generation_date)

        labels = [line.label for line in document.find_sections("cost_summary")[0].summary]
        assert labels.count("Special delivery") == 1
        assert len(labels) == 6

    def test_footer_on_every_page(self, composer, priced_job, company_profile, generation_date):
        document = compose(composer, DocumentKind.QUOTE, priced_job, company_profile, generation_date)

        assert document.footer == FOOTER
        assert all(page.footer == FOOTER for page in document.pages)


class TestInvoiceAndReceipt:
    """Test cases for invoices and receipts."""

    def test_invoice_reference_and_due_date(self, composer, priced_job, company_profile, generation_date):
        document = compose(composer, DocumentKind.INVOICE, priced_job, company_profile, generation_date)

        assert document.reference == "INV-AAB0001"
        assert document.due_date == date(2025, 5, 20)
        assert document.meta_lines == [
            "Date: 20/04/2025",
            "Invoice Reference: INV-AAB0001",
            "Due Date: 20/05/2025",
        ]

    def test_invoice_sections(self, composer, priced_job, company_profile, generation_date):
        document = compose(composer, DocumentKind.INVOICE, priced_job, company_profile, generation_date)

        assert document.section_keys() == ["client", "blinds", "services", "cost_summary", "payment_details"]
        details = dict(document.find_sections("payment_details")[0].details)
        assert details["Sort Code"] == "12-34-56"
        assert details["Payment Terms"] == "Payment due within 30 days"
        assert details["Reference"] == "INV-AAB0001"

    def test_payment_terms_agree_with_due_date(self, composer, priced_job, generation_date):
        profile = CompanyProfile.from_dict({"name": "Blinds Co", "payment_terms_days": 14})

        document = compose(composer, DocumentKind.INVOICE, priced_job, profile, generation_date)

        details = dict(document.find_sections("payment_details")[0].details)
        assert details["Payment Terms"] == f"Payment due within {INVOICE_DUE_DAYS} days"
        assert document.due_date - generation_date == timedelta(days=INVOICE_DUE_DAYS)

    def test_payment_details_skip_blank_fields(self, composer, priced_job, company_profile, generation_date):
        profile = replace(company_profile, sort_code=None)

        document = compose(composer, DocumentKind.INVOICE, priced_job, profile, generation_date)

        labels = [label for label, _ in document.find_sections("payment_details")[0].details]
        assert "Sort Code" not in labels

    def test_receipt_sections(self, composer, priced_job, company_profile, generation_date):
        document = compose(composer, DocumentKind.RECEIPT, priced_job, company_profile, generation_date)

        assert document.section_keys() == ["client", "cost_summary", "payment_confirmation"]
        assert document.reference == "REC-AAB0001"
        details = dict(document.find_sections("payment_confirmation")[0].details)
        assert details["Amount Paid"] == "£951.20"
        assert details["Status"] == "PAID IN FULL"

    def test_missing_cost_configuration(self, composer, priced_job, company_profile, generation_date):
        priced_job.cost_summary = None

        with pytest.raises(DocumentCompositionError) as exc_info:
            composer.compose(DocumentKind.INVOICE, priced_job, None, company_profile, generation_date)

        assert exc_info.value.job_id == "AAB0001"

    def test_missing_breakdown(self, composer, priced_job, company_profile, generation_date):
        with pytest.raises(DocumentCompositionError):
            composer.compose(DocumentKind.QUOTE, priced_job, None, company_profile, generation_date)

    def test_missing_job(self, composer, company_profile):
        with pytest.raises(DocumentCompositionError):
            composer.compose(DocumentKind.QUOTE, None, None, company_profile)


class TestEnvelope:
    """Test cases for envelopes."""

    def test_envelope_layout(self, composer, priced_job, company_profile, generation_date):
        document = compose(composer, DocumentKind.ENVELOPE, priced_job, company_profile, generation_date)

        assert document.page_format.name == "A5"
        assert document.page_format.orientation == "landscape"
        assert document.page_count == 1
        assert document.branding is None
        assert document.section_keys() == ["sender", "recipient", "job_reference"]

        placements = [section.placement for section in document.sections]
        assert placements == [Placement.TOP_LEFT, Placement.CENTER, Placement.BOTTOM_RIGHT]

    def test_recipient_address_is_split(self, composer, priced_job, company_profile, generation_date):
        document = compose(composer, DocumentKind.ENVELOPE, priced_job, company_profile, generation_date)

        recipient = document.find_sections("recipient")[0]
        assert recipient.lines == ["Smith Residence", "Smith Family", "123 Main Street", "Anytown", "AB12 3CD"]
        assert document.find_sections("job_reference")[0].lines == ["Ref: AAB0001"]

    def test_recipient_without_organisation(self, composer, empty_job, company_profile, generation_date):
        document = compose(composer, DocumentKind.ENVELOPE, empty_job, company_profile, generation_date)

        assert document.find_sections("recipient")[0].lines == ["Empty Job", "1 High Street", "ZZ1 1ZZ"]

    def test_envelope_needs_no_costs(self, composer, priced_job, company_profile):
        priced_job.cost_summary = None

        document = composer.compose(DocumentKind.ENVELOPE, priced_job, None, company_profile)

        assert document.has_section("recipient")

    def test_split_address(self):
        assert split_address("Westpark Road\nSeaview, East") == ["Westpark Road", "Seaview", "East"]
        assert split_address("") == []


class TestBranding:
    """Test cases for logo handling."""

    def test_valid_logo(self, composer, priced_job, company_profile, generation_date):
        profile = replace(company_profile, logo="data:image/png;base64,iVBORw0KGgo=")

        document = compose(composer, DocumentKind.QUOTE, priced_job, profile, generation_date)

        assert document.branding.has_logo

    def test_malformed_logo_falls_back_to_text(self, composer, priced_job, company_profile, generation_date, caplog):
        profile = replace(company_profile, logo="not-a-logo")

        with caplog.at_level(logging.WARNING):
            document = compose(composer, DocumentKind.QUOTE, priced_job, profile, generation_date)

        assert not document.branding.has_logo
        assert document.branding.company_name == "All About Blinds"
        assert "malformed logo" in caplog.text

    @pytest.mark.parametrize("logo,expected", [
        ("data:image/png;base64,iVBORw0KGgo=", True),
        ("data:image/svg+xml;base64,PHN2Zz48L3N2Zz4=", True),
        ("data:image/png;base64,@@@", False),
        ("http://example.com/logo.png", False),
    ])
    def test_is_valid_logo(self, logo, expected):
        assert is_valid_logo(logo) is expected


class TestPagination:
    """Test cases for line budget pagination."""

    def add_blinds(self, job, count):
        for index in range(2, count + 1):
            job.roller_blinds.append(BlindLineItem(
                id=f"RB{index:03d}",
                category=BlindCategory.ROLLER,
                location=f"Room {index}",
                width=1000,
                drop=1500,
                quantity=1,
                cost=100.0
            ))

    def test_long_table_continues_on_next_page(self, composer, priced_job, company_profile, generation_date):
        self.add_blinds(priced_job, 40)

        document = compose(composer, DocumentKind.QUOTE, priced_job, company_profile, generation_date)

        assert document.page_count == 2
        fragments = document.find_sections("blinds")
        assert len(fragments) == 2
        assert sum(len(fragment.rows) for fragment in fragments) == 40
        assert not fragments[0].continued
        assert fragments[1].continued
        assert fragments[1].columns == fragments[0].columns
        assert all(page.footer == FOOTER for page in document.pages)

    def test_pages_respect_line_budget(self, priced_job, company_profile, generation_date):
        composer = DocumentComposer(line_budget=20)
        self.add_blinds(priced_job, 40)

        document = compose(composer, DocumentKind.QUOTE, priced_job, company_profile, generation_date)

        for page in document.pages:
            assert sum(section.line_count for section in page.sections) <= 20
        assert [page.number for page in document.pages] == list(range(1, document.page_count + 1))

    def test_summary_is_never_split(self, priced_job, company_profile, generation_date):
        composer = DocumentComposer(line_budget=12)

        document = compose(composer, DocumentKind.QUOTE, priced_job, company_profile, generation_date)

        assert len(document.find_sections("cost_summary")) == 1


def test_compose_document_uses_default_composer(priced_job, company_profile, generation_date):
    breakdown = compute_cost_breakdown(priced_job)

    document = compose_document(DocumentKind.QUOTE, priced_job, breakdown, company_profile, generation_date)

    assert document.filename == "quote-aab0001.pdf"


class TestRateFormatting:
    """Rates print every significant digit without exponent notation."""

    @pytest.mark.parametrize("rate,expected", [
        (20.0, "20"),
        (17.5, "17.5"),
        (12.125, "12.125"),
        (1234567.0, "1234567"),
    ])
    def test_format_rate(self, rate, expected):
        assert format_rate(rate) == expected
