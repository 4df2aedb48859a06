"""Numbering service for generating identifiers for jobs, line items and documents.
Handles id generation, formatting and document reference derivation.
"""

from typing import List, Optional
import re

from blinds_app.domain.models.base import ValidationError
from blinds_app.domain.models.document import DocumentKind


class NumberingService:
    """
    Domain service for sequential identifiers.
    Line item ids are a prefix plus a zero-padded sequence (RB001, TASK002),
    job ids use a four digit sequence (AAB0001).
    """

    def __init__(self):
        self.default_patterns = {
            "job": "AAB{number:04d}",
            "invoice": "INV-{reference}",
            "receipt": "REC-{reference}",
        }
        self.item_width = 3

    def next_item_id(self, prefix: str, existing_ids: List[str], width: Optional[int] = None) -> str:
        """
        Generate the next id for a list of items sharing ``prefix``.
        Picks one past the highest existing sequence so removed ids are not reused
        while a later item still carries a higher number.
        """
        if not prefix or not re.match(r'^[A-Z]+$', prefix):
            raise ValidationError("Prefix must be upper-case letters", "prefix")

        width = width or self.item_width
        next_number = self._get_next_number_in_sequence(existing_ids, prefix)
        return f"{prefix}{next_number:0{width}d}"

    def generate_job_id(self, existing_ids: List[str]) -> str:
        """Generate the next job id."""
        next_number = self._get_next_number_in_sequence(existing_ids, "AAB")
        return self.default_patterns["job"].format(number=next_number)

    def document_reference(self, kind: DocumentKind, job_id: str) -> str:
        """
        Reference printed on a document.
        Quotes and envelopes carry the job id; invoices and receipts carry the
        job id behind their own prefix, without a leading ``JOB``.
        """
        if not job_id:
            raise ValidationError("Job ID is required", "job_id")

        if kind in (DocumentKind.QUOTE, DocumentKind.ENVELOPE):
            return job_id

        reference = job_id[3:] if job_id.startswith("JOB") else job_id
        return self.default_patterns[kind.value].format(reference=reference)

    def parse_number(self, value: str, prefix: str) -> Optional[int]:
        """Sequence number of ``value`` if it is ``prefix`` followed by digits."""
        match = re.match(rf'^{re.escape(prefix)}(\d+)$', value or "")
        if not match:
            return None
        return int(match.group(1))

    def _get_next_number_in_sequence(self, existing_ids: List[str], prefix: str) -> int:
        """
        Get the next number in sequence for ids with a matching prefix.
        """
        matching_numbers = [
            number for number in (self.parse_number(value, prefix) for value in existing_ids)
            if number is not None
        ]

        if not matching_numbers:
            return 1

        return max(matching_numbers) + 1
