"""
Job mapper for converting between domain entities and stored job records.
Records use the camelCase shape of the job data files.
"""

import logging
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional

from blinds_app.domain.models.base import ValidationError
from blinds_app.domain.models.job import (
    Job,
    JobStatus,
    BlindCategory,
    BlindLineItem,
    Task,
    AdditionalCost,
    Contact,
    Survey,
    CostSummary,
)

logger = logging.getLogger(__name__)

BLIND_KEYS = {
    BlindCategory.ROLLER: "rollerBlinds",
    BlindCategory.VERTICAL: "verticalBlinds",
    BlindCategory.VENETIAN: "venetianBlinds",
}


def _parse_date(value: Any) -> Optional[date]:
    if not value:
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _parse_datetime(value: Any) -> datetime:
    if not value:
        return datetime.utcnow()
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _format_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse_quantity(value: Any) -> int:
    """Whole-number quantity; fractional values are rejected, never truncated."""
    quantity = float(value)
    if not quantity.is_integer():
        raise ValueError(f"quantity {value!r} is not a whole number")
    return int(quantity)


class JobMapper:
    """Maps between the Job aggregate and its dictionary record."""

    def record_to_domain(self, record: Dict[str, Any]) -> Job:
        """Convert a job record to a Job domain entity."""
        job_id = record.get("id", "")

        job = Job(
            name=record.get("name", ""),
            organisation=record.get("organisation") or None,
            address=record.get("address") or "",
            area=record.get("area") or "",
            postcode=record.get("postcode") or "",
            status=self._status_from_record(record),
            notes=record.get("aoi") or record.get("notes") or None,
            contacts=self._collection(record, "contacts", self._contact_from_record),
            surveys=self._collection(record, "surveys", self._survey_from_record),
            tasks=self._collection(record, "tasks", self._task_from_record, priced=True),
            roller_blinds=self._blinds(record, BlindCategory.ROLLER),
            vertical_blinds=self._blinds(record, BlindCategory.VERTICAL),
            venetian_blinds=self._blinds(record, BlindCategory.VENETIAN),
            cost_summary=self._cost_summary_from_record(record.get("costSummary"), job_id)
        )

        # Set entity metadata
        job.id = job_id
        job.created_at = _parse_datetime(record.get("createdAt"))
        job.updated_at = _parse_datetime(record.get("updatedAt"))

        return job

    def domain_to_record(self, job: Job) -> Dict[str, Any]:
        """Convert a Job domain entity to a job record."""
        record = {
            "id": job.id,
            "name": job.name,
            "organisation": job.organisation or "",
            "address": job.address,
            "area": job.area,
            "postcode": job.postcode,
            "status": job.status.value,
            "aoi": job.notes or "",
            "contacts": [
                {
                    "id": contact.id,
                    "name": contact.name,
                    "organisation": contact.organisation or "",
                    "address": contact.address,
                    "area": contact.area,
                    "postcode": contact.postcode,
                    "phone": contact.phone,
                    "email": contact.email,
                    "isMainContact": contact.is_main_contact,
                    "aoi": contact.notes or "",
                }
                for contact in job.contacts
            ],
            "surveys": [
                {
                    "id": survey.id,
                    "brief": survey.brief,
                    "date": _format_date(survey.date),
                    "time": survey.time,
                    "aoi": survey.notes or "",
                }
                for survey in job.surveys
            ],
            "tasks": [
                {
                    "id": task.id,
                    "description": task.description,
                    "cost": task.cost,
                    "status": task.status,
                    "dueDate": _format_date(task.due_date),
                    "assignedTo": task.assigned_to,
                    "aoi": task.notes or "",
                }
                for task in job.tasks
            ],
            "costSummary": self._cost_summary_to_record(job.cost_summary),
            "createdAt": job.created_at.isoformat(),
            "updatedAt": job.updated_at.isoformat(),
        }

        for category, key in BLIND_KEYS.items():
            record[key] = [
                {
                    "id": blind.id,
                    "location": blind.location,
                    "width": blind.width,
                    "drop": blind.drop,
                    "quantity": blind.quantity,
                    "cost": blind.cost,
                    "aoi": blind.notes or "",
                }
                for blind in job.blinds_for(category)
            ]

        return record

    def _collection(
        self,
        record: Dict[str, Any],
        key: str,
        convert: Callable[[Dict[str, Any]], Any],
        priced: bool = False
    ) -> List[Any]:
        """
        Convert a list field; absent or non-list fields become empty.
        A malformed entry is skipped, unless the list is priced: dropping a
        priced entry would change the job total, so it raises ValidationError.
        """
        items = record.get(key)
        if items is None:
            return []
        if not isinstance(items, list):
            logger.warning(f"Job {record.get('id')}: '{key}' is not a list, treating as empty")
            return []

        converted = []
        for item in items:
            try:
                converted.append(convert(item))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                if priced:
                    raise ValidationError(
                        f"Job {record.get('id')}: malformed entry in '{key}': {e}", key
                    ) from e
                logger.warning(f"Job {record.get('id')}: skipping malformed entry in '{key}': {e}")
        return converted

    def _status_from_record(self, record: Dict[str, Any]) -> JobStatus:
        value = record.get("status")
        if not value:
            return JobStatus.ACTIVE
        try:
            return JobStatus(value)
        except ValueError as e:
            raise ValidationError(f"Job {record.get('id')}: unknown status {value!r}", "status") from e

    def _blinds(self, record: Dict[str, Any], category: BlindCategory) -> List[BlindLineItem]:
        return self._collection(
            record,
            BLIND_KEYS[category],
            lambda item: self._blind_from_record(item, category),
            priced=True
        )

    def _blind_from_record(self, item: Dict[str, Any], category: BlindCategory) -> BlindLineItem:
        return BlindLineItem(
            id=item["id"],
            category=category,
            location=item.get("location", ""),
            width=float(item["width"]),
            drop=float(item["drop"]),
            quantity=_parse_quantity(item.get("quantity", 1)),
            cost=float(item.get("cost", 0)),
            notes=item.get("aoi") or item.get("notes") or None
        )

    def _task_from_record(self, item: Dict[str, Any]) -> Task:
        return Task(
            id=item["id"],
            description=item.get("description", ""),
            cost=float(item.get("cost", 0)),
            status=item.get("status"),
            due_date=_parse_date(item.get("dueDate")),
            assigned_to=item.get("assignedTo"),
            notes=item.get("aoi") or item.get("notes") or None
        )

    def _contact_from_record(self, item: Dict[str, Any]) -> Contact:
        return Contact(
            id=item["id"],
            name=item.get("name", ""),
            organisation=item.get("organisation") or None,
            address=item.get("address", ""),
            area=item.get("area", ""),
            postcode=item.get("postcode", ""),
            phone=item.get("phone", ""),
            email=item.get("email", ""),
            is_main_contact=bool(item.get("isMainContact", False)),
            notes=item.get("aoi") or None
        )

    def _survey_from_record(self, item: Dict[str, Any]) -> Survey:
        return Survey(
            id=item["id"],
            brief=item.get("brief", ""),
            date=_parse_date(item.get("date")),
            time=item.get("time") or None,
            notes=item.get("aoi") or None
        )

    def _additional_cost_from_record(self, item: Dict[str, Any]) -> AdditionalCost:
        return AdditionalCost(
            id=item["id"],
            description=item.get("description", ""),
            amount=float(item.get("amount", 0))
        )

    def _cost_summary_from_record(self, data: Any, job_id: str) -> Optional[CostSummary]:
        """A missing cost summary stays None so documents fail fast."""
        if data is None:
            return None
        if not isinstance(data, dict):
            logger.warning(f"Job {job_id}: 'costSummary' is malformed, ignoring it")
            return None

        try:
            return self._build_cost_summary(data, job_id)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Job {job_id}: malformed 'costSummary': {e}", "costSummary") from e

    def _build_cost_summary(self, data: Dict[str, Any], job_id: str) -> CostSummary:
        return CostSummary(
            carriage=float(data.get("carriage", 0)),
            fast_track=float(data.get("fastTrack", 0)),
            vat_rate=float(data.get("vatRate", 20)),
            profit_rate=float(data.get("profitRate", 0)),
            additional_costs=self._collection(
                {"id": job_id, **data}, "additionalCosts", self._additional_cost_from_record,
                priced=True
            ),
            quote_date=_parse_date(data.get("quoteDate")),
            invoice_date=_parse_date(data.get("invoiceDate")),
            receipt_date=_parse_date(data.get("receiptDate")),
            subtotal=float(data.get("subtotal", 0)),
            vat=float(data.get("vat", 0)),
            profit=float(data.get("profit", 0)),
            total=float(data.get("total", 0))
        )

    def _cost_summary_to_record(self, summary: Optional[CostSummary]) -> Optional[Dict[str, Any]]:
        if summary is None:
            return None
        return {
            "subtotal": summary.subtotal,
            "carriage": summary.carriage,
            "fastTrack": summary.fast_track,
            "vat": summary.vat,
            "vatRate": summary.vat_rate,
            "profit": summary.profit,
            "profitRate": summary.profit_rate,
            "total": summary.total,
            "additionalCosts": [cost.to_dict() for cost in summary.additional_costs],
            "quoteDate": _format_date(summary.quote_date),
            "invoiceDate": _format_date(summary.invoice_date),
            "receiptDate": _format_date(summary.receipt_date),
        }
