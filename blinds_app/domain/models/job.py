"""
Job domain model.
A job is one client engagement: contacts, surveys, tasks, blinds and the
cost configuration used to price them.
"""

import math
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Optional, List, Dict, Any, Iterable
from enum import Enum

from blinds_app.domain.models.base import (
    BaseEntity,
    ValidationError,
    BusinessRuleViolation,
    EntityNotFoundError,
)
from blinds_app.domain.models.document import DocumentKind


class JobStatus(str, Enum):
    """Job lifecycle status."""
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BlindCategory(str, Enum):
    """Blind product lines. Line items are tagged with one of these."""
    ROLLER = "roller"
    VERTICAL = "vertical"
    VENETIAN = "venetian"

    @property
    def label(self) -> str:
        labels = {
            BlindCategory.ROLLER: "Roller Blind",
            BlindCategory.VERTICAL: "Vertical Blind",
            BlindCategory.VENETIAN: "Venetian Blind",
        }
        return labels[self]

    @property
    def id_prefix(self) -> str:
        prefixes = {
            BlindCategory.ROLLER: "RB",
            BlindCategory.VERTICAL: "VB",
            BlindCategory.VENETIAN: "VN",
        }
        return prefixes[self]


TASK_ID_PREFIX = "TASK"
ADDITIONAL_COST_ID_PREFIX = "ADD"


@dataclass
class BlindLineItem:
    """A blind to be supplied and fitted. Unit price is ``cost``."""

    id: str
    category: BlindCategory
    location: str
    width: float  # mm
    drop: float  # mm
    quantity: int = 1
    cost: float = 0.0
    notes: Optional[str] = None

    @property
    def line_total(self) -> float:
        return self.cost * self.quantity

    @property
    def dimensions(self) -> str:
        return f"{format_decimal(self.width)}mm × {format_decimal(self.drop)}mm"

    def validate(self) -> None:
        """Validate line item."""
        if not self.location or not self.location.strip():
            raise ValidationError("Location is required", "location")

        require_finite(self.width, "width")
        if self.width <= 0:
            raise ValidationError("Width must be greater than zero", "width")

        require_finite(self.drop, "drop")
        if self.drop <= 0:
            raise ValidationError("Drop must be greater than zero", "drop")

        require_finite(self.quantity, "quantity")
        if int(self.quantity) != self.quantity or self.quantity < 1:
            raise ValidationError("Quantity must be a whole number of at least 1", "quantity")

        require_finite(self.cost, "cost")
        if self.cost < 0:
            raise ValidationError("Cost cannot be negative", "cost")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "category": self.category.value,
            "location": self.location,
            "width": self.width,
            "drop": self.drop,
            "quantity": self.quantity,
            "cost": self.cost,
            "line_total": self.line_total,
            "notes": self.notes,
        }


@dataclass
class Task:
    """A service line (installation, measurement...). Cost is charged once."""

    id: str
    description: str
    cost: float = 0.0
    status: Optional[str] = None
    due_date: Optional[date] = None
    assigned_to: Optional[str] = None
    notes: Optional[str] = None

    def validate(self) -> None:
        if not self.description or not self.description.strip():
            raise ValidationError("Description is required", "description")

        require_finite(self.cost, "cost")
        if self.cost < 0:
            raise ValidationError("Cost cannot be negative", "cost")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "description": self.description,
            "cost": self.cost,
            "status": self.status,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "assigned_to": self.assigned_to,
            "notes": self.notes,
        }


@dataclass
class AdditionalCost:
    """Flat extra charge added to the pre-VAT total."""

    id: str
    description: str
    amount: float = 0.0

    def validate(self) -> None:
        require_finite(self.amount, "amount")
        if self.amount < 0:
            raise ValidationError("Amount cannot be negative", "amount")

    def to_dict(self) -> dict:
        return {"id": self.id, "description": self.description, "amount": self.amount}


@dataclass
class Contact:
    """Person attached to a job."""

    id: str
    name: str
    organisation: Optional[str] = None
    address: str = ""
    area: str = ""
    postcode: str = ""
    phone: str = ""
    email: str = ""
    is_main_contact: bool = False
    notes: Optional[str] = None


@dataclass
class Survey:
    """Site survey appointment."""

    id: str
    brief: str
    date: Optional[date] = None
    time: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class CostSummary:
    """
    Pricing configuration for a job.

    ``subtotal``, ``vat``, ``profit`` and ``total`` are a cached snapshot of the
    last computed breakdown; they are never read back as inputs.
    """

    carriage: float = 0.0
    fast_track: float = 0.0
    vat_rate: float = 20.0
    profit_rate: float = 0.0
    additional_costs: List[AdditionalCost] = field(default_factory=list)

    quote_date: Optional[date] = None
    invoice_date: Optional[date] = None
    receipt_date: Optional[date] = None

    # Cached snapshot
    subtotal: float = 0.0
    vat: float = 0.0
    profit: float = 0.0
    total: float = 0.0

    def validate(self) -> None:
        """Validate rates and flat fees."""
        for name in ("carriage", "fast_track", "vat_rate", "profit_rate"):
            require_finite(getattr(self, name), name)

        if self.carriage < 0:
            raise ValidationError("Carriage cannot be negative", "carriage")

        if self.fast_track < 0:
            raise ValidationError("Fast track cannot be negative", "fast_track")

        if self.vat_rate < 0 or self.vat_rate > 100:
            raise ValidationError("VAT rate must be between 0 and 100", "vat_rate")

        if self.profit_rate < 0 or self.profit_rate > 100:
            raise ValidationError("Profit rate must be between 0 and 100", "profit_rate")

        for cost in self.additional_costs:
            cost.validate()

    def date_for(self, kind: DocumentKind) -> Optional[date]:
        """Document-specific date, if one has been configured."""
        dates = {
            DocumentKind.QUOTE: self.quote_date,
            DocumentKind.INVOICE: self.invoice_date,
            DocumentKind.RECEIPT: self.receipt_date,
        }
        return dates.get(kind)

    def store_snapshot(self, breakdown: Any) -> None:
        """Cache the headline figures of a computed breakdown."""
        self.subtotal = breakdown.subtotal
        self.vat = breakdown.vat_amount
        self.profit = breakdown.profit_amount
        self.total = breakdown.grand_total


@dataclass(eq=False)
class Job(BaseEntity):
    """
    Job aggregate root.
    Owns its line items and cost configuration; every pricing-relevant
    mutation refreshes the cached cost snapshot.
    """

    name: str = ""
    organisation: Optional[str] = None
    address: str = ""
    area: str = ""
    postcode: str = ""
    status: JobStatus = JobStatus.ACTIVE
    notes: Optional[str] = None

    contacts: List[Contact] = field(default_factory=list)
    surveys: List[Survey] = field(default_factory=list)
    tasks: List[Task] = field(default_factory=list)
    roller_blinds: List[BlindLineItem] = field(default_factory=list)
    vertical_blinds: List[BlindLineItem] = field(default_factory=list)
    venetian_blinds: List[BlindLineItem] = field(default_factory=list)

    cost_summary: Optional[CostSummary] = field(default_factory=CostSummary)

    def validate(self) -> None:
        """Validate job state."""
        if not self.id:
            raise ValidationError("Job ID is required", "id")

        if not self.name or not self.name.strip():
            raise ValidationError("Job name is required", "name")

        for category in BlindCategory:
            blinds = self.blinds_for(category)
            _ensure_unique_ids(blinds, category.value)
            for blind in blinds:
                if blind.category != category:
                    raise ValidationError(
                        f"Blind {blind.id} is filed under {category.value} but tagged {blind.category.value}",
                        "category"
                    )
                blind.validate()

        _ensure_unique_ids(self.tasks, "tasks")
        for task in self.tasks:
            task.validate()

        _ensure_unique_ids(self.contacts, "contacts")
        _ensure_unique_ids(self.surveys, "surveys")

        if self.cost_summary is not None:
            _ensure_unique_ids(self.cost_summary.additional_costs, "additional_costs")
            self.cost_summary.validate()

    def blinds_for(self, category: BlindCategory) -> List[BlindLineItem]:
        """Line item list owned for a category."""
        lists = {
            BlindCategory.ROLLER: self.roller_blinds,
            BlindCategory.VERTICAL: self.vertical_blinds,
            BlindCategory.VENETIAN: self.venetian_blinds,
        }
        return lists[category]

    def all_blinds(self) -> List[BlindLineItem]:
        """Every blind, roller then vertical then venetian."""
        return [*self.roller_blinds, *self.vertical_blinds, *self.venetian_blinds]

    @property
    def has_blinds(self) -> bool:
        return bool(self.roller_blinds or self.vertical_blinds or self.venetian_blinds)

    # Blinds

    def add_blind(
        self,
        category: BlindCategory,
        location: str,
        width: float,
        drop: float,
        quantity: int = 1,
        cost: float = 0.0,
        notes: Optional[str] = None
    ) -> BlindLineItem:
        """Add a blind and return it with its generated id."""
        self._ensure_editable()
        blinds = self.blinds_for(category)
        blind = BlindLineItem(
            id=_next_item_id(category.id_prefix, blinds),
            category=category,
            location=location,
            width=width,
            drop=drop,
            quantity=quantity,
            cost=cost,
            notes=notes
        )
        blind.validate()
        blinds.append(blind)
        self._touch()
        return blind

    def get_blind(self, category: BlindCategory, blind_id: str) -> BlindLineItem:
        for blind in self.blinds_for(category):
            if blind.id == blind_id:
                return blind
        raise EntityNotFoundError(category.label, blind_id)

    def update_blind(self, category: BlindCategory, blind_id: str, **changes: Any) -> BlindLineItem:
        """Edit a blind in place. ``id`` and ``category`` cannot change."""
        self._ensure_editable()
        blinds = self.blinds_for(category)
        current = self.get_blind(category, blind_id)
        changes.pop("id", None)
        changes.pop("category", None)
        updated = replace(current, **changes)
        updated.validate()
        blinds[blinds.index(current)] = updated
        self._touch()
        return updated

    def duplicate_blind(self, category: BlindCategory, blind_id: str) -> BlindLineItem:
        """Copy a blind to the end of its list under a fresh id."""
        self._ensure_editable()
        blinds = self.blinds_for(category)
        source = self.get_blind(category, blind_id)
        copy = replace(source, id=_next_item_id(category.id_prefix, blinds))
        blinds.append(copy)
        self._touch()
        return copy

    def remove_blind(self, category: BlindCategory, blind_id: str) -> None:
        self._ensure_editable()
        blinds = self.blinds_for(category)
        blinds.remove(self.get_blind(category, blind_id))
        self._touch()

    # Tasks

    def add_task(self, description: str, cost: float = 0.0, **details: Any) -> Task:
        self._ensure_editable()
        task = Task(
            id=_next_item_id(TASK_ID_PREFIX, self.tasks),
            description=description,
            cost=cost,
            **details
        )
        task.validate()
        self.tasks.append(task)
        self._touch()
        return task

    def get_task(self, task_id: str) -> Task:
        for task in self.tasks:
            if task.id == task_id:
                return task
        raise EntityNotFoundError("Task", task_id)

    def update_task(self, task_id: str, **changes: Any) -> Task:
        self._ensure_editable()
        current = self.get_task(task_id)
        changes.pop("id", None)
        updated = replace(current, **changes)
        updated.validate()
        self.tasks[self.tasks.index(current)] = updated
        self._touch()
        return updated

    def remove_task(self, task_id: str) -> None:
        self._ensure_editable()
        self.tasks.remove(self.get_task(task_id))
        self._touch()

    # Costs

    def update_cost_configuration(
        self,
        carriage: float,
        fast_track: float,
        vat_rate: float,
        profit_rate: float,
        additional_costs: Iterable[Dict[str, Any]] = (),
        quote_date: Optional[date] = None,
        invoice_date: Optional[date] = None,
        receipt_date: Optional[date] = None
    ) -> CostSummary:
        """
        Replace the pricing configuration.
        Additional costs are renumbered ADD001, ADD002... in the given order.
        """
        self._ensure_editable()
        summary = CostSummary(
            carriage=carriage,
            fast_track=fast_track,
            vat_rate=vat_rate,
            profit_rate=profit_rate,
            additional_costs=[
                AdditionalCost(
                    id=f"{ADDITIONAL_COST_ID_PREFIX}{index:03d}",
                    description=item.get("description", ""),
                    amount=item.get("amount", 0.0)
                )
                for index, item in enumerate(additional_costs, start=1)
            ],
            quote_date=quote_date,
            invoice_date=invoice_date,
            receipt_date=receipt_date
        )
        summary.validate()
        self.cost_summary = summary
        self._touch()
        return summary

    def recalculate_costs(self):
        """Recompute the breakdown and refresh the cached snapshot."""
        from blinds_app.domain.services.cost_engine import compute_cost_breakdown

        breakdown = compute_cost_breakdown(self)
        self.cost_summary.store_snapshot(breakdown)
        return breakdown

    def change_status(self, status: JobStatus) -> None:
        if self.status == status:
            return
        if self.status == JobStatus.CANCELLED and status == JobStatus.COMPLETED:
            raise BusinessRuleViolation("Cancelled jobs cannot be completed")
        self.status = status
        self.mark_as_updated()

    def _ensure_editable(self) -> None:
        if self.status == JobStatus.CANCELLED:
            raise BusinessRuleViolation("Cannot edit a cancelled job")

    def _touch(self) -> None:
        if self.cost_summary is not None:
            self.recalculate_costs()
        self.mark_as_updated()

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        data = super().to_dict()
        data["status"] = self.status.value
        data["roller_blinds"] = [blind.to_dict() for blind in self.roller_blinds]
        data["vertical_blinds"] = [blind.to_dict() for blind in self.vertical_blinds]
        data["venetian_blinds"] = [blind.to_dict() for blind in self.venetian_blinds]
        data["tasks"] = [task.to_dict() for task in self.tasks]
        return data


def format_decimal(value: float) -> str:
    """Print 1200.0 as 1200 and 1500.125 as 1500.125, without exponent notation."""
    return format(Decimal(str(value)).normalize(), "f")


def require_finite(value: float, field_name: str) -> None:
    """Reject NaN, infinities and non-numeric values."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationError(f"{field_name} must be a finite number", field_name)


def _ensure_unique_ids(items: List[Any], collection: str) -> None:
    seen = set()
    for item in items:
        if item.id in seen:
            raise ValidationError(f"Duplicate id {item.id} in {collection}", collection)
        seen.add(item.id)


def _next_item_id(prefix: str, items: List[Any]) -> str:
    from blinds_app.domain.services.numbering_service import NumberingService

    return NumberingService().next_item_id(prefix, [item.id for item in items])
