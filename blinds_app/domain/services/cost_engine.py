"""Cost engine for pricing a job.
Turns line items and the cost configuration into a full breakdown.
"""

from dataclasses import dataclass, asdict
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Any

from blinds_app.domain.models.base import ValidationError
from blinds_app.domain.models.job import Job, CostSummary, require_finite


@dataclass(frozen=True)
class CostBreakdown:
    """
    Every intermediate figure of a job's pricing.
    Values are unrounded floats; round only when formatting.
    """
    blinds_cost: float
    tasks_cost: float
    subtotal: float
    additional_costs_total: float
    carriage: float
    fast_track: float
    additional_flat: float
    pre_vat_total: float
    vat_rate: float
    vat_amount: float
    pre_profit_total: float
    profit_rate: float
    profit_amount: float
    grand_total: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class CostEngine:
    """
    Domain service for job pricing.

    The order of operations is fixed: VAT is charged on the pre-VAT total and
    profit is taken on the same pre-VAT total, then both are added.
    """

    def compute(self, job: Job) -> CostBreakdown:
        """Compute the breakdown for a job. Raises ValidationError on bad input."""
        config = job.cost_summary
        if config is None:
            raise ValidationError(f"Job {job.id} has no cost configuration", "cost_summary")

        self._validate(job, config)

        blinds_cost = sum(blind.cost * blind.quantity for blind in job.all_blinds())
        tasks_cost = sum(task.cost for task in job.tasks)
        subtotal = blinds_cost + tasks_cost

        additional_costs_total = sum(cost.amount for cost in config.additional_costs)
        additional_flat = additional_costs_total + config.carriage + config.fast_track
        pre_vat_total = subtotal + additional_flat

        vat_amount = pre_vat_total * config.vat_rate / 100
        pre_profit_total = pre_vat_total + vat_amount

        profit_amount = pre_vat_total * config.profit_rate / 100
        grand_total = pre_profit_total + profit_amount

        return CostBreakdown(
            blinds_cost=blinds_cost,
            tasks_cost=tasks_cost,
            subtotal=subtotal,
            additional_costs_total=additional_costs_total,
            carriage=config.carriage,
            fast_track=config.fast_track,
            additional_flat=additional_flat,
            pre_vat_total=pre_vat_total,
            vat_rate=config.vat_rate,
            vat_amount=vat_amount,
            pre_profit_total=pre_profit_total,
            profit_rate=config.profit_rate,
            profit_amount=profit_amount,
            grand_total=grand_total
        )

    def _validate(self, job: Job, config: CostSummary) -> None:
        """
        Reject any input the breakdown cannot be computed from; never clamp.
        """
        for blind in job.all_blinds():
            require_finite(blind.cost, "cost")
            require_finite(blind.quantity, "quantity")
            if blind.cost < 0:
                raise ValidationError(f"Blind {blind.id} has a negative cost", "cost")
            if int(blind.quantity) != blind.quantity or blind.quantity < 1:
                raise ValidationError(f"Blind {blind.id} quantity must be at least 1", "quantity")

        for task in job.tasks:
            require_finite(task.cost, "cost")
            if task.cost < 0:
                raise ValidationError(f"Task {task.id} has a negative cost", "cost")

        config.validate()


def compute_cost_breakdown(job: Job) -> CostBreakdown:
    """Compute the cost breakdown for a job."""
    return CostEngine().compute(job)


def round_currency(amount: float) -> float:
    """
    Round amount to 2 decimal places for currency.
    """
    return float(Decimal(str(amount)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP))


def format_currency(amount: float, symbol: str = "£") -> str:
    """Format an amount in en-GB style, e.g. £1,234.56."""
    rounded = round_currency(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.2f}"
