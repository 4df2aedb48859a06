"""
Job DTOs for the application layer.
Data Transfer Objects for jobs, line items, costs and documents.
"""

from typing import Optional, List, Dict, Any
from datetime import datetime, date
from pydantic import Field, field_validator

from blinds_app.domain.models.job import BlindCategory, JobStatus
from .base_dto import RequestDTO, ResponseDTO, NotesMixin


# Line items

class BlindRequestDTO(RequestDTO, NotesMixin):
    """DTO for adding or replacing a blind."""

    location: str = Field(min_length=1, max_length=200, description="Where the blind is fitted")
    width: float = Field(gt=0, description="Width in mm")
    drop: float = Field(gt=0, description="Drop in mm")
    quantity: int = Field(default=1, ge=1, description="Number of blinds")
    cost: float = Field(default=0.0, ge=0, description="Unit price")


class BlindResponseDTO(ResponseDTO):
    id: str
    category: BlindCategory
    location: str
    width: float
    drop: float
    quantity: int
    cost: float
    line_total: float
    notes: Optional[str] = None


class TaskRequestDTO(RequestDTO, NotesMixin):
    """DTO for adding or replacing a task."""

    description: str = Field(min_length=1, max_length=500, description="Task description")
    cost: float = Field(default=0.0, ge=0, description="Task cost")
    status: Optional[str] = Field(default=None, max_length=50)
    due_date: Optional[date] = None
    assigned_to: Optional[str] = Field(default=None, max_length=200)


class TaskResponseDTO(ResponseDTO):
    id: str
    description: str
    cost: float
    status: Optional[str] = None
    due_date: Optional[date] = None
    assigned_to: Optional[str] = None
    notes: Optional[str] = None


# Costs

class AdditionalCostRequestDTO(RequestDTO):
    """Additional flat cost. Description is required."""

    description: str = Field(min_length=1, max_length=200, description="What the cost is for")
    amount: float = Field(ge=0, description="Amount")

    @field_validator('description')
    @classmethod
    def validate_description(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Description is required')
        return v.strip()


class UpdateCostSummaryRequestDTO(RequestDTO):
    """DTO for replacing a job's cost configuration."""

    carriage: float = Field(default=0.0, ge=0, description="Carriage fee")
    fast_track: float = Field(default=0.0, ge=0, description="Fast track fee")
    vat_rate: float = Field(default=20.0, ge=0, le=100, description="VAT rate in percent")
    profit_rate: float = Field(default=0.0, ge=0, le=100, description="Profit rate in percent")
    additional_costs: List[AdditionalCostRequestDTO] = Field(default_factory=list)
    quote_date: Optional[date] = None
    invoice_date: Optional[date] = None
    receipt_date: Optional[date] = None


class CostBreakdownResponseDTO(ResponseDTO):
    """Full cost breakdown of a job."""

    job_id: str
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


# Jobs

class JobSummaryResponseDTO(ResponseDTO):
    """Job as listed."""

    id: str
    name: str
    organisation: Optional[str] = None
    postcode: str = ""
    status: JobStatus
    created_at: Optional[datetime] = None


class JobResponseDTO(JobSummaryResponseDTO):
    """Job with its line items."""

    address: str = ""
    area: str = ""
    notes: Optional[str] = None
    tasks: List[TaskResponseDTO] = Field(default_factory=list)
    roller_blinds: List[BlindResponseDTO] = Field(default_factory=list)
    vertical_blinds: List[BlindResponseDTO] = Field(default_factory=list)
    venetian_blinds: List[BlindResponseDTO] = Field(default_factory=list)
    cost_summary: Optional[Dict[str, Any]] = None
    updated_at: Optional[datetime] = None


# Documents

class GeneratedDocumentResponseDTO(ResponseDTO):
    """Result of rendering a document to a file."""

    file_path: str
    filename: str
    file_size: int
    generated_at: datetime
    kind: str
    reference: str
