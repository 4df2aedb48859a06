"""
Domain services for the blinds job costing system.
This module exports the domain services for pricing and document composition.
"""

from .numbering_service import NumberingService
from .cost_engine import CostEngine, CostBreakdown, compute_cost_breakdown, format_currency
from .document_composer import DocumentComposer, compose_document

__all__ = [
    "NumberingService",
    "CostEngine",
    "CostBreakdown",
    "compute_cost_breakdown",
    "format_currency",
    "DocumentComposer",
    "compose_document",
]
