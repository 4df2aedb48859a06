"""
Application use cases.
"""

from .job_use_cases import (
    ListJobsUseCase,
    GetJobUseCase,
    GetCostBreakdownUseCase,
    UpdateCostSummaryUseCase,
    AddBlindUseCase,
    UpdateBlindUseCase,
    DuplicateBlindUseCase,
    RemoveBlindUseCase,
    AddTaskUseCase,
    UpdateTaskUseCase,
    RemoveTaskUseCase,
)
from .document_use_cases import ComposeDocumentUseCase, GenerateDocumentPDFUseCase

__all__ = [
    "ListJobsUseCase",
    "GetJobUseCase",
    "GetCostBreakdownUseCase",
    "UpdateCostSummaryUseCase",
    "AddBlindUseCase",
    "UpdateBlindUseCase",
    "DuplicateBlindUseCase",
    "RemoveBlindUseCase",
    "AddTaskUseCase",
    "UpdateTaskUseCase",
    "RemoveTaskUseCase",
    "ComposeDocumentUseCase",
    "GenerateDocumentPDFUseCase",
]
