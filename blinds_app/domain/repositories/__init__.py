"""
Repository interfaces for the domain layer.
This module exports all repository interfaces (ports) for dependency injection.
"""

from .job_repository import JobRepository

__all__ = [
    "JobRepository",
]
