"""
Repository implementations for the infrastructure layer.
"""

from .job_repository import InMemoryJobRepository

__all__ = [
    "InMemoryJobRepository",
]
