"""
Infrastructure mappers module.
Contains mappers for converting between domain entities and stored records.
"""

from .job_mapper import JobMapper

__all__ = [
    "JobMapper",
]
