"""
Domain models for jesspool.

This package contains pure domain logic with no session coupling.
"""

from .job import FILTER_WILDCARD, Job, JobFlag, JobOutput, JobStatus

__all__ = ["FILTER_WILDCARD", "Job", "JobFlag", "JobOutput", "JobStatus"]
