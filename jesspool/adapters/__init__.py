"""
Adapters converting domain objects for output.

This package contains converters between the domain model and plain
data structures used for JSON output.
"""

from .job_converter import job_from_dict, job_output_to_dict, job_to_dict

__all__ = ["job_from_dict", "job_output_to_dict", "job_to_dict"]
