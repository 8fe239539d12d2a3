"""
Pure domain model for JES spool entries.

This module contains the Job and JobOutput value objects. They know
nothing about sessions or listing text; the parser layer builds them and
the service layer passes them around.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import re
from typing import FrozenSet, List, Optional, Tuple

from ..errors import FieldInconsistencyError
from .fields import normalize, normalize_optional

FILTER_WILDCARD = "*"


class JobStatus(Enum):
    """JES job status. ALL is a wildcard used for filtering only."""

    ALL = "ALL"
    INPUT = "INPUT"  # Submitted, not started yet
    ACTIVE = "ACTIVE"  # Running
    OUTPUT = "OUTPUT"  # Finished, held on the spool


class JobFlag(Enum):
    """Special markers found in the trailing part of a job header line."""

    DUP = r"-DUP-"
    HELD = r"-HELD-"
    JCL_ERROR = r"\(JCL error\)"

    @property
    def rest_pattern(self):
        return _FLAG_PATTERNS[self]


_FLAG_PATTERNS = {flag: re.compile(flag.value) for flag in JobFlag}

_STATUS_WITH_RESULT = (JobStatus.OUTPUT, JobStatus.ALL)


@dataclass
class JobOutput:  # pylint: disable=too-many-instance-attributes
    """
    One output data set of a finished job.

    Two outputs are equal if they belong to the same job id and have the
    same index. Create outputs with Job.create_output, which fills in the
    owning job id and only accepts jobs with output status.
    """

    job_id: str
    index: int
    name: str
    length: int
    step: Optional[str] = None
    procedure_step: Optional[str] = None
    output_class: Optional[str] = None

    def __post_init__(self):
        self.name = normalize(self.name)
        self.step = normalize_optional(self.step)
        self.procedure_step = normalize_optional(self.procedure_step)
        self.output_class = normalize_optional(self.output_class)
        self._validate()

    def _validate(self):
        if self.index < 1:
            raise FieldInconsistencyError("Index must not be less than one.")
        if not self.name:
            raise FieldInconsistencyError("Name must not be empty.")
        if self.length < 0:
            raise FieldInconsistencyError("Length must not be less than zero.")
        if self.step == "":
            raise FieldInconsistencyError("Step must not be empty if present.")
        if self.procedure_step == "":
            raise FieldInconsistencyError(
                "Procedure Step must not be empty if present.")
        if self.output_class == "":
            raise FieldInconsistencyError(
                "Output class must not be empty if present.")

    @property
    def file_name(self) -> str:
        """Name used to retrieve the output's content."""
        return "{}.{}".format(self.job_id, self.index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JobOutput):
            return NotImplemented
        return (self.job_id, self.index) == (other.job_id, other.index)

    def __hash__(self) -> int:
        return hash((self.job_id, self.index))


@dataclass
class Job:  # pylint: disable=too-many-instance-attributes
    """
    Status information of a JES job.

    Depending on the code that created it, ``name`` and ``owner`` may be
    filter values containing FILTER_WILDCARD rather than concrete values.

    Two Job objects are equal if their ids are equal, so an outdated and an
    up-to-date object of the same job compare equal.
    """

    id: str  # pylint: disable=invalid-name
    name: str
    status: JobStatus
    owner: str
    jes_class: Optional[str] = None
    result_code: Optional[int] = None
    abend_code: Optional[str] = None
    flags: FrozenSet[JobFlag] = frozenset()
    _outputs: List[JobOutput] = field(
        default_factory=list, init=False, repr=False)

    def __post_init__(self):
        self.id = normalize(self.id)
        self.name = normalize(self.name)
        self.owner = normalize(self.owner)
        self.jes_class = normalize_optional(self.jes_class)
        self.abend_code = normalize_optional(self.abend_code)
        self.flags = frozenset(self.flags)
        self._validate()

    # pylint: disable-next=too-many-branches
    def _validate(self):
        if not self.id:
            raise FieldInconsistencyError("Job ID must be filled, but is empty.")
        if self.jes_class == "":
            raise FieldInconsistencyError("JES class must not be empty if present.")
        if self.result_code is not None and self.abend_code is not None:
            raise FieldInconsistencyError(
                "Result Code and Abend Code must not be present at the same time.")
        if self.result_code is not None and self.result_code < 0:
            raise FieldInconsistencyError("Result Code must not be less than zero.")
        if self.abend_code == "":
            raise FieldInconsistencyError("Abend Code must not be empty if present.")
        if self.status not in _STATUS_WITH_RESULT:
            if self.result_code is not None:
                raise FieldInconsistencyError(
                    "Result Code must not be present for status [{}].",
                    self.status.value)
            if self.abend_code is not None:
                raise FieldInconsistencyError(
                    "Abend Code must not be present for status [{}].",
                    self.status.value)

    @property
    def outputs(self) -> Tuple[JobOutput, ...]:
        """Snapshot of the job's outputs in index order."""
        return tuple(self._outputs)

    # pylint: disable-next=too-many-arguments
    def create_output(
        self,
        index: int,
        name: str,
        length: int,
        step: Optional[str] = None,
        procedure_step: Optional[str] = None,
        output_class: Optional[str] = None,
    ) -> JobOutput:
        """
        Create a JobOutput and append it to this job's outputs.

        Only jobs with status OUTPUT (or ALL) can have outputs.

        Raises:
            FieldInconsistencyError: on wrong status or inconsistent fields
        """
        if self.status not in _STATUS_WITH_RESULT:
            raise FieldInconsistencyError(
                "Job outputs for status other than OUTPUT (and ALL) cannot be "
                "created. Status: {}", self.status.value)

        output = JobOutput(
            job_id=self.id,
            index=index,
            name=name,
            length=length,
            step=step,
            procedure_step=procedure_step,
            output_class=output_class,
        )
        self._outputs.append(output)
        return output

    def get_output(self, name: str) -> Optional[JobOutput]:
        """Return the first output called ``name``, or None."""
        name = normalize(name)
        for output in self._outputs:
            if output.name == name:
                return output
        return None

    def is_finished(self) -> bool:
        """Return True if the job is held on the spool after running."""
        return self.status == JobStatus.OUTPUT

    def has_flag(self, flag: JobFlag) -> bool:
        return flag in self.flags

    def __str__(self) -> str:
        parts = [self.id, self.name, self.owner, self.status.value]
        if self.jes_class:
            parts.append(self.jes_class)
        if self.result_code is not None:
            parts.append("RC={:04d}".format(self.result_code))
        if self.abend_code is not None:
            parts.append("ABEND={}".format(self.abend_code))
        parts.extend(sorted(flag.name for flag in self.flags))
        return " ".join(parts)

    def __eq__(self, other: object) -> bool:
        """Check equality based on id."""
        if not isinstance(other, Job):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on id."""
        return hash(self.id)

