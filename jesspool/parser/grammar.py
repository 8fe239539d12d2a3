"""
Line grammars of the JES spool listing.

A listing as returned in JES mode looks like this::

    JOBNAME  JOBID    OWNER    STATUS CLASS
    USER1    JOB00054 USER1    OUTPUT A        RC=0000 5 spool files
    --------
             ID  STEPNAME PROCSTEP C DDNAME   BYTE-COUNT
             001 JESE              H JESMSGLG      1200
             002 JESE              H JESJCL         526
    5 spool files

Only the title line and the job header line are always present. The
separator, sub-title, detail and footer lines appear for jobs whose
outputs are listed.

Each ``match_*`` function returns the named fields of a single physical
line or raises GrammarMismatchError naming the expected pattern.
"""

import re
from typing import Dict, FrozenSet, Optional

from ..domain import JobFlag
from ..errors import GrammarMismatchError

PATTERN_TITLE = re.compile(r"^JOBNAME +JOBID +OWNER +STATUS +CLASS *$")

# Named groups: name, id, owner, status, jes_class, rest
PATTERN_JOB = re.compile(
    r"^(?P<name>.{8}) (?P<id>.{8}) (?P<owner>.{8}) "
    r"(?P<status>INPUT|ACTIVE|OUTPUT) (?P<jes_class>.{1,8})( (?P<rest>.*))?$")

PATTERN_JOB_RESULT_CODE = re.compile(r"RC=(?P<result_code>\d+)")

PATTERN_JOB_ABEND = re.compile(r"ABEND=(?P<abend_code>\S+)")

PATTERN_SEPARATOR = re.compile(r"^-+ *$")

SUB_TITLE_BYTE_COUNT = "         ID  STEPNAME PROCSTEP C DDNAME   BYTE-COUNT"
SUB_TITLE_RECORD_COUNT = "         ID  STEPNAME PROCSTEP C DDNAME   REC-COUNT"

PATTERN_SUB_TITLE = re.compile(
    r"^(" + re.escape(SUB_TITLE_BYTE_COUNT) + "|"
    + re.escape(SUB_TITLE_RECORD_COUNT) + r") *$")

# Named groups: index, step, procedure_step, output_class, name, length
PATTERN_JOB_OUTPUT = re.compile(
    r"^ {9}(?P<index>\d{3}) (?P<step>.{8}) (?P<procedure_step>.{8}) "
    r"(?P<output_class>.) (?P<name>.{8}) {1,9}(?P<length>\d{1,9}) *$")

PATTERN_SPOOL_FILES = re.compile(r"^\d+ spool files *$")


def _full_match(pattern, line, description):
    match = pattern.match(line)
    if match is None:
        raise GrammarMismatchError(pattern.pattern, line, description)
    return match


def is_title(line: str) -> bool:
    return PATTERN_TITLE.match(line) is not None


def is_job_header(line: str) -> bool:
    return PATTERN_JOB.match(line) is not None


def is_separator(line: str) -> bool:
    return PATTERN_SEPARATOR.match(line) is not None


def is_sub_title(line: str) -> bool:
    return PATTERN_SUB_TITLE.match(line) is not None


def is_spool_files(line: str) -> bool:
    return PATTERN_SPOOL_FILES.match(line) is not None


def match_job_header(line: str) -> Dict[str, Optional[str]]:
    """Fields of a job header line; ``rest`` is None if absent."""
    return _full_match(PATTERN_JOB, line, "job details line").groupdict()


def match_sub_title(line: str) -> str:
    return _full_match(PATTERN_SUB_TITLE, line, "sub title line").group(1)


def match_job_output(line: str) -> Dict[str, str]:
    """Fields of a job output detail line."""
    return _full_match(
        PATTERN_JOB_OUTPUT, line, "job output details line").groupdict()


def find_result_code(rest: Optional[str]) -> Optional[int]:
    if not rest:
        return None
    match = PATTERN_JOB_RESULT_CODE.search(rest)
    return int(match.group("result_code")) if match else None


def find_abend_code(rest: Optional[str]) -> Optional[str]:
    if not rest:
        return None
    match = PATTERN_JOB_ABEND.search(rest)
    return match.group("abend_code") if match else None


def find_flags(rest: Optional[str]) -> FrozenSet[JobFlag]:
    if not rest:
        return frozenset()
    return frozenset(
        flag for flag in JobFlag if flag.rest_pattern.search(rest))
