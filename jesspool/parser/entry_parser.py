"""
Entry parsers turning JES spool listings into Job objects.

A listing arrives as a flat list of physical lines. ``pre_parse`` groups
them into one logical block per job, ``parse_entry`` builds a Job (and
its outputs) from one such block.
"""

from abc import ABC, abstractmethod
import logging
from typing import List

from ..domain import Job, JobStatus
from ..domain.fields import non_blank
from ..errors import DebuggingParserError, GrammarMismatchError
from . import grammar

LOG = logging.getLogger(__name__)

# Header, sub title and at least one job output details line
JOB_OUTPUT_DETAILS_LINES_MIN = 3

PARSER_MODE_JES = "jes"
PARSER_MODE_DEBUG = "debug"


class EntryParser(ABC):
    """Interface shared by all listing entry parsers."""

    @abstractmethod
    def pre_parse(self, lines: List[str]) -> List[str]:
        """
        Group raw listing lines into logical entries.

        Args:
            lines: Physical lines of one listing, title line first

        Returns:
            One newline-joined block per job, in listing order
        """

    @abstractmethod
    def parse_entry(self, entry: str) -> Job:
        """
        Build a Job from one logical entry.

        Args:
            entry: One block as returned by pre_parse

        Returns:
            The parsed job, including its outputs
        """

    def parse(self, lines: List[str]) -> List[Job]:
        """Pre-parse ``lines`` and parse every resulting entry."""
        return [self.parse_entry(entry) for entry in self.pre_parse(lines)]


class JesEntryParser(EntryParser):
    """Parser for the listing format of the z/OS FTP server in JES mode."""

    def pre_parse(self, lines: List[str]) -> List[str]:
        if not lines:
            raise GrammarMismatchError(
                grammar.PATTERN_TITLE.pattern, "", "first line (no line found)")
        if not grammar.is_title(lines[0]):
            raise GrammarMismatchError(
                grammar.PATTERN_TITLE.pattern, lines[0], "first line")

        entries = []
        current = []
        for line in lines[1:]:
            if grammar.is_job_header(line) and current:
                entries.append("\n".join(current))
                current = []
            current.append(line)
        if current:
            entries.append("\n".join(current))

        LOG.debug("pre-parsed %d lines into %d entries", len(lines), len(entries))
        return entries

    def parse_entry(self, entry: str) -> Job:
        lines = entry.splitlines() or [""]

        # First line (job)
        job = self._create_job(lines.pop(0))
        if not lines:
            return job
        if len(lines) + 1 < JOB_OUTPUT_DETAILS_LINES_MIN:
            raise GrammarMismatchError(
                "{} lines".format(JOB_OUTPUT_DETAILS_LINES_MIN),
                "{} lines: {}".format(len(lines) + 1, entry),
                "job entry")

        # Optional separator
        if grammar.is_separator(lines[0]):
            lines.pop(0)

        # Sub title, mandatory even without separator
        if not lines:
            raise GrammarMismatchError(
                grammar.PATTERN_SUB_TITLE.pattern, "", "sub title line")
        grammar.match_sub_title(lines.pop(0))

        # Optional trailing spool files line
        if lines and grammar.is_spool_files(lines[-1]):
            lines.pop()

        for line in lines:
            self._create_job_output(job, line)
        return job

    @staticmethod
    def _create_job(line: str) -> Job:
        fields = grammar.match_job_header(line)
        rest = fields["rest"]
        return Job(
            id=fields["id"],
            name=fields["name"],
            status=JobStatus(fields["status"]),
            owner=fields["owner"],
            jes_class=non_blank(fields["jes_class"]),
            result_code=grammar.find_result_code(rest),
            abend_code=grammar.find_abend_code(rest),
            flags=grammar.find_flags(rest),
        )

    @staticmethod
    def _create_job_output(job: Job, line: str):
        fields = grammar.match_job_output(line)
        return job.create_output(
            index=int(fields["index"]),
            name=fields["name"],
            length=int(fields["length"]),
            step=non_blank(fields["step"]),
            procedure_step=non_blank(fields["procedure_step"]),
            output_class=non_blank(fields["output_class"]),
        )


class DebuggingEntryParser(EntryParser):
    """
    Parser failing on any input, echoing what it received.

    Select it to inspect what the server actually sends.
    """

    def pre_parse(self, lines: List[str]) -> List[str]:
        raise DebuggingParserError("pre_parse", "\n".join(lines))

    def parse_entry(self, entry: str) -> Job:
        raise DebuggingParserError("parse_entry", entry)


def create_entry_parser(mode: str = PARSER_MODE_JES) -> EntryParser:
    if mode == PARSER_MODE_JES:
        return JesEntryParser()
    if mode == PARSER_MODE_DEBUG:
        return DebuggingEntryParser()
    raise ValueError("Unknown parser mode {!r}".format(mode))
