"""
Operations on a JES spool.

This module contains the JesClient class which sends filter directives
through a JesSession, parses what comes back and applies the listing
limit guard.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import timedelta
import logging
import re
import time
from typing import Callable, Dict, List, Optional

from jesspool.domain import FILTER_WILDCARD, Job, JobOutput, JobStatus
from jesspool.domain.fields import normalize
from jesspool.errors import JesError, SessionError
from jesspool.parser import EntryParser, JesEntryParser
from jesspool.session import JesSession
from jesspool.utils import autoDecode

from .limits import list_name_results, throw_if_limit_reached
from .waiting import sleep, wait_for_status

LOG = logging.getLogger(__name__)

LIST_LIMIT_MIN = 1
LIST_LIMIT_MAX = 1024
LIST_LIMIT_EXISTS = 2

FILTER_KEY_NAME = "JESJOBName"
FILTER_KEY_OWNER = "JESOwner"
FILTER_KEY_STATUS = "JESSTatus"
FILTER_KEY_LIMIT = "JESENTRYLIMIT"

SUBMIT_REMOTE_FILE_NAME = "JesClient.jcl"

PATTERN_SUBMIT_ID = re.compile(
    r"^250-IT IS KNOWN TO JES AS (?P<id>\S+)", re.MULTILINE)

PATTERN_JCL_JOB_NAME = re.compile(r"^//\s*(?P<name>\S+)")

PATTERN_STATUS = re.compile(
    r"^211-(SERVER SITE VARIABLE |TIMER )?(?P<key>\S+)( VALUE)? IS "
    r"(SET TO )?(?P<value>\S+?)\.?$")


class JesClient:
    """
    Client for the JES spool, working on top of a JesSession.

    Listing operations first send the name, owner, status and limit
    filters, then list and parse. Session failures are raised as
    SessionError including the server's reply.
    """

    def __init__(
        self,
        session: JesSession,
        parser: Optional[EntryParser] = None,
        jes_owner: str = FILTER_WILDCARD,
    ):
        """
        Initialize client.

        Args:
            session: Transport session, already connected
            parser: Listing parser (JesEntryParser if not provided)
            jes_owner: Owner used for submitted jobs
        """
        self.session = session
        self.parser = parser or JesEntryParser()
        self._jes_owner = normalize(jes_owner)

    @property
    def jes_owner(self) -> str:
        return self._jes_owner

    @jes_owner.setter
    def jes_owner(self, owner: str) -> None:
        self._jes_owner = normalize(owner)

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _ = (exc_type, exc_val, exc_tb)
        self.close()
        return False

    @contextmanager
    def _session_call(self, description: str):
        try:
            yield
        except (OSError, EOFError) as error:
            LOG.debug("%s failed", description, exc_info=True)
            raise SessionError("{} failed: {}", description, error) from error

    def _failed(self, message: str, *arguments) -> SessionError:
        return SessionError(
            message, *arguments, reply=self.session.last_reply_text())

    def login(self, user: str, password: str) -> None:
        """Log in, use ``user`` as owner and enter JES mode."""
        with self._session_call("Login"):
            success = self.session.login(user, password)
        if not success:
            raise self._failed("Could not login user [{}].", user)
        self.jes_owner = user
        self.enter_jes_mode()

    def enter_jes_mode(self) -> None:
        with self._session_call("Setting JES mode"):
            success = self.session.send_filter_command("FILEtype", "JES")
        if not success:
            raise self._failed("Failed setting JES mode.")

    def set_jes_filters(
        self, name_filter: str, status: JobStatus, owner_filter: str, limit: int
    ) -> None:
        """Send the filters applying to the next listing."""
        if not LIST_LIMIT_MIN <= limit <= LIST_LIMIT_MAX:
            raise ValueError(
                "Limit {} out of range. Minimum/Maximum: {}/{}".format(
                    limit, LIST_LIMIT_MIN, LIST_LIMIT_MAX))

        directives = [
            (FILTER_KEY_NAME, name_filter, "job name filter"),
            (FILTER_KEY_OWNER, owner_filter, "job owner filter"),
            (FILTER_KEY_STATUS, status.value, "job status filter"),
            (FILTER_KEY_LIMIT, str(limit), "entry limit"),
        ]
        for key, value, description in directives:
            LOG.debug("filter %s=%s", key, value)
            with self._session_call("Setting JES " + description):
                success = self.session.send_filter_command(key, value)
            if not success:
                raise self._failed(
                    "Failed setting JES {} to [{}].", description, value)

    def _list_names(self, name_filter: Optional[str], description: str) -> List[str]:
        with self._session_call(description):
            names = self.session.list_names(name_filter)
        ids = list_name_results(names, self.session.last_reply_text())
        if ids is None:
            raise self._failed(
                "{} failed. Probably no data connection could be opened.",
                description)
        return ids

    def list(
        self,
        name_filter: str,
        status: JobStatus = JobStatus.ALL,
        owner_filter: str = FILTER_WILDCARD,
        limit: int = LIST_LIMIT_MAX,
    ) -> List[Job]:
        """
        List the ids of matching jobs.

        The returned jobs carry the filter values as name, status and owner.

        Raises:
            LimitReachedError: if more than ``limit`` jobs match
        """
        self.set_jes_filters(name_filter, status, owner_filter, limit)
        ids = self._list_names(None, "Retrieving the list of job IDs")
        jobs = [Job(id=job_id, name=name_filter, status=status, owner=owner_filter)
                for job_id in ids]
        return throw_if_limit_reached(
            self.session.last_reply_text(), limit, jobs)

    def list_filled(
        self,
        name_filter: str,
        status: JobStatus = JobStatus.ALL,
        owner_filter: str = FILTER_WILDCARD,
        limit: int = LIST_LIMIT_MAX,
    ) -> List[Job]:
        """
        List matching jobs including all details and outputs.

        Raises:
            LimitReachedError: if more than ``limit`` jobs match
        """
        self.set_jes_filters(name_filter, status, owner_filter, limit)
        jobs = self._list_entries(None, "Retrieving the list of jobs")
        LOG.debug("listed %d jobs", len(jobs))
        return throw_if_limit_reached(
            self.session.last_reply_text(), limit, jobs)

    def _list_entries(self, name_filter: Optional[str], description: str) -> List[Job]:
        with self._session_call(description):
            lines = self.session.list_entries(name_filter)
        if lines is None:
            if list_name_results(None, self.session.last_reply_text()) is not None:
                return []
            raise self._failed(
                "{} failed. Probably no data connection could be opened.",
                description)
        return self.parser.parse(lines)

    def exists(self, job: Job, status: JobStatus) -> bool:
        """Check whether ``job`` exists with ``status``."""
        self.set_jes_filters(job.name, status, job.owner, LIST_LIMIT_EXISTS)
        ids = self._list_names(
            job.id, "Retrieving job [{}]".format(job.id))
        return _single(ids, job.id) is not None

    def get_job_details(self, job: Job) -> Optional[Job]:
        """Return an up-to-date, fully parsed copy of ``job`` or None."""
        self.set_jes_filters(job.name, JobStatus.ALL, job.owner, LIST_LIMIT_MAX)
        jobs = self._list_entries(
            job.id, "Retrieving job details of [{}]".format(job.id))
        return _single(jobs, job.id)

    def retrieve(self, output: JobOutput) -> str:
        """Return the decoded content of ``output``."""
        with self._session_call("Retrieving " + output.file_name):
            content = self.session.retrieve_content(output.file_name)
        if content is None:
            raise self._failed(
                "Could not retrieve data of job output [{}.{}].",
                output.job_id, output.name)
        return autoDecode(content)

    def retrieve_outputs(self, job: Job) -> Dict[JobOutput, str]:
        """
        Return the content of all outputs of ``job``, in index order.

        Job details are fetched first if ``job`` carries no outputs.
        """
        if not job.outputs:
            details = self.get_job_details(job)
            if details is None:
                raise JesError("Job [{}] is not available.", job.id)
            if not details.outputs:
                return {}
            return self.retrieve_outputs(details)
        return {output: self.retrieve(output) for output in job.outputs}

    def submit(self, jcl: str) -> Job:
        """
        Submit ``jcl`` and return the job in status INPUT.

        The job name is taken from the first JCL card, if any.
        """
        with self._session_call("Submitting JCL"):
            success = self.session.submit_content(
                SUBMIT_REMOTE_FILE_NAME, jcl.encode("utf-8"))
        if not success:
            raise self._failed("Submitting JCL failed.")

        match = PATTERN_SUBMIT_ID.search(self.session.last_reply_text())
        if match is None:
            raise self._failed("Started job, but could not extract its ID.")
        name_match = PATTERN_JCL_JOB_NAME.search(jcl)
        name = name_match.group("name") if name_match else FILTER_WILDCARD

        job = Job(id=match.group("id"), name=name, status=JobStatus.INPUT,
                  owner=self.jes_owner)
        LOG.debug("submitted %s", job)
        return job

    def delete(self, job: Job) -> None:
        with self._session_call("Deleting job [{}]".format(job.id)):
            success = self.session.delete_entry(job.id)
        if not success:
            raise self._failed("Job [{}] could not be deleted.", job.id)

    def get_server_properties(self) -> Dict[str, str]:
        """Return the server's site variables as reported by STAT."""
        with self._session_call("Executing STAT command"):
            lines = self.session.status_lines()
        if lines is None:
            raise self._failed("Failed executing STAT command.")

        properties: Dict[str, str] = {}
        for line in lines:
            match = PATTERN_STATUS.match(line)
            if match is None:
                continue
            key = match.group("key")
            if key in properties:
                raise JesError("Found duplicate status key \"{}\".", key)
            properties[key] = match.group("value")
        return properties

    # pylint: disable-next=too-many-arguments
    def wait_for(
        self,
        job: Job,
        waiting: timedelta,
        timeout: timedelta,
        wait: Callable[[timedelta], None] = sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> bool:
        """
        Wait until ``job`` reached status OUTPUT.

        Returns:
            False if ``timeout`` was exceeded
        """
        return wait_for_status(job, self.exists, waiting, timeout, wait, clock)


def _single(values, job_id):
    if not values:
        return None
    if len(values) > 1:
        raise JesError(
            "Expected a single entry for job [{}], got {}.", job_id, len(values))
    return values[0]
