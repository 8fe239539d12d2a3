"""
Tests for JesClient, using a mocked session.
"""

from datetime import timedelta
import unittest

from mock import MagicMock, call

from jesspool.domain import FILTER_WILDCARD, Job, JobStatus
from jesspool.errors import ErrorKind, JesError, LimitReachedError, SessionError
from jesspool.parser import DebuggingEntryParser
from jesspool.service_layer import JesClient
from jesspool.session import JesSession

from .helpers import ftpInputLines

OK_REPLY = "250 List completed successfully."
LIMIT_REPLY = (
    "250-JESENTRYLIMIT OF 2 REACHED.  ADDITIONAL ENTRIES NOT DISPLAYED\n"
    + OK_REPLY)
NO_JOBS_REPLY = "550 NO JOBS FOUND FOR JABC*"

SUBMIT_REPLY = (
    "250-IT IS KNOWN TO JES AS JOB01234\n"
    "250 Transfer completed successfully.")

JCL = """\
//MYJOB    JOB (ACCT),'TEST',CLASS=A
//STEP1    EXEC PGM=IEFBR14
"""


def _searchJob(jobId="JOB00054"):
    return Job(id=jobId, name=FILTER_WILDCARD, status=JobStatus.ALL,
               owner=FILTER_WILDCARD)


class ClientTestMixin(object):
    def setUp(self):
        self.session = MagicMock(spec=JesSession)
        self.session.send_filter_command.return_value = True
        self.session.last_reply_text.return_value = OK_REPLY
        self.client = JesClient(self.session)


class TestFilters(ClientTestMixin, unittest.TestCase):
    """Test the filter directives sent before listings."""

    def test_set_jes_filters(self):
        self.client.set_jes_filters("jabc*", JobStatus.OUTPUT, "USER1", 10)
        self.assertEqual(
            [call("JESJOBName", "jabc*"),
             call("JESOwner", "USER1"),
             call("JESSTatus", "OUTPUT"),
             call("JESENTRYLIMIT", "10")],
            self.session.send_filter_command.call_args_list)

    def test_limit_out_of_range(self):
        for limit in (0, 1025):
            with self.assertRaises(ValueError):
                self.client.set_jes_filters("*", JobStatus.ALL, "*", limit)
        self.session.send_filter_command.assert_not_called()

    def test_filter_rejected(self):
        self.session.send_filter_command.side_effect = [True, False]
        self.session.last_reply_text.return_value = "501 Invalid SITE parameter"
        with self.assertRaises(SessionError) as ctx:
            self.client.set_jes_filters("*", JobStatus.ALL, "NOBODY", 10)
        self.assertEqual(ErrorKind.SESSION_FAILURE, ctx.exception.kind)
        self.assertIn("job owner filter", str(ctx.exception))
        self.assertIn("Reason: 501 Invalid SITE parameter", str(ctx.exception))
        self.assertEqual(2, self.session.send_filter_command.call_count)

    def test_transport_error(self):
        self.session.send_filter_command.side_effect = EOFError()
        with self.assertRaises(SessionError):
            self.client.set_jes_filters("*", JobStatus.ALL, "*", 10)


class TestLogin(ClientTestMixin, unittest.TestCase):
    def test_login(self):
        self.session.login.return_value = True
        self.client.login("user1", "secret")
        self.session.login.assert_called_once_with("user1", "secret")
        self.session.send_filter_command.assert_called_once_with(
            "FILEtype", "JES")
        self.assertEqual("USER1", self.client.jes_owner)

    def test_login_fails(self):
        self.session.login.return_value = False
        self.session.last_reply_text.return_value = "530 PASS command failed"
        with self.assertRaises(SessionError) as ctx:
            self.client.login("user1", "wrong")
        self.assertIn("530 PASS command failed", str(ctx.exception))
        self.session.send_filter_command.assert_not_called()

    def test_jes_mode_fails(self):
        self.session.login.return_value = True
        self.session.send_filter_command.return_value = False
        with self.assertRaises(SessionError):
            self.client.login("user1", "secret")

    def test_context_closes_session(self):
        with self.client as client:
            self.assertIs(self.client, client)
        self.session.close.assert_called_once_with()


class TestList(ClientTestMixin, unittest.TestCase):
    """Test listing jobs."""

    def test_list(self):
        self.session.list_names.return_value = ["JOB00001", "JOB00002"]
        jobs = self.client.list("JABC*", JobStatus.INPUT, "USER1", 5)

        self.assertEqual(["JOB00001", "JOB00002"], [job.id for job in jobs])
        for job in jobs:
            self.assertEqual("JABC*", job.name)
            self.assertEqual(JobStatus.INPUT, job.status)
            self.assertEqual("USER1", job.owner)
        self.session.list_names.assert_called_once_with(None)
        self.session.send_filter_command.assert_any_call("JESENTRYLIMIT", "5")

    def test_list_no_jobs(self):
        self.session.list_names.return_value = None
        self.session.last_reply_text.return_value = NO_JOBS_REPLY
        self.assertEqual([], self.client.list("JABC*"))

    def test_list_failed(self):
        self.session.list_names.return_value = None
        self.session.last_reply_text.return_value = "425 Can't open data connection."
        with self.assertRaises(SessionError) as ctx:
            self.client.list("JABC*")
        self.assertIn("425", str(ctx.exception))

    def test_list_limit_reached(self):
        self.session.list_names.return_value = ["JOB00001", "JOB00002"]
        self.session.last_reply_text.return_value = LIMIT_REPLY
        with self.assertRaises(LimitReachedError) as ctx:
            self.client.list("*", limit=2)
        self.assertEqual(2, ctx.exception.limit)
        self.assertEqual(["JOB00001", "JOB00002"],
                         [job.id for job in ctx.exception.jobs])

    def test_list_filled(self):
        self.session.list_entries.return_value = ftpInputLines("rc.txt")
        jobs = self.client.list_filled("*", JobStatus.OUTPUT)
        self.assertEqual(5, len(jobs))
        self.assertEqual("JOB00005", jobs[0].id)
        self.assertEqual(0, jobs[0].result_code)
        self.session.list_entries.assert_called_once_with(None)

    def test_list_filled_limit_reached(self):
        self.session.list_entries.return_value = ftpInputLines("abend.txt")
        self.session.last_reply_text.return_value = LIMIT_REPLY
        with self.assertRaises(LimitReachedError) as ctx:
            self.client.list_filled("*", limit=3)
        self.assertEqual(3, len(ctx.exception.jobs))
        self.assertEqual("622", ctx.exception.jobs[0].abend_code)

    def test_list_filled_no_jobs(self):
        self.session.list_entries.return_value = None
        self.session.last_reply_text.return_value = NO_JOBS_REPLY
        self.assertEqual([], self.client.list_filled("JABC*"))

    def test_list_filled_debug_parser(self):
        client = JesClient(self.session, parser=DebuggingEntryParser())
        self.session.list_entries.return_value = ftpInputLines("simple.txt")
        with self.assertRaises(JesError) as ctx:
            client.list_filled("*")
        self.assertEqual(ErrorKind.GRAMMAR_MISMATCH, ctx.exception.kind)


class TestJobOperations(ClientTestMixin, unittest.TestCase):
    """Test operations on a single job."""

    def test_exists(self):
        job = Job(id="JOB00001", name="JABC012", status=JobStatus.INPUT,
                  owner="USER1")
        self.session.list_names.return_value = ["JOB00001"]
        self.assertTrue(self.client.exists(job, JobStatus.ACTIVE))
        self.session.list_names.assert_called_once_with("JOB00001")
        self.assertEqual(
            [call("JESJOBName", "JABC012"),
             call("JESOwner", "USER1"),
             call("JESSTatus", "ACTIVE"),
             call("JESENTRYLIMIT", "2")],
            self.session.send_filter_command.call_args_list)

    def test_not_exists(self):
        self.session.list_names.return_value = None
        self.session.last_reply_text.return_value = (
            "550 NO JOBS FOUND FOR NLST JOB00001")
        self.assertFalse(self.client.exists(_searchJob("JOB00001"),
                                            JobStatus.INPUT))

    def test_exists_ambiguous(self):
        self.session.list_names.return_value = ["JOB00001", "JOB00001"]
        with self.assertRaises(JesError):
            self.client.exists(_searchJob("JOB00001"), JobStatus.INPUT)

    def test_get_job_details(self):
        self.session.list_entries.return_value = ftpInputLines(
            "job-output-byte-count.txt")
        job = self.client.get_job_details(_searchJob())

        self.assertEqual("JOB00054", job.id)
        self.assertEqual(5, len(job.outputs))
        self.session.list_entries.assert_called_once_with("JOB00054")
        self.session.send_filter_command.assert_any_call("JESSTatus", "ALL")

    def test_get_job_details_missing(self):
        self.session.list_entries.return_value = None
        self.session.last_reply_text.return_value = NO_JOBS_REPLY
        self.assertIsNone(self.client.get_job_details(_searchJob()))

    def test_retrieve(self):
        job = Job(id="JOB00054", name="USER1", status=JobStatus.OUTPUT,
                  owner="USER1")
        output = job.create_output(2, "JESJCL", 526)
        self.session.retrieve_content.return_value = b"//USER1 JOB\n"
        self.assertEqual("//USER1 JOB\n", self.client.retrieve(output))
        self.session.retrieve_content.assert_called_once_with("JOB00054.2")

    def test_retrieve_failed(self):
        job = Job(id="JOB00054", name="USER1", status=JobStatus.OUTPUT,
                  owner="USER1")
        output = job.create_output(2, "JESJCL", 526)
        self.session.retrieve_content.return_value = None
        self.session.last_reply_text.return_value = "550 Retrieve failed"
        with self.assertRaises(SessionError) as ctx:
            self.client.retrieve(output)
        self.assertIn("JOB00054.JESJCL", str(ctx.exception))

    def test_retrieve_outputs(self):
        self.session.list_entries.return_value = ftpInputLines(
            "job-output-rec-count.txt")
        self.session.retrieve_content.side_effect = [b"one", b"two", b"three"]

        contents = self.client.retrieve_outputs(_searchJob("JOB00061"))

        self.assertEqual(["one", "two", "three"], list(contents.values()))
        self.assertEqual(["JESMSGLG", "JESJCL", "JESYSMSG"],
                         [output.name for output in contents])
        self.assertEqual(
            [call("JOB00061.1"), call("JOB00061.2"), call("JOB00061.3")],
            self.session.retrieve_content.call_args_list)

    def test_retrieve_outputs_missing_job(self):
        self.session.list_entries.return_value = None
        self.session.last_reply_text.return_value = NO_JOBS_REPLY
        with self.assertRaises(JesError):
            self.client.retrieve_outputs(_searchJob())

    def test_delete(self):
        self.session.delete_entry.return_value = True
        self.client.delete(_searchJob())
        self.session.delete_entry.assert_called_once_with("JOB00054")

    def test_delete_failed(self):
        self.session.delete_entry.return_value = False
        with self.assertRaises(SessionError):
            self.client.delete(_searchJob())

    def test_wait_for_finished_job(self):
        job = Job(id="JOB00054", name="USER1", status=JobStatus.OUTPUT,
                  owner="USER1")
        wait = MagicMock()
        self.assertTrue(self.client.wait_for(job, timedelta(seconds=1),
                                             timedelta(seconds=1), wait=wait))
        wait.assert_not_called()
        self.session.list_names.assert_not_called()

    def test_wait_for_active_job(self):
        job = Job(id="JOB00099", name="JABC999", status=JobStatus.ACTIVE,
                  owner="USER1")
        self.session.list_names.side_effect = [["JOB00099"], None]
        self.session.last_reply_text.return_value = NO_JOBS_REPLY
        wait = MagicMock()
        self.assertTrue(self.client.wait_for(
            job, timedelta(seconds=1), timedelta(minutes=1), wait=wait,
            clock=lambda: 0.0))
        wait.assert_called_once_with(timedelta(seconds=1))


class TestSubmit(ClientTestMixin, unittest.TestCase):
    def setUp(self):
        super().setUp()
        self.client.jes_owner = "user1"

    def test_submit(self):
        self.session.submit_content.return_value = True
        self.session.last_reply_text.return_value = SUBMIT_REPLY
        job = self.client.submit(JCL)

        self.assertEqual("JOB01234", job.id)
        self.assertEqual("MYJOB", job.name)
        self.assertEqual(JobStatus.INPUT, job.status)
        self.assertEqual("USER1", job.owner)
        self.session.submit_content.assert_called_once_with(
            "JesClient.jcl", JCL.encode("utf-8"))

    def test_submit_without_job_card(self):
        self.session.submit_content.return_value = True
        self.session.last_reply_text.return_value = SUBMIT_REPLY
        job = self.client.submit("")
        self.assertEqual(FILTER_WILDCARD, job.name)

    def test_submit_failed(self):
        self.session.submit_content.return_value = False
        self.session.last_reply_text.return_value = "550 Submit failed"
        with self.assertRaises(SessionError):
            self.client.submit(JCL)

    def test_submit_without_id(self):
        self.session.submit_content.return_value = True
        self.session.last_reply_text.return_value = "250 Transfer completed."
        with self.assertRaises(SessionError) as ctx:
            self.client.submit(JCL)
        self.assertIn("could not extract its ID", str(ctx.exception))


class TestServerProperties(ClientTestMixin, unittest.TestCase):
    STAT_LINES = [
        "211-Server FTP talking to host 10.1.2.3, port 1234",
        "211-SERVER SITE VARIABLE JESENTRYLIMIT IS SET TO 1024",
        "211-FILETYPE IS JES.",
        "211-TIMER INACTIVITY IS 300",
        "211-Automatic recall of migrated data sets.",
        "211 *** end of status ***",
    ]

    def test_properties(self):
        self.session.status_lines.return_value = self.STAT_LINES
        self.assertEqual(
            {"JESENTRYLIMIT": "1024", "FILETYPE": "JES", "INACTIVITY": "300"},
            self.client.get_server_properties())

    def test_duplicate_key(self):
        self.session.status_lines.return_value = self.STAT_LINES + [
            "211-FILETYPE IS SEQ"]
        with self.assertRaises(JesError):
            self.client.get_server_properties()

    def test_stat_failed(self):
        self.session.status_lines.return_value = None
        with self.assertRaises(SessionError):
            self.client.get_server_properties()
