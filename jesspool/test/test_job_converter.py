"""
Tests for the Job dictionary converters.
"""

import unittest

import simplejson as json

from jesspool.adapters import job_from_dict, job_to_dict
from jesspool.domain import Job, JobFlag, JobStatus
from jesspool.errors import FieldInconsistencyError


class TestJobConverter(unittest.TestCase):
    def setUp(self):
        self.job = Job(id="JOB00054", name="USER1", status=JobStatus.OUTPUT,
                       owner="USER1", jes_class="A", result_code=0,
                       flags=[JobFlag.HELD, JobFlag.DUP])
        self.job.create_output(1, "JESMSGLG", 1200, step="JESE",
                               output_class="H")
        self.job.create_output(5, "SYSPRINT", 209, step="STEP57",
                               procedure_step="COMPILE", output_class="A")

    def test_job_to_dict(self):
        data = job_to_dict(self.job)
        self.assertEqual("JOB00054", data["id"])
        self.assertEqual("OUTPUT", data["status"])
        self.assertEqual(0, data["result_code"])
        self.assertIsNone(data["abend_code"])
        self.assertEqual(["DUP", "HELD"], data["flags"])
        self.assertEqual(
            {"index": 5, "name": "SYSPRINT", "length": 209, "step": "STEP57",
             "procedure_step": "COMPILE", "output_class": "A"},
            data["outputs"][1])

    def test_json_compatible(self):
        data = json.loads(json.dumps(job_to_dict(self.job)))
        self.assertEqual(job_to_dict(self.job), data)

    def test_job_from_dict(self):
        job = job_from_dict(job_to_dict(self.job))
        self.assertEqual(self.job, job)
        self.assertEqual(self.job.flags, job.flags)
        self.assertEqual(self.job.outputs, job.outputs)
        self.assertEqual("COMPILE", job.get_output("SYSPRINT").procedure_step)

    def test_job_from_minimal_dict(self):
        job = job_from_dict({"id": "JOB00001", "name": "JABC012",
                             "status": "INPUT", "owner": "USER1"})
        self.assertIsNone(job.jes_class)
        self.assertEqual(frozenset(), job.flags)
        self.assertEqual((), job.outputs)

    def test_job_from_inconsistent_dict(self):
        data = job_to_dict(self.job)
        data["status"] = "INPUT"
        with self.assertRaises(FieldInconsistencyError):
            job_from_dict(data)
