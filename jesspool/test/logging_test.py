import logging
import os
import tempfile
import unittest

from mock import patch

from jesspool.logging import getLogger, setup


class TestLoggingSetup(unittest.TestCase):
    def setUp(self):
        logging.root.handlers = []
        logging.root.setLevel(logging.WARNING)

    def tearDown(self):
        for handler in logging.root.handlers:
            handler.close()
        logging.root.handlers = []

    def fileHandlers(self):
        return [h for h in logging.root.handlers
                if isinstance(h, logging.FileHandler)]

    def test_setup_no_debug(self):
        """Without --debug only errors reach stderr"""
        with tempfile.TemporaryDirectory() as tmpdir:
            setup(tmpdir, "jesspool-debug", debug=False)
            self.assertEqual(logging.ERROR, logging.root.level)
            self.assertEqual([], self.fileHandlers())
            self.assertEqual([], os.listdir(tmpdir))

    def test_setup_debug_true(self):
        """--debug writes everything to <logDir>/<debugLogFileName>"""
        with tempfile.TemporaryDirectory() as tmpdir:
            setup(tmpdir, "jesspool-debug", debug=True)
            self.assertEqual(logging.DEBUG, logging.root.level)
            getLogger("jesspool.test").debug("listed %d jobs", 3)
            for handler in self.fileHandlers():
                handler.flush()
            with open(os.path.join(tmpdir, "jesspool-debug")) as logFp:
                self.assertIn("listed 3 jobs", logFp.read())

    def test_setup_debug_with_file(self):
        """--debug FILE writes to FILE instead of the state directory"""
        with tempfile.TemporaryDirectory() as tmpdir:
            customLog = os.path.join(tmpdir, "session.log")
            setup(os.path.join(tmpdir, "log"), "jesspool-debug",
                  debug=customLog)
            self.assertEqual(1, len(self.fileHandlers()))
            self.assertTrue(os.path.exists(customLog))
            self.assertFalse(os.path.exists(os.path.join(tmpdir, "log")))

    def test_setup_debug_with_expanduser(self):
        """--debug ~/FILE is relative to the home directory"""
        with tempfile.TemporaryDirectory() as tmpdir:
            with patch.dict(os.environ, {'HOME': tmpdir}):
                setup(tmpdir, "jesspool-debug", debug="~/expanded.log")
            self.assertTrue(
                os.path.exists(os.path.join(tmpdir, "expanded.log")))
