"""JesSession implementation on top of ftplib."""

import ftplib
from io import BytesIO
import logging
from typing import List, Optional

from .interface import JesSession

LOG = logging.getLogger(__name__)

DEFAULT_PORT = 21


class FtpSession(JesSession):
    """
    Session talking to the z/OS FTP server.

    Negative server replies (ftplib.Error) are recorded as the last reply
    and reported as failures. Socket errors propagate.
    """

    def __init__(self, host=None, port=DEFAULT_PORT, timeout=None, ftp=None):
        self._ftp = ftp if ftp is not None else ftplib.FTP()
        self._reply = ""
        if host:
            self.connect(host, port, timeout)

    def connect(self, host, port=DEFAULT_PORT, timeout=None):
        LOG.debug("connect to %s:%s", host, port)
        if timeout is None:
            self._reply = self._ftp.connect(host, port)
        else:
            self._reply = self._ftp.connect(host, port, timeout)
        return self._reply

    def _perform(self, func, *args):
        try:
            self._reply = func(*args)
        except ftplib.Error as error:
            self._reply = str(error)
            LOG.debug("%r failed: %s", args, self._reply)
            return False
        return True

    def login(self, user, password):
        return self._perform(self._ftp.login, user, password)

    def send_filter_command(self, key, value):
        return self._perform(self._ftp.sendcmd, "SITE {}={}".format(key, value))

    def _retrlines(self, command, name_filter):
        if name_filter:
            command = "{} {}".format(command, name_filter)
        lines: List[str] = []
        if not self._perform(self._ftp.retrlines, command, lines.append):
            return None
        return lines

    def list_entries(self, name_filter=None):
        return self._retrlines("LIST", name_filter)

    def list_names(self, name_filter=None):
        return self._retrlines("NLST", name_filter)

    def retrieve_content(self, name) -> Optional[bytes]:
        chunks: List[bytes] = []
        if not self._perform(self._ftp.retrbinary, "RETR " + name, chunks.append):
            return None
        return b"".join(chunks)

    def submit_content(self, name, data):
        return self._perform(self._ftp.storlines, "STOU " + name, BytesIO(data))

    def delete_entry(self, name):
        return self._perform(self._ftp.delete, name)

    def status_lines(self):
        if not self._perform(self._ftp.sendcmd, "STAT"):
            return None
        return self._reply.splitlines()

    def last_reply_text(self):
        return self._reply

    def close(self):
        try:
            if self._ftp.sock is not None:
                self._ftp.quit()
        except (OSError, EOFError, ftplib.Error) as error:
            LOG.debug("quit failed: %s", error)
        finally:
            self._ftp.close()
