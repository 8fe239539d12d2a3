"""
Session interface for talking to a JES spool.

This module defines the abstract interface the client relies on. An
implementation owns the transport: connecting, issuing listing and
retrieval commands, and remembering the server's last reply.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class JesSession(ABC):
    """
    Abstract transport session.

    Failures reported by the server are signalled by returning False or
    None; the reply explaining them is available from last_reply_text().
    Transport errors (sockets, EOF) are raised as OSError or EOFError.
    """

    @abstractmethod
    def login(self, user: str, password: str) -> bool:
        """
        Authenticate the session.

        Args:
            user: User name
            password: Password

        Returns:
            True on success
        """

    @abstractmethod
    def send_filter_command(self, key: str, value: str) -> bool:
        """
        Send a ``KEY=value`` directive applying to following listings.

        Returns:
            True if the server accepted the directive
        """

    @abstractmethod
    def list_entries(self, name_filter: Optional[str] = None) -> Optional[List[str]]:
        """
        List spool entries in long format.

        Args:
            name_filter: Optional job id to list

        Returns:
            Raw physical lines of the listing, or None if it failed
        """

    @abstractmethod
    def list_names(self, name_filter: Optional[str] = None) -> Optional[List[str]]:
        """
        List the ids of spool entries.

        Returns:
            Job ids, or None if the listing failed
        """

    @abstractmethod
    def retrieve_content(self, name: str) -> Optional[bytes]:
        """
        Retrieve the content of a job output.

        Args:
            name: Output file name, e.g. ``JOB00054.1``

        Returns:
            The raw content, or None if the retrieval failed
        """

    @abstractmethod
    def submit_content(self, name: str, data: bytes) -> bool:
        """
        Store ``data`` as a uniquely named file, submitting it as a job.

        Returns:
            True on success; the reply then contains the job id
        """

    @abstractmethod
    def delete_entry(self, name: str) -> bool:
        """
        Delete (purge) a spool entry.

        Returns:
            True on success
        """

    @abstractmethod
    def status_lines(self) -> Optional[List[str]]:
        """
        Query the server status.

        Returns:
            The reply lines, or None if the command failed
        """

    @abstractmethod
    def last_reply_text(self) -> str:
        """Return the full text of the server's last reply."""

    @abstractmethod
    def close(self) -> None:
        """Log out and disconnect."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _ = (exc_type, exc_val, exc_tb)
        self.close()
        return False
