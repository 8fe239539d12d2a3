"""
Session layer for reaching the JES spool.

This package contains the session interface the client depends on and
its ftplib based implementation.
"""

from .ftp_session import FtpSession
from .interface import JesSession

__all__ = ["FtpSession", "JesSession"]
