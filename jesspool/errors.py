"""
Error types raised by jesspool.

Every error carries an ErrorKind, so callers may either catch a specific
subclass or catch JesError and branch on ``err.kind``.
"""

from enum import Enum
from typing import List, Optional


class ErrorKind(Enum):
    """Stable error kinds."""

    GRAMMAR_MISMATCH = "grammar_mismatch"
    FIELD_INCONSISTENCY = "field_inconsistency"
    PARTIAL_RESULT = "partial_result"
    SESSION_FAILURE = "session_failure"


class JesError(Exception):
    """Base class of all jesspool errors."""

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str, *arguments):
        if arguments:
            message = message.format(*arguments)
        super().__init__(message)
        self.message = message


class GrammarMismatchError(JesError):
    """A line or block did not match its expected pattern."""

    kind = ErrorKind.GRAMMAR_MISMATCH

    def __init__(self, expected: str, received: str, description: str = "line"):
        super().__init__(
            "Expected [{}] as {}, got [{}].", expected, description, received)
        self.expected = expected
        self.received = received


class FieldInconsistencyError(JesError):
    """A Job or JobOutput was constructed with inconsistent field values."""

    kind = ErrorKind.FIELD_INCONSISTENCY


class SessionError(JesError):
    """
    The session collaborator reported a failure.

    The last reply text of the session is appended to the message.
    """

    kind = ErrorKind.SESSION_FAILURE

    def __init__(self, message: str, *arguments, reply: Optional[str] = None):
        if arguments:
            message = message.format(*arguments)
        self.reply = reply
        if reply is not None:
            message = "{} Reason: {}".format(message, reply.strip())
        super().__init__(message)


class LimitReachedError(JesError):
    """
    A listing was truncated by the server's entry limit.

    Not a parse failure: ``jobs`` holds everything parsed before the
    truncation marker was detected.
    """

    kind = ErrorKind.PARTIAL_RESULT

    def __init__(self, limit: int, jobs: List, reply: Optional[str] = None):
        message = "Listing limit of {} reached.".format(limit)
        if reply is not None:
            message = "{} Reason: {}".format(message, reply.strip())
        super().__init__(message)
        self.limit = limit
        self.jobs = list(jobs)
        self.reply = reply


class DebuggingParserError(JesError):
    """Raised unconditionally by the debugging entry parser."""

    kind = ErrorKind.GRAMMAR_MISMATCH

    def __init__(self, methodName: str, value: str):
        super().__init__("Method {} called using:\n{}", methodName, value)
        self.methodName = methodName
        self.value = value
