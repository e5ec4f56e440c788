"""
ballot_node/ballot_runtime/errors.py
------------------------------------

Error types raised by the election runtime.

Every rejected call raises a subclass of ElectionError and leaves the
election untouched. The REST layer maps `code` to an HTTP status.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ErrorContext:
    """
    Optional context object for debugging / audit logs.
    """

    action: str
    reason: str
    detail: Optional[str] = None


class ElectionError(Exception):
    code = "election_error"

    def __init__(self, message: str, ctx: Optional[ErrorContext] = None):
        super().__init__(message)
        self.ctx = ctx


class Unauthorized(ElectionError):
    """Caller lacks the role the operation requires."""

    code = "unauthorized"


class InvalidPhase(ElectionError):
    """Operation attempted outside its workflow state."""

    code = "invalid_phase"


class AlreadyVoted(ElectionError):
    code = "already_voted"


class AlreadyRegistered(ElectionError):
    code = "already_registered"


class InvalidArgument(ElectionError):
    code = "invalid_argument"


class NotFound(ElectionError):
    code = "not_found"
