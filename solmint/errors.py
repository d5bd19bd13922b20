"""Exception types raised by solmint.

Every failure of a mint operation surfaces as a subclass of SolmintError so
callers can catch the whole family at the orchestration boundary.
"""

from __future__ import annotations

from typing import Any


class SolmintError(Exception):
    """Base class for all solmint errors."""


class AccountNotFound(SolmintError):
    """The mint account could not be read from the ledger.

    Raised both when the query succeeds with no account and when the query
    itself fails. In the latter case the transport error is kept on ``cause``.
    """

    def __init__(self, address: Any, cause: BaseException | None = None) -> None:
        self.address = address
        self.cause = cause
        message = f"Account not found: {address}"
        if cause is not None:
            message += f" ({type(cause).__name__}: {cause})"
        super().__init__(message)


class DecodeError(SolmintError):
    """Account bytes do not parse as a valid SPL mint record."""


class ConversionError(SolmintError):
    """A UI amount cannot be represented exactly in base units."""


class InstructionBuildError(SolmintError):
    """The token program instruction could not be constructed."""


class ExecutionError(SolmintError):
    """Submitting or confirming a transaction failed."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class InputValidationError(SolmintError, ValueError):
    """A node input field is missing or malformed."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"Invalid input '{field}': {message}")


class UnknownNodeError(SolmintError, KeyError):
    """No node factory is registered under the requested name."""

    def __str__(self) -> str:
        return f"Unknown node: {self.args[0]}"
