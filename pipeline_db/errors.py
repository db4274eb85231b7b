"""
Exceptions raised by the pipeline dictionary database.
"""

from __future__ import annotations

from collections.abc import Sequence


class PipelineDatabaseError(Exception):
    """Base exception for dictionary database failures."""


class ConfigError(PipelineDatabaseError):
    """Raised when a configuration resource is missing or malformed."""


class DatabaseExistsError(PipelineDatabaseError):
    """Raised when creating a database whose file already exists."""


class NotConnectedError(PipelineDatabaseError):
    """Raised when an operation needs a live connection and there is none."""


class UnknownDictionaryError(PipelineDatabaseError, LookupError):
    """
    Raised when a dictionary name is not a registered schema source.
    """

    def __init__(self, *, name: str, permitted: Sequence[str]) -> None:
        super().__init__(
            f"Unknown dictionary '{name}'. Permitted dictionaries are "
            f"[{', '.join(permitted)}]"
        )
        self.name = name
        self.permitted = tuple(permitted)


class TransactionError(PipelineDatabaseError):
    """
    Base for failures of work run inside a transaction.

    The error raised by the work is available as `original`.
    """

    def __init__(self, message: str, *, original: BaseException) -> None:
        super().__init__(message)
        self.original = original


class RollbackSucceededError(TransactionError):
    """Raised when work failed and the rollback restored a consistent state."""


class RollbackFailedError(TransactionError):
    """
    Raised when work failed and the rollback itself failed.

    Data consistency is no longer guaranteed; callers should halt.
    """

    def __init__(
        self,
        message: str,
        *,
        original: BaseException,
        rollback_error: BaseException,
    ) -> None:
        super().__init__(message, original=original)
        self.rollback_error = rollback_error


class NestedTransactionError(PipelineDatabaseError):
    """Raised when a transaction is started while another is in progress."""
