from __future__ import annotations

from collections.abc import Iterable


class JoblyError(Exception):
    """Base class for client-fault errors raised by the core.

    The HTTP layer turns ``status_code`` and ``message`` into the error envelope.
    """

    status_code = 400

    @property
    def message(self) -> str | list[str]:
        return str(self)


class EmptyUpdateError(JoblyError):
    def __init__(self, message: str = "No data") -> None:
        super().__init__(message)


class _MultiMessageError(JoblyError):
    def __init__(self, messages: Iterable[str]) -> None:
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))

    @property
    def message(self) -> list[str]:
        return list(self.messages)


class InvalidFilterError(_MultiMessageError):
    pass


class InvalidPayloadError(_MultiMessageError):
    pass


class NoMatchError(JoblyError):
    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"No records found with {field} matching '{value}'")


class DuplicateError(JoblyError):
    def __init__(self, resource: str, key: str) -> None:
        self.resource = resource
        self.key = key
        super().__init__(f"Duplicate {resource}: {key}")


class NotFoundError(JoblyError):
    status_code = 404

    def __init__(self, resource: str, key: str) -> None:
        self.resource = resource
        self.key = key
        super().__init__(f"No {resource}: {key}")


class UnauthorizedError(JoblyError):
    status_code = 401

    def __init__(self, message: str = "authorization token incorrect") -> None:
        super().__init__(message)
