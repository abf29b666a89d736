"""Result type returned by the generation dispatcher."""

import enum
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, enum.Enum):
    """Why a dispatch did not produce a document."""

    VALIDATION = "validation"
    REQUEST = "request"
    DOWNLOAD = "download"
    BUSY = "busy"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """A failed dispatch.

    Attributes:
        message: User-facing summary of the failure.
        kind: Failure category.
        errors: Per-field validation errors, for validation failures.
    """

    message: str
    kind: ErrorKind
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_ok(self) -> bool:
        return False


Result = Ok[T] | Err
