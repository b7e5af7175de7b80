"""Domain error codes for the swaps module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    NOT_OWNER = "NOT_OWNER"
    SELF_SWAP = "SELF_SWAP"
    INVALID_STATE = "INVALID_STATE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised when input is malformed (blank title, end before start, bad id)."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.VALIDATION_ERROR, message=message)


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message=f"{entity} not found",
        )
        self.entity = entity
        self.entity_id = str(entity_id)


class NotOwnerError(DomainError):
    """Raised when the actor has no authority over the referenced record."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.NOT_OWNER, message=message)


class SelfSwapError(DomainError):
    """Raised when both slots of a swap belong to the same user."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.SELF_SWAP,
            message="Cannot swap slots with yourself",
        )


class InvalidStateError(DomainError):
    """Raised when an operation is not legal for a record's current status."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_STATE, message=message)
