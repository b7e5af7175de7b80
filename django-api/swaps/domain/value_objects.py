"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from datetime import datetime
from typing import Self
from uuid import UUID, uuid4


@dataclass(frozen=True)
class UserId:
    """Unique identifier for a User."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SwapRequestId:
    """Unique identifier for a SwapRequest."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TimeSlot:
    """A calendar interval whose end lies strictly after its start."""

    starts_at: datetime
    ends_at: datetime

    def __post_init__(self) -> None:
        if (self.starts_at.tzinfo is None) != (self.ends_at.tzinfo is None):
            raise ValueError("Start and end must both include a timezone or both omit it")
        if self.ends_at <= self.starts_at:
            raise ValueError("End time must be after start time")


@dataclass(frozen=True)
class EmailAddress:
    """Lower-cased email address with a single local@domain split."""

    value: str

    def __post_init__(self) -> None:
        local, sep, domain = self.value.partition("@")
        if not sep or not local or not domain or "@" in domain:
            raise ValueError("Invalid email address")
        if self.value != self.value.strip().lower():
            raise ValueError("Email address must be normalized")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value.strip().lower())

    def __str__(self) -> str:
        return self.value
