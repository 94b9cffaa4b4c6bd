"""
Tagged result type returned by each per-ticker pipeline stage.

A stage either yields Ok(value) or Failed(failure); the report pipeline
routes on the tag instead of catching exceptions at an arbitrary depth.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class FailureKind(str, Enum):
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    MALFORMED_RESPONSE = "malformed_response"
    EMPTY_RESPONSE = "empty_response"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class StageFailure:
    stage: str
    kind: FailureKind
    message: str


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failed:
    failure: StageFailure

    @property
    def ok(self) -> bool:
        return False


StageResult = Union[Ok[T], Failed]
