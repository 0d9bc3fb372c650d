# app/models/results.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class ErrorKind(str, Enum):
    CONFLICT = "conflict"
    CONSTRAINT = "constraint"
    FAILURE = "failure"


class CommandResult(BaseModel):
    """
    Outcome of a write command. Commands report failures here instead of
    raising, so callers only ever inspect `success`.
    """

    success: bool
    id: Optional[int] = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None
    detail: Optional[str] = None

    @classmethod
    def ok(cls, new_id: int, message: Optional[str] = None) -> "CommandResult":
        return cls(success=True, id=new_id, message=message)

    @classmethod
    def fail(
        cls,
        error: ErrorKind,
        message: str,
        detail: Optional[str] = None,
    ) -> "CommandResult":
        return cls(success=False, error=error, message=message, detail=detail)
