"""Tagged result returned by the billing operations."""

from typing import Any, Literal, Optional

from pydantic import BaseModel

ErrorCode = Literal["validation", "not_found", "forbidden", "database", "internal"]


class ActionResult(BaseModel):
    success: bool
    data: Any = None
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None

    @classmethod
    def ok(cls, data: Any = None) -> "ActionResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, error_code: ErrorCode) -> "ActionResult":
        return cls(success=False, error=error, error_code=error_code)
