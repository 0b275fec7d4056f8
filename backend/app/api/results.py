"""Translate billing results and errors into HTTP responses."""

from typing import Any

from fastapi import HTTPException, status

from backend.app.schemas.result import ActionResult
from backend.app.services.errors import BillingError

STATUS_BY_ERROR_CODE = {
    "validation": status.HTTP_400_BAD_REQUEST,
    "not_found": status.HTTP_404_NOT_FOUND,
    "forbidden": status.HTTP_403_FORBIDDEN,
    "database": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "internal": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def unwrap(result: ActionResult) -> Any:
    if result.success:
        return result.data
    raise HTTPException(
        status_code=STATUS_BY_ERROR_CODE.get(result.error_code, status.HTTP_400_BAD_REQUEST),
        detail=result.error,
    )


def to_http_error(exc: BillingError) -> HTTPException:
    return HTTPException(status_code=STATUS_BY_ERROR_CODE.get(exc.error_code, status.HTTP_400_BAD_REQUEST), detail=exc.message)
