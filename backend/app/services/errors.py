"""Domain errors raised by the billing services.

Routers and the action layer translate these into HTTP responses or tagged
results; services never build responses themselves.
"""


class BillingError(Exception):
    error_code = "validation"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BillingValidationError(BillingError):
    error_code = "validation"


class NotFoundError(BillingError):
    error_code = "not_found"


class PermissionDeniedError(BillingError):
    error_code = "forbidden"


class InvalidStatusTransitionError(BillingValidationError):
    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot move invoice from {current} to {requested}")
        self.current = current
        self.requested = requested
