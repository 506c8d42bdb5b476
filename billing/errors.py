from typing import Any, Optional


class PricingError(Exception):
    """Base class for errors raised by the pricing services."""


class ValidationError(PricingError, ValueError):
    """A user-entered number was rejected before reaching a calculator."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value

    def to_dict(self):
        return {"detail": self.message, "field": self.field}
