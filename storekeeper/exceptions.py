"""
Exceptions for Storekeeper.

All errors are StoreError with a structured code for programmatic handling.
The codes double as the error taxonomy of the callable operations.
"""

from decimal import Decimal
from typing import Any


class BaseError(Exception):
    """
    Exception carrying a machine-readable code, a message and context data.

    Subclasses provide ``_default_messages`` so callers can raise with just
    a code and keyword context:

        raise StoreError('NOT_FOUND', product_id=42)
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class StoreError(BaseError):
    """
    Structured exception for stock, order and notification operations.

    Usage:
        try:
            inventory.apply_change(product_id, 5, 'decrement')
        except StoreError as e:
            if e.code == 'NOT_FOUND':
                print(f"No product {e.data['product_id']}")

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages = {
        'UNAUTHENTICATED': 'Authentication required',
        'PERMISSION_DENIED': 'Admin access required',
        'NOT_FOUND': 'Resource not found',
        'INVALID_ARGUMENT': 'Invalid data provided',
        'INTERNAL': 'Internal error',
    }

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: str(v) if isinstance(v, Decimal) else v
                for k, v in self.data.items()
            }
        }
