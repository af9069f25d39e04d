# =========================================================
# BIZVIEW ERROR TAXONOMY
#
# Raised by services and dependencies, converted to
# {"success": false, "message": ...} by the handler
# registered in app/main.py
# =========================================================

from decimal import Decimal

from fastapi import status


class BizViewError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(BizViewError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Please log in."):
        super().__init__(message)


class NotFoundError(BizViewError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(BizViewError):
    status_code = status.HTTP_409_CONFLICT


class InsufficientStockError(BizViewError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, item_name: str, required, available):
        self.item_name = item_name
        self.required = Decimal(str(required))
        self.available = Decimal(str(available))
        super().__init__(
            f'Insufficient stock for "{item_name}". '
            f"Required: {_fmt(self.required)}, Available: {_fmt(self.available)}."
        )


class ValidationError(BizViewError):
    status_code = 422


class ExternalServiceError(BizViewError):
    status_code = status.HTTP_502_BAD_GATEWAY


class StoreError(BizViewError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


def _fmt(value: Decimal) -> str:
    # 12.000 -> 12, 2.500 -> 2.5
    return format(value.normalize(), "f")
