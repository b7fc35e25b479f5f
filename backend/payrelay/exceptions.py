"""
Error Taxonomy — Every failure the relay reports, with its HTTP mapping.

Handlers in ``payrelay.main`` render these as
``{"success": false, "message": ..., "error": ...}``.
"""
from typing import Any, Dict, Optional


class PaymentRelayError(Exception):
    """Base class. ``message`` is public; ``error`` carries the detail, if any."""

    status_code: int = 500
    default_message: str = "Payment processing failed"

    def __init__(self, detail: str, *, message: Optional[str] = None, payload: Any = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.message = message or self.default_message
        self.payload = payload

    @property
    def error(self) -> Optional[str]:
        return self.detail

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, "message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


class ClientError(PaymentRelayError):
    """Rejected before any side effect; the detail is the message."""

    status_code = 400

    def __init__(self, detail: str) -> None:
        super().__init__(detail, message=detail)

    @property
    def error(self) -> Optional[str]:
        return None


class ValidationError(ClientError):
    pass


class UnsupportedNetwork(ClientError):
    pass


# ─── Upstream gateway ───────────────────────────────────────────────

class GatewayError(PaymentRelayError):
    """An upstream call failed; ``payload`` holds the upstream body when known."""


class AuthenticationFailed(GatewayError):
    pass


class NameEnquiryFailed(GatewayError):
    pass


class AccountNameNotFound(GatewayError):
    pass


class CollectionFailed(GatewayError):
    pass


# ─── Persistence ────────────────────────────────────────────────────

class DuplicateTransactionError(PaymentRelayError):
    pass


class InvalidStatusTransition(PaymentRelayError):
    pass


class PaymentProcessingError(PaymentRelayError):
    """Wraps any unexpected failure inside the /pay pipeline."""


class PaymentNotFound(PaymentRelayError):
    status_code = 404
    default_message = "Payment not found"

    def __init__(self, transaction_id: str) -> None:
        super().__init__(f"No payment with transactionId {transaction_id}")
        self.transaction_id = transaction_id

    @property
    def error(self) -> Optional[str]:
        return None


class PaymentLookupError(PaymentRelayError):
    default_message = "Failed to fetch payment"
