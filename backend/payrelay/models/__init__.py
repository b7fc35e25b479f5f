from payrelay.models.payment import PaymentRecord, PaymentStatus

__all__ = ["PaymentRecord", "PaymentStatus"]
