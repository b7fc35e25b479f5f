"""
Payment Record Store — Persists payment attempts and their status transitions.
"""
import json
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from payrelay.exceptions import DuplicateTransactionError, InvalidStatusTransition
from payrelay.models.payment import PaymentRecord, PaymentStatus

logger = logging.getLogger(__name__)

# Status only moves forward; terminal states have no successors.
ALLOWED_TRANSITIONS = {
    PaymentStatus.PENDING: {PaymentStatus.PROCESSING, PaymentStatus.FAILED},
    PaymentStatus.PROCESSING: {PaymentStatus.COMPLETED, PaymentStatus.FAILED},
    PaymentStatus.COMPLETED: set(),
    PaymentStatus.FAILED: set(),
}


def serialize(payload: Any) -> str:
    return json.dumps(payload, default=str)


class PaymentStore:
    """Wraps one SQLAlchemy session; every write is committed immediately."""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, record: PaymentRecord) -> PaymentRecord:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(record)
        return record

    def create_pending(
        self,
        *,
        transaction_id: str,
        name_enquiry_transaction_id: str,
        partner_code: str,
        dest_bank: str,
        account_number: str,
        account_name: str,
        amount: Decimal,
        narration: str,
        verification_response: Any,
        event_id: Optional[int] = None,
        registration_id: Optional[int] = None,
    ) -> PaymentRecord:
        record = PaymentRecord(
            transaction_id=transaction_id,
            name_enquiry_transaction_id=name_enquiry_transaction_id,
            partner_code=partner_code,
            dest_bank=dest_bank,
            account_number=account_number,
            account_name=account_name,
            amount=amount,
            narration=narration,
            status=PaymentStatus.PENDING.value,
            verification_response=serialize(verification_response),
            event_id=event_id,
            registration_id=registration_id,
        )
        self.db.add(record)
        try:
            return self._commit(record)
        except IntegrityError as exc:
            raise DuplicateTransactionError(
                f"Payment with transactionId {transaction_id} already exists"
            ) from exc

    def _transition(self, record: PaymentRecord, target: PaymentStatus) -> None:
        current = PaymentStatus(record.status)
        if target not in ALLOWED_TRANSITIONS[current]:
            raise InvalidStatusTransition(
                f"Payment {record.id} cannot move from {current.value} to {target.value}"
            )
        record.status = target.value

    def mark_processing(self, record: PaymentRecord) -> PaymentRecord:
        self._transition(record, PaymentStatus.PROCESSING)
        return self._commit(record)

    def finalize(self, record: PaymentRecord, status: PaymentStatus, response: Any) -> PaymentRecord:
        """Terminal transition: attach the serialized response and completion time."""
        if status not in (PaymentStatus.COMPLETED, PaymentStatus.FAILED):
            raise InvalidStatusTransition(f"{status.value} is not a terminal status")
        self._transition(record, status)
        record.response = serialize(response)
        record.completed_at = datetime.utcnow()
        return self._commit(record)

    def mark_failed(self, record: PaymentRecord, error_message: str) -> PaymentRecord:
        return self.finalize(record, PaymentStatus.FAILED, {"error": error_message})

    def get_by_transaction_id(self, transaction_id: str) -> Optional[PaymentRecord]:
        return (
            self.db.query(PaymentRecord)
            .filter(PaymentRecord.transaction_id == transaction_id)
            .first()
        )
