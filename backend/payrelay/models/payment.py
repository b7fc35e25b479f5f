"""
Payment Record Model — One row per payment attempt that passed name-enquiry.
"""
from datetime import datetime
from enum import Enum

from sqlalchemy import BigInteger, Column, DateTime, Integer, Numeric, String, Text

from payrelay.database import Base

# SQLite only auto-increments INTEGER primary keys
BigId = BigInteger().with_variant(Integer, "sqlite")


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class PaymentRecord(Base):
    __tablename__ = "payments"

    id = Column(BigId, primary_key=True, autoincrement=True, index=True)

    transaction_id = Column(String(64), unique=True, nullable=False, index=True)  # collection phase
    name_enquiry_transaction_id = Column(String(64), nullable=False)
    partner_code = Column(String(64))
    dest_bank = Column(String(32))                # resolved bank code

    account_number = Column(String(32), nullable=False)
    account_name = Column(String(128))
    amount = Column(Numeric(18, 2), nullable=False)
    narration = Column(String(255))

    # Status tracking: pending → processing → completed | failed
    status = Column(String(16), nullable=False, default=PaymentStatus.PENDING.value, index=True)
    verification_response = Column(Text)          # JSON of the name-enquiry result
    response = Column(Text)                       # JSON of the collection result or {"error": ...}

    # Opaque references into the events domain
    event_id = Column(BigInteger, nullable=True)
    registration_id = Column(BigInteger, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    completed_at = Column(DateTime, nullable=True)
