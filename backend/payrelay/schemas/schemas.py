"""
Pydantic Schemas — Request & Response models for API validation.
Field aliases carry the camelCase names of the public contract.
"""
import json
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator

from payrelay.models.payment import PaymentRecord


# ──────────────── Payment ────────────────

class PayRequest(BaseModel):
    # Presence is checked by the payment service so every missing field yields one message
    account_number: Optional[str] = Field(None, alias="accountNumber")
    amount: Optional[Decimal] = None
    narration: Optional[str] = None
    network: Optional[str] = None
    event_id: Optional[int] = Field(None, alias="eventId")
    registration_id: Optional[int] = Field(None, alias="registrationId")

    class Config:
        populate_by_name = True

    @field_validator("account_number", mode="before")
    @classmethod
    def _account_number_as_text(cls, value: Any) -> Any:
        # MSISDNs are often posted as JSON numbers
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("event_id", "registration_id", mode="before")
    @classmethod
    def _blank_reference_is_none(cls, value: Any) -> Any:
        if value == "":
            return None
        return value


class PayResponseData(BaseModel):
    name_enquiry: Any = Field(None, alias="nameEnquiry")
    collection: Any = None

    class Config:
        populate_by_name = True


class PayResponse(BaseModel):
    success: bool = True
    message: str = "Payment processed successfully"
    payment_id: str = Field(..., alias="paymentId")
    name_enquiry_transaction_id: str = Field(..., alias="nameEnquiryTransactionID")
    collection_transaction_id: str = Field(..., alias="collectionTransactionID")
    status: str
    data: PayResponseData

    class Config:
        populate_by_name = True


class PaymentOut(BaseModel):
    id: str
    transaction_id: str = Field(..., alias="transactionId")
    name_enquiry_transaction_id: Optional[str] = Field(None, alias="nameEnquiryTransactionId")
    partner_code: Optional[str] = Field(None, alias="partnerCode")
    dest_bank: Optional[str] = Field(None, alias="destBank")
    account_number: str = Field(..., alias="accountNumber")
    account_name: Optional[str] = Field(None, alias="accountName")
    amount: Decimal
    narration: Optional[str] = None
    status: str
    verification_response: Any = Field(None, alias="verificationResponse")
    response: Any = None
    event_id: Optional[str] = Field(None, alias="eventId")
    registration_id: Optional[str] = Field(None, alias="registrationId")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    completed_at: Optional[datetime] = Field(None, alias="completedAt")

    class Config:
        populate_by_name = True

    @classmethod
    def from_record(cls, record: PaymentRecord) -> "PaymentOut":
        """Decode the stored JSON columns and render integer ids as strings."""
        return cls(
            id=str(record.id),
            transaction_id=record.transaction_id,
            name_enquiry_transaction_id=record.name_enquiry_transaction_id,
            partner_code=record.partner_code,
            dest_bank=record.dest_bank,
            account_number=record.account_number,
            account_name=record.account_name,
            amount=record.amount,
            narration=record.narration,
            status=record.status,
            verification_response=_decode(record.verification_response),
            response=_decode(record.response),
            event_id=_as_text(record.event_id),
            registration_id=_as_text(record.registration_id),
            created_at=record.created_at,
            updated_at=record.updated_at,
            completed_at=record.completed_at,
        )


class PaymentLookupResponse(BaseModel):
    success: bool = True
    payment: PaymentOut


def _decode(raw: Optional[str]) -> Any:
    return json.loads(raw) if raw else None


def _as_text(value: Union[int, None]) -> Optional[str]:
    return str(value) if value is not None else None


# ──────────────── Generic ────────────────

class HealthResponse(BaseModel):
    status: str
    message: str
    timestamp: str


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: Optional[str] = None
