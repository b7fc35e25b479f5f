"""
Payment Service — The /pay pipeline and the payment lookup.

Pipeline: validate → identifiers & bank code → authenticate → name-enquiry
→ pending record → processing → collect → terminal record. Steps run
strictly in sequence and nothing is retried. Store calls are synchronous
SQLAlchemy work, so they run in worker threads off the event loop.
"""
import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError

from payrelay.exceptions import (
    AccountNameNotFound,
    PaymentLookupError,
    PaymentNotFound,
    PaymentProcessingError,
    PaymentRelayError,
    ValidationError,
)
from payrelay.models.payment import PaymentRecord, PaymentStatus
from payrelay.schemas.schemas import PayRequest
from payrelay.services.gateway_client import CollectionRequest, GatewayClient
from payrelay.services.identifiers import TransactionIdGenerator
from payrelay.services.network_resolver import NetworkResolver
from payrelay.services.payment_store import PaymentStore
from payrelay.utils.extractors import extract_account_name, is_collection_successful

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Missing required fields: accountNumber, amount, network"
CENTS = Decimal("0.01")


@dataclass
class PaymentOutcome:
    record: PaymentRecord
    name_enquiry_transaction_id: str
    collection_transaction_id: str
    name_enquiry: Any
    collection: Any


class PaymentService:
    def __init__(
        self,
        gateway: GatewayClient,
        store: PaymentStore,
        id_generator: TransactionIdGenerator,
        resolver: NetworkResolver,
        partner_code: str,
        default_narration: str = "Payment Gateway Transaction",
        id_gap_seconds: float = 0.01,
    ):
        self.gateway = gateway
        self.store = store
        self.id_generator = id_generator
        self.resolver = resolver
        self.partner_code = partner_code
        self.default_narration = default_narration
        self.id_gap_seconds = id_gap_seconds

    @staticmethod
    def validate(request: PayRequest) -> Decimal:
        """Reject requests missing accountNumber, amount or network; return the amount.

        The record stores two decimal places, so finer amounts are refused
        rather than collected at one value and recorded at another.
        """
        account_number = (request.account_number or "").strip()
        network = (request.network or "").strip()
        if not account_number or not request.amount or not network:
            raise ValidationError(MISSING_FIELDS_MESSAGE)
        if request.amount < 0:
            raise ValidationError("amount must be greater than zero")
        amount = request.amount.quantize(CENTS)
        if amount != request.amount:
            raise ValidationError("amount must have at most two decimal places")
        return amount

    async def pay(self, request: PayRequest) -> PaymentOutcome:
        amount = self.validate(request)
        account_number = request.account_number.strip()
        narration = request.narration or self.default_narration

        name_enquiry_id = self.id_generator.generate()
        logger.info("Generated Name Enquiry TransactionID: %s", name_enquiry_id)
        await asyncio.sleep(self.id_gap_seconds)
        collection_id = self.id_generator.generate()
        logger.info("Generated Collection TransactionID: %s", collection_id)

        bank_code = self.resolver.resolve(request.network)

        record: Optional[PaymentRecord] = None
        try:
            logger.info("Step 1: Authenticating...")
            token = await self.gateway.authenticate()

            logger.info("Step 2: Performing name enquiry...")
            name_enquiry = await self.gateway.name_enquiry(
                token, self.partner_code, name_enquiry_id, bank_code, account_number
            )
            account_name = extract_account_name(name_enquiry)
            if not account_name:
                raise AccountNameNotFound(
                    "Account name not found in name enquiry response", payload=name_enquiry
                )
            logger.info("Verified Account Name: %s", account_name)

            record = await asyncio.to_thread(
                self.store.create_pending,
                transaction_id=collection_id,
                name_enquiry_transaction_id=name_enquiry_id,
                partner_code=self.partner_code,
                dest_bank=bank_code,
                account_number=account_number,
                account_name=account_name,
                amount=amount,
                narration=narration,
                verification_response=name_enquiry,
                event_id=request.event_id,
                registration_id=request.registration_id,
            )
            logger.info("Payment record created with ID: %s", record.id)
            await asyncio.to_thread(self.store.mark_processing, record)

            logger.info("Step 3: Processing collection...")
            collection = await self.gateway.collect(token, CollectionRequest(
                partner_code=self.partner_code,
                dest_bank=bank_code,
                account_number=account_number,
                account_name=account_name,
                amount=amount,
                transaction_id=collection_id,
                narration=narration,
            ))

            status = PaymentStatus.COMPLETED if is_collection_successful(collection) else PaymentStatus.FAILED
            record = await asyncio.to_thread(self.store.finalize, record, status, collection)
            logger.info("Payment record updated to status: %s", record.status)
        except Exception as exc:
            logger.error("Payment processing error: %s", exc)
            if record is not None:
                await self._mark_failed_quietly(record, str(exc))
            if isinstance(exc, PaymentRelayError):
                raise
            raise PaymentProcessingError(str(exc)) from exc

        return PaymentOutcome(
            record=record,
            name_enquiry_transaction_id=name_enquiry_id,
            collection_transaction_id=collection_id,
            name_enquiry=name_enquiry,
            collection=collection,
        )

    async def _mark_failed_quietly(self, record: PaymentRecord, error_message: str) -> None:
        """Best-effort terminal update; a second failure is only logged."""
        try:
            await asyncio.to_thread(self.store.mark_failed, record, error_message)
        except Exception as db_error:
            logger.error("Failed to update payment status: %s", db_error)

    def get_payment(self, transaction_id: str) -> PaymentRecord:
        try:
            record = self.store.get_by_transaction_id(transaction_id)
        except SQLAlchemyError as exc:
            logger.error("Error fetching payment: %s", exc)
            raise PaymentLookupError(str(exc)) from exc
        if record is None:
            raise PaymentNotFound(transaction_id)
        return record
