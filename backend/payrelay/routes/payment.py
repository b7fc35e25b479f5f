"""
Payment Routes — Mobile-money collection through the banking gateway.
Handles: the /pay pipeline and lookup by collection transaction id.
"""
from fastapi import APIRouter, Depends

from payrelay.dependencies import get_payment_service
from payrelay.exceptions import PaymentLookupError
from payrelay.schemas.schemas import (
    ErrorResponse, PayRequest, PayResponse, PayResponseData,
    PaymentLookupResponse, PaymentOut,
)
from payrelay.services.payment_service import PaymentService

router = APIRouter(tags=["Payment"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post("/pay", response_model=PayResponse, responses=ERROR_RESPONSES)
async def pay(
    payload: PayRequest,
    service: PaymentService = Depends(get_payment_service),
):
    """Verify the destination account, collect the funds and record the outcome."""
    outcome = await service.pay(payload)

    return PayResponse(
        payment_id=str(outcome.record.id),
        name_enquiry_transaction_id=outcome.name_enquiry_transaction_id,
        collection_transaction_id=outcome.collection_transaction_id,
        status=outcome.record.status,
        data=PayResponseData(
            name_enquiry=outcome.name_enquiry,
            collection=outcome.collection,
        ),
    )


@router.get(
    "/payment/{transaction_id}",
    response_model=PaymentLookupResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def get_payment(
    transaction_id: str,
    service: PaymentService = Depends(get_payment_service),
):
    """Fetch a payment by its collection transaction id."""
    record = service.get_payment(transaction_id)
    try:
        payment = PaymentOut.from_record(record)
    except ValueError as exc:  # stored JSON that no longer decodes
        raise PaymentLookupError(str(exc)) from exc

    return PaymentLookupResponse(payment=payment)
