"""
FastAPI dependency providers. Tests replace any of these through
``app.dependency_overrides``.
"""
from typing import Dict

from fastapi import Depends
from sqlalchemy.orm import Session

from payrelay.config import Settings, get_settings
from payrelay.database import get_db
from payrelay.services.gateway_client import GatewayClient
from payrelay.services.identifiers import TransactionIdGenerator
from payrelay.services.network_resolver import NetworkResolver
from payrelay.services.payment_service import PaymentService
from payrelay.services.payment_store import PaymentStore


def get_gateway_client(settings: Settings = Depends(get_settings)) -> GatewayClient:
    return GatewayClient.from_settings(settings)


# One generator per prefix for the whole process, so the monotonic guard sees
# every identifier issued under that prefix.
_id_generators: Dict[str, TransactionIdGenerator] = {}


def get_id_generator(settings: Settings = Depends(get_settings)) -> TransactionIdGenerator:
    prefix = settings.TRANSACTION_ID_PREFIX
    if prefix not in _id_generators:
        _id_generators.setdefault(prefix, TransactionIdGenerator(prefix=prefix))
    return _id_generators[prefix]


def get_payment_service(
    db: Session = Depends(get_db),
    gateway: GatewayClient = Depends(get_gateway_client),
    id_generator: TransactionIdGenerator = Depends(get_id_generator),
    settings: Settings = Depends(get_settings),
) -> PaymentService:
    return PaymentService(
        gateway=gateway,
        store=PaymentStore(db),
        id_generator=id_generator,
        resolver=NetworkResolver.from_settings(settings),
        partner_code=settings.PARTNER_CODE,
        default_narration=settings.DEFAULT_NARRATION,
        id_gap_seconds=settings.TRANSACTION_ID_GAP_MS / 1000,
    )
