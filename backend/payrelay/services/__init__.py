from payrelay.services.gateway_client import CollectionRequest, GatewayClient
from payrelay.services.identifiers import TransactionIdGenerator
from payrelay.services.network_resolver import NetworkResolver
from payrelay.services.payment_service import PaymentOutcome, PaymentService
from payrelay.services.payment_store import PaymentStore

__all__ = [
    "CollectionRequest", "GatewayClient", "TransactionIdGenerator", "NetworkResolver",
    "PaymentOutcome", "PaymentService", "PaymentStore",
]
