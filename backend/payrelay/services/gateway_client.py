"""
Gateway Client — Authentication, name-enquiry and collection calls.

Every call is single-shot: no retries, no circuit breaking. Failures are
raised as the operation's ``GatewayError`` subclass with the upstream error
message surfaced verbatim.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional, Type

import httpx

from payrelay.config import Settings
from payrelay.exceptions import (
    AuthenticationFailed,
    CollectionFailed,
    GatewayError,
    NameEnquiryFailed,
)
from payrelay.utils.extractors import extract_token

logger = logging.getLogger(__name__)


@dataclass
class CollectionRequest:
    partner_code: str
    dest_bank: str
    account_number: str
    account_name: str
    amount: Decimal
    transaction_id: str
    narration: str

    def to_payload(self) -> Dict[str, Any]:
        """Body in the gateway's field naming."""
        return {
            "PartnerCode": self.partner_code,
            "DestBank": self.dest_bank,
            "Accountnumber": self.account_number,
            "AccountName": self.account_name,
            "Amount": float(self.amount),
            "TransactionID": self.transaction_id,
            "narration": self.narration,
        }


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return response.text


def _describe_failure(exc: httpx.HTTPError) -> tuple[str, Any]:
    """Return (message, upstream body) for a failed call."""
    if isinstance(exc, httpx.HTTPStatusError):
        body = _decode_body(exc.response)
        logger.error("Gateway API error: %s %s", exc.response.status_code, body)
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"]), body
        return (body if isinstance(body, str) else json.dumps(body)), body
    return str(exc) or exc.__class__.__name__, None


class GatewayClient:
    def __init__(
        self,
        auth_url: str,
        name_enquiry_url: str,
        collection_url: str,
        username: str,
        password: str,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.auth_url = auth_url
        self.name_enquiry_url = name_enquiry_url
        self.collection_url = collection_url
        self.username = username
        self.password = password
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "GatewayClient":
        return cls(
            auth_url=settings.AUTH_API_URL,
            name_enquiry_url=settings.NAME_ENQUIRY_API_URL,
            collection_url=settings.COLLECTION_API_URL,
            username=settings.GATEWAY_USERNAME,
            password=settings.GATEWAY_PASSWORD,
            timeout_seconds=settings.GATEWAY_TIMEOUT_SECONDS,
            transport=transport,
        )

    def _client(self) -> httpx.AsyncClient:
        kwargs: Dict[str, Any] = {}
        if self.timeout_seconds is not None:
            kwargs["timeout"] = self.timeout_seconds
        if self.transport is not None:
            kwargs["transport"] = self.transport
        return httpx.AsyncClient(**kwargs)

    async def _send(
        self,
        error_type: Type[GatewayError],
        label: str,
        method: str,
        url: str,
        url_setting: str,
        **request_kwargs: Any,
    ) -> Any:
        if not url:
            raise error_type(f"{label} error: {url_setting} is not configured")

        try:
            async with self._client() as client:
                response = await client.request(method, url, **request_kwargs)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            message, body = _describe_failure(exc)
            raise error_type(f"{label} error: {message}", payload=body) from exc

        data = _decode_body(response)
        logger.info("%s response status: %s", label, response.status_code)
        logger.debug("%s response data: %s", label, json.dumps(data, indent=2, default=str))
        return data

    async def authenticate(self) -> str:
        """Exchange the configured credentials for a bearer token."""
        data = await self._send(
            AuthenticationFailed,
            "Authentication",
            "POST",
            self.auth_url,
            "AUTH_API_URL",
            json={"username": self.username, "userpassword": self.password},
        )

        token = extract_token(data)
        if not token:
            raise AuthenticationFailed(
                "Authentication error: No token found in response. "
                f"Response: {json.dumps(data, default=str)}",
                payload=data,
            )
        logger.info("Token extracted successfully")
        return token

    async def name_enquiry(
        self,
        token: str,
        partner_code: str,
        transaction_id: str,
        bank_code: str,
        account_number: str,
    ) -> Any:
        """Verify that ``account_number`` resolves to an account holder."""
        params = {
            "PartnerCode": partner_code,
            "TransactionID": transaction_id,
            "BankCode": bank_code,
            "NECAccount": account_number,
        }
        logger.info("Name enquiry request params: %s", params)
        return await self._send(
            NameEnquiryFailed,
            "Name enquiry",
            "GET",
            self.name_enquiry_url,
            "NAME_ENQUIRY_API_URL",
            params=params,
            headers={"Authorization": f"Bearer {token}"},
        )

    async def collect(self, token: str, request: CollectionRequest) -> Any:
        """Submit the collection; the caller judges success from the payload."""
        payload = request.to_payload()
        logger.debug("Collection request body: %s", json.dumps(payload, indent=2))
        return await self._send(
            CollectionFailed,
            "Collection",
            "POST",
            self.collection_url,
            "COLLECTION_API_URL",
            json=payload,
            headers={"Authorization": f"Bearer {token}", "Content-Type": "application/json"},
        )
