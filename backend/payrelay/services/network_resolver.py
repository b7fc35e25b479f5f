"""
Network Resolver — Mobile network name to partner settlement bank code.
"""
from typing import Dict, Optional

from payrelay.config import Settings
from payrelay.exceptions import UnsupportedNetwork

SUPPORTED_NETWORKS_LABEL = "MTN, AirtelTigo, Telecel"


class NetworkResolver:
    """Looks up bank codes in a fixed {MTN, AIRTELTIGO, TELECEL} table."""

    def __init__(self, bank_codes: Dict[str, Optional[str]]):
        self._bank_codes = {name.upper(): (code or "").strip() for name, code in bank_codes.items()}

    @classmethod
    def from_settings(cls, settings: Settings) -> "NetworkResolver":
        return cls({
            "MTN": settings.MTN_BANK_CODE,
            "AIRTELTIGO": settings.AIRTELTIGO_BANK_CODE,
            "TELECEL": settings.TELECEL_BANK_CODE,
        })

    def resolve(self, network: str) -> str:
        """Return the bank code for ``network`` (case-insensitive, trimmed).

        Raises:
            UnsupportedNetwork: unknown name, or a known name with no code configured.
        """
        bank_code = self._bank_codes.get((network or "").strip().upper())
        if not bank_code:
            raise UnsupportedNetwork(
                f"Invalid network: {network}. Supported networks: {SUPPORTED_NETWORKS_LABEL}"
            )
        return bank_code
