"""Signing configuration."""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_NETWORK_ID = "default"


@dataclass
class SigningConfig:
    """Default account and network used when a signing call omits them."""

    account_id: Optional[str] = None
    network_id: str = DEFAULT_NETWORK_ID

    @classmethod
    def from_env(cls) -> SigningConfig:
        """Read NEAR_ACCOUNT_ID and NEAR_NETWORK_ID from the environment."""
        return cls(
            account_id=os.environ.get("NEAR_ACCOUNT_ID") or None,
            network_id=os.environ.get("NEAR_NETWORK_ID") or DEFAULT_NETWORK_ID,
        )
