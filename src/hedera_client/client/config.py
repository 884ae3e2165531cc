"""
Client configuration.

Accepts the camelCase keys used in JSON configuration files as well as the
Python field names.
"""

from __future__ import annotations
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, model_validator

from ..ids import AccountId, LedgerId


class ClientConfig(BaseModel):
    """
    Settings a Client is built from.

    Either `network` (mainnet, testnet, previewnet) or `ledger_id` (hex) names
    the network ids are checksummed against.
    """
    network: Optional[str] = Field(default=None, description="Network name")
    ledger_id: Optional[str] = Field(default=None, alias="ledgerId", description="Ledger id as hex")
    operator_account_id: Optional[AccountId] = Field(default=None, alias="operatorAccountId")
    operator_key: Optional[str] = Field(default=None, alias="operatorKey",
                                        description="Operator Ed25519 private key, raw or DER hex")
    max_attempts: int = Field(default=10, ge=1, alias="maxAttempts")
    min_backoff: float = Field(default=0.25, ge=0, alias="minBackoff", description="Seconds")
    max_backoff: float = Field(default=8.0, ge=0, alias="maxBackoff", description="Seconds")
    default_max_transaction_fee: Optional[int] = Field(
        default=None, ge=0, alias="defaultMaxTransactionFee", description="Tinybar")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _check(self) -> ClientConfig:
        if (self.operator_account_id is None) != (self.operator_key is None):
            raise ValueError("operatorAccountId and operatorKey must be given together")
        if self.max_backoff < self.min_backoff:
            raise ValueError("maxBackoff must not be less than minBackoff")
        return self

    def resolve_ledger_id(self) -> Optional[LedgerId]:
        if self.ledger_id is not None:
            return LedgerId.from_string(self.ledger_id)
        if self.network is not None:
            return LedgerId.from_string(self.network)
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a configuration-file dictionary (secrets omitted)."""
        return self.model_dump(exclude_none=True, by_alias=True, mode="json", exclude={"operator_key"})


__all__ = ["ClientConfig"]
