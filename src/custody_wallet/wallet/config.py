"""Configuration container for the custody wallet."""

from __future__ import annotations

from dataclasses import dataclass

from ..fireblocks.config import DEFAULT_REQUEST_TIMEOUT, FireblocksConfig


@dataclass(frozen=True)
class WalletConfig:
    """Aggregated configuration used to construct a custody wallet."""

    vault_account_name: str
    rpc_url: str
    fireblocks: FireblocksConfig
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    chain_id: int | None = None
