"""Custody Wallet - submit EVM transactions through a custody service.

This library signs nothing itself: transactions are handed to a custody
service (Fireblocks) which signs and broadcasts them, and the wallet tracks
each submission by nonce until its on-chain receipt is available.
"""

from .base import CustodyClient, WalletBase
from .constants import ASSET_ID_BY_CHAIN, get_asset_id
from .exceptions import (
    AccountNotFoundError,
    AssetNotFoundError,
    CustodyWalletError,
    DestinationNotWhitelistedError,
    EmptyTransactionError,
    InsufficientFundsError,
    NetworkError,
    NoAddressesFoundError,
    NotYetBroadcastedError,
    ReceiptNotYetAvailableError,
    TransactionFailedError,
    TransactionOutcomeError,
    UnsupportedChainError,
    ValidationError,
)
from .fireblocks import FireblocksClient, FireblocksConfig
from .types import (
    ChainTransaction,
    ContractCallRequest,
    CustodyRequest,
    CustodyTransaction,
    FeeLevel,
    TransactionStatus,
    TransferRequest,
    TxID,
)
from .utils import wei_to_ether, wei_to_gwei
from .wallet import CustodyWallet, WalletConfig

__version__ = "0.1.0"

__all__ = [
    # Wallet
    "CustodyWallet",
    "WalletBase",
    "WalletConfig",
    # Custody service
    "CustodyClient",
    "FireblocksClient",
    "FireblocksConfig",
    # Types and enums
    "ChainTransaction",
    "ContractCallRequest",
    "CustodyRequest",
    "CustodyTransaction",
    "FeeLevel",
    "TransactionStatus",
    "TransferRequest",
    "TxID",
    # Chain mapping
    "ASSET_ID_BY_CHAIN",
    "get_asset_id",
    # Exceptions
    "CustodyWalletError",
    "UnsupportedChainError",
    "AccountNotFoundError",
    "AssetNotFoundError",
    "DestinationNotWhitelistedError",
    "NoAddressesFoundError",
    "InsufficientFundsError",
    "EmptyTransactionError",
    "ValidationError",
    "NetworkError",
    "TransactionOutcomeError",
    "NotYetBroadcastedError",
    "ReceiptNotYetAvailableError",
    "TransactionFailedError",
    # Utility functions
    "wei_to_ether",
    "wei_to_gwei",
]
