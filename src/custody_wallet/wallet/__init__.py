"""Custody-backed wallet components."""

from .builder import FeeFields, RequestBuilder
from .client import CustodyWallet
from .config import WalletConfig
from .directory import DirectoryCache
from .ledger import NonceLedger
from .status import StatusClass, StatusResolver, classify

__all__ = [
    "CustodyWallet",
    "DirectoryCache",
    "FeeFields",
    "NonceLedger",
    "RequestBuilder",
    "StatusClass",
    "StatusResolver",
    "WalletConfig",
    "classify",
]
