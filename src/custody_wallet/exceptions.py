"""Exception hierarchy for the custody-backed wallet."""

from typing import Any


class CustodyWalletError(Exception):
    """Base exception for all custody wallet errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class UnsupportedChainError(CustodyWalletError):
    """Raised when a chain has no custody asset mapping."""

    def __init__(self, chain_id: int, details: dict | None = None):
        super().__init__(f"Unsupported chain {chain_id}", details)
        self.chain_id = chain_id


class AccountNotFoundError(CustodyWalletError):
    """Raised when the configured vault account does not exist."""

    def __init__(self, account_name: str, details: dict | None = None):
        super().__init__(f"Vault account '{account_name}' not found", details)
        self.account_name = account_name


class AssetNotFoundError(CustodyWalletError):
    """Raised when the vault account does not hold the chain's asset."""

    def __init__(self, asset_id: str, account_name: str, details: dict | None = None):
        super().__init__(f"Asset {asset_id} not found in account {account_name}", details)
        self.asset_id = asset_id
        self.account_name = account_name


class DestinationNotWhitelistedError(CustodyWalletError):
    """Raised when a destination is not an approved whitelisted address."""

    def __init__(self, address: str, kind: str, details: dict | None = None):
        super().__init__(f"{kind} {address} not found in whitelisted {kind}s", details)
        self.address = address
        self.kind = kind


class NoAddressesFoundError(CustodyWalletError):
    """Raised when the vault account has no deposit address for the asset."""

    def __init__(self, account_id: str, asset_id: str, details: dict | None = None):
        super().__init__(f"No addresses found for {asset_id} in account {account_id}", details)
        self.account_id = account_id
        self.asset_id = asset_id


class InsufficientFundsError(CustodyWalletError):
    """Raised when the vault account has no available balance."""

    def __init__(self, asset_id: str, available: str, details: dict | None = None):
        super().__init__(f"Insufficient funds: {available} {asset_id} available", details)
        self.asset_id = asset_id
        self.available = available


class EmptyTransactionError(CustodyWalletError):
    """Raised when a transaction carries neither value nor call data."""

    def __init__(self, details: dict | None = None):
        super().__init__("Transaction has no value and no data", details)


class ValidationError(CustodyWalletError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class NetworkError(CustodyWalletError):
    """Raised when the custody service or chain endpoint cannot be reached."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint
        self.status_code = status_code


class TransactionOutcomeError(CustodyWalletError):
    """Base for signals describing where a custody transaction stands.

    ``retryable`` tells the caller whether polling again may produce a
    different result.
    """

    retryable = True

    def __init__(self, message: str, tx_id: str, status: str, details: dict | None = None):
        super().__init__(message, details)
        self.tx_id = tx_id
        self.status = status


class NotYetBroadcastedError(TransactionOutcomeError):
    """The custody service has not broadcast the transaction yet."""

    def __init__(self, tx_id: str, status: str, details: dict | None = None):
        super().__init__(
            f"Transaction not yet broadcasted: the custody transaction {tx_id} "
            f"is in status {status}",
            tx_id,
            status,
            details,
        )


class ReceiptNotYetAvailableError(TransactionOutcomeError):
    """The transaction was broadcast but no receipt can be fetched yet."""

    def __init__(self, tx_id: str, status: str, details: dict | None = None):
        super().__init__(
            f"Transaction receipt not yet available: the custody transaction {tx_id} "
            f"is in status {status}",
            tx_id,
            status,
            details,
        )


class TransactionFailedError(TransactionOutcomeError):
    """The custody transaction reached a terminal failure state."""

    retryable = False

    def __init__(self, tx_id: str, status: str, details: dict | None = None):
        super().__init__(
            f"Transaction failed: the custody transaction {tx_id} has been {status}",
            tx_id,
            status,
            details,
        )
