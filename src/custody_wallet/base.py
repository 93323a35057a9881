"""Wallet and custody service interfaces."""

from abc import ABC, abstractmethod
from typing import Any

from web3.types import ChecksumAddress

from .types import (
    AssetAddress,
    ChainTransaction,
    ContractCallRequest,
    CustodyTransaction,
    TransactionResponse,
    TransferRequest,
    TxID,
    VaultAccount,
    WhitelistedDestination,
)


class WalletBase(ABC):
    """Submit transactions and track them until a receipt is available."""

    @abstractmethod
    def send_transaction(self, tx: ChainTransaction) -> TxID:
        pass

    @abstractmethod
    def cancel_transaction_broadcast(self, tx_id: TxID) -> bool:
        pass

    @abstractmethod
    def get_transaction_receipt(self, tx_id: TxID) -> Any:
        pass

    @abstractmethod
    def sender_address(self) -> ChecksumAddress:
        pass


class CustodyClient(ABC):
    """Request/response interface of the custody service."""

    @abstractmethod
    def list_vault_accounts(self) -> list[VaultAccount]:
        pass

    @abstractmethod
    def list_external_wallets(self) -> list[WhitelistedDestination]:
        pass

    @abstractmethod
    def list_contracts(self) -> list[WhitelistedDestination]:
        pass

    @abstractmethod
    def get_asset_addresses(self, account_id: str, asset_id: str) -> list[AssetAddress]:
        pass

    @abstractmethod
    def transfer(self, request: TransferRequest) -> TransactionResponse:
        pass

    @abstractmethod
    def contract_call(self, request: ContractCallRequest) -> TransactionResponse:
        pass

    @abstractmethod
    def get_transaction(self, tx_id: TxID) -> CustodyTransaction:
        pass

    @abstractmethod
    def cancel_transaction(self, tx_id: TxID) -> bool:
        pass
