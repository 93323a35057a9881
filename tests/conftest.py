from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

import pytest
from web3.exceptions import TransactionNotFound

from custody_wallet.base import CustodyClient
from custody_wallet.types import (
    AssetAddress,
    ContractCallRequest,
    CustodyTransaction,
    DestinationKind,
    TransactionResponse,
    TransferRequest,
    VaultAccount,
    VaultAsset,
    WhitelistedAsset,
    WhitelistedDestination,
)
from custody_wallet.wallet import CustodyWallet

CHAIN_ID = 17000
ASSET_ID = "ETH_TEST6"
ACCOUNT_NAME = "operator"
RECIPIENT = "0x1111111111111111111111111111111111111111"
CONTRACT = "0x2222222222222222222222222222222222222222"
SENDER = "0x3333333333333333333333333333333333333333"


def make_destination(
    dest_id: str,
    address: str,
    kind: DestinationKind,
    *,
    asset_id: str = ASSET_ID,
    status: str = "APPROVED",
) -> WhitelistedDestination:
    return WhitelistedDestination(
        id=dest_id,
        name=f"{kind.value}-{dest_id}",
        kind=kind,
        assets=[WhitelistedAsset(id=asset_id, address=address, status=status)],
    )


class DummyCustodyClient(CustodyClient):
    def __init__(self) -> None:
        self.accounts = [
            VaultAccount(
                id="0",
                name=ACCOUNT_NAME,
                assets=[VaultAsset(id=ASSET_ID, total="1.5", available="1.5")],
            )
        ]
        self.external_wallets = [
            make_destination("wallet-1", RECIPIENT, DestinationKind.EXTERNAL_WALLET)
        ]
        self.contracts = [make_destination("contract-1", CONTRACT, DestinationKind.CONTRACT)]
        self.addresses = [AssetAddress(asset_id=ASSET_ID, address=SENDER.lower())]
        self.transactions: dict[str, CustodyTransaction] = {}
        self.transfers: list[TransferRequest] = []
        self.contract_calls: list[ContractCallRequest] = []
        self.cancelled: list[str] = []
        self.calls: dict[str, int] = {}
        self.on_submit: Callable[[], None] | None = None
        self._counter = 0
        self._lock = threading.Lock()

    def _count(self, name: str) -> None:
        with self._lock:
            self.calls[name] = self.calls.get(name, 0) + 1

    def _next_id(self) -> str:
        with self._lock:
            self._counter += 1
            return f"tx-{self._counter}"

    def set_status(self, tx_id: str, status: str, tx_hash: str = "") -> None:
        self.transactions[tx_id] = CustodyTransaction(id=tx_id, status=status, tx_hash=tx_hash)

    def list_vault_accounts(self) -> list[VaultAccount]:
        self._count("list_vault_accounts")
        return list(self.accounts)

    def list_external_wallets(self) -> list[WhitelistedDestination]:
        self._count("list_external_wallets")
        return list(self.external_wallets)

    def list_contracts(self) -> list[WhitelistedDestination]:
        self._count("list_contracts")
        return list(self.contracts)

    def get_asset_addresses(self, account_id: str, asset_id: str) -> list[AssetAddress]:
        self._count("get_asset_addresses")
        return [item for item in self.addresses if item.asset_id == asset_id]

    def transfer(self, request: TransferRequest) -> TransactionResponse:
        self._count("transfer")
        if self.on_submit is not None:
            self.on_submit()
        tx_id = self._next_id()
        with self._lock:
            self.transfers.append(request)
        self.set_status(tx_id, "SUBMITTED")
        return TransactionResponse(id=tx_id, status="SUBMITTED")

    def contract_call(self, request: ContractCallRequest) -> TransactionResponse:
        self._count("contract_call")
        if self.on_submit is not None:
            self.on_submit()
        tx_id = self._next_id()
        with self._lock:
            self.contract_calls.append(request)
        self.set_status(tx_id, "SUBMITTED")
        return TransactionResponse(id=tx_id, status="SUBMITTED")

    def get_transaction(self, tx_id: str) -> CustodyTransaction:
        self._count("get_transaction")
        return self.transactions[tx_id]

    def cancel_transaction(self, tx_id: str) -> bool:
        self._count("cancel_transaction")
        self.cancelled.append(tx_id)
        return tx_id in self.transactions


class DummyEth:
    def __init__(self, chain_id: int) -> None:
        self.chain_id = chain_id
        self.receipts: dict[str, dict[str, Any]] = {}
        self.error: Exception | None = None
        self.requested: list[str] = []

    def get_transaction_receipt(self, tx_hash: str) -> dict[str, Any]:
        self.requested.append(tx_hash)
        if self.error is not None:
            raise self.error
        if tx_hash not in self.receipts:
            raise TransactionNotFound(f"Transaction with hash: '{tx_hash}' not found.")
        return self.receipts[tx_hash]


class DummyWeb3:
    def __init__(self, chain_id: int = CHAIN_ID) -> None:
        self.eth = DummyEth(chain_id)


@pytest.fixture
def custody() -> DummyCustodyClient:
    return DummyCustodyClient()


@pytest.fixture
def web3() -> DummyWeb3:
    return DummyWeb3()


@pytest.fixture
def wallet(custody: DummyCustodyClient, web3: DummyWeb3) -> CustodyWallet:
    return CustodyWallet(custody, web3, ACCOUNT_NAME)  # type: ignore[arg-type]
