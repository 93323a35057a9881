"""Wallet that delegates signing and broadcast to a custody service."""

from __future__ import annotations

import logging

import requests
from web3 import HTTPProvider, Web3
from web3.types import ChecksumAddress, TxReceipt

from ..base import CustodyClient, WalletBase
from ..exceptions import (
    AssetNotFoundError,
    InsufficientFundsError,
    NetworkError,
    NoAddressesFoundError,
)
from ..fireblocks.client import FireblocksClient
from ..types import ChainTransaction, ContractCallRequest, TxID, to_checksum
from .builder import RequestBuilder
from .config import WalletConfig
from .directory import DirectoryCache
from .ledger import NonceLedger
from .status import StatusResolver

logger = logging.getLogger(__name__)


class CustodyWallet(WalletBase):
    """Submit transactions through a custody vault account and track their receipts.

    Each instance owns its caches and nonce ledger, so several wallets (one
    per vault account, or one per test) can coexist in a process.
    """

    def __init__(
        self,
        custody_client: CustodyClient,
        web3: Web3,
        vault_account_name: str,
        *,
        chain_id: int | None = None,
    ) -> None:
        if chain_id is None:
            try:
                chain_id = int(web3.eth.chain_id)
            except Exception as exc:
                raise NetworkError(
                    "Error getting chain ID",
                    endpoint="eth_chainId",
                    details={"error": str(exc)},
                ) from exc

        self._client = custody_client
        self._web3 = web3
        self._vault_account_name = vault_account_name
        self._chain_id = chain_id
        self._ledger = NonceLedger()
        self._directory = DirectoryCache(custody_client, vault_account_name, chain_id)
        self._builder = RequestBuilder(self._directory)
        self._resolver = StatusResolver(custody_client, web3, self._ledger)
        logger.debug("Creating custody wallet for chain %s", chain_id)

    @classmethod
    def from_config(
        cls, config: WalletConfig, session: requests.Session | None = None
    ) -> CustodyWallet:
        """Wire a Fireblocks client and an HTTP RPC provider from configuration."""

        provider = HTTPProvider(config.rpc_url, request_kwargs={"timeout": config.request_timeout})
        web3 = Web3(provider)
        custody_client = FireblocksClient(config.fireblocks, session=session)
        return cls(
            custody_client,
            web3,
            config.vault_account_name,
            chain_id=config.chain_id,
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def chain_id(self) -> int:
        return self._chain_id

    @property
    def web3(self) -> Web3:
        return self._web3

    @property
    def ledger(self) -> NonceLedger:
        return self._ledger

    @property
    def directory(self) -> DirectoryCache:
        return self._directory

    # ------------------------------------------------------------------
    # Wallet operations
    # ------------------------------------------------------------------
    def send_transaction(self, tx: ChainTransaction) -> TxID:
        asset_id = self._directory.asset_id
        account = self._directory.get_account()

        asset = account.find_asset(asset_id)
        if asset is None:
            raise AssetNotFoundError(asset_id, self._vault_account_name)
        if asset.available_amount <= 0:
            raise InsufficientFundsError(asset_id, asset.available)

        replace_tx_by_hash = self._replacement_hash(tx.nonce)
        request = self._builder.build(tx, asset_id, account, replace_tx_by_hash)

        if isinstance(request, ContractCallRequest):
            response = self._client.contract_call(request)
        else:
            response = self._client.transfer(request)

        self._ledger.record(tx.nonce, response.id)
        logger.info(
            "Submitted %s for nonce %s: txID=%s status=%s",
            request.operation,
            tx.nonce,
            response.id,
            response.status,
        )
        return response.id

    def cancel_transaction_broadcast(self, tx_id: TxID) -> bool:
        return self._client.cancel_transaction(tx_id)

    def get_transaction_receipt(self, tx_id: TxID) -> TxReceipt:
        return self._resolver.resolve(tx_id)

    def sender_address(self) -> ChecksumAddress:
        asset_id = self._directory.asset_id
        account = self._directory.get_account()
        addresses = self._client.get_asset_addresses(account.id, asset_id)
        if not addresses:
            raise NoAddressesFoundError(account.id, asset_id)
        return to_checksum(addresses[0].address)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _replacement_hash(self, nonce: int) -> str:
        """Return the on-chain hash of the live submission for ``nonce``, if broadcast."""

        previous_tx_id = self._ledger.lookup_replacement(nonce)
        if previous_tx_id is None:
            return ""

        previous = self._client.get_transaction(previous_tx_id)
        if previous.tx_hash:
            logger.info(
                "Replacing transaction %s (hash %s) for nonce %s",
                previous_tx_id,
                previous.tx_hash,
                nonce,
            )
        return previous.tx_hash
