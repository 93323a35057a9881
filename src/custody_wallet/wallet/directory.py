"""Lazily populated caches of custody registries."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from web3.types import ChecksumAddress

from ..base import CustodyClient
from ..constants import APPROVED_STATUS, get_asset_id
from ..exceptions import AccountNotFoundError, DestinationNotWhitelistedError, ValidationError
from ..types import DestinationKind, VaultAccount, WhitelistedDestination
from ..utils import normalise_address

logger = logging.getLogger(__name__)


class DirectoryCache:
    """Cache the vault account and whitelisted destinations.

    Hits are kept for the lifetime of the instance. Misses are never cached,
    so a destination approved after a failed lookup is found on the next call.
    """

    def __init__(self, client: CustodyClient, vault_account_name: str, chain_id: int) -> None:
        self._client = client
        self._vault_account_name = vault_account_name
        self._chain_id = chain_id
        self._lock = threading.Lock()
        self._account: VaultAccount | None = None
        self._whitelisted_accounts: dict[ChecksumAddress, WhitelistedDestination] = {}
        self._whitelisted_contracts: dict[ChecksumAddress, WhitelistedDestination] = {}

    @property
    def asset_id(self) -> str:
        return get_asset_id(self._chain_id)

    def get_account(self) -> VaultAccount:
        account = self._account
        if account is not None:
            return account

        for candidate in self._client.list_vault_accounts():
            if candidate.name == self._vault_account_name:
                with self._lock:
                    if self._account is None:
                        self._account = candidate
                    account = self._account
                logger.debug("Cached vault account %s (%s)", account.name, account.id)
                return account

        raise AccountNotFoundError(self._vault_account_name)

    def get_whitelisted_account(self, address: str) -> WhitelistedDestination:
        return self._lookup(
            address,
            self._whitelisted_accounts,
            self._client.list_external_wallets,
            DestinationKind.EXTERNAL_WALLET,
        )

    def get_whitelisted_contract(self, address: str) -> WhitelistedDestination:
        return self._lookup(
            address,
            self._whitelisted_contracts,
            self._client.list_contracts,
            DestinationKind.CONTRACT,
        )

    def _lookup(
        self,
        address: str,
        cache: dict[ChecksumAddress, WhitelistedDestination],
        fetch: Callable[[], list[WhitelistedDestination]],
        kind: DestinationKind,
    ) -> WhitelistedDestination:
        asset_id = self.asset_id
        target = normalise_address(address)
        if target is None:
            raise ValidationError("Invalid destination address", field="address", value=address)

        cached = cache.get(target)
        if cached is not None:
            return cached

        for destination in fetch():
            if self._matches(destination, target, asset_id):
                with self._lock:
                    cached = cache.setdefault(target, destination)
                logger.debug("Cached whitelisted %s %s (%s)", kind.value, target, cached.id)
                return cached

        raise DestinationNotWhitelistedError(
            target,
            kind.value,
            details={"asset_id": asset_id},
        )

    @staticmethod
    def _matches(
        destination: WhitelistedDestination, target: ChecksumAddress, asset_id: str
    ) -> bool:
        for asset in destination.assets:
            if asset.id != asset_id or asset.status != APPROVED_STATUS:
                continue
            if normalise_address(asset.address) == target:
                return True
        return False
