"""Fireblocks REST implementation of the custody client interface."""

from __future__ import annotations

import hashlib
import json
import logging
import time
import uuid
from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import quote

import jwt
import requests

from ..base import CustodyClient
from ..exceptions import NetworkError
from ..types import (
    AssetAddress,
    ContractCallRequest,
    CustodyTransaction,
    DestinationKind,
    TransactionResponse,
    TransferRequest,
    TxID,
    VaultAccount,
    WhitelistedDestination,
)
from .config import FireblocksConfig

logger = logging.getLogger(__name__)


class FireblocksClient(CustodyClient):
    """Talk to the Fireblocks API with JWT-signed requests."""

    def __init__(self, config: FireblocksConfig, session: requests.Session | None = None) -> None:
        self._config = config
        self._base_url = config.resolved_base_url()
        self._session = session or requests.Session()

    # ------------------------------------------------------------------
    # Vault accounts and registries
    # ------------------------------------------------------------------
    def list_vault_accounts(self) -> list[VaultAccount]:
        payload = self._request("GET", "/v1/vault/accounts_paged")
        accounts = payload.get("accounts") if isinstance(payload, Mapping) else None
        return [VaultAccount.from_dict(item) for item in _mapping_items(accounts)]

    def list_external_wallets(self) -> list[WhitelistedDestination]:
        payload = self._request("GET", "/v1/external_wallets")
        return [
            WhitelistedDestination.from_dict(item, DestinationKind.EXTERNAL_WALLET)
            for item in _mapping_items(payload)
        ]

    def list_contracts(self) -> list[WhitelistedDestination]:
        payload = self._request("GET", "/v1/contracts")
        return [
            WhitelistedDestination.from_dict(item, DestinationKind.CONTRACT)
            for item in _mapping_items(payload)
        ]

    def get_asset_addresses(self, account_id: str, asset_id: str) -> list[AssetAddress]:
        path = (
            f"/v1/vault/accounts/{quote(account_id, safe='')}/"
            f"{quote(asset_id, safe='')}/addresses_paginated"
        )
        payload = self._request("GET", path)
        addresses = payload.get("addresses") if isinstance(payload, Mapping) else None
        return [AssetAddress.from_dict(item) for item in _mapping_items(addresses)]

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------
    def transfer(self, request: TransferRequest) -> TransactionResponse:
        return self._create_transaction(request.to_payload())

    def contract_call(self, request: ContractCallRequest) -> TransactionResponse:
        return self._create_transaction(request.to_payload())

    def get_transaction(self, tx_id: TxID) -> CustodyTransaction:
        payload = self._request("GET", f"/v1/transactions/{quote(tx_id, safe='')}")
        if not isinstance(payload, Mapping):
            raise NetworkError(
                "Unexpected transaction payload",
                endpoint="/v1/transactions",
                details={"tx_id": tx_id, "payload": payload},
            )
        return CustodyTransaction.from_dict(payload)

    def cancel_transaction(self, tx_id: TxID) -> bool:
        payload = self._request("POST", f"/v1/transactions/{quote(tx_id, safe='')}/cancel", {})
        success = bool(payload.get("success")) if isinstance(payload, Mapping) else False
        logger.info("Cancellation of transaction %s success=%s", tx_id, success)
        return success

    def _create_transaction(self, body: Mapping[str, Any]) -> TransactionResponse:
        payload = self._request("POST", "/v1/transactions", body)
        if not isinstance(payload, Mapping) or not payload.get("id"):
            raise NetworkError(
                "Transaction creation did not return an ID",
                endpoint="/v1/transactions",
                details={"payload": payload, "operation": body.get("operation")},
            )
        response = TransactionResponse.from_dict(payload)
        logger.debug("Created %s transaction %s", body.get("operation"), response.id)
        return response

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    def _sign_jwt(self, path: str, body: str) -> str:
        now = int(time.time())
        claims = {
            "uri": path,
            "nonce": uuid.uuid4().hex,
            "iat": now,
            "exp": now + self._config.token_ttl,
            "sub": self._config.api_key,
            "bodyHash": hashlib.sha256(body.encode("utf-8")).hexdigest(),
        }
        return jwt.encode(claims, self._config.private_key, algorithm="RS256")

    def _request(self, method: str, path: str, body: Mapping[str, Any] | None = None) -> Any:
        body_str = json.dumps(body) if body is not None else ""
        headers = {
            "X-API-Key": self._config.api_key,
            "Authorization": f"Bearer {self._sign_jwt(path, body_str)}",
        }
        if body is not None:
            headers["Content-Type"] = "application/json"

        url = f"{self._base_url}{path}"
        try:
            response = self._session.request(
                method,
                url,
                data=body_str if body is not None else None,
                headers=headers,
                timeout=self._config.request_timeout,
            )
        except requests.RequestException as exc:
            raise NetworkError(
                f"Fireblocks request {method} {path} failed",
                endpoint=path,
                details={"error": str(exc)},
            ) from exc

        if response.status_code >= 400:
            raise NetworkError(
                f"Fireblocks request {method} {path} returned {response.status_code}",
                endpoint=path,
                status_code=response.status_code,
                details={"response": _safe_json(response)},
            )

        return _safe_json(response)


def _safe_json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _mapping_items(value: Any) -> list[Mapping[str, Any]]:
    if not isinstance(value, Sequence) or isinstance(value, str | bytes):
        return []
    return [item for item in value if isinstance(item, Mapping)]
