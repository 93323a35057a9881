"""Type definitions and data models for the custody wallet."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from eth_typing import HexStr
from hexbytes import HexBytes
from web3.types import ChecksumAddress

from .exceptions import ValidationError
from .utils import coerce_int, normalise_address

TxID = str  # Custody transaction identifier


class TransactionStatus(str, Enum):
    """Custody transaction statuses."""

    SUBMITTED = "SUBMITTED"
    PENDING_SCREENING = "PENDING_SCREENING"
    PENDING_AUTHORIZATION = "PENDING_AUTHORIZATION"
    QUEUED = "QUEUED"
    PENDING_SIGNATURE = "PENDING_SIGNATURE"
    PENDING_EMAIL_APPROVAL = "PENDING_3RD_PARTY_MANUAL_APPROVAL"
    PENDING_3RD_PARTY = "PENDING_3RD_PARTY"
    BROADCASTING = "BROADCASTING"
    CONFIRMING = "CONFIRMING"
    COMPLETED = "COMPLETED"
    CANCELLING = "CANCELLING"
    CANCELLED = "CANCELLED"
    BLOCKED = "BLOCKED"
    REJECTED = "REJECTED"
    FAILED = "FAILED"

    @classmethod
    def parse(cls, raw: str | None) -> TransactionStatus | None:
        """Return the matching status, or None for values outside the enumeration."""

        if not raw:
            return None
        try:
            return cls(str(raw).upper())
        except ValueError:
            return None


class FeeLevel(str, Enum):
    """Fee tiers estimated by the custody service."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class DestinationKind(str, Enum):
    """Registries of whitelisted destinations."""

    EXTERNAL_WALLET = "account"
    CONTRACT = "contract"


@dataclass(frozen=True)
class ChainTransaction:
    """Unsigned EVM transaction handed to the wallet for submission."""

    to: ChecksumAddress | None
    value: int = 0
    data: bytes = b""
    nonce: int = 0
    gas: int = 0
    gas_price: int | None = None
    max_fee_per_gas: int | None = None
    max_priority_fee_per_gas: int | None = None

    @classmethod
    def from_tx_params(cls, params: Mapping[str, Any]) -> ChainTransaction:
        """Construct a transaction from a web3 ``TxParams`` style mapping."""

        raw_to = params.get("to")
        to = normalise_address(raw_to) if raw_to else None
        if raw_to and to is None:
            raise ValidationError("Invalid destination address", field="to", value=raw_to)

        raw_data = params.get("data") or params.get("input") or b""
        try:
            data = bytes(HexBytes(raw_data))
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                "Invalid call data", field="data", value=raw_data, details={"error": str(exc)}
            ) from exc

        return cls(
            to=to,
            value=coerce_int(params.get("value"), "value"),
            data=data,
            nonce=coerce_int(params.get("nonce"), "nonce"),
            gas=coerce_int(params.get("gas"), "gas"),
            gas_price=_optional_int(params, "gasPrice"),
            max_fee_per_gas=_optional_int(params, "maxFeePerGas"),
            max_priority_fee_per_gas=_optional_int(params, "maxPriorityFeePerGas"),
        )


@dataclass(frozen=True)
class VaultAsset:
    """Balance of one asset inside a vault account."""

    id: str
    total: str = "0"
    available: str = "0"
    pending: str = "0"
    frozen: str = "0"

    @property
    def available_amount(self) -> Decimal:
        try:
            return Decimal(self.available)
        except (InvalidOperation, TypeError):
            return Decimal(0)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VaultAsset:
        return cls(
            id=str(data.get("id", "")),
            total=str(data.get("total") or "0"),
            available=str(data.get("available") or "0"),
            pending=str(data.get("pending") or "0"),
            frozen=str(data.get("frozen") or "0"),
        )


@dataclass(frozen=True)
class VaultAccount:
    """Custody vault account holding the signing keys."""

    id: str
    name: str
    assets: list[VaultAsset] = field(default_factory=list)

    def find_asset(self, asset_id: str) -> VaultAsset | None:
        for asset in self.assets:
            if asset.id == asset_id:
                return asset
        return None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VaultAccount:
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            assets=[VaultAsset.from_dict(item) for item in _mappings(data.get("assets"))],
        )


@dataclass(frozen=True)
class WhitelistedAsset:
    """Per-asset address registered under a whitelisted destination."""

    id: str
    address: str
    status: str
    tag: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WhitelistedAsset:
        return cls(
            id=str(data.get("id", "")),
            address=str(data.get("address", "")),
            status=str(data.get("status", "")),
            tag=str(data.get("tag") or ""),
        )


@dataclass(frozen=True)
class WhitelistedDestination:
    """External wallet or contract approved by the custody policy engine."""

    id: str
    name: str
    kind: DestinationKind
    assets: list[WhitelistedAsset] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], kind: DestinationKind) -> WhitelistedDestination:
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            kind=kind,
            assets=[WhitelistedAsset.from_dict(item) for item in _mappings(data.get("assets"))],
        )


@dataclass(frozen=True)
class AssetAddress:
    """Deposit address of a vault account for one asset."""

    asset_id: str
    address: str
    description: str = ""
    type: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AssetAddress:
        return cls(
            asset_id=str(data.get("assetId", "")),
            address=str(data.get("address", "")),
            description=str(data.get("description") or ""),
            type=str(data.get("type") or ""),
        )


@dataclass(frozen=True)
class TransactionResponse:
    """Identifier and initial status returned when a transaction is created."""

    id: TxID
    status: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TransactionResponse:
        return cls(id=str(data.get("id", "")), status=str(data.get("status", "")))


@dataclass(frozen=True)
class CustodyTransaction:
    """Remote view of one custody submission."""

    id: TxID
    status: str
    tx_hash: str = ""

    @property
    def parsed_status(self) -> TransactionStatus | None:
        return TransactionStatus.parse(self.status)

    @property
    def is_broadcast(self) -> bool:
        return bool(self.tx_hash)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CustodyTransaction:
        return cls(
            id=str(data.get("id", "")),
            status=str(data.get("status", "")),
            tx_hash=str(data.get("txHash") or ""),
        )


@dataclass(frozen=True)
class TransferRequest:
    """Plain value transfer from the vault account to a whitelisted wallet."""

    asset_id: str
    source_account_id: str
    destination_id: str
    amount: str
    replace_tx_by_hash: str = ""
    gas_price: str = ""
    gas_limit: str = ""
    max_fee: str = ""
    priority_fee: str = ""
    fee_level: FeeLevel | None = None
    external_tx_id: str = ""
    note: str = ""

    operation = "TRANSFER"

    def to_payload(self) -> dict[str, Any]:
        return _request_payload(self)


@dataclass(frozen=True)
class ContractCallRequest:
    """Contract invocation on a whitelisted contract."""

    asset_id: str
    source_account_id: str
    destination_id: str
    amount: str
    call_data: HexStr
    replace_tx_by_hash: str = ""
    gas_price: str = ""
    gas_limit: str = ""
    max_fee: str = ""
    priority_fee: str = ""
    fee_level: FeeLevel | None = None
    external_tx_id: str = ""
    note: str = ""

    operation = "CONTRACT_CALL"

    def to_payload(self) -> dict[str, Any]:
        payload = _request_payload(self)
        payload["extraParameters"] = {"contractCallData": self.call_data}
        return payload


CustodyRequest = TransferRequest | ContractCallRequest


def _request_payload(request: TransferRequest | ContractCallRequest) -> dict[str, Any]:
    """Render the JSON body shared by both request kinds, omitting empty fields."""

    payload: dict[str, Any] = {
        "operation": request.operation,
        "externalTxId": request.external_tx_id,
        "assetId": request.asset_id,
        "source": {"type": "VAULT_ACCOUNT", "id": request.source_account_id},
        "destination": {"type": "EXTERNAL_WALLET", "id": request.destination_id},
        "amount": request.amount,
        "replaceTxByHash": request.replace_tx_by_hash,
        "gasPrice": request.gas_price,
        "gasLimit": request.gas_limit,
        "maxFee": request.max_fee,
        "priorityFee": request.priority_fee,
        "feeLevel": request.fee_level.value if request.fee_level else "",
        "note": request.note,
    }
    return {key: value for key, value in payload.items() if value != ""}


def _optional_int(params: Mapping[str, Any], key: str) -> int | None:
    value = params.get(key)
    if value is None:
        return None
    return coerce_int(value, key)


def _mappings(value: Any) -> Iterable[Mapping[str, Any]]:
    if not isinstance(value, list | tuple):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def to_checksum(address: str) -> ChecksumAddress:
    """Checksum an address, raising ValidationError when it is malformed."""

    checksum = normalise_address(address)
    if checksum is None:
        raise ValidationError("Invalid EVM address", field="address", value=address)
    return checksum
