"""Tests for custody_wallet.types models."""

import pytest

from custody_wallet.exceptions import ValidationError
from custody_wallet.types import (
    ChainTransaction,
    ContractCallRequest,
    CustodyTransaction,
    DestinationKind,
    FeeLevel,
    TransactionStatus,
    TransferRequest,
    VaultAccount,
    WhitelistedDestination,
)


def test_transaction_status_parse() -> None:
    assert TransactionStatus.parse("COMPLETED") is TransactionStatus.COMPLETED
    assert TransactionStatus.parse("completed") is TransactionStatus.COMPLETED
    assert (
        TransactionStatus.parse("PENDING_3RD_PARTY_MANUAL_APPROVAL")
        is TransactionStatus.PENDING_EMAIL_APPROVAL
    )
    assert TransactionStatus.parse("PENDING_AML_SCREENING") is None
    assert TransactionStatus.parse("") is None
    assert TransactionStatus.parse(None) is None


def test_chain_transaction_from_tx_params() -> None:
    tx = ChainTransaction.from_tx_params(
        {
            "to": "0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed",
            "value": "0xde0b6b3a7640000",
            "data": "0xa9059cbb",
            "nonce": 7,
            "gas": 21000,
            "maxFeePerGas": 30_000_000_000,
            "maxPriorityFeePerGas": "0x3b9aca00",
        }
    )

    assert tx.to == "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
    assert tx.value == 10**18
    assert tx.data == bytes.fromhex("a9059cbb")
    assert tx.nonce == 7
    assert tx.gas == 21000
    assert tx.gas_price is None
    assert tx.max_fee_per_gas == 30_000_000_000
    assert tx.max_priority_fee_per_gas == 10**9


def test_chain_transaction_from_tx_params_defaults() -> None:
    tx = ChainTransaction.from_tx_params({"nonce": "0x1"})
    assert tx.to is None
    assert tx.value == 0
    assert tx.data == b""
    assert tx.gas == 0


def test_chain_transaction_rejects_bad_destination() -> None:
    with pytest.raises(ValidationError) as excinfo:
        ChainTransaction.from_tx_params({"to": "not-an-address", "value": 1})
    assert excinfo.value.field == "to"


def test_transfer_payload_omits_empty_fields() -> None:
    request = TransferRequest(
        asset_id="ETH",
        source_account_id="0",
        destination_id="wallet-1",
        amount="0.5",
        fee_level=FeeLevel.HIGH,
    )

    assert request.to_payload() == {
        "operation": "TRANSFER",
        "assetId": "ETH",
        "source": {"type": "VAULT_ACCOUNT", "id": "0"},
        "destination": {"type": "EXTERNAL_WALLET", "id": "wallet-1"},
        "amount": "0.5",
        "feeLevel": "HIGH",
    }


def test_contract_call_payload_carries_call_data() -> None:
    request = ContractCallRequest(
        asset_id="ETH",
        source_account_id="0",
        destination_id="contract-1",
        amount="0",
        call_data="0xa9059cbb",
        replace_tx_by_hash="0xabc",
        gas_limit="100000",
        max_fee="30",
        priority_fee="1",
    )

    payload = request.to_payload()
    assert payload["operation"] == "CONTRACT_CALL"
    assert payload["extraParameters"] == {"contractCallData": "0xa9059cbb"}
    assert payload["replaceTxByHash"] == "0xabc"
    assert payload["gasLimit"] == "100000"
    assert payload["maxFee"] == "30"
    assert payload["priorityFee"] == "1"
    assert "feeLevel" not in payload
    assert "gasPrice" not in payload


def test_vault_account_from_dict() -> None:
    account = VaultAccount.from_dict(
        {
            "id": "3",
            "name": "operator",
            "assets": [
                {"id": "ETH", "total": "2", "available": "1.25", "pending": "0"},
                "ignored",
            ],
        }
    )

    assert account.id == "3"
    asset = account.find_asset("ETH")
    assert asset is not None
    assert str(asset.available_amount) == "1.25"
    assert account.find_asset("BTC") is None


def test_whitelisted_destination_from_dict() -> None:
    destination = WhitelistedDestination.from_dict(
        {
            "id": "abc",
            "name": "router",
            "assets": [{"id": "ETH", "address": "0x01", "status": "APPROVED"}],
        },
        DestinationKind.CONTRACT,
    )

    assert destination.kind is DestinationKind.CONTRACT
    assert destination.assets[0].status == "APPROVED"


def test_custody_transaction_from_dict() -> None:
    tx = CustodyTransaction.from_dict({"id": "t1", "status": "BROADCASTING", "txHash": None})
    assert tx.tx_hash == ""
    assert not tx.is_broadcast
    assert tx.parsed_status is TransactionStatus.BROADCASTING
