"""Translate chain transactions into custody requests."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from hexbytes import HexBytes

from ..exceptions import EmptyTransactionError, ValidationError
from ..types import (
    ChainTransaction,
    ContractCallRequest,
    CustodyRequest,
    FeeLevel,
    TransferRequest,
    VaultAccount,
)
from ..utils import format_decimal, wei_to_ether, wei_to_gwei
from .directory import DirectoryCache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeeFields:
    """Fee parameters shared by both request kinds."""

    gas_price: str = ""
    gas_limit: str = ""
    max_fee: str = ""
    priority_fee: str = ""
    fee_level: FeeLevel | None = None

    @classmethod
    def from_transaction(cls, tx: ChainTransaction) -> FeeFields:
        """Pick explicit EIP-1559 fees, then a legacy gas price, else the HIGH tier."""

        gas_limit = str(tx.gas) if tx.gas > 0 else ""
        fee_cap = tx.max_fee_per_gas or 0
        tip = tx.max_priority_fee_per_gas or 0
        gas_price = tx.gas_price or 0

        if fee_cap > 0 and tip > 0:
            return cls(
                gas_limit=gas_limit,
                max_fee=format_decimal(wei_to_gwei(fee_cap)),
                priority_fee=format_decimal(wei_to_gwei(tip)),
            )
        if gas_price > 0:
            return cls(gas_limit=gas_limit, gas_price=format_decimal(wei_to_gwei(gas_price)))
        return cls(gas_limit=gas_limit, fee_level=FeeLevel.HIGH)


class RequestBuilder:
    """Choose between a transfer and a contract call for a transaction."""

    def __init__(self, directory: DirectoryCache) -> None:
        self._directory = directory

    def build(
        self,
        tx: ChainTransaction,
        asset_id: str,
        account: VaultAccount,
        replace_tx_by_hash: str = "",
    ) -> CustodyRequest:
        has_data = len(tx.data) > 0
        if not has_data and tx.value <= 0:
            raise EmptyTransactionError(details={"nonce": tx.nonce, "to": tx.to})
        if tx.to is None:
            raise ValidationError(
                "Contract creation is not supported", field="to", details={"nonce": tx.nonce}
            )

        fees = FeeFields.from_transaction(tx)
        amount = format_decimal(wei_to_ether(tx.value))

        if not has_data:
            destination = self._directory.get_whitelisted_account(tx.to)
            logger.debug("Building transfer of %s %s to %s", amount, asset_id, tx.to)
            return TransferRequest(
                asset_id=asset_id,
                source_account_id=account.id,
                destination_id=destination.id,
                amount=amount,
                replace_tx_by_hash=replace_tx_by_hash,
                gas_price=fees.gas_price,
                gas_limit=fees.gas_limit,
                max_fee=fees.max_fee,
                priority_fee=fees.priority_fee,
                fee_level=fees.fee_level,
            )

        contract = self._directory.get_whitelisted_contract(tx.to)
        logger.debug("Building contract call to %s with %d bytes of data", tx.to, len(tx.data))
        return ContractCallRequest(
            asset_id=asset_id,
            source_account_id=account.id,
            destination_id=contract.id,
            amount=amount,
            call_data=HexBytes(tx.data).to_0x_hex(),
            replace_tx_by_hash=replace_tx_by_hash,
            gas_price=fees.gas_price,
            gas_limit=fees.gas_limit,
            max_fee=fees.max_fee,
            priority_fee=fees.priority_fee,
            fee_level=fees.fee_level,
        )
