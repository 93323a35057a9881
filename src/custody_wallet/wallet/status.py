"""Resolve custody transaction status into an on-chain outcome."""

from __future__ import annotations

import logging
from enum import Enum

from web3 import Web3
from web3.exceptions import TransactionNotFound
from web3.types import TxReceipt

from ..base import CustodyClient
from ..exceptions import (
    NetworkError,
    NotYetBroadcastedError,
    ReceiptNotYetAvailableError,
    TransactionFailedError,
)
from ..types import CustodyTransaction, TransactionStatus, TxID
from .ledger import NonceLedger

logger = logging.getLogger(__name__)


class StatusClass(Enum):
    """Outcome classes of a custody transaction."""

    SUCCESS = "success"
    FAILURE = "failure"
    NOT_BROADCAST = "not_broadcast"
    PENDING_CONFIRMATION = "pending_confirmation"


FAILURE_STATUSES = frozenset(
    {
        TransactionStatus.FAILED,
        TransactionStatus.REJECTED,
        TransactionStatus.CANCELLED,
        TransactionStatus.BLOCKED,
    }
)

IN_FLIGHT_STATUSES = frozenset(
    {
        TransactionStatus.SUBMITTED,
        TransactionStatus.PENDING_SCREENING,
        TransactionStatus.PENDING_AUTHORIZATION,
        TransactionStatus.QUEUED,
        TransactionStatus.PENDING_SIGNATURE,
        TransactionStatus.PENDING_EMAIL_APPROVAL,
        TransactionStatus.PENDING_3RD_PARTY,
        TransactionStatus.BROADCASTING,
    }
)


def classify(status: TransactionStatus | None) -> StatusClass:
    """Map a custody status onto its outcome class; unknown values keep waiting."""
    if status is TransactionStatus.COMPLETED:
        return StatusClass.SUCCESS
    if status in FAILURE_STATUSES:
        return StatusClass.FAILURE
    if status in IN_FLIGHT_STATUSES:
        return StatusClass.NOT_BROADCAST
    return StatusClass.PENDING_CONFIRMATION


class StatusResolver:
    """Poll a custody transaction and fetch its receipt once completed."""

    def __init__(self, client: CustodyClient, web3: Web3, ledger: NonceLedger) -> None:
        self._client = client
        self._web3 = web3
        self._ledger = ledger

    def resolve(self, tx_id: TxID) -> TxReceipt:
        custody_tx = self._client.get_transaction(tx_id)
        outcome = classify(custody_tx.parsed_status)

        if outcome is StatusClass.SUCCESS:
            return self._fetch_receipt(tx_id, custody_tx)
        if outcome is StatusClass.FAILURE:
            raise TransactionFailedError(tx_id, custody_tx.status)
        if outcome is StatusClass.NOT_BROADCAST:
            raise NotYetBroadcastedError(tx_id, custody_tx.status)
        raise ReceiptNotYetAvailableError(
            tx_id, custody_tx.status, details={"tx_hash": custody_tx.tx_hash}
        )

    def _fetch_receipt(self, tx_id: TxID, custody_tx: CustodyTransaction) -> TxReceipt:
        if not custody_tx.tx_hash:
            raise ReceiptNotYetAvailableError(tx_id, custody_tx.status)

        try:
            receipt = self._web3.eth.get_transaction_receipt(custody_tx.tx_hash)
        except TransactionNotFound:
            raise ReceiptNotYetAvailableError(
                tx_id, custody_tx.status, details={"tx_hash": custody_tx.tx_hash}
            ) from None
        except Exception as exc:
            raise NetworkError(
                "Transaction receipt retrieval failed",
                endpoint="eth_getTransactionReceipt",
                details={"tx_id": tx_id, "tx_hash": custody_tx.tx_hash, "error": str(exc)},
            ) from exc

        self._ledger.release(tx_id)
        logger.info(
            "Receipt for transaction %s hash=%s block=%s",
            tx_id,
            custody_tx.tx_hash,
            receipt.get("blockNumber"),
        )
        return receipt
