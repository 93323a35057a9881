"""Nonce to custody transaction ID bookkeeping."""

from __future__ import annotations

import logging
import threading

from ..types import TxID

logger = logging.getLogger(__name__)


class NonceLedger:
    """Bidirectional nonce <-> custody transaction ID map.

    Every mutation happens under a single lock so the two maps stay mutual
    inverses. The lock only guards the in-memory update; callers must not
    hold it across custody or RPC calls.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._nonce_to_tx_id: dict[int, TxID] = {}
        self._tx_id_to_nonce: dict[TxID, int] = {}

    def record(self, nonce: int, tx_id: TxID) -> None:
        """Track ``tx_id`` as the live submission for ``nonce``."""

        with self._lock:
            previous_tx_id = self._nonce_to_tx_id.get(nonce)
            if previous_tx_id is not None and previous_tx_id != tx_id:
                self._tx_id_to_nonce.pop(previous_tx_id, None)
                logger.warning(
                    "Nonce %s superseded: %s replaces %s", nonce, tx_id, previous_tx_id
                )

            previous_nonce = self._tx_id_to_nonce.get(tx_id)
            if previous_nonce is not None and previous_nonce != nonce:
                self._nonce_to_tx_id.pop(previous_nonce, None)

            self._nonce_to_tx_id[nonce] = tx_id
            self._tx_id_to_nonce[tx_id] = nonce

    def lookup_replacement(self, nonce: int) -> TxID | None:
        """Return the submission already in flight for ``nonce``, if any."""

        with self._lock:
            return self._nonce_to_tx_id.get(nonce)

    def release(self, tx_id: TxID) -> int | None:
        """Stop tracking ``tx_id``; return the nonce it held or None if untracked."""

        with self._lock:
            nonce = self._tx_id_to_nonce.pop(tx_id, None)
            if nonce is not None:
                self._nonce_to_tx_id.pop(nonce, None)
        if nonce is not None:
            logger.info("Released nonce %s for transaction %s", nonce, tx_id)
        return nonce

    def nonce_for(self, tx_id: TxID) -> int | None:
        with self._lock:
            return self._tx_id_to_nonce.get(tx_id)

    def snapshot(self) -> dict[int, TxID]:
        """Return a copy of the live nonce -> tx ID entries."""

        with self._lock:
            return dict(self._nonce_to_tx_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._nonce_to_tx_id)
