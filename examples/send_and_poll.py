"""Example: Send ETH through a Fireblocks vault and poll until the receipt lands."""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path

from dotenv import load_dotenv

from custody_wallet import (
    ChainTransaction,
    CustodyWallet,
    FireblocksConfig,
    NotYetBroadcastedError,
    ReceiptNotYetAvailableError,
    TransactionFailedError,
    WalletConfig,
)

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger("send_and_poll")

POLL_INTERVAL = float(os.getenv("POLL_INTERVAL_SECONDS", "5"))
MAX_POLLS = int(os.getenv("MAX_POLLS", "120"))


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(f"{name} not found in environment variables")
    return value


def main() -> None:
    secret_path = Path(_require_env("FIREBLOCKS_SECRET_KEY_PATH"))
    config = WalletConfig(
        vault_account_name=_require_env("FIREBLOCKS_VAULT_ACCOUNT_NAME"),
        rpc_url=os.getenv("ETH_RPC_URL", "https://ethereum-holesky-rpc.publicnode.com"),
        fireblocks=FireblocksConfig(
            api_key=_require_env("FIREBLOCKS_API_KEY"),
            private_key=secret_path.read_text(encoding="utf-8"),
            base_url=os.getenv("FIREBLOCKS_BASE_URL"),
        ),
    )
    wallet = CustodyWallet.from_config(config)

    sender = wallet.sender_address()
    recipient = _require_env("RECIPIENT_ADDRESS")
    nonce = wallet.web3.eth.get_transaction_count(sender, "pending")
    tx = ChainTransaction.from_tx_params(
        {
            "to": recipient,
            "value": int(os.getenv("AMOUNT_WEI", str(10**15))),
            "nonce": nonce,
        }
    )

    logger.info("Sending %s wei from %s to %s (nonce %s)", tx.value, sender, recipient, nonce)
    tx_id = wallet.send_transaction(tx)

    for _ in range(MAX_POLLS):
        try:
            receipt = wallet.get_transaction_receipt(tx_id)
        except (NotYetBroadcastedError, ReceiptNotYetAvailableError) as exc:
            logger.info("Waiting: %s", exc)
            time.sleep(POLL_INTERVAL)
            continue
        except TransactionFailedError as exc:
            logger.error("Transaction %s failed with status %s", exc.tx_id, exc.status)
            return

        logger.info(
            "Confirmed in block %s (status %s)",
            receipt.get("blockNumber"),
            receipt.get("status"),
        )
        return

    logger.warning("Gave up waiting for %s; cancelling broadcast", tx_id)
    logger.info("Cancelled: %s", wallet.cancel_transaction_broadcast(tx_id))


if __name__ == "__main__":
    main()
