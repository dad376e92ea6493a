"""RPC client and account construction, plus the bounded receipt wait."""

import asyncio
import logging
import math
from typing import Optional

import aiohttp
from starknet_py.net.account.account import Account
from starknet_py.net.client_errors import ClientError
from starknet_py.net.full_node_client import FullNodeClient
from starknet_py.net.signer.stark_curve_signer import KeyPair
from starknet_py.transaction_errors import (
    TransactionFailedError,
    TransactionNotReceivedError,
    TransactionRevertedError,
)

from .config import DeployerConfig
from .exceptions import ConnectionSetupError, ReceiptFailedError, ReceiptTimeoutError

logger = logging.getLogger(__name__)


async def fetch_chain_id(client) -> int:
    """Ask the node which chain it serves."""
    chain_id = await client.get_chain_id()
    return int(chain_id, 16)


async def connect(config: DeployerConfig) -> Account:
    """
    Build the signing account for the configured deployer.

    The chain id is queried from the node unless the config pins one.

    Raises:
        ConnectionSetupError: If the node cannot be reached or the account cannot be built
    """
    credentials = config.credentials
    client = FullNodeClient(node_url=config.rpc_url)

    chain_id = config.chain_id
    if chain_id is None:
        try:
            chain_id = await fetch_chain_id(client)
        except (ClientError, aiohttp.ClientError, asyncio.TimeoutError, ValueError, TypeError) as exc:
            raise ConnectionSetupError(
                f"Error connecting to RPC provider {config.rpc_url}: {exc}"
            ) from exc
    logger.debug("Chain ID: %s", hex(chain_id))

    key_pair = KeyPair.from_private_key(credentials.private_key)
    if key_pair.public_key != credentials.public_key:
        logger.warning(
            "⚠️  Configured public key %s does not match the private key (derived %s)",
            hex(credentials.public_key),
            hex(key_pair.public_key),
        )

    try:
        account = Account(
            address=credentials.account_address,
            client=client,
            key_pair=key_pair,
            chain=chain_id,
        )
    except (ValueError, TypeError) as exc:
        raise ConnectionSetupError(f"Failed to initialize account: {exc}") from exc

    return account


async def wait_for_receipt(
    client,
    tx_hash: int,
    poll_interval: float,
    timeout: float,
):
    """
    Poll for a transaction receipt until it is accepted or the deadline passes.

    Args:
        client: starknet-py client exposing wait_for_tx
        tx_hash: Transaction to wait for
        poll_interval: Seconds between status checks
        timeout: Overall deadline in seconds

    Returns:
        The transaction receipt

    Raises:
        ReceiptTimeoutError: If the transaction is not accepted in time
        ReceiptFailedError: If the transaction was reverted or rejected
    """
    retries = math.ceil(timeout / poll_interval) + 1
    try:
        return await asyncio.wait_for(
            client.wait_for_tx(tx_hash, check_interval=poll_interval, retries=retries),
            timeout=timeout,
        )
    except (asyncio.TimeoutError, TransactionNotReceivedError) as exc:
        raise ReceiptTimeoutError(tx_hash, timeout) from exc
    # TransactionNotReceivedError is itself a TransactionFailedError
    except (TransactionRevertedError, TransactionFailedError) as exc:
        raise ReceiptFailedError(tx_hash, exc) from exc


def describe_receipt(receipt) -> Optional[str]:
    execution = getattr(receipt, "execution_status", None)
    finality = getattr(receipt, "finality_status", None)
    if execution is None and finality is None:
        return None
    return f"Execution Status: {_status_name(execution)}, Finality Status: {_status_name(finality)}"


def _status_name(status) -> str:
    return getattr(status, "value", str(status))
