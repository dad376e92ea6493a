"""Declaration of the Permit2 class, reusing an existing declaration when there is one."""

import logging

from starknet_py.net.client_errors import ClientError

from .artifacts import ContractArtifacts, compute_class_hash, compute_compiled_class_hash
from .exceptions import DeclareFailedError
from .network import wait_for_receipt

logger = logging.getLogger(__name__)

# JSON-RPC error code for CLASS_ALREADY_DECLARED
CLASS_ALREADY_DECLARED_CODE = 51
ALREADY_DECLARED_PHRASE = "already declared"


def is_already_declared(error: Exception) -> bool:
    """Tell whether a declare failure means the class is already on chain."""
    if isinstance(error, ClientError) and error.code == CLASS_ALREADY_DECLARED_CODE:
        return True
    # fee estimation wraps the sequencer message in a generic execution error
    return ALREADY_DECLARED_PHRASE in str(error).lower()


async def confirm_declared(client, class_hash: int) -> None:
    """Check that the network knows the class under a locally computed hash."""
    try:
        await client.get_class_by_hash(class_hash=class_hash)
    except ClientError as exc:
        raise DeclareFailedError(
            f"class reported as already declared but {hex(class_hash)} is unknown to the node: {exc}"
        ) from exc


async def declare_contract(
    account,
    artifacts: ContractArtifacts,
    poll_interval: float,
    timeout: float,
    verify: bool = True,
) -> str:
    """
    Declare the contract class and return its class hash.

    Args:
        account: Signing account
        artifacts: Loaded Sierra and CASM classes
        poll_interval: Seconds between receipt checks
        timeout: Receipt deadline in seconds
        verify: Confirm a recomputed class hash against the node

    Returns:
        Class hash as a 0x-prefixed hex string

    Raises:
        DeclareFailedError: If the declaration fails for any other reason than
            the class already being declared
        ReceiptTimeoutError: If the declaration is not accepted in time
        ReceiptFailedError: If the declaration is reverted or rejected
    """
    logger.info("📤 Declaring contract...")
    compiled_class_hash = compute_compiled_class_hash(artifacts)
    try:
        declare_tx = await account.sign_declare_v3(
            compiled_contract=artifacts.sierra_json(),
            compiled_class_hash=compiled_class_hash,
            auto_estimate=True,
        )
        resp = await account.client.declare(transaction=declare_tx)
    except Exception as exc:
        if not is_already_declared(exc):
            raise DeclareFailedError(f"declare transaction failed: {exc}") from exc
        logger.info("✅ Contract already declared, extracting class hash...")
        class_hash = compute_class_hash(artifacts)
        if verify:
            await confirm_declared(account.client, class_hash)
        return hex(class_hash)

    logger.info("   Transaction hash: %s", hex(resp.transaction_hash))
    logger.info("⏳ Waiting for declaration confirmation...")
    await wait_for_receipt(account.client, resp.transaction_hash, poll_interval, timeout)

    return hex(resp.class_hash)
