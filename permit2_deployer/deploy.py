"""Deployment of a declared class through the Universal Deployer Contract."""

import logging
from typing import Optional, Tuple

from .exceptions import DeploySubmissionError, InvalidClassHashError
from .network import describe_receipt, wait_for_receipt
from .udc import FIELD_PRIME, UdcVariant, build_udc_deployment

logger = logging.getLogger(__name__)

# Permit2 has no constructor arguments
PERMIT2_CONSTRUCTOR_CALLDATA = ()


def parse_class_hash(class_hash: str) -> int:
    """Convert a hex (or decimal) class hash string into a field element."""
    text = str(class_hash).strip()
    try:
        value = int(text, 16) if text.lower().startswith("0x") else int(text)
    except ValueError as exc:
        raise InvalidClassHashError(f"invalid class hash: {class_hash!r}") from exc
    if not 0 <= value < FIELD_PRIME:
        raise InvalidClassHashError(f"invalid class hash: {class_hash!r} is outside the field")
    return value


async def deploy_contract(
    account,
    class_hash: str,
    poll_interval: float,
    timeout: float,
    variant: UdcVariant = UdcVariant.CAIRO_V0,
    salt: Optional[int] = None,
) -> Tuple[str, str]:
    """
    Deploy one instance of a declared class via the UDC.

    Returns:
        Tuple of (deployed_address, transaction_hash) as hex strings

    Raises:
        InvalidClassHashError: If class_hash is malformed
        DeploySubmissionError: If the invoke transaction cannot be sent
        ReceiptTimeoutError: If the transaction is not accepted in time
        ReceiptFailedError: If the transaction is reverted or rejected
    """
    class_hash_felt = parse_class_hash(class_hash)

    deployment = build_udc_deployment(
        class_hash=class_hash_felt,
        caller_address=account.address,
        constructor_calldata=PERMIT2_CONSTRUCTOR_CALLDATA,
        variant=variant,
        salt=salt,
    )
    logger.debug("UDC %s, salt %s", hex(variant.address), hex(deployment.salt))

    logger.info("📤 Sending deployment transaction...")
    try:
        result = await account.execute_v3(calls=deployment.call, auto_estimate=True)
    except Exception as exc:
        raise DeploySubmissionError(f"failed to deploy contract: {exc}") from exc

    tx_hash = result.transaction_hash
    logger.info("⏳ Transaction sent! Hash: %s", hex(tx_hash))
    logger.info("⏳ Waiting for transaction confirmation...")

    receipt = await wait_for_receipt(account.client, tx_hash, poll_interval, timeout)

    logger.info("✅ Transaction confirmed!")
    status = describe_receipt(receipt)
    if status:
        logger.info("   %s", status)

    return hex(deployment.address), hex(tx_hash)
