"""
Universal Deployer Contract helpers.

The address of a UDC deployment is known before the transaction lands:
origin-dependent deployments mix the caller into the salt and use the UDC as
deployer, origin-independent ones keep the salt and deploy "from zero".
"""

import secrets
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from poseidon_py.poseidon_hash import poseidon_hash_many
from starknet_py.hash.address import compute_address
from starknet_py.hash.selector import get_selector_from_name
from starknet_py.hash.utils import pedersen_hash
from starknet_py.net.client_models import Call

FIELD_PRIME = 2**251 + 17 * 2**192 + 1


class UdcVariant(Enum):
    """Deployed UDC versions: (address, entrypoint, flag means "unique")."""

    CAIRO_V0 = (0x041A78E741E5AF2FEC34B695679BC6891742439F7AFB8484ECD7766661AD02BF, "deployContract", True)
    CAIRO_V2 = (0x02CEED65A4BD731034C01113685C831B01C15D7D432F71AFB1CF1634B53A2125, "deploy_contract", False)

    @property
    def address(self) -> int:
        return self.value[0]

    @property
    def entrypoint(self) -> str:
        return self.value[1]

    def flag(self, origin_dependent: bool) -> int:
        # v0 takes `unique`, v2 takes the inverse `from_zero`
        unique_flag = self.value[2]
        return int(origin_dependent if unique_flag else not origin_dependent)

    def unique_salt(self, caller_address: int, salt: int) -> int:
        # Cairo 0 UDC hashes with pedersen, the Cairo 1 UDC with poseidon
        if self is UdcVariant.CAIRO_V0:
            return pedersen_hash(caller_address, salt)
        return poseidon_hash_many([caller_address, salt])

    @classmethod
    def from_name(cls, name: str) -> "UdcVariant":
        aliases = {"v0": cls.CAIRO_V0, "v2": cls.CAIRO_V2}
        key = name.strip().lower()
        if key in aliases:
            return aliases[key]
        return cls[name.strip().upper()]


@dataclass(frozen=True)
class UdcDeployment:
    call: Call
    salt: int
    address: int


def random_salt() -> int:
    return secrets.randbits(251)


def precompute_udc_address(
    class_hash: int,
    salt: int,
    constructor_calldata: Sequence[int],
    variant: UdcVariant,
    caller_address: Optional[int],
) -> int:
    """
    Compute the address the UDC will deploy to.

    Args:
        class_hash: Declared class hash
        salt: Salt passed to the UDC
        constructor_calldata: Constructor arguments
        variant: UDC version used for the deployment
        caller_address: Deploying account, or None for an origin-independent deployment

    Returns:
        The contract address as an int
    """
    if caller_address is None:
        deployer_address = 0
        effective_salt = salt
    else:
        deployer_address = variant.address
        effective_salt = variant.unique_salt(caller_address, salt)

    return compute_address(
        salt=effective_salt,
        class_hash=class_hash,
        constructor_calldata=list(constructor_calldata),
        deployer_address=deployer_address,
    )


def build_udc_deployment(
    class_hash: int,
    caller_address: Optional[int],
    constructor_calldata: Sequence[int] = (),
    variant: UdcVariant = UdcVariant.CAIRO_V0,
    salt: Optional[int] = None,
) -> UdcDeployment:
    """Build the UDC invoke call together with its salt and precomputed address."""
    if salt is None:
        salt = random_salt()
    calldata = list(constructor_calldata)
    origin_dependent = caller_address is not None

    call = Call(
        to_addr=variant.address,
        selector=get_selector_from_name(variant.entrypoint),
        calldata=[
            class_hash,
            salt,
            variant.flag(origin_dependent),
            len(calldata),
            *calldata,
        ],
    )
    address = precompute_udc_address(class_hash, salt, calldata, variant, caller_address)
    return UdcDeployment(call=call, salt=salt, address=address)
