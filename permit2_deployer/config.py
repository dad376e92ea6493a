"""
Runtime configuration for the Permit2 deployment.

Everything the orchestrator needs is carried by a single DeployerConfig value
so runs can be pointed at fixture artifacts and fake networks in tests.
"""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .exceptions import ConfigInvalidError, ConfigMissingError
from .udc import UdcVariant

# Environment variable names
ENV_ACCOUNT_ADDRESS = "STARKNET_DEPLOYER_ADDRESS"
ENV_PRIVATE_KEY = "STARKNET_DEPLOYER_PRIVATE_KEY"
ENV_PUBLIC_KEY = "STARKNET_DEPLOYER_PUBLIC_KEY"
ENV_RPC_URL = "RPC_URL"
ENV_SIERRA_PATH = "PERMIT2_SIERRA_PATH"
ENV_CASM_PATH = "PERMIT2_CASM_PATH"
ENV_RECEIPT_TIMEOUT = "RECEIPT_TIMEOUT"
ENV_POLL_INTERVAL = "POLL_INTERVAL"

REQUIRED_ENV = (ENV_ACCOUNT_ADDRESS, ENV_PRIVATE_KEY, ENV_PUBLIC_KEY)

DEFAULT_RPC_URL = "https://starknet-sepolia.public.blastapi.io"
NETWORK_NAME = "Starknet"

# Scarb build output
DEFAULT_SIERRA_PATH = Path("target/dev/permit2_Permit2.contract_class.json")
DEFAULT_CASM_PATH = Path("target/dev/permit2_Permit2.compiled_contract_class.json")
DEFAULT_REPORT_PATH = Path("LATEST_DEPLOYMENT.md")

DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_RECEIPT_TIMEOUT = 600.0


def parse_felt(value: str, name: str) -> int:
    """Parse a 0x-prefixed hex (or decimal) string into an int."""
    text = value.strip()
    try:
        return int(text, 16) if text.lower().startswith("0x") else int(text)
    except ValueError as exc:
        raise ConfigInvalidError(f"{name} is not a hex value: {value!r}") from exc


@dataclass(frozen=True)
class Credentials:
    account_address: int
    private_key: int = field(repr=False)
    public_key: int

    @classmethod
    def from_strings(cls, account_address: str, private_key: str, public_key: str) -> "Credentials":
        return cls(
            account_address=parse_felt(account_address, ENV_ACCOUNT_ADDRESS),
            private_key=parse_felt(private_key, ENV_PRIVATE_KEY),
            public_key=parse_felt(public_key, ENV_PUBLIC_KEY),
        )


@dataclass(frozen=True)
class DeployerConfig:
    credentials: Credentials
    rpc_url: str = DEFAULT_RPC_URL
    sierra_path: Path = DEFAULT_SIERRA_PATH
    casm_path: Path = DEFAULT_CASM_PATH
    report_path: Path = DEFAULT_REPORT_PATH
    json_report_path: Optional[Path] = None
    udc_variant: UdcVariant = UdcVariant.CAIRO_V0
    chain_id: Optional[int] = None
    poll_interval: float = DEFAULT_POLL_INTERVAL
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
    verify_declared_class: bool = True

    def with_overrides(self, **overrides) -> "DeployerConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def parse_seconds(raw: str, name: str) -> float:
    """Parse a positive number of seconds."""
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigInvalidError(f"{name} must be a number of seconds, got {raw!r}") from exc
    if not value > 0:
        raise ConfigInvalidError(f"{name} must be positive, got {raw!r}")
    return value


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    return parse_seconds(raw, name)


def load_config(env: Optional[Mapping[str, str]] = None, use_dotenv: bool = True) -> DeployerConfig:
    """
    Build a DeployerConfig from environment variables.

    Args:
        env: Mapping to read from (defaults to os.environ)
        use_dotenv: Load a .env file into os.environ first

    Returns:
        DeployerConfig populated from the environment

    Raises:
        ConfigMissingError: If any required variable is absent or empty
        ConfigInvalidError: If a value cannot be parsed
    """
    if use_dotenv:
        load_dotenv()
    if env is None:
        env = os.environ

    missing = [name for name in REQUIRED_ENV if not env.get(name, "").strip()]
    if missing:
        raise ConfigMissingError(missing)

    credentials = Credentials.from_strings(
        env[ENV_ACCOUNT_ADDRESS], env[ENV_PRIVATE_KEY], env[ENV_PUBLIC_KEY]
    )

    return DeployerConfig(
        credentials=credentials,
        rpc_url=env.get(ENV_RPC_URL, "").strip() or DEFAULT_RPC_URL,
        sierra_path=Path(env.get(ENV_SIERRA_PATH) or DEFAULT_SIERRA_PATH),
        casm_path=Path(env.get(ENV_CASM_PATH) or DEFAULT_CASM_PATH),
        poll_interval=_float_env(env, ENV_POLL_INTERVAL, DEFAULT_POLL_INTERVAL),
        receipt_timeout=_float_env(env, ENV_RECEIPT_TIMEOUT, DEFAULT_RECEIPT_TIMEOUT),
    )
