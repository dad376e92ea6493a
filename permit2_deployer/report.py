"""Deployment result and the files it is written to."""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from .exceptions import ReportWriteError

REPORT_TEMPLATE = """# Latest Permit2 Deployment Details

## Deployment Information

- **Deployer Contract Address**: {deployer_address}
- **Deployment Transaction Hash**: {transaction_hash}
- **Class Hash**: {class_hash}
- **Deployed Contract Address**: {deployed_address}
- **Deployment Time**: {deployment_time}

## Notes

This contract was deployed using the Python deployment script. The Permit2 contract has no constructor arguments and was deployed using the Universal Deployer Contract (UDC).
"""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


@dataclass(frozen=True)
class DeploymentResult:
    class_hash: str
    deployed_address: str
    transaction_hash: str
    deployment_time: datetime = field(default_factory=_utc_now)

    def timestamp(self) -> str:
        """RFC 3339 rendering of the deployment time."""
        return self.deployment_time.isoformat(timespec="seconds")


def render_report(deployer_address: str, result: DeploymentResult) -> str:
    return REPORT_TEMPLATE.format(
        deployer_address=deployer_address,
        transaction_hash=result.transaction_hash,
        class_hash=result.class_hash,
        deployed_address=result.deployed_address,
        deployment_time=result.timestamp(),
    )


def _write(path: Path, content: str) -> None:
    try:
        with open(path, "w") as f:
            f.write(content)
    except OSError as exc:
        raise ReportWriteError(f"failed to write deployment file {path}: {exc}") from exc


def write_report(
    deployer_address: str,
    result: DeploymentResult,
    path: Union[str, Path] = "LATEST_DEPLOYMENT.md",
) -> Path:
    """
    Overwrite the markdown deployment report.

    Raises:
        ReportWriteError: If the file cannot be written
    """
    path = Path(path)
    _write(path, render_report(deployer_address, result))
    return path


def write_json_record(
    deployer_address: str,
    result: DeploymentResult,
    path: Union[str, Path],
    rpc_url: Optional[str] = None,
) -> Path:
    """Save deployment info as JSON next to the markdown report."""
    path = Path(path)
    deployment_info = {
        "contractAddress": result.deployed_address,
        "classHash": result.class_hash,
        "transactionHash": result.transaction_hash,
        "deployerAddress": deployer_address,
        "deploymentTime": result.timestamp(),
    }
    if rpc_url:
        deployment_info["rpcUrl"] = rpc_url
    _write(path, json.dumps(deployment_info, indent=2) + "\n")
    return path
