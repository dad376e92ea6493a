"""
permit2-deployer: declare and deploy the Permit2 contract on Starknet
"""

from importlib.metadata import PackageNotFoundError, version

from .artifacts import ContractArtifacts, load_artifacts
from .config import Credentials, DeployerConfig, load_config
from .exceptions import (
    ArtifactNotFoundError,
    ArtifactParseError,
    ConfigInvalidError,
    ConfigMissingError,
    ConnectionSetupError,
    DeclareFailedError,
    DeployerError,
    DeploySubmissionError,
    InvalidClassHashError,
    ReceiptFailedError,
    ReceiptTimeoutError,
    ReportWriteError,
)
from .orchestrator import DeploymentStage, Permit2Deployment
from .report import DeploymentResult

try:
    __version__ = version("permit2-deployer")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "Permit2Deployment",
    "DeploymentStage",
    "DeployerConfig",
    "Credentials",
    "load_config",
    "ContractArtifacts",
    "load_artifacts",
    "DeploymentResult",
    "DeployerError",
    "ConfigMissingError",
    "ConfigInvalidError",
    "ArtifactNotFoundError",
    "ArtifactParseError",
    "ConnectionSetupError",
    "DeclareFailedError",
    "InvalidClassHashError",
    "DeploySubmissionError",
    "ReceiptTimeoutError",
    "ReceiptFailedError",
    "ReportWriteError",
]
