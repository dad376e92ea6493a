"""
Permit2 deployment workflow.

A run moves through INIT -> CREDENTIALS_LOADED -> CONNECTED -> DECLARED ->
DEPLOYED -> REPORTED -> DONE. Any failure before REPORTED moves it to FAILED
and re-raises; a report that cannot be written is only logged.
"""

import logging
from enum import Enum
from typing import Mapping, Optional

from .artifacts import load_artifacts
from .config import NETWORK_NAME, DeployerConfig, load_config
from .declare import declare_contract
from .deploy import deploy_contract, parse_class_hash
from .exceptions import ReportWriteError
from .network import connect
from .report import DeploymentResult, write_json_record, write_report

logger = logging.getLogger(__name__)


class DeploymentStage(Enum):
    INIT = "init"
    CREDENTIALS_LOADED = "credentials_loaded"
    CONNECTED = "connected"
    DECLARED = "declared"
    DEPLOYED = "deployed"
    REPORTED = "reported"
    DONE = "done"
    FAILED = "failed"


class Permit2Deployment:
    """Runs the declare and deploy steps once, tracking the stage reached."""

    def __init__(
        self,
        config: Optional[DeployerConfig] = None,
        env: Optional[Mapping[str, str]] = None,
        connector=None,
    ):
        self.config = config
        self.env = env
        self.connector = connector or connect
        self.stage = DeploymentStage.INIT
        self.failed_stage: Optional[DeploymentStage] = None
        self.current_step: Optional[str] = None
        self.failed_step: Optional[str] = None
        self.account = None
        self.class_hash: Optional[str] = None
        self.result: Optional[DeploymentResult] = None
        self.report_error: Optional[ReportWriteError] = None

    def _advance(self, stage: DeploymentStage) -> None:
        logger.debug("Stage %s -> %s", self.stage.value, stage.value)
        self.stage = stage

    def _begin(self, step: str) -> None:
        self.current_step = step

    def _fail(self) -> None:
        self.failed_stage = self.stage
        self.failed_step = self.current_step
        self.stage = DeploymentStage.FAILED

    @property
    def deployer_address(self) -> str:
        return hex(self.config.credentials.account_address)

    def load_credentials(self) -> DeployerConfig:
        self._begin("loading credentials")
        if self.config is None:
            self.config = load_config(self.env, use_dotenv=self.env is None)
        self._advance(DeploymentStage.CREDENTIALS_LOADED)
        return self.config

    async def open_connection(self):
        self._begin("connecting")
        config = self.config
        logger.info("📋 Network: %s", NETWORK_NAME)
        logger.info("📋 RPC URL: %s", config.rpc_url)
        logger.info("📋 Account: %s", self.deployer_address)
        self.account = await self.connector(config)
        logger.info("✅ Connected to Starknet RPC")
        self._advance(DeploymentStage.CONNECTED)
        return self.account

    async def declare(self) -> str:
        self._begin("declaring")
        config = self.config
        logger.info("📋 Step 1: Declaring Permit2 contract...")
        artifacts = load_artifacts(config.sierra_path, config.casm_path)
        self.class_hash = await declare_contract(
            self.account,
            artifacts,
            poll_interval=config.poll_interval,
            timeout=config.receipt_timeout,
            verify=config.verify_declared_class,
        )
        logger.info("✅ Contract declaration completed! Class Hash: %s", self.class_hash)
        self._advance(DeploymentStage.DECLARED)
        return self.class_hash

    async def deploy(self, class_hash: str) -> DeploymentResult:
        self._begin("deploying")
        class_hash = hex(parse_class_hash(class_hash))
        config = self.config
        logger.info("📋 Step 2: Deploying Permit2 contract...")
        deployed_address, tx_hash = await deploy_contract(
            self.account,
            class_hash,
            poll_interval=config.poll_interval,
            timeout=config.receipt_timeout,
            variant=config.udc_variant,
        )
        logger.info("✅ Contract deployed successfully!")
        logger.info("   Deployed Address: %s", deployed_address)
        logger.info("   Transaction Hash: %s", tx_hash)

        self.result = DeploymentResult(
            class_hash=class_hash,
            deployed_address=deployed_address,
            transaction_hash=tx_hash,
        )
        self._advance(DeploymentStage.DEPLOYED)
        return self.result

    def report(self) -> None:
        self._begin("reporting")
        config = self.config
        logger.info("📋 Step 3: Saving deployment information...")
        try:
            path = write_report(self.deployer_address, self.result, config.report_path)
            logger.info("✅ Deployment information saved to %s", path)
            if config.json_report_path is not None:
                path = write_json_record(
                    self.deployer_address, self.result, config.json_report_path, config.rpc_url
                )
                logger.info("💾 Deployment info saved to: %s", path)
        except ReportWriteError as exc:
            self.report_error = exc
            logger.warning("⚠️  Failed to save deployment info: %s", exc)
        self._advance(DeploymentStage.REPORTED)

    async def run(self, class_hash: Optional[str] = None) -> DeploymentResult:
        """
        Execute the full workflow.

        Args:
            class_hash: Skip the declaration and deploy this class hash instead

        Returns:
            The DeploymentResult of the run
        """
        try:
            self.load_credentials()
            await self.open_connection()
            if class_hash is None:
                class_hash = await self.declare()
            else:
                self._advance(DeploymentStage.DECLARED)
            result = await self.deploy(class_hash)
            self.class_hash = result.class_hash
        except Exception:
            self._fail()
            raise

        self.report()
        self._advance(DeploymentStage.DONE)
        logger.info("🎉 Permit2 deployment completed successfully!")
        return self.result

    async def run_declare_only(self) -> str:
        try:
            self.load_credentials()
            await self.open_connection()
            class_hash = await self.declare()
        except Exception:
            self._fail()
            raise
        self._advance(DeploymentStage.DONE)
        return class_hash
