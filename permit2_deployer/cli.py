"""Command-line entry point for the Permit2 deployment."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import REQUIRED_ENV, load_config, parse_felt, parse_seconds
from .exceptions import ConfigInvalidError, ConfigMissingError, DeployerError
from .orchestrator import Permit2Deployment
from .udc import UdcVariant

logger = logging.getLogger("permit2_deployer")

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_FAILED = 2

ENV_HELP = {
    "STARKNET_DEPLOYER_ADDRESS": "Your Starknet account address",
    "STARKNET_DEPLOYER_PRIVATE_KEY": "Your private key",
    "STARKNET_DEPLOYER_PUBLIC_KEY": "Your public key",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="permit2-deploy",
        description="Declare and deploy the Permit2 contract on Starknet",
    )
    parser.add_argument("--rpc-url", help="Starknet RPC endpoint (env RPC_URL)")
    parser.add_argument("--sierra", type=Path, help="Path to the Sierra contract class JSON")
    parser.add_argument("--casm", type=Path, help="Path to the compiled CASM class JSON")
    parser.add_argument("--report", type=Path, help="Markdown report path (default LATEST_DEPLOYMENT.md)")
    parser.add_argument("--json-report", type=Path, help="Also save deployment info as JSON")
    parser.add_argument("--udc", choices=["v0", "v2"], help="Universal Deployer Contract version (default v0)")
    parser.add_argument("--chain-id", help="Chain id as hex; queried from the node if omitted")
    parser.add_argument("--timeout", help="Seconds to wait for each transaction receipt")
    parser.add_argument("--poll-interval", help="Seconds between receipt checks")
    parser.add_argument(
        "--no-verify",
        action="store_true",
        help="Trust the locally computed class hash when the class is already declared",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("run", help="Declare (or reuse) and deploy Permit2 (default)")
    subparsers.add_parser("declare", help="Only declare the class and print its hash")
    deploy_parser = subparsers.add_parser("deploy", help="Deploy an already declared class hash")
    deploy_parser.add_argument("class_hash", help="Class hash to deploy, e.g. 0x0503b7...")
    return parser


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def apply_arguments(config, args: argparse.Namespace):
    return config.with_overrides(
        rpc_url=args.rpc_url,
        sierra_path=args.sierra,
        casm_path=args.casm,
        report_path=args.report,
        json_report_path=args.json_report,
        udc_variant=UdcVariant.from_name(args.udc) if args.udc else None,
        chain_id=parse_felt(args.chain_id, "--chain-id") if args.chain_id else None,
        receipt_timeout=parse_seconds(args.timeout, "--timeout") if args.timeout is not None else None,
        poll_interval=(
            parse_seconds(args.poll_interval, "--poll-interval") if args.poll_interval is not None else None
        ),
        verify_declared_class=False if args.no_verify else None,
    )


def report_config_error(exc: Exception) -> None:
    logger.error("❌ %s", exc)
    if isinstance(exc, ConfigMissingError):
        for name in REQUIRED_ENV:
            logger.error("   %s: %s", name, ENV_HELP[name])


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    logger.info("🚀 Permit2 Contract Deployment Script")
    logger.info("=====================================")

    try:
        config = apply_arguments(load_config(), args)
    except (ConfigMissingError, ConfigInvalidError) as exc:
        report_config_error(exc)
        return EXIT_CONFIG

    deployment = Permit2Deployment(config)
    command = args.command or "run"
    try:
        if command == "declare":
            class_hash = asyncio.run(deployment.run_declare_only())
            print(f"\nClass hash: {class_hash}")
            print("\nTo deploy, run:")
            print(f"  permit2-deploy deploy {class_hash}")
        elif command == "deploy":
            asyncio.run(deployment.run(class_hash=args.class_hash))
        else:
            asyncio.run(deployment.run())
    except DeployerError as exc:
        logger.error("❌ Deployment failed while %s: %s", deployment.failed_step, exc)
        return EXIT_FAILED

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
