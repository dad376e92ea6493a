#!/usr/bin/env python3
"""
Declare and deploy Permit2 using starknet.py.

Usage:
    python3 scripts/deploy_permit2.py               # declare (or reuse) and deploy
    python3 scripts/deploy_permit2.py declare
    python3 scripts/deploy_permit2.py deploy <CLASS_HASH>

Reads STARKNET_DEPLOYER_ADDRESS, STARKNET_DEPLOYER_PRIVATE_KEY and
STARKNET_DEPLOYER_PUBLIC_KEY from the environment or a .env file.
"""

import sys

from permit2_deployer.cli import main

if __name__ == "__main__":
    sys.exit(main())
