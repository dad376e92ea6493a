"""Shared pytest fixtures for permit2-deployer tests."""

import asyncio
import json
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict

import pytest
from starknet_py.net.client_errors import ClientError

from permit2_deployer import artifacts as artifacts_module
from permit2_deployer import declare as declare_module
from permit2_deployer.config import Credentials, DeployerConfig

ACCOUNT_ADDRESS = 0xABC123
PRIVATE_KEY = 0x1234
PUBLIC_KEY = 0x5678

LOCAL_CLASS_HASH = 0x3DAE15380B2149B55015B91684A5FB0747142DE3303E36D867F574A22BE22D6
COMPILED_CLASS_HASH = 0x777
DECLARED_CLASS_HASH = 0x503B7BC42B7CE754C70F730CC9ED6D0846B62AE7AB9D1C87ADF743CAE2E9253
DECLARE_TX_HASH = 0xDEC1
DEPLOY_TX_HASH = 0xDE91


class FakeClient:
    """In-memory stand-in for FullNodeClient."""

    def __init__(self):
        self.declare_error = None
        self.declare_response = SimpleNamespace(
            transaction_hash=DECLARE_TX_HASH, class_hash=DECLARED_CLASS_HASH
        )
        self.wait_error = None
        self.wait_delay = None
        self.known_classes = set()
        self.declared = []
        self.waited = []
        self.class_lookups = []
        self.chain_id = "0x534e5f5345504f4c4941"

    async def declare(self, transaction):
        self.declared.append(transaction)
        if self.declare_error is not None:
            raise self.declare_error
        return self.declare_response

    async def wait_for_tx(self, tx_hash, check_interval=2, retries=500):
        self.waited.append((tx_hash, check_interval, retries))
        if self.wait_delay is not None:
            await asyncio.sleep(self.wait_delay)
        if self.wait_error is not None:
            raise self.wait_error
        return SimpleNamespace(
            execution_status=SimpleNamespace(value="SUCCEEDED"),
            finality_status=SimpleNamespace(value="ACCEPTED_ON_L2"),
        )

    async def get_chain_id(self):
        return self.chain_id

    async def get_class_by_hash(self, class_hash, block_hash=None, block_number=None):
        self.class_lookups.append(class_hash)
        if class_hash not in self.known_classes:
            raise ClientError(message="Class hash not found", code=28)
        return SimpleNamespace(class_hash=class_hash)


class FakeAccount:
    """In-memory stand-in for starknet_py Account."""

    def __init__(self, client: FakeClient, address: int = ACCOUNT_ADDRESS):
        self.client = client
        self.address = address
        self.sign_error = None
        self.execute_error = None
        self.signed = []
        self.executed = []

    async def sign_declare_v3(self, compiled_contract, compiled_class_hash, auto_estimate=False, **kwargs):
        self.signed.append(
            {
                "compiled_contract": compiled_contract,
                "compiled_class_hash": compiled_class_hash,
                "auto_estimate": auto_estimate,
            }
        )
        if self.sign_error is not None:
            raise self.sign_error
        return SimpleNamespace(kind="declare_v3", compiled_class_hash=compiled_class_hash)

    async def execute_v3(self, calls, auto_estimate=False, **kwargs):
        self.executed.append(calls)
        if self.execute_error is not None:
            raise self.execute_error
        return SimpleNamespace(transaction_hash=DEPLOY_TX_HASH)


@pytest.fixture
def sierra_document() -> Dict[str, Any]:
    return {
        "sierra_program": ["0x1", "0x6", "0x0", "0x2", "0x9", "0x1"],
        "sierra_program_debug_info": {"type_names": [], "libfunc_names": [], "user_func_names": []},
        "contract_class_version": "0.1.0",
        "entry_points_by_type": {"EXTERNAL": [], "L1_HANDLER": [], "CONSTRUCTOR": []},
        "abi": [{"type": "impl", "name": "Permit2", "interface_name": "permit2::IPermit2"}],
    }


@pytest.fixture
def casm_document() -> Dict[str, Any]:
    return {
        "prime": "0x800000000000011000000000000000000000000000000000000000000000001",
        "compiler_version": "2.8.2",
        "bytecode": ["0xa0680017fff8000", "0x7"],
        "hints": [],
        "entry_points_by_type": {"EXTERNAL": [], "L1_HANDLER": [], "CONSTRUCTOR": []},
    }


@pytest.fixture
def artifact_paths(tmp_path: Path, sierra_document, casm_document):
    """Write the Sierra and CASM documents with non-canonical formatting."""
    sierra_path = tmp_path / "permit2_Permit2.contract_class.json"
    casm_path = tmp_path / "permit2_Permit2.compiled_contract_class.json"
    with open(sierra_path, "w") as f:
        json.dump(sierra_document, f, indent=4)
    with open(casm_path, "w") as f:
        json.dump(casm_document, f, indent=1)
    return sierra_path, casm_path


@pytest.fixture
def stub_class_hashing(monkeypatch):
    """Replace starknet-py schema parsing and class hashing with fixed values."""
    monkeypatch.setattr(artifacts_module, "create_sierra_compiled_contract", lambda text: json.loads(text))
    monkeypatch.setattr(artifacts_module, "create_casm_class", lambda text: json.loads(text))
    monkeypatch.setattr(declare_module, "compute_class_hash", lambda artifacts: LOCAL_CLASS_HASH)
    monkeypatch.setattr(declare_module, "compute_compiled_class_hash", lambda artifacts: COMPILED_CLASS_HASH)


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def fake_account(fake_client) -> FakeAccount:
    return FakeAccount(fake_client)


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(account_address=ACCOUNT_ADDRESS, private_key=PRIVATE_KEY, public_key=PUBLIC_KEY)


@pytest.fixture
def deployer_config(tmp_path: Path, credentials, artifact_paths) -> DeployerConfig:
    sierra_path, casm_path = artifact_paths
    return DeployerConfig(
        credentials=credentials,
        rpc_url="http://localhost:5050",
        sierra_path=sierra_path,
        casm_path=casm_path,
        report_path=tmp_path / "LATEST_DEPLOYMENT.md",
        chain_id=0x534E5F5345504F4C4941,
        poll_interval=0.01,
        receipt_timeout=1.0,
    )


@pytest.fixture
def env_vars() -> Dict[str, str]:
    return {
        "STARKNET_DEPLOYER_ADDRESS": hex(ACCOUNT_ADDRESS),
        "STARKNET_DEPLOYER_PRIVATE_KEY": hex(PRIVATE_KEY),
        "STARKNET_DEPLOYER_PUBLIC_KEY": hex(PUBLIC_KEY),
    }


@pytest.fixture
def known_hashes() -> SimpleNamespace:
    return SimpleNamespace(
        account_address=ACCOUNT_ADDRESS,
        local_class_hash=LOCAL_CLASS_HASH,
        compiled_class_hash=COMPILED_CLASS_HASH,
        declared_class_hash=DECLARED_CLASS_HASH,
        declare_tx_hash=DECLARE_TX_HASH,
        deploy_tx_hash=DEPLOY_TX_HASH,
    )
