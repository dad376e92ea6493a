"""Loading of the compiled Sierra and CASM contract classes."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

from marshmallow import ValidationError
from starknet_py.common import create_casm_class, create_sierra_compiled_contract
from starknet_py.hash.casm_class_hash import compute_casm_class_hash
from starknet_py.hash.sierra_class_hash import compute_sierra_class_hash

from .exceptions import ArtifactNotFoundError, ArtifactParseError

logger = logging.getLogger(__name__)

SIERRA = "sierra"
CASM = "casm"


def canonical_json(document: Any) -> str:
    return json.dumps(document, sort_keys=True, separators=(",", ":"))


@dataclass(frozen=True)
class ContractArtifacts:
    sierra_class: Dict[str, Any]
    casm_class: Dict[str, Any]
    sierra_path: Path
    casm_path: Path

    def sierra_json(self) -> str:
        return canonical_json(self.sierra_class)

    def casm_json(self) -> str:
        return canonical_json(self.casm_class)


def _read_json(kind: str, path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r") as f:
            document = json.load(f)
    except json.JSONDecodeError as exc:
        raise ArtifactParseError(kind, path, exc) from exc
    if not isinstance(document, dict):
        raise ArtifactParseError(kind, path, "expected a JSON object")
    return document


def _casm_schema_json(casm_class: Dict[str, Any]) -> str:
    # older compilers omit this field, the schema requires it
    return canonical_json({"pythonic_hints": [], **casm_class})


def _validate(kind: str, path: Path, document: Dict[str, Any]) -> None:
    try:
        if kind == SIERRA:
            create_sierra_compiled_contract(canonical_json(document))
        else:
            create_casm_class(_casm_schema_json(document))
    except (ValidationError, ValueError, TypeError, KeyError) as exc:
        raise ArtifactParseError(kind, path, exc) from exc


def load_artifacts(sierra_path: Union[str, Path], casm_path: Union[str, Path]) -> ContractArtifacts:
    """
    Load and validate the compiled contract class pair.

    Both paths are checked before either file is read, so a missing file is
    reported before any parse error.

    Raises:
        ArtifactNotFoundError: If either file does not exist
        ArtifactParseError: If a file is not a valid contract class document
    """
    sierra_path = Path(sierra_path)
    casm_path = Path(casm_path)

    logger.info("📋 Loading contract files:")
    logger.info("   Sierra: %s", sierra_path)
    logger.info("   Casm: %s", casm_path)

    if not sierra_path.exists():
        raise ArtifactNotFoundError(SIERRA, sierra_path)
    if not casm_path.exists():
        raise ArtifactNotFoundError(CASM, casm_path)

    sierra_class = _read_json(SIERRA, sierra_path)
    casm_class = _read_json(CASM, casm_path)

    _validate(SIERRA, sierra_path, sierra_class)
    _validate(CASM, casm_path, casm_class)

    return ContractArtifacts(
        sierra_class=sierra_class,
        casm_class=casm_class,
        sierra_path=sierra_path,
        casm_path=casm_path,
    )


def compute_class_hash(artifacts: ContractArtifacts) -> int:
    """Class hash of the Sierra class, as the network computes it on declare."""
    sierra_class = create_sierra_compiled_contract(artifacts.sierra_json())
    return compute_sierra_class_hash(sierra_class)


def compute_compiled_class_hash(artifacts: ContractArtifacts) -> int:
    casm_class = create_casm_class(_casm_schema_json(artifacts.casm_class))
    return compute_casm_class_hash(casm_class)
