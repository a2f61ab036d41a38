"""ABI handling utilities."""
from typing import Dict, List, Any, Tuple, Union
import json
from pathlib import Path

from ..logger_config import logger
from ..exceptions import ContractError

ABI_DIR = Path(__file__).resolve().parent.parent / 'abi'

def load_abi(name_or_path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Load ABI from a bundled name (e.g. ``IUniswapV2Pair``) or a JSON file."""
    path = Path(name_or_path)
    if path.suffix != '.json':
        path = ABI_DIR / f"{name_or_path}.json"
    try:
        with open(path, 'r') as f:
            abi = json.load(f)
        if not isinstance(abi, list):
            raise ContractError(f"Invalid ABI format in {path}")
        return abi
    except ContractError:
        raise
    except Exception as e:
        logger.error(f"Error loading ABI from {path}: {e}")
        raise ContractError(f"Failed to load ABI: {e}") from e

def load_artifact(path: Union[str, Path]) -> Tuple[List[Dict[str, Any]], str]:
    """Load ``abi`` and ``bytecode`` from a compiled contract artifact."""
    try:
        with open(path, 'r') as f:
            artifact = json.load(f)
    except Exception as e:
        logger.error(f"Error loading artifact from {path}: {e}")
        raise ContractError(f"Failed to load artifact: {e}") from e

    abi = artifact.get('abi')
    bytecode = artifact.get('bytecode')
    if not isinstance(abi, list) or not bytecode or bytecode == '0x':
        raise ContractError(f"Artifact {path} has no deployable abi/bytecode")
    return abi, bytecode
