from pathlib import Path
from typing import Optional, Tuple

import pycardano
from pycardano import PlutusV2Script, ScriptHash, plutus_script_hash

from .network import network

build_dir = Path(__file__).parent.parent.parent / "build"


def module_name(module) -> str:
    return Path(module.__file__).stem


def get_contract(
    name: str, compressed: bool = False
) -> Tuple[PlutusV2Script, ScriptHash, pycardano.Address]:
    """
    Load a contract built with build.py, returns the script, its hash and its address
    """
    contract_dir = build_dir / (f"{name}_compressed" if compressed else name)
    with open(contract_dir / "script.cbor") as f:
        contract_cbor_hex = f.read().strip()
    contract_plutus_script = PlutusV2Script(bytes.fromhex(contract_cbor_hex))
    contract_script_hash = plutus_script_hash(contract_plutus_script)
    contract_script_address = pycardano.Address(
        payment_part=contract_script_hash, network=network
    )
    return contract_plutus_script, contract_script_hash, contract_script_address


def get_ref_utxo(
    contract: PlutusV2Script, context: pycardano.ChainContext
) -> Optional[pycardano.UTxO]:
    """
    Find a UTxO at the contract address that carries the contract as reference script
    """
    script_hash = plutus_script_hash(contract)
    script_address = pycardano.Address(payment_part=script_hash, network=network)
    for utxo in context.utxos(script_address):
        if utxo.output.script == contract:
            return utxo
    return None
