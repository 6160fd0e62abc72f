"""
Construction of OpShin script contexts, so that validators can be run directly in Python
"""
from typing import List

from opshin.prelude import *

LOVELACE = Token(b"", b"")

CAMPAIGN_POLICY_ID = bytes.fromhex("c1" * 28)
CAMPAIGN_TX_ID = bytes.fromhex("aa" * 32)
WALLET_TX_ID = bytes.fromhex("bb" * 32)


def pubkey_address(pkh: bytes) -> Address:
    return Address(PubKeyCredential(pkh), NoStakingCredential())


def script_address(script_hash: bytes) -> Address:
    return Address(ScriptCredential(script_hash), NoStakingCredential())


def make_value(lovelace: int, extra: Value = None) -> Value:
    value = {b"": {b"": lovelace}}
    if extra:
        value.update(extra)
    return value


def make_out(address: Address, value: Value, datum: PlutusData = None) -> TxOut:
    return TxOut(
        address,
        value,
        NoOutputDatum() if datum is None else SomeOutputDatum(datum),
        NoScriptHash(),
    )


def make_in(
    resolved: TxOut, tx_id: bytes = CAMPAIGN_TX_ID, index: int = 0
) -> TxInInfo:
    return TxInInfo(TxOutRef(TxId(tx_id), index), resolved)


def make_tx_info(
    inputs: List[TxInInfo],
    outputs: List[TxOut],
    valid_range: POSIXTimeRange,
    signatories: List[bytes],
    mint: Value = None,
) -> TxInfo:
    return TxInfo(
        inputs,
        [],
        outputs,
        make_value(200_000),
        {} if mint is None else mint,
        [],
        {},
        valid_range,
        signatories,
        {},
        {},
        TxId(bytes(32)),
    )


def spending_context(tx_info: TxInfo, spent: TxInInfo) -> ScriptContext:
    return ScriptContext(tx_info, Spending(spent.out_ref))


def minting_context(tx_info: TxInfo, policy_id: bytes) -> ScriptContext:
    return ScriptContext(tx_info, Minting(policy_id))
