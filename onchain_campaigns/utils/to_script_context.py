"""
Conversion of pycardano objects into their OpShin ledger counterparts
"""
from typing import Union

import pycardano
from opshin.prelude import (
    Address,
    NoStakingCredential,
    PubKeyCredential,
    ScriptCredential,
    SomeStakingCredential,
    StakingHash,
    StakingPtr,
    TxId,
    TxOutRef,
)


def to_staking_hash(
    sk_cred: Union[pycardano.VerificationKeyHash, pycardano.ScriptHash]
) -> StakingHash:
    if isinstance(sk_cred, pycardano.VerificationKeyHash):
        return StakingHash(PubKeyCredential(sk_cred.payload))
    if isinstance(sk_cred, pycardano.ScriptHash):
        return StakingHash(ScriptCredential(sk_cred.payload))
    raise NotImplementedError(f"Unknown stake key type {type(sk_cred)}")


def to_staking_credential(
    sk_cred: Union[
        pycardano.VerificationKeyHash,
        pycardano.ScriptHash,
        pycardano.PointerAddress,
        None,
    ]
) -> Union[SomeStakingCredential, NoStakingCredential]:
    if sk_cred is None:
        return NoStakingCredential()
    if isinstance(sk_cred, pycardano.PointerAddress):
        return SomeStakingCredential(
            StakingPtr(sk_cred.slot, sk_cred.tx_index, sk_cred.cert_index)
        )
    return SomeStakingCredential(to_staking_hash(sk_cred))


def to_payment_credential(
    payment_part: Union[pycardano.VerificationKeyHash, pycardano.ScriptHash]
) -> Union[PubKeyCredential, ScriptCredential]:
    if isinstance(payment_part, pycardano.VerificationKeyHash):
        return PubKeyCredential(payment_part.payload)
    if isinstance(payment_part, pycardano.ScriptHash):
        return ScriptCredential(payment_part.payload)
    raise NotImplementedError(f"Unknown payment key type {type(payment_part)}")


def to_address(address: pycardano.Address) -> Address:
    return Address(
        to_payment_credential(address.payment_part),
        to_staking_credential(address.staking_part),
    )


def to_tx_out_ref(i: pycardano.TransactionInput) -> TxOutRef:
    return TxOutRef(
        TxId(i.transaction_id.payload),
        i.index,
    )
