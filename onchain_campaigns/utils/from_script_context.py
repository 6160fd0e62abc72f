"""
Conversion of OpShin ledger objects into their pycardano counterparts
"""
import pycardano
from opshin.prelude import (
    Address,
    PubKeyCredential,
    SomeStakingCredential,
    StakingHash,
)

from .network import network


def from_credential(credential):
    if isinstance(credential, PubKeyCredential):
        return pycardano.VerificationKeyHash(credential.credential_hash)
    return pycardano.ScriptHash(credential.credential_hash)


def from_address(address: Address) -> pycardano.Address:
    staking_part = None
    staking_credential = address.staking_credential
    if isinstance(staking_credential, SomeStakingCredential):
        staking_hash = staking_credential.staking_credential
        if not isinstance(staking_hash, StakingHash):
            raise NotImplementedError("Pointer addresses are not supported")
        staking_part = from_credential(staking_hash.value)
    return pycardano.Address(
        payment_part=from_credential(address.payment_credential),
        staking_part=staking_part,
        network=network,
    )
