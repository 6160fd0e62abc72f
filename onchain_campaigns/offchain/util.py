import datetime
import logging
from typing import List, Optional, Tuple, Type

import pycardano

from opshin.prelude import Token
from pycardano import MultiAsset, ScriptHash, Asset, AssetName, Value

from ..utils.network import context, slot_from_posix

_LOGGER = logging.getLogger(__name__)

LOVELACE = Token(b"", b"")

# validity of transactions built here, in slots
DEFAULT_VALIDITY_SLOTS = 600


def token_from_string(token: str) -> Token:
    if token == "lovelace":
        return LOVELACE
    policy_id, token_name = token.split(".")
    return Token(
        policy_id=bytes.fromhex(policy_id),
        token_name=bytes.fromhex(token_name),
    )


def value_from_token(token: Token, amount: int) -> Value:
    if token.policy_id == b"" and token.token_name == b"":
        return pycardano.Value(coin=amount)
    return pycardano.Value(multi_asset=asset_from_token(token, amount))


def asset_from_token(token: Token, amount: int) -> MultiAsset:
    return MultiAsset(
        {ScriptHash(token.policy_id): Asset({AssetName(token.token_name): amount})}
    )


def with_min_lovelace(
    output: pycardano.TransactionOutput, context: pycardano.ChainContext
):
    min_lvl = pycardano.min_lovelace(context, output)
    output.amount.coin = max(output.amount.coin, min_lvl + 500000)
    return output


def sorted_utxos(txs: List[pycardano.UTxO]):
    return sorted(
        txs,
        key=lambda u: (u.input.transaction_id.payload, u.input.index),
    )


def amount_of_token_in_value(
    token: Token,
    value: Value,
) -> int:
    if token == LOVELACE:
        return value.coin
    return value.multi_asset.get(ScriptHash(token.policy_id), {}).get(
        AssetName(token.token_name), 0
    )


def current_posix_time() -> int:
    return int(datetime.datetime.now().timestamp() * 1000)


def validity_before(posix_time: int) -> Tuple[int, int]:
    """
    Validity interval (start slot, ttl) that starts at the chain tip and ends strictly before the given time
    """
    start = context.last_block_slot
    ttl = min(start + DEFAULT_VALIDITY_SLOTS, slot_from_posix(posix_time))
    assert ttl > start, "Deadline is too close or has passed"
    return start, ttl


def validity_until(posix_time: int) -> Tuple[int, int]:
    """
    Validity interval (start slot, ttl) that starts at the chain tip and ends at the latest at the given time
    """
    return validity_before(posix_time + 1)


def find_campaign_utxo(
    address: pycardano.Address,
    campaign_nft: Token,
    state_cls: Type[pycardano.PlutusData],
) -> Tuple[Optional[pycardano.UTxO], Optional[pycardano.PlutusData]]:
    """
    Find the campaign thread identified by the campaign NFT and decode its state
    """
    for u in context.utxos(address):
        if not amount_of_token_in_value(campaign_nft, u.output.amount):
            continue
        try:
            state = state_cls.from_cbor(u.output.datum.cbor)
        except Exception:
            _LOGGER.warning("Skipping campaign UTxO %s with invalid datum", u.input)
            continue
        return u, state
    return None, None
