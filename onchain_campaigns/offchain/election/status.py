"""
Read-only queries of an election: its status, census and results
"""
import fire

from onchain_campaigns.onchain.election import election_nft, election
from onchain_campaigns.onchain.utils.ext_interval import make_point_range
from onchain_campaigns.utils.network import context
from opshin.prelude import Token

from ..util import find_campaign_utxo, current_posix_time
from ...utils.contracts import get_contract, module_name
from ...utils.from_script_context import from_address


def status(campaign_nft_name: str = "", at_posix_time: int = None) -> str:
    state = _load_election(campaign_nft_name)
    if at_posix_time is None:
        at_posix_time = current_posix_time()
    res = election.election_status(state.params, make_point_range(at_posix_time))
    return type(res).__name__


def census(campaign_nft_name: str = "") -> list:
    state = _load_election(campaign_nft_name)
    return [str(from_address(a)) for a in state.census]


def results(campaign_nft_name: str = "") -> dict:
    state = _load_election(campaign_nft_name)
    return {c.name.decode(errors="replace"): c.votes for c in state.candidacies}


def _load_election(campaign_nft_name: str) -> election.ElectionState:
    (_, election_nft_policy_id, _) = get_contract(module_name(election_nft), True)
    (_, _, election_address) = get_contract(module_name(election), True)
    campaign_nft = Token(
        election_nft_policy_id.payload, bytes.fromhex(campaign_nft_name)
    )
    election_utxo, state = find_campaign_utxo(
        election_address, campaign_nft, election.ElectionState
    )
    assert election_utxo, "No election found"
    return state


if __name__ == "__main__":
    fire.Fire({"status": status, "census": census, "results": results})
