"""
Read-only queries of a funding campaign: its status and its current funds
"""
import fire

from onchain_campaigns.onchain.funding import funding_nft, funding
from onchain_campaigns.onchain.utils.ext_interval import make_point_range
from onchain_campaigns.utils.network import context
from opshin.prelude import Token

from ..util import (
    find_campaign_utxo,
    amount_of_token_in_value,
    current_posix_time,
)
from ...utils.contracts import get_contract, module_name
from ...utils.from_script_context import from_address


def get_current_funds(campaign_nft_name: str = "") -> int:
    _, state, funds = _load_campaign(campaign_nft_name)
    return funds


def status(campaign_nft_name: str = "", at_posix_time: int = None) -> str:
    _, state, funds = _load_campaign(campaign_nft_name)
    if at_posix_time is None:
        at_posix_time = current_posix_time()
    res = funding.funding_status(state, funds, make_point_range(at_posix_time))
    return type(res).__name__


def deposits(campaign_nft_name: str = "") -> dict:
    _, state, _ = _load_campaign(campaign_nft_name)
    return {str(from_address(d.donor)): d.amount for d in state.deposits}


def _load_campaign(campaign_nft_name: str):
    (_, funding_nft_policy_id, _) = get_contract(module_name(funding_nft), True)
    (_, _, funding_address) = get_contract(module_name(funding), True)
    campaign_nft = Token(
        funding_nft_policy_id.payload, bytes.fromhex(campaign_nft_name)
    )
    campaign_utxo, state = find_campaign_utxo(
        funding_address, campaign_nft, funding.FundingState
    )
    assert campaign_utxo, "No funding campaign found"
    funds = (
        amount_of_token_in_value(state.params.fund_token, campaign_utxo.output.amount)
        - state.params.reserve
    )
    return campaign_utxo, state, funds


if __name__ == "__main__":
    fire.Fire(
        {
            "status": status,
            "get_current_funds": get_current_funds,
            "deposits": deposits,
        }
    )
