import fire

from onchain_campaigns.onchain.funding import funding_nft, funding
from onchain_campaigns.onchain.utils.ext_interval import make_range
from onchain_campaigns.utils.network import show_tx, context, posix_from_slot
from opshin.prelude import Token
from pycardano import (
    TransactionBuilder,
    Redeemer,
    AuxiliaryData,
    AlonzoMetadata,
    Metadata,
    TransactionOutput,
)

from ..util import (
    value_from_token,
    sorted_utxos,
    find_campaign_utxo,
    amount_of_token_in_value,
    with_min_lovelace,
    DEFAULT_VALIDITY_SLOTS,
)
from ...utils import get_signing_info, network
from ...utils.contracts import get_contract, get_ref_utxo, module_name
from ...utils.to_script_context import to_address


def main(
    wallet: str = "donor",
    campaign_nft_name: str = "",
):
    # Load script info
    (_, funding_nft_policy_id, _) = get_contract(module_name(funding_nft), True)
    (
        funding_script,
        _,
        funding_address,
    ) = get_contract(module_name(funding), True)
    funding_script = get_ref_utxo(funding_script, context) or funding_script
    campaign_nft = Token(
        funding_nft_policy_id.payload, bytes.fromhex(campaign_nft_name)
    )

    # Get payment address
    payment_vkey, payment_skey, payment_address = get_signing_info(
        wallet, network=network
    )
    claimant = to_address(payment_address)

    # Select campaign
    campaign_utxo, prev_state = find_campaign_utxo(
        funding_address, campaign_nft, funding.FundingState
    )
    assert campaign_utxo, "No funding campaign found"

    # Determine what is owed to the claimant at the start of the validity interval
    validity_start = context.last_block_slot
    ttl = validity_start + DEFAULT_VALIDITY_SLOTS
    valid_range = make_range(posix_from_slot(validity_start), posix_from_slot(ttl) - 1)
    fund_token = prev_state.params.fund_token
    funds = (
        amount_of_token_in_value(fund_token, campaign_utxo.output.amount)
        - prev_state.params.reserve
    )
    status = funding.funding_status(prev_state, funds, valid_range)
    assert not isinstance(status, funding.FundingPeriod), "Cannot claim before deadline"
    if isinstance(status, funding.Successful):
        assert (
            prev_state.params.owner == claimant
        ), "Only owner can claim successful funding"
        if funding.owner_has_claimed(prev_state):
            print("Funds were already claimed by the owner")
            return None
        payout = funds
        new_state = funding.construct_claimed_state(prev_state)
    else:
        payout = funding.deposit_of(prev_state.deposits, claimant)
        if payout == 0:
            print("No deposit to reclaim")
            return None
        new_state = funding.construct_refunded_state(prev_state, claimant)

    payment_utxos = context.utxos(payment_address)
    all_inputs = sorted_utxos([campaign_utxo] + payment_utxos)

    funding_redeemer = Redeemer(
        funding.Claim(
            claimant=claimant,
            state_input_index=all_inputs.index(campaign_utxo),
            state_output_index=0,
            payout_index=1,
        )
    )

    # Build the transaction
    builder = TransactionBuilder(context)
    builder.auxiliary_data = AuxiliaryData(
        data=AlonzoMetadata(metadata=Metadata({674: {"msg": ["Claim Funds"]}}))
    )
    for u in payment_utxos:
        builder.add_input(u)
    builder.add_script_input(campaign_utxo, funding_script, None, funding_redeemer)
    builder.add_output(
        TransactionOutput(
            address=funding_address,
            amount=campaign_utxo.output.amount - value_from_token(fund_token, payout),
            datum=new_state,
        )
    )
    builder.add_output(
        with_min_lovelace(
            TransactionOutput(
                address=payment_address,
                amount=value_from_token(fund_token, payout),
            ),
            context,
        )
    )
    builder.required_signers = [payment_vkey.hash()]
    builder.validity_start = validity_start
    builder.ttl = ttl

    # Sign the transaction
    signed_tx = builder.build_and_sign(
        signing_keys=[payment_skey],
        change_address=payment_address,
    )

    # Submit the transaction
    context.submit_tx(signed_tx)

    show_tx(signed_tx)
    return signed_tx


if __name__ == "__main__":
    fire.Fire(main)
