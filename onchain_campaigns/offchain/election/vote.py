import fire

from onchain_campaigns.onchain.election import election_nft, election
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
    sorted_utxos,
    find_campaign_utxo,
    validity_until,
)
from ...utils import get_signing_info, network
from ...utils.contracts import get_contract, get_ref_utxo, module_name
from ...utils.to_script_context import to_address


def main(
    wallet: str = "voter",
    campaign_nft_name: str = "",
    candidacy_index: int = 0,
):
    # Load script info
    (_, election_nft_policy_id, _) = get_contract(module_name(election_nft), True)
    (
        election_script,
        _,
        election_address,
    ) = get_contract(module_name(election), True)
    election_script = get_ref_utxo(election_script, context) or election_script
    campaign_nft = Token(
        election_nft_policy_id.payload, bytes.fromhex(campaign_nft_name)
    )

    # Get payment address
    payment_vkey, payment_skey, payment_address = get_signing_info(
        wallet, network=network
    )
    voter = to_address(payment_address)

    # Select election
    election_utxo, prev_state = find_campaign_utxo(
        election_address, campaign_nft, election.ElectionState
    )
    assert election_utxo, "No election found"
    validity_start, ttl = validity_until(prev_state.params.end_time)
    assert election.voting_period_open(
        prev_state.params,
        make_range(posix_from_slot(validity_start), posix_from_slot(ttl) - 1),
    ), "Voting period is not open"

    payment_utxos = context.utxos(payment_address)
    all_inputs = sorted_utxos([election_utxo] + payment_utxos)

    election_redeemer = Redeemer(
        election.CastVote(
            voter=voter,
            candidacy_index=candidacy_index,
            state_input_index=all_inputs.index(election_utxo),
            state_output_index=0,
        )
    )
    new_state = election.construct_voted_state(prev_state, voter, candidacy_index)

    # Build the transaction
    builder = TransactionBuilder(context)
    builder.auxiliary_data = AuxiliaryData(
        data=AlonzoMetadata(metadata=Metadata({674: {"msg": ["Vote in Election"]}}))
    )
    for u in payment_utxos:
        builder.add_input(u)
    builder.add_script_input(election_utxo, election_script, None, election_redeemer)
    builder.add_output(
        TransactionOutput(
            address=election_address,
            amount=election_utxo.output.amount,
            datum=new_state,
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
