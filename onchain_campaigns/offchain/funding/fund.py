import fire

from onchain_campaigns.onchain.funding import funding_nft, funding
from onchain_campaigns.utils.network import show_tx, context
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
    validity_before,
)
from ...utils import get_signing_info, network
from ...utils.contracts import get_contract, get_ref_utxo, module_name
from ...utils.to_script_context import to_address


def main(
    wallet: str = "donor",
    campaign_nft_name: str = "",
    amount: int = 10_000_000,
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
    donor = to_address(payment_address)

    # Select campaign
    campaign_utxo, prev_state = find_campaign_utxo(
        funding_address, campaign_nft, funding.FundingState
    )
    assert campaign_utxo, "No funding campaign found"

    payment_utxos = context.utxos(payment_address)
    all_inputs = sorted_utxos([campaign_utxo] + payment_utxos)

    funding_redeemer = Redeemer(
        funding.Fund(
            donor=donor,
            amount=amount,
            state_input_index=all_inputs.index(campaign_utxo),
            state_output_index=0,
        )
    )
    new_state = funding.construct_funded_state(prev_state, donor, amount)

    # Build the transaction
    builder = TransactionBuilder(context)
    builder.auxiliary_data = AuxiliaryData(
        data=AlonzoMetadata(metadata=Metadata({674: {"msg": ["Fund Campaign"]}}))
    )
    for u in payment_utxos:
        builder.add_input(u)
    builder.add_script_input(campaign_utxo, funding_script, None, funding_redeemer)
    builder.add_output(
        TransactionOutput(
            address=funding_address,
            amount=campaign_utxo.output.amount
            + value_from_token(prev_state.params.fund_token, amount),
            datum=new_state,
        )
    )
    builder.required_signers = [payment_vkey.hash()]
    builder.validity_start, builder.ttl = validity_before(prev_state.params.deadline)

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
