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
    sorted_utxos,
    find_campaign_utxo,
    validity_until,
)
from ...utils import get_signing_info, network
from ...utils.contracts import get_contract, get_ref_utxo, module_name


def main(
    wallet: str = "creator",
    campaign_nft_name: str = "",
    max_deposit_per_donor: int = 0,
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

    # Select campaign
    campaign_utxo, prev_state = find_campaign_utxo(
        funding_address, campaign_nft, funding.FundingState
    )
    assert campaign_utxo, "No funding campaign found"

    payment_utxos = context.utxos(payment_address)
    all_inputs = sorted_utxos([campaign_utxo] + payment_utxos)

    funding_redeemer = Redeemer(
        funding.SetMaxDepositPerDonor(
            max_deposit_per_donor=max_deposit_per_donor,
            state_input_index=all_inputs.index(campaign_utxo),
            state_output_index=0,
        )
    )
    new_state = funding.construct_max_deposit_state(prev_state, max_deposit_per_donor)

    # Build the transaction
    builder = TransactionBuilder(context)
    builder.auxiliary_data = AuxiliaryData(
        data=AlonzoMetadata(
            metadata=Metadata({674: {"msg": ["Set Max Deposit Per Donor"]}})
        )
    )
    for u in payment_utxos:
        builder.add_input(u)
    builder.add_script_input(campaign_utxo, funding_script, None, funding_redeemer)
    builder.add_output(
        TransactionOutput(
            address=funding_address,
            amount=campaign_utxo.output.amount,
            datum=new_state,
        )
    )
    builder.required_signers = [payment_vkey.hash()]
    builder.validity_start, builder.ttl = validity_until(prev_state.params.deadline)

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
