# create reference UTxOs for the campaign contracts
import fire
from pycardano import TransactionBuilder, TransactionOutput, min_lovelace, Value

from onchain_campaigns.onchain.funding import funding, funding_nft
from onchain_campaigns.onchain.election import election, election_nft
from .utils import network, get_signing_info
from .utils.contracts import get_contract, get_ref_utxo, module_name
from .utils.network import context, show_tx, _LOGGER

CAMPAIGN_CONTRACTS = [funding, funding_nft, election, election_nft]


def submit_ref_script(contract, wallet: str = "scripts", compress: bool = True):
    """
    Lock the compiled contract as reference script at its own address, unless such a UTxO exists
    """
    _, payment_skey, payment_address = get_signing_info(wallet, network=network)
    contract_script, _, contract_address = get_contract(
        module_name(contract), compressed=compress
    )
    if get_ref_utxo(contract_script, context):
        _LOGGER.info(
            "reference script UTxO for %s already exists", module_name(contract)
        )
        return None

    output = TransactionOutput(contract_address, amount=0, script=contract_script)
    output.amount = Value(min_lovelace(context, output))
    builder = TransactionBuilder(context)
    builder.add_output(output)
    builder.add_input_address(payment_address)
    signed_tx = builder.build_and_sign(
        signing_keys=[payment_skey], change_address=payment_address
    )
    context.submit_tx(signed_tx)

    print(f"created {module_name(contract)} reference script UTxO")
    show_tx(signed_tx)
    return signed_tx


def main(wallet: str = "scripts", compress: bool = True):
    for contract in CAMPAIGN_CONTRACTS:
        submit_ref_script(contract, wallet, compress)


if __name__ == "__main__":
    fire.Fire(main)
