import subprocess
import sys
from pathlib import Path
from typing import Union

import fire

from onchain_campaigns.onchain.funding import funding, funding_nft
from onchain_campaigns.onchain.election import election, election_nft
from .utils.to_script_context import to_address
from .utils.contracts import get_contract, module_name


def build_compressed(
    type: str, script: Union[Path, str], cli_options=("--cf",), args=()
):
    script = Path(script)
    command = [
        sys.executable,
        "-m",
        "opshin",
        *cli_options,
        "build",
        type,
        script,
        *args,
        "--recursion-limit",
        "2000",
        "-O2",
    ]
    subprocess.run(command, check=True)

    built_contract = Path(f"build/{script.stem}/script.cbor")
    built_contract_compressed_cbor = Path(f"build/tmp.cbor")

    with built_contract_compressed_cbor.open("wb") as fp:
        subprocess.run(
            ["aiken", "uplc", "shrink", built_contract, "--cbor", "--hex"],
            stdout=fp,
            check=True,
        )

    subprocess.run(
        [
            sys.executable,
            "-m",
            "uplc",
            "build",
            "--from-cbor",
            built_contract_compressed_cbor,
            "-o",
            f"build/{script.stem}_compressed",
            "--recursion-limit",
            "2000",
        ],
        check=True,
    )


def main():
    # the campaign NFT policies are parameterized by the address of their campaign contract
    for campaign_contract, campaign_nft in (
        (funding, funding_nft),
        (election, election_nft),
    ):
        build_compressed("spending", campaign_contract.__file__)
        _, _, campaign_address = get_contract(
            module_name(campaign_contract), compressed=True
        )
        build_compressed(
            "minting",
            campaign_nft.__file__,
            args=[to_address(campaign_address).to_cbor().hex()],
        )


if __name__ == "__main__":
    fire.Fire(main)
