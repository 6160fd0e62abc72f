import logging
import os

import pycardano
from pycardano import Network

_LOGGER = logging.getLogger(__name__)

ogmios_host = os.getenv("OGMIOS_API_HOST", "localhost")
ogmios_port = int(os.getenv("OGMIOS_API_PORT", "1337"))
ogmios_protocol = os.getenv("OGMIOS_API_PROTOCOL", "ws")
ogmios_url = f"{ogmios_protocol}://{ogmios_host}:{ogmios_port}"

kupo_url = os.getenv("KUPO_API_URL", None)

cardano_network = os.getenv("CARDANO_NETWORK", "preprod").lower()
network = Network.MAINNET if cardano_network == "mainnet" else Network.TESTNET

# start of the shelley era, slots are one second long from there on
SLOT_CONFIGS = {
    "mainnet": (1596059091000, 4492800),
    "preprod": (1655769600000, 86400),
    "preview": (1666656000000, 0),
}
SLOT_LENGTH_MS = 1000
zero_time, zero_slot = SLOT_CONFIGS.get(cardano_network, SLOT_CONFIGS["preprod"])


def posix_from_slot(slot: int) -> int:
    """
    The POSIX time in milliseconds at the beginning of the slot
    """
    return zero_time + (slot - zero_slot) * SLOT_LENGTH_MS


def slot_from_posix(posix_time: int) -> int:
    """
    The slot that contains the given POSIX time in milliseconds
    """
    return zero_slot + (posix_time - zero_time) // SLOT_LENGTH_MS


if kupo_url is not None:
    context = pycardano.KupoOgmiosV6ChainContext(
        ogmios_host,
        ogmios_port,
        secure=ogmios_protocol == "wss",
        network=network,
        kupo_url=kupo_url,
    )
else:
    context = pycardano.OgmiosV6ChainContext(
        ogmios_host,
        ogmios_port,
        secure=ogmios_protocol == "wss",
        network=network,
    )
_LOGGER.debug("Using chain context at %s on %s", ogmios_url, cardano_network)


def show_tx(signed_tx: pycardano.Transaction):
    print(f"transaction id: {signed_tx.id}")
    if cardano_network == "mainnet":
        print(f"Cardanoscan: https://cardanoscan.io/transaction/{signed_tx.id}")
    else:
        print(
            f"Cardanoscan: https://{cardano_network}.cardanoscan.io/transaction/{signed_tx.id}"
        )
