from .network import network, ogmios_url, kupo_url
from .keys import get_signing_info, get_address
