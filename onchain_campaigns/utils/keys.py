from pathlib import Path

from pycardano import (
    Address,
    Network,
    PaymentSigningKey,
    PaymentVerificationKey,
)

from .network import network as default_network

keys_dir = Path(__file__).parent.parent.parent / "keys"


def get_signing_info(name: str, network: Network = default_network):
    skey_path = keys_dir / f"{name}.skey"
    payment_skey = PaymentSigningKey.load(str(skey_path))
    payment_vkey = PaymentVerificationKey.from_signing_key(payment_skey)
    payment_address = Address(payment_vkey.hash(), network=network)
    return payment_vkey, payment_skey, payment_address


def get_address(name: str, network: Network = default_network) -> Address:
    vkey_path = keys_dir / f"{name}.vkey"
    if vkey_path.exists():
        payment_vkey = PaymentVerificationKey.load(str(vkey_path))
        return Address(payment_vkey.hash(), network=network)
    _, _, payment_address = get_signing_info(name, network=network)
    return payment_address
