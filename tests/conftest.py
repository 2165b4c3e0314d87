from Crypto.PublicKey import (
    RSA,
)
import pytest

from peer_id.crypto.keys import (
    KeyRole,
    encode_key_record,
)
from peer_id.crypto.rsa import (
    create_new_key_pair,
)
from peer_id.id import (
    create_new_peer_id,
)

# pycryptodome refuses anything smaller
SMALL_KEY_BITS = 1024
# above MAX_RSA_KEY_SIZE, kept a multiple of 256
OVERSIZED_KEY_BITS = 4352


@pytest.fixture(scope="session")
def rsa_key_pair():
    return create_new_key_pair(SMALL_KEY_BITS)


@pytest.fixture(scope="session")
def peer_id():
    """A fully populated identity with the default 2048-bit key."""
    return create_new_peer_id()


@pytest.fixture(scope="session")
def small_peer_id():
    return create_new_peer_id(SMALL_KEY_BITS)


@pytest.fixture(scope="session")
def oversized_rsa_key():
    """A key generated outside the library, larger than it will generate."""
    return RSA.generate(OVERSIZED_KEY_BITS)


@pytest.fixture(scope="session")
def oversized_private_record(oversized_rsa_key):
    return encode_key_record(oversized_rsa_key.export_key("DER"), KeyRole.PRIVATE)
