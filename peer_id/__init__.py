"""Cryptographic peer identities derived from RSA key pairs."""

from importlib.metadata import version as __version

from peer_id.config import (
    DEFAULT_IDENTITY_CONFIG,
    IdentityConfig,
)
from peer_id.crypto.keys import (
    KeyRecord,
    KeyRole,
    KeyType,
    decode_key_record,
    encode_key_record,
)
from peer_id.id import (
    PeerID,
    create_from_b58_string,
    create_from_bytes,
    create_from_hex_string,
    create_from_json,
    create_from_private_key,
    create_from_public_key,
    create_new_peer_id,
)
from peer_id.utils.logging import (
    setup_logging,
)

# Initialize logging configuration
setup_logging()

__all__ = [
    "DEFAULT_IDENTITY_CONFIG",
    "IdentityConfig",
    "KeyRecord",
    "KeyRole",
    "KeyType",
    "PeerID",
    "create_from_b58_string",
    "create_from_bytes",
    "create_from_hex_string",
    "create_from_json",
    "create_from_private_key",
    "create_from_public_key",
    "create_new_peer_id",
    "decode_key_record",
    "encode_key_record",
]

__version__ = __version("py-peer-id")
