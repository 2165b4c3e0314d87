"""
Peer identities.

A peer id is the sha2-256 multihash of the peer's encoded public key record.
``PeerID`` values are only built by the ``create_*`` functions of this module
and are never mutated afterwards.
"""

import base64
import binascii
from collections.abc import (
    Mapping,
)
import hashlib
import logging
from typing import (
    Any,
)

import base58
import multihash

from peer_id.config import (
    DEFAULT_IDENTITY_CONFIG,
    IdentityConfig,
)
from peer_id.crypto.keys import (
    KeyRole,
    decode_key_record,
)
from peer_id.crypto.rsa import (
    RSA_PUBLIC_EXPONENT,
    create_new_key_pair,
)
from peer_id.crypto.serialization import (
    deserialize_private_key,
)
from peer_id.exceptions import (
    ConstructionError,
    EncodingError,
    MissingKeyError,
)

logger = logging.getLogger(__name__)

ID_HASH_FUNCTION = multihash.Func.sha2_256

BytesLike = bytes | bytearray | memoryview


def _owned_bytes(value: BytesLike | None, name: str) -> bytes | None:
    if value is None:
        return None
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise ConstructionError(
            f"{name} must be bytes-like, got {type(value).__name__}"
        )
    return bytes(value)


class PeerID:
    __slots__ = ("_bytes", "_private_key", "_public_key", "_b58_str", "_xor_id")

    _bytes: bytes
    _private_key: bytes | None
    _public_key: bytes | None
    _b58_str: str | None
    _xor_id: int | None

    def __init__(
        self,
        peer_id_bytes: BytesLike,
        private_key: BytesLike | None = None,
        public_key: BytesLike | None = None,
    ) -> None:
        id_bytes = _owned_bytes(peer_id_bytes, "peer id")
        if id_bytes is None:
            raise ConstructionError("a peer id needs its id bytes")
        self._bytes = id_bytes
        self._private_key = _owned_bytes(private_key, "private key")
        self._public_key = _owned_bytes(public_key, "public key")
        self._b58_str = None
        self._xor_id = None

    @property
    def id(self) -> bytes:
        return self._bytes

    @property
    def private_key(self) -> bytes | None:
        """The encoded private key record, if this identity carries one."""
        return self._private_key

    @property
    def public_key(self) -> bytes | None:
        """The encoded public key record, if this identity carries one."""
        return self._public_key

    @property
    def xor_id(self) -> int:
        if self._xor_id is None:
            self._xor_id = int(sha256_digest(self._bytes).hex(), 16)
        return self._xor_id

    def to_bytes(self) -> bytes:
        return self._bytes

    def to_hex_string(self) -> str:
        return self._bytes.hex()

    def to_base58(self) -> str:
        if self._b58_str is None:
            self._b58_str = base58.b58encode(self._bytes).decode()
        return self._b58_str

    __str__ = pretty = to_string = to_b58_string = to_base58

    def to_json(self) -> dict[str, str]:
        """
        Return the hex-encoded ``{"id", "privKey", "pubKey"}`` form.

        :raises MissingKeyError: if either key is absent; check
            ``private_key`` and ``public_key`` first
        """
        if self._private_key is None or self._public_key is None:
            missing = [
                name
                for name, value in (
                    ("privKey", self._private_key),
                    ("pubKey", self._public_key),
                )
                if value is None
            ]
            raise MissingKeyError(
                f"peer id {self} has no {' or '.join(missing)} to serialize"
            )
        return {
            "id": self._bytes.hex(),
            "privKey": self._private_key.hex(),
            "pubKey": self._public_key.hex(),
        }

    def to_print(self) -> dict[str, str | None]:
        """Human readable form, not meant to be parsed back."""
        return {
            "id": self.to_base58(),
            "privKey": None if self._private_key is None else self._private_key.hex(),
            "pubKey": None if self._public_key is None else self._public_key.hex(),
        }

    def __repr__(self) -> str:
        return f"<peer_id.id.PeerID ({self!s})>"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            return self.to_base58() == other
        elif isinstance(other, bytes):
            return self._bytes == other
        elif isinstance(other, PeerID):
            return self._bytes == other._bytes
        else:
            return NotImplemented

    def __hash__(self) -> int:
        return hash(self._bytes)


def sha256_digest(data: str | bytes) -> bytes:
    if isinstance(data, str):
        data = data.encode("utf8")
    return hashlib.sha256(data).digest()


def derive_id(public_key_record: bytes) -> bytes:
    """Return the sha2-256 multihash of an encoded public key record."""
    return multihash.digest(bytes(public_key_record), ID_HASH_FUNCTION).encode()


def _decode_hex(text: str, name: str) -> bytes:
    try:
        return binascii.unhexlify(text)
    except (ValueError, TypeError) as e:
        raise EncodingError(f"invalid hex in {name}: {e}") from e


def _decode_base64(text: str, name: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except ValueError as e:
        raise EncodingError(f"invalid base64 in {name}: {e}") from e


def _record_bytes(key: BytesLike | str, name: str) -> bytes:
    # text input is the base64 form kept in configuration files
    if isinstance(key, str):
        return _decode_base64(key, name)
    if not isinstance(key, (bytes, bytearray, memoryview)):
        raise ConstructionError(
            f"{name} must be bytes-like or a base64 string, got {type(key).__name__}"
        )
    return bytes(key)


def create_new_peer_id(
    bits: int | None = None, config: IdentityConfig | None = None
) -> PeerID:
    """
    Generate a fresh RSA key pair and the peer id derived from it.

    :param bits: RSA modulus size, defaults to ``config.key_bits``
    :param config: generation settings, defaults to ``DEFAULT_IDENTITY_CONFIG``
    :raises ProviderError: if the key pair cannot be generated
    """
    if config is None:
        config = DEFAULT_IDENTITY_CONFIG
    if bits is None:
        bits = config.key_bits

    key_pair = create_new_key_pair(bits, RSA_PUBLIC_EXPONENT, config.max_key_bits)
    public_record = key_pair.public_key.serialize()
    private_record = key_pair.private_key.serialize()

    peer_id = PeerID(derive_id(public_record), private_record, public_record)
    logger.debug(f"created peer id {peer_id} from a new {bits}-bit RSA key pair")
    return peer_id


def create_from_public_key(public_key: BytesLike | str) -> PeerID:
    """
    Build a peer id from an encoded public key record.

    The record is decoded to check that it is well formed, but the id is the
    hash of the bytes exactly as given.

    :raises FormatError: if ``public_key`` is not a valid public key record
    :raises EncodingError: if ``public_key`` is a string but not base64
    """
    data = _record_bytes(public_key, "public key")
    decode_key_record(data, KeyRole.PUBLIC)
    return PeerID(derive_id(data), None, data)


def create_from_private_key(private_key: BytesLike | str) -> PeerID:
    """
    Build a peer id from an encoded private key record.

    The public key is rebuilt from the private key's modulus and public
    exponent and re-encoded; the private key bytes are kept verbatim.

    :raises FormatError: if ``private_key`` is not a valid private key record
    :raises DecodeError: if the record's payload is not an RSA private key
    :raises EncodingError: if ``private_key`` is a string but not base64
    """
    data = _record_bytes(private_key, "private key")
    public_record = deserialize_private_key(data).get_public_key().serialize()

    peer_id = PeerID(derive_id(public_record), data, public_record)
    logger.debug(f"derived peer id {peer_id} from a private key record")
    return peer_id


def create_from_bytes(peer_id_bytes: BytesLike) -> PeerID:
    return PeerID(peer_id_bytes)


def create_from_hex_string(hex_str: str) -> PeerID:
    return create_from_bytes(_decode_hex(hex_str, "peer id"))


def create_from_b58_string(b58_str: str) -> PeerID:
    try:
        peer_id_bytes = base58.b58decode(b58_str)
    except ValueError as e:
        raise EncodingError(f"invalid base58 peer id {b58_str!r}: {e}") from e
    return create_from_bytes(peer_id_bytes)


def create_from_json(obj: Mapping[str, Any]) -> PeerID:
    """
    Build a peer id from its ``to_json`` form.

    Each field is decoded on its own; the id is not checked against the
    public key. Absent or ``None`` key fields leave the key unset.

    :raises ConstructionError: if ``obj`` has no ``id`` field
    :raises EncodingError: if a field is not valid hex
    """
    if obj.get("id") is None:
        raise ConstructionError("JSON peer id has no 'id' field")

    def optional_hex(name: str) -> bytes | None:
        value = obj.get(name)
        return None if value is None else _decode_hex(value, name)

    return PeerID(
        _decode_hex(obj["id"], "id"),
        optional_hex("privKey"),
        optional_hex("pubKey"),
    )
