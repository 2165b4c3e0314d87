"""Key types, key records and interfaces."""

from abc import (
    ABC,
    abstractmethod,
)
from dataclasses import (
    dataclass,
)
from enum import (
    Enum,
    unique,
)

from google.protobuf.message import (
    DecodeError as ProtobufDecodeError,
    EncodeError as ProtobufEncodeError,
    Message,
)

from peer_id.crypto.exceptions import (
    FormatError,
)
from peer_id.crypto.pb import (
    crypto_pb2,
)


@unique
class KeyType(Enum):
    RSA = crypto_pb2.KeyType.RSA


@unique
class KeyRole(Enum):
    """Which half of a key pair a ``KeyRecord`` wraps."""

    PUBLIC = "Public"
    PRIVATE = "Private"


@dataclass(frozen=True)
class KeyRecord:
    """A decoded key record: a key type tag plus the raw DER key bytes."""

    key_type: KeyType
    role: KeyRole
    data: bytes


def _record_message_class(role: KeyRole) -> type[Message]:
    match role:
        case KeyRole.PUBLIC:
            return crypto_pb2.PublicKey
        case KeyRole.PRIVATE:
            return crypto_pb2.PrivateKey
        case _:
            raise TypeError(f"expected a KeyRole, got {role!r}")


def _coerce_key_type(key_type: KeyType | int) -> KeyType:
    if isinstance(key_type, KeyType):
        return key_type
    try:
        return KeyType(key_type)
    except ValueError as e:
        raise FormatError(f"unrecognized key type tag {key_type!r}") from e


def encode_key_record(
    data: bytes, role: KeyRole, key_type: KeyType | int = KeyType.RSA
) -> bytes:
    """
    Serialize ``data`` into a tagged key record.

    :param data: raw DER-encoded key bytes, possibly empty
    :param role: selects the ``PublicKey`` or ``PrivateKey`` message
    :param key_type: the key algorithm tag; only ``KeyType.RSA`` is defined
    :raises FormatError: if ``key_type`` is not a defined key type
    """
    message_class = _record_message_class(role)
    key_type = _coerce_key_type(key_type)
    record = message_class(Type=key_type.value, Data=bytes(data))
    try:
        return record.SerializeToString()
    except ProtobufEncodeError as e:
        raise FormatError(f"cannot encode {role.value.lower()} key record") from e


def decode_key_record(data: bytes, role: KeyRole) -> KeyRecord:
    """
    Parse a tagged key record produced by ``encode_key_record``.

    :raises FormatError: on truncated input, a field that violates the
        record schema, a missing field or an unrecognized key type tag
    """
    message_class = _record_message_class(role)
    try:
        record = message_class.FromString(bytes(data))
    except ProtobufDecodeError as e:
        raise FormatError(f"malformed {role.value.lower()} key record: {e}") from e

    # closed enum: an unknown ``Type`` value lands in the unknown fields and
    # leaves the required field unset
    if not record.IsInitialized():
        missing = ", ".join(record.FindInitializationErrors())
        raise FormatError(
            f"{role.value.lower()} key record is missing or has an "
            f"unrecognized value for: {missing}"
        )

    return KeyRecord(_coerce_key_type(record.Type), role, record.Data)


class Key(ABC):
    """A ``Key`` represents a cryptographic key."""

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Returns the DER representation of this key."""
        ...

    @abstractmethod
    def get_type(self) -> KeyType:
        """Returns the ``KeyType`` for ``self``."""
        ...

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Key):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()


class PublicKey(Key):
    """A ``PublicKey`` represents a cryptographic public key."""

    def serialize(self) -> bytes:
        """Return the canonical key record serialization of this ``Key``."""
        return encode_key_record(self.to_bytes(), KeyRole.PUBLIC, self.get_type())


class PrivateKey(Key):
    """A ``PrivateKey`` represents a cryptographic private key."""

    @abstractmethod
    def get_public_key(self) -> PublicKey: ...

    def serialize(self) -> bytes:
        """Return the canonical key record serialization of this ``Key``."""
        return encode_key_record(self.to_bytes(), KeyRole.PRIVATE, self.get_type())


@dataclass(frozen=True)
class KeyPair:
    private_key: PrivateKey
    public_key: PublicKey
