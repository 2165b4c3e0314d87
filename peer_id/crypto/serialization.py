from peer_id.crypto.exceptions import (
    MissingDeserializerError,
)
from peer_id.crypto.keys import (
    KeyRole,
    KeyType,
    PrivateKey,
    PublicKey,
    decode_key_record,
)
from peer_id.crypto.rsa import (
    RSAPrivateKey,
    RSAPublicKey,
)

key_type_to_public_key_deserializer = {
    KeyType.RSA: RSAPublicKey.from_bytes,
}

key_type_to_private_key_deserializer = {
    KeyType.RSA: RSAPrivateKey.from_bytes,
}


def deserialize_public_key(data: bytes) -> PublicKey:
    record = decode_key_record(data, KeyRole.PUBLIC)
    try:
        deserializer = key_type_to_public_key_deserializer[record.key_type]
    except KeyError as e:
        raise MissingDeserializerError(
            {"key_type": record.key_type, "key": "public_key"}
        ) from e
    return deserializer(record.data)


def deserialize_private_key(data: bytes) -> PrivateKey:
    record = decode_key_record(data, KeyRole.PRIVATE)
    try:
        deserializer = key_type_to_private_key_deserializer[record.key_type]
    except KeyError as e:
        raise MissingDeserializerError(
            {"key_type": record.key_type, "key": "private_key"}
        ) from e
    return deserializer(record.data)
