from unittest.mock import (
    patch,
)

from Crypto.PublicKey import (
    RSA,
)
import pytest

from peer_id.crypto.exceptions import (
    CryptographyError,
    DecodeError,
    FormatError,
    ProviderError,
)
from peer_id.crypto.keys import (
    KeyRole,
    KeyType,
    decode_key_record,
    encode_key_record,
)
from peer_id.crypto.rsa import (
    MAX_RSA_KEY_SIZE,
    RSAPrivateKey,
    RSAPublicKey,
    validate_rsa_key_length,
)
from peer_id.crypto.serialization import (
    deserialize_private_key,
    deserialize_public_key,
)


def test_validate_rsa_key_length():
    # Test valid key size
    validate_rsa_key_length(2048)
    validate_rsa_key_length(MAX_RSA_KEY_SIZE)

    # Test key size too large
    with pytest.raises(
        CryptographyError, match=f".*exceeds maximum allowed size {MAX_RSA_KEY_SIZE}"
    ):
        RSAPrivateKey.new(MAX_RSA_KEY_SIZE + 1)

    # Test negative key size (this would be caught when creating the key)
    with pytest.raises(CryptographyError, match="RSA key size must be positive"):
        RSAPrivateKey.new(-1)

    # Test zero key size
    with pytest.raises(CryptographyError, match="RSA key size must be positive"):
        RSAPrivateKey.new(0)


def test_custom_maximum_key_size():
    with pytest.raises(CryptographyError, match="exceeds maximum allowed size 1024"):
        RSAPrivateKey.new(2048, max_bits=1024)


def test_generated_key_uses_fixed_public_exponent(rsa_key_pair):
    assert rsa_key_pair.private_key.impl.e == 65537
    assert rsa_key_pair.private_key.impl.size_in_bits() == 1024


def test_provider_rejects_undersized_key():
    with pytest.raises(ProviderError):
        RSAPrivateKey.new(512)


def test_provider_failure_is_wrapped():
    with patch.object(RSA, "generate", side_effect=ValueError("entropy exhausted")):
        with pytest.raises(ProviderError, match="entropy exhausted"):
            RSAPrivateKey.new(2048)


def test_der_encodings(rsa_key_pair):
    public_der = rsa_key_pair.public_key.to_bytes()
    private_der = rsa_key_pair.private_key.to_bytes()

    assert public_der == rsa_key_pair.private_key.impl.publickey().export_key("DER")
    assert RSA.import_key(private_der) == rsa_key_pair.private_key.impl
    assert public_der.startswith(b"\x30")
    assert private_der.startswith(b"\x30")


def test_public_key_rebuilt_from_modulus_and_exponent(rsa_key_pair):
    impl = rsa_key_pair.private_key.impl

    rebuilt = RSAPublicKey.from_numbers(impl.n, impl.e)

    assert rebuilt == rsa_key_pair.public_key
    assert not rebuilt.impl.has_private()


def test_public_key_serialize_deserialize_round_trip(rsa_key_pair):
    public_key = rsa_key_pair.public_key

    public_key_bytes = public_key.serialize()
    another_public_key = deserialize_public_key(public_key_bytes)

    assert public_key == another_public_key
    assert decode_key_record(public_key_bytes, KeyRole.PUBLIC).key_type is KeyType.RSA


def test_private_key_serialize_deserialize_round_trip(rsa_key_pair):
    private_key = rsa_key_pair.private_key

    private_key_bytes = private_key.serialize()
    another_private_key = deserialize_private_key(private_key_bytes)

    assert private_key == another_private_key
    assert another_private_key.get_public_key() == rsa_key_pair.public_key


def test_deserialize_private_key_rejects_non_der_payload():
    record = encode_key_record(b"definitely not DER", KeyRole.PRIVATE)

    with pytest.raises(DecodeError):
        deserialize_private_key(record)


def test_deserialize_private_key_rejects_public_key_payload(rsa_key_pair):
    record = encode_key_record(rsa_key_pair.public_key.to_bytes(), KeyRole.PRIVATE)

    with pytest.raises(DecodeError, match="expected an RSA private key"):
        deserialize_private_key(record)


def test_deserialize_public_key_rejects_private_key_payload(rsa_key_pair):
    record = encode_key_record(rsa_key_pair.private_key.to_bytes(), KeyRole.PUBLIC)

    with pytest.raises(DecodeError, match="expected an RSA public key"):
        deserialize_public_key(record)


def test_deserialize_private_key_rejects_malformed_record():
    with pytest.raises(FormatError):
        deserialize_private_key(b"\x08\x07\x12\x00")


def test_deserialize_private_key_rejects_pem_payload(rsa_key_pair):
    pem = rsa_key_pair.private_key.impl.export_key("PEM")
    record = encode_key_record(pem, KeyRole.PRIVATE)

    with pytest.raises(DecodeError, match="DER-encoded RSA private key"):
        deserialize_private_key(record)


def test_deserialize_public_key_rejects_pem_payload(rsa_key_pair):
    pem = rsa_key_pair.public_key.impl.export_key("PEM")
    record = encode_key_record(pem, KeyRole.PUBLIC)

    with pytest.raises(DecodeError, match="DER-encoded RSA public key"):
        deserialize_public_key(record)


def test_deserialize_private_key_rejects_trailing_bytes(rsa_key_pair):
    der = rsa_key_pair.private_key.to_bytes() + b"\x00"
    record = encode_key_record(der, KeyRole.PRIVATE)

    with pytest.raises(DecodeError):
        deserialize_private_key(record)


def test_oversized_key_imports(oversized_rsa_key):
    record = encode_key_record(oversized_rsa_key.export_key("DER"), KeyRole.PRIVATE)

    private_key = deserialize_private_key(record)

    assert private_key.impl.size_in_bits() > MAX_RSA_KEY_SIZE
    assert private_key.get_public_key() == RSAPublicKey(oversized_rsa_key.publickey())

    public_record = encode_key_record(
        oversized_rsa_key.publickey().export_key("DER"), KeyRole.PUBLIC
    )
    assert deserialize_public_key(public_record).impl.n == oversized_rsa_key.n


def test_oversized_key_generation_still_rejected(oversized_rsa_key):
    with pytest.raises(CryptographyError, match="exceeds maximum allowed size"):
        RSAPrivateKey.new(oversized_rsa_key.size_in_bits())
