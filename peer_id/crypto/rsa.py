import logging

import Crypto.PublicKey.RSA as RSA
from Crypto.PublicKey.RSA import (
    RsaKey,
)
from Crypto.Util.asn1 import (
    DerSequence,
)

from peer_id.crypto.exceptions import (
    CryptographyError,
    DecodeError,
    ProviderError,
)
from peer_id.crypto.keys import (
    KeyPair,
    KeyType,
    PrivateKey,
    PublicKey,
)

MAX_RSA_KEY_SIZE = 4096
RSA_PUBLIC_EXPONENT = 65537

logger = logging.getLogger(__name__)


def validate_rsa_key_length(
    key_length: int, max_key_length: int = MAX_RSA_KEY_SIZE
) -> None:
    """
    Validate that the RSA key length is positive and within the allowed maximum.

    :param key_length: RSA key size in bits.
    :param max_key_length: largest accepted key size in bits.
    :raises CryptographyError:
        If the key size is not positive or exceeds ``max_key_length``.
    """
    if key_length <= 0:
        raise CryptographyError("RSA key size must be positive")
    if key_length > max_key_length:
        raise CryptographyError(
            f"RSA key size {key_length} exceeds maximum allowed size {max_key_length}"
        )


def _import_der(key_bytes: bytes, kind: str) -> RsaKey:
    key_bytes = bytes(key_bytes)
    try:
        # import_key also takes PEM and OpenSSH text; only a DER SEQUENCE is valid
        DerSequence().decode(key_bytes, strict=True)
        return RSA.import_key(key_bytes)
    except (ValueError, IndexError, TypeError) as e:
        raise DecodeError(f"cannot parse DER-encoded RSA {kind} key: {e}") from e


class RSAPublicKey(PublicKey):
    def __init__(self, impl: RsaKey) -> None:
        self.impl = impl

    def to_bytes(self) -> bytes:
        # SubjectPublicKeyInfo
        return self.impl.export_key("DER")

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> "RSAPublicKey":
        rsakey = _import_der(key_bytes, "public")
        if rsakey.has_private():
            raise DecodeError("expected an RSA public key, got a private key")
        return cls(rsakey)

    @classmethod
    def from_numbers(cls, n: int, e: int) -> "RSAPublicKey":
        """Rebuild a public key from its modulus and public exponent."""
        return cls(RSA.construct((n, e)))

    def get_type(self) -> KeyType:
        return KeyType.RSA


class RSAPrivateKey(PrivateKey):
    def __init__(self, impl: RsaKey) -> None:
        self.impl = impl

    @classmethod
    def new(
        cls,
        bits: int = 2048,
        e: int = RSA_PUBLIC_EXPONENT,
        max_bits: int = MAX_RSA_KEY_SIZE,
    ) -> "RSAPrivateKey":
        validate_rsa_key_length(bits, max_bits)
        try:
            private_key_impl = RSA.generate(bits, e=e)
        except (ValueError, OSError) as err:
            raise ProviderError(
                f"failed to generate a {bits}-bit RSA key: {err}"
            ) from err
        logger.debug(f"generated {bits}-bit RSA key with public exponent {e}")
        return cls(private_key_impl)

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> "RSAPrivateKey":
        rsakey = _import_der(key_bytes, "private")
        if not rsakey.has_private():
            raise DecodeError("expected an RSA private key, got a public key")
        return cls(rsakey)

    def to_bytes(self) -> bytes:
        # PKCS#1 RSAPrivateKey
        return self.impl.export_key("DER")

    def get_type(self) -> KeyType:
        return KeyType.RSA

    def get_public_key(self) -> PublicKey:
        return RSAPublicKey.from_numbers(self.impl.n, self.impl.e)


def create_new_key_pair(
    bits: int = 2048, e: int = RSA_PUBLIC_EXPONENT, max_bits: int = MAX_RSA_KEY_SIZE
) -> KeyPair:
    """
    Returns a new RSA keypair with the requested key size (``bits``) and the
    given public exponent ``e``.

    Sane defaults are provided for both values.
    """
    private_key = RSAPrivateKey.new(bits, e, max_bits)
    public_key = private_key.get_public_key()
    return KeyPair(private_key, public_key)
