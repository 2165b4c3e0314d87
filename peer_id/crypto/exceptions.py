from peer_id.exceptions import (
    BasePeerIdError,
)


class CryptographyError(BasePeerIdError):
    pass


class FormatError(CryptographyError):
    """
    Raise if a serialized key record is truncated, violates the record
    schema or carries an unrecognized key type tag.
    """


class MissingDeserializerError(FormatError):
    """
    Raise if the requested deserialization routine is missing for some type
    of cryptographic key.
    """


class DecodeError(CryptographyError):
    """Raise if the DER payload of a key record cannot be parsed."""


class ProviderError(CryptographyError):
    """Raise if the underlying crypto provider fails to generate a key."""
