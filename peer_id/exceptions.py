class BasePeerIdError(Exception):
    pass


class ConstructionError(BasePeerIdError):
    """Raised when a ``PeerID`` is built from arguments it cannot hold."""


class MissingKeyError(ConstructionError):
    """
    Raised when an operation needs key material that the ``PeerID`` does not
    carry, e.g. ``to_json`` on an identity built from its id alone.
    """


class EncodingError(BasePeerIdError, ValueError):
    """Raised on invalid hex, base58 or base64 text input."""
