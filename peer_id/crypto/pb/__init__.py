"""
Protocol buffer package for key records.

Contains the protobuf bindings for the ``KeyType``, ``PublicKey`` and
``PrivateKey`` definitions in ``crypto.proto``.
"""

from .crypto_pb2 import (
    KeyType,
    PrivateKey,
    PublicKey,
)

__all__ = ["KeyType", "PrivateKey", "PublicKey"]
