"""
Identity persistence utilities for py-peer-id.

This module provides helper functions for saving and loading peer identities
as JSON files holding the hex-encoded ``{"id", "privKey", "pubKey"}`` form.

Example usage:
    >>> from peer_id.id import create_new_peer_id
    >>> from peer_id.identity_utils import save_identity, load_identity
    >>>
    >>> # Create and save an identity
    >>> peer_id = create_new_peer_id()
    >>> save_identity(peer_id, "my_peer.json")
    >>>
    >>> # Load it later
    >>> loaded_peer_id = load_identity("my_peer.json")
"""

import json
import logging
import os
from pathlib import Path

from peer_id.exceptions import BasePeerIdError
from peer_id.id import PeerID, create_from_json, create_from_private_key

logger = logging.getLogger(__name__)


def save_identity(peer_id: PeerID, filepath: str | Path) -> None:
    """
    Save a peer identity, keys included, to disk for later reuse.

    A new file is created with 0600 permissions since it holds the private
    key. An existing file is truncated and rewritten in place and keeps its
    current permissions.

    Args:
        peer_id: A fully populated PeerID
        filepath: Path where the identity will be saved

    Raises:
        MissingKeyError: If the PeerID does not carry both keys
        OSError: If the file cannot be written

    """
    filepath = Path(filepath)
    payload = json.dumps(peer_id.to_json(), indent=2).encode("utf-8")

    filepath.parent.mkdir(parents=True, exist_ok=True)

    fd = os.open(filepath, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, 0o600)
    try:
        os.write(fd, payload)
    finally:
        os.close(fd)
    logger.debug(f"saved identity {peer_id} to {filepath}")


def load_identity(filepath: str | Path, verify: bool = True) -> PeerID:
    """
    Load a peer identity from disk.

    Args:
        filepath: Path to a file written by ``save_identity``
        verify: Re-derive the id from the private key and check that it
            matches the stored id and public key

    Returns:
        The PeerID stored in the file

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file contains invalid, corrupted or inconsistent
            identity data

    """
    filepath = Path(filepath)
    text = filepath.read_text(encoding="utf-8")

    try:
        obj = json.loads(text)
        if not isinstance(obj, dict):
            raise ValueError("expected a JSON object")
        peer_id = create_from_json(obj)
    except (ValueError, BasePeerIdError) as e:
        raise ValueError(f"Invalid or corrupted identity file '{filepath}': {e}") from e

    if verify and peer_id.private_key is not None:
        try:
            derived = create_from_private_key(peer_id.private_key)
        except BasePeerIdError as e:
            raise ValueError(
                f"Corrupted private key in identity file '{filepath}': {e}"
            ) from e
        if derived != peer_id or derived.public_key != peer_id.public_key:
            raise ValueError(
                f"Identity file '{filepath}' holds an id that does not match "
                "its private key"
            )

    return peer_id


def identity_exists(filepath: str | Path) -> bool:
    """
    Check if an identity file exists at the given path.

    Example:
        >>> if identity_exists("my_peer.json"):
        ...     peer_id = load_identity("my_peer.json")
        ... else:
        ...     peer_id = create_new_peer_id()
        ...     save_identity(peer_id, "my_peer.json")

    """
    return Path(filepath).exists()
