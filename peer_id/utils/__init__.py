"""Utility functions for py-peer-id."""

from peer_id.utils.logging import (
    setup_logging,
)

__all__ = ["setup_logging"]
