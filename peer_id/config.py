# peer_id/config.py
from dataclasses import dataclass
from typing import Any

from peer_id.crypto.rsa import MAX_RSA_KEY_SIZE


@dataclass(frozen=True)
class IdentityConfig:
    """Configurable values for peer identity generation."""

    # RSA modulus size used when no explicit size is requested
    key_bits: int = 2048
    # Upper bound accepted for generated keys
    max_key_bits: int = MAX_RSA_KEY_SIZE

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "IdentityConfig":
        """Create IdentityConfig from dictionary."""
        return cls(**{k: v for k, v in config.items() if k in cls.__annotations__})

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "key_bits": self.key_bits,
            "max_key_bits": self.max_key_bits,
        }


DEFAULT_IDENTITY_CONFIG = IdentityConfig()
