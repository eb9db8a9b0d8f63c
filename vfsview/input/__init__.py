"""Input-layer public API for terminal key decoding."""

from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = ["read_key", "ESC_SEQUENCE_TIMEOUT_MS"]
