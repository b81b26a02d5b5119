"""API models package."""

from .envelope import Envelope, ErrorEnvelope

__all__ = [
    "Envelope",
    "ErrorEnvelope",
]
