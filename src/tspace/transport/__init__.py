"""Transport layer implementations."""

from .base import (
    Transport,
    TransportError,
    TransportTimeout,
    TransportConnectionError,
    TransportPortError,
)
