"""Client side of a tuple-space transport.

A transport moves encoded envelopes; the request/response correlation is the
same for every backend and lives here. A backend supplies open/close and the
two primitive operations:

    send(ClientMessage)             put one request on the wire
    recv(timeout) -> ServerMessage  take the next response off the wire

Responses are correlated to requests by session: the server echoes the
client_session of the request it answers, except for a server-level failure,
which carries no session at all.
"""

from __future__ import annotations

import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Optional

from .. import config
from ..protocol.message import ClientMessage, ServerMessage


logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Base class for errors raised while moving envelopes between peers."""


class TransportTimeout(TransportError):
    """A request was not answered within its timeout."""


class TransportConnectionError(TransportError):
    """The socket is closed, or could not be connected."""


class TransportPortError(TransportError):
    """The requested port, or every port in the configured range, is taken."""


class Transport(ABC):

    def __init__(self):
        self._request_lock = threading.Lock()

    @abstractmethod
    def open(self) -> None:
        ...

    @abstractmethod
    def close(self) -> None:
        ...

    @property
    @abstractmethod
    def is_open(self) -> bool:
        ...

    @abstractmethod
    def send(self, msg: ClientMessage) -> None:
        ...

    @abstractmethod
    def recv(self, timeout: Optional[float] = None) -> ServerMessage:
        """Raise TransportTimeout if nothing arrives within *timeout* seconds."""

    def _check_open(self) -> None:
        if not self.is_open:
            raise TransportConnectionError(f"{type(self).__name__} is not open")

    def request(self, msg: ClientMessage, timeout: Optional[float] = None) -> ServerMessage:
        """
        Send *msg* and wait for the matching response.

        A response carrying some other session is a late reply to an earlier,
        timed-out request; it is discarded. A response without a session is a
        server-level failure and is always returned. Concurrent callers are
        serialized, one request in flight at a time.
        """

        if timeout is None:
            timeout = config.timeout()

        deadline = time.monotonic() + timeout

        with self._request_lock:
            self.send(msg)

            while True:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise TransportTimeout(
                        f"{msg.message_type.value} for session {msg.client_session!r}: no response in {timeout:.2f} sec"
                    )

                response = self.recv(remaining)

                if response.client_session is None or response.client_session == msg.client_session:
                    return response

                logger.debug("discarding response for session %r", response.client_session)

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, *exc_info):
        self.close()
