"""ZeroMQ request/response transport.

A Server binds a ROUTER socket and answers each ClientMessage with a
ServerMessage; a Client connects a DEALER socket. Each ZeroMQ message carries
exactly one encoded envelope, so no framing beyond ZeroMQ's own is needed:

    DEALER -> ROUTER    [identity], request_json
    ROUTER -> DEALER    [identity], response_json
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

import zmq

from .. import config
from ..protocol import codec
from ..protocol.message import ClientMessage, ServerMessage
from .base import Transport, TransportConnectionError, TransportPortError, TransportTimeout


logger = logging.getLogger(__name__)

zmq_context = zmq.Context.instance()

Handler = Callable[[ClientMessage], ServerMessage]


class Client(Transport):
    """Issue requests via a ZeroMQ DEALER socket and receive responses."""

    def __init__(self, address: str, port: int):
        super().__init__()
        self.address = address
        self.port = int(port)
        self.socket: Optional[zmq.Socket] = None

    @property
    def is_open(self) -> bool:
        return self.socket is not None

    def open(self) -> None:
        if self.socket is not None:
            return

        server = f"tcp://{self.address}:{self.port}"
        socket = zmq_context.socket(zmq.DEALER)
        socket.setsockopt(zmq.LINGER, 0)

        try:
            socket.connect(server)
        except zmq.ZMQError as exc:
            socket.close()
            raise TransportConnectionError(f"cannot connect to {server}: {exc}") from exc

        logger.info("connected to %s", server)
        self.socket = socket

    def close(self) -> None:
        if self.socket is None:
            return
        self.socket.close()
        self.socket = None

    def send(self, msg: ClientMessage) -> None:
        self._check_open()
        self.socket.send(codec.encode_bytes(msg))

    def recv(self, timeout: Optional[float] = None) -> ServerMessage:
        self._check_open()

        if timeout is None:
            timeout = config.timeout()

        if not self.socket.poll(int(timeout * 1000), zmq.POLLIN):
            raise TransportTimeout(f"{self.address}:{self.port}: no response in {timeout:.2f} sec")

        return codec.decode_server(self.socket.recv())


class Server:
    """Receive requests via a ZeroMQ ROUTER socket, respond to them."""

    poll_interval = 0.1

    def __init__(self, handler: Handler, address: Optional[str] = None, port: Optional[int] = None):
        self.handler = handler
        self.address = address or config.address()
        self.port = int(port) if port is not None else None

        self.socket: Optional[zmq.Socket] = None
        self._shutdown = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def _bind_any(self, socket: zmq.Socket) -> int:
        minimum, maximum = config.port_range()
        try:
            return socket.bind_to_random_port(f"tcp://{self.address}", minimum, maximum + 1)
        except zmq.ZMQBindError as exc:
            raise TransportPortError(f"no available port in {minimum}-{maximum}") from exc

    def open(self) -> None:
        if self.socket is not None:
            return

        socket = zmq_context.socket(zmq.ROUTER)
        socket.setsockopt(zmq.LINGER, 0)

        try:
            if self.port is None:
                self.port = self._bind_any(socket)
            else:
                try:
                    socket.bind(f"tcp://{self.address}:{self.port}")
                except zmq.ZMQError as exc:
                    raise TransportPortError(f"port already in use: {self.port}") from exc
        except TransportPortError:
            socket.close()
            raise

        logger.info("listening on %s:%d", self.address, self.port)

        self.socket = socket
        self._shutdown.clear()
        self._thread = threading.Thread(target=self.run, daemon=True)
        self._thread.start()

    def close(self) -> None:
        if self._thread is None:
            return
        self._shutdown.set()
        self._thread.join()
        self._thread = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, *exc_info):
        self.close()

    def respond(self, data: bytes) -> ServerMessage:
        """Decode one request, hand it to the handler, return its response."""

        try:
            request = codec.decode_client(data)
        except codec.CodecError:
            logger.warning("rejecting undecodable request", exc_info=True)
            return ServerMessage.internal_error()

        try:
            response = self.handler(request)
        except Exception:
            logger.exception("handler failed for %s on %r", request.message_type.value, request.target)
            return ServerMessage.internal_error()

        if not isinstance(response, ServerMessage):
            logger.error("handler returned %s, not a ServerMessage", type(response).__name__)
            return ServerMessage.internal_error()

        return response

    def reply(self, data: bytes) -> bytes:
        """Return the encoded response to one encoded request. Never raises."""

        response = self.respond(data)

        try:
            return codec.encode_bytes(response)
        except Exception:
            logger.exception("cannot encode response %r", response)
            return codec.encode_bytes(ServerMessage.internal_error())

    def run(self) -> None:
        socket = self.socket
        poller = zmq.Poller()
        poller.register(socket, zmq.POLLIN)

        try:
            while not self._shutdown.is_set():
                for active, _flag in poller.poll(int(self.poll_interval * 1000)):
                    if active != socket:
                        continue

                    parts = socket.recv_multipart()
                    if len(parts) != 2:
                        logger.warning("dropping request with %d frames", len(parts))
                        continue

                    identity, data = parts
                    socket.send_multipart((identity, self.reply(data)))
        finally:
            socket.close()
            self.socket = None
