import threading

import pytest

from tspace.protocol import codec
from tspace.protocol.message import ClientMessage, ClientMessageType, ServerMessage
from tspace.transport import TransportConnectionError, TransportPortError, TransportTimeout
from tspace.transport import zmq as transport


class Space:
    """ A trivial stand-in for a tuple-space engine: it stores every tuple
        it is given, and answers reads with every stored tuple whose arity
        matches the template.
    """

    def __init__(self):
        self.tuples = list()
        self.lock = threading.Lock()

    def __call__(self, request):

        if request.message_type is ClientMessageType.PUT_REQUEST:
            with self.lock:
                self.tuples.append(request.tuple)
            return ServerMessage.successful_put(request.client_session)

        if request.target == 'explode':
            raise RuntimeError('engine failure')

        with self.lock:
            matches = [tup for tup in self.tuples if len(tup) == len(request.template)]
            if request.message_type is ClientMessageType.GET_REQUEST:
                for tup in matches:
                    self.tuples.remove(tup)

        return ServerMessage.get_result(matches, request.client_session)


@pytest.fixture
def server():

    server = transport.Server(Space(), address='127.0.0.1')
    server.open()
    yield server
    server.close()


@pytest.fixture
def client(server):

    client = transport.Client('127.0.0.1', server.port)
    client.open()
    yield client
    client.close()


def test_put_and_get(client):

    response = client.request(ClientMessage.put_request('space', [1, 'a\r\n"'], 'sess1'), timeout=5)
    assert response == ServerMessage.successful_put('sess1')

    response = client.request(ClientMessage.query_request('space', [int, str], 'sess2'), timeout=5)
    assert response == ServerMessage.get_result([[1, 'a\r\n"']], 'sess2')

    response = client.request(ClientMessage.get_request('space', [int, str], 'sess3'), timeout=5)
    assert response.result_tuples() == [[1, 'a\r\n"']]

    response = client.request(ClientMessage.get_request('space', [int, str], 'sess4'), timeout=5)
    assert response.is_successful()
    assert response.result_tuples() == []


def test_handler_failure(client):

    request = ClientMessage.get_request('explode', [int], 'sess')
    response = client.request(request, timeout=5)

    assert response == ServerMessage.internal_error()
    assert response.client_session is None


def test_undecodable_request(server):

    client = transport.Client('127.0.0.1', server.port)
    client.open()

    try:
        client.socket.send(b'{"kind": "client"')
        response = client.recv(timeout=5)
    finally:
        client.close()

    assert response == ServerMessage.internal_error()


def test_respond_rejects_bad_handler_result():

    server = transport.Server(lambda request: 'not a message')
    data = codec.encode_bytes(ClientMessage.put_request('space', [1], 's'))

    assert server.respond(data) == ServerMessage.internal_error()


def test_timeout():

    # Nothing listens on this port; the connect succeeds lazily, the
    # request never gets an answer.

    silent = transport.Server(Space(), address='127.0.0.1')
    silent.open()
    port = silent.port
    silent.close()

    client = transport.Client('127.0.0.1', port)
    client.open()

    try:
        with pytest.raises(TransportTimeout):
            client.request(ClientMessage.put_request('space', [1], 's'), timeout=0.2)
    finally:
        client.close()


def test_closed_client():

    client = transport.Client('127.0.0.1', 1)

    assert not client.is_open

    with pytest.raises(TransportConnectionError):
        client.send(ClientMessage.put_request('space', [1], 's'))

    with pytest.raises(TransportConnectionError):
        client.recv(timeout=0.01)


def test_port_in_use(server):

    duplicate = transport.Server(Space(), address='127.0.0.1', port=server.port)

    with pytest.raises(TransportPortError):
        duplicate.open()


def test_port_range(monkeypatch):

    monkeypatch.setenv('TSPACE_MIN_PORT', '15000')
    monkeypatch.setenv('TSPACE_MAX_PORT', '15999')

    with transport.Server(Space(), address='127.0.0.1') as server:
        assert 15000 <= server.port <= 15999


def test_context_manager(server):

    with transport.Client('127.0.0.1', server.port) as client:
        assert client.is_open
        response = client.request(ClientMessage.put_request('space', [1], 's'), timeout=5)
        assert response.is_successful()

    assert not client.is_open


def test_discards_stale_responses(server):

    with transport.Client('127.0.0.1', server.port) as client:

        # A response for an earlier session, already waiting in the socket,
        # must not be mistaken for the response to the next request.

        client.send(ClientMessage.put_request('space', [1], 'stale'))
        response = client.request(ClientMessage.put_request('space', [2], 'fresh'), timeout=5)

    assert response.client_session == 'fresh'



def test_unencodable_response_keeps_server_alive():

    def handler(request):
        if request.client_session == 'bad':
            return ServerMessage.successful_put(object())
        return ServerMessage.successful_put(request.client_session)

    with transport.Server(handler, address='127.0.0.1') as server:
        with transport.Client('127.0.0.1', server.port) as client:

            response = client.request(ClientMessage.put_request('space', [1], 'bad'), timeout=5)
            assert response == ServerMessage.internal_error()

            response = client.request(ClientMessage.put_request('space', [2], 'good'), timeout=5)
            assert response == ServerMessage.successful_put('good')

        assert server._thread.is_alive()


def test_reply_always_encodes():

    server = transport.Server(lambda request: ServerMessage.get_result([], object()))
    data = codec.encode_bytes(ClientMessage.get_request('space', [int], 's'))

    assert codec.decode(server.reply(data)) == ServerMessage.internal_error()
    assert codec.decode(server.reply(b'garbage')) == ServerMessage.internal_error()


def test_request_requires_open_transport():

    client = transport.Client('127.0.0.1', 1)

    with pytest.raises(TransportConnectionError):
        client.request(ClientMessage.put_request('space', [1], 's'), timeout=0.1)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
