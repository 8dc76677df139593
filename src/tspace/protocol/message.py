""" A class representation of the request and response envelopes exchanged
    between a tuple-space client and server. Both envelopes are immutable
    value objects: they are created once, passed through the codec and the
    transport, and compared structurally.
"""

import enum

from ..tuples import Immutable, as_template, as_tuple
from . import fields


class ClientMessageType(enum.Enum):
    PUT_REQUEST = 'PUT_REQUEST'
    GET_REQUEST = 'GET_REQUEST'
    QUERY_REQUEST = 'QUERY_REQUEST'


class ServerMessageType(enum.Enum):
    PUT_RESPONSE = 'PUT_RESPONSE'
    GET_RESPONSE = 'GET_RESPONSE'
    FAILURE = 'FAILURE'


write_types = frozenset((ClientMessageType.PUT_REQUEST,))
read_types = frozenset((ClientMessageType.GET_REQUEST, ClientMessageType.QUERY_REQUEST))


class ClientMessage(Immutable):
    """ The :class:`ClientMessage` is the request envelope sent from a client
        to a server. The fields are, in order, the *message_type*, the
        *target* space the request is directed at, the *tuple* payload for
        write requests, the *template* payload for read requests, the two
        protocol flags *blocking* and *all*, and the opaque *client_session*
        the server will echo in its response.

        The constructor does not enforce which payload accompanies which
        request type; the :func:`put_request`, :func:`get_request`, and
        :func:`query_request` class methods do, and are the expected way to
        build a request.
    """

    __slots__ = ('message_type', 'target', 'tuple', 'template', 'blocking', 'all', 'client_session')

    def __init__(self, message_type, target, tuple=None, template=None, blocking=False, all=False, client_session=None):

        message_type = ClientMessageType(message_type)

        if tuple is not None:
            tuple = as_tuple(tuple)

        if template is not None:
            template = as_template(template)

        object.__setattr__(self, 'message_type', message_type)
        object.__setattr__(self, 'target', target)
        object.__setattr__(self, 'tuple', tuple)
        object.__setattr__(self, 'template', template)
        object.__setattr__(self, 'blocking', bool(blocking))
        object.__setattr__(self, 'all', bool(all))
        object.__setattr__(self, 'client_session', client_session)


    @classmethod
    def put_request(cls, target, tuple, client_session):
        """ Request that *tuple* be added to the *target* space.
        """

        if tuple is None:
            raise ValueError('a put request requires a tuple')

        return cls(ClientMessageType.PUT_REQUEST, target, tuple=tuple, client_session=client_session)


    @classmethod
    def get_request(cls, target, template, client_session, blocking=True, all=False):
        """ Request the removal of tuples matching *template* from the
            *target* space. If *blocking* is True the server holds the request
            until a match is available; if *all* is True every match is
            returned instead of a single one.
        """

        if template is None:
            raise ValueError('a get request requires a template')

        return cls(ClientMessageType.GET_REQUEST, target, template=template, blocking=blocking, all=all, client_session=client_session)


    @classmethod
    def query_request(cls, target, template, client_session, blocking=True, all=False):
        """ Same as :func:`get_request`, except that matching tuples are
            left in the space.
        """

        if template is None:
            raise ValueError('a query request requires a template')

        return cls(ClientMessageType.QUERY_REQUEST, target, template=template, blocking=blocking, all=all, client_session=client_session)


    def is_write(self):
        return self.message_type in write_types


    def is_read(self):
        return self.message_type in read_types


    def _key(self):
        return (self.message_type, self.target, self.tuple, self.template, self.blocking, self.all, self.client_session)


    def __eq__(self, other):
        if isinstance(other, ClientMessage):
            return self._key() == other._key()
        return NotImplemented


    def __hash__(self):
        return hash((ClientMessage,) + self._key())


    def __repr__(self):
        parts = list()
        for name in self.__slots__:
            value = getattr(self, name)
            if name == 'message_type':
                value = value.value
            parts.append(name + '=' + repr(value))

        return 'ClientMessage(' + ', '.join(parts) + ')'


# end of class ClientMessage



class ServerMessage(Immutable):
    """ The :class:`ServerMessage` is the response envelope sent from a
        server to a client. The *status* flag indicates success; the
        *status_code* and *status_message* are open strings, conventionally
        one of the pairings defined in :mod:`tspace.protocol.fields`. The
        *tuples* sequence is only present for a successful response that
        carries results, and is None otherwise; an empty sequence is a
        legitimate result, distinct from None. The *client_session* is the
        session of the request that triggered the response, or None for a
        server-level failure that cannot be attributed to any request.

        The constructor accepts any combination of values. The factory class
        methods are the expected way to build a response, and always produce
        a consistent combination of type, status, code, and message.
    """

    __slots__ = ('message_type', 'status', 'status_code', 'status_message', 'tuples', 'client_session')

    def __init__(self, message_type, status, status_code, status_message, tuples=None, client_session=None):

        message_type = ServerMessageType(message_type)

        if tuples is not None:
            tuples = tuple(as_tuple(result) for result in tuples)

        object.__setattr__(self, 'message_type', message_type)
        object.__setattr__(self, 'status', bool(status))
        object.__setattr__(self, 'status_code', status_code)
        object.__setattr__(self, 'status_message', status_message)
        object.__setattr__(self, 'tuples', tuples)
        object.__setattr__(self, 'client_session', client_session)


    @classmethod
    def successful_put(cls, client_session):
        return cls(ServerMessageType.PUT_RESPONSE, True, fields.CODE200, fields.OK_STATUS, None, client_session)


    @classmethod
    def failed_put(cls, client_session):
        return cls(ServerMessageType.PUT_RESPONSE, False, fields.CODE400, fields.BAD_REQUEST, None, client_session)


    @classmethod
    def put_response(cls, status, client_session):
        """ Return :func:`successful_put` or :func:`failed_put` according to
            the *status* flag.
        """

        if status:
            return cls.successful_put(client_session)
        else:
            return cls.failed_put(client_session)


    @classmethod
    def get_result(cls, tuples, client_session):
        """ Return a successful response carrying *tuples*, a sequence whose
            elements are :class:`tspace.tuples.Tuple` instances or plain
            sequences of field values.
        """

        if tuples is None:
            raise ValueError('a get result requires a sequence of tuples, even if empty')

        return cls(ServerMessageType.GET_RESPONSE, True, fields.CODE200, fields.OK_STATUS, tuples, client_session)


    @classmethod
    def bad_request(cls, client_session):
        return cls(ServerMessageType.FAILURE, False, fields.CODE400, fields.BAD_REQUEST, None, client_session)


    @classmethod
    def internal_error(cls):
        """ A server-level failure. The session is deliberately left empty:
            the failure is not tied to any one client's request.
        """

        return cls(ServerMessageType.FAILURE, False, fields.CODE500, fields.SERVER_ERROR, None, None)


    def is_successful(self):
        return self.status


    def result_tuples(self):
        """ Return the results as a list of plain lists of field values, one
            per result tuple, in the order they were given. A response without
            results returns an empty list.
        """

        if self.tuples is None:
            return list()

        return [result.values() for result in self.tuples]


    def _key(self):
        return (self.message_type, self.status, self.status_code, self.status_message, self.tuples, self.client_session)


    def __eq__(self, other):
        if isinstance(other, ServerMessage):
            return self._key() == other._key()
        return NotImplemented


    def __hash__(self):
        return hash((ServerMessage,) + self._key())


    def __repr__(self):
        parts = list()
        for name in self.__slots__:
            value = getattr(self, name)
            if name == 'message_type':
                value = value.value
            parts.append(name + '=' + repr(value))

        return 'ServerMessage(' + ', '.join(parts) + ')'


# end of class ServerMessage


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
