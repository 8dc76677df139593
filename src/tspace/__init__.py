""" Python implementation of the tuple-space wire protocol. This includes the
    Tuple and Template value types, the request and response envelopes
    exchanged between clients and servers, the codec mapping envelopes to
    JSON, and a ZeroMQ transport carrying the encoded envelopes.
"""

# Utility components.

from . import config
from . import json

# Value types.

from . import tuples
from .tuples import ActualField, FieldKind, FormalField, Template, Tuple

# Primary public-facing interfaces.

from . import protocol
from .protocol import ClientMessage, ServerMessage

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
