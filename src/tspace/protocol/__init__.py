from . import fields
from . import message
from . import codec

from .message import ClientMessage, ClientMessageType, ServerMessage, ServerMessageType
from .codec import CodecError, decode, encode


"""
Tuple-space Protocol Layer
==========================

This package defines the messages exchanged between a tuple-space client
and server, and the codec that maps them to and from JSON documents.

The protocol layer MUST NOT depend on any transport implementation.

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

Message Model (message.py)
    Immutable request/response envelopes
    - ClientMessage: put/get/query requests
    - ServerMessage: put/get results, failures
    Defines semantic meaning only

    │
    ▼
Codec (codec.py)
    ClientMessage/ServerMessage <-> JSON text
    - Per-field type tags for Tuple and Template payloads
    - CodecError for anything malformed

    │
    ▼
Field Vocabulary (fields.py)
    Status codes and canonical document key names
    Prevents string drift across system

---------------------------------------------------------------------

Below the Protocol Layer (for context)
--------------------------------------

Transport Layer (tspace.transport)
    Moves encoded envelopes
    - ZeroMQ ROUTER/DEALER

---------------------------------------------------------------------
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
