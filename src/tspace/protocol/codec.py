"""
Wire codec for protocol envelopes.

    ClientMessage / ServerMessage  <->  JSON document

The field values of a Tuple or Template are dynamically typed: 1, 1.0, and
true are all numbers to a generic JSON decoder, and a nested tuple looks
like any other array. Every field is therefore written with an explicit
type tag:

    Tuple      [{"type": "int", "value": 1}, {"type": "tuple", "value": [...]}]
    Template   [{"actual": {"type": "str", "value": "x"}}, {"formal": "int"}]

Non-finite floats are written as strings ("inf", "-inf", "nan"), since
JSON has no representation for them.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Union

from .. import json
from ..tuples import ActualField, FieldKind, FormalField, Template, Tuple
from . import fields
from .message import ClientMessage, ClientMessageType, ServerMessage, ServerMessageType


logger = logging.getLogger(__name__)

Envelope = Union[ClientMessage, ServerMessage]


class CodecError(ValueError):
    """A document could not be decoded into a protocol envelope."""


# Encoding


def _encode_value(kind: FieldKind, value: Any) -> Any:
    if kind is FieldKind.TUPLE:
        return encode_tuple(value)
    if kind is FieldKind.FLOAT and not math.isfinite(value):
        return repr(value)
    return value


def encode_tuple(tup: Tuple) -> List[Dict[str, Any]]:
    return [
        {fields.FIELD_TYPE: kind.value, fields.FIELD_VALUE: _encode_value(kind, value)}
        for kind, value in tup.fields
    ]


def encode_template(template: Template) -> List[Dict[str, Any]]:
    encoded = []
    for pattern in template:
        if isinstance(pattern, FormalField):
            encoded.append({fields.FORMAL: pattern.kind.value})
        else:
            actual = {
                fields.FIELD_TYPE: pattern.kind.value,
                fields.FIELD_VALUE: _encode_value(pattern.kind, pattern.value),
            }
            encoded.append({fields.ACTUAL: actual})
    return encoded


def to_document(msg: Envelope) -> Dict[str, Any]:
    """Return the JSON-ready dictionary for a ClientMessage or ServerMessage."""

    if isinstance(msg, ClientMessage):
        return {
            fields.KIND:           fields.CLIENT,
            fields.MESSAGE_TYPE:   msg.message_type.value,
            fields.TARGET:         msg.target,
            fields.TUPLE:          None if msg.tuple is None else encode_tuple(msg.tuple),
            fields.TEMPLATE:       None if msg.template is None else encode_template(msg.template),
            fields.BLOCKING:       msg.blocking,
            fields.ALL:            msg.all,
            fields.CLIENT_SESSION: msg.client_session,
        }

    if isinstance(msg, ServerMessage):
        tuples = None
        if msg.tuples is not None:
            tuples = [encode_tuple(result) for result in msg.tuples]

        return {
            fields.KIND:           fields.SERVER,
            fields.MESSAGE_TYPE:   msg.message_type.value,
            fields.STATUS:         msg.status,
            fields.STATUS_CODE:    msg.status_code,
            fields.STATUS_MESSAGE: msg.status_message,
            fields.TUPLES:         tuples,
            fields.CLIENT_SESSION: msg.client_session,
        }

    raise TypeError(f"cannot encode {type(msg).__name__}, expected ClientMessage or ServerMessage")


def encode_bytes(msg: Envelope) -> bytes:
    """Serialize a message to UTF-8 JSON bytes."""
    return json.dumps(to_document(msg))


def encode(msg: Envelope) -> str:
    """Serialize a message to JSON text."""
    return encode_bytes(msg).decode("utf-8")


# Decoding


def _require(doc: Dict[str, Any], key: str, expected: type, optional: bool = False) -> Any:
    try:
        value = doc[key]
    except KeyError:
        raise CodecError(f"missing key: {key!r}") from None

    if value is None and optional:
        return None

    # bool is an int subclass; never accept one for the other.
    if not isinstance(value, expected) or (expected is not bool and isinstance(value, bool)):
        raise CodecError(f"{key!r} must be {expected.__name__}, not {type(value).__name__}")

    return value


def _decode_value(kind: FieldKind, value: Any) -> Any:
    if kind is FieldKind.TUPLE:
        if not isinstance(value, list):
            raise CodecError("nested tuple value must be an array")
        return decode_tuple(value)

    if kind is FieldKind.FLOAT:
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                raise CodecError(f"invalid float value: {value!r}") from None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        raise CodecError(f"float field holds {type(value).__name__}")

    expected = {FieldKind.INT: int, FieldKind.BOOL: bool, FieldKind.STR: str}[kind]
    if not isinstance(value, expected) or (kind is FieldKind.INT and isinstance(value, bool)):
        raise CodecError(f"{kind.value} field holds {type(value).__name__}")
    return value


def _decode_kind(tag: Any) -> FieldKind:
    try:
        return FieldKind(tag)
    except (TypeError, ValueError):
        raise CodecError(f"unknown field type tag: {tag!r}") from None


def _decode_field(entry: Any) -> tuple:
    """Return the (kind, value) pair for one encoded tuple field."""
    if not isinstance(entry, dict):
        raise CodecError("tuple field must be an object")
    kind = _decode_kind(_require(entry, fields.FIELD_TYPE, str))
    if fields.FIELD_VALUE not in entry:
        raise CodecError(f"missing key: {fields.FIELD_VALUE!r}")
    return kind, _decode_value(kind, entry[fields.FIELD_VALUE])


def decode_tuple(encoded: List[Any]) -> Tuple:
    return Tuple.from_fields(_decode_field(entry) for entry in encoded)


def decode_template(encoded: List[Any]) -> Template:
    patterns = []
    for entry in encoded:
        if not isinstance(entry, dict):
            raise CodecError("template pattern must be an object")

        if fields.FORMAL in entry:
            patterns.append(FormalField(_decode_kind(entry[fields.FORMAL])))
        elif fields.ACTUAL in entry:
            _kind, value = _decode_field(entry[fields.ACTUAL])
            patterns.append(ActualField(value))
        else:
            raise CodecError("template pattern is neither actual nor formal")

    return Template(*patterns)


def from_document(doc: Any) -> Envelope:
    """Rebuild a ClientMessage or ServerMessage from its dictionary form."""

    if not isinstance(doc, dict):
        raise CodecError("message document must be an object")

    kind = _require(doc, fields.KIND, str)
    message_type = _require(doc, fields.MESSAGE_TYPE, str)

    if kind == fields.CLIENT:
        try:
            message_type = ClientMessageType(message_type)
        except ValueError:
            raise CodecError(f"unknown client message type: {message_type!r}") from None

        tup = _require(doc, fields.TUPLE, list, optional=True)
        template = _require(doc, fields.TEMPLATE, list, optional=True)

        return ClientMessage(
            message_type,
            _require(doc, fields.TARGET, str, optional=True),
            tuple=None if tup is None else decode_tuple(tup),
            template=None if template is None else decode_template(template),
            blocking=_require(doc, fields.BLOCKING, bool),
            all=_require(doc, fields.ALL, bool),
            client_session=_require(doc, fields.CLIENT_SESSION, str, optional=True),
        )

    if kind == fields.SERVER:
        try:
            message_type = ServerMessageType(message_type)
        except ValueError:
            raise CodecError(f"unknown server message type: {message_type!r}") from None

        tuples = _require(doc, fields.TUPLES, list, optional=True)
        if tuples is not None:
            decoded = []
            for result in tuples:
                if not isinstance(result, list):
                    raise CodecError("result tuple must be an array")
                decoded.append(decode_tuple(result))
            tuples = decoded

        return ServerMessage(
            message_type,
            _require(doc, fields.STATUS, bool),
            _require(doc, fields.STATUS_CODE, str, optional=True),
            _require(doc, fields.STATUS_MESSAGE, str, optional=True),
            tuples,
            _require(doc, fields.CLIENT_SESSION, str, optional=True),
        )

    raise CodecError(f"unknown message kind: {kind!r}")


def decode(data: Union[str, bytes]) -> Envelope:
    """
    Deserialize JSON text or bytes -> ClientMessage / ServerMessage

    Raises CodecError for anything that is not a well-formed envelope.
    """

    try:
        doc = json.loads(data)
    except (json.DecodeError, ValueError, UnicodeDecodeError) as exc:
        logger.debug("undecodable message: %r", data[:200])
        raise CodecError(f"invalid JSON: {exc}") from exc

    return from_document(doc)


def decode_client(data: Union[str, bytes]) -> ClientMessage:
    msg = decode(data)
    if not isinstance(msg, ClientMessage):
        raise CodecError(f"expected a client message, got {type(msg).__name__}")
    return msg


def decode_server(data: Union[str, bytes]) -> ServerMessage:
    msg = decode(data)
    if not isinstance(msg, ServerMessage):
        raise CodecError(f"expected a server message, got {type(msg).__name__}")
    return msg
