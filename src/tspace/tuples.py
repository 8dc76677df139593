""" Value types for the data exchanged through a tuple space. A
    :class:`Tuple` is an ordered, immutable sequence of fields; a
    :class:`Template` is an ordered, immutable sequence of patterns used to
    describe a read request. Every field carries an explicit
    :class:`FieldKind`, so that the integer 1, the float 1.0, and the
    boolean True remain distinct values all the way through the wire
    encoding.
"""

import enum
import math


class FieldKind(enum.Enum):
    """ The closed set of field kinds that can be represented on the wire.
        The enumeration value is the type tag used by the codec.
    """

    INT = 'int'
    BOOL = 'bool'
    FLOAT = 'float'
    STR = 'str'
    TUPLE = 'tuple'


# end of class FieldKind


def kind_of(value):
    """ Return the :class:`FieldKind` for the supplied Python *value*. Lists
        and Python tuples are treated as nested tuples. A :class:`TypeError`
        is raised for anything that cannot be put on the wire.
    """

    # bool is a subclass of int, it must be checked first.

    if isinstance(value, bool):
        return FieldKind.BOOL
    if isinstance(value, int):
        return FieldKind.INT
    if isinstance(value, float):
        return FieldKind.FLOAT
    if isinstance(value, str):
        return FieldKind.STR
    if isinstance(value, (Tuple, tuple, list)):
        return FieldKind.TUPLE

    raise TypeError('unsupported tuple field type: ' + type(value).__name__)


def as_kind(thing):
    """ Interpret *thing* as a :class:`FieldKind`. Acceptable inputs are a
        :class:`FieldKind`, its string tag, or one of the Python types
        ``int``, ``bool``, ``float``, ``str``, ``tuple``, ``list``, or
        :class:`Tuple`.
    """

    if isinstance(thing, FieldKind):
        return thing

    if isinstance(thing, str):
        try:
            return FieldKind(thing)
        except ValueError:
            raise ValueError('unknown field kind: ' + repr(thing))

    try:
        return _python_kinds[thing]
    except (KeyError, TypeError):
        raise TypeError('cannot interpret as a field kind: ' + repr(thing))


def _freeze(value):
    """ Return a (kind, value) pair for a single field, converting nested
        sequences into :class:`Tuple` instances.
    """

    kind = kind_of(value)

    if kind is FieldKind.TUPLE and not isinstance(value, Tuple):
        value = Tuple(*value)

    return (kind, value)


def _compare_key(kind, value):
    """ Return what equality and hashing see for a single field. Every NaN
        is the same field value; otherwise a NaN would never equal itself
        once it has been through the codec.
    """

    if kind is FieldKind.FLOAT and math.isnan(value):
        return (kind, 'nan')

    return (kind, value)


class Immutable:
    """ Shared behavior for the immutable value types in this package. Instances
        are populated once, via :func:`object.__setattr__`, in their
        constructor; any later assignment is refused.
    """

    __slots__ = ()

    def __setattr__(self, name, value):
        raise AttributeError(type(self).__name__ + ' instances are immutable')


    def __delattr__(self, name):
        raise AttributeError(type(self).__name__ + ' instances are immutable')


# end of class Immutable



class Tuple(Immutable):
    """ An ordered sequence of field values. The constructor accepts the
        field values as positional arguments::

            Tuple(1, True, 3.0, 'four', (5, 6))

        Nested sequences become nested :class:`Tuple` instances. Equality
        and hashing are structural: two tuples are equal if and only if
        they have the same arity, and each field has the same kind and
        value, in the same order. Two NaN float fields are equal.

        :ivar fields: The tuple of (:class:`FieldKind`, value) pairs.
    """

    __slots__ = ('fields',)

    def __init__(self, *values):

        fields = tuple(_freeze(value) for value in values)
        object.__setattr__(self, 'fields', fields)


    @classmethod
    def from_fields(cls, fields):
        """ Construct a :class:`Tuple` from an iterable of already-tagged
            (kind, value) pairs. The value is checked against the declared
            kind; a mismatch raises :class:`TypeError`.
        """

        checked = list()

        for kind, value in fields:
            kind = as_kind(kind)
            actual, value = _freeze(value)

            if actual is not kind:
                raise TypeError("field declared as %s holds a %s" % (kind.value, actual.value))

            checked.append((kind, value))

        instance = cls.__new__(cls)
        object.__setattr__(instance, 'fields', tuple(checked))
        return instance


    def __len__(self):
        return len(self.fields)


    def __iter__(self):
        for kind, value in self.fields:
            yield value


    def __getitem__(self, index):
        return self.fields[index][1]


    def __eq__(self, other):
        if isinstance(other, Tuple):
            return self._keys() == other._keys()
        return NotImplemented


    def __hash__(self):
        return hash((Tuple, self._keys()))


    def _keys(self):
        return tuple(_compare_key(kind, value) for kind, value in self.fields)


    def __repr__(self):
        values = ', '.join(repr(value) for value in self)
        return 'Tuple(' + values + ')'


    def arity(self):
        return len(self.fields)


    def kinds(self):
        """ Return the :class:`FieldKind` of each field, in order.
        """

        return tuple(kind for kind, value in self.fields)


    def values(self):
        """ Return the field values as a plain Python list. Nested tuples are
            likewise converted to plain lists, recursively.
        """

        values = list()

        for kind, value in self.fields:
            if kind is FieldKind.TUPLE:
                value = value.values()
            values.append(value)

        return values


# end of class Tuple



class ActualField(Immutable):
    """ A template pattern that only matches the exact *value* supplied.
    """

    __slots__ = ('kind', 'value')

    def __init__(self, value):

        kind, value = _freeze(value)
        object.__setattr__(self, 'kind', kind)
        object.__setattr__(self, 'value', value)


    def __eq__(self, other):
        if isinstance(other, ActualField):
            return _compare_key(self.kind, self.value) == _compare_key(other.kind, other.value)
        return NotImplemented


    def __hash__(self):
        return hash((ActualField, _compare_key(self.kind, self.value)))


    def __repr__(self):
        return 'ActualField(' + repr(self.value) + ')'


# end of class ActualField



class FormalField(Immutable):
    """ A template pattern accepting any value of the declared *kind*, which
        can be expressed as anything understood by :func:`as_kind`::

            FormalField(int)
            FormalField('str')
            FormalField(FieldKind.FLOAT)
    """

    __slots__ = ('kind',)

    def __init__(self, kind):
        object.__setattr__(self, 'kind', as_kind(kind))


    def __eq__(self, other):
        if isinstance(other, FormalField):
            return self.kind is other.kind
        return NotImplemented


    def __hash__(self):
        return hash((FormalField, self.kind))


    def __repr__(self):
        return 'FormalField(' + self.kind.value + ')'


# end of class FormalField



class Template(Immutable):
    """ An ordered sequence of patterns describing the tuples a read request
        is interested in. Each positional argument to the constructor is
        either an :class:`ActualField`, a :class:`FormalField`, a Python
        type or :class:`FieldKind` (shorthand for a :class:`FormalField`),
        or a plain value (shorthand for an :class:`ActualField`)::

            Template('counter', int)
            Template(ActualField(1), FormalField(str))

        How a template matches a tuple is up to the tuple-space engine; the
        template itself only records the patterns.

        :ivar fields: The tuple of pattern instances.
    """

    __slots__ = ('fields',)

    def __init__(self, *patterns):

        fields = tuple(_pattern(pattern) for pattern in patterns)
        object.__setattr__(self, 'fields', fields)


    def __len__(self):
        return len(self.fields)


    def __iter__(self):
        return iter(self.fields)


    def __getitem__(self, index):
        return self.fields[index]


    def __eq__(self, other):
        if isinstance(other, Template):
            return self.fields == other.fields
        return NotImplemented


    def __hash__(self):
        return hash((Template, self.fields))


    def __repr__(self):
        patterns = ', '.join(repr(pattern) for pattern in self.fields)
        return 'Template(' + patterns + ')'


    def arity(self):
        return len(self.fields)


# end of class Template


_python_kinds = dict()
_python_kinds[bool] = FieldKind.BOOL
_python_kinds[int] = FieldKind.INT
_python_kinds[float] = FieldKind.FLOAT
_python_kinds[str] = FieldKind.STR
_python_kinds[tuple] = FieldKind.TUPLE
_python_kinds[list] = FieldKind.TUPLE
_python_kinds[Tuple] = FieldKind.TUPLE


def _pattern(pattern):

    if isinstance(pattern, (ActualField, FormalField)):
        return pattern

    if isinstance(pattern, (FieldKind, type)):
        return FormalField(pattern)

    return ActualField(pattern)


def as_tuple(thing):
    """ Return *thing* as a :class:`Tuple`; any other sequence of field
        values is converted.
    """

    if isinstance(thing, Tuple):
        return thing

    if isinstance(thing, (str, bytes)):
        raise TypeError('a tuple cannot be built from a ' + type(thing).__name__)

    return Tuple(*thing)


def as_template(thing):
    """ Return *thing* as a :class:`Template`; any other sequence of
        patterns is converted.
    """

    if isinstance(thing, Template):
        return thing

    if isinstance(thing, (str, bytes)):
        raise TypeError('a template cannot be built from a ' + type(thing).__name__)

    return Template(*thing)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
