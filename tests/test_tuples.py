import pytest

from tspace.tuples import ActualField, FieldKind, FormalField, Template, Tuple
from tspace.tuples import as_kind, as_template, as_tuple, kind_of


def test_kind_of():

    assert kind_of(1) is FieldKind.INT
    assert kind_of(True) is FieldKind.BOOL
    assert kind_of(3.0) is FieldKind.FLOAT
    assert kind_of('4') is FieldKind.STR
    assert kind_of((1, 2)) is FieldKind.TUPLE
    assert kind_of([1, 2]) is FieldKind.TUPLE
    assert kind_of(Tuple(1)) is FieldKind.TUPLE

    for bad in (None, b'bytes', {'a': 1}, object()):
        with pytest.raises(TypeError):
            kind_of(bad)


def test_as_kind():

    assert as_kind(int) is FieldKind.INT
    assert as_kind(bool) is FieldKind.BOOL
    assert as_kind(float) is FieldKind.FLOAT
    assert as_kind(str) is FieldKind.STR
    assert as_kind(tuple) is FieldKind.TUPLE
    assert as_kind(Tuple) is FieldKind.TUPLE
    assert as_kind('float') is FieldKind.FLOAT
    assert as_kind(FieldKind.STR) is FieldKind.STR

    with pytest.raises(ValueError):
        as_kind('complex')

    with pytest.raises(TypeError):
        as_kind(bytes)


def test_tuple_basics():

    tup = Tuple(1, True, 3.0, '4')

    assert len(tup) == 4
    assert tup.arity() == 4
    assert tup[0] == 1
    assert tup[3] == '4'
    assert list(tup) == [1, True, 3.0, '4']
    assert tup.kinds() == (FieldKind.INT, FieldKind.BOOL, FieldKind.FLOAT, FieldKind.STR)
    assert tup.values() == [1, True, 3.0, '4']


def test_nested_tuple():

    tup = Tuple('outer', (1, ('deep', 2.5)), [])

    assert isinstance(tup[1], Tuple)
    assert isinstance(tup[1][1], Tuple)
    assert tup.values() == ['outer', [1, ['deep', 2.5]], []]
    assert tup == Tuple('outer', Tuple(1, Tuple('deep', 2.5)), Tuple())


def test_tuple_equality():

    assert Tuple(1, 2, 3) == Tuple(1, 2, 3)
    assert hash(Tuple(1, 2, 3)) == hash(Tuple(1, 2, 3))

    assert Tuple(1, 2, 3) != Tuple(3, 2, 1)
    assert Tuple(1, 2, 3) != Tuple(1, 2)
    assert Tuple() != Tuple(0)

    # The kind of each field is part of its identity.

    assert Tuple(1) != Tuple(1.0)
    assert Tuple(1) != Tuple(True)
    assert Tuple(0) != Tuple(False)
    assert Tuple('1') != Tuple(1)

    assert Tuple(1, 2) != (1, 2)
    assert len(set((Tuple(1), Tuple(1), Tuple(True)))) == 2


def test_nan_fields_are_equal():

    first = Tuple(1.5, float('nan'), (float('nan'),))
    second = Tuple(1.5, float('nan'), (float('nan'),))

    assert first == second
    assert hash(first) == hash(second)
    assert len(set((first, second))) == 1

    assert Tuple(float('nan')) != Tuple(0.0)
    assert Tuple(float('nan')) != Tuple('nan')

    assert ActualField(float('nan')) == ActualField(float('nan'))
    assert hash(ActualField(float('nan'))) == hash(ActualField(float('nan')))
    assert Template(float('nan'), int) == Template(float('nan'), int)


def test_tuple_immutable():

    tup = Tuple(1, 2)

    with pytest.raises(AttributeError):
        tup.fields = ()

    with pytest.raises(AttributeError):
        tup.extra = 'nope'

    with pytest.raises(AttributeError):
        del tup.fields

    with pytest.raises(TypeError):
        tup[0] = 5


def test_tuple_rejects_unsupported():

    with pytest.raises(TypeError):
        Tuple(1, None)

    with pytest.raises(TypeError):
        Tuple(b'bytes')


def test_from_fields():

    tup = Tuple.from_fields([('int', 1), (FieldKind.STR, 'two'), ('tuple', [3.0])])
    assert tup == Tuple(1, 'two', (3.0,))

    with pytest.raises(TypeError):
        Tuple.from_fields([('float', 1)])

    with pytest.raises(TypeError):
        Tuple.from_fields([('int', True)])


def test_template():

    template = Template(1, int, 'x', FieldKind.FLOAT, FormalField(str), ActualField(True))

    assert len(template) == 6
    assert template.arity() == 6
    assert template[0] == ActualField(1)
    assert template[1] == FormalField(int)
    assert template[2] == ActualField('x')
    assert template[3] == FormalField('float')
    assert template[4] == FormalField(FieldKind.STR)
    assert template[5] == ActualField(True)
    assert list(template) == list(template.fields)


def test_template_equality():

    assert Template(1, FormalField(int)) == Template(1, int)
    assert hash(Template(1, FormalField(int))) == hash(Template(1, int))

    assert Template(1, int) != Template(1, float)
    assert Template(1, int) != Template(1.0, int)
    assert Template(int) != Template(ActualField(1))
    assert Template(1, int) != Template(int, 1)

    assert ActualField(1) != ActualField(True)
    assert FormalField(int) != FormalField(bool)


def test_template_immutable():

    template = Template(int)

    with pytest.raises(AttributeError):
        template.fields = ()

    with pytest.raises(AttributeError):
        template[0].kind = FieldKind.STR


def test_conversions():

    tup = Tuple(1)
    assert as_tuple(tup) is tup
    assert as_tuple([1, 'a']) == Tuple(1, 'a')

    template = Template(int)
    assert as_template(template) is template
    assert as_template(['a', int]) == Template(ActualField('a'), FormalField(int))

    with pytest.raises(TypeError):
        as_tuple('abc')

    with pytest.raises(TypeError):
        as_template(b'abc')


def test_repr():

    assert repr(Tuple(1, 'a')) == "Tuple(1, 'a')"
    assert repr(Template('a', int)) == "Template(ActualField('a'), FormalField(int))"


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
