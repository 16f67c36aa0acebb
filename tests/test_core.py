import pytest

from pngstruct.core import Chunk
from pngstruct.exceptions import TruncatedException
from pngstruct.fields import StructField, StringField
from pngstruct.properties import Dependency


def test_chunk():
    """Check that building a Chunk from fields behaves correctly."""
    class Dummy(Chunk):
        a = StructField('I', default=0xbad)
        b = StringField(0x10)
        c = StructField('I', default=0xdeadbeef)

    dummy = Dummy()

    assert dummy.get_ordered_fields_name() == ['a', 'b', 'c']

    assert dummy.a.size == 4
    assert dummy.a.raw == b'\xad\x0b\x00\x00'
    assert dummy.a.value == 0xbad
    assert dummy.a.offset == 0x00
    assert dummy.a.father is dummy

    assert dummy.b.size == 0x10
    assert dummy.b.raw == b'\x00' * 0x10
    assert dummy.b.offset == 0x04

    assert dummy.c.size == 0x4
    assert dummy.c.raw == b'\xef\xbe\xad\xde'
    assert dummy.c.offset == 0x14

    assert dummy.size == 0x18
    assert len(dummy.raw) == dummy.size
    assert dummy.raw == (
        b'\xad\x0b\x00\x00' +
        b'\x00' * 0x10 +
        b'\xef\xbe\xad\xde'
    )
    assert dummy.pack() == dummy.raw


def test_chunk_fields_are_not_shared():
    class Dummy(Chunk):
        a = StructField('I')

    first = Dummy(a=1)
    second = Dummy(a=2)

    assert first.a is not second.a
    assert (first.a.value, second.a.value) == (1, 2)


def test_chunk_w_dependencies():
    class Example(Chunk):
        sz = StructField('I')
        data = StringField(Dependency('.sz'), default=b'kebab')

    example = Example()

    assert example.sz.father is example
    assert example.sz.value == 5
    assert example.data.value == b'kebab'

    # setting the data writes back the size
    example.data = b'kebab with onions'

    assert example.sz.value == 17
    assert example.size == 4 + 17


def test_chunk_unpack_w_dependencies():
    class Example(Chunk):
        sz = StructField('I')
        data = StringField(Dependency('.sz'))

    example = Example(b'\x03\x00\x00\x00abc')

    assert example.sz.value == 3
    assert example.data.value == b'abc'
    assert example.layout == {
        'sz': (0, 4),
        'data': (4, 3),
    }

    with pytest.raises(TruncatedException) as e:
        Example(b'\x04\x00\x00\x00abc')

    assert e.value.chain == ['data']


def test_inheritance():
    '''subclasses inherit fields'''
    class Father(Chunk):
        field_a = StringField(0x10)
        field_b = StructField("I")

    class Son(Father):
        field_c = StringField(0x08)

    field_b_value = b'\x01\x02\x03\x04'
    field_c_value = b'ABCDEFGH'
    son = Son(b'A' * 16 + field_b_value + field_c_value)

    assert [_ for _, __ in son.get_fields()] == [
        'field_a', 'field_b', 'field_c',
    ]

    # check values make sense
    assert son.field_b.value == 0x04030201
    assert son.field_c.value == field_c_value


def test_immutable_chunk():
    class Frozen(Chunk):
        immutable = True

        a = StructField('I')

    frozen = Frozen(a=0xcafe)

    with pytest.raises(AttributeError):
        frozen.a = 1

    with pytest.raises(AttributeError):
        frozen.a.value = 1

    assert frozen.a.value == 0xcafe


def test_unpack_and_values_are_exclusive():
    class Dummy(Chunk):
        a = StructField('I')

    with pytest.raises(ValueError):
        Dummy(b'\x00\x00\x00\x00', a=1)


def test_proxy_like_format():
    """Check that a file format having sub-components made of other chunks
    behaves gently."""

    class Proxy(Chunk):
        off = StructField('I')
        sz = StructField('I')

    class Experiment(Chunk):
        proxy_a = Proxy()
        proxy_b = Proxy()

        contents = StringField(0x100)

    experiment = Experiment()

    assert experiment.proxy_a is not experiment.proxy_b
    assert experiment.proxy_a.father is experiment

    assert experiment.layout == {
        'proxy_a': (0, 8),
        'proxy_b': (8, 8),
        'contents': (16, 256),
    }

    assert experiment.size == 0x100 + 2 * (4 + 4)
    assert len(experiment.raw) == experiment.size
    assert experiment.raw == b'\x00' * experiment.size
