import pytest

from pngstruct.exceptions import UnpackException, TruncatedException
from pngstruct.fields import StructField, StringField, ArrayField
from pngstruct.meta import Endianess
from pngstruct.streams import Stream


def test_structfield_conversion_raw_value():
    """Check that the attributes "value" and "raw" are the analogous
    of the integers and bytes representation for a field.

    NOTE: this should be done for all the fields."""
    field = StructField('I')

    assert field.size == 4
    assert field.raw == b'\x00\x00\x00\x00'
    assert field.value == 0

    field.value = 0xcafe

    assert field.value == 0xcafe
    assert field.raw == b'\xfe\xca\x00\x00'


def test_structfield_big_endian():
    field = StructField('I', endianess=Endianess.BIG_ENDIAN, default=0xcafe)

    assert field.raw == b'\x00\x00\xca\xfe'
    assert str(field) == '0x0000cafe'


def test_structfield_set_raw():
    field = StructField('I')

    field.raw = b'\x01\x02\x03\x04'
    assert field.value == 0x04030201

    with pytest.raises(UnpackException):
        field.raw = b'\x01\x02'


def test_structfield_unpack():
    field = StructField('I', endianess=Endianess.BIG_ENDIAN)

    field.unpack(Stream(b'\x00\x00\x00\x2a\xff'))

    assert field.value == 42

    with pytest.raises(TruncatedException) as e:
        field.unpack(Stream(b'\x00\x00'))

    assert e.value.expected == 4
    assert e.value.actual == 2


def test_stringfield():
    field = StringField(0x10)

    assert field.size == 0x10
    assert len(field.raw) == field.size
    assert field.raw == b'\x00' * field.size

    with pytest.raises(ValueError):
        field.value = b'kebab'

    data = b''.join([bytes([_]) for _ in range(0x10)])

    field.value = data

    assert field.value == data
    assert field.raw == data


def test_stringfield_needs_size():
    with pytest.raises(ValueError):
        StringField()

    assert StringField(default=b'kebab').size == 5


def test_arrayfield():
    length = 10
    array = ArrayField(StructField('I'), n=length)

    # check some basic property
    assert isinstance(array.value, list)
    assert len(array.value) == length
    assert len(array) == length

    # check that the elements are not duplicated
    assert array[0] is not array[1]

    # check the offsets make sens
    assert array[0].offset == 0
    assert array[1].offset == 4
    assert array[9].offset == 36

    # check the value are all zero
    for _ in range(len(array)):
        field = array[_]
        assert field.value == 0

    # set one and check is actually changed
    array[3].value = 0xcafebabe
    assert [_.value for _ in array] == [
        0, 0, 0, 0xcafebabe, 0, 0, 0, 0, 0, 0,
    ]

    array.clear()

    assert len(array) == 0


def test_arrayfield_unpack_until_exhausted():
    array = ArrayField(StructField('H', endianess=Endianess.BIG_ENDIAN))

    array.unpack(Stream(b'\x00\x01\x00\x02\x00\x03'))

    assert [_.value for _ in array] == [1, 2, 3]
    assert [_.offset for _ in array] == [0, 2, 4]


def test_arrayfield_unpack_chain():
    """An element failing adds its position to the chain of the exception."""
    array = ArrayField(StructField('H'))

    with pytest.raises(TruncatedException) as e:
        array.unpack(Stream(b'\x00\x01\x00'))

    assert e.value.chain == ['1']
