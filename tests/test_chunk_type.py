import pytest

from pngstruct.exceptions import InvalidByteException, InvalidLengthException
from pngstruct.images.png import ChunkType


def test_chunk_type_from_bytes():
    chunk_type = ChunkType(bytes([82, 117, 83, 116]))

    assert chunk_type.bytes() == b'RuSt'
    assert bytes(chunk_type) == b'RuSt'


def test_chunk_type_from_str():
    assert ChunkType.from_str('RuSt') == ChunkType(bytes([82, 117, 83, 116]))


@pytest.mark.parametrize('text,critical,public,reserved,safe', [
    ('RuSt', True, False, True, True),
    ('ruSt', False, False, True, True),
    ('RUSt', True, True, True, True),
    ('Rust', True, False, False, True),
    ('RuST', True, False, True, False),
    ('IHDR', True, True, True, False),
    ('tEXt', False, True, True, True),
])
def test_chunk_type_flags(text, critical, public, reserved, safe):
    chunk_type = ChunkType.from_str(text)

    assert chunk_type.is_critical() == critical
    assert chunk_type.is_public() == public
    assert chunk_type.is_reserved_bit_valid() == reserved
    assert chunk_type.is_safe_to_copy() == safe


def test_valid_chunk_is_valid():
    assert ChunkType.from_str('RuSt').is_valid()


def test_invalid_chunk_is_valid():
    assert not ChunkType.from_str('Rust').is_valid()

    with pytest.raises(InvalidByteException) as e:
        ChunkType.from_str('Ru1t')

    assert e.value.byte == ord('1')


def test_chunk_type_first_invalid_byte_is_reported():
    with pytest.raises(InvalidByteException) as e:
        ChunkType.from_str('R@1t')

    assert e.value.byte == ord('@')

    with pytest.raises(InvalidByteException) as e:
        ChunkType(b'Ru\x00t')

    assert e.value.byte == 0


@pytest.mark.parametrize('text', ['', 'Rus', 'RuStY'])
def test_chunk_type_wrong_length(text):
    with pytest.raises(InvalidLengthException) as e:
        ChunkType.from_str(text)

    assert e.value.length == len(text)


def test_chunk_type_string():
    chunk_type = ChunkType.from_str('RuSt')

    assert str(chunk_type) == 'RuSt'
    assert repr(chunk_type) == '<ChunkType(RuSt)>'


def test_chunk_type_is_hashable():
    assert len({ChunkType.from_str('RuSt'), ChunkType(b'RuSt'), ChunkType(b'rUsT')}) == 2
    assert ChunkType(b'RuSt') != ChunkType(b'rUsT')
