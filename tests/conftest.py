import io
import struct
import zlib

import pytest
from PIL import Image

from pngstruct.images.png import PNG_SIGNATURE, PNGChunk


MESSAGE = b'This is where your secret message will be!'
MESSAGE_CRC = 2882656334


def _build_chunk(chunk_type, data, crc=None):
    crc = zlib.crc32(chunk_type + data) if crc is None else crc

    return struct.pack('>I', len(data)) + chunk_type + data + struct.pack('>I', crc)


@pytest.fixture
def build_chunk():
    '''Build the binary representation of a chunk by hand.'''
    return _build_chunk


@pytest.fixture
def message():
    return MESSAGE


@pytest.fixture
def message_chunk_raw():
    return _build_chunk(b'RuSt', MESSAGE, crc=MESSAGE_CRC)


@pytest.fixture
def png_raw():
    '''A small PNG file made of chunks with known content.'''
    return PNG_SIGNATURE + b''.join([
        _build_chunk(b'FrSt', b'I am the first chunk'),
        _build_chunk(b'miDl', b'I am another chunk'),
        _build_chunk(b'LASt', b'I am the last chunk'),
    ])


@pytest.fixture
def real_png_raw():
    '''A real image as written by Pillow.'''
    image = Image.new('RGB', (5, 5), color='red')
    output = io.BytesIO()
    image.save(output, format='PNG')

    return output.getvalue()


@pytest.fixture
def make_chunk():
    def _make_chunk(chunk_type, data):
        return PNGChunk(type=chunk_type, data=data)

    return _make_chunk
