'''
# Portable Network Graphics

Format created to replace patent-emcumbered GIF files.

The specification is at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html> and
is available a full test-suite with a lot of PNG images covering all
the possible cases at <http://www.schaik.com/pngsuite/>.

A PNG file is the signature followed by a sequence of chunks; here the
chunks are not interpreted, only framed and checked, so that any file
can be unpacked and packed back byte for byte.

'''
from typing import Optional, Tuple

from bitstring import BitArray

from pngstruct.core import Chunk
from pngstruct import fields
from pngstruct.enum import Compliant
from pngstruct.common import crc
from pngstruct.properties import Dependency
from pngstruct.exceptions import (
    InvalidByteException,
    InvalidLengthException,
    LengthTooLargeException,
    ReservedBitException,
    ChunkNotFoundException,
    NonTextDataException,
)


PNG_SIGNATURE = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'

# the length is an unsigned 32 bit integer but the top bit is reserved
MAXIMUM_LENGTH = 2 ** 31 - 1


class ChunkType(object):
    '''The four bytes identifying the kind of a chunk.

    Each byte must be an ASCII letter and bit 5 of each byte (the one that
    gives the case of the letter) has a meaning:

     1. first byte: ancillary bit, uppercase means critical
     2. second byte: private bit, uppercase means public
     3. third byte: reserved bit, must be uppercase
     4. fourth byte: safe-to-copy bit, lowercase means safe to copy
    '''

    def __init__(self, raw):
        raw = bytes(raw)

        if len(raw) != 4:
            raise InvalidLengthException(len(raw))

        for byte in raw:
            if not self.is_valid_byte(byte):
                raise InvalidByteException(byte)

        self._bytes = raw

    @classmethod
    def from_str(cls, text: str) -> "ChunkType":
        if len(text) != 4:
            raise InvalidLengthException(len(text))

        for character in text:
            if not cls.is_valid_byte(ord(character)):
                raise InvalidByteException(ord(character))

        return cls(text.encode('ascii'))

    @staticmethod
    def is_valid_byte(byte: int) -> bool:
        return 65 <= byte <= 90 or 97 <= byte <= 122

    def __repr__(self):
        return f'<{self.__class__.__name__}({self})>'

    def __str__(self):
        return self._bytes.decode('ascii')

    def __bytes__(self):
        return self._bytes

    def __eq__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented

        return self._bytes == other._bytes

    def __hash__(self):
        return hash(self._bytes)

    def bytes(self) -> bytes:
        return self._bytes

    def _semantic_bit(self, index: int) -> bool:
        # bit 5 (0x20) of the byte, counting from the most significant one
        return BitArray(self._bytes)[index * 8 + 2]

    def is_critical(self) -> bool:
        return not self._semantic_bit(0)

    def is_public(self) -> bool:
        return not self._semantic_bit(1)

    def is_reserved_bit_valid(self) -> bool:
        return not self._semantic_bit(2)

    def is_safe_to_copy(self) -> bool:
        return self._semantic_bit(3)

    def is_valid(self) -> bool:
        return all(self.is_valid_byte(_) for _ in self._bytes) and self.is_reserved_bit_valid()


class ChunkLengthField(fields.StructField):
    '''Length of the data of a chunk, not of the chunk itself.'''

    def __init__(self, **kw):
        super().__init__('I', endianess=fields.Endianess.BIG_ENDIAN, **kw)

    def unpack(self, stream):
        super().unpack(stream)

        if self._value > MAXIMUM_LENGTH:
            raise LengthTooLargeException(self._value)


class ChunkTypeField(fields.Field):
    '''Contains a ChunkType; it can be set with a ChunkType, a string or four bytes.'''

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self.value)

    def _get_size(self):
        return 4

    def _get_raw(self):
        return self.value.bytes() if self.value is not None else b'\x00' * self.size

    def _set_value(self, value):
        if isinstance(value, str):
            value = ChunkType.from_str(value)
        elif not isinstance(value, ChunkType):
            value = ChunkType(value)

        self._value = value

    def unpack(self, stream):
        self._value = ChunkType(stream.read_exact(self.size))

        if not self._value.is_reserved_bit_valid():
            self.logger.debug("chunk type '%s' has the reserved bit set", self._value)
            if self.is_compliant(Compliant.RESERVED):
                raise ReservedBitException(self._value)


class PNGChunk(Chunk):
    '''This is the main data structure of the format: the 4 fields represent
    a chunk into the file. Each field is intended big-endian.

    A chunk is defined as critical or ancillary depending on the case of the
    starting letter of the type field.

    The crc field is network-byte-order CRC-32 computed over the chunk type and chunk data, but not the length.

    # Critical chunks

     1. IHDR: contains image's width, height, bit depth, color type, compression method, filter method and interlace method
     2. PLTE: contains the palette data
     3. IDAT: contains the actual image data (compressed)
     4. IEND: is the terminator chunk

    A chunk can't be modified once built: to change its content build a new one.
    '''
    immutable = True

    length = ChunkLengthField()
    type   = ChunkTypeField()
    data   = fields.StringField(Dependency('.length'))
    crc    = crc.CRCField(['type', 'data'], endianess=fields.Endianess.BIG_ENDIAN)  # network byte order

    def __init__(self, filepath=None, **kwargs):
        kwargs.setdefault('compliant', Compliant.CRC | Compliant.INHERIT)
        super().__init__(filepath, **kwargs)

    @classmethod
    def parse(cls, buffer, **kwargs) -> "PNGChunk":
        return cls(buffer, **kwargs)

    def __str__(self):
        try:
            text = self.data_as_text()
        except NonTextDataException:
            text = '[data]'

        return f'{self.type.value}\t{text}'

    def data_as_text(self) -> str:
        try:
            return self.data.value.decode('utf-8')
        except UnicodeDecodeError as e:
            raise NonTextDataException(self.type.value) from e

    def is_critical(self) -> bool:
        return self.type.value.is_critical()

    def is_public(self) -> bool:
        return self.type.value.is_public()

    def is_reserved_bit_valid(self) -> bool:
        return self.type.value.is_reserved_bit_valid()

    def is_safe_to_copy(self) -> bool:
        return self.type.value.is_safe_to_copy()


class PNGHeader(Chunk):
    magic = fields.StringField(8, default=PNG_SIGNATURE, is_magic=True)


class PNGFile(Chunk):
    '''The signature followed by all the chunks up to the end of the data.

    By default both the signature and the CRC of every chunk are checked, pass
    a different "compliant" to relax (or to strengthen) the checks.'''
    header = PNGHeader()
    chunks = fields.ArrayField(PNGChunk(compliant=Compliant.INHERIT))

    def __init__(self, filepath=None, **kwargs):
        kwargs.setdefault('compliant', Compliant.MAGIC | Compliant.CRC)
        super().__init__(filepath, **kwargs)

    def get_chunks(self) -> Tuple[PNGChunk, ...]:
        return tuple(self.chunks.value)

    def append_chunk(self, chunk: PNGChunk) -> None:
        self.chunks.append(chunk)

    def _index_of(self, chunk_type: str) -> Optional[int]:
        for index, chunk in enumerate(self.chunks):
            if str(chunk.type.value) == chunk_type:
                return index

        return None

    def chunk_by_type(self, chunk_type: str) -> Optional[PNGChunk]:
        '''Return the first chunk with the given type, None if there is none.'''
        index = self._index_of(chunk_type)

        return self.chunks[index] if index is not None else None

    def remove_chunk(self, chunk_type: str) -> PNGChunk:
        '''Remove and return the first chunk with the given type; differently
        from chunk_by_type() the chunk must exist.'''
        index = self._index_of(chunk_type)

        if index is None:
            raise ChunkNotFoundException(chunk_type)

        self.logger.debug("removing chunk '%s' at position %d", chunk_type, index)

        return self.chunks.pop(index)
