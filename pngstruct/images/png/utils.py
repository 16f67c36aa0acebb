import logging
from typing import List, Optional

from pngstruct.enum import Compliant
from pngstruct.images.png import PNGFile, PNGChunk, ChunkType, PNG_SIGNATURE


logger = logging.getLogger(__name__)


def encode_message(data: bytes, chunk_type: str, message: str) -> bytes:
    '''Append a new chunk containing the message and return the new file.'''
    png = PNGFile(data)

    chunk = PNGChunk(type=ChunkType.from_str(chunk_type), data=message.encode('utf-8'))
    logger.debug('appending %r', chunk)

    png.append_chunk(chunk)

    return png.pack()


def decode_message(data: bytes, chunk_type: str) -> Optional[str]:
    png = PNGFile(data)

    chunk = png.chunk_by_type(chunk_type)

    return str(chunk) if chunk is not None else None


def remove_message(data: bytes, chunk_type: str) -> bytes:
    '''Remove the first chunk with the given type, ChunkNotFoundException is raised
    if there is none.'''
    png = PNGFile(data)

    chunk = png.remove_chunk(chunk_type)
    logger.info('removed chunk: %s', chunk)

    return png.pack()


def list_chunks(data: bytes) -> List[str]:
    png = PNGFile(data)

    return [str(chunk) for chunk in png.get_chunks()]


def describe_chunk(chunk: PNGChunk) -> str:
    flags = [
        'critical' if chunk.is_critical() else 'ancillary',
        'public' if chunk.is_public() else 'private',
        'reserved-ok' if chunk.is_reserved_bit_valid() else 'reserved-set',
        'safe-to-copy' if chunk.is_safe_to_copy() else 'unsafe-to-copy',
    ]

    return f'{chunk.type.value} length={chunk.length.value} crc={chunk.crc} [{" ".join(flags)}]'


def repair(data: bytes) -> bytes:
    '''Unpack without checking neither the signature nor the CRCs so that packing
    back gives a valid file: the CRCs are replaced while unpacking, the signature here.'''
    png = PNGFile(data, compliant=Compliant.NONE)

    if png.header.magic.value != PNG_SIGNATURE:
        logger.warning('replacing signature %r', png.header.magic.value)
        png.header.magic.value = PNG_SIGNATURE

    return png.pack()
