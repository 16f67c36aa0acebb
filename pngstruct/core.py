"""
Core module for the abstraction of a file format

"""
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import PNGStructException
from .properties import (
    get_root_from_chunk,
    ChunkPhase,
)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: its main attributes
    are offset and size that identify a Chunk.

    A Chunk can contain sub-chunks.

    A Chunk can be built in two ways: passing some data (raw bytes, a path or
    a Stream) that is unpacked right away, or passing the values of the fields
    by name, like

        chunk = PNGChunk(type='tEXt', data=b'kebab')

    Set "immutable" to True in a subclass to refuse any modification of the fields
    once the chunk is completely built.
    """
    immutable = False

    def __init__(self, filepath=None, **kwargs):
        values = {name: kwargs.pop(name) for name in self.get_ordered_fields_name() if name in kwargs}

        if filepath is not None and values:
            raise ValueError(f"{self.__class__.__name__} can't be unpacked and initialized with values at the same time")

        super().__init__(**kwargs)

        # now we have setup all the fields necessary and we can unpack if
        # some data is passed with the constructor
        if filepath is not None:
            stream = filepath if isinstance(filepath, Stream) else Stream(filepath)
            self.logger.debug("unpacking '%s' from %s", self.__class__.__name__, stream)
            self.unpack(stream)
            return

        for name, value in values.items():
            setattr(self, name, value)

        self._update_value()
        self.relayout()

        self._phase = ChunkPhase.DONE

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return NotImplemented

        return self.raw == other.raw

    __hash__ = None

    def init(self):
        for _, field in self.get_fields():
            field.init()

    def is_sealed(self):
        return self.immutable and self._phase == ChunkPhase.DONE

    @property
    def root(self):
        '''Obtain the final father of this chunk'''
        return get_root_from_chunk(self)

    def _get_size(self):
        '''the size parameter MUST not be set but MUST be derived from the subchunks'''
        size = 0
        for _, field in self.get_fields():
            size += field.size

        return size

    def _get_raw(self):
        value = b''
        for field_name, field_instance in self.get_fields():
            field_raw = field_instance.raw
            self.logger.debug("field '%s' raw=%r", field_name, field_raw)
            value += field_raw

        return value

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def _update_value(self):
        for _, field in self.get_fields():
            field._update_value()

    def relayout(self, offset=0):
        '''This method triggers the chunk's children to reset the offsets
        in order to pack correctly.

        In practice it's like packing() but it's only interested in the sizes
        of the chunks.'''
        phase_old = self._phase
        self._phase = ChunkPhase.RELAYOUTING
        self.offset = offset

        size = 0
        for field_name, field_instance in self.get_fields():
            self.logger.debug('relayouting %s.%s', self.__class__.__name__, field_name)
            size += field_instance.relayout(offset=offset + size)

        self._phase = phase_old

        return size

    def pack(self, stream=None, relayout=True):
        '''Encode the chunk into its binary representation and return it.

        The chunk is not modified: only the offsets are recomputed when
        "relayout" is True (the default for the outermost call).
        '''
        if relayout:
            self.relayout()

        stream = Stream(b'') if stream is None else stream

        for field_name, field_instance in self.get_fields():
            self.logger.debug('packing %s.%s at offset %08x', self.__class__.__name__, field_name, field_instance.offset)

            stream.seek(field_instance.offset)
            field_instance.pack(stream=stream, relayout=False)

        return stream.getvalue()

    def unpack(self, stream):
        '''This is one of the main APIs to take care of: its aim is to take a binary
        data and transform in the representation given by the class this method
        is implemented.

        Each field is unpacked in order, starting where the previous one ended;
        if a field fails the name of the field is added to the chain of the
        exception and the whole unpacking is aborted.
        '''
        self._phase = ChunkPhase.UNPACKING
        self.offset = stream.tell()

        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s', self.__class__.__name__, field_name)

            offset = stream.tell()
            self.logger.debug('offset at %d', offset)

            try:
                field.unpack(stream)
            except PNGStructException as e:
                e.chain.insert(0, field_name)
                raise

            field.offset = offset

        self._phase = ChunkPhase.DONE
