"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable without need for relayouting.
"""
import logging
import struct

from .enum import Compliant
from .meta import FieldBase, Endianess
from .properties import Dependency, ChunkPhase
from .exceptions import (
    PNGStructException,
    UnpackException,
    LengthMismatchException,
    InvalidSignatureException,
)


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, *args, name=None, father=None, default=None, offset=None,
                 endianess=Endianess.LITTLE_ENDIAN, compliant=Compliant.INHERIT, is_magic=False):
        super().__init__()
        self._phase = ChunkPhase.INIT
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.endianess = endianess
        self.compliant = compliant
        self.is_magic = is_magic

        self.init()

    def init(self):
        self._value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def is_compliant(self, level):
        '''Returns True if this field or, following INHERIT, one of its fathers
        requires the given level of compliance.'''
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    def is_sealed(self):
        '''Only chunks can be sealed, see Chunk.is_sealed().'''
        return False

    def is_frozen(self):
        return self.father is not None and self.father.is_sealed()

    def _assign(self, value):
        if self.is_frozen():
            raise AttributeError(f"field '{self.name}' belongs to an immutable {self.father.__class__.__name__}")

        self._set_value(value)

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._assign(value))

    def _get_value(self):
        return self._value

    def _set_value(self, value) -> None:
        self._value = value

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_raw(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_raw() not implemented")

    def _set_raw(self, value) -> None:
        raise NotImplementedError(f"method {self.__class__.__name__}._set_raw() not implemented")

    raw = property(
        fget=lambda self: self._get_raw(),
        fset=lambda self, value: self._set_raw(value),
    )

    def check_magic(self):
        if not self.is_magic or self._value == self.default:
            return

        self.logger.warning("the magic for field '%s' doesn't correspond", self.name)
        if self.is_compliant(Compliant.MAGIC):
            raise InvalidSignatureException(expected=self.default, actual=self._value)

    def relayout(self, offset=0):
        self.logger.debug("relayouting %s", self.__class__.__name__)
        self.offset = offset

        return self.size

    def _update_value(self):
        '''This is used to update the binary value before packing'''
        pass

    def pack(self, stream=None, relayout=True):
        stream.write(self.raw)

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.
    """

    def __init__(self, format, default=0, **kw):
        self.format = format
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def __str__(self):
        width = self.size * 2  # we want to be as large as possible
        formatter = '0x%%0%dx' % width
        return formatter % (self.value,)

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _get_raw(self) -> bytes:
        return struct.pack(self.get_format(), self.value)

    def _set_raw(self, raw: bytes) -> None:
        self.value = self._unpack(raw)

    def _unpack(self, raw: bytes) -> int:
        try:
            unpacked_value = struct.unpack(self.get_format(), raw)[0]
        except struct.error as e:
            self.logger.error(e)
            raise UnpackException()

        return unpacked_value

    def unpack(self, stream):
        self._value = self._unpack(stream.read_exact(self.size))
        self.check_magic()


class StringField(Field):
    """Represent a contiguous chunk of bytes.

    The length is either fixed (an integer) or a Dependency on another field:
    in the latter case setting the value writes back the new length.
    """

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError("StringField must have 'n' or 'default' indicated!")

        self._length = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def __len__(self):
        return self.length

    @property
    def length(self) -> int:
        if not isinstance(self._length, Dependency):
            return self._length

        # without a father there is nothing to depend on
        if self.father is None:
            return len(self._value)

        return self._length.resolve(self)

    def value_from_default(self):
        if self.default:
            return self.default

        return b'\x00' * self._length if isinstance(self._length, int) else b''

    def _get_size(self):
        return self.length

    def _get_raw(self):
        return self.value

    def _set_value(self, value) -> None:
        value = bytes(value)

        if isinstance(self._length, Dependency):
            self._value = value
            self._update_value()
            return

        if len(value) != self._length:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self._length} bytes)')

        self._value = value

    def _update_value(self):
        if isinstance(self._length, Dependency) and self.father is not None:
            self._length.resolve_and_set(self, len(self._value))

    def unpack(self, stream):
        length = self.length

        if self.is_magic:
            # a short magic is a wrong magic, not a truncated stream
            raw = stream.read(length)
        else:
            raw = stream.read_exact(length)
            if len(raw) != length:
                raise LengthMismatchException(expected=length, actual=len(raw))

        self._value = raw
        self.check_magic()


class ArrayField(Field):
    '''Un/Pack an array of Chunks.

    You can indicate an explicit number of elements via the parameter named "n",
    otherwise the elements are unpacked until the stream is exhausted.

    The elements are created copying the field passed as first argument.

    This class must behave like a list in python, obviously cannot implement all the methods
    since, for example, slicing what should mean?
    '''

    def __init__(self, field_cls, n=None, **kw):
        if n is not None and not isinstance(n, int):
            raise ValueError("n is '%s' must be of the right type" % n.__class__.__name__)

        self.field_cls = field_cls
        self._n = n

        super().__init__(**kw)

        self.relayout()

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def value_from_default(self):
        return [self.instance_element() for _ in range(self._n or 0)]

    def _set_value(self, value):
        self._value = list(value)
        for element in self._value:
            element.father = self

    def clear(self):
        self.value.clear()

    def _get_raw(self):
        return b''.join(element.raw for element in self.value)

    def _get_size(self):
        size = 0
        for element in self.value:
            size += element.size

        return size

    def relayout(self, offset=0):
        super().relayout(offset=offset)
        size = 0
        for element in self.value:
            size += element.relayout(offset=offset + size)

        return size

    def pack(self, stream=None, relayout=True):
        for element in self.value:
            stream.seek(element.offset)
            element.pack(stream=stream, relayout=False)

    def instance_element(self):
        return self.field_cls.create(father=self)  # pass the father so that we don't lose the hierarchy

    def _is_complete(self, elements, stream):
        if self._n is None:
            return stream.exhausted

        return len(elements) == self._n

    def unpack(self, stream):
        elements = []
        while not self._is_complete(elements, stream):
            element = self.instance_element()
            self.logger.debug('unpacking element #%d at offset %d', len(elements), stream.tell())

            offset = stream.tell()

            try:
                element.unpack(stream)
            except PNGStructException as e:
                e.chain.insert(0, str(len(elements)))
                raise

            element.offset = offset
            elements.append(element)

        self._value = elements

    def append(self, element):
        element.father = self
        self.value.append(element)

    def pop(self, index):
        element = self.value.pop(index)
        element.father = None

        return element
