import io
import logging
import os

from .exceptions import TruncatedException


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/path to uniform its properties:
    all the data ends up into an in-memory buffer and the cursor is owned
    explicitly by the stream, so that unpacking never depends on an open file.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        if isinstance(obj, os.PathLike):
            obj = os.fspath(obj)

        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError("'%s' can't be used as a stream" % self.obj.__class__.__name__)

        init_method()

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __repr__(self):
        return '<%s(offset=%d, remaining=%d)>' % (self.__class__.__name__, self.tell(), self.remaining())

    def init_str(self):
        '''We think this is a path'''
        logger.debug("opening path '%s'", self.obj)
        with open(self.obj, 'rb') as f:
            self.obj = io.BytesIO(f.read())

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def init_bytearray(self):
        self.obj = io.BytesIO(bytes(self.obj))

    def init_memoryview(self):
        self.obj = io.BytesIO(self.obj.tobytes())

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError("'%s' is the wrong kind of offset to use" % offset.__class__.__name__)

        self.obj.seek(offset)

    def tell(self):
        return self.obj.tell()

    def read(self, size):
        return self.obj.read(size)

    def read_exact(self, size):
        '''Read exactly "size" bytes or fail: a short read means that the data
        declares more than it actually contains.'''
        data = self.obj.read(size)

        if len(data) != size:
            raise TruncatedException(expected=size, actual=len(data))

        return data

    def read_all(self):
        return self.obj.read()

    def remaining(self):
        current = self.obj.tell()
        end = self.obj.seek(0, io.SEEK_END)
        self.obj.seek(current)

        return end - current

    @property
    def exhausted(self):
        return self.remaining() <= 0

    def write(self, data):
        return self.obj.write(data)
