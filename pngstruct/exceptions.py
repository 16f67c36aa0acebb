class PNGStructException(Exception):
    '''Base class to extend in order to throw exception in pngstruct.

    It takes a single argument that represents the chain of the layer that
    caused the exception: every chunk the exception passes through while
    unpacking prepends the name of the field, so that a failure deep into a
    file reads like "chunks.3.crc".
    '''

    def __init__(self, chain=None):
        self.chain = chain if chain is not None else []
        super().__init__()

    def describe(self):
        return self.__class__.__name__

    def __str__(self):
        where = '.'.join(self.chain)
        return f'{where}: {self.describe()}' if where else self.describe()


class UnpackException(PNGStructException):
    pass


class TruncatedException(UnpackException):

    def __init__(self, expected, actual, chain=None):
        self.expected = expected
        self.actual = actual
        super().__init__(chain=chain)

    def describe(self):
        return f'needed {self.expected} bytes but only {self.actual} are available'


class LengthTooLargeException(UnpackException):

    def __init__(self, length, chain=None):
        self.length = length
        super().__init__(chain=chain)

    def describe(self):
        return f'chunk length greater than 2,147,483,647: actual {self.length}'


class LengthMismatchException(UnpackException):

    def __init__(self, expected, actual, chain=None):
        self.expected = expected
        self.actual = actual
        super().__init__(chain=chain)

    def describe(self):
        return f'declared length is {self.expected} but data is {self.actual} bytes'


class CRCMismatchException(UnpackException):

    def __init__(self, expected, actual, chain=None):
        self.expected = expected
        self.actual = actual
        super().__init__(chain=chain)

    def describe(self):
        return f'the provided CRC 0x{self.actual:08x} does not match the expected CRC 0x{self.expected:08x}'


class InvalidSignatureException(UnpackException):
    '''The magic at the start of the stream is not the one expected.'''

    def __init__(self, expected, actual, chain=None):
        self.expected = expected
        self.actual = actual
        super().__init__(chain=chain)

    def describe(self):
        return f'invalid signature {self.actual!r} (expected {self.expected!r})'


class ChunkTypeException(PNGStructException):
    pass


class InvalidByteException(ChunkTypeException):

    def __init__(self, byte, chain=None):
        self.byte = byte
        super().__init__(chain=chain)

    def describe(self):
        return f'invalid byte {self.byte} ({self.byte:08b}) in chunk type'


class InvalidLengthException(ChunkTypeException):

    def __init__(self, length, chain=None):
        self.length = length
        super().__init__(chain=chain)

    def describe(self):
        return f'invalid chunk type length: expected 4, received {self.length}'


class ReservedBitException(ChunkTypeException):

    def __init__(self, chunk_type, chain=None):
        self.chunk_type = chunk_type
        super().__init__(chain=chain)

    def describe(self):
        return f"chunk type '{self.chunk_type}' has the reserved bit set"


class ChunkNotFoundException(PNGStructException):

    def __init__(self, chunk_type, chain=None):
        self.chunk_type = chunk_type
        super().__init__(chain=chain)

    def describe(self):
        return f"no chunk with type '{self.chunk_type}'"


class NonTextDataException(PNGStructException):
    '''The data of a chunk is not valid UTF-8: callers are expected to
    recover from this one with a placeholder.'''

    def __init__(self, chunk_type, chain=None):
        self.chunk_type = chunk_type
        super().__init__(chain=chain)

    def describe(self):
        return f"data of chunk '{self.chunk_type}' is not valid UTF-8"
