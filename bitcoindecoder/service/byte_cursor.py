import struct
from typing import Tuple

from bitcoindecoder.misc.decode_error import UnexpectedEof, InvalidLength

# https://en.bitcoin.it/wiki/Protocol_documentation#Variable_length_integer
VARINT_UINT16_PREFIX = 0xFD
VARINT_UINT32_PREFIX = 0xFE
VARINT_UINT64_PREFIX = 0xFF

_VARINT_WIDTHS = {
    VARINT_UINT16_PREFIX: (2, "<H"),
    VARINT_UINT32_PREFIX: (4, "<I"),
    VARINT_UINT64_PREFIX: (8, "<Q"),
}


class ByteCursor(object):
    """A read position over an immutable byte buffer.

    Every read is all-or-nothing: a read that can't be satisfied raises
    `UnexpectedEof` and leaves the position untouched.
    """

    def __init__(self, data: bytes):
        self._data = bytes(data)
        self._pos = 0

    def position(self) -> int:
        return self._pos

    def remaining(self) -> int:
        return len(self._data) - self._pos

    def peek(self, n: int) -> bytes:
        # shorter than n near the end of the buffer
        return self._data[self._pos : self._pos + n]

    def read_exact(self, n: int) -> bytes:
        if n < 0:
            raise ValueError("can't read a negative number of bytes: {}".format(n))
        if n > self.remaining():
            raise UnexpectedEof(
                "need {} bytes, only {} remain".format(n, self.remaining()),
                self._pos,
            )
        data = self._data[self._pos : self._pos + n]
        self._pos += n
        return data

    def _unpack(self, fmt: str, size: int) -> int:
        return struct.unpack(fmt, self.read_exact(size))[0]

    def read_uint8(self) -> int:
        return self._unpack("<B", 1)

    def read_int32(self) -> int:
        return self._unpack("<i", 4)

    def read_uint32(self) -> int:
        return self._unpack("<I", 4)

    def read_uint64(self) -> int:
        return self._unpack("<Q", 8)

    def read_var_bytes(self, what: str = "field") -> bytes:
        offset = self._pos
        length, _ = read_varint(self)
        if length > self.remaining():
            raise InvalidLength(
                "{} declares {} bytes but only {} remain".format(
                    what, length, self.remaining()
                ),
                offset,
            )
        return self.read_exact(length)

    def read_count(self, what: str, min_item_size: int = 1) -> int:
        offset = self._pos
        count, _ = read_varint(self)
        if count * min_item_size > self.remaining():
            raise InvalidLength(
                "{} declares {} items but only {} bytes remain".format(
                    what, count, self.remaining()
                ),
                offset,
            )
        return count


def read_varint(cursor: ByteCursor) -> Tuple[int, int]:
    """Returns the decoded value and the number of bytes consumed.

    Non-minimal encodings are accepted.
    """
    start = cursor.position()
    prefix = cursor.peek(1)
    if len(prefix) == 0:
        raise UnexpectedEof("varint prefix is missing", start)

    width = _VARINT_WIDTHS.get(prefix[0])
    if width is None:
        cursor.read_exact(1)
        return prefix[0], 1

    size, fmt = width
    if cursor.remaining() < size + 1:
        raise UnexpectedEof(
            "varint 0x{:02x} needs {} more bytes, only {} remain".format(
                prefix[0], size, cursor.remaining() - 1
            ),
            start,
        )
    raw = cursor.read_exact(size + 1)
    return struct.unpack(fmt, raw[1:])[0], size + 1


def encode_varint(value: int) -> bytes:
    if value < 0:
        raise ValueError("varint can't encode a negative value: {}".format(value))
    if value < VARINT_UINT16_PREFIX:
        return struct.pack("<B", value)
    if value <= 0xFFFF:
        return struct.pack("<BH", VARINT_UINT16_PREFIX, value)
    if value <= 0xFFFFFFFF:
        return struct.pack("<BI", VARINT_UINT32_PREFIX, value)
    if value <= 0xFFFFFFFFFFFFFFFF:
        return struct.pack("<BQ", VARINT_UINT64_PREFIX, value)
    raise ValueError("varint can't encode a value above 64 bits: {}".format(value))
