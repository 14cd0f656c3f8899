from typing import Optional


class DecodeError(ValueError):
    kind = "DecodeError"

    def __init__(self, message: str, offset: Optional[int] = None):
        self.message = message
        self.offset = offset
        super(DecodeError, self).__init__(self.__str__())

    def __str__(self):
        if self.offset is None:
            return "{}: {}".format(self.kind, self.message)
        return "{} at offset {}: {}".format(self.kind, self.offset, self.message)

    def __reduce__(self):
        return (self.__class__, (self.message, self.offset))

    def to_dict(self):
        return {"kind": self.kind, "offset": self.offset, "message": self.message}


# the buffer ran out before a field could be read
class UnexpectedEof(DecodeError):
    kind = "UnexpectedEof"


# a structurally complete transaction is followed by more bytes
class TrailingBytes(DecodeError):
    kind = "TrailingBytes"


# a length or count prefix declares more data than the buffer holds
class InvalidLength(DecodeError):
    kind = "InvalidLength"


class InvalidHex(DecodeError):
    kind = "InvalidHex"
