from typing import NamedTuple, Optional

from bitcoindecoder.enumeration.lock_type import (
    RelativeLockType,
    AbsoluteLockType,
    SEQUENCE_LOCKTIME_GRANULARITY,
)


class BtcRelativeLock(NamedTuple):
    lock_type: str = RelativeLockType.DISABLED
    # number of blocks, or of 512-second units
    value: Optional[int] = None

    def is_enabled(self) -> bool:
        return self.lock_type != RelativeLockType.DISABLED

    def seconds(self) -> Optional[int]:
        if self.lock_type != RelativeLockType.TIME:
            return None
        return self.value * SEQUENCE_LOCKTIME_GRANULARITY


class BtcAbsoluteLock(NamedTuple):
    lock_type: str = AbsoluteLockType.DISABLED
    value: int = 0
    # consensus ignores the locktime when every input sequence is final
    enforced: bool = False

    def is_enabled(self) -> bool:
        return self.lock_type != AbsoluteLockType.DISABLED
