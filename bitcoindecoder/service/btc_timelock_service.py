from typing import Iterable

from bitcoindecoder.domain.timelock import BtcRelativeLock, BtcAbsoluteLock
from bitcoindecoder.enumeration.lock_type import (
    RelativeLockType,
    AbsoluteLockType,
    SEQUENCE_FINAL,
    SEQUENCE_RBF_THRESHOLD,
    SEQUENCE_LOCKTIME_DISABLE_FLAG,
    SEQUENCE_LOCKTIME_TYPE_FLAG,
    SEQUENCE_LOCKTIME_MASK,
    LOCKTIME_THRESHOLD,
)


# https://github.com/bitcoin/bips/blob/master/bip-0068.mediawiki
def interpret_sequence(sequence: int) -> BtcRelativeLock:
    if sequence & SEQUENCE_LOCKTIME_DISABLE_FLAG:
        return BtcRelativeLock(lock_type=RelativeLockType.DISABLED)

    value = sequence & SEQUENCE_LOCKTIME_MASK
    if sequence & SEQUENCE_LOCKTIME_TYPE_FLAG:
        return BtcRelativeLock(lock_type=RelativeLockType.TIME, value=value)
    return BtcRelativeLock(lock_type=RelativeLockType.BLOCKS, value=value)


def interpret_locktime(locktime: int, sequences: Iterable[int]) -> BtcAbsoluteLock:
    """Reads the locktime together with every input's sequence.

    A zero locktime is disabled only when all sequences are final; a
    non-zero locktime is kept but not enforced in that case.
    """
    all_final = all(sequence == SEQUENCE_FINAL for sequence in sequences)

    if locktime == 0 and all_final:
        return BtcAbsoluteLock(lock_type=AbsoluteLockType.DISABLED, value=0)

    if locktime < LOCKTIME_THRESHOLD:
        lock_type = AbsoluteLockType.BLOCK_HEIGHT
    else:
        lock_type = AbsoluteLockType.TIMESTAMP
    return BtcAbsoluteLock(lock_type=lock_type, value=locktime, enforced=not all_final)


def signals_rbf(sequences: Iterable[int]) -> bool:
    # BIP125 opt-in replace-by-fee
    return any(sequence < SEQUENCE_RBF_THRESHOLD for sequence in sequences)
