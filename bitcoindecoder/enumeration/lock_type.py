# BIP68: relative lock carried by an input's sequence
class RelativeLockType:
    DISABLED = "disabled"
    BLOCKS = "blocks"
    TIME = "time"


# nLockTime: absolute lock carried by the transaction
class AbsoluteLockType:
    DISABLED = "disabled"
    BLOCK_HEIGHT = "block_height"
    TIMESTAMP = "timestamp"


SEQUENCE_FINAL = 0xFFFFFFFF
# BIP125: any sequence below this opts the transaction into replace-by-fee
SEQUENCE_RBF_THRESHOLD = 0xFFFFFFFE
SEQUENCE_LOCKTIME_DISABLE_FLAG = 1 << 31
SEQUENCE_LOCKTIME_TYPE_FLAG = 1 << 22
SEQUENCE_LOCKTIME_MASK = 0x0000FFFF
# time based relative locks count in units of 2^9 seconds
SEQUENCE_LOCKTIME_GRANULARITY = 512

# locktime below this is a block height, otherwise a unix timestamp
LOCKTIME_THRESHOLD = 500_000_000
