from typing import List, Tuple
from enum import Enum

# Type aliases
bNum_t = int  # block id on the tag
Chunk = bytes  # exactly BLOCK_BYTES long

# Constants
FILLER_PATTERN = "RFID_PROFILE_FILLER::v2::chunk-XYZ-987654321-"
FILL_MARKER = " [auto-fill v2] "
COUNTER_LABELS: Tuple[str, ...] = ("balance", "counter")
TEXT_ENCODING = "latin-1"  # one char per stored byte
DEFAULT_KEY = b'\xff' * 6
DEFAULT_ACCESS_BITS = bytes.fromhex('ff078069')


class u32Const(Enum):
    BLOCK_BYTES = 16
    BLOCKS_PER_SECTOR = 4
    NUM_CARD_BLOCKS = 64  # MIFARE Classic 1K
    CARD_BYTES = NUM_CARD_BLOCKS * BLOCK_BYTES
    MIN_LEN = 97
    UID_BYTES = 4
    KEY_BYTES = 6


class ctrConst(Enum):
    DEFAULT_COUNTER = 5
    WRAP_COUNTER = 99


class bNum_tConst(Enum):
    MANUFACTURER_BLOCK = 0


# Sector trailers (7, 11, ...) are left out; sector 0 holds the manufacturer block.
DATA_BLOCKS: Tuple[bNum_t, ...] = (4, 5, 6, 8, 9, 10, 12, 13, 14, 16, 17, 18, 20, 21, 22, 24)


class MediumError(Exception):
    """Raised by a block capability when the tag refuses or fails an operation."""


class RangedBNum:
    def __init__(self, value: int):
        if value < 0:
            raise ValueError("Block number must be non-negative")
        self.value = value

    def __int__(self) -> int:
        return self.value


def to_chunks(data: bytes, size: int = u32Const.BLOCK_BYTES.value) -> List[Chunk]:
    return [data[i:i + size] for i in range(0, len(data), size)]
