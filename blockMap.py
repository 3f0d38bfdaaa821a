from typing import Iterable, Iterator, Tuple

from tagTypes import bNum_t, u32Const, DATA_BLOCKS, RangedBNum


class BlockMap:
    """
    An ordered, fixed list of tag blocks that may carry profile data.

    The map is opaque to the codec: blocks are used in the order given, and
    nothing assumes they are contiguous. Reserved blocks (sector trailers,
    the manufacturer block) are simply never listed.

    Attributes:
        blocks (tuple): Block ids in storage order.
        block_bytes (int): Bytes held by each block.
        capacity (int): Hard upper bound on the logical record size.
        min_len (int): Shortest record the normalizer will let through.
    """

    def __init__(self, blocks: Iterable[int],
                 block_bytes: int = u32Const.BLOCK_BYTES.value,
                 min_len: int = u32Const.MIN_LEN.value):
        """
        Initialize the BlockMap instance.

        Args:
            blocks: Block ids in storage order.
            block_bytes: Size of each block in bytes.
            min_len: Minimum normalized record length.

        Raises:
            ValueError: If the map is empty, holds a negative or repeated id,
                or min_len does not fit in the capacity.
        """
        ids = tuple(int(RangedBNum(b)) for b in blocks)
        if not ids:
            raise ValueError("A block map needs at least one block")
        if len(set(ids)) != len(ids):
            raise ValueError(f"Block map has repeated block ids: {ids}")
        if block_bytes <= 0:
            raise ValueError("block_bytes must be positive")

        self._blocks = ids
        self.block_bytes = block_bytes
        self.capacity = len(ids) * block_bytes
        if not 0 <= min_len <= self.capacity:
            raise ValueError(f"min_len {min_len} does not fit in capacity {self.capacity}")
        self.min_len = min_len

    @property
    def blocks(self) -> Tuple[bNum_t, ...]:
        return self._blocks

    def __iter__(self) -> Iterator[bNum_t]:
        return iter(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def __repr__(self) -> str:
        return f"BlockMap({list(self._blocks)}, capacity={self.capacity}, min_len={self.min_len})"

    @classmethod
    def from_sectors(cls, first_sector: int, count: int,
                     blocks_per_sector: int = u32Const.BLOCKS_PER_SECTOR.value,
                     **kwargs) -> 'BlockMap':
        """
        Build a map from whole sectors, leaving out each sector's trailer.

        Args:
            first_sector: Index of the first sector to use.
            count: Number of data blocks wanted.
            blocks_per_sector: Blocks per sector, trailer included.

        Returns:
            BlockMap: A map of `count` data blocks.
        """
        if blocks_per_sector < 2:
            raise ValueError("A sector needs room for a trailer and data")
        ids = []
        block = first_sector * blocks_per_sector
        while len(ids) < count:
            if block % blocks_per_sector != blocks_per_sector - 1:
                ids.append(block)
            block += 1
        return cls(ids, **kwargs)


def trailer_for(block_id: bNum_t, blocks_per_sector: int = u32Const.BLOCKS_PER_SECTOR.value) -> bNum_t:
    """Return the sector trailer block that guards `block_id`."""
    return (block_id // blocks_per_sector) * blocks_per_sector + blocks_per_sector - 1


def is_trailer(block_id: bNum_t, blocks_per_sector: int = u32Const.BLOCKS_PER_SECTOR.value) -> bool:
    return block_id % blocks_per_sector == blocks_per_sector - 1


DEFAULT_MAP = BlockMap(DATA_BLOCKS)
