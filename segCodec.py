"""
segCodec.py

This module packs a logical profile record into the tag's mapped blocks and
reassembles it again.

The stored layout is exactly `capacity` bytes spread over the blocks of a
BlockMap, in map order. The record text comes first and every byte after it
is zero. There is no header, length field or checksum: a reader recovers the
record by reading every mapped block and cutting at the first null byte.
"""

from typing import Callable, List, Tuple

from tagTypes import bNum_t, Chunk, MediumError, TEXT_ENCODING
from blockMap import BlockMap, DEFAULT_MAP
from logging_config import get_logger


logger = get_logger(__name__)

ReadBlock = Callable[[bNum_t], bytes]
WriteBlock = Callable[[bNum_t, bytes], None]


class BlockIOError(MediumError):
    """A block operation failed part way through a record read or write."""

    action = "access"

    def __init__(self, block_id: bNum_t, reason: str = ""):
        self.block_id = block_id
        self.reason = reason
        msg = f"Could not {self.action} block {block_id}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class BlockReadFailed(BlockIOError):
    action = "read"


class BlockWriteFailed(BlockIOError):
    action = "write"


def pack_record(record: str, block_map: BlockMap = DEFAULT_MAP) -> List[Tuple[bNum_t, Chunk]]:
    """
    Split a record into zero-padded chunks, one per mapped block.

    Anything past the map's capacity is dropped; callers normalize first.

    Returns:
        List of (block id, chunk) pairs in map order, covering every block.
    """
    raw = record.encode(TEXT_ENCODING, errors='replace')[:block_map.capacity]
    size = block_map.block_bytes
    packed = []
    for ix, block_id in enumerate(block_map):
        chunk = raw[ix * size:(ix + 1) * size]
        packed.append((block_id, chunk.ljust(size, b'\x00')))
    return packed


def unpack_record(chunks: List[Chunk]) -> str:
    """Join chunks in map order and return the text before the first null byte."""
    raw = b''.join(chunks)
    return raw.split(b'\x00', 1)[0].decode(TEXT_ENCODING)


class SegCodec:
    """
    Reads and writes a logical record through a pair of block capabilities.

    The capabilities are plain callables. `read_block(id)` returns the block's
    bytes and `write_block(id, data)` stores them; both raise MediumError when
    the tag refuses.
    """

    def __init__(self, read_block: ReadBlock, write_block: WriteBlock,
                 block_map: BlockMap = DEFAULT_MAP):
        self.read_block = read_block
        self.write_block = write_block
        self.block_map = block_map

    def read_record(self) -> str:
        """
        Read every mapped block and rebuild the record.

        Returns:
            str: The record text.

        Raises:
            BlockReadFailed: On the first block that cannot be read. No
                partial record is produced.
        """
        size = self.block_map.block_bytes
        chunks = []
        for block_id in self.block_map:
            try:
                data = self.read_block(block_id)
            except MediumError as e:
                logger.warning(f"Read of block {block_id} failed: {e}")
                raise BlockReadFailed(block_id, str(e)) from e
            if data is None or len(data) != size:
                got = 'nothing' if data is None else f"{len(data)} bytes"
                raise BlockReadFailed(block_id, f"expected {size} bytes, got {got}")
            logger.debug(f"Read block {block_id}: {bytes(data).hex()}")
            chunks.append(bytes(data))

        return unpack_record(chunks)

    def write_record(self, record: str) -> None:
        """
        Write the record over every mapped block, in map order.

        Raises:
            BlockWriteFailed: On the first block that cannot be written.
                Blocks before it keep their new contents.
        """
        for block_id, chunk in pack_record(record, self.block_map):
            try:
                self.write_block(block_id, chunk)
            except MediumError as e:
                logger.warning(f"Write of block {block_id} failed: {e}")
                raise BlockWriteFailed(block_id, str(e)) from e
            logger.debug(f"Wrote block {block_id}: {chunk.hex()}")
