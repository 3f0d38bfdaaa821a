"""
simCard.py

This module provides SimCard, a file-backed stand-in for a MIFARE Classic 1K
tag sitting on a reader.

The tag image is 64 blocks of 16 bytes. Block 0 holds the UID, its check byte
and manufacturer data; the last block of every 4-block sector is the sector
trailer holding key A, the access bits and key B. Every data block access is
authenticated with the reader's key against key A of the block's trailer,
the same way the physical reader does it.
"""

import os
from functools import reduce
from typing import Iterable, List

from tagTypes import (bNum_t, u32Const, bNum_tConst, MediumError, DEFAULT_KEY,
                      DEFAULT_ACCESS_BITS, to_chunks)
from blockMap import trailer_for, is_trailer
from imgShifter import ImageShifter
from logging_config import get_logger


logger = get_logger(__name__)

CLASSIC_TYPES = ("MIFARE_MINI", "MIFARE_1K", "MIFARE_4K")
CARD_TYPES = CLASSIC_TYPES + ("MIFARE_UL", "MIFARE_PLUS", "ISO_14443_4")


def make_bcc(uid: bytes) -> int:
    return reduce(lambda a, b: a ^ b, uid, 0)


def is_classic_compatible(card_type: str) -> bool:
    return card_type in CLASSIC_TYPES


class SimCard:
    def __init__(self, i_path: str, uid: bytes = bytes.fromhex('deadbeef'),
                 card_type: str = "MIFARE_1K", reader_key: bytes = DEFAULT_KEY,
                 fail_reads: Iterable[bNum_t] = (), fail_writes: Iterable[bNum_t] = ()):
        if len(uid) != u32Const.UID_BYTES.value:
            raise ValueError(f"UID must be {u32Const.UID_BYTES.value} bytes, got {len(uid)}")
        if len(reader_key) != u32Const.KEY_BYTES.value:
            raise ValueError(f"Key must be {u32Const.KEY_BYTES.value} bytes, got {len(reader_key)}")
        if card_type not in CARD_TYPES:
            raise ValueError(f"Unknown card type {card_type}")

        self.i_path = i_path
        self.card_type = card_type
        self.reader_key = bytes(reader_key)
        self.fail_reads = set(fail_reads)
        self.fail_writes = set(fail_writes)
        self.pending_taps = 0
        self.selected = False
        self.blocks: List[bytearray] = []
        self.init(uid)

    def init(self, uid: bytes):
        if os.path.exists(self.i_path):
            data = ImageShifter.load_image(self.i_path)
            if len(data) != u32Const.CARD_BYTES.value:
                raise MediumError(f"Bad image size for {self.i_path}: {len(data)} bytes")
            self.blocks = [bytearray(c) for c in to_chunks(data)]
            logger.info(f"Loaded tag image {self.i_path}")
        else:
            self.blocks = self.create_blank(uid)
            self.save()
            logger.info(f"Created blank tag image {self.i_path}")

    @staticmethod
    def create_blank(uid: bytes) -> List[bytearray]:
        """Lay out a factory-fresh tag: manufacturer block, default trailers, empty data."""
        size = u32Const.BLOCK_BYTES.value
        blocks = [bytearray(size) for _ in range(u32Const.NUM_CARD_BLOCKS.value)]

        maker = uid + bytes([make_bcc(uid)]) + b'\x08\x04\x00' + b'SIMCARD'
        blocks[bNum_tConst.MANUFACTURER_BLOCK.value][:] = maker.ljust(size, b'\x00')

        trailer = DEFAULT_KEY + DEFAULT_ACCESS_BITS + DEFAULT_KEY
        for b_num in range(u32Const.NUM_CARD_BLOCKS.value):
            if is_trailer(b_num):
                blocks[b_num][:] = trailer
        return blocks

    def save(self):
        image = b''.join(bytes(b) for b in self.blocks)
        err = ImageShifter.shift_image(self.i_path, image, u32Const.CARD_BYTES.value)
        if err:
            raise MediumError(f"Could not save tag image {self.i_path} (error {err})")

    # Presence gate

    def tap(self, count: int = 1):
        self.pending_taps += count

    def is_new_card_present(self) -> bool:
        if self.pending_taps <= 0:
            return False
        self.pending_taps -= 1
        self.selected = True
        return True

    def halt(self):
        self.selected = False

    def get_uid(self) -> bytes:
        return bytes(self.blocks[bNum_tConst.MANUFACTURER_BLOCK.value][:u32Const.UID_BYTES.value])

    def get_card_type(self) -> str:
        return self.card_type

    # Block capabilities

    def check_block(self, b_num: bNum_t):
        if not self.selected:
            raise MediumError("No tag selected")
        if not 0 <= b_num < u32Const.NUM_CARD_BLOCKS.value:
            raise MediumError(f"Block {b_num} is out of range")

    def authenticate(self, b_num: bNum_t):
        key_a = bytes(self.blocks[trailer_for(b_num)][:u32Const.KEY_BYTES.value])
        if key_a != self.reader_key:
            raise MediumError(f"AUTH failure on block {b_num}")

    def read_block(self, b_num: bNum_t) -> bytes:
        self.check_block(b_num)
        self.authenticate(b_num)
        if b_num in self.fail_reads:
            raise MediumError(f"READ failure when accessing block {b_num}")
        return bytes(self.blocks[b_num])

    def write_block(self, b_num: bNum_t, data: bytes):
        self.check_block(b_num)
        if is_trailer(b_num) or b_num == bNum_tConst.MANUFACTURER_BLOCK.value:
            raise MediumError(f"Block {b_num} is reserved")
        if len(data) != u32Const.BLOCK_BYTES.value:
            raise MediumError(f"Block data must be {u32Const.BLOCK_BYTES.value} bytes, got {len(data)}")
        self.authenticate(b_num)
        if b_num in self.fail_writes:
            raise MediumError(f"WRITE failure when updating block {b_num}")
        self.blocks[b_num][:] = data
