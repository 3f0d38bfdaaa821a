"""
cardTxn.py

This module runs one profile transaction against a tag on the reader:
read the record, decrement its counter, write it back.

Each transaction is independent. A failed block aborts only the current
transaction; the caller waits for the next presence event. A failed write
may leave the tag holding a mix of old and new blocks.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from segCodec import SegCodec, BlockReadFailed, BlockWriteFailed
from counterUpd import update_counter
from simCard import is_classic_compatible
from cardUtils import get_cur_time, format_uid, printable
from tagTypes import bNum_t
from logging_config import get_logger


logger = get_logger(__name__)


class FailKind(Enum):
    READ_FAILED = "read"
    WRITE_FAILED = "write"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class TxnFailure:
    kind: FailKind
    block_id: Optional[bNum_t] = None
    detail: str = ""


@dataclass(frozen=True)
class TxnResult:
    uid: bytes
    at: datetime
    old_text: str = ""
    new_text: str = ""
    previous: Optional[int] = None
    new: Optional[int] = None
    failure: Optional[TxnFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def sync_card(card, codec: SegCodec) -> Optional[TxnResult]:
    """
    Run one read/update/write transaction if a tag is waiting on the reader.

    Args:
        card: Supplies the presence gate (is_new_card_present), get_uid,
            get_card_type and halt.
        codec: Reads and writes the record through the card's block capabilities.

    Returns:
        None if no tag is present, otherwise a TxnResult; check `ok` or `failure`.
    """
    if not card.is_new_card_present():
        return None

    try:
        uid = card.get_uid()
        at = get_cur_time()
        logger.info(f"Card fingerprint (UID):{format_uid(uid)}")

        card_type = card.get_card_type()
        logger.info(f"Card technology: {card_type}")
        if not is_classic_compatible(card_type):
            logger.warning(f"{card_type} is not a supported MIFARE Classic tag, skipping it")
            return TxnResult(uid, at, failure=TxnFailure(FailKind.UNSUPPORTED, detail=card_type))

        try:
            old_text = codec.read_record()
        except BlockReadFailed as e:
            logger.error(f"Could not load profile bytes from the tag: {e}")
            return TxnResult(uid, at, failure=TxnFailure(FailKind.READ_FAILED, e.block_id, e.reason))

        logger.info(f"Raw profile payload ({len(old_text)} chars): {printable(old_text)}")
        update = update_counter(old_text, codec.block_map)
        logger.info(f"Previous counter snapshot: {update.previous}")
        logger.info(f"Updated counter snapshot: {update.new}")

        try:
            codec.write_record(update.text)
        except BlockWriteFailed as e:
            logger.error(f"Tag write for refreshed profile failed, tag may hold mixed data: {e}")
            return TxnResult(uid, at, old_text, update.text, update.previous, update.new,
                             failure=TxnFailure(FailKind.WRITE_FAILED, e.block_id, e.reason))

        logger.info(f"Final profile payload ({len(update.text)} chars) saved on tag: "
                    f"{printable(update.text)}")
        return TxnResult(uid, at, old_text, update.text, update.previous, update.new)
    finally:
        card.halt()
