from dataclasses import dataclass

from tagTypes import ctrConst, FILLER_PATTERN
from blockMap import BlockMap, DEFAULT_MAP
from fieldLoc import locate_counter_field
from lenNorm import normalize
from logging_config import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class CounterUpdate:
    text: str
    previous: int
    new: int


def make_default_record(counter: int = ctrConst.DEFAULT_COUNTER.value,
                        block_map: BlockMap = DEFAULT_MAP) -> str:
    """Build the template written to a tag that has no usable counter yet."""
    record = (f"RFID lab profile | counter: {counter} | Remaining space is filled with "
              f"structured placeholder bytes for this experiment. {FILLER_PATTERN}"
              " Extra filler segments keep the profile length constant across cards.")
    return normalize(record, block_map)


def next_counter(value: int) -> int:
    new_value = value - 1
    if new_value < 0:
        new_value = ctrConst.WRAP_COUNTER.value
    return new_value


def update_counter(text: str, block_map: BlockMap = DEFAULT_MAP) -> CounterUpdate:
    """
    Decrement the record's counter field and return the renormalized record.

    A record with no number at all is replaced by the default record before
    decrementing. Values below zero wrap to WRAP_COUNTER.

    Args:
        text: The record as read from the tag.
        block_map: Supplies the normalization bounds.

    Returns:
        CounterUpdate: New record text with the previous and new counter values.
    """
    working = text
    field = locate_counter_field(working)

    if field is None:
        logger.info("No counter field in record, writing default profile")
        working = make_default_record(block_map=block_map)
        field = locate_counter_field(working)
        if field is None:
            default = ctrConst.DEFAULT_COUNTER.value
            logger.warning("Default profile has no counter field")
            return CounterUpdate(working, default, default)

    new_value = next_counter(field.value)
    logger.debug(f"Counter at [{field.start}, {field.end}): {field.value} -> {new_value}")

    working = working[:field.start] + str(new_value) + working[field.end:]
    return CounterUpdate(normalize(working, block_map), field.value, new_value)
