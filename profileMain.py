"""
profileMain.py

This is the main entry point for the tag profile simulation. It wires the
driver settings, the simulated tag, and the segment codec together, presents
the tag to the reader the requested number of times, and runs one profile
transaction for every presence event.
"""

import sys

from driver import Driver
from simCard import SimCard
from segCodec import SegCodec
from cardTxn import sync_card
from tagTypes import MediumError
from logging_config import setup_logging, get_logger


logger = get_logger(__name__)


def main(argv) -> int:
    # Set up the program with command line arguments
    driver = Driver(argv)
    setup_logging(driver.get_log_level(), driver.get_log_file())

    try:
        card = SimCard(driver.get_image(),
                       uid=driver.get_uid(),
                       card_type=driver.get_card_type(),
                       reader_key=driver.get_key(),
                       fail_reads=driver.get_fail_reads(),
                       fail_writes=driver.get_fail_writes())
    except MediumError as e:
        logger.error(f"Could not open tag image: {e}")
        return 1

    # Block capabilities come straight from the tag
    codec = SegCodec(card.read_block, card.write_block)
    logger.info(f"Using {len(codec.block_map)} data blocks, "
                f"{codec.block_map.capacity}-byte logical profile")

    card.tap(driver.get_taps())
    failures = 0
    while True:
        result = sync_card(card, codec)
        if result is None:
            break
        if not result.ok:
            failures += 1
            logger.error(f"Transaction failed: {result.failure.kind.value}"
                         f" (block {result.failure.block_id})")

    try:
        card.save()
    except MediumError as e:
        logger.error(str(e))
        return 1

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
