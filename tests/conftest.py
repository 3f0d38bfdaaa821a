import pytest
import logging
import sys

from tagTypes import MediumError, u32Const
from simCard import SimCard


def pytest_addoption(parser):
    """Add custom output control options."""
    parser.addoption(
        "--show-logs",
        action="store_true",
        default=False,
        help="Show logger output"
    )


@pytest.fixture(autouse=True)
def control_output(request, caplog):
    """Control debug output for tests."""
    # Create a console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

    # Get the root logger and add our handler
    root_logger = logging.getLogger()
    root_logger.addHandler(console_handler)

    # Set levels based on --show-logs option
    if request.config.getoption("--show-logs"):
        root_logger.setLevel(logging.DEBUG)
        console_handler.setLevel(logging.DEBUG)
    else:
        root_logger.setLevel(logging.WARNING)
        console_handler.setLevel(logging.WARNING)

    yield

    # Clean up
    root_logger.removeHandler(console_handler)


class MemDevice:
    """Dict-backed block device that records the order of every access."""

    def __init__(self, fail_reads=(), fail_writes=()):
        self.blocks = {}
        self.fail_reads = set(fail_reads)
        self.fail_writes = set(fail_writes)
        self.reads = []
        self.writes = []

    def read_block(self, b_num):
        self.reads.append(b_num)
        if b_num in self.fail_reads:
            raise MediumError(f"simulated read failure on {b_num}")
        return self.blocks.get(b_num, bytes(u32Const.BLOCK_BYTES.value))

    def write_block(self, b_num, data):
        self.writes.append(b_num)
        if b_num in self.fail_writes:
            raise MediumError(f"simulated write failure on {b_num}")
        self.blocks[b_num] = bytes(data)


@pytest.fixture
def mem_device():
    return MemDevice()


@pytest.fixture
def tag_image(tmp_path):
    return str(tmp_path / "tag_image.bin")


@pytest.fixture
def card(tag_image):
    """A blank tag that is already selected on the reader."""
    sim_card = SimCard(tag_image)
    sim_card.tap()
    assert sim_card.is_new_card_present()
    return sim_card
