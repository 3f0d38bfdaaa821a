"""
driver.py: Setup and Configuration Module

This module reads the command line for the tag profile simulation and hands
the settings to the rest of the program. The Driver class:

1. Parses command-line switches
2. Validates hex UIDs, keys and fault-injection block numbers
3. Provides getters for each setting
"""

import argparse
import logging
from typing import List, Optional

from tagTypes import u32Const, DEFAULT_KEY
from simCard import CARD_TYPES


def non_negative_int(s: str) -> int:
    try:
        value = int(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{s}' is not a whole number")
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {value}")
    return value


def hex_bytes(size: int):
    def parse(s: str) -> bytes:
        try:
            data = bytes.fromhex(s)
        except ValueError:
            raise argparse.ArgumentTypeError(f"'{s}' is not a hex string")
        if len(data) != size:
            raise argparse.ArgumentTypeError(f"'{s}' must be {size} bytes")
        return data
    return parse


class Driver:
    # Constants
    DEFAULT_IMAGE = "tag_image.bin"
    DEFAULT_UID = "deadbeef"

    def __init__(self, args: List[str]):
        self.image = self.DEFAULT_IMAGE
        self.taps = 1
        self.uid = bytes.fromhex(self.DEFAULT_UID)
        self.key = DEFAULT_KEY
        self.card_type = "MIFARE_1K"
        self.fail_reads: List[int] = []
        self.fail_writes: List[int] = []
        self.verbose = False
        self.log_file: Optional[str] = None

        self.rd_cl_args(args)

    @staticmethod
    def make_parser() -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="tagProfile",
            description="Sync the counter in a simulated RFID tag profile.")
        parser.add_argument('-i', '--image', default=Driver.DEFAULT_IMAGE,
                            help='Tag image file; created if missing')
        parser.add_argument('-n', '--taps', type=non_negative_int, default=1,
                            help='Number of times the tag is presented to the reader')
        parser.add_argument('-u', '--uid', type=hex_bytes(u32Const.UID_BYTES.value),
                            default=bytes.fromhex(Driver.DEFAULT_UID),
                            help='UID for a newly created tag image, as hex')
        parser.add_argument('-k', '--key', type=hex_bytes(u32Const.KEY_BYTES.value),
                            default=DEFAULT_KEY, help='Reader key A, as hex')
        parser.add_argument('--card-type', choices=CARD_TYPES, default="MIFARE_1K")
        parser.add_argument('--fail-read', type=int, action='append', default=[],
                            metavar='BLOCK', help='Make reads of BLOCK fail')
        parser.add_argument('--fail-write', type=int, action='append', default=[],
                            metavar='BLOCK', help='Make writes of BLOCK fail')
        parser.add_argument('-v', '--verbose', action='store_true',
                            help='Log block-level detail to stdout')
        parser.add_argument('-l', '--log-file', help='Also log to this file')
        return parser

    def rd_cl_args(self, args: List[str]):
        ns = self.make_parser().parse_args(args[1:])  # Skip program name
        self.image = ns.image
        self.taps = ns.taps
        self.uid = ns.uid
        self.key = ns.key
        self.card_type = ns.card_type
        self.fail_reads = ns.fail_read
        self.fail_writes = ns.fail_write
        self.verbose = ns.verbose
        self.log_file = ns.log_file

    def get_image(self) -> str:
        return self.image

    def get_taps(self) -> int:
        return self.taps

    def get_uid(self) -> bytes:
        return self.uid

    def get_key(self) -> bytes:
        return self.key

    def get_card_type(self) -> str:
        return self.card_type

    def get_fail_reads(self) -> List[int]:
        return self.fail_reads

    def get_fail_writes(self) -> List[int]:
        return self.fail_writes

    def get_verbose(self) -> bool:
        return self.verbose

    def get_log_level(self) -> int:
        return logging.DEBUG if self.verbose else logging.INFO

    def get_log_file(self) -> Optional[str]:
        return self.log_file
