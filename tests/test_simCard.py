# test_simCard.py

import os
import pytest
from simCard import SimCard, make_bcc, is_classic_compatible
from tagTypes import u32Const, MediumError, DEFAULT_KEY, DEFAULT_ACCESS_BITS


def test_blank_image_created(tag_image):
    SimCard(tag_image)
    assert os.path.exists(tag_image)
    assert os.path.getsize(tag_image) == u32Const.CARD_BYTES.value


def test_blank_layout(card):
    block0 = card.blocks[0]
    assert bytes(block0[:4]) == bytes.fromhex('deadbeef')
    assert block0[4] == 0xde ^ 0xad ^ 0xbe ^ 0xef
    for trailer in range(3, 64, 4):
        assert bytes(card.blocks[trailer]) == DEFAULT_KEY + DEFAULT_ACCESS_BITS + DEFAULT_KEY
    assert bytes(card.blocks[4]) == bytes(16)


def test_make_bcc():
    assert make_bcc(bytes([1, 2, 4, 8])) == 15
    assert make_bcc(b'') == 0


def test_presence_gate(tag_image):
    sim_card = SimCard(tag_image)
    assert not sim_card.is_new_card_present()
    sim_card.tap(2)
    assert sim_card.is_new_card_present()
    assert sim_card.is_new_card_present()
    assert not sim_card.is_new_card_present()


def test_block_access_needs_selection(tag_image):
    sim_card = SimCard(tag_image)
    with pytest.raises(MediumError, match="No tag selected"):
        sim_card.read_block(4)


def test_halt_deselects(card):
    card.halt()
    with pytest.raises(MediumError):
        card.read_block(4)


def test_write_then_read(card):
    card.write_block(5, b"0123456789abcdef")
    assert card.read_block(5) == b"0123456789abcdef"


@pytest.mark.parametrize("block", [0, 3, 7, 63])
def test_reserved_blocks_refuse_writes(card, block):
    with pytest.raises(MediumError, match="reserved"):
        card.write_block(block, bytes(16))


@pytest.mark.parametrize("block", [-1, 64, 200])
def test_out_of_range(card, block):
    with pytest.raises(MediumError, match="out of range"):
        card.read_block(block)


def test_wrong_size_write(card):
    with pytest.raises(MediumError, match="16 bytes"):
        card.write_block(4, b"short")


def test_wrong_key_fails_auth(tag_image):
    sim_card = SimCard(tag_image, reader_key=bytes(6))
    sim_card.tap()
    sim_card.is_new_card_present()
    with pytest.raises(MediumError, match="AUTH failure on block 4"):
        sim_card.read_block(4)


def test_injected_faults(tag_image):
    sim_card = SimCard(tag_image, fail_reads=[6], fail_writes=[9])
    sim_card.tap()
    sim_card.is_new_card_present()
    sim_card.read_block(5)
    with pytest.raises(MediumError, match="READ failure"):
        sim_card.read_block(6)
    with pytest.raises(MediumError, match="WRITE failure"):
        sim_card.write_block(9, bytes(16))


def test_save_and_reload(card, tag_image):
    card.write_block(12, b"persisted block!")
    card.save()

    reloaded = SimCard(tag_image, uid=bytes.fromhex('01020304'))
    reloaded.tap()
    reloaded.is_new_card_present()
    assert reloaded.read_block(12) == b"persisted block!"
    # an existing image keeps its own UID
    assert reloaded.get_uid() == bytes.fromhex('deadbeef')


def test_bad_image_size(tag_image):
    with open(tag_image, 'wb') as f:
        f.write(bytes(100))
    with pytest.raises(MediumError, match="Bad image size"):
        SimCard(tag_image)


def test_bad_arguments(tag_image):
    with pytest.raises(ValueError):
        SimCard(tag_image, uid=b'\x01\x02')
    with pytest.raises(ValueError):
        SimCard(tag_image, reader_key=b'\xff')
    with pytest.raises(ValueError):
        SimCard(tag_image, card_type="FLOPPY")


@pytest.mark.parametrize("card_type, expected", [
    ("MIFARE_MINI", True), ("MIFARE_1K", True), ("MIFARE_4K", True),
    ("MIFARE_UL", False), ("ISO_14443_4", False),
])
def test_is_classic_compatible(card_type, expected):
    assert is_classic_compatible(card_type) == expected
