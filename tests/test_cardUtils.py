import datetime
import pytest
from freezegun import freeze_time
from cardUtils import get_cur_time, format_uid, printable


def test_get_cur_time():
    with freeze_time("2020-01-01 00:00:00") as frozen_time:
        assert get_cur_time() == datetime.datetime(2020, 1, 1)
        frozen_time.tick(datetime.timedelta(seconds=1))
        assert get_cur_time() == datetime.datetime(2020, 1, 1, 0, 0, 1)


@pytest.mark.parametrize("data, expected", [
    (bytes.fromhex('deadbeef'), " DE AD BE EF"),
    (b"\x01\x0a", " 01 0A"),
    (b"", ""),
])
def test_format_uid(data, expected):
    assert format_uid(data) == expected


def test_printable():
    assert printable("counter: 3") == "counter: 3"
    assert printable("a\x01b\x7fc") == "a.b.c"
