from datetime import datetime


def get_cur_time() -> datetime:
    """
    Get the current local time, used to stamp each tag transaction.

    :return: A naive datetime for now
    """
    return datetime.now()


def format_uid(data: bytes) -> str:
    """
    Format tag UID bytes the way the reader console shows them.

    :param data: UID bytes
    :return: Space-led, upper-case, two-digit hex for each byte, e.g. " DE AD BE EF"
    """
    return ''.join(f" {b:02X}" for b in data)


def printable(text: str) -> str:
    # control bytes show up when a tag holds binary junk
    return ''.join(ch if ch.isprintable() else '.' for ch in text)
