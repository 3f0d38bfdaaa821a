import os
from typing import Optional

from tagTypes import MediumError
from logging_config import get_logger


logger = get_logger(__name__)


class ImageShifter:
    """
    Replaces a tag image file atomically by way of a temporary file.
    """

    @staticmethod
    def shift_image(f_name: str, data: bytes, expected_size: Optional[int] = None) -> int:
        """
        Write `data` to a temporary file and move it over `f_name`.

        Args:
            f_name: Path of the image file.
            data: Full image contents.
            expected_size: If given, refuse data of any other length.

        Returns:
            0 if successful, non-zero error code otherwise.
        """
        if expected_size is not None and len(data) != expected_size:
            logger.error(f"Image for {f_name} is {len(data)} bytes, expected {expected_size}")
            return -4

        had_error = 0
        tmp_file = f_name + ".tmp"

        try:
            with open(tmp_file, "wb") as f:
                f.write(data)
            os.replace(tmp_file, f_name)
        except PermissionError:
            had_error = -2
            logger.error(f"Permission denied writing {f_name}")
        except FileNotFoundError:
            had_error = -3
            logger.error(f"Directory for {f_name} not found")
        except OSError as e:
            had_error = -(e.errno or 1)
            logger.error(f"OS error: {e}")

        # Remove temporary file if it is still around
        try:
            if os.path.exists(tmp_file):
                os.unlink(tmp_file)
        except OSError as e:
            logger.warning(f"Could not remove {tmp_file}: {e}")

        return had_error

    @staticmethod
    def load_image(f_name: str) -> bytes:
        """
        Read a whole image file.

        Raises:
            MediumError: If the file cannot be opened or read.
        """
        try:
            with open(f_name, "rb") as f:
                return f.read()
        except OSError as e:
            raise MediumError(f"Cannot read image {f_name}: {e}") from e
