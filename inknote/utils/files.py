"""
File writing helpers.
"""
import os
import shutil
import tempfile


def write_atomic(data: bytes, output_path: str, suffix: str = "") -> None:
    """
    Write bytes through a temporary file in the destination directory.

    An existing file at output_path is only replaced once the new content
    has been written completely.

    Args:
        data: Bytes to write
        output_path: Destination path
        suffix: Suffix of the temporary file

    Raises:
        OSError: If the file cannot be written
    """
    output_dir = os.path.dirname(os.path.abspath(output_path))
    os.makedirs(output_dir, exist_ok=True)
    temp_fd, temp_path = tempfile.mkstemp(suffix=suffix, dir=output_dir)
    try:
        with os.fdopen(temp_fd, 'wb') as f:
            f.write(data)
        shutil.move(temp_path, output_path)
    except BaseException:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise
