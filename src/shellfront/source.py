"""
Character Sources
=================

Pull-based character sequences feeding the scanner. A source is any
iterable of single characters; iteration may raise (for example on a
decoding error) and the error propagates through the scanner untouched.

Files are read lazily, one chunk at a time, as the scanner asks for
characters. Line endings are never translated, so ``\\r`` and ``\\r\\n``
reach the scanner as written and spans index the file's own characters.
"""

import logging
from pathlib import Path
from typing import Iterator, Union

logger = logging.getLogger(__name__)

# Characters decoded per read when streaming from a file
CHUNK_SIZE = 4096


def iter_file_chars(
    path: Union[str, Path],
    encoding: str = "utf-8",
    chunk_size: int = CHUNK_SIZE,
) -> Iterator[str]:
    """
    Stream characters from a file without reading it all up front.

    The file is opened on the first pull, so a missing file or a decoding
    error surfaces from whichever scan call needed the character.

    Raises:
        FileNotFoundError: If the file does not exist
        UnicodeDecodeError: If the file is not valid in ``encoding``
    """
    count = 0
    with open(path, "r", encoding=encoding, newline="") as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                logger.debug(f"Read {path} ({count} characters)")
                return
            count += len(chunk)
            yield from chunk
