"""Loading vectors from a corpus on disk.

A corpus is any mix of vector files and directories; directories are walked
recursively for ``*.json`` files in sorted order so runs are reproducible.
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, Union

from tvx.core import config
from tvx.core.exceptions import ParseError

from .codec import parse_test_vector
from .models import TestVector

log = logging.getLogger(__name__)

PathLike = Union[str, Path]


def iter_vector_paths(paths: Iterable[PathLike]) -> Iterator[Path]:
    """Expand files and directories into vector file paths.

    Args:
        paths: Files (yielded as-is) or directories (walked for *.json)

    Yields:
        Path of each vector file

    Raises:
        ParseError: If a path does not exist
    """
    for item in paths:
        path = Path(item)
        if path.is_dir():
            yield from sorted(p for p in path.rglob("*.json") if p.is_file())
        elif path.is_file():
            yield path
        else:
            raise ParseError(f"No such vector file or directory: {path}")


def read_vector_bytes(path: PathLike, max_bytes: int = None) -> bytes:
    """Read a vector file, refusing documents over the size limit."""
    path = Path(path)
    limit = max_bytes if max_bytes is not None else config.MAX_DOCUMENT_BYTES
    size = path.stat().st_size
    if size > limit:
        raise ParseError(f"{path}: document is {size} bytes, limit is {limit}")
    return path.read_bytes()


def load_vector(path: PathLike) -> TestVector:
    """Read and decode one vector file.

    Raises:
        ParseError: If the file is too large, not JSON, or malformed
        MalformedEncoding: If a base64 or millisecond field is invalid
        ClassVariantMismatch: If class and populated payload disagree
    """
    vector = parse_test_vector(read_vector_bytes(path))
    log.debug("loaded vector", extra={"vector_id": vector.id, "path": str(path)})
    return vector
