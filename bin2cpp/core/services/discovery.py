"""
Input discovery: expand the paths given by the user into InputFiles.

Directories are walked recursively.  Entries are visited in sorted name
order, so the same tree always produces the same list (and therefore
byte-identical generated code) on every run and every platform.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path, PurePosixPath

from bin2cpp.core.errors import InputResolutionError
from bin2cpp.core.models.registry import InputFile
from bin2cpp.core.services.identifiers import IdentifierAllocator

logger = logging.getLogger(__name__)


def resolve_inputs(
    paths: Iterable[str | Path],
    base_dir: Path | None = None,
) -> list[InputFile]:
    """Resolve files and directories into an ordered list of InputFiles.

    Args:
        paths: Files or directories, in the order they were given.
        base_dir: Directory that relative ``paths`` are anchored to
            (the manifest directory).  Display names stay as written.

    Returns:
        One InputFile per regular file, in traversal order.

    Raises:
        InputResolutionError: If a path is neither a file nor a directory.
    """
    allocator = IdentifierAllocator()
    result: list[InputFile] = []

    for raw in paths:
        display = PurePosixPath(Path(raw).as_posix())
        location = Path(raw)
        if base_dir is not None and not location.is_absolute():
            location = base_dir / location

        if location.is_dir():
            logger.debug("Walking input directory %s", location)
            for file_path, display_name in _walk(location, display):
                result.append(_make_input(file_path, display_name, allocator))
        elif location.is_file():
            result.append(_make_input(location, str(display), allocator))
        else:
            raise InputResolutionError(f"can't find file or directory '{raw}'")

    logger.info("Resolved %d input file(s)", len(result))
    return result


def _walk(directory: Path, display: PurePosixPath) -> Iterator[tuple[Path, str]]:
    """Yield (path, display name) for every regular file below ``directory``."""
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise InputResolutionError(f"can't list directory '{directory}': {e}") from e

    for entry in entries:
        if entry.is_dir():
            yield from _walk(entry, display / entry.name)
        elif entry.is_file():
            yield entry, str(display / entry.name)


def _make_input(path: Path, display_name: str, allocator: IdentifierAllocator) -> InputFile:
    identifier = allocator.allocate(path)
    return InputFile(path=path, display_name=display_name, identifier=identifier)
