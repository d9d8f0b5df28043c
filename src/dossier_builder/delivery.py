"""
Handing the finished dossier to the user.

The Streamlit front-end serves the bytes directly through
``st.download_button``; the demo script and batch callers write to disk via
``save_pdf``, which never overwrites an existing file.
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Iterator, Union

logger = logging.getLogger(__name__)

_SPACES = re.compile(r"\s+")
_UNSAFE = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def dossier_filename(name: str, prefix: str = "Bewerbungsdossier") -> str:
    """``Bewerbungsdossier_Frodo_Beutlin.pdf`` for ``"Frodo Beutlin"``."""
    stem = _UNSAFE.sub("", _SPACES.sub("_", name.strip()))
    stem = stem.strip("._")
    return f"{prefix}_{stem}.pdf" if stem else f"{prefix}.pdf"


def _free_path(directory: Path, filename: str) -> Path:
    candidate = directory / filename
    if not candidate.exists():
        return candidate
    stem, suffix = Path(filename).stem, Path(filename).suffix
    n = 1
    while True:
        candidate = directory / f"{stem} ({n}){suffix}"
        if not candidate.exists():
            return candidate
        n += 1


def save_pdf(data: bytes, directory: Union[str, os.PathLike], filename: str) -> Path:
    """
    Write *data* to *directory*/*filename* and return the path.  An existing
    file is never overwritten: ``name (1).pdf``, ``name (2).pdf`` … are tried.
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = _free_path(directory, Path(filename).name)
    # "x" mode fails instead of overwriting if another writer won the race
    with open(path, "xb") as fh:
        fh.write(data)
    logger.info("Dossier saved to %s (%d bytes)", path, len(data))
    return path


@contextlib.contextmanager
def temporary_pdf(data: bytes, filename: str = "dossier.pdf") -> Iterator[Path]:
    """Yield a temporary file holding *data*; the file is removed on exit."""
    with tempfile.TemporaryDirectory(prefix="dossier-") as tmp:
        path = Path(tmp) / Path(filename).name
        path.write_bytes(data)
        yield path
