"""
Reading user-selected PDF files into ``DossierDocument`` records.

The size limit is checked before the whole file is read, so an oversized
upload never has to fit in memory.  Accepted sources: raw bytes, a
filesystem path, or any binary file object (e.g. a Streamlit UploadedFile).
"""

from __future__ import annotations

import datetime
import logging
import os
import uuid
from pathlib import Path
from typing import BinaryIO, Optional, Union

from dossier_builder.codec import encode_payload, is_pdf
from dossier_builder.config import get_settings
from dossier_builder.models import DossierDocument

logger = logging.getLogger(__name__)

UploadSource = Union[bytes, bytearray, str, os.PathLike, BinaryIO]


class UploadRejected(ValueError):
    """Upload is empty, too large, or not a PDF."""


def _declared_size(source: BinaryIO) -> Optional[int]:
    size = getattr(source, "size", None)
    if isinstance(size, int):
        return size
    try:
        pos = source.tell()
        source.seek(0, os.SEEK_END)
        end = source.tell()
        source.seek(pos)
        return end - pos
    except (AttributeError, OSError, ValueError):
        return None


def _read_limited(source: UploadSource, max_bytes: int) -> tuple[bytes, str]:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source), ""

    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        size = path.stat().st_size
        if size > max_bytes:
            raise UploadRejected(
                f"{path.name}: Datei ist {size / 1024 / 1024:.1f} MB gross "
                f"(maximal {max_bytes / 1024 / 1024:.0f} MB)"
            )
        return path.read_bytes(), path.name

    name = Path(getattr(source, "name", "") or "").name
    size = _declared_size(source)
    if size is not None and size > max_bytes:
        raise UploadRejected(
            f"{name or 'Upload'}: Datei ist {size / 1024 / 1024:.1f} MB gross "
            f"(maximal {max_bytes / 1024 / 1024:.0f} MB)"
        )
    data = source.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise UploadRejected(f"{name or 'Upload'}: Datei überschreitet {max_bytes} Bytes")
    return data, name


def read_pdf_upload(
    source: UploadSource,
    title: Optional[str] = None,
    *,
    is_cover: bool = False,
    max_bytes: Optional[int] = None,
    document_id: Optional[str] = None,
) -> DossierDocument:
    """
    Validate and load one uploaded PDF.

    Raises ``UploadRejected`` for empty, oversized or non-PDF input.
    """
    if max_bytes is None:
        max_bytes = get_settings().pipeline.max_upload_bytes

    data, name = _read_limited(source, max_bytes)
    if len(data) > max_bytes:
        raise UploadRejected(f"{name or 'Upload'}: Datei überschreitet {max_bytes} Bytes")
    if not data:
        raise UploadRejected(f"{name or 'Upload'}: Datei ist leer")
    if not is_pdf(data):
        raise UploadRejected(f"{name or 'Upload'}: Bitte eine PDF-Datei auswählen")

    doc = DossierDocument(
        id          = document_id or uuid.uuid4().hex[:12],
        title       = title or name or "Dokument.pdf",
        doc_type    = "pdf",
        date        = datetime.date.today().strftime("%m/%y"),
        size        = f"{len(data) / 1024 / 1024:.1f} MB",
        pdf_data    = encode_payload(data),
        is_cover    = is_cover,
    )
    logger.info("Upload accepted: %s (%d bytes, cover=%s)", doc.title, len(data), is_cover)
    return doc
