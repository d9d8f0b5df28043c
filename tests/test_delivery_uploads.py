"""
Tests for reading uploads (uploads.py) and delivering the result (delivery.py).
"""
import io

import pytest
from factories import make_pdf

from dossier_builder.codec import decode_payload
from dossier_builder.delivery import dossier_filename, save_pdf, temporary_pdf
from dossier_builder.uploads import UploadRejected, read_pdf_upload


class _NamedBuffer(io.BytesIO):
    """Stand-in for a Streamlit UploadedFile (name + size attributes)."""

    def __init__(self, data: bytes, name: str, size: int | None = None):
        super().__init__(data)
        self.name = name
        self.size = len(data) if size is None else size


# ─── read_pdf_upload ──────────────────────────────────────────────────────────

class TestReadPdfUpload:
    def test_bytes(self):
        data = make_pdf(2)
        doc = read_pdf_upload(data, "Zeugnis.pdf")
        assert doc.title == "Zeugnis.pdf"
        assert decode_payload(doc.pdf_data) == data
        assert not doc.is_cover

    def test_path(self, tmp_path):
        path = tmp_path / "Lebenslauf.pdf"
        path.write_bytes(make_pdf(1))
        doc = read_pdf_upload(path, is_cover=True)
        assert doc.title == "Lebenslauf.pdf"
        assert doc.is_cover

    def test_file_object(self):
        doc = read_pdf_upload(_NamedBuffer(make_pdf(1), "upload.pdf"), document_id="fixed")
        assert doc.id == "fixed"
        assert doc.title == "upload.pdf"

    def test_oversize_rejected_before_reading(self):
        buf = _NamedBuffer(make_pdf(1), "gross.pdf", size=10_000_000)
        with pytest.raises(UploadRejected, match="gross.pdf"):
            read_pdf_upload(buf, max_bytes=1_000_000)
        assert buf.tell() == 0

    def test_oversize_path_rejected(self, tmp_path):
        path = tmp_path / "big.pdf"
        path.write_bytes(make_pdf(1) + b"%" * 5000)
        with pytest.raises(UploadRejected):
            read_pdf_upload(path, max_bytes=1000)

    def test_oversize_bytes_rejected(self):
        with pytest.raises(UploadRejected):
            read_pdf_upload(make_pdf(1), max_bytes=10)

    def test_empty_rejected(self):
        with pytest.raises(UploadRejected, match="leer"):
            read_pdf_upload(b"")

    def test_non_pdf_rejected(self):
        with pytest.raises(UploadRejected, match="PDF"):
            read_pdf_upload(b"\x89PNG\r\n\x1a\n", "bild.png")

    def test_rejection_is_value_error(self):
        with pytest.raises(ValueError):
            read_pdf_upload(b"hello")


# ─── delivery ─────────────────────────────────────────────────────────────────

class TestDossierFilename:
    def test_spaces_to_underscores(self):
        assert dossier_filename("Frodo Beutlin") == "Bewerbungsdossier_Frodo_Beutlin.pdf"

    def test_whitespace_runs_collapse(self):
        assert dossier_filename("  Anna   Maria\tMuster ") == "Bewerbungsdossier_Anna_Maria_Muster.pdf"

    def test_path_separators_stripped(self):
        assert dossier_filename("../etc/passwd") == "Bewerbungsdossier_etcpasswd.pdf"

    def test_empty_name(self):
        assert dossier_filename("   ") == "Bewerbungsdossier.pdf"

    def test_custom_prefix(self):
        assert dossier_filename("Bo", prefix="Dossier") == "Dossier_Bo.pdf"


class TestSavePdf:
    def test_creates_directory(self, tmp_path):
        path = save_pdf(b"%PDF-1.4", tmp_path / "nested" / "out", "a.pdf")
        assert path.read_bytes() == b"%PDF-1.4"

    def test_collision_gets_suffix(self, tmp_path):
        first = save_pdf(b"one", tmp_path, "a.pdf")
        second = save_pdf(b"two", tmp_path, "a.pdf")
        third = save_pdf(b"three", tmp_path, "a.pdf")
        assert [p.name for p in (first, second, third)] == ["a.pdf", "a (1).pdf", "a (2).pdf"]
        assert first.read_bytes() == b"one"

    def test_filename_directory_part_ignored(self, tmp_path):
        path = save_pdf(b"x", tmp_path, "../escape.pdf")
        assert path.parent == tmp_path


class TestTemporaryPdf:
    def test_file_removed_on_exit(self):
        with temporary_pdf(b"%PDF-1.4 test", "dossier.pdf") as path:
            assert path.read_bytes() == b"%PDF-1.4 test"
            assert path.name == "dossier.pdf"
        assert not path.exists()

    def test_removed_after_exception(self):
        with pytest.raises(RuntimeError):
            with temporary_pdf(b"x") as path:
                raise RuntimeError("boom")
        assert not path.exists()
