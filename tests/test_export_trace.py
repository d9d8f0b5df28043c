"""
Tests for the export trace (export_trace.py).
"""
import dataclasses

from dossier_builder.export_trace import (
    FAILED,
    FOLDED,
    INCLUDED,
    SKIPPED,
    ExportTrace,
    SectionOutcome,
)


def _outcome(status, pages=0, label="S", ms=1.0, message=""):
    return SectionOutcome(section_id=label.lower(), label=label, section_type="uploaded",
                          status=status, pages=pages, duration_ms=ms, message=message)


class TestExportTrace:
    def test_totals(self):
        trace = ExportTrace()
        trace.append(_outcome(INCLUDED, 2, ms=3.0))
        trace.append(_outcome(INCLUDED, 1, ms=2.0))
        assert trace.total_pages == 3
        assert trace.total_ms == 5.0
        assert not trace.has_problems

    def test_failed_and_skipped_are_problems(self):
        trace = ExportTrace()
        trace.append(_outcome(FOLDED))
        assert not trace.has_problems
        trace.append(_outcome(SKIPPED, label="Leer"))
        assert trace.has_problems
        trace.append(_outcome(FAILED, label="Kaputt"))
        assert [o.label for o in trace.failed] == ["Kaputt"]
        assert len(trace.with_status(SKIPPED)) == 1

    def test_export_ids_unique(self):
        assert ExportTrace().export_id != ExportTrace().export_id

    def test_summary(self):
        trace = ExportTrace()
        trace.append(_outcome(INCLUDED, 3, label="Zeugnis"))
        trace.append(_outcome(FAILED, label="Kaputt", message="PdfReadError: bad"))
        summary = trace.summary()
        assert "Zeugnis: 3 S." in summary
        assert "Kaputt: failed — PdfReadError: bad" in summary

    def test_empty_summary(self):
        assert ExportTrace().summary() == "Keine Sektionen verarbeitet."

    def test_outcome_fields(self):
        names = [f.name for f in dataclasses.fields(SectionOutcome)]
        assert names == ["section_id", "label", "section_type", "status", "pages", "duration_ms", "message"]
