"""
dossier_builder — Application dossier generation and merge
==========================================================
Builds a multi-page application dossier (Bewerbungsdossier) from a student's
structured data and splices it together with uploaded PDF files, in a
user-defined section order, into one downloadable PDF.

Module map
----------
  models.py          Pydantic records: profile, grades, projects, competencies,
                     documents, sections (tagged source), MergeRequest.
  config.py          Settings loaded from .env (limits, radar, output, logging).
  codec.py           Base64 payload transport, data-URI tolerant.
  pdf_canvas.py      reportlab canvas wrapper with mm / top-left coordinates.
  cover_page.py      Page 1: CV sheet with sidebar and main column.
  profile_page.py    Page 2: competency radar + grades table; standalone grades.
  project_page.py    One summary sheet per project.
  radar.py           Pillow rasteriser for the competency wheel.
  sections.py        Section list operations and the cover-slot rule.
  merge.py           Orchestrator: sections → byte buffers → one PDF.
  export_trace.py    Per-section outcome log of one export.
  validation.py      Pre-flight checks shown before the export.
  uploads.py         Reading and size-checking uploaded PDFs.
  delivery.py        File naming, collision-safe save, temporary files.
  sample_data.py     Default sheet content and a demo student.

Pipeline order
--------------
  uploads → sections (toggle / reorder / cover slot) → validation
  → merge [radar raster → page generators | uploaded payloads]
  → delivery (download button or save_pdf)
"""
__version__ = "0.1.0"
