# streamlit_app.py – Bewerbungsdossier Builder
# Configure the dossier's sections, add own PDFs and download the merged file.

import logging
import sys
from pathlib import Path

# make src/ importable without installing the package
sys.path.insert(0, str(Path(__file__).parent / "src"))

import streamlit as st

from dossier_builder.config import get_settings
from dossier_builder.delivery import dossier_filename
from dossier_builder.export_trace import FAILED, SKIPPED
from dossier_builder.merge import DossierBuildError, merge_dossier_with_trace
from dossier_builder.models import DossierSection, MergeRequest, SectionType
from dossier_builder.sample_data import (
    default_competency_categories,
    default_details,
    demo_grades,
    demo_profile,
    demo_projects,
    demo_skills,
)
from dossier_builder.sections import (
    apply_cover,
    contributes_pages,
    default_sections,
    insert_section,
    move_section,
    remove_section,
    toggle_section,
)
from dossier_builder.uploads import UploadRejected, read_pdf_upload
from dossier_builder.validation import CheckLevel, check_request

settings = get_settings()
logging.basicConfig(level=settings.app.log_level, format="%(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("streamlit_app")

# Color constants
BLUE       = "#1E3799"
TEXT_MUTED = "#6C757D"
BORDER     = "#E9ECEF"

TYPE_ICON = {
    SectionType.COVER:            "📄",
    SectionType.PROFILE:          "👤",
    SectionType.COMPETENCY_RADAR: "🎯",
    SectionType.PROJECTS:         "🚀",
    SectionType.GRADES:           "📊",
    SectionType.UPLOADED:         "📎",
}

# ─── Page config ─────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="Bewerbungsdossier",
    page_icon="📁",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ─── Session state ───────────────────────────────────────────────────────────
if "documents" not in st.session_state:
    st.session_state["documents"]   = []
    st.session_state["sections"]    = default_sections([])
    st.session_state["profile"]     = demo_profile()
    st.session_state["projects"]    = demo_projects()
    st.session_state["grades"]      = demo_grades()
    st.session_state["skills"]      = demo_skills()
    st.session_state["categories"]  = default_competency_categories()
    st.session_state["details"]     = default_details()
    st.session_state["selected_project_ids"] = [
        p.id for p in st.session_state["projects"] if p.status.value != "planning"
    ]
    st.session_state["export"] = None


def _set_sections(sections: list[DossierSection]) -> None:
    st.session_state["sections"] = sections
    st.session_state["export"] = None


def _add_documents(files, as_cover: bool = False) -> None:
    docs = st.session_state["documents"]
    sections = st.session_state["sections"]
    for f in files:
        try:
            doc = read_pdf_upload(f, title=f.name, is_cover=as_cover,
                                  max_bytes=settings.pipeline.max_upload_bytes)
        except UploadRejected as e:
            st.error(str(e))
            continue
        if as_cover:
            docs = [d.model_copy(update={"is_cover": False}) if d.is_cover else d for d in docs]
        docs = docs + [doc]
        if not as_cover:
            # uploads go in front of the generated sheets
            first_generated = next(
                (i for i, s in enumerate(sections) if s.kind == "generated" and s.section_type != SectionType.COVER),
                len(sections),
            )
            sections = insert_section(
                sections,
                DossierSection.uploaded(id=f"up-{doc.id}", document_id=doc.id, label=doc.title),
                first_generated,
            )
    st.session_state["documents"] = docs
    _set_sections(apply_cover(sections, docs))


def _remove_document(doc_id: str) -> None:
    docs = [d for d in st.session_state["documents"] if d.id != doc_id]
    sections = [s for s in st.session_state["sections"] if s.source_id != doc_id]
    st.session_state["documents"] = docs
    _set_sections(apply_cover(sections, docs))


# ─── Sidebar ─────────────────────────────────────────────────────────────────
with st.sidebar:
    profile = st.session_state["profile"]
    st.markdown(f"### {profile.name}")
    st.caption(f"{profile.class_name} · {profile.zba_profile}")
    st.divider()
    st.markdown("**Einstellungen**")
    for key, value in settings.status_summary().items():
        st.markdown(
            f"<div style='display:flex;justify-content:space-between;font-size:0.85rem;"
            f"border-bottom:1px solid {BORDER};padding:2px 0'>"
            f"<span style='color:{TEXT_MUTED}'>{key}</span><span>{value}</span></div>",
            unsafe_allow_html=True,
        )

st.markdown(f"<h2 style='color:{BLUE};margin-bottom:0'>📁 Bewerbungsdossier</h2>", unsafe_allow_html=True)
st.caption("Deckblatt, Profil, Projekte und eigene PDFs in einer Datei.")

tab_docs, tab_sections, tab_projects, tab_export = st.tabs(
    ["📎 Dokumente", "🗂️ Sektionen", "🚀 Projekte", "⬇️ Export"]
)

# ─── Documents ───────────────────────────────────────────────────────────────
with tab_docs:
    col_up, col_cover = st.columns(2)
    with col_up:
        files = st.file_uploader("PDFs hinzufügen", type=["pdf"], accept_multiple_files=True, key="uploads")
        if st.button("Hinzufügen", disabled=not files, use_container_width=True):
            _add_documents(files)
            st.rerun()
    with col_cover:
        cover = st.file_uploader("Eigenes Deckblatt (ersetzt das generierte)", type=["pdf"], key="cover_upload")
        if st.button("Als Deckblatt verwenden", disabled=cover is None, use_container_width=True):
            _add_documents([cover], as_cover=True)
            st.rerun()

    st.divider()
    if not st.session_state["documents"]:
        st.info("Noch keine Dokumente hochgeladen.")
    for doc in st.session_state["documents"]:
        c1, c2, c3 = st.columns([6, 2, 1])
        c1.markdown(f"{'📄 **Deckblatt** · ' if doc.is_cover else '📎 '}{doc.title}")
        c2.caption(f"{doc.size or ''} · {doc.date}")
        if c3.button("🗑️", key=f"rm-{doc.id}", help="Entfernen"):
            _remove_document(doc.id)
            st.rerun()

# ─── Sections ────────────────────────────────────────────────────────────────
with tab_sections:
    sections = st.session_state["sections"]
    for index, section in enumerate(sections):
        c_on, c_label, c_up, c_down, c_rm = st.columns([1, 8, 1, 1, 1])
        enabled = c_on.checkbox(" ", value=section.enabled, key=f"on-{section.id}",
                                label_visibility="collapsed")
        if enabled != section.enabled:
            _set_sections(toggle_section(sections, section.id))
            st.rerun()
        note = "" if contributes_pages(section, sections) else " · _auf Profilseite_"
        c_label.markdown(f"{TYPE_ICON.get(section.section_type, '•')} {section.label}{note}")
        if c_up.button("▲", key=f"up-{section.id}", disabled=index == 0):
            _set_sections(move_section(sections, section.id, index - 1))
            st.rerun()
        if c_down.button("▼", key=f"down-{section.id}", disabled=index == len(sections) - 1):
            _set_sections(move_section(sections, section.id, index + 1))
            st.rerun()
        if section.kind == "uploaded" and c_rm.button("✕", key=f"del-{section.id}"):
            _set_sections(remove_section(sections, section.id))
            st.rerun()

# ─── Projects ────────────────────────────────────────────────────────────────
with tab_projects:
    projects = st.session_state["projects"]
    labels = {p.id: f"{p.title} ({p.status.value})" for p in projects}
    chosen = st.multiselect(
        "Projekte im Dossier",
        options=list(labels),
        default=st.session_state["selected_project_ids"],
        format_func=labels.get,
    )
    if chosen != st.session_state["selected_project_ids"]:
        st.session_state["selected_project_ids"] = chosen
        st.session_state["export"] = None

# ─── Export ──────────────────────────────────────────────────────────────────
with tab_export:
    request = MergeRequest(
        sections              = st.session_state["sections"],
        documents             = st.session_state["documents"],
        profile               = st.session_state["profile"],
        skills                = st.session_state["skills"],
        projects              = st.session_state["projects"],
        grades                = st.session_state["grades"],
        selected_project_ids  = st.session_state["selected_project_ids"],
        competency_categories = st.session_state["categories"],
        details               = st.session_state["details"],
    )
    checks = check_request(request, settings)
    for v in checks.violations:
        if v.level == CheckLevel.BLOCK:
            st.error(v.message)
        elif v.level == CheckLevel.WARN:
            st.warning(v.message)
        else:
            st.caption(f"ℹ️ {v.message}")

    if st.button("📁 Dossier erstellen", type="primary", disabled=checks.blocked, use_container_width=True):
        with st.spinner("Dossier wird erstellt…"):
            try:
                st.session_state["export"] = merge_dossier_with_trace(request, settings)
            except DossierBuildError as e:
                logger.error("Export failed: %s", e)
                st.session_state["export"] = None
                st.error(f"Dossier konnte nicht erstellt werden: {e}")

    if st.session_state["export"] is not None:
        data, trace = st.session_state["export"]
        st.success(f"✅ {trace.total_pages} Seiten erstellt.")
        if trace.has_problems:
            problems = trace.with_status(FAILED) + trace.with_status(SKIPPED)
            st.warning("Nicht enthalten: " + ", ".join(o.label for o in problems))
        st.download_button(
            label="⬇️ Dossier herunterladen",
            data=data,
            file_name=dossier_filename(request.profile.name, settings.output.filename_prefix),
            mime="application/pdf",
            use_container_width=True,
        )
        with st.expander("Protokoll"):
            st.text(trace.summary())
            st.caption(f"Export {trace.export_id} · {trace.timestamp} · {trace.total_ms:.0f} ms")
