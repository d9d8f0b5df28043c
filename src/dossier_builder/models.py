"""
Data models for the Dossier Builder.

Domain records (profile, grades, projects, competencies) are the immutable
inputs of the page generators; sections and documents describe the dossier's
table of contents; ``MergeRequest`` bundles everything for one export.

Field names are snake_case in Python and camelCase on the wire, so bundles
exported by the portfolio web app (``jobTargets``, ``pdfData``, ``sectionType``
…) validate directly.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ─── Enumerations ────────────────────────────────────────────────────────────

class ProjectStatus(str, Enum):
    PLANNING  = "planning"
    ACTIVE    = "active"
    COMPLETED = "completed"


class SectionType(str, Enum):
    """Logical slot a section fills in the dossier."""
    COVER            = "cover"
    PROFILE          = "profile"
    COMPETENCY_RADAR = "competencyRadar"   # folded into the profile page
    PROJECTS         = "projects"
    GRADES           = "grades"            # folded into the profile page if present
    UPLOADED         = "uploaded"


# ─── Student records ─────────────────────────────────────────────────────────

class StudentProfile(_Record):
    name:          str
    class_name:    str = Field(default="", alias="class")
    zba_profile:   str = ""
    bio:           Optional[str] = None
    strengths:     list[str] = Field(default_factory=list)
    interests:     list[str] = Field(default_factory=list)
    values:        list[str] = Field(default_factory=list)
    job_targets:   list[str] = Field(default_factory=list)
    current_phase: Optional[str] = None

    def initials(self) -> str:
        parts = [p for p in self.name.split() if p]
        return "".join(p[0] for p in parts).upper()[:2] or "?"


class Skill(_Record):
    subject:   str
    value:     float
    full_mark: float = 10.0

    @property
    def fraction(self) -> float:
        if self.full_mark <= 0:
            return 0.0
        return max(0.0, min(1.0, self.value / self.full_mark))


GRADE_MIN = 1.0
GRADE_MAX = 6.0


class Grade(_Record):
    subject:  str
    value:    float
    date:     str = ""
    category: str = Field(default="", alias="type")

    @property
    def in_range(self) -> bool:
        return GRADE_MIN <= self.value <= GRADE_MAX


class Competency(_Record):
    id:    str
    name:  str
    icon:  str = ""
    level: int = Field(default=0, ge=0, le=4)


class CompetencyCategory(_Record):
    name:         str
    full_name:    str = ""
    icon:         str = ""
    color:        str = "#94A3B8"
    competencies: list[Competency] = Field(default_factory=list)

    def average_level(self) -> float:
        if not self.competencies:
            return 0.0
        return sum(c.level for c in self.competencies) / len(self.competencies)


class Milestone(_Record):
    week:      int = 0
    text:      str
    completed: bool = False


class Project(_Record):
    id:               str
    title:            str
    status:           ProjectStatus = ProjectStatus.PLANNING
    passion_question: str = ""
    milestones:       list[Milestone] = Field(default_factory=list)


# ─── Uploaded documents ──────────────────────────────────────────────────────

class DossierDocument(_Record):
    """A user-uploaded file; ``pdf_data`` holds the base64 payload."""
    id:       str
    title:    str
    doc_type: str = Field(default="pdf", alias="type")
    date:     str = ""
    size:     Optional[str] = None
    pdf_data: Optional[str] = None
    is_cover: bool = False

    @property
    def has_payload(self) -> bool:
        return bool(self.pdf_data)


# ─── Sections ────────────────────────────────────────────────────────────────

class UploadedSource(_Record):
    kind:        Literal["uploaded"] = "uploaded"
    document_id: str


class GeneratedSource(_Record):
    kind: Literal["generated"] = "generated"


SectionSource = Annotated[Union[UploadedSource, GeneratedSource], Field(discriminator="kind")]


class DossierSection(_Record):
    """
    One orderable, switchable contribution to the dossier.

    ``source`` is a closed variant: either a reference to an uploaded
    document or a marker that the pages are generated from ``section_type``.
    """
    id:           str
    section_type: SectionType
    label:        str
    source:       SectionSource
    enabled:      bool = True
    order:        int = 0

    @model_validator(mode="before")
    @classmethod
    def _accept_flat_shape(cls, data: Any) -> Any:
        # web app shape: {"type": "uploaded"|"generated", "sourceId": "..."}
        if isinstance(data, dict) and "source" not in data and "type" in data:
            data = dict(data)
            kind = data.pop("type")
            source_id = data.pop("sourceId", data.pop("source_id", None))
            if kind == "uploaded":
                data["source"] = {"kind": "uploaded", "document_id": source_id or ""}
            else:
                data["source"] = {"kind": "generated"}
        return data

    @model_validator(mode="after")
    def _check_generated_type(self) -> "DossierSection":
        if self.kind == "generated" and self.section_type == SectionType.UPLOADED:
            raise ValueError("a generated section cannot have section type 'uploaded'")
        return self

    @property
    def kind(self) -> str:
        return self.source.kind

    @property
    def source_id(self) -> Optional[str]:
        return self.source.document_id if isinstance(self.source, UploadedSource) else None

    @classmethod
    def uploaded(
        cls,
        id: str,
        document_id: str,
        label: str,
        section_type: SectionType = SectionType.UPLOADED,
        enabled: bool = True,
        order: int = 0,
    ) -> "DossierSection":
        return cls(
            id=id, section_type=section_type, label=label,
            source=UploadedSource(document_id=document_id),
            enabled=enabled, order=order,
        )

    @classmethod
    def generated(
        cls,
        id: str,
        section_type: SectionType,
        label: str,
        enabled: bool = True,
        order: int = 0,
    ) -> "DossierSection":
        return cls(
            id=id, section_type=section_type, label=label,
            source=GeneratedSource(), enabled=enabled, order=order,
        )


# ─── Static sheet content (caller-supplied) ──────────────────────────────────

class LanguageLevel(_Record):
    name:  str
    level: str


class TimelineEntry(_Record):
    period: str
    title:  str
    place:  str = ""


class LegendEntry(_Record):
    name:        str
    description: str = ""


class DossierDetails(_Record):
    """
    Content printed on the generated sheets that is not part of the student
    profile: contact block, sidebar lists, education timeline, references,
    competency legend and the grade fallback.  Defaults: ``sample_data``.
    """
    contact_lines:    list[str] = Field(default_factory=list)   # "" = spacer
    footer_contact:   str = ""
    it_skills:        list[Skill] = Field(default_factory=list)
    languages:        list[LanguageLevel] = Field(default_factory=list)
    certificates:     list[str] = Field(default_factory=list)
    soft_skills:      list[str] = Field(default_factory=list)
    education:        list[TimelineEntry] = Field(default_factory=list)
    references:       list[str] = Field(default_factory=list)
    legend_left:      list[LegendEntry] = Field(default_factory=list)
    legend_right:     list[LegendEntry] = Field(default_factory=list)
    fallback_grades:  list[Grade] = Field(default_factory=list)
    school_name:      str = ""
    place:            str = ""
    school_year:      str = ""


# ─── Merge input bundle ──────────────────────────────────────────────────────

class MergeRequest(_Record):
    """Everything one export needs, passed atomically to the orchestrator."""
    sections:              list[DossierSection]
    documents:             list[DossierDocument] = Field(default_factory=list)
    profile:               StudentProfile
    skills:                list[Skill] = Field(default_factory=list)
    projects:              list[Project] = Field(default_factory=list)
    grades:                list[Grade] = Field(default_factory=list)
    selected_project_ids:  Optional[list[str]] = None
    radar_image:           Optional[Union[bytes, str]] = None   # PNG bytes, base64 or data URI
    competency_categories: Optional[list[CompetencyCategory]] = None
    details:               Optional[DossierDetails] = None

    def document_by_id(self, document_id: Optional[str]) -> Optional[DossierDocument]:
        return next((d for d in self.documents if d.id == document_id), None)
