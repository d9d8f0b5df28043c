"""
Tests for the pydantic data models (models.py): wire aliases, validation,
and the tagged section source.
"""
import pytest
from pydantic import ValidationError

from dossier_builder.models import (
    Competency,
    CompetencyCategory,
    DossierDocument,
    DossierSection,
    GeneratedSource,
    Grade,
    MergeRequest,
    Skill,
    SectionType,
    StudentProfile,
    UploadedSource,
)


class TestStudentProfile:
    def test_camel_case_wire_shape(self):
        p = StudentProfile.model_validate({
            "name": "Sam Graf", "class": "ZBA 1A", "zbaProfile": "Integrativ",
            "jobTargets": ["Koch EFZ"], "currentPhase": "Bewerben",
        })
        assert p.class_name == "ZBA 1A"
        assert p.job_targets == ["Koch EFZ"]
        assert p.bio is None
        assert p.strengths == []

    def test_initials(self):
        assert StudentProfile(name="Frodo Beutlin").initials() == "FB"
        assert StudentProfile(name="anna maria muster").initials() == "AM"
        assert StudentProfile(name="   ").initials() == "?"


class TestScores:
    def test_skill_fraction_clamped(self):
        assert Skill(subject="x", value=15).fraction == 1.0
        assert Skill(subject="x", value=-1).fraction == 0.0
        assert Skill(subject="x", value=5).fraction == 0.5

    def test_skill_zero_full_mark(self):
        assert Skill(subject="x", value=5, full_mark=0).fraction == 0.0

    @pytest.mark.parametrize("value", [0.0, 0.5, 6.5])
    def test_grade_out_of_range_accepted(self, value):
        grade = Grade(subject="Deutsch", value=value)
        assert grade.value == value
        assert not grade.in_range

    @pytest.mark.parametrize("value", [1.0, 4.5, 6.0])
    def test_grade_in_range(self, value):
        assert Grade(subject="Deutsch", value=value).in_range

    def test_one_bad_grade_keeps_request_valid(self):
        request = MergeRequest.model_validate({
            "sections": [],
            "profile": {"name": "Anna"},
            "grades": [{"subject": "Deutsch", "value": 5}, {"subject": "Mathe", "value": 6.5}],
        })
        assert [g.value for g in request.grades] == [5.0, 6.5]

    def test_grade_type_alias(self):
        assert Grade.model_validate({"subject": "Deutsch", "value": 5, "type": "Test"}).category == "Test"

    def test_competency_level_bounds(self):
        with pytest.raises(ValidationError):
            Competency(id="c", name="c", level=5)

    def test_category_average(self):
        cat = CompetencyCategory(name="A", competencies=[
            Competency(id="1", name="a", level=2), Competency(id="2", name="b", level=3),
        ])
        assert cat.average_level() == 2.5
        assert CompetencyCategory(name="B").average_level() == 0.0


class TestDossierDocument:
    def test_wire_shape(self):
        doc = DossierDocument.model_validate({
            "id": "d1", "title": "Zeugnis.pdf", "type": "pdf", "pdfData": "JVBERi0=", "isCover": True,
        })
        assert doc.has_payload
        assert doc.is_cover

    def test_no_payload(self):
        assert not DossierDocument(id="d", title="t").has_payload


class TestDossierSection:
    def test_uploaded_constructor(self):
        s = DossierSection.uploaded(id="up-1", document_id="d1", label="Zeugnis")
        assert s.kind == "uploaded"
        assert s.source_id == "d1"
        assert s.section_type == SectionType.UPLOADED

    def test_generated_constructor(self):
        s = DossierSection.generated("gen-profile", SectionType.PROFILE, "Profil")
        assert s.kind == "generated"
        assert s.source_id is None

    def test_generated_uploaded_type_rejected(self):
        with pytest.raises(ValidationError):
            DossierSection.generated("x", SectionType.UPLOADED, "x")

    def test_nested_source_shape(self):
        s = DossierSection.model_validate({
            "id": "up-1", "sectionType": "uploaded", "label": "L",
            "source": {"kind": "uploaded", "documentId": "d1"},
        })
        assert isinstance(s.source, UploadedSource)
        assert s.source_id == "d1"

    def test_flat_web_shape(self):
        s = DossierSection.model_validate({
            "id": "up-1", "type": "uploaded", "sourceId": "d9", "sectionType": "uploaded",
            "label": "L", "enabled": False, "order": 3,
        })
        assert s.source_id == "d9"
        assert not s.enabled
        assert s.order == 3

    def test_flat_generated_shape(self):
        s = DossierSection.model_validate({
            "id": "gen-competencyRadar", "type": "generated", "sectionType": "competencyRadar", "label": "R",
        })
        assert isinstance(s.source, GeneratedSource)
        assert s.section_type == SectionType.COMPETENCY_RADAR

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            DossierSection.model_validate({
                "id": "x", "sectionType": "cover", "label": "x", "source": {"kind": "linked"},
            })


class TestMergeRequest:
    def test_document_lookup(self):
        req = MergeRequest(
            sections=[], profile=StudentProfile(name="A"),
            documents=[DossierDocument(id="a", title="a"), DossierDocument(id="b", title="b")],
        )
        assert req.document_by_id("b").title == "b"
        assert req.document_by_id("zzz") is None
        assert req.document_by_id(None) is None

    def test_selection_defaults_to_none(self):
        req = MergeRequest(sections=[], profile=StudentProfile(name="A"))
        assert req.selected_project_ids is None
        assert req.radar_image is None
