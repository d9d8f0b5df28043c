"""
sample_data.py
──────────────
Default sheet content and a demo student.

``default_details()`` supplies everything the generated sheets print that is
not part of the student profile (contact block, sidebar lists, timeline,
references, competency legend, grade fallback).  Callers that know the real
values pass their own ``DossierDetails``; the demo script and the Streamlit
app fall back to these.
"""

from __future__ import annotations

from dossier_builder.models import (
    Competency,
    CompetencyCategory,
    DossierDetails,
    Grade,
    LanguageLevel,
    LegendEntry,
    Milestone,
    Project,
    ProjectStatus,
    Skill,
    StudentProfile,
    TimelineEntry,
)


# ─────────────────────────────────────────────────────────────────────────────
# Placeholder strings for absent optional profile data
# ─────────────────────────────────────────────────────────────────────────────

DEFAULT_BIO = (
    "Hoch motiviert und bestrebt, mich weiterzuentwickeln. Fördere meine "
    "Fähigkeiten durch Schach, Sprachen lernen und Fitness-Training."
)
DEFAULT_STRENGTHS = ["Ausdauer", "Zuverlässigkeit", "Reflexionsfähigkeit"]
DEFAULT_INTERESTS = ["Natur", "Storytelling", "Fotografie"]
DEFAULT_VALUES    = ["Verantwortung", "Respekt", "Durchhalten"]
DEFAULT_JOB_TARGETS = ["Mediamatiker:in EFZ", "Kaufmann/Kauffrau EFZ"]


def _grade(subject: str, value: float) -> Grade:
    return Grade(subject=subject, value=value, date="Jan 26", category="Semester")


FALLBACK_GRADES: list[Grade] = [
    _grade("Deutsch", 4.5),
    _grade("Mathematik", 4.0),
    _grade("Englisch", 4.0),
    _grade("Allgemeinbildung", 4.5),
    _grade("Informatik / Medien", 5.0),
    _grade("Projektarbeit", 5.5),
    _grade("Arbeitstechniken", 5.0),
    _grade("Sport", 5.5),
]


def default_details() -> DossierDetails:
    return DossierDetails(
        contact_lines=[
            "076 222 13 44",
            "frodo.beutlin@stud.edubs.ch",
            "Hobbitonalley 1, 4056 Mittelerde",
            "",
            "26.10.2007",
            "Hobbit (Schutzstatus S)",
        ],
        footer_contact="frodo.beutlin@stud.edubs.ch | 076 222 13 44",
        it_skills=[
            Skill(subject="MS Word", value=85, full_mark=100),
            Skill(subject="MS Excel", value=75, full_mark=100),
            Skill(subject="10-Finger", value=70, full_mark=100),
            Skill(subject="Python", value=40, full_mark=100),
        ],
        languages=[
            LanguageLevel(name="Deutsch", level="Muttersprache"),
            LanguageLevel(name="Russisch", level="B1"),
            LanguageLevel(name="Elbisch", level="A2-B1"),
            LanguageLevel(name="Englisch", level="A2"),
        ],
        certificates=["ECDL (Word, Excel)", "TELC Deutsch B1"],
        soft_skills=["Teamfähigkeit", "Selbstorganisation", "Flexibilität", "Ausdauer", "Kritikfähigkeit"],
        education=[
            TimelineEntry(period="08/2025 – heute", title="Zentrum für Brückenangebote", place="Basel, BS"),
            TimelineEntry(period="04/2022 – 06/2024", title="Expeditions-Erfahrung", place="Mordor (Teamwork)"),
            TimelineEntry(period="09/2012 – 02/2024", title="Hobbitschule", place="Hobbiton"),
        ],
        references=["Dürket Inag, Lehrerin am ZBA", "Samuel Brassel, Lehrer am ZBA"],
        legend_left=[
            LegendEntry(name="Selbstkompetenzen", description="Eigenverantwortung, Zeitmanagement, Reflexion"),
            LegendEntry(name="Sprachkompetenzen", description="Ausdruck, Leseverständnis, Textproduktion"),
            LegendEntry(name="MINT-Kompetenzen", description="Naturwissenschaften, Technik, Experimentieren"),
        ],
        legend_right=[
            LegendEntry(name="Sozialkompetenzen", description="Teamarbeit, Kommunikation, Konfliktlösung"),
            LegendEntry(name="Mathematische Kompetenzen", description="Logik, Rechnen, Problemlösung"),
            LegendEntry(name="Digitalkompetenzen", description="IT-Anwendungen, Medienkompetenz"),
        ],
        fallback_grades=list(FALLBACK_GRADES),
        school_name="Zentrum für Brückenangebote Basel",
        place="Basel",
        school_year="Schuljahr 2025/2026 · 1. Semester",
    )


def _category(name: str, full_name: str, color: str, *levels: tuple[str, str, int]) -> CompetencyCategory:
    return CompetencyCategory(
        name=name,
        full_name=full_name,
        color=color,
        competencies=[Competency(id=cid, name=cname, level=lvl) for cid, cname, lvl in levels],
    )


def default_competency_categories() -> list[CompetencyCategory]:
    return [
        _category("Selbst", "Selbstkompetenz", "#3498db", ("sk1", "Selbstständ.", 3), ("sk2", "Reflexion", 3)),
        _category("Sozial", "Soziale Kompetenz", "#2ecc71", ("so1", "Empathie", 4), ("so2", "Teamarbeit", 3)),
        _category("Sprache", "Sprache", "#1abc9c", ("sp1", "Sprechen", 3), ("sp2", "Schreiben", 2)),
        _category("Mathe", "Mathematik", "#e67e22", ("ma1", "Zahlen", 3), ("ma2", "Logik", 4)),
        _category("MINT", "MINT", "#e74c3c", ("mi1", "Technik", 4), ("mi2", "Natur", 3)),
        _category("Digital", "Digital", "#9b59b6", ("di1", "Recherche", 4), ("di2", "Tools", 3)),
    ]


# ─────────────────────────────────────────────────────────────────────────────
# Demo student
# ─────────────────────────────────────────────────────────────────────────────

def demo_profile() -> StudentProfile:
    return StudentProfile(
        name="Frodo Beutlin",
        class_name="ZBA 1A",
        zba_profile="Integrativ",
        bio=DEFAULT_BIO,
        strengths=list(DEFAULT_STRENGTHS),
        interests=list(DEFAULT_INTERESTS),
        values=list(DEFAULT_VALUES),
        job_targets=list(DEFAULT_JOB_TARGETS),
        current_phase="Bewerben",
    )


def demo_skills() -> list[Skill]:
    return [
        Skill(subject="Deutsch", value=7),
        Skill(subject="Mathe", value=6),
        Skill(subject="Englisch", value=5),
        Skill(subject="Informatik", value=8),
    ]


def demo_projects() -> list[Project]:
    return [
        Project(
            id="p1",
            title="Kurzfilm über den Rhein",
            status=ProjectStatus.COMPLETED,
            passion_question="Wie kann ich mit einfachen Mitteln einen spannenden Dokumentarfilm drehen?",
            milestones=[
                Milestone(week=1, text="Drehbuch schreiben", completed=True),
                Milestone(week=2, text="Drehorte besichtigen", completed=True),
                Milestone(week=3, text="Aufnahmen", completed=True),
                Milestone(week=4, text="Schnitt und Vertonung", completed=True),
            ],
        ),
        Project(
            id="p2",
            title="Schnupperlehre Mediamatik",
            status=ProjectStatus.ACTIVE,
            passion_question="Passt der Beruf Mediamatiker:in zu mir?",
            milestones=[
                Milestone(week=1, text="Bewerbung schreiben", completed=True),
                Milestone(week=3, text="Schnuppertage", completed=False),
            ],
        ),
        Project(
            id="p3",
            title="Website für den Schachclub",
            status=ProjectStatus.PLANNING,
            passion_question="Wie gestalte ich eine übersichtliche Vereinswebsite?",
            milestones=[Milestone(week=1, text="Anforderungen sammeln")],
        ),
    ]


def demo_grades() -> list[Grade]:
    return [
        Grade(subject="Deutsch", value=4.5, date="2026-01-12", category="Prüfung"),
        Grade(subject="Mathematik", value=5.0, date="2026-01-14", category="Prüfung"),
        Grade(subject="Englisch", value=4.0, date="2026-01-16", category="Vortrag"),
        Grade(subject="Informatik / Medien", value=5.5, date="2026-01-20", category="Projekt"),
        Grade(subject="Sport", value=6.0, date="2026-01-22", category="Prüfung"),
    ]
