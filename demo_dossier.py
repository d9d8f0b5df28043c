"""
demo_dossier.py – Build the demo application dossier from the command line

Run:
    python demo_dossier.py [zeugnis.pdf ...]

Every PDF given on the command line is added as an uploaded section after
the cover.  The result is written to DOSSIER_OUTPUT_DIR (default ./output).
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# ── make src/ importable without installing the package ──────────────────────
sys.path.insert(0, str(Path(__file__).parent / "src"))

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from dossier_builder.config import get_settings
from dossier_builder.delivery import dossier_filename, save_pdf
from dossier_builder.export_trace import FAILED, FOLDED, INCLUDED, SKIPPED, ExportTrace
from dossier_builder.merge import DossierBuildError, merge_dossier_with_trace
from dossier_builder.models import MergeRequest
from dossier_builder.sample_data import (
    default_competency_categories,
    default_details,
    demo_grades,
    demo_profile,
    demo_projects,
    demo_skills,
)
from dossier_builder.sections import default_sections
from dossier_builder.uploads import UploadRejected, read_pdf_upload
from dossier_builder.validation import check_request

console = Console()

STATUS_STYLE = {
    INCLUDED: "bold green",
    FOLDED:   "cyan",
    SKIPPED:  "yellow",
    FAILED:   "bold red",
}


# ─── Display helpers ─────────────────────────────────────────────────────────

def show_trace(trace: ExportTrace) -> None:
    table = Table(box=box.ROUNDED, header_style="bold cyan", padding=(0, 1))
    table.add_column("#",       justify="right", style="dim")
    table.add_column("Sektion", style="white")
    table.add_column("Typ",     style="dim")
    table.add_column("Status")
    table.add_column("Seiten",  justify="right")
    table.add_column("ms",      justify="right", style="dim")
    table.add_column("Hinweis", style="dim")
    for i, o in enumerate(trace.outcomes, 1):
        style = STATUS_STYLE.get(o.status, "white")
        table.add_row(
            str(i), o.label, o.section_type,
            f"[{style}]{o.status}[/{style}]",
            str(o.pages), f"{o.duration_ms:.0f}", o.message,
        )
    console.print(Panel(table, title=f"[bold]Export {trace.export_id}[/bold]", border_style="magenta"))


# ─── Main ────────────────────────────────────────────────────────────────────

def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.app.log_level,
                        format="%(levelname)s %(name)s: %(message)s")

    console.print()
    console.print(Panel(
        "[bold]Bewerbungsdossier — Demo[/bold]\n"
        "[dim]Deckblatt  •  Profil & Kompetenzen  •  Projekte  •  eigene PDFs[/dim]",
        style="on dark_blue",
        expand=False,
    ))

    try:
        documents = []
        for arg in sys.argv[1:]:
            try:
                documents.append(read_pdf_upload(Path(arg)))
            except (UploadRejected, OSError) as e:
                console.print(f"[yellow]Übersprungen:[/yellow] {e}")

        profile = demo_profile()
        request = MergeRequest(
            sections              = default_sections(documents),
            documents             = documents,
            profile               = profile,
            skills                = demo_skills(),
            projects              = demo_projects(),
            grades                = demo_grades(),
            competency_categories = default_competency_categories(),
            details               = default_details(),
        )

        checks = check_request(request, settings)
        if not checks.passed:
            console.print(Panel(checks.summary(), title="[bold]Prüfungen[/bold]", border_style="yellow"))

        data, trace = merge_dossier_with_trace(request, settings)
        show_trace(trace)

        path = save_pdf(data, settings.output.output_dir,
                        dossier_filename(profile.name, settings.output.filename_prefix))
        console.print(f"\n[bold green]✓[/bold green] {trace.total_pages} Seiten → [bold]{path}[/bold]\n")

    except DossierBuildError as e:
        console.print(f"\n[bold red]Dossier konnte nicht erstellt werden:[/bold red] {e}")
        sys.exit(1)

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    main()
