"""Stundenplan-Engine: Haupt-CLI.

Verwendung:
  python main.py config init               Default-Konfiguration anlegen
  python main.py config show               Konfiguration anzeigen
  python main.py sample                    Beispielkatalog als JSON speichern
  python main.py sample --random           Zufallskatalog (Seed 42) speichern
  python main.py import-web <datei.json>   Web-Nutzdaten in Katalog umwandeln
  python main.py validate <katalog.json>   Vorab-Check des Katalogs
  python main.py solve <katalog.json>      Stundenplan berechnen
  python main.py show <plan.json>          Stundenplan im Terminal anzeigen
  python main.py show --resource <id>      Belegung eines Raums anzeigen
  python main.py export <plan.json>        Stundenplan als Excel exportieren
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()

# Standard-Pfade
DEFAULT_CATALOG_JSON = Path("output/catalog.json")
DEFAULT_REPORT_JSON = Path("output/schedule.json")
DEFAULT_EXCEL = Path("output/timetable.xlsx")


def _load_config(config_path: Optional[str]):
    """Lädt die Konfiguration (Default-Config wenn keine Datei existiert)."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    try:
        return mgr.load_or_default(Path(config_path) if config_path else None)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def _load_catalog_or_abort(path: Path):
    from models.catalog import Catalog
    try:
        return Catalog.load_json(path)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def _load_report_or_abort(path: Path):
    from solver.report import ScheduleReport
    try:
        return ScheduleReport.load_json(path)
    except FileNotFoundError as e:
        console.print(
            f"[red]{e}[/red]\n"
            "Führen Sie zunächst [bold]python main.py solve[/bold] aus."
        )
        sys.exit(1)


config_option = click.option(
    "--config", "config_path", default=None,
    help="Pfad zur YAML-Konfiguration (Default: config/engine_config.yaml).",
)


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anlegen oder anzeigen."""


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Vorhandene Konfiguration überschreiben.")
def config_init(force: bool):
    """Legt die Default-Konfiguration als YAML an."""
    from config.defaults import default_engine_config
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Mit [bold]--force[/bold] überschreiben."
        )
        return
    mgr.save(default_engine_config())


@cmd_config.command("show")
@config_option
def config_show(config_path: Optional[str]):
    """Zeigt die aktuelle Konfiguration an."""
    config = _load_config(config_path)

    console.print(Panel(
        f"[bold]{config.institution_name}[/bold]  |  Modus: {config.solver.mode}",
        title="Engine-Konfiguration",
        border_style="cyan",
    ))

    tg = config.time_grid
    table = Table(title="Zeitraster", box=box.ROUNDED)
    table.add_column("Slot")
    table.add_column("Anzeige")
    for slot in tg.slots:
        table.add_row(slot, tg.label(slot))
    console.print(table)
    console.print(f"[bold]Tage:[/bold] {', '.join(tg.days)}")

    sc = config.solver
    console.print(
        f"[bold]Erweiterungen:[/bold] "
        f"max_hours={'an' if sc.enforce_max_hours else 'aus'} | "
        f"Raum-Verfügbarkeit={'an' if sc.respect_resource_availability else 'aus'} | "
        f"Fachbereich={'an' if sc.require_department_match else 'aus'}"
    )


# ─── SAMPLE ───────────────────────────────────────────────────────────────────

@click.command("sample")
@click.option("--output", "-o", default=str(DEFAULT_CATALOG_JSON),
              help="Pfad für den Katalog (JSON).")
@click.option("--random", "use_random", is_flag=True, default=False,
              help="Zufallskatalog statt fester Beispieldaten.")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--teachers", "num_teachers", default=8, help="Anzahl Lehrkräfte (--random).")
@click.option("--courses", "num_courses", default=15, help="Anzahl Kurse (--random).")
@click.option("--resources", "num_resources", default=4, help="Anzahl Räume (--random).")
@config_option
def cmd_sample(output: str, use_random: bool, seed: int, num_teachers: int,
               num_courses: int, num_resources: int, config_path: Optional[str]):
    """Erzeugt einen Beispielkatalog (Lehrkräfte, Kurse, Räume)."""
    from data.sample_data import SampleDataGenerator, sample_catalog

    if use_random:
        config = _load_config(config_path)
        gen = SampleDataGenerator(config, seed=seed)
        catalog = gen.generate(num_teachers, num_courses, num_resources)
        gen.print_summary(catalog)
    else:
        catalog = sample_catalog()

    console.print(f"\n[dim]{catalog.summary()}[/dim]")
    out_path = Path(output)
    catalog.save_json(out_path)
    console.print(f"[green]✓[/green] Katalog gespeichert: {out_path}")


# ─── IMPORT ───────────────────────────────────────────────────────────────────

@click.command("import-web")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@click.option("--output", "-o", default=str(DEFAULT_CATALOG_JSON),
              help="Pfad für den Katalog (JSON).")
def cmd_import_web(datei: Path, output: str):
    """Wandelt Web-Nutzdaten ({teachers, courses, resources}) in einen Katalog um."""
    from data.web_import import WebImportError, import_web_file

    console.print(f"[bold]Importiere:[/bold] {datei}")
    try:
        catalog = import_web_file(datei)
    except WebImportError as e:
        console.print(f"[red bold]Import fehlgeschlagen:[/red bold]\n{e}")
        sys.exit(1)

    console.print(f"[green]✓[/green] Import erfolgreich!\n{catalog.summary()}")
    out_path = Path(output)
    catalog.save_json(out_path)
    console.print(f"[green]✓[/green] Katalog gespeichert: {out_path}")


# ─── VALIDATE ─────────────────────────────────────────────────────────────────

@click.command("validate")
@click.argument("katalog", type=click.Path(path_type=Path), default=str(DEFAULT_CATALOG_JSON))
def cmd_validate(katalog: Path):
    """Führt einen Vorab-Check auf dem Katalog durch."""
    catalog = _load_catalog_or_abort(katalog)
    console.print(f"\n{catalog.summary()}\n")
    report = catalog.check()
    report.print_rich()
    sys.exit(0 if report.is_feasible else 1)


# ─── SOLVE ────────────────────────────────────────────────────────────────────

@click.command("solve")
@click.argument("katalog", type=click.Path(path_type=Path), default=str(DEFAULT_CATALOG_JSON))
@click.option("--output", "-o", default=str(DEFAULT_REPORT_JSON),
              help="Pfad für den Stundenplan (JSON).")
@click.option("--mode", type=click.Choice(["greedy", "optimal"]), default=None,
              help="Planungsmodus (überschreibt die Konfiguration).")
@click.option("--enforce-max-hours", is_flag=True, default=False,
              help="Wochenstunden-Obergrenze der Lehrkräfte erzwingen.")
@click.option("--check/--no-check", "run_check", default=True,
              help="Ergebnis nachträglich validieren.")
@config_option
def cmd_solve(katalog: Path, output: str, mode: Optional[str], enforce_max_hours: bool,
              run_check: bool, config_path: Optional[str]):
    """Berechnet den Stundenplan."""
    from analysis.schedule_validator import ScheduleValidator
    from solver.engine import AssignmentEngine
    from solver.errors import StructuralError

    from config.manager import ConfigManager

    config = ConfigManager.with_solver_overrides(
        _load_config(config_path),
        mode=mode,
        enforce_max_hours=True if enforce_max_hours else None,
    )

    catalog = _load_catalog_or_abort(katalog)
    console.print(f"[bold]Plane {len(catalog.courses)} Kurse ({config.solver.mode})...[/bold]")

    try:
        report = AssignmentEngine(config).generate(catalog)
    except StructuralError as e:
        console.print(f"[red bold]Planung abgebrochen:[/red bold]\n{e}")
        sys.exit(1)

    report.print_rich()

    if run_check:
        ScheduleValidator().validate(report, catalog).print_rich()

    out_path = Path(output)
    report.save_json(out_path)
    console.print(f"[green]✓[/green] Stundenplan gespeichert: {out_path}")


# ─── SHOW ─────────────────────────────────────────────────────────────────────

@click.command("show")
@click.argument("plan", type=click.Path(path_type=Path), default=str(DEFAULT_REPORT_JSON))
@click.option("--teacher", "teacher_id", default=None, help="Nur den Plan dieser Lehrkraft zeigen.")
@click.option("--resource", "resource_id", default=None, help="Nur die Belegung dieses Raums zeigen.")
@config_option
def cmd_show(plan: Path, teacher_id: Optional[str], resource_id: Optional[str],
             config_path: Optional[str]):
    """Zeigt den Stundenplan als Tabelle im Terminal."""
    from export.tui_renderer import render_grid_rows, render_resource_rows, render_teacher_rows

    config = _load_config(config_path)
    report = _load_report_or_abort(plan)
    labels = config.time_grid.slot_labels

    if teacher_id:
        rows = render_teacher_rows(teacher_id, report, labels)
        title = f"Lehrkraft {teacher_id}"
    elif resource_id:
        rows = render_resource_rows(resource_id, report, labels)
        title = f"Raum {resource_id}"
    else:
        rows = render_grid_rows(report, labels)
        title = "Wochenplan"

    table = Table(title=title, box=box.ROUNDED, show_lines=True)
    table.add_column("Slot", style="bold")
    for day in report.days:
        table.add_column(day)
    for row in rows:
        table.add_row(*row)
    console.print(table)


# ─── EXPORT ───────────────────────────────────────────────────────────────────

@click.command("export")
@click.argument("plan", type=click.Path(path_type=Path), default=str(DEFAULT_REPORT_JSON))
@click.option("--output", "-o", default=str(DEFAULT_EXCEL),
              help="Ausgabepfad der Excel-Datei.")
@config_option
def cmd_export(plan: Path, output: str, config_path: Optional[str]):
    """Exportiert den Stundenplan als Excel-Datei."""
    from export.excel_export import ExcelExporter

    config = _load_config(config_path)
    report = _load_report_or_abort(plan)
    out_path = ExcelExporter(
        report,
        slot_labels=config.time_grid.slot_labels,
        institution_name=config.institution_name,
    ).export(Path(output))
    console.print(f"[green]✓[/green] Excel gespeichert: {out_path}")


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False,
              help="Fortschritt und Warnungen der Engine protokollieren.")
def cli(verbose: bool):
    """Stundenplan-Engine: Kurse, Lehrkräfte und Räume konfliktfrei einplanen."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main():
    """Einstiegspunkt für `python main.py` und das Konsolen-Skript."""
    cli()


# Befehle registrieren
cli.add_command(cmd_config)
cli.add_command(cmd_sample)
cli.add_command(cmd_import_web)
cli.add_command(cmd_validate)
cli.add_command(cmd_solve)
cli.add_command(cmd_show)
cli.add_command(cmd_export)


if __name__ == "__main__":
    main()
