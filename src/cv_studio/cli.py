"""Command-line interface: list templates, validate a CV and export it."""

from __future__ import annotations

import argparse
import asyncio
import logging
from dataclasses import replace
from pathlib import Path

from pydantic import ValidationError

from cv_studio.config import ExportSettings, get_log_level
from cv_studio.exceptions import CVStudioError
from cv_studio.export.capture import DeviceClass
from cv_studio.export.formats import ExportFormat
from cv_studio.export.orchestrator import ExportOrchestrator
from cv_studio.export.progress import FormatProgress
from cv_studio.export.saver import DialogSaver
from cv_studio.models.content import CVData
from cv_studio.templates import create_default_registry
from cv_studio.templates.health import TemplateHealthChecker, sample_content
from cv_studio.templates.validation import group_findings_by_section

logger = logging.getLogger(__name__)

_RULE = "-" * 60


def _load_cv(path: Path) -> CVData | None:
    """Read a CV from a JSON file, printing the reason on failure."""
    try:
        return CVData.model_validate_json(path.read_text(encoding="utf-8"))
    except OSError as exc:
        print(f"❌ Could not read {path}: {exc}")
    except ValidationError as exc:
        print(f"❌ {path} is not a valid CV:\n{exc}")
    return None


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_templates(args: argparse.Namespace) -> int:
    registry = create_default_registry()
    templates = registry.get_by_category(args.category) if args.category else registry.all()
    if not templates:
        print(f"No templates in category '{args.category}'.")
        return 1
    print(f"{'ID':<16} {'NAME':<24} {'POPULARITY':>10}  CATEGORIES")
    print(_RULE)
    for t in templates:
        print(f"{t.id:<16} {t.name:<24} {t.popularity:>10}  {', '.join(t.categories)}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    cv = sample_content() if args.file is None else _load_cv(args.file)
    if cv is None:
        return 1
    session = create_default_registry().session()
    if not session.select(args.template):
        print(f"❌ Unknown template '{args.template}'.")
        return 1

    warnings = session.validate(cv)
    if not warnings:
        print(f"✅ No suggestions for the {args.template} template.")
        return 0
    print(f"Suggestions for the {args.template} template")
    print(_RULE)
    for section, findings in group_findings_by_section(warnings).items():
        print(f"[{section}]")
        for finding in findings:
            print(f"  - {finding}")
    return 0


def _print_progress(state: FormatProgress) -> None:
    line = f"  {state.format.value.upper():<5} {state.progress:>3}%  {state.status.value}"
    if state.error:
        line += f"  ({state.error})"
    print(line)


def cmd_export(args: argparse.Namespace) -> int:
    cv = _load_cv(args.file)
    if cv is None:
        return 1

    settings = ExportSettings.from_env()
    if args.output is not None:
        settings = replace(settings, output_dir=args.output.expanduser().resolve())
    orchestrator = ExportOrchestrator(
        settings,
        saver=DialogSaver() if args.ask else None,
    )
    formats = args.formats or [ExportFormat.PDF.value]
    callback = _print_progress if args.verbose else None

    print(f"📦 Exporting {cv.personal.full_name or 'CV'}")
    print(_RULE)
    try:
        result = asyncio.run(
            orchestrator.run(
                cv,
                formats,
                template_id=args.template,
                device=DeviceClass(args.device),
                on_progress=callback,
            )
        )
    except (CVStudioError, ValueError) as exc:
        print(f"❌ {exc}")
        return 1

    for fmt, state in result.states.items():
        if state.error:
            print(f"❌ {fmt.value.upper()}: {state.error}")
            continue
        location = result.saved.get(fmt)
        print(f"✅ {fmt.value.upper()}: {location or 'not saved'}")
    print(_RULE)
    print(result.message)
    return 0 if result.failed == 0 else 1


def cmd_health(args: argparse.Namespace) -> int:
    report = TemplateHealthChecker(create_default_registry()).check_all()
    print(report.to_text())
    return 0 if report.failed == 0 else 1


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cv-studio", description="Render and export CVs from JSON content."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    templates = sub.add_parser("templates", help="List available templates")
    templates.add_argument("-c", "--category", help="Only list templates in this category")
    templates.set_defaults(func=cmd_templates)

    validate = sub.add_parser("validate", help="Check a CV against a template's rules")
    validate.add_argument(
        "file", type=Path, nargs="?", help="CV JSON file (defaults to built-in sample)"
    )
    validate.add_argument("-t", "--template", default="classic", help="Template id")
    validate.set_defaults(func=cmd_validate)

    export = sub.add_parser("export", help="Export a CV to PDF, DOCX or text")
    export.add_argument("file", type=Path, help="CV JSON file")
    export.add_argument(
        "-f",
        "--format",
        dest="formats",
        action="append",
        choices=[f.value for f in ExportFormat],
        help="Format to export; repeat for several (default: pdf)",
    )
    export.add_argument("-t", "--template", help="Template id (defaults to the CV's own)")
    export.add_argument("-o", "--output", type=Path, help="Directory to save files into")
    export.add_argument(
        "--ask", action="store_true", help="Ask where to save each file with a dialog"
    )
    export.add_argument(
        "--device",
        choices=[d.value for d in DeviceClass],
        default=DeviceClass.DESKTOP.value,
        help="Device class used to pick PDF capture settings",
    )
    export.add_argument("-v", "--verbose", action="store_true", help="Show progress updates")
    export.set_defaults(func=cmd_export)

    health = sub.add_parser("health", help="Check every template renders correctly")
    health.set_defaults(func=cmd_health)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse *argv* and run the chosen command.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    logging.basicConfig(
        level=get_log_level(), format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user. Exiting.")
        return 130
