from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence

from result import Err
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text

from roomba.config.catalog import DESCRIPTIONS
from roomba.config.defaults import jobs_for
from roomba.config.loader import load_config, sample_config_json
from roomba.config.schema import AppConfig
from roomba.models.enums import Category
from roomba.models.job import JobSpec
from roomba.services.batch import OperationExecutor
from roomba.services.device import DeviceClassifier
from roomba.services.fs import DEFAULT_FS
from roomba.services.monitor import ProgressMonitor
from roomba.services.runner import run_specs

logger = logging.getLogger(__name__)

RULE = "-" * 57


def parse_selection(text: str) -> list[Category]:
    """Map letters to categories: case-insensitive, unknown letters ignored, first occurrence wins."""
    picked: dict[Category, None] = {}
    for char in text:
        category = Category.from_letter(char)
        if category is not None:
            picked.setdefault(category)
    return list(picked)


def specs_for(categories: Sequence[Category], config: AppConfig) -> list[JobSpec]:
    return [spec for category in categories for spec in jobs_for(category, config)]


def needs_admin(categories: Sequence[Category]) -> bool:
    return any(cat.requires_admin for cat in categories) and os.geteuid() != 0


def escalate(letters: str, config_path: str | None) -> None:
    """Re-run this program under sudo with the same selection.  Only returns on failure."""
    argv = ["sudo", sys.executable, "-m", "roomba", letters]
    if config_path:
        argv += ["--config", config_path]
    os.execvp("sudo", argv)


def configure_logging(verbose: bool) -> None:
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def render_menu(console: Console) -> None:
    console.print("Select categories to CLEAN by entering their letters (e.g., QWES).")
    console.print()
    for category in Category:
        name, description = DESCRIPTIONS[category]
        console.print(Text(f"[{category.letter.upper()}] - {name}"))
        console.print(Text(f"    └─ {description}"))
        console.print()


def prompt_selection(console: Console, use_tui: bool) -> list[Category]:
    if use_tui and sys.stdin.isatty() and sys.stdout.isatty():
        from roomba.ui.picker import CategoryPicker

        return CategoryPicker().run() or []
    render_menu(console)
    try:
        return parse_selection(console.input("Categories to clean: "))
    except EOFError:
        return []


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roomba",
        description="Drive-aware cleaner for caches, history and logs.",
    )
    parser.add_argument(
        "letters",
        nargs="?",
        help="Categories to clean, e.g. QWE. "
        + " ".join(f"{c.letter.upper()}={DESCRIPTIONS[c][0]}" for c in Category),
    )
    parser.add_argument("--config", help="Path to a JSON config file.")
    parser.add_argument("--no-tui", action="store_true", help="Use a plain prompt instead of the picker.")
    parser.add_argument("--sample-config", action="store_true", help="Print the default config and exit.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each operation.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    console = Console(highlight=False)

    if args.sample_config:
        console.print_json(sample_config_json())
        return 0

    configure_logging(args.verbose)

    loaded = load_config(args.config)
    if isinstance(loaded, Err):
        console.print(Text(loaded.err_value, style="red"))
        return 1
    config = loaded.ok_value

    console.print(Panel("roomba: drive-aware cleaner", border_style="blue"))

    if args.letters is not None:
        categories = parse_selection(args.letters)
        console.print(Text(f"Categories to clean: {args.letters}"))
    else:
        categories = prompt_selection(console, use_tui=not args.no_tui)

    if needs_admin(categories):
        console.print("System log cleaning requires administrator privileges.")
        letters = "".join(cat.letter for cat in categories)
        try:
            escalate(letters, args.config)
        except OSError as exc:
            logger.error("Could not re-run under sudo: %s", exc)
        return 1

    console.print(RULE)
    if not categories:
        console.print("No valid categories selected. Exiting.")
        console.print(RULE)
        return 0

    console.print("Starting cleanup for selected categories...")
    classifier = DeviceClassifier(DEFAULT_FS, config.rotational_devices)
    executor = OperationExecutor(DEFAULT_FS, classifier, passes=config.shred_passes)
    monitor = ProgressMonitor(
        executor,
        console=console,
        poll_interval=config.poll_interval,
        timeout=config.job_timeout,
    )
    try:
        run_specs(specs_for(categories, config), monitor, DEFAULT_FS)
    except KeyboardInterrupt:
        console.print("Interrupted.")
        return 130

    console.print(RULE)
    console.print("roomba has finished.")
    return 0
