"""
LogoAI: command line front end

Usage:
  logoai generate --name "Acme" --philosophy "minimalist, sustainable"
  logoai generate --name "Acme" --philosophy "minimalist" -n 4 --zip --review
  logoai edit outputs/acme/acme-3.png --instruction "make it blue"
  logoai edit outputs/acme/acme-3.png --hint neon

Required env vars (in .env):
    GEMINI_API_KEY=...
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.rule import Rule
from rich.table import Table

from .errors import LogoError
from .gallery import LogoGallery, slugify
from .generator import LogoGenerator
from .models import GeneratedAsset
from .prompts import EDIT_HINTS, validate_brief
from .settings import Settings

load_dotenv()

console = Console()
logger = logging.getLogger(__name__)


# ── CLI ───────────────────────────────────────────────────────────────────────

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="logoai",
        description="LogoAI — generate and refine logo concepts with Gemini",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate a batch of logo variants")
    gen.add_argument("--name", required=True, help="Company name")
    gen.add_argument("--philosophy", required=True, help="Company philosophy / vision")
    gen.add_argument("-n", "--count", type=int, default=None, help="Number of variants (default: 10)")
    gen.add_argument("--output", default=None, help="Output directory (default: outputs/<slug>_<timestamp>)")
    gen.add_argument("--zip", action="store_true", help="Also bundle the logos into a ZIP")
    gen.add_argument("--review", action="store_true", help="Enter the interactive review loop")

    edit = sub.add_parser("edit", help="Edit a saved logo with a text instruction")
    edit.add_argument("image", help="Path to an existing logo image")
    group = edit.add_mutually_exclusive_group(required=True)
    group.add_argument("--instruction", help="What to change")
    group.add_argument("--hint", choices=sorted(EDIT_HINTS), help="Use a quick edit preset")
    edit.add_argument("--output", default=None, help="Output file (default: <image>-edited.<ext>)")

    return parser.parse_args(argv)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        format="%(asctime)s — %(levelname)s — %(name)s — %(message)s",
        level=logging.DEBUG if verbose else logging.INFO,
    )


# ── Display helpers ───────────────────────────────────────────────────────────

def display_gallery(gallery: LogoGallery) -> None:
    table = Table(title=f"{gallery.company_name} — {len(gallery)} logo(s)")
    table.add_column("#", style="bold cyan", justify="right")
    table.add_column("ID", style="dim")
    table.add_column("Type")
    table.add_column("Prompt")
    for i, asset in enumerate(gallery, start=1):
        table.add_row(str(i), asset.id, asset.mime_type, asset.prompt)
    console.print(table)


def _default_output_dir(settings: Settings, company_name: str) -> Path:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return settings.output_dir / f"{slugify(company_name) or 'logo'}_{timestamp}"


# ── Actions ───────────────────────────────────────────────────────────────────

def run_batch(generator: LogoGenerator, gallery: LogoGallery, count: Optional[int]) -> bool:
    """Generate a fresh batch into `gallery`. On failure the gallery is left empty."""
    gallery.clear()
    n = count or generator.settings.batch_size
    console.print(f"\n[bold cyan]→ Generating {n} logo variant(s)...[/bold cyan]")
    t0 = time.time()
    try:
        assets = asyncio.run(
            generator.generate_batch(gallery.company_name, gallery.philosophy, n)
        )
    except LogoError as exc:
        logger.error(f"Batch generation failed: {exc}")
        console.print(f"  [red]✗ {exc}[/red]")
        return False
    gallery.replace_all(assets)
    console.print(f"  [green]✓ {len(assets)} logo(s) in {time.time() - t0:.1f}s[/green]")
    return True


def run_edit(
    generator: LogoGenerator,
    gallery: LogoGallery,
    position: int,
    instruction: str,
) -> Optional[GeneratedAsset]:
    """Edit the logo at 1-based `position`; the original stays on failure."""
    if not 1 <= position <= len(gallery):
        console.print(f"  [yellow]⚠ No logo #{position}. Available: 1–{len(gallery)}[/yellow]")
        return None
    if not instruction.strip():
        console.print("  [yellow]⚠ Describe the change you want.[/yellow]")
        return None

    source = gallery[position - 1]
    console.print(f"  [dim]→ Reworking #{position}: {instruction}[/dim]")
    try:
        edited = asyncio.run(generator.edit_asset(source, instruction))
    except LogoError as exc:
        logger.error(f"Edit of {source.id} failed: {exc}")
        console.print(f"  [red]✗ Edit failed: {exc}[/red]")
        return None
    gallery.replace(source.id, edited)
    console.print(f"  [green]✓ Logo #{position} updated[/green] [dim]({edited.id})[/dim]")
    return edited


# ── Review loop ───────────────────────────────────────────────────────────────

REVIEW_HELP = (
    "  [dim]Commands:\n"
    "    edit <n> <instruction>   rework one logo\n"
    "    hint <n> <name>          quick edit: " + ", ".join(sorted(EDIT_HINTS)) + "\n"
    "    save [n]                 save all logos (or one) + manifest\n"
    "    zip                      bundle everything into a ZIP\n"
    "    list / regenerate / quit[/dim]\n"
)


def review_loop(
    generator: LogoGenerator,
    gallery: LogoGallery,
    output_dir: Path,
    count: Optional[int] = None,
) -> None:
    while True:
        console.print(Rule("[bold]Review[/bold]"))
        console.print(REVIEW_HELP)
        raw = Prompt.ask("💬 Command").strip()
        if not raw:
            continue

        verb, _, rest = raw.partition(" ")
        verb = verb.lower()

        if verb in {"q", "quit", "exit"}:
            console.print("[dim]Bye.[/dim]")
            break

        elif verb == "list":
            display_gallery(gallery)

        elif verb in {"edit", "hint"}:
            num, _, arg = rest.strip().partition(" ")
            try:
                position = int(num)
            except ValueError:
                console.print(f"  [yellow]⚠ Usage: {verb} <n> <{'instruction' if verb == 'edit' else 'name'}>[/yellow]")
                continue
            if verb == "hint":
                instruction = EDIT_HINTS.get(arg.strip().lower(), "")
                if not instruction:
                    console.print(f"  [yellow]⚠ Unknown hint. Try: {', '.join(sorted(EDIT_HINTS))}[/yellow]")
                    continue
            else:
                instruction = arg
            if run_edit(generator, gallery, position, instruction):
                gallery.save_asset(gallery[position - 1], output_dir)
                gallery.write_manifest(output_dir)

        elif verb == "save":
            if rest.strip():
                try:
                    position = int(rest.strip())
                    if position < 1:
                        raise IndexError(position)
                    path = gallery.save_asset(gallery[position - 1], output_dir)
                except (ValueError, IndexError):
                    console.print(f"  [yellow]⚠ No logo #{rest.strip()}[/yellow]")
                    continue
                console.print(f"  [dim]Saved → {path}[/dim]")
            else:
                gallery.save_all(output_dir)
                manifest = gallery.write_manifest(output_dir)
                console.print(f"  [dim]Saved {len(gallery)} logo(s) + {manifest.name} → {output_dir}[/dim]")

        elif verb == "zip":
            zip_path = gallery.export_zip(output_dir)
            if zip_path:
                console.print(f"  [green]✓ {zip_path}[/green]")
            else:
                console.print("  [red]✗ ZIP export failed (see log)[/red]")

        elif verb == "regenerate":
            if run_batch(generator, gallery, count):
                gallery.save_all(output_dir)
                gallery.write_manifest(output_dir)
                display_gallery(gallery)

        else:
            console.print("  [yellow]⚠ Unknown command.[/yellow]")


# ── Commands ──────────────────────────────────────────────────────────────────

def cmd_generate(args: argparse.Namespace, settings: Settings) -> int:
    try:
        validate_brief(args.name, args.philosophy)
    except LogoError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        return 1
    if args.count is not None and args.count < 1:
        console.print("[bold red]Error:[/bold red] --count must be at least 1.")
        return 1

    output_dir = Path(args.output) if args.output else _default_output_dir(settings, args.name)
    generator = LogoGenerator(settings)
    gallery = LogoGallery(args.name.strip(), args.philosophy.strip())

    console.print(Rule("[bold magenta]LogoAI[/bold magenta]"))
    console.print(
        f"  Company: [bold]{gallery.company_name}[/bold]  |  "
        f"Philosophy: [bold]{gallery.philosophy}[/bold]  |  "
        f"Output: [bold]{output_dir}[/bold]"
    )

    if not run_batch(generator, gallery, args.count):
        return 1

    paths = gallery.save_all(output_dir)
    gallery.write_manifest(output_dir)
    display_gallery(gallery)

    zip_note = ""
    if args.zip:
        zip_path = gallery.export_zip(output_dir)
        zip_note = f"\nZIP: [bold]{zip_path}[/bold]" if zip_path else "\n[red]ZIP export failed[/red]"

    console.print(
        Panel(
            f"{len(paths)} logo(s) saved to: [bold]{output_dir}[/bold]{zip_note}",
            title="[bold green]Done[/bold green]",
            border_style="green",
        )
    )

    if args.review:
        review_loop(generator, gallery, output_dir, args.count)
    return 0


def cmd_edit(args: argparse.Namespace, settings: Settings) -> int:
    image_path = Path(args.image)
    if not image_path.is_file():
        console.print(f"[bold red]Error:[/bold red] {image_path} not found.")
        return 1

    instruction = EDIT_HINTS[args.hint] if args.hint else args.instruction
    if not instruction.strip():
        console.print("[bold red]Error:[/bold red] --instruction must not be empty.")
        return 1

    try:
        source = GeneratedAsset.from_file(image_path)
    except LogoError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        return 1

    generator = LogoGenerator(settings)
    console.print(f"[bold cyan]→ Editing {image_path.name}: {instruction}[/bold cyan]")
    try:
        edited = asyncio.run(generator.edit_asset(source, instruction))
    except LogoError as exc:
        logger.error(f"Edit failed: {exc}")
        console.print(f"  [red]✗ Edit failed: {exc}[/red]")
        return 1

    out = Path(args.output) if args.output else image_path.with_name(
        f"{image_path.stem}-edited.{edited.extension}"
    )
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(edited.image_bytes)
    console.print(f"  [green]✓ Saved → {out}[/green]")
    return 0


# ── Main ──────────────────────────────────────────────────────────────────────

def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    _setup_logging(args.verbose)

    try:
        settings = Settings.from_env()
    except ValueError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        sys.exit(1)

    if not settings.has_api_key:
        logger.warning("No Gemini API key found (GEMINI_API_KEY / API_KEY / GOOGLE_API_KEY); requests will be rejected")

    if args.command == "generate":
        code = cmd_generate(args, settings)
    else:
        code = cmd_edit(args, settings)
    sys.exit(code)


if __name__ == "__main__":
    main()
