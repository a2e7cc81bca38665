"""
Moodboard Studio — command-line caller

Usage:
  python -m moodboard.main analyze  photos/balcony.jpg
  python -m moodboard.main summary  --image photos/balcony.jpg --room-type Balcony --mood Calm
  python -m moodboard.main render   --attrs record.json --style Japandi --output board.png
  python -m moodboard.main render   --attrs record.json --prompt-only
"""

from __future__ import annotations

import argparse
import base64
import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

from .config import Settings
from .errors import InvalidInputError, MoodboardError
from .gateway import ModelGateway
from .media import InlineMedia, suffix_for
from .pipeline import MoodboardPipeline, build_directive
from .records import AttributeRecord, DesignHints, StyleOverrides

console = Console(stderr=True)   # progress on stderr, data on stdout

OUTPUTS_ROOT = Path("outputs")

# (flag, DesignHints field)
HINT_FLAGS = (
    ("--room-type", "room_type"),
    ("--style", "style"),
    ("--palette", "color_palette"),
    ("--materials", "materials"),
    ("--textures", "textures"),
    ("--mood", "mood"),
    ("--furniture", "furniture"),
    ("--decor", "decor"),
    ("--lighting", "lighting"),
    ("--technology", "technology"),
    ("--notes", "notes"),
    ("--budget", "budget"),
    ("--scope", "renovation_scope"),
    ("--timeframe", "timeframe"),
)


# ── CLI ───────────────────────────────────────────────────────────────────────

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Moodboard Studio — design attributes and moodboard prompts from photos and hints"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Extract design attributes from a room photo")
    analyze.add_argument("image", help="Reference image: file path or data:image/...;base64 URL")
    analyze.add_argument("--json", action="store_true", help="Print raw JSON only")

    summary = sub.add_parser("summary", help="Combine form hints (and an optional photo) into a summary")
    summary.add_argument("--image", default=None, help="Optional reference image (file path or data URL)")
    summary.add_argument("--json", action="store_true", help="Print raw JSON only")
    for flag, field_name in HINT_FLAGS:
        summary.add_argument(flag, dest=field_name, default="")

    render = sub.add_parser("render", help="Generate a moodboard image from a record")
    render.add_argument("--attrs", required=True, help="JSON file with the attribute record")
    render.add_argument("--style", default="", help="Override aesthetic style")
    render.add_argument("--palette", default="", help="Override color palette")
    render.add_argument("--mood", default="", help="Override theme / mood")
    render.add_argument("--output", default=None, help="Output image (default: outputs/moodboard_<timestamp> with the image type suffix)")
    render.add_argument("--prompt-only", action="store_true", help="Print the directive, skip generation")

    return parser.parse_args(argv)


# ── Output helpers ────────────────────────────────────────────────────────────

def display_record(record: AttributeRecord, title: str = "Design Attributes") -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    for key, value in record.to_wire().items():
        if value:
            table.add_row(f"[bold]{key}[/bold]", value)
    console.print(Panel(table, title=f"[bold]{title}[/bold]", border_style="cyan"))


def load_record(path: str) -> AttributeRecord:
    p = Path(path)
    if not p.is_file():
        raise InvalidInputError(f"Attribute file not found: {path}")
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidInputError(f"Attribute file is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidInputError("Attribute file must contain a JSON object.")
    return AttributeRecord.from_mapping(data)


# ── Commands ──────────────────────────────────────────────────────────────────

def cmd_analyze(pipeline: MoodboardPipeline, args: argparse.Namespace) -> None:
    media = InlineMedia.load(args.image)
    source = "data URL" if args.image.startswith("data:") else args.image
    console.print(f"\n[bold cyan]→ Gemini is analyzing {source} ({media.mime_type})...[/bold cyan]")
    record = pipeline.analyze_image(media)
    if args.json:
        print(json.dumps(record.to_wire(), indent=2))
        return
    display_record(record)


def cmd_summary(pipeline: MoodboardPipeline, args: argparse.Namespace) -> None:
    hints = DesignHints(**{name: getattr(args, name) for _, name in HINT_FLAGS})
    media = InlineMedia.load(args.image) if args.image else None

    console.print("\n[bold cyan]→ Gemini is combining your hints"
                  f"{' and photo' if media else ''}...[/bold cyan]")
    result = pipeline.summarize(hints, media)
    if args.json:
        print(json.dumps(result.to_wire(), indent=2))
        return
    console.print(Panel(f"[italic]{result.summary}[/italic]", title="[bold]Summary[/bold]", border_style="blue"))
    display_record(result.record)


def cmd_render(pipeline: Optional[MoodboardPipeline], args: argparse.Namespace) -> None:
    record = load_record(args.attrs)
    overrides = StyleOverrides(
        aesthetic_style=args.style,
        color_palette=args.palette,
        theme_mood=args.mood,
    )

    if args.prompt_only:
        print(build_directive(record, overrides))
        return

    console.print("\n[bold cyan]→ Generating moodboard (Gemini image model)...[/bold cyan]")
    t0 = time.time()
    result = pipeline.render_moodboard(record, overrides)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    default_name = f"moodboard_{timestamp}{suffix_for(result.mime_type)}"
    out_path = Path(args.output) if args.output else OUTPUTS_ROOT / default_name
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(base64.b64decode(result.image_base64))
    console.print(f"  [green]✓ Moodboard in {time.time() - t0:.1f}s[/green] → {out_path}")


COMMANDS = {
    "analyze": cmd_analyze,
    "summary": cmd_summary,
    "render": cmd_render,
}


# ── Main ──────────────────────────────────────────────────────────────────────

def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s — %(levelname)s — %(name)s — %(message)s",
        level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    console.print(Rule("[bold magenta]Moodboard Studio[/bold magenta]"))

    try:
        if args.command == "render" and args.prompt_only:
            # Prompt preview needs no credentials
            cmd_render(None, args)
        else:
            pipeline = MoodboardPipeline(ModelGateway(Settings.from_env()))
            COMMANDS[args.command](pipeline, args)
    except MoodboardError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc.message}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
