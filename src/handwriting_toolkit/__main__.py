"""
Module: __main__

Purpose:
    Command line entry point.

    render   Write a UTF-8 text file as handwriting to PDF or PNG
    extract  Analyse a handwriting sample and save the derived style

Example:
    $ handwriting-toolkit render answer.txt -o answer.pdf --subject Physics --seed 7
    $ handwriting-toolkit extract sample.jpg -o my_style.json --store styles.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from handwriting_toolkit import __version__
from handwriting_toolkit.builder import RenderConfig, RenderError, render_exam
from handwriting_toolkit.core.models import DiagramKind, HandwritingStyle, PageConfig, PaperType
from handwriting_toolkit.core.schemas import ValidationError
from handwriting_toolkit.core.utils import load_style_file, save_style_file
from handwriting_toolkit.extractor import extract_style, profile_from_extraction
from handwriting_toolkit.output import write_pdf, write_png
from handwriting_toolkit.planner import plan_pages
from handwriting_toolkit.storage import JsonStyleStore, StyleNotFoundError

logger = logging.getLogger("handwriting_toolkit")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="handwriting-toolkit",
        description="Render text as simulated handwriting",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a text file as handwriting")
    render.add_argument("input", type=Path, help="UTF-8 text file")
    render.add_argument("-o", "--output", type=Path, required=True, help="Output .pdf or .png")
    render.add_argument("--subject", default="", help="Subject written in the page header")
    render.add_argument("--style", type=Path, help="Style JSON (bare style or profile record)")
    render.add_argument("--store", type=Path, help="Style store JSON file")
    render.add_argument("--style-id", help="Profile id to load from --store")
    render.add_argument("--paper", choices=[p.value for p in PaperType], default=PaperType.RULED.value)
    render.add_argument("--width", type=int, default=PageConfig().width)
    render.add_argument("--height", type=int, default=PageConfig().height)
    render.add_argument("--margin-left", type=int, default=PageConfig().margin_left)
    render.add_argument("--margin-top", type=int, default=PageConfig().margin_top)
    render.add_argument("--diagram", choices=[k.value for k in DiagramKind], help="Add a diagram of this kind")
    render.add_argument("--seed", type=int, help="Seed for reproducible output")
    render.add_argument("--workers", type=int, default=1, help="Pages rendered in parallel")
    render.add_argument("--no-fatigue", action="store_true", help="Keep the style constant across pages")
    render.add_argument("--no-header", action="store_true", help="Do not write the subject header")
    render.add_argument("--no-ink-flow", action="store_true", help="Disable ink pressure variation")

    extract = sub.add_parser("extract", help="Derive a style from a handwriting sample")
    extract.add_argument("image", type=Path, help="Sample image")
    extract.add_argument("-o", "--output", type=Path, help="Write the derived style JSON here")
    extract.add_argument("--store", type=Path, help="Also add the profile to this style store")
    extract.add_argument("--name", help="Profile name (default: image file name)")
    return parser


def _resolve_style(args: argparse.Namespace) -> HandwritingStyle:
    if args.style_id:
        if not args.store:
            raise ValueError("--style-id requires --store")
        return JsonStyleStore(args.store).get(args.style_id).style
    if args.style:
        return load_style_file(args.style)
    return HandwritingStyle()


def _cmd_render(args: argparse.Namespace) -> int:
    text = args.input.read_text(encoding="utf-8")
    style = _resolve_style(args)
    page = PageConfig(
        paper_type=PaperType(args.paper),
        width=args.width,
        height=args.height,
        margin_left=args.margin_left,
        margin_top=args.margin_top,
    )
    config = RenderConfig(
        apply_fatigue=not args.no_fatigue,
        draw_header=not args.no_header,
        apply_ink_flow=not args.no_ink_flow,
        max_workers=args.workers,
        seed=args.seed,
    )

    plan = plan_pages(text, args.subject, requires_diagram=args.diagram is not None, diagram_type=args.diagram)
    result = render_exam(plan, style, page, config=config)
    for warning in result.warnings:
        logger.warning(warning)

    if args.output.suffix.lower() == ".png":
        write_png(result.pages, args.output)
    else:
        write_pdf(result.pages, args.output)
    print(f"Wrote {result.page_count} page(s) to {args.output}")
    return 0


def _cmd_extract(args: argparse.Namespace) -> int:
    result = extract_style(args.image)
    if result.is_default:
        logger.warning(f"No usable handwriting found in {args.image}, derived style is neutral")

    profile = profile_from_extraction(result, args.name or args.image.name)
    if args.output:
        save_style_file(profile.style, args.output)
        print(f"Wrote style to {args.output}")
    if args.store:
        JsonStyleStore(args.store).create(profile)
        print(f"Stored profile {profile.id} ({profile.name})")
    if not args.output and not args.store:
        print(
            f"slant={result.handwriting_slant:+.0f} stroke={result.stroke_width:.2f} "
            f"spacing={result.avg_spacing:.1f} messiness={result.messiness:.2f}"
        )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "render":
            return _cmd_render(args)
        return _cmd_extract(args)
    except (FileNotFoundError, StyleNotFoundError, ValidationError, ValueError, RenderError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
