from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, List, Optional

import typer
from dotenv import find_dotenv, load_dotenv

from page_selection.config import SelectionOptions, load_options
from page_selection.errors import (
    AmbiguousRangeError,
    InvalidNumberError,
    InvalidRangeError,
    InvalidSelectionError,
    NoInputError,
    PageOutOfBoundsError,
)
from page_selection.merge_plan import MergeItem, plan_merge
from page_selection.normalize import normalize
from page_selection.parsing import parse_selector
from page_selection.ranges import format_selection, sort_ranges
from page_selection.resolve import resolve_pages

USAGE_HINT = "Use following formats: [n] or [n1-n2] or [-n] or [n-]"

app = typer.Typer(add_completion=False, no_args_is_help=True)


def describe_error(exc: Exception) -> str:
    """Render ``exc`` as a message for the person who typed the selection."""
    if isinstance(exc, AmbiguousRangeError):
        return f"Ambiguous page range definition: {exc.token}. {USAGE_HINT}"
    if isinstance(exc, InvalidNumberError):
        return f"Invalid number: {exc.text!r}."
    if isinstance(exc, InvalidRangeError):
        return f"Invalid range: {exc.range}."
    if isinstance(exc, PageOutOfBoundsError):
        return f"Range {exc.range} exceeds the document length of {exc.page_count} pages."
    if isinstance(exc, InvalidSelectionError):
        return f"{exc.source}: {describe_error(exc.error)}"
    if isinstance(exc, NoInputError):
        return "No PDF document has been selected"
    return str(exc)


def _exit_with_error(exc: Exception) -> None:
    """Print ``exc`` to stderr and exit with status 1."""
    print(f"error: {describe_error(exc)}", file=sys.stderr)
    raise typer.Exit(1)


def _safe(func: Callable[[], None]) -> None:
    """Invoke ``func`` and exit non-zero on input or config errors."""
    try:
        func()
    except (ValueError, TypeError) as exc:
        _exit_with_error(exc)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def _load(config: Path | None, **overrides: Any) -> SelectionOptions:
    load_dotenv(find_dotenv(usecwd=True))
    return load_options(
        config or "page_selection.yaml",
        overrides={k: v for k, v in overrides.items() if v is not None},
    )


def _split_item(raw: str) -> MergeItem:
    """Split ``SOURCE=SELECTION`` on the last ``=``; no ``=`` means every page."""
    source, sep, selection = raw.rpartition("=")
    return MergeItem(source, selection) if sep else MergeItem(raw)


def _run_parse(
    selector: str, normalized: bool | None, pages: int | None, config: Path | None
) -> None:
    opts = _load(config, normalize=normalized)
    ranges = parse_selector(selector)
    ranges = normalize(ranges) if opts.normalize else ranges
    payload: dict[str, Any] = {
        "ranges": [r.to_dict() for r in sort_ranges(ranges)],
        "selection": format_selection(ranges),
    }
    if pages is not None:
        payload["pages"] = resolve_pages(ranges, pages)
    print(json.dumps(payload))


def _run_plan(
    items: list[str],
    normalized: bool | None,
    split: bool | None,
    config: Path | None,
) -> None:
    opts = _load(config, normalize=normalized, split_ranges=split)
    inputs = plan_merge((_split_item(raw) for raw in items), opts)
    print(json.dumps([mi.to_dict() for mi in inputs], indent=2))


@app.command()
def parse(
    selector: str = typer.Argument(..., help="Selector such as 2,5-7,12-"),
    normalized: Optional[bool] = typer.Option(None, "--normalize/--raw"),
    pages: Optional[int] = typer.Option(None, "--pages", min=1),
    config: Optional[Path] = typer.Option(None, "--config", dir_okay=False),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Parse a selector and print its ranges as JSON."""
    _configure_logging(verbose)
    _safe(lambda: _run_parse(selector, normalized, pages, config))


@app.command()
def plan(
    items: List[str] = typer.Argument(..., help="SOURCE=SELECTION pairs"),
    normalized: Optional[bool] = typer.Option(None, "--normalize/--raw"),
    split: Optional[bool] = typer.Option(None, "--split/--no-split"),
    config: Optional[Path] = typer.Option(None, "--config", dir_okay=False),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Print the merge inputs built from SOURCE=SELECTION pairs."""
    _configure_logging(verbose)
    _safe(lambda: _run_plan(items, normalized, split, config))


if __name__ == "__main__":
    app()
