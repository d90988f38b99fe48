"""CLI interface for diskscan."""

from __future__ import annotations

import json
import logging
import sys
import time

import click

from diskscan.core.clearing import CLEAR_ALL, CLEAR_SELECTED
from diskscan.core.orchestrator import SCANS, SUMMARIES
from diskscan.core.preview import preview_file
from diskscan.models.response import ObjectPayload, RecordList, Response, ResponseStatus
from diskscan.utils import bytes_to_human, format_elapsed

CATEGORIES = ("cache", "trash", "logs", "large-files")

_LABELS = {
    "cache": "Cache files",
    "trash": "Trash",
    "logs": "System logs",
    "large-files": "Large files",
}


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _category_id(name: str) -> str:
    return name.replace("-", "_")


def _status_mark(response: Response) -> str:
    match response.status:
        case ResponseStatus.SUCCESS:
            return click.style("✓", fg="green")
        case ResponseStatus.INFO:
            return click.style("·", fg="bright_black")
        case _:
            return click.style("✗", fg="red")


def _finish(response: Response, as_json: bool) -> None:
    """Print a bare response and exit non-zero on errors."""
    if as_json:
        click.echo(response.to_json(indent=2))
    else:
        click.echo(f"  {_status_mark(response)} {response.message}")
    if not response.ok:
        sys.exit(1)


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def main(verbose: int) -> None:
    """diskscan — find and clear cache, trash, logs and large files."""
    _setup_logging(verbose)


# ── scan ─────────────────────────────────────────────────────────────────

@main.command()
@click.argument("category", type=click.Choice(CATEGORIES))
@click.option("--limit", "-n", default=20, show_default=True, help="Rows to print (0 for all)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def scan(category: str, limit: int, as_json: bool) -> None:
    """List the files in a category (preview only, never deletes)."""
    start = time.monotonic()
    response = SCANS[_category_id(category)](None)
    elapsed = time.monotonic() - start

    if as_json or not isinstance(response.data, RecordList):
        _finish(response, as_json)
        return

    records = response.data.items
    total = sum(r.size for r in records)
    click.echo(
        f"\n{click.style(_LABELS[category], bold=True)} — {len(records):,} files, "
        f"{click.style(bytes_to_human(total), fg='green', bold=True)} ({format_elapsed(elapsed)})\n"
    )
    shown = records if limit <= 0 else records[:limit]
    for record in shown:
        row = record.to_dict()
        stamp = row.get("modified") or row.get("deletedDate", "")
        click.echo(f"  {bytes_to_human(record.size):>10s}  {click.style(stamp, fg='bright_black')}  {record.path}")
    if len(shown) < len(records):
        click.echo(f"  … {len(records) - len(shown):,} more")
    click.echo()


# ── summary ──────────────────────────────────────────────────────────────

@main.command()
@click.argument("categories", nargs=-1, type=click.Choice(CATEGORIES))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def summary(categories: tuple[str, ...], as_json: bool) -> None:
    """Show total size and file count per category (all by default)."""
    names = categories or CATEGORIES
    responses = {name: SUMMARIES[_category_id(name)](None) for name in names}

    if as_json:
        click.echo(json.dumps({name: r.to_dict() for name, r in responses.items()}, indent=2))
    else:
        click.echo()
        for name, response in responses.items():
            if isinstance(response.data, ObjectPayload):
                data = response.data.fields
                click.echo(
                    f"  {_status_mark(response)} {_LABELS[name]:15s} — "
                    f"{click.style(bytes_to_human(data['totalSize']), fg='green', bold=True)} "
                    f"({data['fileCount']:,} files)"
                )
            else:
                click.echo(f"  {_status_mark(response)} {_LABELS[name]:15s} — {response.message}")
        click.echo()

    if not all(r.ok for r in responses.values()):
        sys.exit(1)


# ── clear ────────────────────────────────────────────────────────────────

@main.command()
@click.argument("category", type=click.Choice(CATEGORIES))
@click.argument("paths", nargs=-1)
@click.option("--all", "clear_all", is_flag=True, help="Clear everything in the category")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def clear(category: str, paths: tuple[str, ...], clear_all: bool, yes: bool, as_json: bool) -> None:
    """Delete selected files of a category, or all of them with --all."""
    if clear_all == bool(paths):
        raise click.UsageError("Give the file paths to clear, or --all (not both).")

    if not yes and not as_json:
        target = f"all {_LABELS[category].lower()}" if clear_all else f"{len(paths)} file(s)"
        click.confirm(f"Permanently delete {target}?", abort=True)

    key = _category_id(category)
    if clear_all:
        response = CLEAR_ALL[key]()
    else:
        response = CLEAR_SELECTED[key](list(paths))
    _finish(response, as_json)


# ── preview ──────────────────────────────────────────────────────────────

@main.command()
@click.argument("path", type=click.Path())
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def preview(path: str, as_json: bool) -> None:
    """Show what a file contains."""
    response = preview_file(path)
    if as_json or not isinstance(response.data, ObjectPayload):
        _finish(response, as_json)
        return

    data = response.data.fields
    click.echo(f"\n  {click.style(data['name'], bold=True)} ({data['type']})\n")
    if data["type"] == "text":
        click.echo(data["content"])
    elif data["type"] == "image":
        click.echo(f"  {len(data['imageUrl']):,} characters of inline image data")
    click.echo()
