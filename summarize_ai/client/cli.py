"""Terminal front-end for the summarization API.

Usage:
    python -m summarize_ai.client summarize report.pdf --length short
    python -m summarize_ai.client history
    python -m summarize_ai.client show <id> --export ./out
    python -m summarize_ai.client export <id> --dir ./out
    python -m summarize_ai.client delete <id>
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from summarize_ai.client.api_client import APIError, SummarizeClient
from summarize_ai.client.formatting import format_file_size, format_relative_time, word_count
from summarize_ai.client.state import PROCESSING_STEPS, Toast, ViewController
from summarize_ai.schemas import SummarizeResponse, SummaryLength, SummaryListItem


def _print_toast(toast: Toast) -> None:
    stream = sys.stderr if toast.kind == "error" else sys.stdout
    print(f"[{toast.kind}] {toast.message}", file=stream)


def render_result(result: SummarizeResponse) -> str:
    lines = [
        f"# {result.filename}",
        f"{result.page_count or '?'} pages · {result.text_length} chars extracted · "
        f"{result.summary_length.label} · {word_count(result.summary)} words · "
        f"generated {format_relative_time(result.created_at)}",
        "",
        result.summary,
    ]
    return "\n".join(lines)


def render_record(item: SummaryListItem) -> str:
    lines = [
        f"# {item.original_filename}",
        f"{item.page_count or '?'} pages · {format_file_size(item.file_size)} · "
        f"{item.summary_length.label} · {format_relative_time(item.created_at)}",
        "",
        item.summary,
    ]
    return "\n".join(lines)


def render_history(items: List[SummaryListItem]) -> str:
    if not items:
        return "No summaries yet\nUpload a PDF to create your first AI summary"
    rows = [f"Summary History ({len(items)})"]
    for item in items:
        rows.append(
            f"{item.id}  {item.original_filename}  "
            f"{item.page_count or '?'} pages  {format_file_size(item.file_size)}  "
            f"{item.summary_length.value}  {format_relative_time(item.created_at)}"
        )
    return "\n".join(rows)


async def _watch_steps(controller: ViewController) -> None:
    shown = -1
    while controller.is_processing:
        step = controller.view.step
        if step != shown and step < len(PROCESSING_STEPS):
            print(f"… {PROCESSING_STEPS[step]}")
            shown = step
        await asyncio.sleep(0.1)


async def run(args: argparse.Namespace) -> int:
    controller = ViewController(SummarizeClient(args.api_url), on_toast=_print_toast)

    if args.command == "summarize":
        path = Path(args.pdf)
        if not path.is_file():
            print(f"File not found: {path}", file=sys.stderr)
            return 1
        if not controller.select_file(path.name, path.read_bytes()):
            return 1
        controller.set_summary_length(args.length)

        submit = asyncio.create_task(controller.submit())
        await asyncio.sleep(0)
        await _watch_steps(controller)
        result = await submit
        await controller.wait_idle()
        if result is None:
            return 1
        print(render_result(result))
        if args.export:
            print(f"Exported to {controller.export(result.summary, result.filename, args.export)}")
        return 0

    if args.command == "history":
        await controller.show_history()
        print(render_history(controller.history))
        return 0

    if args.command == "show":
        item = await controller.open(args.id)
        if item is None:
            return 1
        print(render_record(item))
        if args.export:
            print(f"Exported to {controller.export(item.summary, item.original_filename, args.export)}")
        return 0

    if args.command == "export":
        item = await controller.open(args.id)
        if item is None:
            return 1
        print(f"Exported to {controller.export(item.summary, item.original_filename, args.dir)}")
        return 0

    if args.command == "delete":
        return 0 if await controller.delete(args.id) else 1

    if args.command == "health":
        try:
            status = await controller.api.health()
        except APIError as e:
            print(f"API unavailable: {e.message}", file=sys.stderr)
            return 1
        print(f"{status['status']} @ {status['timestamp']}")
        return 0

    return 2


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="summarize-ai", description="Summarize PDFs with an LLM")
    ap.add_argument("--api-url", default=None, help="API base URL (default: SUMMARIZE_API_URL)")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("summarize", help="Upload a PDF and print its summary")
    p.add_argument("pdf", help="Path to the PDF")
    p.add_argument("--length", choices=[m.value for m in SummaryLength], default="medium")
    p.add_argument("--export", default="", help="Directory to write the markdown summary to")

    sub.add_parser("history", help="List recent summaries")

    p = sub.add_parser("show", help="Show one summary")
    p.add_argument("id")
    p.add_argument("--export", default="", help="Directory to write the markdown summary to")

    p = sub.add_parser("export", help="Write one summary to a markdown file")
    p.add_argument("id")
    p.add_argument("--dir", default=".", help="Directory to write the file to")

    p = sub.add_parser("delete", help="Delete a summary")
    p.add_argument("id")

    sub.add_parser("health", help="Check the API is up")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))
