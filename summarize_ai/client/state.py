"""Client view controller.

The visible screen is exactly one of ``UploadView``, ``ProcessingView``,
``ResultView`` or ``HistoryView``; each carries only the data it needs, so a
result can never be shown while a request is still processing. The record
modal is an overlay kept outside the view and survives view changes.

Processing steps are cosmetic timers. The API is a single blocking request
with no progress updates.
"""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, ClassVar, List, Optional, Sequence, Union

from summarize_ai.client.api_client import APIError, SummarizeClient
from summarize_ai.client.formatting import export_filename
from summarize_ai.core.config import settings
from summarize_ai.core.logging import logger
from summarize_ai.schemas import SummarizeResponse, SummaryLength, SummaryListItem

PROCESSING_STEPS = ("Extracting text", "Analyzing content", "Generating summary")


@dataclass(frozen=True)
class SelectedFile:
    name: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class UploadView:
    name: ClassVar[str] = "upload"


@dataclass(frozen=True)
class ProcessingView:
    name: ClassVar[str] = "processing"
    step: int = 0


@dataclass(frozen=True)
class ResultView:
    name: ClassVar[str] = "result"
    result: SummarizeResponse


@dataclass(frozen=True)
class HistoryView:
    name: ClassVar[str] = "history"


View = Union[UploadView, ProcessingView, ResultView, HistoryView]


@dataclass(frozen=True)
class Toast:
    kind: str  # "success" | "error"
    message: str


class ViewController:
    """Drives the upload → processing → result flow, history and the modal."""

    def __init__(
        self,
        api: SummarizeClient,
        *,
        clipboard: Optional[Callable[[str], None]] = None,
        on_toast: Optional[Callable[[Toast], None]] = None,
        step_delays: Sequence[float] = (1.2, 3.0),
        result_delay: float = 0.6,
        copied_reset_delay: float = 2.0,
    ):
        self.api = api
        self.view: View = UploadView()
        self.file: Optional[SelectedFile] = None
        self.summary_length = SummaryLength.MEDIUM
        self.history: List[SummaryListItem] = []
        self.modal: Optional[SummaryListItem] = None
        self.loading_history = False
        self.copied = False
        self.toasts: List[Toast] = []

        self._clipboard = clipboard
        self._on_toast = on_toast
        self._step_delays = tuple(step_delays)
        self._result_delay = result_delay
        self._copied_reset_delay = copied_reset_delay
        self._step_timers: List[asyncio.Task] = []
        self._background: set = set()
        self._in_flight = False

    # ─── Helpers ─────────────────────────────────────────────────────────────

    @property
    def result(self) -> Optional[SummarizeResponse]:
        return self.view.result if isinstance(self.view, ResultView) else None

    @property
    def is_processing(self) -> bool:
        return isinstance(self.view, ProcessingView)

    def notify(self, kind: str, message: str) -> None:
        toast = Toast(kind, message)
        self.toasts.append(toast)
        if self._on_toast:
            self._on_toast(toast)

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    async def wait_idle(self) -> None:
        """Wait for background refreshes and timers to settle."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    async def _advance_step(self, step: int, delay: float) -> None:
        await asyncio.sleep(delay)
        if isinstance(self.view, ProcessingView) and self.view.step < step:
            self.view = ProcessingView(step=step)

    def _cancel_step_timers(self) -> None:
        for timer in self._step_timers:
            timer.cancel()
        self._step_timers = []

    # ─── Upload flow ─────────────────────────────────────────────────────────

    def select_file(self, name: str, content: bytes) -> bool:
        """Attach a file for summarization. Rejects non-PDF and oversized files."""
        if self.is_processing:
            return False
        if not name.lower().endswith(".pdf"):
            self.notify("error", "Only PDF files accepted.")
            return False
        if len(content) > settings.max_upload_bytes:
            self.notify("error", f"File too large. Max {settings.MAX_UPLOAD_MB}MB.")
            return False

        self.file = SelectedFile(name=name, content=content)
        self.view = UploadView()
        return True

    def clear_file(self) -> None:
        self.file = None

    def set_summary_length(self, value: Union[str, SummaryLength]) -> None:
        self.summary_length = SummaryLength.normalize(value)

    async def submit(self) -> Optional[SummarizeResponse]:
        """Send the selected file and walk the processing view to the result."""
        if self.file is None or self._in_flight or not isinstance(self.view, UploadView):
            return None

        file = self.file
        self._in_flight = True
        self.view = ProcessingView(step=0)
        self._step_timers = [
            self._spawn(self._advance_step(i + 1, delay))
            for i, delay in enumerate(self._step_delays)
        ]

        try:
            try:
                result = await self.api.summarize(file.name, file.content, self.summary_length)
            except APIError as e:
                self._leave_processing()
                self.notify("error", e.message or "Failed to summarize PDF")
                return None
            except Exception:
                self._leave_processing()
                self.notify("error", "Failed to summarize PDF")
                raise

            self._cancel_step_timers()
            if self.is_processing:
                self.view = ProcessingView(step=len(PROCESSING_STEPS))
                await asyncio.sleep(self._result_delay)
        finally:
            self._cancel_step_timers()
            self._in_flight = False

        if not self.is_processing:
            # User navigated away; only the history cache learns about it
            self._spawn(self.refresh_history())
            return result

        self.view = ResultView(result=result)
        self.file = None
        self._spawn(self.refresh_history())
        self.notify("success", "Summary generated successfully!")
        return result

    def _leave_processing(self) -> None:
        if self.is_processing:
            self.view = UploadView()

    def reset_to_upload(self) -> None:
        self.view = UploadView()
        self.file = None

    # ─── History ─────────────────────────────────────────────────────────────

    async def refresh_history(self) -> None:
        self.loading_history = True
        try:
            items = await self.api.list_summaries()
            self.history = items[: settings.HISTORY_LIMIT]
        except APIError as e:
            logger.warning(f"History refresh failed: {e.message}")
        finally:
            self.loading_history = False

    async def show_history(self) -> None:
        self.view = HistoryView()
        await self.refresh_history()

    def _find_cached(self, summary_id: str) -> Optional[SummaryListItem]:
        for item in self.history:
            if str(item.id) == str(summary_id):
                return item
        return None

    async def open(self, summary_id: str) -> Optional[SummaryListItem]:
        """Show a record in the modal without leaving the current view."""
        item = self._find_cached(summary_id)
        if item is None:
            try:
                item = await self.api.get_summary(str(summary_id))
            except APIError as e:
                self.notify("error", e.message)
                return None
        self.modal = item
        return item

    def close_modal(self) -> None:
        self.modal = None

    async def delete(self, summary_id: str) -> bool:
        try:
            await self.api.delete_summary(str(summary_id))
        except APIError:
            self.notify("error", "Failed to delete")
            return False

        self.history = [item for item in self.history if str(item.id) != str(summary_id)]
        if self.modal is not None and str(self.modal.id) == str(summary_id):
            self.modal = None
        self.notify("success", "Summary deleted")
        return True

    # ─── Copy / export ───────────────────────────────────────────────────────

    async def _reset_copied(self) -> None:
        await asyncio.sleep(self._copied_reset_delay)
        self.copied = False

    def copy(self, text: str) -> None:
        if self._clipboard:
            self._clipboard(text)
        self.copied = True
        self.notify("success", "Copied to clipboard!")
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return
        self._spawn(self._reset_copied())

    def export(self, summary: str, filename: Optional[str], directory: Union[str, Path] = ".") -> Path:
        """Write the summary as ``{name}-summary.md`` and return its path."""
        path = Path(directory) / export_filename(filename)
        path.write_text(summary, encoding="utf-8")
        return path
