"""Client-side view controller and HTTP client for the summarization API."""

from summarize_ai.client.api_client import APIError, SummarizeClient
from summarize_ai.client.state import (
    HistoryView,
    ProcessingView,
    ResultView,
    Toast,
    UploadView,
    ViewController,
)

__all__ = [
    "APIError",
    "SummarizeClient",
    "HistoryView",
    "ProcessingView",
    "ResultView",
    "Toast",
    "UploadView",
    "ViewController",
]
