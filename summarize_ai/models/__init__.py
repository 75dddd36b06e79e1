"""SQLAlchemy models package."""

from summarize_ai.models.summary import SummaryRecord, SUMMARY_LENGTHS

__all__ = ["SummaryRecord", "SUMMARY_LENGTHS"]
