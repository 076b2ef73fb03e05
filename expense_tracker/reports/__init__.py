"""Report generation package."""

from expense_tracker.reports.summary import ReportGenerator

__all__ = ["ReportGenerator"]
