# File: bucket_scout/report/__init__.py
"""bucket_scout.report: вывод исходов на консоль и отчёты (JSON и HTML) для CLI и тестов."""

from __future__ import annotations

from .console import ConsoleReporter, ReportingSink, format_outcome, style_for
from .html_report import render_html
from .json_report import render_json

__all__ = ["ConsoleReporter", "ReportingSink", "format_outcome", "style_for", "render_json", "render_html"]
