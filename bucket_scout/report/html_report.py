# File: bucket_scout/report/html_report.py
"""bucket_scout.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from bucket_scout.aggregator import ScanReport
from bucket_scout.prober.models import OutcomeKind

#: bundled templates, used when the CLI gets no --template
TEMPLATE_DIR = Path(__file__).parent / "templates"

# outcomes worth a row in the report
_REPORTED = (
    OutcomeKind.FOUND,
    OutcomeKind.ACCESS_DENIED,
    OutcomeKind.REDIRECTED,
    OutcomeKind.REDIRECT_UNRESOLVED,
    OutcomeKind.REDIRECT_LOOP_EXCEEDED,
    OutcomeKind.KEY_NOT_FOUND,
    OutcomeKind.UNKNOWN_ERROR_CODE,
    OutcomeKind.MALFORMED_RESPONSE,
)


def render_html(
    report: ScanReport,
    template_dir: Union[Path, str, None],
    output_path: Union[Path, str],
) -> Path:
    """Рендерит HTML-отчёт из шаблона и сохраняет его по указанному пути.

    Args:
        report: объект ScanReport.
        template_dir: директория с Jinja2-шаблонами (None — встроенные шаблоны).
        output_path: путь к итоговому HTML-файлу.

    Returns:
        Path до сохранённого HTML-файла.
    """
    template_dir = Path(template_dir) if template_dir else TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template("report.html.j2")

    context: dict[str, Any] = {
        "domain": report.domain,
        "host": report.host,
        "candidates": report.candidates,
        "started": report.started,
        "elapsed": report.elapsed,
        "counts": report.counts(),
        "outcomes": report.of_kind(*_REPORTED),
    }

    html_content = template.render(**context)
    output_path.write_text(html_content, encoding="utf-8")

    return output_path
