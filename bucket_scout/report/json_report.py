# bucket_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта BucketScout.

Сериализация объекта ScanReport в файл.
"""
import json
from pathlib import Path

from bucket_scout.aggregator import ScanReport


def render_json(report: ScanReport, output_path: Path | str) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект ScanReport с данными сканирования
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from bucket_scout.report.json_report import render_json
    report_path = render_json(report, 'reports/report.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(report.as_dict(), f, ensure_ascii=False, indent=2)

    return output
