# File: bucket_scout/engine.py
"""bucket_scout.engine: Orchestration layer для запуска сканирования и агрегации результатов."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from aiohttp import ClientSession, ClientTimeout

from bucket_scout.aggregator import ScanReport, aggregate_results
from bucket_scout.config import ScannerConfig
from bucket_scout.downloader import Downloader
from bucket_scout.logger import logger
from bucket_scout.prober.fetcher import Fetcher
from bucket_scout.report.console import ConsoleReporter
from bucket_scout.scanner import Scanner
from bucket_scout.wordlist import from_file

__all__ = ["start_scan"]


async def start_scan(cfg: ScannerConfig, reporter: Optional[ConsoleReporter] = None) -> ScanReport:
    """
    Генерирует кандидатов, прогоняет их через Scanner и возвращает ScanReport.

    Parameters
    ----------
    cfg : ScannerConfig
        Конфигурация сканирования.
    reporter : ConsoleReporter, optional
        Получатель исходов; по умолчанию создаётся новый.
    """
    reporter = reporter or ConsoleReporter()
    candidates = from_file(cfg.domain, cfg.wordlist)
    logger.info("Generated wordlist from file, %d items...", len(candidates))

    started = datetime.now()
    reporter.announce(len(candidates), started)
    timeout = ClientTimeout(total=cfg.timeout)
    async with ClientSession(timeout=timeout, headers={"User-Agent": cfg.user_agent}) as session:
        scanner = Scanner(
            Fetcher(session, cfg.retry_delays),
            reporter,
            host=cfg.host,
            seed_domain=cfg.domain,
            pool_size=cfg.pool_size,
            max_redirect_depth=cfg.max_redirect_depth,
            downloader=Downloader(session, cfg.download_dir) if cfg.download else None,
            prefix_candidates=cfg.prefix_candidates,
        )
        await scanner.scan(candidates)
    finished = datetime.now()

    report = aggregate_results(
        reporter.outcomes,
        domain=cfg.domain,
        host=cfg.host,
        candidates=len(candidates),
        started=started,
        finished=finished,
    )
    logger.info("Scan finished in %.2f s, %d outcomes", report.elapsed, len(report.outcomes))
    return report
