# File: tests/conftest.py
from __future__ import annotations

import inspect
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest
import pytest_asyncio
from aiohttp import web

from bucket_scout.logger import configure
from bucket_scout.prober.models import Outcome

S3_NS = "http://s3.amazonaws.com/doc/2006-03-01/"


def listing_xml(name: str, keys: List[str] = ()) -> str:
    contents = "".join(f"<Contents><Key>{k}</Key><Size>3</Size></Contents>" for k in keys)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<ListBucketResult xmlns="{S3_NS}"><Name>{name}</Name><Prefix></Prefix>'
        f"<IsTruncated>false</IsTruncated>{contents}</ListBucketResult>"
    )


def error_xml(code: str, endpoint: str | None = None) -> str:
    extra = f"<Endpoint>{endpoint}</Endpoint>" if endpoint is not None else ""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f"<Error><Code>{code}</Code><Message>msg</Message>{extra}"
        "<RequestId>X</RequestId></Error>"
    )


class CollectingSink:
    """Reporting sink that only records outcomes."""

    def __init__(self) -> None:
        self.outcomes: List[Outcome] = []

    def report(self, outcome: Outcome) -> None:
        self.outcomes.append(outcome)


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI tests point the project logger at CliRunner streams; restore it."""
    yield
    configure()


@pytest.fixture()
def sink() -> CollectingSink:
    return CollectingSink()


@pytest.fixture()
def wordlist_file(tmp_path) -> Path:
    """
    Create a temporary word list with one word and a blank line.
    """
    path = tmp_path / "words.txt"
    path.write_text("test\n\n", encoding="utf-8")
    return path


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


@pytest.fixture()
def s3_routes() -> Dict[str, Callable[[], Any]]:
    """Per-test mapping of request path -> response factory; the rest get NoSuchBucket."""
    return {}


@pytest.fixture()
def s3_hits() -> List[str]:
    """Paths requested from the fake provider, in arrival order."""
    return []


@pytest_asyncio.fixture
async def fake_s3(unused_tcp_port: int, s3_routes, s3_hits) -> AsyncIterator[str]:
    """A tiny stand-in for the provider's listing endpoint."""
    app = web.Application()

    async def handle(request: web.Request) -> web.Response:
        path = request.match_info["tail"]
        s3_hits.append(path)
        factory = s3_routes.get(path)
        if factory is not None:
            response = factory()
            if inspect.isawaitable(response):
                response = await response
            return response
        return web.Response(text=error_xml("NoSuchBucket"), status=404, content_type="application/xml")

    app.router.add_get("/{tail:.*}", handle)
    async for url in _serve_app(app, unused_tcp_port):
        yield url
