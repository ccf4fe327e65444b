#!/usr/bin/env python3
"""
Test script for the cached docs client.
Uses httpx.MockTransport, so no network access is needed.
"""

import asyncio
import tempfile
from pathlib import Path

import httpx

from helpers import arg_row, method_div, page, run_module_tests

from docs_client import DocsClient, cache_file_name
from parser_config import ParserConfig

BASE = "https://docs.example.test/extensions/"

INDEX_PAGE = """
<html><body>
<h2 id="stable_apis">Stable APIs</h2>
<table>
  <tr><th>Name</th><th>Description</th></tr>
  <tr><td><a href="alarms">chrome.alarms</a></td><td>Schedule code.</td></tr>
  <tr><td><a href="tabs">chrome.tabs</a></td><td>Interact with tabs. See <a href="windows">windows</a>.</td></tr>
</table>
<h2 id="beta_apis">Beta APIs</h2>
<table>
  <tr><td><a href="experimental">chrome.experimental</a></td></tr>
</table>
</body></html>
"""

TABS_PAGE = page('<h2 id="methods">Methods</h2>', method_div("get", arg_row("integer", "tabId")))


def make_client(cache_dir, pages, calls):
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(str(request.url))
        body = pages.get(str(request.url))
        if body is None:
            return httpx.Response(404, text="not found")
        return httpx.Response(200, text=body)

    config = ParserConfig(base_url=BASE, cache_dir=str(cache_dir))
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return DocsClient(config, http=http)


def test_cache_file_name():
    assert cache_file_name("https://a.b/c/d") == "https___a.b_c_d"


def test_get_cached_fetches_once():
    calls = []

    async def run(cache_dir):
        async with make_client(cache_dir, {f"{BASE}tabs": "<p>tabs</p>"}, calls) as client:
            first = await client.get_cached(f"{BASE}tabs")
            second = await client.get_cached(f"{BASE}tabs")
        return first, second

    with tempfile.TemporaryDirectory() as tmp:
        cache_dir = Path(tmp) / "cache"
        first, second = asyncio.run(run(cache_dir))
        assert first == second == "<p>tabs</p>"
        assert calls == [f"{BASE}tabs"]
        assert (cache_dir / cache_file_name(f"{BASE}tabs")).read_text() == "<p>tabs</p>"


def test_cached_file_is_used_without_network():
    calls = []

    async def run(cache_dir):
        async with make_client(cache_dir, {}, calls) as client:
            return await client.get_cached(f"{BASE}runtime")

    with tempfile.TemporaryDirectory() as tmp:
        cache_dir = Path(tmp)
        (cache_dir / cache_file_name(f"{BASE}runtime")).write_text("cached")
        assert asyncio.run(run(cache_dir)) == "cached"
        assert calls == []


def test_cache_path_that_is_a_file_is_rejected():
    async def run(cache_dir):
        async with make_client(cache_dir, {}, []) as client:
            await client.get_cached(f"{BASE}tabs")

    with tempfile.TemporaryDirectory() as tmp:
        cache_file = Path(tmp) / "cache"
        cache_file.write_text("not a directory")
        try:
            asyncio.run(run(cache_file))
        except NotADirectoryError:
            pass
        else:
            raise AssertionError("file used as cache directory")


def test_http_errors_are_raised_and_not_cached():
    async def run(cache_dir):
        async with make_client(cache_dir, {}, []) as client:
            await client.get_cached(f"{BASE}missing")

    with tempfile.TemporaryDirectory() as tmp:
        try:
            asyncio.run(run(Path(tmp)))
        except httpx.HTTPStatusError as e:
            assert e.response.status_code == 404
        else:
            raise AssertionError("404 accepted")
        assert list(Path(tmp).iterdir()) == []


def test_api_pages_reads_stable_table_only():
    async def run(cache_dir):
        async with make_client(cache_dir, {f"{BASE}api_index": INDEX_PAGE}, []) as client:
            return await client.api_pages()

    with tempfile.TemporaryDirectory() as tmp:
        pages = asyncio.run(run(Path(tmp)))
        assert pages == [("alarms", f"{BASE}alarms"), ("tabs", f"{BASE}tabs")]


def test_parse_apis():
    async def run(cache_dir):
        async with make_client(cache_dir, {f"{BASE}tabs": TABS_PAGE}, []) as client:
            return await client.parse_apis("tabs", f"{BASE}tabs")

    with tempfile.TemporaryDirectory() as tmp:
        extraction = asyncio.run(run(Path(tmp)))
        assert extraction.ok
        assert extraction.namespace.methods[0].name == "get"


if __name__ == "__main__":
    run_module_tests(dict(globals()), "Testing docs client")
