#!/usr/bin/env python3
"""
Docs Client - fetches extension API reference pages with an on-disk cache.

Pages are stored under the cache directory with ``/`` and ``:`` in the URL
replaced by ``_``, so repeated runs never hit the network twice for one URL.
"""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import httpx
from bs4 import BeautifulSoup

from parser_config import ParserConfig
from schema_builder import PageExtraction, build_namespace

logger = logging.getLogger(__name__)

STABLE_API_LINKS = "#stable_apis ~ table:nth-of-type(1) tr td:nth-of-type(1) a"


def cache_file_name(url: str) -> str:
    return url.replace("/", "_").replace(":", "_")


class DocsClient:
    """
    Cached access to the reference documentation.
    Use as an async context manager, or call close() when done.
    """

    def __init__(self,
                 config: Optional[ParserConfig] = None,
                 http: Optional[httpx.AsyncClient] = None):
        """
        Initialize the docs client.

        Args:
            config: Runtime settings (defaults when omitted)
            http: Preconfigured HTTP client, mainly for tests
        """
        self.config = config or ParserConfig()
        self.cache_dir = Path(self.config.cache_dir)
        self.http = http or httpx.AsyncClient(timeout=self.config.timeout, follow_redirects=True)

        logger.info(f"Docs client initialized for {self.config.base_url} (cache: {self.cache_dir})")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _ensure_cache_dir(self):
        if self.cache_dir.exists():
            if not self.cache_dir.is_dir():
                raise NotADirectoryError(f"Cache path exists and is not a directory: {self.cache_dir}")
        else:
            self.cache_dir.mkdir(parents=True)

    async def get_cached(self, url: str) -> str:
        """
        Return the page text for ``url``, fetching and caching it on first use.

        Raises:
            NotADirectoryError: The cache path is a file
            httpx.HTTPError: The page could not be fetched
            OSError: The cache file could not be read or written
        """
        await asyncio.to_thread(self._ensure_cache_dir)
        cache_file = self.cache_dir / cache_file_name(url)

        if cache_file.exists():
            logger.debug(f"Cache hit: {url}")
            return await asyncio.to_thread(cache_file.read_text, encoding="utf-8")

        response = await self.http.get(url)
        logger.debug(f"GET {url} -> {response.status_code}")
        response.raise_for_status()

        html = response.text
        await asyncio.to_thread(cache_file.write_text, html, encoding="utf-8")
        return html

    async def api_pages(self) -> List[Tuple[str, str]]:
        """``(namespace, page_url)`` for every stable API listed on the index page."""
        index = BeautifulSoup(await self.get_cached(self.config.index_url), self.config.html_parser)
        pages = []
        for link in index.select(STABLE_API_LINKS):
            href = link.get("href")
            if not href:
                logger.warning(f"Skipping index link without href: {link.get_text(strip=True)}")
                continue
            pages.append((href, f"{self.config.base_url}{href}"))

        logger.info(f"Found {len(pages)} API pages on {self.config.index_url}")
        return pages

    async def parse_apis(self, name: str, url: str) -> PageExtraction:
        """Fetch one namespace page and extract its schema."""
        markup = await self.get_cached(url)
        return build_namespace(name, markup, parser=self.config.html_parser)

    async def close(self):
        """Close the HTTP client."""
        await self.http.aclose()
