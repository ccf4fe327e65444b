#!/usr/bin/env python3
"""
Runtime configuration, read from the environment (and a local .env file).
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_BASE_URL = "https://developer.chrome.com/extensions/"


class ParserConfig(BaseModel):
    """Settings shared by the docs client and the batch runner."""
    base_url: str = DEFAULT_BASE_URL
    index_page: str = "api_index"
    cache_dir: str = "cache"
    timeout: float = 30.0
    html_parser: str = "html.parser"
    log_level: str = "INFO"

    @property
    def index_url(self) -> str:
        return f"{self.base_url}{self.index_page}"


def load_config(env_file: Optional[str] = None) -> ParserConfig:
    """Build a ParserConfig from WEBEXT_* environment variables."""
    load_dotenv(env_file)

    values = {
        "base_url": os.getenv("WEBEXT_DOCS_BASE_URL"),
        "index_page": os.getenv("WEBEXT_DOCS_INDEX_PAGE"),
        "cache_dir": os.getenv("WEBEXT_CACHE_DIR"),
        "timeout": os.getenv("WEBEXT_HTTP_TIMEOUT"),
        "html_parser": os.getenv("WEBEXT_HTML_PARSER"),
        "log_level": os.getenv("WEBEXT_LOG_LEVEL"),
    }
    return ParserConfig(**{k: v for k, v in values.items() if v})
