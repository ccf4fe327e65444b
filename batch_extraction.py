#!/usr/bin/env python3
"""
Batch runner: extract every stable extension API page into a JSON schema.

- Reads the namespace list from the API index page (cached)
- Extracts pages sequentially
- Saves <namespace>.json per page under the output directory, plus
  <namespace>.failures.json when some types/methods/events were skipped

Usage:
  python batch_extraction.py --output schemas --only tabs --only runtime
"""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

import httpx

from docs_client import DocsClient
from extractors.errors import ExtractionError
from parser_config import ParserConfig, load_config
from schema_builder import PageExtraction

logger = logging.getLogger(__name__)


def save_extraction(extraction: PageExtraction, out_dir: Path) -> Path:
    """Write the namespace schema (and any skipped children) to ``out_dir``."""
    name = extraction.namespace.name
    out_path = out_dir / f"{name}.json"
    out_path.write_text(extraction.namespace.model_dump_json(indent=2), encoding="utf-8")

    failures_path = out_dir / f"{name}.failures.json"
    if extraction.failures:
        report = [asdict(failure) for failure in extraction.failures]
        failures_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
    else:
        # drop any report left by an earlier run
        failures_path.unlink(missing_ok=True)
    return out_path


async def run_batch(config: ParserConfig,
                    out_dir: Path,
                    only: Optional[List[str]] = None,
                    client: Optional[DocsClient] = None) -> int:
    """
    Extract all (or the selected) pages.

    Returns:
        Number of pages that failed
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    client = client or DocsClient(config)
    successes = 0
    failures = 0
    skipped = 0

    async with client:
        pages = await client.api_pages()
        if only:
            pages = [(name, url) for name, url in pages if name in only]

        print(f"📋 Extracting {len(pages)} API pages...")
        for idx, (name, url) in enumerate(pages, 1):
            print(f"[{idx}/{len(pages)}] {name}")
            try:
                extraction = await client.parse_apis(name, url)
            except (ExtractionError, httpx.HTTPError, OSError) as e:
                logger.error(f"Failed to extract {name} ({url}): {e}")
                print(f"  ❌ Error: {e}")
                failures += 1
                continue

            out_path = save_extraction(extraction, out_dir)
            skipped += len(extraction.failures)
            if extraction.failures:
                print(f"  ⚠️ Saved {out_path} ({len(extraction.failures)} entries skipped)")
            else:
                print(f"  ✅ Saved {out_path}")
            successes += 1

    print("\n🎉 Batch complete")
    print(f"  ✅ Successes: {successes}")
    print(f"  ❌ Failures : {failures}")
    print(f"  ⚠️ Skipped  : {skipped}")
    print(f"  📁 Output   : {out_dir.resolve()}")
    return failures


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract extension API schemas from reference docs")
    parser.add_argument("--output", default="schemas", help="Directory for the JSON schemas")
    parser.add_argument("--only", action="append", help="Namespace to extract (repeatable)")
    parser.add_argument("--base-url", help="Documentation base URL")
    parser.add_argument("--cache-dir", help="Directory for cached pages")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    config = load_config()
    overrides = {
        "base_url": args.base_url,
        "cache_dir": args.cache_dir,
        "log_level": args.log_level,
    }
    config = config.model_copy(update={k: v for k, v in overrides.items() if v})

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    failures = asyncio.run(run_batch(config, Path(args.output), only=args.only))
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
