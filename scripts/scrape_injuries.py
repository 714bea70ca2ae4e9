#!/usr/bin/env python3
"""
Scrape the ESPN NHL injuries page once and print the result as JSON.

Usage:
    python scripts/scrape_injuries.py
    python scripts/scrape_injuries.py --output injuries.json
    python scripts/scrape_injuries.py --html saved_page.html --team "Boston Bruins"
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hockey_pool.scraping.scraper import build_scrape_result, extract_injuries
from hockey_pool.services.errors import FetchError
from hockey_pool.services.injury_service import InjuryService, filter_by_team

logger = logging.getLogger("scrape_injuries")


async def run(html_path: Optional[str] = None) -> dict:
    if html_path:
        html = Path(html_path).read_text(encoding="utf-8")
        return build_scrape_result(extract_injuries(html)).to_payload()

    result = await InjuryService().scrape()
    return result.to_payload()


def main() -> int:
    parser = argparse.ArgumentParser(description="Scrape ESPN NHL injuries")
    parser.add_argument("--html", help="Parse a saved HTML page instead of fetching ESPN")
    parser.add_argument("--team", help="Only print injuries for this NHL team")
    parser.add_argument("--output", help="Write JSON to this file instead of stdout")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        payload = asyncio.run(run(args.html))
    except FetchError as e:
        logger.error(f"❌ Scrape failed: {e}")
        return 1

    if args.team:
        payload = filter_by_team(payload, args.team)

    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        logger.info(f"✅ Wrote {payload['count']} injuries to {args.output}")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
