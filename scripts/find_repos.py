#!/usr/bin/env python3
"""Script to find popular repositories containing a file or code snippet."""

import argparse
import logging
import sys
import os
from typing import List, Optional

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from codestars.config import get_github_token
from codestars.infrastructure.github_client import GitHubClient
from codestars.application.discovery_service import SearchMode
from codestars.application.finder_service import FinderService
from codestars.application.report import print_report

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find repositories with >=100 stars that contain a file or code snippet."
    )
    parser.add_argument("--filename", type=str, help="Search for repositories by filename.")
    parser.add_argument("--search", type=str, help="Search for repositories by code content.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Search GitHub code and print the popular repositories found."""
    parser = build_parser()
    args = parser.parse_args(argv)

    github_token = get_github_token()
    if not github_token:
        logger.error("GITHUB_TOKEN environment variable not set.")
        logger.error("Please set it to your personal GitHub access token in the .env file.")
        return 1

    if not args.filename and not args.search:
        parser.print_help()
        return 0

    if args.filename:
        search_term, mode = args.filename, SearchMode.FILENAME
    else:
        search_term, mode = args.search, SearchMode.CONTENT

    try:
        finder = FinderService(GitHubClient(token=github_token))
        repositories = finder.find_popular_repositories(search_term, mode)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1

    print_report(repositories, FinderService.STAR_THRESHOLD)
    return 0


if __name__ == "__main__":
    sys.exit(main())
