"""Application service for discovering repositories through code search."""

import enum
import logging
import time
from typing import List

from codestars import config
from codestars.domain.repository import Repository
from codestars.infrastructure.github_client import GitHubClient, GitHubAPIError

logger = logging.getLogger(__name__)


class SearchMode(enum.Enum):
    """What the search term is matched against."""

    FILENAME = "filename"
    CONTENT = "content"


def build_query(search_term: str, mode: SearchMode) -> str:
    """Build a code search query for the given mode."""
    if mode is SearchMode.FILENAME:
        return f"filename:{search_term}"
    return search_term


class DiscoveryService:
    """Collects unique repositories from a fixed number of code search pages."""

    PAGE_COUNT = config.PAGE_COUNT
    PER_PAGE = config.PER_PAGE
    PAGE_DELAY_SECONDS = config.PAGE_DELAY_SECONDS

    def __init__(self, github_client: GitHubClient):
        """
        Initialize discovery service.

        Args:
            github_client: GitHub API client
        """
        self.github_client = github_client

    def discover(self, search_term: str, mode: SearchMode) -> List[Repository]:
        """
        Search code and return the repositories the results belong to.

        A page that GitHub rejects ends pagination; pages already collected
        are kept. Transport and parsing errors propagate.

        Args:
            search_term: Filename or code content to search for
            mode: Whether to match filenames or content

        Returns:
            Unique repositories, deduplicated by id
        """
        query = build_query(search_term, mode)
        unique_repos: dict[int, Repository] = {}

        for page in range(1, self.PAGE_COUNT + 1):
            logger.info(f'Fetching page {page} for "{search_term}"...')
            try:
                repos, total_count = self.github_client.search_code(
                    query,
                    page=page,
                    per_page=self.PER_PAGE
                )
            except GitHubAPIError as e:
                logger.error(f"API Error (page {page}): {e.message}")
                break

            logger.info(f"Page {page}: Found {len(repos)} results ({total_count} total)")

            for repo in repos:
                unique_repos[repo.id] = repo

            if page < self.PAGE_COUNT:
                time.sleep(self.PAGE_DELAY_SECONDS)

        logger.info(f"Found {len(unique_repos)} unique repositories.")
        return list(unique_repos.values())
