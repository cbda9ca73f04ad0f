"""Application service tying discovery, enrichment and ranking together."""

import logging
from typing import List

from codestars import config
from codestars.application.discovery_service import DiscoveryService, SearchMode
from codestars.application.enrichment_service import EnrichmentService
from codestars.application.report import filter_popular, rank
from codestars.domain.repository import Repository
from codestars.infrastructure.github_client import GitHubClient

logger = logging.getLogger(__name__)


class FinderService:
    """Finds popular repositories containing a file or piece of code."""

    STAR_THRESHOLD = config.STAR_THRESHOLD

    def __init__(self, github_client: GitHubClient):
        """
        Initialize finder service.

        Args:
            github_client: GitHub API client shared by both phases
        """
        self.discovery = DiscoveryService(github_client)
        self.enrichment = EnrichmentService(github_client)

    def find_popular_repositories(self, search_term: str, mode: SearchMode) -> List[Repository]:
        """
        Discover, enrich, then keep and rank the popular repositories.

        Args:
            search_term: Filename or code content to search for
            mode: Whether to match filenames or content

        Returns:
            Repositories with at least STAR_THRESHOLD stars, most starred first
        """
        repositories = self.discovery.discover(search_term, mode)
        repositories = self.enrichment.enrich(repositories)

        popular = rank(filter_popular(repositories, self.STAR_THRESHOLD))
        logger.info(
            f"{len(popular)} of {len(repositories)} repositories have "
            f">={self.STAR_THRESHOLD} stars"
        )
        return popular
