"""Application service for refreshing star counts via GraphQL."""

import logging
from typing import List

from codestars.domain.repository import Repository
from codestars.infrastructure.github_client import GitHubClient, GitHubError

logger = logging.getLogger(__name__)


def build_search_query(repositories: List[Repository]) -> str:
    """Build a repository search matching every given full name."""
    return " ".join(f"repo:{repo.full_name}" for repo in repositories)


class EnrichmentService:
    """Replaces code-search star counts with current ones from GraphQL."""

    def __init__(self, github_client: GitHubClient):
        self.github_client = github_client

    def enrich(self, repositories: List[Repository]) -> List[Repository]:
        """
        Update star counts with one batched GraphQL search.

        Never raises on GitHub errors: if the lookup fails the input is
        returned unchanged.

        Args:
            repositories: Repositories from discovery

        Returns:
            Same repositories in the same order, with refreshed star counts
            where GitHub returned one
        """
        if not repositories:
            return []

        logger.info(f"Fetching star counts for {len(repositories)} repositories via GraphQL...")

        try:
            stars, repository_count = self.github_client.search_repository_stars(
                build_search_query(repositories),
                limit=len(repositories)
            )
        except GitHubError as e:
            logger.error(f"Failed to fetch star counts from GraphQL API: {e}")
            return repositories

        star_map = dict(stars)

        enriched = []
        matched = 0
        for repo in repositories:
            stargazer_count = star_map.get(repo.full_name)
            if stargazer_count is None:
                enriched.append(repo)
            else:
                enriched.append(repo.with_stars(stargazer_count))
                matched += 1

        logger.info(
            f"Successfully enriched {matched}/{len(repositories)} repositories "
            f"({repository_count} matched the search)."
        )
        return enriched
