"""Filtering, ranking and console output for discovered repositories."""

from typing import List

from codestars import config
from codestars.domain.repository import Repository


def filter_popular(repositories: List[Repository], threshold: int = config.STAR_THRESHOLD) -> List[Repository]:
    """Keep repositories with at least ``threshold`` stars."""
    return [repo for repo in repositories if repo.stars >= threshold]


def rank(repositories: List[Repository]) -> List[Repository]:
    """Sort by stars, most starred first. Ties keep their input order."""
    return sorted(repositories, key=lambda repo: repo.stars, reverse=True)


def format_report(repositories: List[Repository], threshold: int = config.STAR_THRESHOLD) -> List[str]:
    """
    Render ranked repositories as console lines.

    Args:
        repositories: Repositories already filtered and ranked
        threshold: Star threshold the repositories were filtered with

    Returns:
        Header lines followed by two lines per repository
    """
    lines = [
        "=== Final Results ===",
        f"Repositories with >={threshold} stars: {len(repositories)}",
    ]
    for i, repo in enumerate(repositories, 1):
        lines.append(f"{i}. {repo.full_name} - {repo.stars}★")
        lines.append(f"   URL: {repo.url}")
    return lines


def print_report(repositories: List[Repository], threshold: int = config.STAR_THRESHOLD) -> None:
    """Print the report to stdout."""
    for line in format_report(repositories, threshold):
        print(line)
