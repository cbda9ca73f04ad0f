"""Domain entities for GitHub repositories."""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Repository:
    """Immutable repository entity.

    ``id`` identifies a repository in code search results, ``full_name``
    identifies it in GraphQL results. A run assumes no two ids share a
    full name.
    """

    id: int
    name: str
    full_name: str
    stars: int
    url: str

    def with_stars(self, stars: int) -> "Repository":
        """Return a copy with an updated star count."""
        return replace(self, stars=stars)
