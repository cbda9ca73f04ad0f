"""GitHub REST code search and GraphQL search client."""

import logging
from typing import List, Optional, Dict, Any
import requests

from codestars import config
from codestars.domain.repository import Repository

logger = logging.getLogger(__name__)


class GitHubError(Exception):
    """Base class for errors talking to GitHub."""
    pass


class AuthenticationError(GitHubError):
    """Raised when no GitHub token is available."""
    pass


class NetworkError(GitHubError):
    """Raised when a request fails at the transport level."""
    pass


class ResponseFormatError(GitHubError):
    """Raised when a response body is not the JSON shape we expect."""
    pass


class GitHubAPIError(GitHubError):
    """Raised when GitHub answers with a non-success status or GraphQL errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class GitHubClient:
    """Client for the GitHub code search and GraphQL APIs.

    Each call makes a single attempt; callers decide how to degrade.
    """

    STAR_SEARCH_QUERY = """
    query($searchQuery: String!, $limit: Int!) {
        search(query: $searchQuery, type: REPOSITORY, first: $limit) {
            repositoryCount
            edges {
                node {
                    ... on Repository {
                        nameWithOwner
                        stargazerCount
                    }
                }
            }
        }
    }
    """

    def __init__(self, token: Optional[str] = None):
        """
        Initialize GitHub client.

        Args:
            token: GitHub personal access token. If None, uses GITHUB_TOKEN env var.

        Raises:
            AuthenticationError: If no token is available
        """
        if token is None:
            token = config.get_github_token()
        if not token:
            raise AuthenticationError("GITHUB_TOKEN environment variable not set.")

        self.token = token
        self.rest_headers = {
            "Authorization": f"token {self.token}",
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": config.USER_AGENT,
        }
        self.graphql_headers = {
            "Authorization": f"bearer {self.token}",
            "Content-Type": "application/json",
            "User-Agent": config.USER_AGENT,
        }

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason or f"HTTP {response.status_code}"
        if isinstance(body, dict) and body.get("message"):
            return body["message"]
        return response.text or f"HTTP {response.status_code}"

    @staticmethod
    def _json(response: requests.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise ResponseFormatError(f"Response is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ResponseFormatError(f"Expected a JSON object, got {type(data).__name__}")
        return data

    def search_code(self, query: str, page: int, per_page: int = config.PER_PAGE) -> tuple[List[Repository], int]:
        """
        Run one page of a code search.

        Args:
            query: Code search query string (e.g., "filename:Dockerfile")
            page: 1-based page number
            per_page: Results per page

        Returns:
            Tuple of (repository of every result item, total result count)

        Raises:
            GitHubAPIError: If GitHub returns a non-success status
            NetworkError: If the request fails
            ResponseFormatError: If the response cannot be parsed
        """
        params = {"q": query, "per_page": per_page, "page": page}
        try:
            response = requests.get(
                config.CODE_SEARCH_ENDPOINT,
                params=params,
                headers=self.rest_headers,
                timeout=config.REQUEST_TIMEOUT_SECONDS
            )
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Code search request failed: {e}") from e

        if response.status_code != 200:
            raise GitHubAPIError(self._error_message(response), response.status_code)

        data = self._json(response)
        try:
            items = data["items"]
            repositories = [self._parse_repository(item["repository"]) for item in items]
            total_count = int(data.get("total_count", len(repositories)))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ResponseFormatError(f"Unexpected code search response: {e!r}") from e

        return repositories, total_count

    @staticmethod
    def _parse_repository(payload: Dict[str, Any]) -> Repository:
        return Repository(
            id=int(payload["id"]),
            name=payload["name"],
            full_name=payload["full_name"],
            stars=int(payload.get("stargazers_count") or 0),
            url=payload["html_url"]
        )

    def search_repository_stars(self, search_query: str, limit: int) -> tuple[List[tuple[str, int]], int]:
        """
        Look up current star counts with a GraphQL repository search.

        Args:
            search_query: GitHub search query (e.g., "repo:a/b repo:c/d")
            limit: Maximum number of results

        Returns:
            Tuple of ((nameWithOwner, stargazerCount) pairs, repositoryCount)

        Raises:
            GitHubAPIError: If GitHub returns a non-success status or GraphQL errors
            NetworkError: If the request fails
            ResponseFormatError: If the response cannot be parsed
        """
        payload = {
            "query": self.STAR_SEARCH_QUERY,
            "variables": {"searchQuery": search_query, "limit": limit},
        }
        try:
            response = requests.post(
                config.GRAPHQL_ENDPOINT,
                json=payload,
                headers=self.graphql_headers,
                timeout=config.REQUEST_TIMEOUT_SECONDS
            )
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"GraphQL request failed: {e}") from e

        if response.status_code != 200:
            raise GitHubAPIError(self._error_message(response), response.status_code)

        data = self._json(response)

        # GraphQL reports query errors with a 200 status, possibly alongside partial data
        if data.get("errors"):
            error_messages = [
                err.get("message", "") if isinstance(err, dict) else str(err)
                for err in data["errors"]
            ]
            if data.get("data") is None:
                raise GitHubAPIError(f"GraphQL errors: {error_messages}", response.status_code)
            logger.warning(f"GraphQL returned partial data with errors: {error_messages}")

        try:
            search_result = data["data"]["search"]
            stars = [
                (edge["node"]["nameWithOwner"], int(edge["node"]["stargazerCount"]))
                for edge in search_result["edges"]
                if edge.get("node")
            ]
            repository_count = int(search_result.get("repositoryCount", len(stars)))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ResponseFormatError(f"Unexpected GraphQL response: {e!r}") from e

        return stars, repository_count
