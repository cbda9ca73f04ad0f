from unittest.mock import MagicMock, patch

import pytest

from codestars.application.discovery_service import DiscoveryService, SearchMode, build_query
from codestars.domain.repository import Repository
from codestars.infrastructure.github_client import GitHubAPIError, NetworkError


def repo(repo_id, stars=1, name=None):
    name = name or f"repo{repo_id}"
    return Repository(
        id=repo_id,
        name=name,
        full_name=f"owner/{name}",
        stars=stars,
        url=f"https://github.com/owner/{name}",
    )


def full_page(start):
    """A page of PER_PAGE results with ids start..start+PER_PAGE-1."""
    return [repo(i) for i in range(start, start + DiscoveryService.PER_PAGE)]


def test_build_query_by_mode():
    assert build_query("Dockerfile", SearchMode.FILENAME) == "filename:Dockerfile"
    assert build_query("import requests", SearchMode.CONTENT) == "import requests"


@patch("codestars.application.discovery_service.time.sleep")
def test_discover_fetches_all_pages_and_deduplicates(mock_sleep):
    client = MagicMock()
    # Pages overlap by 10 ids: 1-30, 21-50, 41-70
    pages = [full_page(1), full_page(21), full_page(41)]
    client.search_code.side_effect = [(page, 1000) for page in pages]

    repos = DiscoveryService(client).discover("Dockerfile", SearchMode.FILENAME)

    assert len(repos) == 70
    assert len({r.id for r in repos}) == 70
    assert client.search_code.call_count == 3
    pages_requested = [c.kwargs["page"] for c in client.search_code.call_args_list]
    assert pages_requested == [1, 2, 3]
    assert client.search_code.call_args.args[0] == "filename:Dockerfile"

    # Delay between pages only, not after the last one
    assert mock_sleep.call_count == 2
    mock_sleep.assert_called_with(DiscoveryService.PAGE_DELAY_SECONDS)


@patch("codestars.application.discovery_service.time.sleep")
def test_discover_keeps_last_seen_payload_for_repeated_id(mock_sleep):
    client = MagicMock()
    first = full_page(1)
    second = full_page(100)
    second[0] = repo(1, stars=999)
    client.search_code.side_effect = [(first, 1000), (second, 1000), ([], 1000)]

    repos = DiscoveryService(client).discover("x", SearchMode.CONTENT)

    by_id = {r.id: r for r in repos}
    assert len(repos) == 59
    assert by_id[1].stars == 999


@patch("codestars.application.discovery_service.time.sleep")
def test_discover_stops_on_api_error_and_keeps_earlier_pages(mock_sleep):
    client = MagicMock()
    client.search_code.side_effect = [
        (full_page(1), 1000),
        GitHubAPIError("API rate limit exceeded", 403),
    ]

    repos = DiscoveryService(client).discover("x", SearchMode.CONTENT)

    assert len(repos) == 30
    assert client.search_code.call_count == 2
    assert mock_sleep.call_count == 1


@patch("codestars.application.discovery_service.time.sleep")
def test_discover_error_on_first_page_returns_empty(mock_sleep):
    client = MagicMock()
    client.search_code.side_effect = GitHubAPIError("Bad credentials", 401)

    assert DiscoveryService(client).discover("x", SearchMode.CONTENT) == []
    mock_sleep.assert_not_called()


@patch("codestars.application.discovery_service.time.sleep")
def test_discover_keeps_paging_after_a_short_page(mock_sleep):
    client = MagicMock()
    # Code search can return short pages with incomplete_results
    short_page = full_page(1)[:29]
    client.search_code.side_effect = [
        (short_page, 500),
        (full_page(100), 500),
        (full_page(200), 500),
    ]

    repos = DiscoveryService(client).discover("Dockerfile", SearchMode.FILENAME)

    assert client.search_code.call_count == 3
    assert len(repos) == 89
    assert mock_sleep.call_count == 2


@patch("codestars.application.discovery_service.time.sleep")
def test_discover_propagates_network_errors(mock_sleep):
    client = MagicMock()
    client.search_code.side_effect = NetworkError("connection reset")

    with pytest.raises(NetworkError):
        DiscoveryService(client).discover("x", SearchMode.CONTENT)
