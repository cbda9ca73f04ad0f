"""Configuration: environment loading and fixed search policy."""

import os
import pathlib
from typing import Optional

from dotenv import load_dotenv

# Project-level .env first, then whatever is in the working directory
PROJECT_DIR = pathlib.Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_DIR / ".env")
load_dotenv()

CODE_SEARCH_ENDPOINT = "https://api.github.com/search/code"
GRAPHQL_ENDPOINT = "https://api.github.com/graphql"
USER_AGENT = "code-search-stars"

# Code search pagination: 3 pages of 30 results
PAGE_COUNT = 3
PER_PAGE = 30

# Pause between code search pages to stay under the search rate limit
PAGE_DELAY_SECONDS = 1.5

# Minimum stars for a repository to be reported
STAR_THRESHOLD = 100

REQUEST_TIMEOUT_SECONDS = 30


def get_github_token() -> Optional[str]:
    """Return the GitHub token from the environment, or None if unset."""
    token = os.getenv("GITHUB_TOKEN")
    if not token or not token.strip():
        return None
    return token.strip()
