import logging
from typing import Optional
import requests
from github import Github, GithubException, UnknownObjectException
from .errors import ResolutionUnavailable

logger = logging.getLogger(__name__)


class AuthorResolver:
    """Looks up the Twitter handle a GitHub user publishes on their profile"""

    def __init__(self, token: Optional[str] = None, github: Optional[Github] = None):
        self.token = token
        self._github = github  # Lazy initialization

    @property
    def github(self) -> Github:
        """Lazy initialization of GitHub client"""
        if self._github is None:
            self._github = Github(self.token) if self.token else Github()
        return self._github

    def resolve_handle(self, author_id: Optional[str]) -> Optional[str]:
        """
        Resolve the public Twitter handle of a GitHub user

        Args:
            author_id: GitHub login of the commit author

        Returns:
            str: the handle without '@', or None when the user has none

        Raises:
            ResolutionUnavailable: the GitHub API could not be reached
        """
        if not author_id:
            return None

        try:
            handle = self.github.get_user(author_id).twitter_username
        except UnknownObjectException:
            logger.info(f"GitHub user {author_id} not found")
            return None
        except (GithubException, requests.exceptions.RequestException) as e:
            raise ResolutionUnavailable(f"Error looking up GitHub user {author_id}: {e}") from e

        return handle or None

    def close(self):
        if self._github is not None:
            self._github.close()
