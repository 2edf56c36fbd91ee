"""
Platform Capabilities

Narrow interface the compliance run uses for side effects, and its
GitHub implementation bound to one repository.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

from .client import GitHubAPIError, GitHubClient


logger = logging.getLogger(__name__)


class Platform(ABC):
    """Side-effect capabilities consumed by the runner."""

    @abstractmethod
    def list_changed_files(self, pull_request_number: int) -> List[str]:
        """Changed file paths in API order."""

    @abstractmethod
    def post_comment(self, issue_number: int, text: str) -> None:
        """Post a comment; blank text is a no-op."""

    @abstractmethod
    def close_pull_request(self, pull_request_number: int) -> None:
        """Transition the pull request to closed."""


class GitHubPlatform(Platform):
    """Platform backed by the GitHub REST API for a single repository."""

    def __init__(self, client: GitHubClient, repository: str):
        if '/' not in repository:
            raise ValueError("Repository must be in format 'owner/repo'")
        self.client = client
        self.repository = repository
        self.owner, self.repo = repository.split('/', 1)

    def list_changed_files(self, pull_request_number: int) -> List[str]:
        files = self.client.get_pull_request_files(self.owner, self.repo, pull_request_number)
        try:
            return [file_data['filename'] for file_data in files]
        except (KeyError, TypeError) as e:
            raise GitHubAPIError(f"Malformed PR file entry: {e!r}") from e

    def post_comment(self, issue_number: int, text: str) -> None:
        self.client.create_comment(self.owner, self.repo, issue_number, text)

    def close_pull_request(self, pull_request_number: int) -> None:
        self.client.close_pull_request(self.owner, self.repo, pull_request_number)
