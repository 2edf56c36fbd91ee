"""
GitHub Integration Layer

This module provides the GitHub REST client, the platform capability
handle, event payload parsing and the Actions runner adapter.
"""

from .client import GitHubClient, GitHubAPIError, RateLimitExceeded
from .platform import Platform, GitHubPlatform
from .event import PullRequestEvent, load_event, parse_event
from .actions import ActionsReporter

__all__ = [
    'GitHubClient',
    'GitHubAPIError',
    'RateLimitExceeded',
    'Platform',
    'GitHubPlatform',
    'PullRequestEvent',
    'load_event',
    'parse_event',
    'ActionsReporter',
]
