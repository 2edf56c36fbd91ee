"""
Pull Request Event Payload

Parses the webhook payload GitHub Actions writes to GITHUB_EVENT_PATH
(or a pull request fetched from the REST API) into a PullRequestContext.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ValidationError, field_validator

from ..errors import ConfigurationError
from ..models.pull_request import PullRequestContext


logger = logging.getLogger(__name__)


class UserPayload(BaseModel):
    login: str = ''


class HeadPayload(BaseModel):
    ref: str = ''


class RepositoryPayload(BaseModel):
    full_name: Optional[str] = None


class PullRequestPayload(BaseModel):
    """pull_request object of the webhook payload"""
    number: int
    title: Optional[str] = None
    body: Optional[str] = None
    user: Optional[UserPayload] = None
    head: Optional[HeadPayload] = None

    @field_validator('number')
    @classmethod
    def validate_number(cls, v):
        if v <= 0:
            raise ValueError('PR number must be positive')
        return v

    @field_validator('title', 'body')
    @classmethod
    def validate_text(cls, v):
        return v or ''


class PullRequestEvent(BaseModel):
    """Subset of a pull_request / pull_request_target event"""
    pull_request: Optional[PullRequestPayload] = None
    repository: Optional[RepositoryPayload] = None

    def to_context(self, repository: Optional[str] = None) -> PullRequestContext:
        """
        Build the evaluation context.

        Args:
            repository: "owner/repo" fallback when the payload has none

        Raises:
            ConfigurationError: If the event carries no pull request
        """
        if self.pull_request is None:
            raise ConfigurationError("Event payload does not contain a pull_request; "
                                     "run this check on pull_request events")

        pr = self.pull_request
        full_name = (self.repository.full_name if self.repository else None) or repository
        return PullRequestContext(
            author=pr.user.login if pr.user else '',
            title=pr.title or '',
            body=pr.body or '',
            branch=pr.head.ref if pr.head else '',
            pull_request_number=pr.number,
            issue_number=pr.number,
            repository=full_name,
        )


def parse_event(payload: Dict) -> PullRequestEvent:
    """Validate a raw payload dictionary."""
    try:
        return PullRequestEvent.model_validate(payload)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid pull request event payload: {e}") from e


def load_event(event_path: str) -> PullRequestEvent:
    """Read and validate the event payload file."""
    path = Path(event_path)
    if not path.exists():
        raise ConfigurationError(f"Event payload not found: {event_path}")

    logger.debug(f"Loading event payload from {event_path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Event payload is not valid JSON: {e}") from e

    return parse_event(payload)


def event_from_pull_request(pr_data: Dict) -> PullRequestEvent:
    """Wrap a REST API pull request object as an event."""
    repository = (pr_data.get('base') or {}).get('repo') or {}
    return parse_event({
        'pull_request': pr_data,
        'repository': {'full_name': repository.get('full_name')},
    })
