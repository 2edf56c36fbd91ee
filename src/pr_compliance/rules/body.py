"""
Body Rule

Checks the pull request description against a configured pattern.
"""

import re
import logging
from typing import Iterable


logger = logging.getLogger(__name__)


class BodyRule:
    """
    Regex check of the pull request body with an author bypass.

    An empty pattern disables the policy. Matching is a search, so the
    pattern only anchors if it says so itself.
    """

    def evaluate(self, author: str, body: str, pattern: str, ignored_authors: Iterable[str]) -> bool:
        """
        Evaluate the body policy.

        Args:
            author: Login of the pull request author
            body: Pull request description (may be empty)
            pattern: Regular expression the body must contain
            ignored_authors: Authors exempted from the check

        Returns:
            True if the author is exempt or the body matches
        """
        if author in set(ignored_authors):
            logger.debug(f"Body check bypassed for ignored author: {author}")
            return True

        if not pattern:
            return True

        return re.search(pattern, body or '') is not None
