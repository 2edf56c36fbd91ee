"""
Branch Rule

Rejects pull requests opened from a protected branch.
"""


class BranchRule:
    """Exact, case-sensitive comparison against the protected branch name."""

    def evaluate(self, branch: str, protected_branch: str) -> bool:
        if not protected_branch:
            return True
        return branch != protected_branch
