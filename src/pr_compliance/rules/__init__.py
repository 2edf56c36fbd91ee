"""
Compliance Rules

Independent predicate checks evaluated against a pull request:
body format, title grammar, branch protection and watched files.
"""

from .body import BodyRule
from .title import TitleRule, TitleGrammar, ConventionalCommitLinter, render_lint_errors
from .branch import BranchRule
from .files import FileWatchRule

__all__ = [
    'BodyRule',
    'TitleRule',
    'TitleGrammar',
    'ConventionalCommitLinter',
    'render_lint_errors',
    'BranchRule',
    'FileWatchRule',
]
