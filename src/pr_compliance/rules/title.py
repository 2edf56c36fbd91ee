"""
Title Rule

Lints the pull request title against the conventional-commit grammar.

The rule itself only decides whether linting runs and turns parse
failures into ordinary lint errors. The grammar lives behind the
TitleGrammar interface; ConventionalCommitLinter is the built-in
implementation and mirrors the rule set of commitlint's conventional
configuration for a single header line.
"""

import re
import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence

from ..errors import LintParseError
from ..models.results import LintError, RuleResult


logger = logging.getLogger(__name__)


LINT_ERRORS_HEADER = '\nLinting Errors\n\n'

DEFAULT_TYPES = (
    'build', 'chore', 'ci', 'docs', 'feat', 'fix',
    'perf', 'refactor', 'revert', 'style', 'test',
)

HEADER_MAX_LENGTH = 100

FORBIDDEN_SUBJECT_CASES = ('sentence-case', 'start-case', 'pascal-case', 'upper-case')

# Headers that are never linted (merge commits, reverts, fixups, ...)
DEFAULT_IGNORES = (
    re.compile(r'^(Merge pull request|Merge branch|Merge (.*?) into (.*?))'),
    re.compile(r'^Merge tag (.*?)'),
    re.compile(r'^(R|r)evert (.*)'),
    re.compile(r'^(amend|fixup|squash)!'),
    re.compile(r'^Merged (.*?)(in|into) (.*)'),
    re.compile(r'^Merge remote-tracking branch(\s*)(.*)'),
    re.compile(r'^Auto-merged (.*?) into (.*)'),
)

_WORD_PATTERN = re.compile(r'[A-Z]{2,}(?=[A-Z][a-z]|[^A-Za-z]|$)|[A-Z]?[a-z]+|[A-Z]+|\d+')
_QUOTED_PATTERN = re.compile('`.*?`|\'.*?\'|".*?"')


def render_lint_errors(errors: Iterable[LintError]) -> str:
    """Render lint errors as the bulleted block appended to the title comment."""
    return LINT_ERRORS_HEADER + ''.join(f'\n- {error.message}' for error in errors)


def _words(text: str) -> List[str]:
    return _WORD_PATTERN.findall(text)


def _upper_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def _to_case(text: str, case: str) -> str:
    if case == 'lower-case':
        return text.lower()
    if case == 'upper-case':
        return text.upper()
    if case == 'sentence-case':
        return _upper_first(text)
    if case == 'start-case':
        return ' '.join(_upper_first(word) for word in _words(text))
    if case == 'pascal-case':
        return ''.join(word.capitalize() for word in _words(text))
    raise ValueError(f"Unknown case: {case}")


def is_case(text: str, case: str) -> bool:
    """
    True if text is already written in the given case.

    Quoted and backticked fragments are ignored, so literal identifiers
    do not decide the case of the surrounding text.
    """
    stripped = _QUOTED_PATTERN.sub('', text).strip()
    if not any(ch.isalpha() for ch in stripped):
        return False
    return _to_case(stripped, case) == stripped


class TitleGrammar(ABC):
    """Grammar checker capability consumed by TitleRule."""

    @abstractmethod
    def check(self, title: str) -> RuleResult:
        """
        Lint a title.

        Raises:
            LintParseError: If the input cannot be parsed at all
        """


class ConventionalCommitLinter(TitleGrammar):
    """
    Conventional-commit header linter.

    Rules are applied in a fixed order so error output is stable:
    header-max-length, header-trim, scope-case, subject-case,
    subject-empty, subject-full-stop, type-case, type-empty, type-enum.
    """

    def __init__(
        self,
        types: Sequence[str] = DEFAULT_TYPES,
        header_max_length: int = HEADER_MAX_LENGTH,
        ignores: Sequence["re.Pattern[str]"] = DEFAULT_IGNORES,
    ):
        self.types = tuple(types)
        self.header_max_length = header_max_length
        self.ignores = tuple(ignores)
        self.header_pattern = re.compile(r'^(\w*)(?:\((.*)\))?!?: (.*)$')

    def is_ignored(self, message: str) -> bool:
        return any(pattern.search(message) for pattern in self.ignores)

    def check(self, title: str) -> RuleResult:
        if not isinstance(title, str):
            raise LintParseError(f"Expected a string title, got {type(title).__name__}")
        if not title.strip():
            raise LintParseError("Cannot lint an empty title")

        if self.is_ignored(title):
            logger.debug(f"Title matches a default ignore pattern: {title!r}")
            return RuleResult.passed()

        header = title.split('\n', 1)[0]
        match = self.header_pattern.match(header)
        type_: Optional[str] = match.group(1) if match else None
        scope: Optional[str] = match.group(2) if match else None
        subject: Optional[str] = match.group(3) if match else None

        errors: List[LintError] = []

        def fail(message: str) -> None:
            errors.append(LintError(message=message))

        if len(header) > self.header_max_length:
            fail(
                f"header must not be longer than {self.header_max_length} characters, "
                f"current length is {len(header)}"
            )

        if header != header.strip():
            fail("header must not be surrounded by whitespace")

        if scope and not is_case(scope, 'lower-case') and any(ch.isalpha() for ch in scope):
            fail("scope must be lower-case")

        # Only subjects that start with a letter have a case
        if subject and re.match(r'[A-Za-z]', subject) and any(
            is_case(subject, case) for case in FORBIDDEN_SUBJECT_CASES
        ):
            fail(f"subject must not be {', '.join(FORBIDDEN_SUBJECT_CASES)}")

        if not subject:
            fail("subject may not be empty")

        if subject and subject.endswith('.') and not subject.endswith('...'):
            fail("subject may not end with full stop")

        if type_ and not is_case(type_, 'lower-case') and any(ch.isalpha() for ch in type_):
            fail("type must be lower-case")

        if not type_:
            fail("type may not be empty")

        if type_ and type_ not in self.types:
            fail(f"type must be one of [{', '.join(self.types)}]")

        return RuleResult.from_errors(errors)


class TitleRule:
    """
    Title policy.

    Disabled means valid without touching the grammar checker. A checker
    that cannot parse the title yields a single lint error instead of
    aborting the run.
    """

    def __init__(self, grammar: Optional[TitleGrammar] = None):
        self.grammar = grammar or ConventionalCommitLinter()

    def evaluate(self, title: str, enabled: bool) -> RuleResult:
        if not enabled:
            return RuleResult.passed()

        try:
            result = self.grammar.check(title)
        except LintParseError as e:
            logger.warning(f"Title could not be parsed: {e}")
            return RuleResult(valid=False, errors=(LintError(message=str(e)),))

        logger.debug(f"Title lint produced {len(result.errors)} error(s)")
        return result
