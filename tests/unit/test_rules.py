"""
Unit tests for the compliance rules.

Covers body, branch, watched-file and title checks, including the
built-in conventional-commit linter.
"""

import pytest
from unittest.mock import Mock

from pr_compliance.errors import LintParseError
from pr_compliance.models.results import LintError, RuleResult
from pr_compliance.rules.body import BodyRule
from pr_compliance.rules.branch import BranchRule
from pr_compliance.rules.files import FileWatchRule
from pr_compliance.rules.title import (
    ConventionalCommitLinter,
    TitleGrammar,
    TitleRule,
    is_case,
    render_lint_errors,
)


class TestBodyRule:
    """Unit tests for BodyRule."""

    def setup_method(self):
        self.rule = BodyRule()

    def test_empty_pattern_disables_policy(self):
        """Scenario A: empty body and empty regex pass."""
        assert self.rule.evaluate("x", "", "", []) is True

    def test_non_matching_body_fails(self):
        """Scenario B: body without a ticket reference fails."""
        assert self.rule.evaluate("dev1", "no-ticket", r"^TICKET-\d+", []) is False

    def test_matching_body_passes(self):
        assert self.rule.evaluate("dev1", "TICKET-42 fixes the thing", r"^TICKET-\d+", []) is True

    def test_search_is_not_anchored(self):
        """Pattern may match anywhere unless it anchors itself."""
        assert self.rule.evaluate("dev1", "Closes TICKET-7", r"TICKET-\d+", []) is True
        assert self.rule.evaluate("dev1", "Closes TICKET-7", r"^TICKET-\d+", []) is False

    def test_ignored_author_bypasses_check(self):
        assert self.rule.evaluate("dependabot[bot]", "", r"^TICKET-\d+", ["dependabot[bot]"]) is True

    def test_author_match_is_exact(self):
        assert self.rule.evaluate("dependabot", "", r"^TICKET-\d+", ["dependabot[bot]"]) is False


class TestBranchRule:
    """Unit tests for BranchRule."""

    def setup_method(self):
        self.rule = BranchRule()

    def test_protected_branch_fails(self):
        assert self.rule.evaluate("main", "main") is False

    def test_other_branch_passes(self):
        assert self.rule.evaluate("feature/login", "main") is True

    def test_empty_protected_branch_disables_policy(self):
        assert self.rule.evaluate("main", "") is True

    def test_comparison_is_case_sensitive(self):
        assert self.rule.evaluate("Main", "main") is True


class TestFileWatchRule:
    """Unit tests for FileWatchRule."""

    def setup_method(self):
        self.rule = FileWatchRule()

    def test_intersection(self):
        """Scenario D: only b.txt is flagged."""
        assert self.rule.evaluate(["a.txt", "b.txt"], ["b.txt", "c.txt"]) == {"b.txt"}

    def test_empty_watch_list(self):
        assert self.rule.evaluate(["a.txt", "b.txt"], []) == frozenset()

    def test_no_globbing_or_normalization(self):
        assert self.rule.evaluate(["src/app.py", "./README.md"], ["src/*.py", "README.md"]) == frozenset()

    def test_flagged_in_order_keeps_api_order_without_duplicates(self):
        flagged = self.rule.flagged_in_order(
            ["z.lock", "a.txt", "package.json", "z.lock"],
            ["package.json", "z.lock"],
        )
        assert flagged == ["z.lock", "package.json"]


class TestConventionalCommitLinter:
    """Unit tests for the built-in title linter."""

    def setup_method(self):
        self.linter = ConventionalCommitLinter()

    @pytest.mark.parametrize("title", [
        "feat: add login page",
        "fix(api): handle empty payloads",
        "refactor!: drop python 3.8",
        "docs(readme): mention the dry-run flag",
        "chore(deps): bump requests to 2.32",
        "feat: 2fa login for admins",
        "fix: 404 page",
        "docs: `README` typo",
        "fix: handle \"Bad Request\" responses",
    ])
    def test_valid_titles(self, title):
        result = self.linter.check(title)
        assert result.valid
        assert result.errors == ()

    def test_missing_type_and_subject(self):
        result = self.linter.check("Add login page")
        assert not result.valid
        assert result.messages == ["subject may not be empty", "type may not be empty"]

    def test_unknown_type(self):
        result = self.linter.check("feature: add login page")
        assert result.messages == [
            "type must be one of [build, chore, ci, docs, feat, fix, perf, refactor, revert, style, test]"
        ]

    def test_type_must_be_lower_case(self):
        result = self.linter.check("Feat: add login page")
        assert "type must be lower-case" in result.messages

    def test_subject_case_and_full_stop_in_rule_order(self):
        result = self.linter.check("feat: Add login page.")
        assert result.messages == [
            "subject must not be sentence-case, start-case, pascal-case, upper-case",
            "subject may not end with full stop",
        ]

    def test_ellipsis_is_not_a_full_stop(self):
        assert self.linter.check("feat: add login page...").valid

    def test_scope_must_be_lower_case(self):
        assert self.linter.check("fix(API): handle empty payloads").messages == ["scope must be lower-case"]

    def test_header_max_length(self):
        title = "feat: " + "a" * 100
        result = self.linter.check(title)
        assert result.messages == [
            f"header must not be longer than 100 characters, current length is {len(title)}"
        ]

    def test_surrounding_whitespace(self):
        assert "header must not be surrounded by whitespace" in self.linter.check("feat: add login ").messages

    @pytest.mark.parametrize("title", [
        "Merge pull request #12 from org/feature",
        "Merge branch 'main' into feature",
        "Revert \"feat: add login page\"",
        "fixup! feat: add login page",
        "Auto-merged main into feature",
    ])
    def test_default_ignores(self, title):
        assert self.linter.check(title).valid

    def test_empty_title_cannot_be_parsed(self):
        with pytest.raises(LintParseError):
            self.linter.check("   ")

    def test_non_string_title_cannot_be_parsed(self):
        with pytest.raises(LintParseError):
            self.linter.check(None)

    def test_custom_types(self):
        linter = ConventionalCommitLinter(types=("feat", "hotfix"))
        assert linter.check("hotfix: patch the outage").valid
        assert not linter.check("fix: patch the outage").valid


class TestCaseDetection:
    """Unit tests for case helpers used by subject-case."""

    @pytest.mark.parametrize("text,case,expected", [
        ("Add login", "sentence-case", True),
        ("add login", "sentence-case", False),
        ("Add Login Page", "start-case", True),
        ("AddLoginPage", "pascal-case", True),
        ("ADD LOGIN", "upper-case", True),
        ("add login", "lower-case", True),
        ("123", "upper-case", False),
        ("fix \"Bad Request\" handling", "sentence-case", False),
        ("Fix `snake_case` names", "sentence-case", True),
        ("`README`", "upper-case", False),
    ])
    def test_is_case(self, text, case, expected):
        assert is_case(text, case) is expected


class TestTitleRule:
    """Unit tests for TitleRule."""

    def test_disabled_never_invokes_grammar(self):
        """Scenario E: disabled title check passes without linting."""
        grammar = Mock(spec=TitleGrammar)
        rule = TitleRule(grammar)

        result = rule.evaluate("this is not conventional", enabled=False)

        assert result.valid
        assert result.errors == ()
        grammar.check.assert_not_called()

    def test_delegates_to_grammar_and_preserves_order(self):
        errors = (LintError("first"), LintError("second"), LintError("third"))
        grammar = Mock(spec=TitleGrammar)
        grammar.check.return_value = RuleResult(valid=False, errors=errors)

        result = TitleRule(grammar).evaluate("bad title", enabled=True)

        grammar.check.assert_called_once_with("bad title")
        assert result.messages == ["first", "second", "third"]

    def test_parse_error_becomes_lint_error(self):
        grammar = Mock(spec=TitleGrammar)
        grammar.check.side_effect = LintParseError("unparseable header")

        result = TitleRule(grammar).evaluate("???", enabled=True)

        assert not result.valid
        assert result.messages == ["unparseable header"]

    def test_default_grammar_is_conventional_commit(self):
        rule = TitleRule()
        assert isinstance(rule.grammar, ConventionalCommitLinter)
        assert rule.evaluate("feat: add login page", enabled=True).valid
        assert not rule.evaluate("", enabled=True).valid


def test_render_lint_errors():
    rendered = render_lint_errors([LintError("type may not be empty"), LintError("subject may not be empty")])
    assert rendered == "\nLinting Errors\n\n\n- type may not be empty\n- subject may not be empty"
