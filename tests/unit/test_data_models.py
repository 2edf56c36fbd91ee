"""
Unit tests for data models.
"""

import pytest

from pr_compliance.models.pull_request import PullRequestContext
from pr_compliance.models.results import (
    ActionPlan,
    ComplianceVerdict,
    Diagnostic,
    LintError,
    PlannedComment,
    RuleResult,
)


class TestPullRequestContext:
    """Unit tests for PullRequestContext."""

    def test_context_creation(self):
        context = PullRequestContext(
            author="octocat",
            title="feat: add login",
            body="TICKET-1",
            branch="feature/login",
            modified_files=["a.py", "b.py"],
            pull_request_number=12,
            repository="octo/app",
        )

        assert context.modified_files == ("a.py", "b.py")
        assert context.issue_number == 12
        assert context.owner == "octo"
        assert context.repo == "app"

    def test_context_is_immutable(self):
        context = PullRequestContext(author="a", title="t", body="", branch="b")
        with pytest.raises(AttributeError):
            context.title = "changed"

    def test_none_body_becomes_empty(self):
        context = PullRequestContext(author="a", title="t", body=None, branch="b")
        assert context.body == ""

    def test_validation(self):
        with pytest.raises(ValueError):
            PullRequestContext(author="a", title="t", body="", branch="b", pull_request_number=0)

        with pytest.raises(ValueError):
            PullRequestContext(author="a", title="t", body="", branch="b", repository="no-slash")

    def test_with_modified_files(self):
        context = PullRequestContext(author="a", title="t", body="", branch="b", pull_request_number=3)
        updated = context.with_modified_files(["x.txt"])

        assert updated.modified_files == ("x.txt",)
        assert updated.pull_request_number == 3
        assert context.modified_files == ()


class TestResultModels:
    """Unit tests for result and plan models."""

    def test_rule_result_from_errors(self):
        assert RuleResult.from_errors([]).valid
        result = RuleResult.from_errors([LintError("a"), LintError("b")])
        assert not result.valid
        assert result.messages == ["a", "b"]

    def test_verdict_compliance(self):
        assert ComplianceVerdict(body_ok=True, branch_ok=True, title_ok=True).compliant
        verdict = ComplianceVerdict(body_ok=True, branch_ok=True, title_ok=True, flagged_files={"x"})
        assert not verdict.compliant
        assert not verdict.watched_files_ok
        assert verdict.flagged_files_ordered == ("x",)

    def test_verdict_order_must_match_set(self):
        with pytest.raises(ValueError):
            ComplianceVerdict(
                body_ok=True, branch_ok=True, title_ok=True,
                flagged_files={"x"}, flagged_files_ordered=("y",),
            )

    def test_planned_comment_validation(self):
        with pytest.raises(ValueError):
            PlannedComment(target=1, text="  ")

    def test_diagnostic_validation(self):
        with pytest.raises(ValueError):
            Diagnostic(level="notice", message="hi")

    def test_action_plan_helpers(self):
        plan = ActionPlan(diagnostics=[Diagnostic("warning", "w"), Diagnostic("error", "e")])
        assert plan.is_empty
        assert plan.warnings() == ["w"]
        assert plan.errors() == ["e"]

        plan.should_close = True
        assert not plan.is_empty
