"""
Compliance Engine

Pure evaluation of a pull request against the configured policies:
the four rules, aggregation into a verdict, and the action plan.
No I/O happens here; side effects belong to the runner.
"""

import logging
from typing import Optional

from .config import RuleConfig
from .models.pull_request import PullRequestContext
from .models.results import ActionPlan, ComplianceVerdict
from .rules.body import BodyRule
from .rules.branch import BranchRule
from .rules.files import FileWatchRule
from .rules.title import TitleGrammar, TitleRule
from .policy.aggregator import PolicyAggregator
from .policy.planner import ActionPlanner


logger = logging.getLogger(__name__)


class ComplianceEngine:
    """
    Rule evaluation and decision engine.

    All four rules are evaluated on every call, whatever the outcome of
    the others, so a single pass reports every violation.
    """

    def __init__(self, title_grammar: Optional[TitleGrammar] = None):
        """
        Initialize the engine.

        Args:
            title_grammar: Title checker; defaults to the conventional-commit linter
        """
        self.body_rule = BodyRule()
        self.title_rule = TitleRule(title_grammar)
        self.branch_rule = BranchRule()
        self.file_watch_rule = FileWatchRule()
        self.aggregator = PolicyAggregator()
        self.planner = ActionPlanner()

    def evaluate(self, context: PullRequestContext, config: RuleConfig) -> ComplianceVerdict:
        """Run every rule and aggregate the results."""
        logger.info(f"Evaluating PR #{context.pull_request_number} by {context.author or '<unknown>'}")

        body_ok = self.body_rule.evaluate(
            context.author, context.body, config.body_regex, config.body_ignore_authors
        )
        title_result = self.title_rule.evaluate(context.title, config.title_check_enable)
        branch_ok = self.branch_rule.evaluate(context.branch, config.protected_branch)
        flagged = self.file_watch_rule.flagged_in_order(context.modified_files, config.watch_files)

        return self.aggregator.aggregate(
            body_ok=body_ok,
            title_ok=title_result.valid,
            branch_ok=branch_ok,
            flagged_files=flagged,
            config=config,
            title_errors=title_result.errors,
            flagged_order=flagged,
        )

    def plan(self, verdict: ComplianceVerdict, config: RuleConfig, target: Optional[int] = None) -> ActionPlan:
        return self.planner.plan(verdict, config, target)

    def check(self, context: PullRequestContext, config: RuleConfig) -> ActionPlan:
        """Evaluate and plan in one step."""
        verdict = self.evaluate(context, config)
        return self.plan(verdict, config, context.issue_number)
