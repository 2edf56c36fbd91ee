"""
Compliance Run

Executes one compliance pass: evaluation, side effects, outputs.

Each stage reports its own failure through RunResult, so callers can
tell a configuration problem apart from a failed API call during
evaluation or while acting on the plan. The first fatal error stops the
run; nothing is retried and no outputs are published afterwards.
Unexpected exceptions are reported the same way as ComplianceError,
attributed to the stage that raised them.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import RuleConfig
from .engine import ComplianceEngine
from .errors import ComplianceError, ConfigurationError
from .github.actions import ActionsReporter
from .github.platform import Platform
from .models.pull_request import PullRequestContext
from .models.results import ActionPlan, ComplianceVerdict


logger = logging.getLogger(__name__)


class RunStage(str, Enum):
    CONFIGURATION = "configuration"
    EVALUATION = "evaluation"
    ACTIONS = "actions"
    COMPLETED = "completed"


@dataclass
class RunResult:
    """Outcome of a run: the stage reached and, on failure, the error."""
    stage: RunStage
    verdict: Optional[ComplianceVerdict] = None
    plan: Optional[ActionPlan] = None
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.stage == RunStage.COMPLETED and self.error is None

    @property
    def failure_message(self) -> Optional[str]:
        return str(self.error) if self.error else None

    @classmethod
    def configuration_failed(cls, error: ConfigurationError) -> "RunResult":
        return cls(stage=RunStage.CONFIGURATION, error=error)


class ComplianceRunner:
    """
    Drives a single evaluation pass against a platform.

    Configuration and the platform handle are passed in explicitly; the
    runner keeps no state between runs.
    """

    def __init__(
        self,
        config: RuleConfig,
        platform: Optional[Platform],
        reporter: ActionsReporter,
        engine: Optional[ComplianceEngine] = None,
        dry_run: bool = False,
    ):
        """
        Initialize the runner.

        Args:
            config: Validated policy configuration
            platform: Side-effect capabilities (may be None for dry runs with known files)
            reporter: Actions adapter for annotations and outputs
            engine: Evaluation engine
            dry_run: Plan only; post nothing and close nothing
        """
        self.config = config
        self.platform = platform
        self.reporter = reporter
        self.engine = engine or ComplianceEngine()
        self.dry_run = dry_run

    def run(self, context: PullRequestContext, fetch_files: bool = True) -> RunResult:
        """
        Evaluate the pull request and act on the result.

        Args:
            context: Pull request under evaluation
            fetch_files: List changed files through the platform first

        Returns:
            RunResult describing how far the run got
        """
        # Evaluation
        try:
            if fetch_files:
                context = self._with_changed_files(context)
            verdict = self.engine.evaluate(context, self.config)
            plan = self.engine.plan(verdict, self.config, context.issue_number)
        except Exception as e:
            return self._fail(RunStage.EVALUATION, e)

        # Side effects
        try:
            self._report_diagnostics(plan)
            if not self.dry_run:
                self._execute(plan, context)
            self.reporter.set_outputs(plan.outputs)
        except Exception as e:
            return self._fail(RunStage.ACTIONS, e, verdict, plan)

        logger.info(f"Compliance run completed (compliant={verdict.compliant})")
        return RunResult(stage=RunStage.COMPLETED, verdict=verdict, plan=plan)

    def _with_changed_files(self, context: PullRequestContext) -> PullRequestContext:
        if self.platform is None:
            raise ConfigurationError("No platform available to list changed files")
        files = self.platform.list_changed_files(context.pull_request_number)
        return context.with_modified_files(files)

    def _report_diagnostics(self, plan: ActionPlan) -> None:
        for diagnostic in plan.diagnostics:
            if diagnostic.level == 'error':
                self.reporter.error(diagnostic.message)
            else:
                self.reporter.warning(diagnostic.message)

    def _execute(self, plan: ActionPlan, context: PullRequestContext) -> None:
        if plan.is_empty:
            return
        if self.platform is None:
            raise ConfigurationError("No platform available to act on the plan")

        for comment in plan.comments:
            self.platform.post_comment(comment.target, comment.text)

        if plan.should_close:
            self.platform.close_pull_request(context.pull_request_number)

    def _fail(
        self,
        stage: RunStage,
        error: Exception,
        verdict: Optional[ComplianceVerdict] = None,
        plan: Optional[ActionPlan] = None,
    ) -> RunResult:
        if isinstance(error, ComplianceError):
            logger.info(f"Compliance run stopped during {stage.value}")
        else:
            logger.error(f"Unexpected error during {stage.value}: {error!r}")
        self.reporter.set_failed(str(error) or type(error).__name__)
        return RunResult(stage=stage, verdict=verdict, plan=plan, error=error)
