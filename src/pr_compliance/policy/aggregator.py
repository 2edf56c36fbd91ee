"""
Policy Aggregator

Combines individual rule results into a compliance verdict.
"""

import logging
from typing import Iterable, Optional, Sequence

from ..config import RuleConfig
from ..models.results import ComplianceVerdict, LintError


logger = logging.getLogger(__name__)


class PolicyAggregator:
    """
    Pure combination of the four rule outcomes.

    Only body and branch failures can request auto-close; title and
    watched-file failures never do.
    """

    def aggregate(
        self,
        body_ok: bool,
        title_ok: bool,
        branch_ok: bool,
        flagged_files: Iterable[str],
        config: RuleConfig,
        title_errors: Sequence[LintError] = (),
        flagged_order: Optional[Sequence[str]] = None,
    ) -> ComplianceVerdict:
        """
        Build the verdict.

        Args:
            body_ok: BodyRule outcome
            title_ok: TitleRule outcome
            branch_ok: BranchRule outcome
            flagged_files: Watched files touched by the PR
            config: Policy configuration (auto-close switches)
            title_errors: Lint errors kept for the title comment
            flagged_order: Flagged files in API order, for rendering

        Returns:
            ComplianceVerdict with should_close decided
        """
        flagged = frozenset(flagged_files)
        should_close = (
            (not body_ok and config.body_auto_close)
            or (not branch_ok and config.protected_branch_auto_close)
        )

        verdict = ComplianceVerdict(
            body_ok=body_ok,
            branch_ok=branch_ok,
            title_ok=title_ok,
            flagged_files=flagged,
            title_errors=tuple(title_errors),
            should_close=should_close,
            flagged_files_ordered=tuple(flagged_order) if flagged_order is not None else (),
        )

        logger.info(
            f"Verdict: compliant={verdict.compliant} body={body_ok} branch={branch_ok} "
            f"title={title_ok} flagged={len(flagged)} close={should_close}"
        )
        return verdict
