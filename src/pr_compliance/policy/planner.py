"""
Action Planner

Turns a compliance verdict into comments, annotations, a close request
and the published outputs.
"""

import logging
from typing import Dict, Optional

from ..config import RuleConfig
from ..models.results import (
    ActionPlan,
    ComplianceVerdict,
    Diagnostic,
    PlannedComment,
    OUTPUT_BODY_CHECK,
    OUTPUT_BRANCH_CHECK,
    OUTPUT_TITLE_CHECK,
    OUTPUT_WATCHED_FILES_CHECK,
)
from ..rules.title import render_lint_errors


logger = logging.getLogger(__name__)


FILES_MATCHED_HEADER = '\nFiles Matched\n\n'

BODY_WARNING = "PR Body did not match required format"
BRANCH_WARNING = "PR has {branch} as its head branch, which is discouraged"
TITLE_ERROR = "This PR's title should conform to @commitlint/conventional-commit"
FILES_WARNING = "This PR modifies the following files: {files}"


def render_flagged_files(files) -> str:
    return FILES_MATCHED_HEADER + ''.join(f'\n- {name}' for name in files)


class ActionPlanner:
    """
    Single-pass planner.

    Every failing check is handled in the fixed order body, branch,
    title, watched files; one failure never hides another. A check whose
    comment text is empty still records its diagnostic.
    """

    def outputs(self, verdict: ComplianceVerdict) -> Dict[str, bool]:
        return {
            OUTPUT_BODY_CHECK: verdict.body_ok,
            OUTPUT_BRANCH_CHECK: verdict.branch_ok,
            OUTPUT_TITLE_CHECK: verdict.title_ok,
            OUTPUT_WATCHED_FILES_CHECK: verdict.watched_files_ok,
        }

    def plan(self, verdict: ComplianceVerdict, config: RuleConfig, target: Optional[int] = None) -> ActionPlan:
        """
        Derive the action plan.

        Args:
            verdict: Aggregated compliance verdict
            config: Policy configuration (comment texts)
            target: Issue number comments are posted to

        Returns:
            ActionPlan with comments, diagnostics, close flag and outputs
        """
        plan = ActionPlan(outputs=self.outputs(verdict))

        if verdict.compliant:
            logger.info("PR is compliant, nothing to do")
            return plan

        def queue(base: str, suffix: str = '') -> None:
            if base == '':
                return
            text = base + suffix
            # Blank comments are never posted
            if text.strip():
                plan.comments.append(PlannedComment(target=target, text=text))

        if not verdict.body_ok:
            queue(config.body_comment)
            plan.diagnostics.append(Diagnostic('warning', BODY_WARNING))

        if not verdict.branch_ok:
            queue(config.protected_branch_comment)
            plan.diagnostics.append(
                Diagnostic('warning', BRANCH_WARNING.format(branch=config.protected_branch))
            )

        if not verdict.title_ok:
            queue(config.title_comment, render_lint_errors(verdict.title_errors))
            plan.diagnostics.append(Diagnostic('error', TITLE_ERROR))

        if not verdict.watched_files_ok:
            queue(config.watch_files_comment, render_flagged_files(verdict.flagged_files_ordered))
            plan.diagnostics.append(
                Diagnostic('warning', FILES_WARNING.format(files=', '.join(verdict.flagged_files_ordered)))
            )

        plan.should_close = verdict.should_close

        logger.info(
            f"Planned {len(plan.comments)} comment(s), "
            f"{len(plan.diagnostics)} diagnostic(s), close={plan.should_close}"
        )
        return plan
