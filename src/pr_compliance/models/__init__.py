"""
Data Models

PR 컴플라이언스 검사의 핵심 데이터 모델들
"""

from .pull_request import PullRequestContext
from .results import (
    LintError,
    RuleResult,
    ComplianceVerdict,
    PlannedComment,
    Diagnostic,
    ActionPlan,
)

__all__ = [
    "PullRequestContext",
    "LintError",
    "RuleResult",
    "ComplianceVerdict",
    "PlannedComment",
    "Diagnostic",
    "ActionPlan",
]
