"""
PR Compliance Checker

Pull Request 본문, 제목, 브랜치, 감시 파일 정책 검사기
"""

__version__ = "1.0.0"

from .config import RuleConfig
from .engine import ComplianceEngine
from .runner import ComplianceRunner, RunResult, RunStage

__all__ = ["RuleConfig", "ComplianceEngine", "ComplianceRunner", "RunResult", "RunStage"]
