"""
Evaluation Result Models

규칙 평가 결과, 컴플라이언스 판정, 실행 계획 모델
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple


OUTPUT_BODY_CHECK = "body-check"
OUTPUT_BRANCH_CHECK = "branch-check"
OUTPUT_TITLE_CHECK = "title-check"
OUTPUT_WATCHED_FILES_CHECK = "watched-files-check"

OUTPUT_NAMES = (
    OUTPUT_BODY_CHECK,
    OUTPUT_BRANCH_CHECK,
    OUTPUT_TITLE_CHECK,
    OUTPUT_WATCHED_FILES_CHECK,
)


@dataclass(frozen=True)
class LintError:
    """제목 린트 오류 한 건"""
    message: str


@dataclass(frozen=True)
class RuleResult:
    """개별 규칙 평가 결과"""
    valid: bool
    errors: Tuple[LintError, ...] = ()

    def __post_init__(self):
        """데이터 검증"""
        if not isinstance(self.errors, tuple):
            object.__setattr__(self, "errors", tuple(self.errors))

    @classmethod
    def passed(cls) -> "RuleResult":
        return cls(valid=True)

    @classmethod
    def from_errors(cls, errors: List[LintError]) -> "RuleResult":
        """오류 목록으로부터 결과 생성 (오류가 없으면 통과)"""
        return cls(valid=not errors, errors=tuple(errors))

    @property
    def messages(self) -> List[str]:
        return [error.message for error in self.errors]


@dataclass(frozen=True)
class ComplianceVerdict:
    """네 가지 규칙 결과를 종합한 판정"""
    body_ok: bool
    branch_ok: bool
    title_ok: bool
    flagged_files: FrozenSet[str] = frozenset()
    title_errors: Tuple[LintError, ...] = ()
    should_close: bool = False
    # API order of flagged files, used only for rendering
    flagged_files_ordered: Tuple[str, ...] = ()

    def __post_init__(self):
        """데이터 검증"""
        if not isinstance(self.flagged_files, frozenset):
            object.__setattr__(self, "flagged_files", frozenset(self.flagged_files))
        if not self.flagged_files_ordered and self.flagged_files:
            object.__setattr__(self, "flagged_files_ordered", tuple(sorted(self.flagged_files)))
        if set(self.flagged_files_ordered) != set(self.flagged_files):
            raise ValueError("flagged_files_ordered must contain exactly the flagged files")

    @property
    def watched_files_ok(self) -> bool:
        return not self.flagged_files

    @property
    def compliant(self) -> bool:
        return self.body_ok and self.title_ok and self.branch_ok and self.watched_files_ok


@dataclass(frozen=True)
class PlannedComment:
    """게시 예정 코멘트"""
    target: Optional[int]
    text: str

    def __post_init__(self):
        """데이터 검증"""
        if not self.text.strip():
            raise ValueError("Comment text cannot be empty")


@dataclass(frozen=True)
class Diagnostic:
    """워크플로 어노테이션으로 보고되는 진단 메시지"""
    level: str  # 'warning', 'error'
    message: str

    def __post_init__(self):
        """데이터 검증"""
        valid_levels = {'warning', 'error'}
        if self.level not in valid_levels:
            raise ValueError(f"Invalid diagnostic level: {self.level}")


@dataclass
class ActionPlan:
    """판정으로부터 도출된 실행 계획"""
    comments: List[PlannedComment] = field(default_factory=list)
    should_close: bool = False
    outputs: Dict[str, bool] = field(default_factory=dict)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """수행할 부수 효과가 없는지 여부"""
        return not self.comments and not self.should_close

    def warnings(self) -> List[str]:
        return [d.message for d in self.diagnostics if d.level == 'warning']

    def errors(self) -> List[str]:
        return [d.message for d in self.diagnostics if d.level == 'error']
