"""
Pull Request Context Model

검사 대상 Pull Request 메타데이터
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple


@dataclass(frozen=True)
class PullRequestContext:
    """한 번의 평가에 사용되는 Pull Request 정보"""
    author: str
    title: str
    body: str
    branch: str
    modified_files: Tuple[str, ...] = field(default_factory=tuple)
    pull_request_number: Optional[int] = None
    issue_number: Optional[int] = None
    repository: Optional[str] = None

    def __post_init__(self):
        """데이터 검증"""
        # Accept any iterable of paths but store an immutable tuple
        if not isinstance(self.modified_files, tuple):
            object.__setattr__(self, "modified_files", tuple(self.modified_files))
        if self.body is None:
            object.__setattr__(self, "body", "")
        if self.pull_request_number is not None and self.pull_request_number <= 0:
            raise ValueError("PR number must be positive")
        if self.issue_number is None:
            object.__setattr__(self, "issue_number", self.pull_request_number)
        if self.repository is not None and '/' not in self.repository:
            raise ValueError("Repository must be in format 'owner/repo'")

    @property
    def owner(self) -> Optional[str]:
        """저장소 소유자"""
        return self.repository.split('/', 1)[0] if self.repository else None

    @property
    def repo(self) -> Optional[str]:
        """저장소 이름"""
        return self.repository.split('/', 1)[1] if self.repository else None

    def with_modified_files(self, files: Iterable[str]) -> "PullRequestContext":
        """변경 파일 목록을 채운 새 컨텍스트 반환"""
        return PullRequestContext(
            author=self.author,
            title=self.title,
            body=self.body,
            branch=self.branch,
            modified_files=tuple(files),
            pull_request_number=self.pull_request_number,
            issue_number=self.issue_number,
            repository=self.repository,
        )
