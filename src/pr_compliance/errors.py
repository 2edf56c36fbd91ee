"""
Error Types

컴플라이언스 검사 실행 중 발생하는 오류 계층
"""


class ComplianceError(Exception):
    """Base class for all compliance checker errors."""


class ConfigurationError(ComplianceError):
    """Required input is missing or a configured value is invalid."""


class PlatformAPIError(ComplianceError):
    """A call to the hosting platform (list files, comment, close) failed."""


class LintParseError(ComplianceError):
    """The title grammar checker could not parse its input at all."""
