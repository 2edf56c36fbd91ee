"""
Configuration Management

정책 설정 및 실행 환경 설정 관리
"""

import os
import re
import yaml
from dataclasses import dataclass, field, fields
from typing import Optional, Dict, Any, Mapping, Tuple
from pathlib import Path
import logging

from .errors import ConfigurationError


TRUE_VALUES = ('true', 'True', 'TRUE')
FALSE_VALUES = ('false', 'False', 'FALSE')

# option name -> (dataclass field, kind)
RULE_OPTIONS: Dict[str, Tuple[str, str]] = {
    'repo-token': ('repo_token', 'str'),
    'body-regex': ('body_regex', 'str'),
    'body-ignore-authors': ('body_ignore_authors', 'list'),
    'body-auto-close': ('body_auto_close', 'bool'),
    'body-comment': ('body_comment', 'str'),
    'protected-branch': ('protected_branch', 'str'),
    'protected-branch-auto-close': ('protected_branch_auto_close', 'bool'),
    'protected-branch-comment': ('protected_branch_comment', 'str'),
    'title-check-enable': ('title_check_enable', 'bool'),
    'title-comment': ('title_comment', 'str'),
    'watch-files': ('watch_files', 'list'),
    'watch-files-comment': ('watch_files_comment', 'str'),
}


def _input_env_name(name: str) -> str:
    return f"INPUT_{name.replace(' ', '_').upper()}"


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConfigurationError(
        f'Input does not meet YAML 1.2 "Core Schema" specification: {name}\n'
        f"Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    )


def _parse_list(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        items = [str(item).strip() for item in value]
    else:
        items = [line.strip() for line in str(value).split('\n')]
    return tuple(item for item in items if item)


@dataclass(frozen=True)
class RuleConfig:
    """PR 정책 설정 (실행 중 불변)"""
    repo_token: str = ""
    body_regex: str = ""
    body_ignore_authors: Tuple[str, ...] = ()
    body_auto_close: bool = False
    body_comment: str = ""
    protected_branch: str = ""
    protected_branch_auto_close: bool = False
    protected_branch_comment: str = ""
    title_check_enable: bool = False
    title_comment: str = ""
    watch_files: Tuple[str, ...] = ()
    watch_files_comment: str = ""

    def __post_init__(self):
        """리스트 입력을 튜플로 정규화"""
        for name in ('body_ignore_authors', 'watch_files'):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, _parse_list(value))

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "RuleConfig":
        """옵션 이름(예: 'body-regex')을 키로 하는 매핑에서 설정 로드"""
        unknown = sorted(set(options) - set(RULE_OPTIONS))
        if unknown:
            raise ConfigurationError(f"Unknown configuration options: {', '.join(unknown)}")

        values: Dict[str, Any] = {}
        for name, raw in options.items():
            attr, kind = RULE_OPTIONS[name]
            if raw is None:
                continue
            if kind == 'bool':
                values[attr] = _parse_bool(name, raw)
            elif kind == 'list':
                values[attr] = _parse_list(raw)
            else:
                values[attr] = str(raw)
        return cls(**values)

    @classmethod
    def from_action_inputs(cls, environ: Optional[Mapping[str, str]] = None) -> "RuleConfig":
        """GitHub Actions 입력(INPUT_* 환경 변수)에서 설정 로드"""
        environ = os.environ if environ is None else environ
        options: Dict[str, Any] = {}
        for name in RULE_OPTIONS:
            value = environ.get(_input_env_name(name), '').strip()
            # Unset inputs keep their defaults
            if value == '':
                continue
            options[name] = value
        return cls.from_mapping(options)

    @classmethod
    def from_yaml(cls, config_path: str) -> "RuleConfig":
        """YAML 정책 파일에서 설정 로드"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {config_path}")

        return cls.from_mapping(config_data)

    def merged_with(self, **overrides: Any) -> "RuleConfig":
        """일부 값을 덮어쓴 새 설정 반환"""
        current = {f.name: getattr(self, f.name) for f in fields(self)}
        current.update({k: v for k, v in overrides.items() if v is not None})
        return RuleConfig(**current)

    def validate(self, require_token: bool = True) -> None:
        """설정 유효성 검사"""
        errors = []

        if require_token and not self.repo_token:
            errors.append("Input required and not supplied: repo-token")

        if self.body_regex:
            try:
                re.compile(self.body_regex)
            except re.error as e:
                errors.append(f"Invalid body-regex {self.body_regex!r}: {e}")

        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        result = {}
        for name, (attr, kind) in RULE_OPTIONS.items():
            # 보안상 토큰은 제외
            if name == 'repo-token':
                continue
            value = getattr(self, attr)
            result[name] = list(value) if kind == 'list' else value
        return result


@dataclass
class GitHubConfig:
    """GitHub API 및 Actions 런타임 설정"""
    api_base_url: str = "https://api.github.com"
    timeout_seconds: int = 30
    repository: Optional[str] = None
    event_path: Optional[str] = None
    output_path: Optional[str] = None


@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class AppConfig:
    """실행 환경 설정"""
    github: GitHubConfig = field(default_factory=GitHubConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """환경 변수에서 설정 로드"""
        environ = os.environ if environ is None else environ
        try:
            timeout = int(environ.get("GITHUB_TIMEOUT", "30"))
            max_file_size = int(environ.get("LOG_MAX_SIZE", str(10 * 1024 * 1024)))
            backup_count = int(environ.get("LOG_BACKUP_COUNT", "5"))
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric setting: {e}") from e

        return cls(
            github=GitHubConfig(
                api_base_url=environ.get("GITHUB_API_URL", "https://api.github.com"),
                timeout_seconds=timeout,
                repository=environ.get("GITHUB_REPOSITORY") or None,
                event_path=environ.get("GITHUB_EVENT_PATH") or None,
                output_path=environ.get("GITHUB_OUTPUT") or None,
            ),
            logging=LoggingConfig(
                level=environ.get("LOG_LEVEL", "INFO"),
                format=environ.get("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
                file_path=environ.get("LOG_FILE") or None,
                max_file_size=max_file_size,
                backup_count=backup_count,
            ),
        )

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = []

        if self.github.timeout_seconds <= 0:
            errors.append("GitHub timeout must be positive")

        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")


def configure_logging(config: LoggingConfig) -> None:
    """로깅 설정"""
    logging.basicConfig(
        level=getattr(logging, config.level.upper()),
        format=config.format,
    )

    # 파일 로깅이 설정된 경우 로테이션 설정
    if config.file_path:
        from logging.handlers import RotatingFileHandler

        handler = RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
        )
        handler.setFormatter(logging.Formatter(config.format))

        # 루트 로거에 핸들러 추가
        logging.getLogger().addHandler(handler)
