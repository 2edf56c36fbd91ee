"""
PR Compliance Checker entry point.

Runs as a GitHub Actions step with no arguments (inputs come from
INPUT_* variables and the event payload from GITHUB_EVENT_PATH), or
locally against a YAML policy file and an event file or PR number.
"""

import os
import sys
import json
import logging
import argparse
from dataclasses import asdict
from typing import List, Mapping, Optional

from .config import AppConfig, RuleConfig, configure_logging
from .errors import ComplianceError, ConfigurationError
from .github.actions import ActionsReporter
from .github.client import GitHubClient
from .github.event import event_from_pull_request, load_event
from .github.platform import GitHubPlatform
from .models.pull_request import PullRequestContext
from .runner import ComplianceRunner, RunResult, RunStage


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pr-compliance",
        description="Check a pull request against body, title, branch and watched-file policies.",
    )
    parser.add_argument("--config", help="YAML policy file (defaults to Actions inputs)")
    parser.add_argument("--event", help="Pull request event payload JSON (defaults to GITHUB_EVENT_PATH)")
    parser.add_argument("--repository", help="owner/repo (defaults to GITHUB_REPOSITORY)")
    parser.add_argument("--pr", type=int, help="Fetch this pull request from the API instead of reading an event")
    parser.add_argument("--files", nargs="*", help="Use these modified files instead of listing them from the API")
    parser.add_argument("--dry-run", action="store_true", help="Print the action plan without commenting or closing")
    parser.add_argument("--log-level", help="Override LOG_LEVEL")
    return parser


def _load_rule_config(args: argparse.Namespace, environ: Mapping[str, str]) -> RuleConfig:
    if not args.config:
        return RuleConfig.from_action_inputs(environ)

    config = RuleConfig.from_yaml(args.config)
    if not config.repo_token:
        token = environ.get("INPUT_REPO-TOKEN") or environ.get("GITHUB_TOKEN")
        config = config.merged_with(repo_token=token)
    return config


def _load_context(
    args: argparse.Namespace,
    app: AppConfig,
    client: Optional[GitHubClient],
) -> PullRequestContext:
    repository = args.repository or app.github.repository

    if args.pr is not None:
        if client is None or not repository or "/" not in repository:
            raise ConfigurationError("--pr requires a repo-token and a repository")
        owner, repo = repository.split('/', 1)
        event = event_from_pull_request(client.get_pull_request(owner, repo, args.pr))
    else:
        event_path = args.event or app.github.event_path
        if not event_path:
            raise ConfigurationError("No event payload: set GITHUB_EVENT_PATH or pass --event")
        event = load_event(event_path)

    context = event.to_context(repository)
    if args.files is not None:
        context = context.with_modified_files(args.files)
    return context


def execute(args: argparse.Namespace, environ: Mapping[str, str], reporter: Optional[ActionsReporter] = None) -> RunResult:
    """Load configuration, build the context and run one compliance pass."""
    reporter = reporter or ActionsReporter(environ.get("GITHUB_OUTPUT") or None)

    try:
        app = AppConfig.from_env(environ)
        if args.log_level:
            app.logging.level = args.log_level
        app.validate()
        configure_logging(app.logging)

        config = _load_rule_config(args, environ)
        offline = args.dry_run and args.files is not None and args.pr is None
        config.validate(require_token=not offline)

        client = None
        if config.repo_token:
            client = GitHubClient(config.repo_token, app.github.api_base_url, app.github.timeout_seconds)

        context = _load_context(args, app, client)
    except ConfigurationError as e:
        reporter.set_failed(str(e))
        return RunResult.configuration_failed(e)
    except ComplianceError as e:
        # Fetching the pull request itself failed
        reporter.set_failed(str(e))
        return RunResult(stage=RunStage.EVALUATION, error=e)
    except Exception as e:
        logger.error(f"Unexpected error while preparing the run: {e!r}")
        reporter.set_failed(str(e) or type(e).__name__)
        return RunResult(stage=RunStage.CONFIGURATION, error=e)

    platform = None
    if client is not None and context.repository:
        platform = GitHubPlatform(client, context.repository)

    runner = ComplianceRunner(config, platform, reporter, dry_run=args.dry_run)
    return runner.run(context, fetch_files=args.files is None)


def main(argv: Optional[List[str]] = None, environ: Optional[Mapping[str, str]] = None) -> int:
    args = build_parser().parse_args(argv)
    environ = os.environ if environ is None else environ

    result = execute(args, environ)

    if args.dry_run and result.plan is not None:
        print(json.dumps(asdict(result.plan), indent=2))

    return 0 if result.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
