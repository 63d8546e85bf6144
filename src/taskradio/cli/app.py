"""
CLI Application - Main entry point for the command-line interface.
"""

import argparse
import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path

from taskradio.adapters.config.environment import EnvironmentConfigProvider
from taskradio.adapters.git.context import GitCliContext
from taskradio.adapters.github.auth import fetch_session_token, resolve_github_auth
from taskradio.adapters.github.client import GitHubApiClient
from taskradio.adapters.shell import ShellRunner, shx
from taskradio.application.radio import ChannelProvider, RadioPullOrchestrator, RadioPushOrchestrator
from taskradio.core.domain.enums import Channel, IdempotencyMode, TaskStatus
from taskradio.core.domain.value_objects import RepoRef
from taskradio.core.ports.config_provider import GitHubAuth, GitHubConfig

from .exit_codes import ExitCode
from .logging import setup_logging
from .output import Console


def _repo_arg(value: str) -> RepoRef:
    try:
        return RepoRef.from_slug(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _status_arg(value: str) -> TaskStatus:
    try:
        return TaskStatus.from_string(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _channel_arg(value: str) -> Channel:
    try:
        return Channel.from_string(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _idem_arg(value: str) -> IdempotencyMode:
    try:
        return IdempotencyMode.from_string(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--via",
        type=_channel_arg,
        required=True,
        metavar="CHANNEL",
        help="Channel to use: gh.issues or os.fileops",
    )
    parser.add_argument(
        "--repo",
        type=_repo_arg,
        metavar="OWNER/NAME",
        help="Target repository (default: inferred from the git remote)",
    )
    parser.add_argument(
        "--auth",
        metavar="METHOD",
        help="gh.issues credential: as-robot:env(VAR), as-robot:shx(cmd), or as-human",
    )


def create_parser() -> argparse.ArgumentParser:
    """
    Create the command-line argument parser for taskradio.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="taskradio",
        description="Broadcast tasks to GitHub issues or the local radio directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Broadcast a new task on GitHub
  taskradio push --via gh.issues --repo acme/api --title "Fix login" --description "..."

  # Claim it from the current branch
  taskradio push --via gh.issues --exid 42 --status CLAIMED

  # Deliver it
  taskradio push --via gh.issues --exid 42 --status DELIVERED

  # List queued tasks in the local radio
  taskradio pull --via os.fileops --all --status QUEUED

  # Fetch one task (cached into the local radio)
  taskradio pull --via gh.issues --exid 42 --auth "as-robot:env(GH_TOKEN)"
        """,
    )

    parser.add_argument("--root", type=Path, help="Radio root directory (default: ~/git/.radio)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only print errors")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument(
        "--output",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default="text",
        help="Log format (default: text)",
    )
    parser.add_argument("--log-file", help="Also write logs to this file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # push
    push = subparsers.add_parser("push", help="Create or update a task")
    _add_common_arguments(push)
    push.add_argument("--exid", help="Existing task to update (omit to create)")
    push.add_argument("--title", help="Task title")
    push.add_argument("--description", help="Task description")
    push.add_argument(
        "--description-file",
        type=Path,
        help="Read the task description from a file",
    )
    push.add_argument(
        "--status",
        type=_status_arg,
        metavar="STATUS",
        help="Move the task to CLAIMED or DELIVERED",
    )
    push.add_argument(
        "--idem",
        type=_idem_arg,
        default=IdempotencyMode.FINDSERT,
        metavar="MODE",
        help="findsert (default) or upsert when the title already exists",
    )

    # pull
    pull = subparsers.add_parser("pull", help="List or fetch tasks")
    _add_common_arguments(pull)
    target = pull.add_mutually_exclusive_group(required=True)
    target.add_argument("--all", action="store_true", help="List tasks")
    target.add_argument("--exid", help="Fetch one task by id")
    target.add_argument("--title", help="Fetch one task by exact title")
    pull.add_argument("--status", type=_status_arg, metavar="STATUS", help="Filter --all by status")
    pull.add_argument("--limit", type=int, help="Maximum tasks for --all (default: 100)")

    return parser


def run_push(console: Console, args: argparse.Namespace, push: RadioPushOrchestrator) -> int:
    description = args.description
    if args.description_file:
        description = args.description_file.read_text(encoding="utf-8")

    result = push.push(
        via=args.via,
        repo=args.repo,
        exid=args.exid,
        title=args.title,
        description=description,
        status=args.status,
        idem=args.idem,
    )
    console.push_result(result)
    return ExitCode.SUCCESS


def run_pull(console: Console, args: argparse.Namespace, pull: RadioPullOrchestrator) -> int:
    if args.all:
        tasks = pull.pull_all(via=args.via, repo=args.repo, status=args.status, limit=args.limit)
        console.task_list(tasks)
        return ExitCode.SUCCESS

    result = pull.pull_one(via=args.via, repo=args.repo, exid=args.exid, title=args.title)
    console.pull_result(result)
    return ExitCode.SUCCESS


def connect_github(
    auth_arg: str | None,
    env: Mapping[str, str],
    config: GitHubConfig,
    shx: ShellRunner = shx,
) -> tuple[GitHubAuth, GitHubApiClient]:
    """
    Resolve the credential and build the one API client a run shares.

    For as-human the gh session token is fetched up front, so the actor
    lookup sees the same GitHub login the channel writes with.

    Raises:
        CredentialError: If no token can be resolved
    """
    auth = resolve_github_auth(auth_arg, env, shx=shx)
    token = auth.token if auth.token is not None else fetch_session_token(shx)
    client = GitHubApiClient(token=token, base_url=config.base_url, timeout=config.timeout)
    return auth, client


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_format=args.log_format,
        log_file=args.log_file,
        static_fields={"service": "taskradio"} if args.log_format == "json" else None,
    )

    console = Console(
        color=not args.no_color,
        verbose=args.verbose,
        quiet=args.quiet,
        json_mode=args.output == "json",
    )

    config_provider = EnvironmentConfigProvider(cli_overrides={"root": args.root})
    errors = config_provider.validate()
    if errors:
        console.config_errors(errors)
        return ExitCode.CONFIG_ERROR
    config = config_provider.load()

    github_client = None
    try:
        auth = None
        if args.via is Channel.GH_ISSUES:
            auth, github_client = connect_github(args.auth, os.environ, config.github)

        cwd = Path.cwd()
        git = GitCliContext(cwd=cwd, github_client=github_client)
        channels = ChannelProvider(
            root=config.root, auth=auth, github=config.github, client=github_client
        )

        if args.command == "push":
            return run_push(
                console, args, RadioPushOrchestrator(channels, git, cwd=cwd, root=config.root)
            )
        return run_pull(
            console, args, RadioPullOrchestrator(channels, git, cwd=cwd, root=config.root)
        )

    except KeyboardInterrupt:
        console.print()
        console.warning("Interrupted by user")
        return ExitCode.SIGINT

    except Exception as e:
        console.error_rich(e)
        if args.verbose:
            import traceback

            console.print()
            traceback.print_exc()
        return ExitCode.from_exception(e)

    finally:
        if github_client is not None:
            github_client.close()


def run() -> None:
    """
    Entry point for the console script.

    Calls main() and exits with its return code.
    """
    sys.exit(main())


if __name__ == "__main__":
    run()
