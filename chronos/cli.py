"""
Chronos CLI.

Usage:
    python -m chronos [--url URL] [--timeout S] [--log-level LEVEL] [--log-dir DIR] <command>

Commands print JSON to stdout. Settings not given on the command line come
from CHRONOS_* environment variables (a .env file is loaded first).
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import Any, List, Optional

from dotenv import load_dotenv

from chronos.client import Client, SCHEDULER_STAT_METRICS
from chronos.config import Config
from chronos.errors import ChronosError
from chronos.infra.logging_config import setup_logging
from chronos.schemas import Job

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chronos", description="Chronos scheduler client")
    parser.add_argument("--url", type=str, default=None, help="Cluster URL, e.g. http://h1:4400,h2:4400")
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Log level (default: WARNING)")
    parser.add_argument("--log-dir", type=str, default=None, help="Also write daily log files into this directory")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("jobs", help="List all jobs")
    subparsers.add_parser("cluster", help="Show cluster member status")

    for name, help_text in (
        ("show", "Show one job"),
        ("run", "Trigger a manual run of a job"),
        ("kill", "Kill the running tasks of a job"),
        ("delete", "Delete a job"),
        ("stat", "Show run statistics of a job"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("name", type=str, help="Job name")

    for name, help_text in (
        ("create", "Create a job from a JSON file"),
        ("update", "Update a job from a JSON file"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("file", type=str, help="Path to job JSON ('-' for stdin)")

    stats_parser = subparsers.add_parser("stats", help="Scheduler-wide run-time metric")
    stats_parser.add_argument("metric", choices=SCHEDULER_STAT_METRICS)

    return parser


def _load_job(path: str) -> Job:
    if path == "-":
        data = json.load(sys.stdin)
    else:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    return Job.model_validate(data)


def _print(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def run_command(client: Client, args: argparse.Namespace) -> Any:
    """Execute one parsed command and return its JSON-able result."""
    command = args.command

    if command == "jobs":
        return [job.to_payload() for job in client.jobs()]
    if command == "cluster":
        return client.cluster.status()
    if command == "show":
        return client.job(args.name).to_payload()
    if command == "run":
        client.run_job(args.name)
        return {"job": args.name, "action": "run"}
    if command == "kill":
        client.kill_job(args.name)
        return {"job": args.name, "action": "kill"}
    if command == "delete":
        client.delete_job(args.name)
        return {"job": args.name, "action": "delete"}
    if command == "stat":
        return client.job_stat(args.name).model_dump(by_alias=True)
    if command == "stats":
        return client.scheduler_stats(args.metric)
    if command in ("create", "update"):
        job = _load_job(args.file)
        job.sanity_check()
        if command == "create":
            client.create_job(job)
        else:
            client.update_job(job)
        return {"job": job.name, "action": command}

    raise ValueError(f"unknown command: {command}")


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    setup_logging(args.log_level, log_dir=args.log_dir)

    try:
        config = Config.from_env()
        if args.url:
            config = replace(config, url=args.url)
        if args.timeout is not None:
            config = replace(config, request_timeout=args.timeout)

        with Client(config) as client:
            result = run_command(client, args)
    except ChronosError as e:
        logger.error(f"[CLI] {args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except (OSError, ValueError) as e:
        # unreadable job file or malformed JSON
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    _print(result)
    return EXIT_SUCCESS
