"""Command-line entry point for WorkMatch.

Commands:
    workmatch seed DATASET            Load workers and jobs from a YAML dataset
    workmatch match --job ID          Rank workers for a job
    workmatch match --worker ID       Rank active jobs for a worker
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from workmatch.config.environment import EnvironmentConfig
from workmatch.config.exceptions import ConfigurationError
from workmatch.config.loader import load_config
from workmatch.config.models import AppConfig
from workmatch.logging import get_logger
from workmatch.logging.config import configure_logging
from workmatch.matching.engine import CandidateRanker
from workmatch.matching.exceptions import MatchingError
from workmatch.matching.service import MatchingService
from workmatch.matching.utils import build_match_payload, format_match_report
from workmatch.persistence.database import close_database, init_database
from workmatch.persistence.exceptions import PersistenceError
from workmatch.persistence.seed import DatasetError, load_dataset, seed_database

logger = get_logger(__name__, component="cli")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_BAD_REQUEST = 2


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and settle the effective log level.

    Log level priority: CLI > environment > config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override.upper()
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workmatch",
        description="WorkMatch - rank domestic workers and job postings against each other",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="Database URL (overrides DATABASE_URL)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    seed_parser = subparsers.add_parser("seed", help="Load workers and jobs from a YAML dataset")
    seed_parser.add_argument("dataset", type=Path, help="Path to the dataset file")

    match_parser = subparsers.add_parser("match", help="Rank candidates for a job or a worker")
    target = match_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--job", dest="job_id", help="Rank workers for this job id")
    target.add_argument("--worker", dest="worker_id", help="Rank active jobs for this worker id")
    match_parser.add_argument(
        "--details",
        action="store_true",
        help="Include each candidate's profile in the JSON output",
    )
    match_parser.add_argument(
        "--format",
        dest="output_format",
        choices=["json", "text"],
        default="json",
        help="Output format (default: json)",
    )

    return parser


def run_seed(dataset_path: Path) -> int:
    dataset = load_dataset(dataset_path)
    summary = seed_database(dataset)
    print(json.dumps(summary.as_dict()))
    return EXIT_OK


def run_match(args: argparse.Namespace, app_config: AppConfig) -> int:
    ranker = CandidateRanker(
        min_score=app_config.matching.min_score,
        max_results=app_config.matching.max_results,
    )
    service = MatchingService(
        ranker=ranker,
        include_unavailable_workers=app_config.matching.include_unavailable_workers,
    )
    report = service.match(job_id=args.job_id, worker_id=args.worker_id)

    if args.output_format == "text":
        print(format_match_report(report))
    else:
        print(json.dumps(build_match_payload(report, include_details=args.details), indent=2))
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code: 0 on success, 1 on configuration, dataset, or database
        errors, 2 when the requested job or worker cannot be matched
    """
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )
    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    database_url = args.database_url or env_config.database_url
    logger.info(
        f"WorkMatch {args.command} starting",
        extra={"event": "cli.starting", "command": args.command},
    )

    try:
        init_database(database_url)
        if args.command == "seed":
            return run_seed(args.dataset)
        return run_match(args, app_config)
    except MatchingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BAD_REQUEST
    except DatasetError as e:
        print(f"Dataset Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except PersistenceError as e:
        logger.error(
            f"Database error: {e}",
            extra={"event": "cli.database_error", "error_type": type(e).__name__},
        )
        print(f"Database Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    finally:
        close_database()


if __name__ == "__main__":
    sys.exit(main())
