"""Main CLI entry point."""

import argparse
import sys

from datapipe.cli.query import describe_command, query_command
from datapipe.cli.validate import validate_command
from datapipe.config import Sphere


def _add_connection_args(parser: argparse.ArgumentParser):
    parser.add_argument("--config", help="Path to YAML client config file")
    parser.add_argument("--env", help="Environment override to apply from the config")
    parser.add_argument("--backend", help="Backend name (overrides config)")
    parser.add_argument("--region", help="Service region (overrides config)")
    parser.add_argument("--endpoint", help="Endpoint URL (overrides config)")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Data Pipeline object query client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  datapipe query df-0123 --sphere INSTANCE                 All instance ids
  datapipe query df-0123 --sphere INSTANCE --page --limit 10
  datapipe query df-0123 --sphere ATTEMPT --selector "@status:EQ:FAILED"
  datapipe describe df-0123 @DefaultSchedule Ec2Instance   Object definitions
  datapipe validate datapipe.yaml                          Validate configuration
        """,
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging verbosity (default: from config, else INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # datapipe query
    query_parser = subparsers.add_parser("query", help="Query pipeline object ids")
    query_parser.add_argument("pipeline_id", help="Pipeline ID")
    query_parser.add_argument(
        "--sphere",
        required=True,
        choices=[s.value for s in Sphere],
        help="Entity category to query",
    )
    query_parser.add_argument("--limit", type=int, help="Page size")
    query_parser.add_argument("--marker", help="Cursor to start from")
    query_parser.add_argument(
        "--selector",
        action="append",
        default=[],
        help="FIELD:OPERATOR:V1,V2 (repeatable)",
    )
    query_parser.add_argument(
        "--max-pages", type=int, help="Fail if more pages than this would be needed"
    )
    query_parser.add_argument(
        "--page", action="store_true", help="Return only one page (with its marker)"
    )
    _add_connection_args(query_parser)

    # datapipe describe
    describe_parser = subparsers.add_parser("describe", help="Describe pipeline objects")
    describe_parser.add_argument("pipeline_id", help="Pipeline ID")
    describe_parser.add_argument("object_ids", nargs="+", help="Object ids (up to 25)")
    describe_parser.add_argument(
        "--evaluate-expressions",
        action="store_true",
        help="Evaluate expressions in the returned fields",
    )
    _add_connection_args(describe_parser)

    # datapipe validate
    validate_parser = subparsers.add_parser("validate", help="Validate config")
    validate_parser.add_argument("config", help="Path to YAML config file")
    validate_parser.add_argument("--env", help="Environment override to apply")

    args = parser.parse_args()

    if args.command == "query":
        return query_command(args)
    elif args.command == "describe":
        return describe_command(args)
    elif args.command == "validate":
        return validate_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
