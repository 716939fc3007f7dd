"""Query and describe command implementations."""

import json

from datapipe.client import create_client
from datapipe.config import (
    ClientConfig,
    Operator,
    Query,
    QueryOptions,
    Selector,
    load_client_config,
)
from datapipe.exceptions import DataPipeException
from datapipe.utils.logging import configure_logging


def parse_selector(text: str) -> Selector:
    """Parse ``FIELD:OPERATOR:V1,V2`` into a Selector.

    Values may contain colons; only the first two separate the parts.
    """
    parts = text.split(":", 2)
    if len(parts) != 3 or not parts[0]:
        raise ValueError(f"Selector must look like FIELD:OPERATOR:VALUES, got '{text}'")
    field_name, operator_type, values = parts
    return Selector(
        field_name=field_name,
        operator=Operator(
            type=operator_type.upper(), values=[v for v in values.split(",") if v]
        ),
    )


def _load_config(args) -> ClientConfig:
    config = load_client_config(args.config, env=args.env) if args.config else ClientConfig()

    overrides = {}
    if args.backend:
        overrides["backend"] = args.backend
    if args.region:
        overrides["region"] = args.region
    if args.endpoint:
        overrides["endpoint"] = args.endpoint
    if overrides:
        config = ClientConfig(**{**config.model_dump(), **overrides})

    level = args.log_level or config.logging.level.value
    configure_logging(config.logging.structured, level)
    return config


def query_command(args):
    """Query pipeline objects and print the ids (or the single page) as JSON."""
    try:
        config = _load_config(args)
        options = QueryOptions(
            limit=args.limit,
            marker=args.marker,
            query=Query(selectors=[parse_selector(s) for s in args.selector])
            if args.selector
            else None,
        )

        client = create_client(config)
        try:
            if args.page:
                result = client.query_objects(args.pipeline_id, args.sphere, options)
            else:
                result = client.query_all_objects(
                    args.pipeline_id, args.sphere, options, max_pages=args.max_pages
                )
        finally:
            client.close()
    except (DataPipeException, ValueError, OSError) as e:
        print(f"Query failed: {e}")
        return 1

    print(json.dumps(result, indent=2))
    return 0


def describe_command(args):
    """Describe pipeline objects and print the response as JSON."""
    try:
        config = _load_config(args)
        options = {}
        if args.evaluate_expressions:
            options["evaluateExpressions"] = True

        client = create_client(config)
        try:
            result = client.describe_objects(args.pipeline_id, args.object_ids, options)
        finally:
            client.close()
    except (DataPipeException, ValueError, OSError) as e:
        print(f"Describe failed: {e}")
        return 1

    print(json.dumps(result, indent=2))
    return 0
