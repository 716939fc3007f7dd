"""Validate command implementation."""

from datapipe.config import load_client_config


def validate_command(args):
    """Validate a client config file."""
    try:
        load_client_config(args.config, env=args.env)
        print("Config is valid")
        return 0
    except Exception as e:
        print(f"Config validation failed: {e}")
        return 1
