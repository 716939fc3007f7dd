import os
import re
from typing import Any, Dict, Optional

import yaml

from datapipe.utils.logging import logger

# Pattern to match ${VAR} or ${env:VAR}
# Captures the variable name in group 1
ENV_PATTERN = re.compile(r"\$\{(?:env:)?([A-Za-z0-9_]+)\}")


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override dictionary into base dictionary.

    Dicts are merged recursively. Every other value, lists included, is
    replaced by the override.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            logger.debug(
                "Deep merging nested dictionary",
                key=key,
                base_keys=list(result[key].keys()),
                override_keys=list(value.keys()),
            )
            result[key] = _deep_merge(result[key], value)
        else:
            if key in result:
                logger.debug("Overwriting key during merge", key=key)
            result[key] = value
    return result


def load_yaml_with_env(path: str, env: Optional[str] = None) -> Dict[str, Any]:
    """Load YAML file with environment variable substitution and environment overrides.

    Supports:
    - ${VAR_NAME} and ${env:VAR_NAME} substitution
    - 'environments' overrides based on env param

    Args:
        path: Path to YAML file
        env: Environment name (e.g., 'prod', 'dev') to apply overrides

    Returns:
        Parsed dictionary with env overrides applied

    Raises:
        FileNotFoundError: If file does not exist
        ValueError: If environment variable is missing
        yaml.YAMLError: If YAML parsing fails
    """
    logger.debug("Loading YAML configuration", path=path, env=env)

    if not os.path.exists(path):
        logger.error("Configuration file not found", path=path)
        raise FileNotFoundError(f"YAML file not found: {path}")

    abs_path = os.path.abspath(path)

    with open(abs_path, "r", encoding="utf-8") as f:
        content = f.read()

    env_vars_found = []

    def replace_env(match):
        var_name = match.group(1)
        env_vars_found.append(var_name)
        value = os.environ.get(var_name)
        if value is None:
            logger.error(
                "Missing required environment variable",
                variable=var_name,
                file=abs_path,
            )
            raise ValueError(f"Missing environment variable: {var_name}")
        logger.debug("Environment variable substituted", variable=var_name, length=len(value))
        return value

    substituted_content = ENV_PATTERN.sub(replace_env, content)

    if env_vars_found:
        logger.debug(
            "Environment variable substitution complete",
            variables_substituted=env_vars_found,
            count=len(env_vars_found),
        )

    try:
        data = yaml.safe_load(substituted_content) or {}
    except yaml.YAMLError as e:
        logger.error("YAML parsing failed", path=abs_path, error=str(e))
        raise

    environments = data.pop("environments", {}) or {}
    if env:
        if env in environments:
            logger.debug(
                "Applying environment overrides",
                env=env,
                override_keys=list(environments[env].keys()),
            )
            data = _deep_merge(data, environments[env])
        else:
            logger.debug(
                "No environment override found",
                env=env,
                available_environments=list(environments.keys()),
            )

    logger.debug(
        "Configuration loading complete",
        path=path,
        env=env,
        final_keys=list(data.keys()),
    )

    return data
