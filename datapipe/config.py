"""Configuration and request models for the datapipe client."""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from datapipe.exceptions import ConfigValidationError
from datapipe.utils.config_loader import load_yaml_with_env


class Sphere(str, Enum):
    """Category of pipeline entity a query applies to."""

    COMPONENT = "COMPONENT"
    INSTANCE = "INSTANCE"
    ATTEMPT = "ATTEMPT"


class OperatorType(str, Enum):
    """Comparison operators accepted in a query selector."""

    EQ = "EQ"
    REF_EQ = "REF_EQ"
    LE = "LE"
    GE = "GE"
    BETWEEN = "BETWEEN"


class BackendType(str, Enum):
    """Built-in backends."""

    HTTP = "http"
    MOCK = "mock"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# ============================================
# Query Models
# ============================================


class Operator(BaseModel):
    """Comparison applied to a selector field."""

    model_config = {"extra": "forbid"}

    type: OperatorType
    values: List[str] = Field(default_factory=list)


class Selector(BaseModel):
    """
    A single field/operator/values filter condition.

    Accepts both the wire spelling and the Python one:
    ```yaml
    selectors:
      - fieldName: "@status"
        operator: {type: EQ, values: ["FAILED"]}
      - field_name: "@scheduledStartTime"
        operator: {type: GE, values: ["2024-01-01T00:00:00"]}
    ```
    """

    model_config = {"populate_by_name": True, "extra": "forbid"}

    field_name: str = Field(alias="fieldName")
    operator: Operator


class Query(BaseModel):
    """Ordered list of selectors; all must match."""

    model_config = {"extra": "forbid"}

    selectors: List[Selector] = Field(default_factory=list)


class QueryOptions(BaseModel):
    """Options recognized by the query operation.

    `limit` is the page size (the service defaults to 100 when it is
    omitted), `marker` is the cursor to start from and `query` narrows the
    result with selectors.
    """

    model_config = {"extra": "forbid"}

    limit: Optional[int] = Field(default=None, ge=1)
    marker: Optional[str] = None
    query: Optional[Query] = None

    def to_wire(self) -> Dict[str, Any]:
        """Serialize to the service's request keys, dropping unset options."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def coerce(cls, options: Union["QueryOptions", Dict[str, Any], None]) -> "QueryOptions":
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.model_validate(options)


# ============================================
# Client Configuration
# ============================================


class LoggingConfig(BaseModel):
    """
    Logging configuration.

    Example:
    ```yaml
    logging:
      level: "INFO"
      structured: true
    ```
    """

    level: LogLevel = LogLevel.INFO
    structured: bool = Field(default=False, description="Output JSON logs")


class ClientConfig(BaseModel):
    """
    Client configuration.

    Example:
    ```yaml
    backend: http
    region: eu-west-1
    timeout_s: 30
    max_pages: 500
    headers:
      Authorization: "${DATAPIPE_TOKEN}"
    logging:
      level: DEBUG
    environments:
      test:
        backend: mock
    ```
    """

    backend: str = Field(default=BackendType.HTTP.value, description="Registered backend name")
    region: str = Field(default="us-east-1", description="Service region")
    endpoint: Optional[str] = Field(
        default=None, description="Override the regional endpoint URL"
    )
    timeout_s: float = Field(default=30.0, gt=0, description="Per-request transport timeout")
    max_pages: Optional[int] = Field(
        default=None,
        ge=1,
        description="Upper bound on pages per aggregated query (unbounded when unset)",
    )
    headers: Dict[str, str] = Field(
        default_factory=dict, description="Extra headers sent with every request"
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("backend", mode="before")
    @classmethod
    def _backend_name(cls, value: Any) -> Any:
        if isinstance(value, BackendType):
            return value.value
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def endpoint_url(self) -> str:
        if self.endpoint:
            return self.endpoint
        return f"https://datapipeline.{self.region}.amazonaws.com/"


def load_client_config(path: str, env: Optional[str] = None) -> ClientConfig:
    """Load and validate a client configuration file.

    Raises:
        ConfigValidationError: If the file content does not validate
    """
    data = load_yaml_with_env(path, env=env)
    try:
        return ClientConfig(**data)
    except ValidationError as e:
        raise ConfigValidationError(str(e), file=path) from e
