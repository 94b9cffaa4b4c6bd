"""
Process configuration read from environment variables.

Entry points call ``load_dotenv()`` first, so a local ``.env`` file works the
same as real environment variables.  Values are opaque to the report core:
they are coerced to the right type here and never validated further.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

DEFAULT_ALLOWED_ORIGINS = (
    "http://localhost:3001",
    "https://ai-stock-prediction-scrimba.netlify.app",
)

_TRUTHY = {"1", "true", "yes", "on"}


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in _TRUTHY


def _csv(value: Optional[str], default: tuple[str, ...]) -> tuple[str, ...]:
    if not value:
        return default
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    polygon_api_key: str = ""
    polygon_base_url: str = "https://api.polygon.io"
    price_provider: str = "polygon"
    bedrock_model_id: str = "anthropic.claude-3-haiku-20240307-v1:0"
    aws_region: str = "us-east-1"
    analysis_max_tokens: int = 200
    analysis_temperature: float = 0.0
    http_timeout_seconds: float = 10.0
    allowed_origins: tuple[str, ...] = field(default=DEFAULT_ALLOWED_ORIGINS)
    langfuse_enabled: bool = False
    secret_arn: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            polygon_api_key=env.get("POLYGON_API_KEY", defaults.polygon_api_key),
            polygon_base_url=env.get("POLYGON_BASE_URL", defaults.polygon_base_url).rstrip("/"),
            price_provider=env.get("PRICE_PROVIDER", defaults.price_provider).strip().lower(),
            bedrock_model_id=env.get("BEDROCK_MODEL_ID", defaults.bedrock_model_id),
            aws_region=env.get("AWS_DEFAULT_REGION", defaults.aws_region),
            analysis_max_tokens=int(env.get("ANALYSIS_MAX_TOKENS", defaults.analysis_max_tokens)),
            analysis_temperature=float(
                env.get("ANALYSIS_TEMPERATURE", defaults.analysis_temperature)
            ),
            http_timeout_seconds=float(
                env.get("HTTP_TIMEOUT_SECONDS", defaults.http_timeout_seconds)
            ),
            allowed_origins=_csv(env.get("ALLOWED_ORIGINS"), DEFAULT_ALLOWED_ORIGINS),
            langfuse_enabled=_flag(env.get("LANGFUSE_ENABLED")),
            secret_arn=env.get("STOCK_REPORT_SECRET_ARN") or None,
            log_level=env.get("LOG_LEVEL", defaults.log_level).upper(),
        )
