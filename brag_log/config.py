"""Environment configuration for the brag log."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigError
from .generate import DEFAULT_MAX_TOKENS, DEFAULT_MODEL

# Templates shipped with the package
PACKAGE_TEMPLATES_DIR = Path(__file__).parent / "templates"

DAILY_TEMPLATE_NAME = "daily_log.md"


def expand_env_path(value: str) -> Path:
    """Expand ``~`` and ``$HOME``-style variables in a configured path."""
    return Path(os.path.expandvars(value)).expanduser()


@dataclass(frozen=True)
class Config:
    """Resolved settings for one CLI invocation.

    Built from environment variables by load_config(); .env files are
    loaded by the CLI before that happens.
    """

    logs_dir: Path = Path("logs")
    summaries_dir: Path = Path("summaries")
    templates_dir: Path = PACKAGE_TEMPLATES_DIR
    api_key: str = ""
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS

    def __post_init__(self) -> None:
        """Validate configuration."""
        errors = []

        if not str(self.logs_dir).strip():
            errors.append("logs_dir cannot be empty")
        if not str(self.summaries_dir).strip():
            errors.append("summaries_dir cannot be empty")
        if not self.model:
            errors.append("model cannot be empty")
        if self.max_tokens < 256:
            errors.append(f"max_tokens must be >= 256, got {self.max_tokens}")

        if errors:
            raise ValueError(f"Invalid Config: {'; '.join(errors)}")

    @property
    def daily_template(self) -> Path:
        return self.templates_dir / DAILY_TEMPLATE_NAME

    def require_api_key(self) -> str:
        """Return the API key, or fail with setup guidance.

        Raises:
            ConfigError: If ANTHROPIC_API_KEY is not set.
        """
        if not self.api_key:
            raise ConfigError(
                "ANTHROPIC_API_KEY is not set. Add it to your environment "
                "or to a .env file in the current directory."
            )
        return self.api_key


def load_config(environ: Mapping[str, str] | None = None) -> Config:
    """Build a Config from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ).

    Raises:
        ConfigError: If a variable holds an invalid value.
    """
    env = os.environ if environ is None else environ

    kwargs: dict[str, object] = {"api_key": env.get("ANTHROPIC_API_KEY", "")}
    if env.get("LOGS_DIR"):
        kwargs["logs_dir"] = expand_env_path(env["LOGS_DIR"])
    if env.get("SUMMARIES_DIR"):
        kwargs["summaries_dir"] = expand_env_path(env["SUMMARIES_DIR"])
    if env.get("BRAG_TEMPLATES_DIR"):
        kwargs["templates_dir"] = expand_env_path(env["BRAG_TEMPLATES_DIR"])
    if env.get("BRAG_MODEL"):
        kwargs["model"] = env["BRAG_MODEL"]
    if env.get("BRAG_MAX_TOKENS"):
        try:
            kwargs["max_tokens"] = int(env["BRAG_MAX_TOKENS"])
        except ValueError as e:
            raise ConfigError(
                f"BRAG_MAX_TOKENS must be an integer, got {env['BRAG_MAX_TOKENS']!r}"
            ) from e

    try:
        return Config(**kwargs)
    except ValueError as e:
        raise ConfigError(str(e)) from e
