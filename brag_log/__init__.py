"""Brag log: keep a daily work journal and let Claude polish and summarize it."""

__version__ = "0.1.0"

from .config import Config, load_config
from .errors import (
    BragError,
    ConfigError,
    GenerationError,
    InvalidFormatError,
    PathTraversalError,
    SectionNotFoundError,
    StorageError,
)
from .journal import add_entry, list_logs, polish_log, summarize_month
from .markdown import (
    Section,
    append_to_section,
    extract_section,
    find_section,
    replace_section,
)
from .prompts import PromptKind, build_prompt
from .results import AddResult, LogInfo, PolishResult, SummaryResult
from .sanitize import sanitize_prompt_input

__all__ = [
    "AddResult",
    "BragError",
    "Config",
    "ConfigError",
    "GenerationError",
    "InvalidFormatError",
    "LogInfo",
    "PathTraversalError",
    "PolishResult",
    "PromptKind",
    "Section",
    "SectionNotFoundError",
    "StorageError",
    "SummaryResult",
    "add_entry",
    "append_to_section",
    "build_prompt",
    "extract_section",
    "find_section",
    "list_logs",
    "load_config",
    "polish_log",
    "replace_section",
    "sanitize_prompt_input",
    "summarize_month",
]
