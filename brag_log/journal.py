"""Journal commands: add an entry, polish a day, summarize a month, list logs.

Each command reads a document, edits it section by section and writes it
back. Every path built from a user-supplied date goes through the path gate
before the file system is touched.
"""

import logging
from pathlib import Path

import yaml
from anthropic import Anthropic

from .config import Config
from .dates import current_time, daily_log_date, get_month_logs, today
from .errors import BragError, StorageError
from .generate import generate_content
from .markdown import (
    append_to_section,
    extract_section,
    find_section,
    replace_section,
    split_front_matter,
    strip_code_fence,
)
from .prompts import POLISH_SECTIONS, create_polish_prompt, create_summary_prompt
from .results import AddResult, LogInfo, PolishResult, SummaryResult
from .safe_io import atomic_write, copy_template, read_text
from .sanitize import sanitize_prompt_input
from .security import (
    validate_date_format,
    validate_path_within_base,
    validate_year_month_format,
)

logger = logging.getLogger(__name__)

WORK_JOURNAL = "Work Journal"

# Placed between daily logs in the month summary prompt
LOG_SEPARATOR = "\n\n---\n\n"

SUMMARY_TAGS = ("monthly-summary", "journal")


def daily_log_path(config: Config, log_date: str) -> Path:
    """Resolved path of the daily log for log_date, checked against logs_dir."""
    return validate_path_within_base(config.logs_dir / f"{log_date}.md", config.logs_dir)


def summary_path(config: Config, year_month: str) -> Path:
    """Resolved path of the summary for year_month, checked against summaries_dir."""
    return validate_path_within_base(
        config.summaries_dir / f"{year_month}-summary.md", config.summaries_dir
    )


def format_entry(text: str, timestamp: str | None = None) -> str:
    """Sanitize text and format it as a single-line journal bullet."""
    safe = " ".join(sanitize_prompt_input(text).split())
    if timestamp:
        return f"- [{timestamp}] {safe}"
    return f"- {safe}"


def add_entry(text: str, config: Config, *, timestamp: bool = False) -> AddResult:
    """Append an entry to today's Work Journal, creating the log if needed.

    Entries are sanitized on the way in because they are later sent to the
    model by polish_log() and summarize_month().

    Args:
        text: Entry text as typed by the user.
        config: Resolved configuration.
        timestamp: Prefix the entry with the current HH:MM.

    Returns:
        AddResult describing what was written.

    Raises:
        BragError: If text is empty.
        SectionNotFoundError: If the log has no Work Journal section.
        StorageError: If the log can't be created, read or written.
    """
    if not text or not text.strip():
        raise BragError("Entry text cannot be empty")

    log_date = today()
    path = daily_log_path(config, log_date)

    created = False
    if not path.exists():
        copy_template(config.daily_template, path)
        created = True
        logger.info("Created new log file: %s", path.name)

    document = read_text(path)
    entry = format_entry(text, current_time() if timestamp else None)
    atomic_write(path, append_to_section(document, WORK_JOURNAL, entry))

    return AddResult(path=path, date=log_date, entry=entry, created=created)


def merge_polished_sections(document: str, polished: str) -> tuple[str, tuple[str, ...]]:
    """Fold the category sections of a polish response into a document.

    For each category present with content in both, the section becomes its
    existing content followed by the polished content.

    A code fence wrapping the whole response is removed first.

    Returns:
        (updated document, names of the sections that were merged)
    """
    polished = strip_code_fence(polished)
    merged: list[str] = []
    for name in POLISH_SECTIONS:
        incoming = find_section(polished, name)
        if incoming is None or not incoming.content.strip():
            continue
        current = find_section(document, name)
        if current is None:
            logger.warning("Log has no '## %s' section, skipping its polished content", name)
            continue

        parts = [p for p in (current.content.strip(), incoming.content.strip()) if p]
        document = replace_section(document, name, "\n" + "\n".join(parts) + "\n")
        merged.append(name)

    return document, tuple(merged)


def polish_log(
    config: Config,
    log_date: str | None = None,
    *,
    client: Anthropic | None = None,
    dry_run: bool = False,
) -> PolishResult:
    """Rewrite a day's raw Work Journal into categorized bullet points.

    Args:
        config: Resolved configuration.
        log_date: YYYY-MM-DD to polish (defaults to today).
        client: Sync Anthropic client (created from config if None).
        dry_run: Return the polished text without writing the log.

    Returns:
        PolishResult. The Work Journal is only cleared once at least one
        category section was merged.

    Raises:
        InvalidFormatError: If log_date is malformed.
        ConfigError: If no client is given and the API key is missing.
        StorageError: If the log doesn't exist or can't be read/written.
        SectionNotFoundError: If the log has no Work Journal section.
        GenerationError: If the model call fails.
    """
    log_date = validate_date_format(log_date) if log_date else today()
    api_key = config.require_api_key() if client is None else None
    path = daily_log_path(config, log_date)

    if not path.exists():
        raise StorageError(
            f"Log file not found for {log_date}: {path} (create one with: brag add)"
        )

    document = read_text(path)
    journal = extract_section(document, WORK_JOURNAL)
    if not journal.strip():
        logger.info("Work Journal section is empty. Nothing to polish.")
        return PolishResult(path=path, date=log_date, skipped=True)

    prompt = create_polish_prompt(sanitize_prompt_input(journal))
    logger.info("Polishing %s with AI, this may take a moment...", path.name)
    polished = generate_content(
        prompt, client, model=config.model, max_tokens=config.max_tokens, api_key=api_key,
    )

    if dry_run:
        return PolishResult(path=path, date=log_date, polished=polished)

    updated, merged = merge_polished_sections(document, polished)
    if not merged:
        logger.warning(
            "Response contained no recognizable sections; %s left unchanged", path.name
        )
        return PolishResult(path=path, date=log_date, polished=polished)

    updated = replace_section(updated, WORK_JOURNAL, "")
    atomic_write(path, updated)
    return PolishResult(
        path=path, date=log_date, polished=polished,
        updated_sections=merged, written=True,
    )


def render_summary(year_month: str, log_files: list[Path], summary: str) -> str:
    """Prefix a generated summary with its YAML front matter."""
    front_matter = yaml.safe_dump(
        {
            "tags": list(SUMMARY_TAGS),
            "month": year_month,
            "source_logs": [p.name for p in log_files],
        },
        sort_keys=False,
        allow_unicode=True,
    )
    return f"---\n{front_matter}---\n\n{summary}\n"


def summarize_month(
    year_month: str,
    config: Config,
    *,
    client: Anthropic | None = None,
) -> SummaryResult:
    """Synthesize a month of daily logs into a summary file.

    Logs are read one after another. Each log's front matter is dropped and
    its body sanitized on its own before the bodies are joined.

    Args:
        year_month: Month in YYYY-MM format.
        config: Resolved configuration.
        client: Sync Anthropic client (created from config if None).

    Returns:
        SummaryResult with the written summary path.

    Raises:
        InvalidFormatError: If year_month is malformed.
        ConfigError: If no client is given and the API key is missing.
        BragError: If the month has no logs.
        StorageError: If a log can't be read or the summary can't be written.
        GenerationError: If the model call fails.
    """
    year_month = validate_year_month_format(year_month)
    api_key = config.require_api_key() if client is None else None

    log_files = get_month_logs(year_month, config.logs_dir)
    if not log_files:
        raise BragError(
            f"No logs found for {year_month} (create some daily logs first with: brag add)"
        )
    logger.info("Found %d log(s) for %s", len(log_files), year_month)

    bodies = []
    for log_file in log_files:
        validate_path_within_base(log_file, config.logs_dir)
        _, body = split_front_matter(read_text(log_file))
        bodies.append(f"# {daily_log_date(log_file)}\n\n{sanitize_prompt_input(body).strip()}")

    prompt = create_summary_prompt(LOG_SEPARATOR.join(bodies))
    logger.info("Generating monthly summary with AI, this may take a moment...")
    summary = generate_content(
        prompt, client, model=config.model, max_tokens=config.max_tokens, api_key=api_key,
    )
    summary = strip_code_fence(summary)
    if not summary:
        logger.warning("Model returned an empty summary for %s", year_month)

    path = summary_path(config, year_month)
    atomic_write(path, render_summary(year_month, log_files, summary))

    return SummaryResult(
        path=path, year_month=year_month, log_count=len(log_files), summary=summary,
    )


def _count_entries(document: str) -> int:
    section = find_section(document, WORK_JOURNAL)
    if section is None:
        return 0
    return sum(1 for line in section.content.split("\n") if line.lstrip().startswith("- "))


def list_logs(config: Config, year_month: str | None = None) -> list[LogInfo]:
    """Return daily logs newest-first, optionally limited to one month.

    Raises:
        InvalidFormatError: If year_month is malformed.
        StorageError: If a log can't be read.
    """
    if year_month is not None:
        paths = get_month_logs(year_month, config.logs_dir)
    elif config.logs_dir.is_dir():
        paths = [p for p in config.logs_dir.glob("*.md") if daily_log_date(p)]
    else:
        paths = []

    logs = [
        LogInfo(date=daily_log_date(p) or "", path=p, entry_count=_count_entries(read_text(p)))
        for p in paths
    ]
    logs.sort(key=lambda info: info.date, reverse=True)
    return logs
