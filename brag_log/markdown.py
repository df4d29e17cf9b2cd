"""Section-addressed editing of daily log Markdown files.

A document is handled as a flat list of lines. A section starts at a
``## <name>`` heading line and runs until the next ``##`` heading or the end
of the document. Everything outside the targeted section (front matter,
other sections, comments) is passed through untouched.
"""

import re
from dataclasses import dataclass

from .errors import SectionNotFoundError

# Any level-2 heading; used to find where a section ends
_ANY_HEADING_RE = re.compile(r"^##\s")

FRONT_MATTER_FENCE = "---"

# Opening line of a fenced code block, with an optional info string
_FENCE_OPEN_RE = re.compile(r"^```[\w+.-]*[ \t]*$")


@dataclass(frozen=True)
class Section:
    """A located section of a document.

    Attributes:
        name: Section name as looked up (without the ``##`` prefix).
        start_line: Index of the heading line.
        end_line: Index of the next heading, or the document's line count.
        content: Lines between the heading and end_line, joined by newline.
    """
    name: str
    start_line: int
    end_line: int
    content: str


def _heading_pattern(section_name: str) -> re.Pattern[str]:
    return re.compile(rf"^##\s+{re.escape(section_name.strip())}\s*$")


def find_section(document: str, section_name: str) -> Section | None:
    """Locate a section by its heading name.

    The first matching heading wins if a name appears more than once.

    Returns:
        The Section, or None if no heading matches.
    """
    lines = document.split("\n")
    pattern = _heading_pattern(section_name)

    start_line = next(
        (i for i, line in enumerate(lines) if pattern.match(line)), None
    )
    if start_line is None:
        return None

    end_line = len(lines)
    for i in range(start_line + 1, len(lines)):
        if _ANY_HEADING_RE.match(lines[i]):
            end_line = i
            break

    return Section(
        name=section_name,
        start_line=start_line,
        end_line=end_line,
        content="\n".join(lines[start_line + 1:end_line]),
    )


def _require_section(document: str, section_name: str) -> Section:
    section = find_section(document, section_name)
    if section is None:
        raise SectionNotFoundError(section_name)
    return section


def extract_section(document: str, section_name: str) -> str:
    """Return a section's content, excluding its heading line.

    Raises:
        SectionNotFoundError: If the section does not exist.
    """
    return _require_section(document, section_name).content


def append_to_section(document: str, section_name: str, new_content: str) -> str:
    """Insert new_content at the end of a section.

    The new content lands right before the next heading (or at the end of
    the document). A blank separator line is added first unless the section
    is empty.

    Raises:
        SectionNotFoundError: If the section does not exist.
    """
    section = _require_section(document, section_name)
    lines = document.split("\n")

    separator = "\n" if section.content.strip() else ""
    lines.insert(section.end_line, separator + new_content)

    return "\n".join(lines)


def replace_section(document: str, section_name: str, new_content: str) -> str:
    """Replace everything between a section's heading and the next heading.

    The heading line itself is kept, even when new_content is empty.

    Raises:
        SectionNotFoundError: If the section does not exist.
    """
    section = _require_section(document, section_name)
    lines = document.split("\n")

    lines[section.start_line + 1:section.end_line] = new_content.split("\n")

    return "\n".join(lines)


def split_front_matter(document: str) -> tuple[str, str]:
    """Split a leading ``---`` fenced block off a document.

    The block is returned verbatim and never interpreted.

    Returns:
        (front_matter, body) where front_matter + body == document.
        front_matter is empty when the document has no closed block.
    """
    lines = document.split("\n")
    if not lines or lines[0].rstrip() != FRONT_MATTER_FENCE:
        return ("", document)

    for i in range(1, len(lines)):
        if lines[i].rstrip() == FRONT_MATTER_FENCE:
            front = "\n".join(lines[:i + 1])
            rest = lines[i + 1:]
            if not rest:
                return (front, "")
            return (front + "\n", "\n".join(rest))

    return ("", document)


def strip_code_fence(text: str) -> str:
    """Unwrap text whose first and last lines are a single code fence.

    Model responses sometimes arrive as ```` ```markdown ... ``` ````. Only a
    fence around the whole text is removed; fences inside it are kept.
    """
    lines = text.strip().split("\n")
    if len(lines) >= 2 and _FENCE_OPEN_RE.match(lines[0]) and lines[-1].strip() == "```":
        return "\n".join(lines[1:-1])
    return text
