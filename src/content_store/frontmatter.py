"""YAML frontmatter parsing for Markdown content items.

Recognised fields:
    title: Article title (defaults to the first H1, then the file name)
    labels: List of labels applied to the article
    modified: Local modification timestamp overriding the file mtime

Unknown fields are kept in ``meta`` for filters and hooks.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict

import yaml

from .errors import FrontmatterError

# Matches YAML frontmatter between --- delimiters at the start of a file
FRONTMATTER_PATTERN = re.compile(
    r'^---\s*\n(.*?)\n---\s*\n',
    re.DOTALL
)

# Maximum allowed depth for YAML structures
MAX_YAML_DEPTH = 10


@dataclass
class SourceDocument:
    """A Markdown file split into frontmatter and body."""
    meta: Dict[str, Any] = field(default_factory=dict)
    body: str = ""


def _validate_yaml_depth(file_path: str, obj: Any, current_depth: int = 0) -> None:
    if current_depth > MAX_YAML_DEPTH:
        raise FrontmatterError(
            file_path,
            f"YAML structure exceeds maximum depth of {MAX_YAML_DEPTH}"
        )

    if isinstance(obj, dict):
        for value in obj.values():
            _validate_yaml_depth(file_path, value, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            _validate_yaml_depth(file_path, item, current_depth + 1)


def parse_frontmatter(file_path: str, content: str) -> SourceDocument:
    """Split Markdown content into frontmatter and body.

    Files without frontmatter have empty ``meta``.

    Args:
        file_path: Path to the file (for error messages)
        content: Full Markdown content including frontmatter

    Returns:
        SourceDocument with the parsed frontmatter and the remaining body

    Raises:
        FrontmatterError: If frontmatter is malformed or has invalid YAML
    """
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return SourceDocument(meta={}, body=content)

    try:
        meta = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        raise FrontmatterError(file_path, f"Invalid YAML syntax: {str(e)}")

    if meta is None:
        meta = {}

    if not isinstance(meta, dict):
        raise FrontmatterError(
            file_path,
            f"Frontmatter must be a YAML dictionary, got {type(meta).__name__}"
        )

    _validate_yaml_depth(file_path, meta)

    labels = meta.get('labels')
    if labels is not None and not (
        isinstance(labels, list) and all(isinstance(label, str) for label in labels)
    ):
        raise FrontmatterError(file_path, "Field 'labels' must be a list of strings")

    return SourceDocument(meta=meta, body=content[match.end():])
