"""Front-matter parsing for *.issue.md files."""

import re
from pathlib import Path

import frontmatter
import yaml

from issuesync.models import FrontMatter

_HANDLER = frontmatter.YAMLHandler()
_LEADING_NEWLINE = re.compile(r"\A\r?\n")


class FrontMatterError(ValueError):
    """The metadata block of an issue file could not be parsed."""


def read_issue_file(path: str | Path) -> str:
    return Path(path).read_text(encoding="utf-8")


def parse_front_matter(text: str) -> FrontMatter:
    """Split text into a YAML attribute mapping and the remaining body.

    Text without a leading ``---`` fence is all body. An opened but never
    closed fence, invalid YAML, or a block that is not a mapping raises
    FrontMatterError.
    """
    text = text.removeprefix("\ufeff")
    if not _HANDLER.detect(text):
        return FrontMatter(attributes={}, body=text)

    try:
        raw, content = _HANDLER.split(text)
    except ValueError as exc:
        raise FrontMatterError("Front matter block is not terminated by a closing '---'") from exc

    try:
        attributes = _HANDLER.load(raw)
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"Front matter is not valid YAML: {exc}") from exc

    if attributes is None:
        attributes = {}
    if not isinstance(attributes, dict):
        raise FrontMatterError(f"Front matter must be a mapping, got {type(attributes).__name__}")

    return FrontMatter(
        attributes={str(key): value for key, value in attributes.items()},
        body=_LEADING_NEWLINE.sub("", content),
    )
