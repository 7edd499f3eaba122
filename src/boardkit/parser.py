"""Read and write markdown documents with YAML front-matter.

Board and card files share one shape::

    ---
    <yaml record>
    ---
    # Title

    Body text.
"""

import re
from dataclasses import dataclass, field
from typing import Any

import yaml

_FRONT_MATTER = re.compile(r"^---\n(.*?)\n---\n?", re.DOTALL)
_H1 = re.compile(r"^# (.*)$", re.MULTILINE)


@dataclass
class Document:
    """A parsed markdown file: h1 title, the text after it, and front-matter."""

    title: str = ""
    body: str = ""
    meta: dict[str, Any] = field(default_factory=dict)


def _extract_front_matter(text: str) -> tuple[str, dict]:
    """Split YAML front-matter off text. Returns (remaining_text, meta).

    Unclosed or invalid front-matter gives an empty meta.
    """
    match = _FRONT_MATTER.match(text)
    if not match:
        return text, {}
    try:
        meta = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError:
        meta = {}
    if not isinstance(meta, dict):
        meta = {}
    return text[match.end() :], meta


def _outside_fences(text: str):
    """Yield (line, in_fence) for each line of text."""
    in_fence = False
    for line in text.split("\n"):
        if line.startswith("```"):
            in_fence = not in_fence
        yield line, in_fence


def parse_document(text: str) -> Document:
    """Parse a board or card file.

    The first h1 outside code fences is the title; everything after
    it is the body. Without an h1 the whole text is the body.
    """
    text, meta = _extract_front_matter(text)
    lines = list(_outside_fences(text))
    for i, (line, in_fence) in enumerate(lines):
        if not in_fence and _H1.match(line):
            body = "\n".join(raw for raw, _ in lines[i + 1 :])
            return Document(title=line[2:].strip(), body=body.strip(), meta=meta)
    return Document(body=text.strip(), meta=meta)


def _demote_headings(text: str) -> str:
    """Turn h1 lines in a body into h2 so they can't be read back as the title."""
    out = []
    for line, in_fence in _outside_fences(text):
        out.append(_H1.sub(r"## \1", line) if not in_fence else line)
    return "\n".join(out)


def serialize_document(doc: Document) -> str:
    """Serialize a Document back to markdown with front-matter."""
    parts: list[str] = []
    if doc.meta:
        parts.append("---")
        parts.append(yaml.safe_dump(doc.meta, default_flow_style=False, sort_keys=False, allow_unicode=True).rstrip())
        parts.append("---")
        parts.append("")
    if doc.title:
        parts.append(f"# {doc.title}")
        parts.append("")
    if doc.body:
        parts.append(_demote_headings(doc.body))
        parts.append("")
    return "\n".join(parts).rstrip() + "\n"


def load_yaml(text: str) -> dict[str, Any]:
    """Load a YAML mapping; invalid or non-mapping YAML gives {}."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        return {}
    return data if isinstance(data, dict) else {}
