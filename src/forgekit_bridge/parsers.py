"""
Extraction of structured data from toolchain output.

The ``forgekit`` executable reports results as human-oriented text, so these
parsers are coupled to its exact layout: a change in that layout is a
breaking change here. When the toolchain emits versioned structured records
(``forgekit:v1 {json}`` lines) they take precedence and the text heuristics
below are used only as a fallback.

Every extractor is total: unmatched lines are skipped and absence yields an
empty result. Only ``require_package_path`` raises.
"""
from __future__ import annotations

import json
import re
from typing import Iterator, List, Optional

from .errors import ParseFailure
from .runtime_types import TemplateDescriptor

__all__ = [
    "PROTOCOL_PREFIX",
    "PACKAGE_MARKER",
    "iter_records",
    "extract_package_path",
    "require_package_path",
    "parse_search_results",
    "parse_templates",
]

PROTOCOL_PREFIX = "forgekit:v1 "

PACKAGE_MARKER = "Package created at"

# The toolchain prints the path debug-quoted; accept both forms
_PACKAGE_RE = re.compile(re.escape(PACKAGE_MARKER) + r'\s+(?:"((?:[^"\\]|\\.)+)"|(\S+))')

_ESCAPE_RE = re.compile(r"\\(u\{([0-9a-fA-F]{1,6})\}|.)")
_SIMPLE_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "0": "\0"}

_BULLET = "- "
_SEPARATOR = " - "

_TEMPLATE_RE = re.compile(r"^\s*(\w[\w.-]*)\s+-\s+(.+?)\s*$")


def _unescape_debug(text: str) -> str:
    """Undo Rust debug-string escaping (``\\\\``, ``\\"``, ``\\n``, ``\\u{..}``)."""

    def _replace(match: re.Match) -> str:
        if match.group(2):
            code = int(match.group(2), 16)
            return chr(code) if code <= 0x10FFFF else match.group(0)
        char = match.group(1)
        return _SIMPLE_ESCAPES.get(char, char)

    return _ESCAPE_RE.sub(_replace, text)


def iter_records(output: str, record_type: str) -> Iterator[dict]:
    """
    Yield structured protocol records of ``record_type`` from ``output``.

    Lines that carry the prefix but are not a JSON object are ignored.
    """
    for line in output.splitlines():
        line = line.strip()
        if not line.startswith(PROTOCOL_PREFIX):
            continue
        try:
            record = json.loads(line[len(PROTOCOL_PREFIX):])
        except json.JSONDecodeError:
            continue
        if isinstance(record, dict) and record.get("type") == record_type:
            yield record


def extract_package_path(output: str) -> Optional[str]:
    """
    Find the package path reported by ``package`` / ``build-package``.

    Returns:
        The path, or None if the output has no package marker
    """
    for record in iter_records(output, "package"):
        path = record.get("path")
        if isinstance(path, str) and path:
            return path

    match = _PACKAGE_RE.search(output)
    if not match:
        return None
    if match.group(1) is not None:
        return _unescape_debug(match.group(1))
    return match.group(2)


def require_package_path(output: str) -> str:
    """
    Like ``extract_package_path`` but for operations that guarantee a path.

    Raises:
        ParseFailure: If no package path is present
    """
    path = extract_package_path(output)
    if path is None:
        raise ParseFailure("Could not extract package path from output", output=output)
    return path


def parse_search_results(output: str) -> List[str]:
    """
    Parse ``forgekit search`` output into package entries.

    A line is a result if, once trimmed, it starts with the ``- `` bullet
    (which is stripped) or contains the `` - `` separator. Order is kept.
    """
    records = [r["name"] for r in iter_records(output, "search") if isinstance(r.get("name"), str)]
    if records:
        return records

    results: List[str] = []
    for line in output.splitlines():
        item = line.strip()
        if item.startswith(PROTOCOL_PREFIX):
            continue
        if item.startswith(_BULLET):
            item = item[len(_BULLET):].strip()
        elif _SEPARATOR not in item:
            continue
        if item:
            results.append(item)
    return results


def parse_templates(output: str) -> List[TemplateDescriptor]:
    """
    Parse ``forgekit templates`` output into descriptors.

    Matches lines shaped ``<identifier> - <description>``, with any amount of
    padding around the dash.
    """
    records = [
        TemplateDescriptor(name=r["name"], description=r.get("description") or "")
        for r in iter_records(output, "template")
        if isinstance(r.get("name"), str)
    ]
    if records:
        return records

    templates: List[TemplateDescriptor] = []
    for line in output.splitlines():
        match = _TEMPLATE_RE.match(line)
        if match:
            templates.append(TemplateDescriptor(name=match.group(1), description=match.group(2)))
    return templates
