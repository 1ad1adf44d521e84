"""Phrase template parsing.

A template such as "El {0} es el rey de la {1}" is split into literal text
runs and blank indices. The parser is only used for layout: indices are not
checked against the phrase's blanks.
"""

import re
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Union

TemplateNode = Union[str, int]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_index(content: str) -> Optional[int]:
    match = _LEADING_INT.match(content)
    return int(match.group(1)) if match else None


def parse_template(template: str) -> List[TemplateNode]:
    """
    Parse a template into literal strings and integer blank indices.

    Non-numeric content between braces is dropped; an unterminated brace
    swallows the rest of the template.
    """
    nodes: List[TemplateNode] = []
    text = ""
    i = 0

    while i < len(template):
        if template[i] != "{":
            text += template[i]
            i += 1
            continue

        if text:
            nodes.append(text)
            text = ""

        close = template.find("}", i + 1)
        if close == -1:
            close = len(template)

        index = _parse_index(template[i + 1:close])
        if index is not None:
            nodes.append(index)
        i = close + 1

    if text:
        nodes.append(text)

    return nodes


def blank_indices(template: str) -> List[int]:
    return [node for node in parse_template(template) if isinstance(node, int)]


class TemplateSlot(NamedTuple):
    """A laid-out template node: literal text, or a slot with its blank (if known)."""
    text: Optional[str] = None
    index: Optional[int] = None
    blank: Any = None

    @property
    def is_blank(self) -> bool:
        return self.index is not None


def layout_template(template: str, blanks_by_id: Dict[int, Any]) -> List[TemplateSlot]:
    """
    Pair every blank index in the template with its blank.

    Indices with no matching blank yield a slot whose `blank` is None.
    """
    slots: List[TemplateSlot] = []
    for node in parse_template(template):
        if isinstance(node, int):
            slots.append(TemplateSlot(index=node, blank=blanks_by_id.get(node)))
        else:
            slots.append(TemplateSlot(text=node))
    return slots


def unknown_indices(template: str, blank_ids: Sequence[int]) -> List[int]:
    """Blank indices in the template that have no blank definition."""
    known = set(blank_ids)
    return [index for index in blank_indices(template) if index not in known]
