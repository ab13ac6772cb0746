"""
Text resolution for JSON-LD profile fields and inline rationale payloads.

CIP-119 profile fields arrive either as a plain string or wrapped as
{"@value": "..."}; CIP-100/108 vote payloads nest the rationale text under
"body". Scorers read text only through these helpers.
"""

from typing import Any, Mapping, Optional

# First non-empty path wins when extracting rationale text for quality checks
RATIONALE_TEXT_PATHS = (
    ("body", "comment"),
    ("body", "rationale"),
    ("rationale",),
    ("body", "motivation"),
)

# Paths whose presence alone marks a vote as having a rationale
RATIONALE_PRESENCE_PATHS = (
    ("rationale",),
    ("body", "comment"),
    ("body", "rationale"),
)


def resolve_text_field(value: Any) -> Optional[str]:
    """
    Resolve a profile field to its text.

    Accepts exactly a plain string or a mapping with a string "@value" key.
    Anything else (numbers, lists, nested objects) resolves to None.

    Examples:
        >>> resolve_text_field("Alice")
        'Alice'
        >>> resolve_text_field({"@value": "Alice"})
        'Alice'
        >>> resolve_text_field({"label": "Alice"}) is None
        True
    """
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        inner = value.get("@value")
        if isinstance(inner, str):
            return inner
    return None


def has_text(value: Any) -> bool:
    """True if the field resolves to non-blank text."""
    text = resolve_text_field(value)
    return bool(text and text.strip())


def _walk(payload: Mapping[str, Any], path: tuple[str, ...]) -> Any:
    node: Any = payload
    for key in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node


def inline_rationale_text(payload: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Return the first non-empty rationale text found in an inline payload."""
    if not isinstance(payload, Mapping):
        return None
    for path in RATIONALE_TEXT_PATHS:
        text = resolve_text_field(_walk(payload, path))
        if text and text.strip():
            return text
    return None


def has_inline_rationale(payload: Optional[Mapping[str, Any]]) -> bool:
    """True if the payload exposes a non-empty rationale, comment or body rationale."""
    if not isinstance(payload, Mapping):
        return False
    return any(has_text(_walk(payload, path)) for path in RATIONALE_PRESENCE_PATHS)
