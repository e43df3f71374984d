"""Key matching: field-name normalisation and flexible object lookup.

Declared field names are projected onto JSON as lower-case, underscore
separated names (``someValue`` → ``some_value``). On the way back in, a
field matches any key whose normalised form equals the normalised field
name, so ``MessageId``, ``message_id`` and ``MESSAGE_ID`` all hit
``messageId``.
"""

from __future__ import annotations

import re

from .settings import MatchOptions
from .values import Value, VObject

_DEFAULT_OPTIONS = MatchOptions()

# Camel-case runs: acronyms (HTTP in parseHTTPResponse), capitalised or
# lower-case words, digit runs.
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+|[^\W\d_]+")


def normalize(name: str, options: MatchOptions = _DEFAULT_OPTIONS) -> str:
    """Normalise *name* for comparison; idempotent for any options."""
    if options.ignore_separators and options.separators:
        name = name.translate({ord(c): None for c in options.separators})
    if options.ignore_case:
        name = name.lower()
    return name


def to_underscore(name: str) -> str:
    """Canonical JSON name for a declared field name.

    ``someValue`` → ``some_value``, ``parseHTTPResponse`` →
    ``parse_http_response``, ``value2`` → ``value_2``, ``__x`` → ``x``.
    """
    return "_".join(w.lower() for w in _WORD_RE.findall(name))


def flex_key(
    obj: VObject, name: str, options: MatchOptions = _DEFAULT_OPTIONS
) -> str | None:
    """Return the first key of *obj* (in insertion order) matching *name*."""
    target = normalize(name, options)
    for key in obj.entries:
        if normalize(key, options) == target:
            return key
    return None


def flex_get(
    obj: VObject, name: str, options: MatchOptions = _DEFAULT_OPTIONS
) -> Value | None:
    """Flexible lookup of *name* in *obj*.

    Returns ``None`` when no key matches and also when the first matching
    key holds JSON null: decoders treat an explicit null like a missing key.
    """
    key = flex_key(obj, name, options)
    if key is None:
        return None
    value = obj.entries[key]
    if value.is_null():
        return None
    return value
