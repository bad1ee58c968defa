"""String inflection helpers shared by locals, tokens and templates.

The casing rules mirror the JavaScript conventions generated projects use:

    decamelize("innerHTML")  -> "inner_html"
    dasherize("fooBar")      -> "foo-bar"
    camelize("foo-bar")      -> "fooBar"
    classify("foo/bar-baz")  -> "Foo/BarBaz"
"""

from __future__ import annotations

import re

_DECAMELIZE_RE = re.compile(r"([a-z\d])([A-Z])")
_DASHERIZE_RE = re.compile(r"[ _]")
_CAMELIZE_RE_1 = re.compile(r"(-|_|\.|\s)+(.)?")
_CAMELIZE_RE_2 = re.compile(r"(^|/)([A-Z])")
_CLASSIFY_RE_1 = re.compile(r"^(-|_)+(.)?")
_CLASSIFY_RE_2 = re.compile(r"(.)(-|_|\.|\s)+(.)?")
_CLASSIFY_RE_3 = re.compile(r"(^|/|\.)([a-z])")


def decamelize(value: str) -> str:
    """Convert ``someThing`` to ``some_thing``."""
    return _DECAMELIZE_RE.sub(r"\1_\2", value).lower()


def dasherize(value: str) -> str:
    """Convert ``someThing`` or ``some_thing`` to ``some-thing``."""
    return _DASHERIZE_RE.sub("-", decamelize(value))


def camelize(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``someThing``."""
    result = _CAMELIZE_RE_1.sub(
        lambda m: m.group(2).upper() if m.group(2) else "", value
    )
    return _CAMELIZE_RE_2.sub(lambda m: m.group(0).lower(), result)


def classify(value: str) -> str:
    """Convert ``some-thing`` to ``SomeThing``; ``/`` separated parts stay separate."""
    parts = []
    for part in value.split("/"):
        part = _CLASSIFY_RE_1.sub(
            lambda m: f"_{m.group(2).upper()}" if m.group(2) else "", part
        )
        part = _CLASSIFY_RE_2.sub(
            lambda m: m.group(1) + (m.group(3).upper() if m.group(3) else ""), part
        )
        parts.append(part)
    return _CLASSIFY_RE_3.sub(lambda m: m.group(0).upper(), "/".join(parts))


def pluralize(word: str) -> str:
    """Naive English pluralisation, enough for blueprint collection folders.

    E.g. ``'component'`` -> ``'components'``, ``'library'`` -> ``'libraries'``,
    ``'mock'`` -> ``'mocks'``, ``'address'`` -> ``'addresses'``.
    """
    if not word:
        return word
    lower = word.lower()
    if lower.endswith("y") and len(word) > 1 and lower[-2] not in "aeiou":
        return word[:-1] + "ies"
    if lower.endswith(("s", "sh", "ch", "x", "z")):
        return word + "es"
    return word + "s"


def flatten_package_name(name: str) -> str:
    """Flatten a scoped package name: ``@scope/my-addon`` -> ``scope-my-addon``."""
    return name.lstrip("@").replace("/", "-")
