"""Modifier keyword to PlantUML notation.

Types and members follow different conventions: members get the terse UML
visibility glyphs, types only carry qualifiers as stereotypes.
"""

from typing import Iterable

# Dropped on types; `abstract` is folded into the block keyword instead
_HIDDEN_TYPE_MODIFIERS = frozenset({"public", "private", "protected", "internal", "abstract"})

_MEMBER_VISIBILITY = {
    "public": "+",
    "private": "-",
    "protected": "#",
}

_MEMBER_CLASSIFIERS = frozenset({"abstract", "static"})


def _join(tokens: Iterable[str]) -> str:
    result = " ".join(tokens)
    if result:
        result += " "
    return result


def get_type_modifiers_text(modifiers: Iterable[str]) -> str:
    """Render type modifiers as stereotypes, e.g. ["public", "sealed"] -> "<<sealed>> "."""
    return _join(f"<<{m}>>" for m in modifiers if m not in _HIDDEN_TYPE_MODIFIERS)


def get_member_modifiers_text(modifiers: Iterable[str]) -> str:
    """Render member modifiers in declaration order.

    ["public", "static", "readonly"] -> "+ {static} <<readonly>> "
    """
    return _join(_member_token(m) for m in modifiers)


def _member_token(modifier: str) -> str:
    if modifier in _MEMBER_VISIBILITY:
        return _MEMBER_VISIBILITY[modifier]
    if modifier in _MEMBER_CLASSIFIERS:
        return f"{{{modifier}}}"
    return f"<<{modifier}>>"


def get_accessor_modifiers_text(modifiers: Iterable[str]) -> str:
    """Accessor modifiers verbatim: ["protected", "internal"] -> "protected internal "."""
    return _join(modifiers)
