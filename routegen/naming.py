"""Identifier casing rules shared by every generator.

Page class names (``CartPage``) are mapped to Dart file stems
(``cart_page``), route constant names (``cart``) and per-layer file stems
(``cart_controller``).  Resource file names (``ic_form-text``) are mapped to
camelCase constant names (``icFormText``).

Leading acronyms are not special-cased: ``HTTPLoginPage`` becomes
``http_login_page`` and ``hTTPLogin``.
"""

from __future__ import annotations

import re


PAGE_SUFFIX = "Page"

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_LOWER_UPPER_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_UPPER_PAIR = re.compile(r"([A-Z])([A-Z])")
_RESOURCE_SEPARATORS = re.compile(r"[-.]")


def strip_page_suffix(name: str) -> str:
    """Drop a single trailing ``Page`` from *name*."""
    if name.endswith(PAGE_SUFFIX):
        return name[: -len(PAGE_SUFFIX)]
    return name


def to_snake(identifier: str) -> str:
    """Convert a page class name to its snake_case file stem.

    The ``Page`` suffix is stripped before casing and ``_page`` is always
    appended, so ``CartPage`` and ``Cart`` both become ``cart_page``.

    Examples::

        to_snake("ProductDetailPage") -> "product_detail_page"
        to_snake("HTTPLoginPage")     -> "http_login_page"
    """
    base = strip_page_suffix(identifier)
    snake = _ACRONYM_BOUNDARY.sub(
        lambda m: f"{m.group(1).lower()}_{m.group(2).lower()}", base
    )
    snake = _LOWER_UPPER_BOUNDARY.sub(
        lambda m: f"{m.group(1)}_{m.group(2).lower()}", snake
    )
    snake = _UPPER_PAIR.sub(
        lambda m: f"{m.group(1).lower()}{m.group(2).lower()}", snake
    )
    return f"{snake.lower()}_page"


def to_route_name(page: str) -> str:
    """Convert a page class name to its route constant name.

    Only the first character is lower-cased.  Returns ``""`` when nothing is
    left after stripping ``Page``; callers treat that as "no constant".
    """
    base = strip_page_suffix(page)
    if not base:
        return ""
    return base[0].lower() + base[1:]


def layer_stem(page: str, layer: str) -> str:
    """Return the file stem of *page*'s companion file for *layer*.

    ``layer_stem("CartPage", "controller")`` -> ``"cart_controller"``.
    """
    stem = to_snake(page)
    return stem[: -len("_page")] + f"_{layer}"


def capitalize(text: str) -> str:
    """Upper-case the first character and lower-case the rest."""
    if not text:
        return text
    return text[0].upper() + text[1:].lower()


def to_camel(text: str) -> str:
    """Convert snake_case / kebab-case / dotted text to camelCase.

    ``ic_form-text`` -> ``icFormText``.
    """
    parts = _RESOURCE_SEPARATORS.sub("_", text).split("_")
    head = parts[0].lower()
    return head + "".join(capitalize(part) for part in parts[1:] if part)
