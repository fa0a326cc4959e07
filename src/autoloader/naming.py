"""Symbol-name normalization and candidate path generation."""

import os
import string

from .models import AutoloaderConfig

_ASCII_LETTERS = frozenset(string.ascii_letters)
_ASCII_UPPER = frozenset(string.ascii_uppercase)
_ASCII_LOWER = frozenset(string.ascii_lowercase)


def to_snake_case(name: str) -> str | None:
    """
    Convert a camelCase or PascalCase name to snake_case.

    An underscore is inserted before every uppercase letter that follows a
    letter and is itself followed by a lowercase letter, so acronym runs
    stay together: "FooBar" -> "foo_bar", "HTTPServer" -> "http_server",
    "getHTTP" -> "gethttp". The result is lower-cased. Names that already
    use underscores are left as they are.

    Returns:
        The converted name, or None if the name is malformed (empty or
        containing non-printable characters).
    """
    if not name or not name.isprintable():
        return None

    chars: list[str] = []
    last = len(name) - 1
    for i, ch in enumerate(name):
        if (
            0 < i < last
            and ch in _ASCII_UPPER
            and name[i - 1] in _ASCII_LETTERS
            and name[i + 1] in _ASCII_LOWER
        ):
            chars.append("_")
        chars.append(ch)
    return "".join(chars).lower()


def underscores_to_dashes(name: str) -> str:
    """Replace every underscore with a dash."""
    return name.replace("_", "-")


def normalize_symbol_name(symbol_name: str, config: AutoloaderConfig) -> str | None:
    """
    Apply the configured case and separator transforms to a symbol name.

    Returns:
        The transformed name, or None if snake_case conversion is enabled
        and the name cannot be converted.
    """
    name: str | None = symbol_name
    if config.uses_snake_case:
        name = to_snake_case(symbol_name)
        if name is None:
            return None

    if config.underscore_to_dash:
        name = underscores_to_dashes(name)

    return name


def parts_to_filename(parts: list[str], extension: str) -> str:
    """Join namespace segments into a lower-cased relative file path."""
    return (os.sep.join(parts) + extension).lower()


def build_candidates(symbol_name: str, config: AutoloaderConfig) -> tuple[str, ...]:
    """
    Build the candidate relative paths for a symbol name.

    In namespaced mode every segment becomes a directory and the prefix is
    prepended to the last segment only. Segments are joined verbatim, so
    consecutive separators produce empty path components.

    Returns:
        One lower-cased candidate per configured prefix (at least one), or
        an empty tuple when the name is malformed or, with namespaces
        enabled, has fewer than two segments.
    """
    name = normalize_symbol_name(symbol_name, config)
    if name is None:
        return ()

    prefixes = config.effective_prefixes()

    if not config.uses_namespaces:
        return tuple((prefix + name + config.file_extension).lower() for prefix in prefixes)

    separator = config.namespace_separator
    parts = name.split(separator) if separator else [name]
    if len(parts) < 2:
        return ()

    if config.strip_root_namespace:
        parts = parts[1:]

    head, base = parts[:-1], parts[-1]
    return tuple(
        parts_to_filename(head + [prefix + base], config.file_extension)
        for prefix in prefixes
    )
