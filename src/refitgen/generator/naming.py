"""Naming utilities for code generation."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from refitgen.errors import InvalidInputError

FILE_RESPONSE_TYPE = "FileResponse"
STREAM_PART_TYPE = "StreamPart"
DEFAULT_TYPE_ALIASES: Mapping[str, str] = {FILE_RESPONSE_TYPE: STREAM_PART_TYPE}


def capitalize(value: str) -> str:
    """Upper-case the first character and leave the rest untouched.

    Unlike ``str.capitalize`` the tail keeps its casing:

        >>> capitalize("getUserById")
        'GetUserById'
    """
    if not value:
        raise InvalidInputError("Cannot capitalize an empty string")
    return value[0].upper() + value[1:]


def kebab_to_pascal(value: str) -> str:
    """Convert a kebab-case identifier to PascalCase.

    Empty segments (``a--b``, a leading or trailing ``-``) are dropped.

        >>> kebab_to_pascal("get-user-by-id")
        'GetUserById'
    """
    return "".join(capitalize(part) for part in value.split("-") if part)


def strip_namespace_prefixes(type_name: str, known_prefixes: Iterable[str]) -> str:
    """Remove each matching leading namespace qualifier once.

    Matching is case-insensitive and requires the ``.`` separator, so
    ``System.Collections.GenericFoo`` is left alone.
    """
    for prefix in known_prefixes:
        qualifier = prefix + "."
        if type_name.lower().startswith(qualifier.lower()):
            type_name = type_name[len(qualifier):]
    return type_name


def map_file_response_alias(type_name: str, aliases: Mapping[str, str] = DEFAULT_TYPE_ALIASES) -> str:
    """Swap a resolver type token for the client's payload type token."""
    return aliases.get(type_name, type_name)
