"""Parsing of Bazel labels such as ``@repo//foo/bar:baz``."""

from __future__ import annotations

import string
from dataclasses import dataclass

_ALNUM = frozenset(string.ascii_letters + string.digits)
_REPOSITORY_CHARS = _ALNUM | frozenset("-_.")
_PACKAGE_CHARS = _ALNUM | frozenset("/-. $()_")


class LabelError(ValueError):
    """Raised when a string is not a legal Bazel label."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LabelError):
            return NotImplemented
        return self.message == other.message

    def __hash__(self) -> int:
        return hash(self.message)


@dataclass(frozen=True)
class Label:
    """A parsed Bazel label."""

    repository_name: str | None
    package_name: str | None
    name: str

    def packages(self) -> list[str]:
        """Return the path segments of the package name."""
        if self.package_name is None:
            return []
        return self.package_name.split("/")


def _error(label: str, message: str) -> LabelError:
    return LabelError(f"{label} must be a legal label; {message}")


def _consume_repository_name(text: str, label: str) -> tuple[str, str | None]:
    if not text.startswith("@"):
        return text, None

    slash_pos = text.find("//")
    if slash_pos < 0:
        raise _error(label, "labels with repository must contain //.")
    repository_name = text[1:slash_pos]
    if not repository_name:
        return text[1:], None
    if repository_name[0] not in string.ascii_letters:
        raise _error(label, "workspace names must start with a letter.")
    if not set(repository_name) <= _REPOSITORY_CHARS:
        raise _error(
            label,
            "workspace names may contain only A-Z, a-z, 0-9, '-', '_', and '.'.",
        )
    return text[slash_pos:], repository_name


def _consume_package_name(text: str, label: str) -> tuple[str, str | None]:
    colon_pos = text.find(":")
    has_colon = colon_pos >= 0
    is_absolute = text.startswith("//")
    start_pos = 2 if is_absolute else 0

    if not is_absolute and not has_colon:
        if "//" in text:
            raise _error(label, "'//' cannot appear in the middle of the label.")
        return text, None

    if has_colon:
        package_name, rest = text[start_pos:colon_pos], text[colon_pos:]
    else:
        package_name, rest = text[start_pos:], ""

    if not package_name:
        return rest, None
    if "//" in package_name:
        raise _error(label, "'//' cannot appear in the middle of the label.")
    if not set(package_name) <= _PACKAGE_CHARS:
        raise _error(
            label,
            "package names may contain only A-Z, a-z, 0-9, '/', '-', '.', "
            "' ', '$', '(', ')' and '_'.",
        )
    if package_name.endswith("/"):
        raise _error(label, "package names may not end with '/'.")

    if not rest and is_absolute:
        # No target name given: the last package segment is used instead.
        slash = package_name.rfind("/")
        name = package_name[slash:] if slash >= 0 else package_name
        return name, package_name

    return rest, package_name


def _consume_name(text: str, label: str) -> str:
    if not text:
        raise _error(label, "empty target name.")
    name = text[1:] if text.startswith(":") else text
    if not name:
        raise _error(label, "empty target name.")
    if name.startswith("/"):
        raise _error(label, "target names may not start with '/'.")
    return name


def analyze(input: str) -> Label:  # noqa: A002 - public parameter name
    """Parse ``input`` as a Bazel label, raising LabelError if it is illegal."""
    label = input
    rest, repository_name = _consume_repository_name(input, label)
    rest, package_name = _consume_package_name(rest, label)
    name = _consume_name(rest, label)
    return Label(repository_name, package_name, name)