"""Checks that a rendered error message has no template leftovers."""

from __future__ import annotations

from typing import NamedTuple

from .config import get_settings
from .diagnostics import unresolved_format_artifact


class FormatArtifact(NamedTuple):
    tag: str
    legacy: bool


def find_format_artifact(message: str) -> FormatArtifact | None:
    """Return the first unresolved tag in ``message``, legacy tag first."""
    settings = get_settings()

    legacy_tag = settings.LEGACY_FORMAT_TAG
    if legacy_tag and legacy_tag in message:
        return FormatArtifact(legacy_tag, legacy=True)

    match = settings.variable_tag_regex.search(message)
    if match is not None:
        return FormatArtifact(match.group(0), legacy=False)
    return None


def ensure_rendered(message: str) -> None:
    artifact = find_format_artifact(message)
    if artifact is not None:
        raise unresolved_format_artifact(artifact.tag, message, legacy=artifact.legacy)
