"""Dotted OS version value object.

A :class:`Version` is an ordered tuple of non-negative integers obtained by
splitting a dotted string on ``"."``.  Segments that are not made entirely of
ASCII digits are dropped rather than rejected, so ``"13.0beta"`` yields
``(13,)`` and an empty or placeholder string yields ``()``.  Missing trailing
segments compare as ``0``: ``Version.parse("13.2") == Version.parse("13.2.0")``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from itertools import zip_longest

import structlog

logger = structlog.get_logger(__name__)

_NUMERIC_SEGMENT = re.compile(r"[0-9]+")


def _parse_segments(text: str) -> tuple[int, ...]:
    parts: list[int] = []
    for segment in text.split("."):
        if _NUMERIC_SEGMENT.fullmatch(segment):
            try:
                parts.append(int(segment))
            except ValueError:
                # Longer than the interpreter's integer string conversion limit.
                logger.debug("version_segment_dropped", version=text[:64], segment=segment[:64])
        elif segment:
            logger.debug("version_segment_dropped", version=text[:64], segment=segment[:64])
    return tuple(parts)


@dataclass(frozen=True, slots=True, eq=False)
class Version:
    """Ordered dotted version.

    Attributes:
        segments: Parsed numeric components, most significant first.
        raw: The text the version was parsed from, kept for display.
    """

    segments: tuple[int, ...]
    raw: str = field(default="", compare=False)

    @classmethod
    def parse(cls, text: str) -> Version:
        """Build a Version from *text*; never raises."""
        return cls(segments=_parse_segments(text), raw=text)

    # -- ordering -------------------------------------------------------------

    def compare(self, other: Version) -> int:
        """Return ``-1``, ``0`` or ``1`` as *self* is lower, equal or higher."""
        for mine, theirs in zip_longest(self.segments, other.segments, fillvalue=0):
            if mine < theirs:
                return -1
            if mine > theirs:
                return 1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __hash__(self) -> int:
        trimmed = list(self.segments)
        while trimmed and trimmed[-1] == 0:
            trimmed.pop()
        return hash(tuple(trimmed))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) >= 0

    # -- convenience ----------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        """True when no numeric segment could be parsed."""
        return not self.segments

    def __str__(self) -> str:
        if self.raw:
            return self.raw
        return ".".join(str(part) for part in self.segments)


def compare_versions(a: str, b: str) -> int:
    """Compare two dotted version strings, returning ``-1``, ``0`` or ``1``."""
    return Version.parse(a).compare(Version.parse(b))
