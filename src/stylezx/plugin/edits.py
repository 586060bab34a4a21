"""Position-based source editing against an unchanged original text."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Edit:
    """Replace ``original[start:end]`` with ``text``; ``start == end`` inserts."""

    start: int
    end: int
    text: str


class EditConflict(ValueError):
    """Raised when a new edit overlaps one already recorded."""


class SourceEditor:
    """Collects edits expressed in original-text offsets and renders the result.

    Edits may not overlap. Several insertions at the same offset are rendered
    in the order they were recorded, before any replacement starting there.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._edits: list[tuple[int, Edit]] = []

    def overwrite(self, start: int, end: int, text: str) -> None:
        if not 0 <= start <= end <= len(self._source):
            raise ValueError(f"Edit range {start}:{end} is outside the source")
        edit = Edit(start, end, text)
        for _, other in self._edits:
            if self._overlaps(edit, other):
                raise EditConflict(
                    f"Edit {start}:{end} overlaps an earlier edit {other.start}:{other.end}"
                )
        self._edits.append((len(self._edits), edit))

    def remove(self, start: int, end: int) -> None:
        self.overwrite(start, end, "")

    def insert(self, pos: int, text: str) -> None:
        self.overwrite(pos, pos, text)

    def prepend(self, text: str) -> None:
        self.insert(0, text)

    @staticmethod
    def _overlaps(a: Edit, b: Edit) -> bool:
        if a.start == a.end and b.start == b.end:
            return False
        if a.start == a.end:
            return b.start < a.start < b.end
        if b.start == b.end:
            return a.start < b.start < a.end
        return a.start < b.end and b.start < a.end

    @property
    def edits(self) -> tuple[Edit, ...]:
        """Recorded edits in application order."""
        ordered = sorted(self._edits, key=lambda item: (item[1].start, item[1].end, item[0]))
        return tuple(edit for _, edit in ordered)

    @property
    def changed(self) -> bool:
        return bool(self._edits)

    def render(self) -> str:
        parts: list[str] = []
        cursor = 0
        for edit in self.edits:
            parts.append(self._source[cursor : edit.start])
            parts.append(edit.text)
            cursor = edit.end
        parts.append(self._source[cursor:])
        return "".join(parts)
