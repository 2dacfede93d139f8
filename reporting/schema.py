"""Dynamic column discovery from task titles."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List

from reporting.models import GroupedOrganization


class ColumnSchema:
    """Ordered, duplicate-free set of task titles.

    Titles are compared by exact string equality; the first occurrence fixes
    the position.
    """

    def __init__(self, titles: Iterable[str] = ()) -> None:
        self._positions: Dict[str, int] = {}
        for title in titles:
            self.add(title)

    def add(self, title: str) -> int:
        position = self._positions.get(title)
        if position is None:
            position = len(self._positions)
            self._positions[title] = position
        return position

    def position(self, title: str) -> int:
        return self._positions[title]

    @staticmethod
    def key_for(position: int) -> str:
        return f"task{position + 1}"

    @property
    def titles(self) -> List[str]:
        return list(self._positions)

    @property
    def keys(self) -> List[str]:
        return [self.key_for(position) for position in range(len(self._positions))]

    def __contains__(self, title: object) -> bool:
        return title in self._positions

    def __iter__(self) -> Iterator[str]:
        return iter(self._positions)

    def __len__(self) -> int:
        return len(self._positions)

    def __repr__(self) -> str:
        return f"ColumnSchema({self.titles!r})"


def build_column_schema(groups: Iterable[GroupedOrganization]) -> ColumnSchema:
    schema = ColumnSchema()
    for group in groups:
        for task in group.tasks:
            schema.add(task.title)
    return schema
