"""
Scan data model.

ColumnBinding: one column and the default expression that feeds it
ScanResult: everything collected during one collision scan
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Any, Sequence
import json


@dataclass(frozen=True)
class ColumnBinding:
    """A column whose default is bound to a sequence."""
    table_name: str
    column_name: str
    column_default: str                    # literal text from information_schema

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> "ColumnBinding":
        """
        Decode a (table_name, column_name, column_default) row.

        Raises:
            ValueError: if the row has the wrong shape or a non-text field
        """
        if len(row) != 3:
            raise ValueError(f"expected 3 columns, got {len(row)}")
        table_name, column_name, column_default = row
        for name, value in (
            ("table_name", table_name),
            ("column_name", column_name),
            ("column_default", column_default),
        ):
            if not isinstance(value, str):
                raise ValueError(f"{name} is {type(value).__name__}, expected text")
        return cls(table_name, column_name, column_default)

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass
class ScanResult:
    """
    Collision groups found in one schema.

    Groups are kept in the order they were emitted; `matches` is the
    same bindings flattened, which is what the report and the total
    are built from.
    """
    schema: str
    groups: List[List[ColumnBinding]] = field(default_factory=list)
    matches: List[ColumnBinding] = field(default_factory=list)

    def add_group(self, group: List[ColumnBinding]) -> None:
        """Append a collision group. Empty groups are ignored."""
        if not group:
            return
        self.groups.append(list(group))
        self.matches.extend(group)

    @property
    def total(self) -> int:
        return len(self.matches)

    @property
    def is_empty(self) -> bool:
        return not self.matches

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "schema": self.schema,
            "total": self.total,
            "groups": [[b.to_dict() for b in group] for group in self.groups],
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)
