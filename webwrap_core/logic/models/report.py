"""
Report domain models.

Contains the per-package entries written to the totals report and the
ordered report that collects them.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Iterator

from .trait import Trait


def round_total(amounts) -> float:
    """Sum trait amounts and fix the result to 2 decimal places."""
    return round(sum(amounts), 2)


@dataclass
class ReportEntry:
    """
    Final result for one package.

    The total is always derived from the traits, so it cannot drift from them.
    """
    name: str
    traits: List[Trait] = field(default_factory=list)

    @property
    def total(self) -> float:
        """Sum of all trait amounts, rounded to 2 decimal places."""
        return round_total(trait.amount for trait in self.traits)

    @property
    def formatted_total(self) -> str:
        """Total as the 2-decimal string used in the report file."""
        return f"{self.total:.2f}"

    def get_summary_lines(self) -> List[str]:
        """Generate the per-trait summary printed after a package is scanned."""
        lines = [f"###### {self.name} #######"]
        for trait in self.traits:
            lines.append(f"+ {trait.amount:.2f}\t{trait.reason}")
        lines.append(f"{self.formatted_total} TOTAL")
        return lines

    def to_dict(self) -> Dict[str, Any]:
        """Convert entry to dictionary for serialization."""
        return {
            'name': self.name,
            'traits': [trait.to_dict() for trait in self.traits],
            'total': self.formatted_total
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ReportEntry':
        """Create an entry from its serialized form."""
        return cls(
            name=data['name'],
            traits=[Trait.from_dict(t) for t in data.get('traits', [])]
        )


class Report:
    """
    Ordered collection of report entries.

    Entries keep processing order. Adding an entry whose name already exists
    replaces the earlier entry in place.
    """

    def __init__(self, entries: Optional[List[ReportEntry]] = None):
        self._entries: List[ReportEntry] = []
        self._index: Dict[str, int] = {}
        for entry in entries or []:
            self.add(entry)

    def add(self, entry: ReportEntry) -> None:
        """Add or replace the entry for a package."""
        position = self._index.get(entry.name)
        if position is None:
            self._index[entry.name] = len(self._entries)
            self._entries.append(entry)
        else:
            self._entries[position] = entry

    def get(self, name: str) -> Optional[ReportEntry]:
        position = self._index.get(name)
        return self._entries[position] if position is not None else None

    @property
    def entries(self) -> List[ReportEntry]:
        return list(self._entries)

    def get_names(self) -> List[str]:
        return [entry.name for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ReportEntry]:
        return iter(list(self._entries))

    def to_list(self) -> List[Dict[str, Any]]:
        """Convert report to the JSON array written to disk."""
        return [entry.to_dict() for entry in self._entries]

    @classmethod
    def from_list(cls, data: List[Dict[str, Any]]) -> 'Report':
        """Create a report from the JSON array read from disk."""
        return cls([ReportEntry.from_dict(item) for item in data])
