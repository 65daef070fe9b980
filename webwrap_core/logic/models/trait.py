"""
Trait domain models.

A trait is one weighted piece of evidence that a package wraps web content.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Tuple


@dataclass(frozen=True)
class Trait:
    """Single piece of evidence toward the hybrid-likelihood score."""
    amount: float
    reason: str
    files: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Validate trait after initialization."""
        if self.amount < 0:
            raise ValueError(f"Trait amount cannot be negative, got {self.amount}")

        if not self.reason.strip():
            raise ValueError("Trait reason cannot be empty")

        # Accept any sequence but store an immutable copy
        if not isinstance(self.files, tuple):
            object.__setattr__(self, 'files', tuple(self.files))

    def to_dict(self) -> Dict[str, Any]:
        """Convert trait to dictionary for serialization."""
        return {
            'amount': self.amount,
            'reason': self.reason,
            'files': list(self.files)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Trait':
        """Create a trait from its serialized form."""
        return cls(
            amount=float(data['amount']),
            reason=data['reason'],
            files=tuple(data.get('files', []))
        )


@dataclass
class ScanResult:
    """Traits found for one package, in scanner execution order."""
    package_name: str
    traits: List[Trait] = field(default_factory=list)

    def extend(self, traits: List[Trait]) -> None:
        """Append traits from one scanner without reordering or deduplication."""
        self.traits.extend(traits)
