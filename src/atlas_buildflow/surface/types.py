# src/atlas_buildflow/surface/types.py
"""
Superfície pública de um módulo.

A `PublicSurface` é o conjunto (único, sem ordem) de nomes de operações que
o módulo expõe deliberadamente a chamadores externos. Ela é derivada a cada
build a partir do artefato de implementação, nunca mantida à mão.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Iterator, List, Tuple


@dataclass(frozen=True)
class PublicSurface:
    """Conjunto imutável de operações exportadas."""

    operations: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, names: Iterable[str]) -> "PublicSurface":
        return cls(operations=frozenset(names))

    def __len__(self) -> int:
        return len(self.operations)

    def __contains__(self, name: object) -> bool:
        return name in self.operations

    def __iter__(self) -> Iterator[str]:
        return iter(self.sorted())

    def sorted(self) -> List[str]:
        return sorted(self.operations)

    def diff(self, other: "PublicSurface") -> Tuple[List[str], List[str]]:
        """Retorna (adicionadas, removidas) de `self` em relação a `other`."""
        added = sorted(self.operations - other.operations)
        removed = sorted(other.operations - self.operations)
        return added, removed


EMPTY_SURFACE = PublicSurface()
