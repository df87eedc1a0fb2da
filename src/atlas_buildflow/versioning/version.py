# src/atlas_buildflow/versioning/version.py
"""
Tipo canônico de versão do Atlas BuildFlow.

Uma `Version` é uma tripla ordenada (major, minor, patch) de inteiros não
negativos, com ordem total lexicográfica. A representação textual canônica
é exatamente `"major.minor.patch"`, a mesma gravada no manifest primário e
na package spec (os dois campos devem ser bit-idênticos após um build).

Invariantes:
    - Componentes são sempre inteiros >= 0
    - `Version.parse(str(v)) == v`
    - A ordenação é (major, minor, patch)

Limites explícitos:
    - Não suporta pré-releases, build metadata ou prefixos ("v1.2.3")
    - Não decide incrementos (responsabilidade de `calculator`)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Version:
    """Versão semântica mínima (major, minor, patch)."""

    major: int = 0
    minor: int = 0
    patch: int = 0

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Version.{name} must be int, got {type(value).__name__}")
            if value < 0:
                raise ValueError(f"Version.{name} must be non-negative, got {value}")

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Converte `"X.Y.Z"` em Version; qualquer outro formato é rejeitado."""
        if not isinstance(text, str):
            raise ValueError(f"Version text must be str, got {type(text).__name__}")

        parts = text.strip().split(".")
        if len(parts) != 3 or not all(p.isdigit() for p in parts):
            raise ValueError(f"Invalid version: {text!r} (expected 'major.minor.patch')")

        major, minor, patch = (int(p) for p in parts)
        return cls(major, minor, patch)

    def bump_patch(self) -> "Version":
        return Version(self.major, self.minor, self.patch + 1)

    def bump_minor(self) -> "Version":
        return Version(self.major, self.minor + 1, 0)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


ZERO_VERSION = Version(0, 0, 0)
LOCAL_VERSION = Version(0, 0, 1)
