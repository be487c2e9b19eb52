"""Substitutions from type variables to types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar as _T

from rowpoly.core.types import Scheme, Type, TypeEnv, TyVar

Substitutable = _T("Substitutable", Type, Scheme, TypeEnv)


@dataclass(frozen=True)
class Substitution:
    """Immutable substitution mapping type variables to types."""

    mapping: dict[TyVar, Type]

    @staticmethod
    def empty() -> Substitution:
        """Create an empty substitution."""
        return Substitution({})

    @staticmethod
    def singleton(var: TyVar, t: Type) -> Substitution:
        """Create a substitution with a single mapping."""
        return Substitution({var: t})

    def apply(self, target: Substitutable) -> Substitutable:
        """Apply this substitution to a type, scheme or environment.

        Schemes keep their quantified variables out of reach.
        """
        if not self.mapping:
            return target
        return target.substitute(self.mapping)

    def compose(self, older: Substitution) -> Substitution:
        """Compose with a substitution produced before this one.

        ``newer.compose(older)`` applies ``older`` first, then ``newer``:
        ``newer`` is applied to every type in ``older``, and ``newer``'s own
        entries are then overlaid, winning on conflicting keys.
        """
        mapping = {var: self.apply(ty) for var, ty in older.mapping.items()}
        mapping.update(self.mapping)
        return Substitution(mapping)

    def __contains__(self, var: TyVar) -> bool:
        return var in self.mapping

    def __len__(self) -> int:
        return len(self.mapping)

    def __str__(self) -> str:
        items = ", ".join(f"{k} -> {v}" for k, v in self.mapping.items())
        return f"{{{items}}}"
