"""Type representations for records, rows and polymorphic schemes."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class CNone:
    """The variable may stand for any type."""

    def __str__(self) -> str:
        return ""


@dataclass(frozen=True)
class RowLacks:
    """The variable may only stand for rows that omit every label in ``labels``."""

    labels: frozenset[str]

    def __str__(self) -> str:
        return "\\".join(sorted(self.labels))


Constraint = Union[CNone, RowLacks]

NO_CONSTRAINT = CNone()


def lacks(label: str) -> RowLacks:
    """Constraint excluding a single label."""
    return RowLacks(frozenset({label}))


@dataclass(frozen=True)
class TyVar:
    """Type variable: a name plus the constraint it carries.

    Two variables are the same variable only if both name and constraint agree.
    """

    name: str
    constraint: Constraint = NO_CONSTRAINT

    def __str__(self) -> str:
        return self.name

    @property
    def labels(self) -> frozenset[str]:
        """Labels this variable is constrained to lack (empty when unconstrained)."""
        match self.constraint:
            case RowLacks(labels):
                return labels
            case _:
                return frozenset()


Subst = Mapping[TyVar, "Type"]


class Type:
    """Base class for types."""

    def free_vars(self) -> set[TyVar]:
        """Return set of free type variables."""
        raise NotImplementedError

    def substitute(self, subst: Subst) -> Type:
        """Apply substitution to this type."""
        raise NotImplementedError


@dataclass(frozen=True)
class TVar(Type):
    """Type variable occurrence."""

    var: TyVar

    def __str__(self) -> str:
        return self.var.name

    def free_vars(self) -> set[TyVar]:
        return {self.var}

    def substitute(self, subst: Subst) -> Type:
        return subst.get(self.var, self)


@dataclass(frozen=True)
class TInt(Type):
    def __str__(self) -> str:
        return "Int"

    def free_vars(self) -> set[TyVar]:
        return set()

    def substitute(self, subst: Subst) -> Type:
        return self


@dataclass(frozen=True)
class TBool(Type):
    def __str__(self) -> str:
        return "Bool"

    def free_vars(self) -> set[TyVar]:
        return set()

    def substitute(self, subst: Subst) -> Type:
        return self


@dataclass(frozen=True)
class TFun(Type):
    """Function type: arg -> ret."""

    arg: Type
    ret: Type

    def __str__(self) -> str:
        match self.arg:
            case TFun():
                arg_str = f"({self.arg})"
            case _:
                arg_str = str(self.arg)
        return f"{arg_str} -> {self.ret}"

    def free_vars(self) -> set[TyVar]:
        return self.arg.free_vars() | self.ret.free_vars()

    def substitute(self, subst: Subst) -> Type:
        return TFun(self.arg.substitute(subst), self.ret.substitute(subst))


@dataclass(frozen=True)
class TRecord(Type):
    """Record type wrapping a row."""

    row: Type

    def __str__(self) -> str:
        return "{" + _render_row(self.row) + "}"

    def free_vars(self) -> set[TyVar]:
        return self.row.free_vars()

    def substitute(self, subst: Subst) -> Type:
        return TRecord(self.row.substitute(subst))


@dataclass(frozen=True)
class TRowEmpty(Type):
    """Terminator of a closed row."""

    def __str__(self) -> str:
        return "<>"

    def free_vars(self) -> set[TyVar]:
        return set()

    def substitute(self, subst: Subst) -> Type:
        return self


@dataclass(frozen=True)
class TRowExtend(Type):
    """Row with ``label : field`` in front of ``tail``.

    ``tail`` is another row: TRowExtend, TRowEmpty (closed) or TVar (open).
    """

    label: str
    field: Type
    tail: Type

    def __str__(self) -> str:
        return "<" + _render_row(self) + ">"

    def free_vars(self) -> set[TyVar]:
        return self.tail.free_vars() | self.field.free_vars()

    def substitute(self, subst: Subst) -> Type:
        return TRowExtend(self.label, self.field.substitute(subst), self.tail.substitute(subst))


def row_fields(row: Type) -> Iterator[tuple[str, Type]]:
    """Walk a row chain yielding each (label, field) pair, without any checks."""
    while isinstance(row, TRowExtend):
        yield row.label, row.field
        row = row.tail


def row_tail(row: Type) -> Type:
    """The type ending a row chain."""
    while isinstance(row, TRowExtend):
        row = row.tail
    return row


def _render_row(row: Type) -> str:
    entries = ", ".join(f"{label} = {field}" for label, field in row_fields(row))
    match row_tail(row):
        case TVar(var) if entries:
            return f"{entries} | {var.name}"
        case TVar(var):
            return f"| {var.name}"
        case _:
            return entries


def record_of(fields: Iterable[tuple[str, Type]], tail: Type | None = None) -> TRecord:
    """Build a record type from its fields, closed unless ``tail`` is given."""
    row: Type = tail if tail is not None else TRowEmpty()
    for label, field in reversed(list(fields)):
        row = TRowExtend(label, field, row)
    return TRecord(row)


@dataclass(frozen=True)
class Scheme:
    """Polymorphic type: forall vars . body."""

    vars: tuple[TyVar, ...]
    body: Type

    @staticmethod
    def mono(t: Type) -> Scheme:
        """Scheme quantifying nothing."""
        return Scheme((), t)

    def __str__(self) -> str:
        if not self.vars:
            return str(self.body)
        names = " ".join(v.name for v in self.vars)
        constraints = ", ".join(f"{v.name}\\{v.constraint}" for v in self.vars if v.labels)
        if constraints:
            return f"forall {names}. ({constraints}) => {self.body}"
        return f"forall {names}. {self.body}"

    def free_vars(self) -> set[TyVar]:
        return self.body.free_vars() - set(self.vars)

    def substitute(self, subst: Subst) -> Scheme:
        # Quantified variables are never replaced
        inner = {k: v for k, v in subst.items() if k not in self.vars}
        if not inner:
            return self
        return Scheme(self.vars, self.body.substitute(inner))


@dataclass(frozen=True)
class TypeEnv:
    """Bindings from term names to schemes.

    Extending an environment yields a new one; bindings shadow, never merge.
    """

    bindings: dict[str, Scheme]

    @staticmethod
    def empty() -> TypeEnv:
        return TypeEnv({})

    @staticmethod
    def of(bindings: Mapping[str, Scheme] | TypeEnv | None) -> TypeEnv:
        """Coerce a plain mapping (or None) into an environment."""
        if isinstance(bindings, TypeEnv):
            return bindings
        return TypeEnv(dict(bindings or {}))

    def lookup(self, name: str) -> Scheme | None:
        return self.bindings.get(name)

    def remove(self, name: str) -> TypeEnv:
        return TypeEnv({k: v for k, v in self.bindings.items() if k != name})

    def extend(self, name: str, scheme: Scheme) -> TypeEnv:
        bindings = self.remove(name).bindings
        bindings[name] = scheme
        return TypeEnv(bindings)

    def free_vars(self) -> set[TyVar]:
        result: set[TyVar] = set()
        for scheme in self.bindings.values():
            result |= scheme.free_vars()
        return result

    def substitute(self, subst: Subst) -> TypeEnv:
        return TypeEnv({k: v.substitute(subst) for k, v in self.bindings.items()})

    def __contains__(self, name: str) -> bool:
        return name in self.bindings

    def __len__(self) -> int:
        return len(self.bindings)


TypeRepr = Union[TVar, TInt, TBool, TFun, TRecord, TRowEmpty, TRowExtend]
