"""Expression trees handed to the inference driver."""

from __future__ import annotations

from dataclasses import dataclass


class Expr:
    """Base class for expressions."""

    pass


class PrimOp:
    """Base class for primitive literals and record operations."""

    pass


@dataclass(frozen=True)
class IntLit(PrimOp):
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BoolLit(PrimOp):
    value: bool

    def __str__(self) -> str:
        return "True" if self.value else "False"


@dataclass(frozen=True)
class RecordSelect(PrimOp):
    """Field selection: (_.l)."""

    label: str

    def __str__(self) -> str:
        return f"(_.{self.label})"


@dataclass(frozen=True)
class RecordExtend(PrimOp):
    """Record extension: {l=_|_}, curried over the field value then the record."""

    label: str

    def __str__(self) -> str:
        return f"{{{self.label}=_|_}}"


@dataclass(frozen=True)
class RecordRestrict(PrimOp):
    """Field removal: (_-l)."""

    label: str

    def __str__(self) -> str:
        return f"(_-{self.label})"


@dataclass(frozen=True)
class RecordEmpty(PrimOp):
    def __str__(self) -> str:
        return "{}"


@dataclass(frozen=True)
class Var(Expr):
    """Reference to a name bound in the type environment."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Prim(Expr):
    op: PrimOp

    def __str__(self) -> str:
        return str(self.op)


@dataclass(frozen=True)
class App(Expr):
    """Function application: func arg."""

    func: Expr
    arg: Expr

    def __str__(self) -> str:
        func = f"({self.func})" if isinstance(self.func, (Abs, Let)) else str(self.func)
        arg = f"({self.arg})" if isinstance(self.arg, (App, Abs, Let)) else str(self.arg)
        return f"{func} {arg}"


@dataclass(frozen=True)
class Abs(Expr):
    """Lambda abstraction: \\param -> body."""

    param: str
    body: Expr

    def __str__(self) -> str:
        return f"\\{self.param} -> {self.body}"


@dataclass(frozen=True)
class Let(Expr):
    """let name = bound in body. The only place polymorphism is introduced."""

    name: str
    bound: Expr
    body: Expr

    def __str__(self) -> str:
        return f"let {self.name} = {self.bound} in {self.body}"


def apply(func: Expr, *args: Expr) -> Expr:
    """Left-nested application of ``func`` to each argument in turn."""
    result = func
    for arg in args:
        result = App(result, arg)
    return result


def int_(value: int) -> Prim:
    return Prim(IntLit(value))


def bool_(value: bool) -> Prim:
    return Prim(BoolLit(value))


def select(label: str) -> Prim:
    return Prim(RecordSelect(label))


def extend(label: str) -> Prim:
    return Prim(RecordExtend(label))


def restrict(label: str) -> Prim:
    return Prim(RecordRestrict(label))


def empty_record() -> Prim:
    return Prim(RecordEmpty())
