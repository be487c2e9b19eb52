"""Error types for row-polymorphic type inference.

Every InferenceError is terminal for the run that raised it.
"""

from collections.abc import Iterable

from rowpoly.core.types import Type, TyVar


class InferenceError(Exception):
    """Base class for inference failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnboundVariable(InferenceError):
    """Expression refers to a name absent from the environment."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unbound variable: {name}")


class TypeMismatch(InferenceError):
    """Unification reached incompatible constructors."""

    def __init__(self, t1: Type, t2: Type):
        self.t1 = t1
        self.t2 = t2
        super().__init__(f"types do not unify: {t1} vs. {t2}")


class OccursCheck(InferenceError):
    """Binding the variable would build an infinite type."""

    def __init__(self, var: TyVar, t: Type):
        self.var = var
        self.t = t
        super().__init__(f"occurs check fails: {var} occurs in {t}")


class DuplicateLabel(InferenceError):
    """A row would hold the same label twice."""

    def __init__(self, labels: Iterable[str]):
        self.labels = frozenset(labels)
        super().__init__(f"repeated labels: {', '.join(sorted(self.labels))}")


class LabelNotFound(InferenceError):
    """Searching a closed row for a label ran off its end."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"label {label} cannot be inserted")


class RecursiveRowType(InferenceError):
    """Row unification would not terminate."""

    def __init__(self, var: TyVar):
        self.var = var
        super().__init__(f"recursive row type through {var}")


class RowInvariantError(RuntimeError):
    """A row operation was handed something that is not a row."""

    def __init__(self, t: Type, operation: str):
        self.t = t
        self.operation = operation
        super().__init__(f"{operation}: unexpected type {t}")
