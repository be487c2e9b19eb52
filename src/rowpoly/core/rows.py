"""Row decomposition, lacks-constraint handling and row rewriting."""

from __future__ import annotations

from loguru import logger

from rowpoly.core.context import InferenceContext
from rowpoly.core.errors import DuplicateLabel, LabelNotFound, OccursCheck, RowInvariantError, TypeMismatch
from rowpoly.core.subst import Substitution
from rowpoly.core.types import NO_CONSTRAINT, RowLacks, TRowEmpty, TRowExtend, TVar, Type, TyVar


def decompose_row(row: Type) -> tuple[list[tuple[str, Type]], TyVar | None]:
    """Split a row into its fields and its open tail variable.

    Returns the (label, field) pairs in chain order and the tail variable,
    or None for a row closed by TRowEmpty.

    Raises:
        DuplicateLabel: If the chain repeats a label
        RowInvariantError: If the chain ends in something that is not a row
    """
    fields: list[tuple[str, Type]] = []
    seen: set[str] = set()
    while True:
        match row:
            case TRowExtend(label, field, tail):
                if label in seen:
                    raise DuplicateLabel([label])
                seen.add(label)
                fields.append((label, field))
                row = tail
            case TRowEmpty():
                return fields, None
            case TVar(var):
                return fields, var
            case _:
                raise RowInvariantError(row, "decompose_row")


def is_row(t: Type) -> bool:
    return isinstance(t, (TRowExtend, TRowEmpty, TVar))


def union_constraints(ctx: InferenceContext, u: TyVar, v: TyVar) -> Substitution:
    """Unify two type variables, merging whatever they lack."""
    if u == v:
        return Substitution.empty()
    if u.constraint == NO_CONSTRAINT and v.constraint == NO_CONSTRAINT:
        return Substitution.singleton(u, TVar(v))
    r = ctx.fresh_with(RowLacks(u.labels | v.labels), ctx.row_prefix)
    return Substitution({u: r, v: r})


def var_bind(ctx: InferenceContext, u: TyVar, t: Type) -> Substitution:
    """Bind ``u`` to ``t``, honouring the occurs check and u's constraint."""
    if u in t.free_vars():
        ctx.fail(OccursCheck(u, t))
    match u.constraint:
        case RowLacks(labels):
            return constrain_row(ctx, labels, u, t)
        case _:
            return Substitution.singleton(u, t)


def constrain_row(ctx: InferenceContext, labels: frozenset[str], u: TyVar, t: Type) -> Substitution:
    """Bind the lacks-constrained ``u`` to the row ``t``.

    The row must not already hold any of ``labels``. An open tail of ``t``
    is re-bound to a fresh variable that also lacks ``labels``.
    """
    if not is_row(t):
        ctx.fail(TypeMismatch(TVar(u), t))
    try:
        fields, tail = decompose_row(t)
    except DuplicateLabel as e:
        ctx.fail(e)
    clash = labels & {label for label, _ in fields}
    if clash:
        ctx.fail(DuplicateLabel(clash))
    binding = Substitution.singleton(u, t)
    if tail is None:
        return binding
    r2 = ctx.fresh_with(RowLacks(labels | tail.labels), ctx.row_prefix)
    return Substitution.singleton(tail, r2).compose(binding)


def rewrite_row(ctx: InferenceContext, row: Type, label: str) -> tuple[Type, Type, Substitution]:
    """Bring ``label`` to the front of ``row``.

    Returns the field type found (or invented) for ``label``, the row with
    that field removed, and the substitution needed to make it so. An open
    tail that may still hold ``label`` is extended with a fresh field.
    """
    if ctx.trace:
        logger.debug("rows.rewrite label={} row={}", label, row)
    match row:
        case TRowEmpty():
            ctx.fail(LabelNotFound(label))
        case TRowExtend(found, field, tail) if found == label:
            return field, tail, Substitution.empty()
        case TRowExtend(other, field, TVar(alpha)):
            if label in alpha.labels:
                ctx.fail(DuplicateLabel([label]))
            beta = ctx.fresh_with(RowLacks(alpha.labels | {label}), ctx.row_prefix)
            gamma = ctx.fresh(ctx.type_prefix)
            return (
                gamma,
                TRowExtend(other, field, beta),
                Substitution.singleton(alpha, TRowExtend(label, gamma, beta)),
            )
        case TRowExtend(other, field, tail):
            field2, tail2, s = rewrite_row(ctx, tail, label)
            return field2, TRowExtend(other, field, tail2), s
        case _:
            raise RowInvariantError(row, "rewrite_row")
