"""Unification over function, record and row types."""

from loguru import logger

from rowpoly.core.context import InferenceContext
from rowpoly.core.errors import DuplicateLabel, RecursiveRowType, TypeMismatch
from rowpoly.core.rows import decompose_row, rewrite_row, union_constraints, var_bind
from rowpoly.core.subst import Substitution
from rowpoly.core.types import TBool, TFun, TInt, TRecord, TRowEmpty, TRowExtend, TVar, Type, row_tail


def unify(ctx: InferenceContext, t1: Type, t2: Type) -> Substitution:
    """Compute the most general unifier of two types.

    Args:
        ctx: Context supplying fresh variables and recording failures
        t1: First type
        t2: Second type

    Returns:
        A substitution θ such that θ(t1) = θ(t2)

    Raises:
        TypeMismatch: If the constructors are incompatible
        OccursCheck: If a variable would be bound to a type containing it
        DuplicateLabel: If a row would repeat a label
        LabelNotFound: If a closed row lacks a required label
        RecursiveRowType: If row unification would not terminate
    """
    if ctx.trace:
        logger.debug("unify.step left={} right={}", t1, t2)
    match t1, t2:
        case TFun(arg1, ret1), TFun(arg2, ret2):
            s1 = unify(ctx, arg1, arg2)
            s2 = unify(ctx, s1.apply(ret1), s1.apply(ret2))
            return s2.compose(s1)

        case TVar(u), TVar(v):
            return union_constraints(ctx, u, v)

        case TVar(v), _:
            return var_bind(ctx, v, t2)

        case _, TVar(v):
            return var_bind(ctx, v, t1)

        case (TInt(), TInt()) | (TBool(), TBool()) | (TRowEmpty(), TRowEmpty()):
            return Substitution.empty()

        case TRecord(row1), TRecord(row2):
            return unify(ctx, row1, row2)

        case TRowExtend(), (TRowExtend() | TRowEmpty()):
            return _unify_rows(ctx, t1, t2)

        case _:
            ctx.fail(TypeMismatch(t1, t2))


def _unify_rows(ctx: InferenceContext, row1: TRowExtend, row2: Type) -> Substitution:
    try:
        _, end1 = decompose_row(row1)
        decompose_row(row2)
    except DuplicateLabel as e:
        ctx.fail(e)

    field1, tail1 = row1.field, row1.tail
    field2, tail2, theta1 = rewrite_row(ctx, row2, row1.label)

    # Both remainders must not end in a tail the rewrite just bound.
    ends = [end1]
    match row_tail(tail2):
        case TVar(end2):
            ends.append(end2)
    for var in ends:
        if var is not None and var in theta1:
            ctx.fail(RecursiveRowType(var))

    theta2 = unify(ctx, theta1.apply(field1), theta1.apply(field2))
    s = theta2.compose(theta1)
    theta3 = unify(ctx, s.apply(tail1), s.apply(tail2))
    return theta3.compose(s)
