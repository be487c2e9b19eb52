"""Generalization and instantiation of type schemes."""

from rowpoly.core.context import InferenceContext
from rowpoly.core.subst import Substitution
from rowpoly.core.types import Scheme, Type, TypeEnv


def generalize(env: TypeEnv, t: Type) -> Scheme:
    """Quantify ``t`` over the variables free in it but not in ``env``.

    Constraints travel with the quantified variables unchanged.
    """
    quantified = t.free_vars() - env.free_vars()
    return Scheme(tuple(sorted(quantified, key=lambda v: v.name)), t)


def instantiate(ctx: InferenceContext, scheme: Scheme) -> Type:
    """Replace each quantified variable with a fresh one of the same prefix and constraint."""
    fresh = {var: ctx.fresh_with(var.constraint, var.name[:1] or None) for var in scheme.vars}
    return Substitution(fresh).apply(scheme.body)
