"""Algorithm W over records with constrained rows."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from loguru import logger

from rowpoly.core.ast import (
    Abs,
    App,
    BoolLit,
    Expr,
    IntLit,
    Let,
    Prim,
    PrimOp,
    RecordEmpty,
    RecordExtend,
    RecordRestrict,
    RecordSelect,
    Var,
)
from rowpoly.core.context import InferenceContext
from rowpoly.core.errors import InferenceError, UnboundVariable
from rowpoly.core.schemes import generalize, instantiate
from rowpoly.core.subst import Substitution
from rowpoly.core.types import (
    Scheme,
    TBool,
    TFun,
    TInt,
    TRecord,
    TRowEmpty,
    TRowExtend,
    Type,
    TypeEnv,
    lacks,
)
from rowpoly.core.unify import unify

EnvLike = Mapping[str, Scheme] | TypeEnv | None


class TypeInferencer:
    """Walks an expression producing Algorithm W's (substitution, type) pairs.

    One inferencer per run; it draws every fresh variable from its context.
    """

    def __init__(self, ctx: InferenceContext | None = None):
        self.ctx = ctx if ctx is not None else InferenceContext()

    def infer(self, env: TypeEnv, expr: Expr) -> tuple[Substitution, Type]:
        """Infer the type of ``expr`` under ``env``.

        Raises:
            InferenceError: On the first failure met in the depth-first walk
        """
        ctx = self.ctx
        if ctx.trace:
            logger.debug("infer.node kind={} expr={}", type(expr).__name__, expr)
        match expr:
            case Var(name):
                scheme = env.lookup(name)
                if scheme is None:
                    ctx.fail(UnboundVariable(name))
                return Substitution.empty(), instantiate(ctx, scheme)

            case Prim(op):
                return Substitution.empty(), self._infer_prim(op)

            case App(func, arg):
                s1, t1 = self.infer(env, func)
                s2, t2 = self.infer(s1.apply(env), arg)
                tv = ctx.fresh(ctx.type_prefix)
                s3 = unify(ctx, s2.apply(t1), TFun(t2, tv))
                return s3.compose(s2.compose(s1)), s3.apply(tv)

            case Abs(param, body):
                tv = ctx.fresh(ctx.type_prefix)
                inner = env.extend(param, Scheme.mono(tv))
                s1, t1 = self.infer(inner, body)
                return s1, TFun(s1.apply(tv), t1)

            case Let(name, bound, body):
                s1, t1 = self.infer(env, bound)
                scheme = generalize(s1.apply(env), t1)
                inner = env.extend(name, scheme)
                s2, t2 = self.infer(s1.apply(inner), body)
                return s2.compose(s1), t2

            case _:
                raise TypeError(f"Unknown expression: {expr!r}")

    def _infer_prim(self, op: PrimOp) -> Type:
        ctx = self.ctx
        match op:
            case IntLit(_):
                return TInt()
            case BoolLit(_):
                return TBool()
            case RecordEmpty():
                return TRecord(TRowEmpty())
            case RecordSelect(label):
                a = ctx.fresh(ctx.type_prefix)
                r = ctx.fresh_with(lacks(label), ctx.row_prefix)
                return TFun(TRecord(TRowExtend(label, a, r)), a)
            case RecordExtend(label):
                a = ctx.fresh(ctx.type_prefix)
                r = ctx.fresh_with(lacks(label), ctx.row_prefix)
                return TFun(a, TFun(TRecord(r), TRecord(TRowExtend(label, a, r))))
            case RecordRestrict(label):
                a = ctx.fresh(ctx.type_prefix)
                r = ctx.fresh_with(lacks(label), ctx.row_prefix)
                return TFun(TRecord(TRowExtend(label, a, r)), TRecord(r))
            case _:
                raise TypeError(f"Unknown primitive: {op!r}")


def type_inference(env: EnvLike, expr: Expr, ctx: InferenceContext | None = None) -> Type:
    """Infer the type of ``expr``, with the final substitution applied.

    Raises:
        InferenceError: If ``expr`` has no type under ``env``
    """
    inferencer = TypeInferencer(ctx)
    s, t = inferencer.infer(TypeEnv.of(env), expr)
    return s.apply(t)


def principal_scheme(env: EnvLike, expr: Expr, ctx: InferenceContext | None = None) -> Scheme:
    """Infer ``expr`` and close its type over every free variable."""
    return generalize(TypeEnv.empty(), type_inference(env, expr, ctx))


@dataclass(frozen=True)
class InferenceResult:
    """Outcome of one inference run: exactly one of ``type`` and ``error`` is set."""

    type: Type | None = None
    error: InferenceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Type:
        if self.error is not None:
            raise self.error
        if self.type is None:
            raise RuntimeError("inference result holds neither a type nor an error")
        return self.type

    def scheme(self) -> Scheme:
        return generalize(TypeEnv.empty(), self.unwrap())

    def __str__(self) -> str:
        if self.error is not None:
            return f"error: {self.error}"
        return str(self.scheme())


def try_type_inference(env: EnvLike, expr: Expr, ctx: InferenceContext | None = None) -> InferenceResult:
    """Like type_inference, but reports failure as a value instead of raising."""
    ctx = ctx if ctx is not None else InferenceContext()
    try:
        return InferenceResult(type=type_inference(env, expr, ctx))
    except InferenceError as e:
        ctx.error = e
        return InferenceResult(error=e)
