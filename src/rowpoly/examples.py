"""Sample expressions exercising records, rows and let-polymorphism."""

from __future__ import annotations

from dataclasses import dataclass, field

from rowpoly.core.ast import Abs, Expr, Let, Var, apply, bool_, empty_record, extend, int_, restrict, select
from rowpoly.core.context import InferenceContext
from rowpoly.core.infer import InferenceResult, try_type_inference
from rowpoly.core.types import Scheme, TFun, TVar, TyVar


@dataclass(frozen=True)
class Example:
    name: str
    expr: Expr
    env: dict[str, Scheme] = field(default_factory=dict)

    def run(self, ctx: InferenceContext | None = None) -> InferenceResult:
        return try_type_inference(self.env, self.expr, ctx)


_s = TVar(TyVar("s"))
PRELUDE: dict[str, Scheme] = {
    # same : forall s. s -> s -> s
    "same": Scheme((_s.var,), TFun(_s, TFun(_s, _s))),
}

_e1 = apply(extend("y"), int_(2), empty_record())
_e2 = apply(extend("x"), int_(1), _e1)
_select_x = Abs("r", apply(select("x"), Var("r")))

EXAMPLES: list[Example] = [
    Example("e1", _e1),
    Example("e2", _e2),
    Example("e3", apply(select("y"), _e2)),
    Example("e4", Let("f", _select_x, Var("f"))),
    Example("e5", _select_x),
    Example("restrict", apply(restrict("x"), _e2)),
    Example("poly_id", Let("id", Abs("x", Var("x")), apply(Var("id"), Var("id"), bool_(True)))),
    Example("missing_label", apply(select("z"), _e2)),
    Example(
        "shared_tail",
        Abs("r", apply(Var("same"), apply(extend("x"), int_(1), Var("r")), apply(extend("y"), int_(2), Var("r")))),
        PRELUDE,
    ),
    Example("unbound", Var("undefined_name")),
]


def find_example(name: str) -> Example | None:
    for example in EXAMPLES:
        if example.name == name:
            return example
    return None
