"""Tests for the Algorithm W driver."""

import pytest

from rowpoly.core.ast import Abs, Let, Var, apply, bool_, empty_record, extend, int_, restrict, select
from rowpoly.core.context import InferenceContext
from rowpoly.core.errors import (
    DuplicateLabel,
    InferenceError,
    LabelNotFound,
    OccursCheck,
    TypeMismatch,
    UnboundVariable,
)
from rowpoly.core.infer import (
    InferenceResult,
    TypeInferencer,
    principal_scheme,
    try_type_inference,
    type_inference,
)
from rowpoly.core.rows import decompose_row
from rowpoly.core.types import (
    RowLacks,
    Scheme,
    TBool,
    TFun,
    TInt,
    TRecord,
    TRowEmpty,
    TRowExtend,
    TVar,
    TyVar,
    TypeEnv,
    lacks,
)

y_record = apply(extend("y"), int_(2), empty_record())
xy_record = apply(extend("x"), int_(1), y_record)
select_x = Abs("r", apply(select("x"), Var("r")))

_s = TVar(TyVar("s"))
same = Scheme((_s.var,), TFun(_s, TFun(_s, _s)))


def fields_of(t):
    assert isinstance(t, TRecord)
    fields, tail = decompose_row(t.row)
    return dict(fields), tail


class TestPrimitives:
    """Tests for literal and record-operation schemes."""

    def test_literals(self):
        assert type_inference({}, int_(3)) == TInt()
        assert type_inference({}, bool_(False)) == TBool()

    def test_empty_record(self):
        assert type_inference({}, empty_record()) == TRecord(TRowEmpty())

    def test_select_scheme(self, ctx):
        t = type_inference({}, select("l"), ctx)
        a, r = TVar(TyVar("a0")), TVar(TyVar("r1", lacks("l")))
        assert t == TFun(TRecord(TRowExtend("l", a, r)), a)

    def test_extend_scheme(self, ctx):
        t = type_inference({}, extend("l"), ctx)
        a, r = TVar(TyVar("a0")), TVar(TyVar("r1", lacks("l")))
        assert t == TFun(a, TFun(TRecord(r), TRecord(TRowExtend("l", a, r))))

    def test_restrict_scheme(self, ctx):
        t = type_inference({}, restrict("l"), ctx)
        a, r = TVar(TyVar("a0")), TVar(TyVar("r1", lacks("l")))
        assert t == TFun(TRecord(TRowExtend("l", a, r)), TRecord(r))

    def test_fresh_per_occurrence(self):
        t = type_inference({"pair": _pair()}, apply(Var("pair"), select("x"), select("x")))
        first, second = t.arg, t.ret
        assert first.free_vars().isdisjoint(second.free_vars())


def _pair() -> Scheme:
    # pair : forall p q. p -> q -> (p -> q)
    p, q = TVar(TyVar("p")), TVar(TyVar("q"))
    return Scheme((p.var, q.var), TFun(p, TFun(q, TFun(p, q))))


class TestRecords:
    """Tests for record programs."""

    def test_single_field(self):
        fields, tail = fields_of(type_inference({}, y_record))
        assert fields == {"y": TInt()}
        assert tail is None

    def test_two_fields(self):
        t = type_inference({}, xy_record)
        assert t == TRecord(TRowExtend("x", TInt(), TRowExtend("y", TInt(), TRowEmpty())))
        assert str(t) == "{x = Int, y = Int}"

    def test_extension_order(self):
        """Extending in the other order yields the same labels and types."""
        yx_record = apply(extend("y"), int_(2), apply(extend("x"), int_(1), empty_record()))
        assert fields_of(type_inference({}, yx_record)) == fields_of(type_inference({}, xy_record))

    def test_select(self):
        assert type_inference({}, apply(select("y"), xy_record)) == TInt()

    def test_select_missing(self):
        with pytest.raises(LabelNotFound) as info:
            type_inference({}, apply(select("z"), xy_record))
        assert info.value.label == "z"

    def test_restrict(self):
        t = type_inference({}, apply(restrict("x"), xy_record))
        assert str(t) == "{y = Int}"

    def test_extend_existing_label(self):
        with pytest.raises(DuplicateLabel) as info:
            type_inference({}, apply(extend("y"), bool_(True), y_record))
        assert info.value.labels == {"y"}

    def test_select_from_non_record(self):
        with pytest.raises(TypeMismatch):
            type_inference({}, apply(select("x"), int_(1)))

    def test_open_record_function(self):
        t = type_inference({}, select_x)
        assert str(t) == "{x = a3 | r2} -> a3"

    def test_shared_tail_conflict(self):
        """Extending one record two different ways, then equating the results."""
        expr = Abs(
            "r",
            apply(Var("same"), apply(extend("x"), int_(1), Var("r")), apply(extend("y"), int_(2), Var("r"))),
        )
        with pytest.raises(DuplicateLabel):
            type_inference({"same": same}, expr)


class TestBinding:
    """Tests for variables, lambdas and lets."""

    def test_unbound(self):
        with pytest.raises(UnboundVariable) as info:
            type_inference({}, Var("undefined_name"))
        assert info.value.name == "undefined_name"

    def test_env_scheme_instantiated(self):
        t = type_inference({"same": same}, apply(Var("same"), int_(1)))
        assert t == TFun(TInt(), TInt())

    def test_lambda_shadowing(self):
        t = type_inference({}, Abs("x", Abs("x", Var("x"))))
        assert t == TFun(TVar(TyVar("a0")), TFun(TVar(TyVar("a1")), TVar(TyVar("a1"))))

    def test_let_shadows_env(self):
        env = {"x": Scheme.mono(TInt())}
        assert type_inference(env, Let("x", bool_(True), Var("x"))) == TBool()

    def test_let_polymorphism(self):
        scheme = principal_scheme({}, Let("f", select_x, Var("f")))
        assert str(scheme) == "forall a4 r5. (r5\\x) => {x = a4 | r5} -> a4"
        a, r = scheme.vars
        assert r.constraint == RowLacks(frozenset({"x"}))
        assert scheme.body == TFun(TRecord(TRowExtend("x", TVar(a), TVar(r))), TVar(a))

    def test_let_bound_used_at_two_shapes(self):
        one = apply(extend("x"), bool_(True), y_record)
        two = apply(extend("x"), int_(5), empty_record())
        body = apply(Var("pair"), apply(Var("f"), one), apply(Var("f"), two))
        t = type_inference({"pair": _pair()}, Let("f", select_x, body))
        assert t == TFun(TBool(), TInt())

    def test_let_polymorphic_identity(self):
        expr = Let("id", Abs("x", Var("x")), apply(Var("id"), Var("id"), bool_(True)))
        assert type_inference({}, expr) == TBool()

    def test_lambda_bound_is_monomorphic(self):
        expr = Abs("f", apply(Var("pair"), apply(Var("f"), int_(1)), apply(Var("f"), bool_(True))))
        with pytest.raises(TypeMismatch):
            type_inference({"pair": _pair()}, expr)

    def test_self_application(self):
        with pytest.raises(OccursCheck):
            type_inference({}, Abs("x", apply(Var("x"), Var("x"))))

    def test_apply_non_function(self):
        with pytest.raises(TypeMismatch):
            type_inference({}, apply(int_(1), int_(2)))


class TestEntryPoints:
    """Tests for the result-returning entry points."""

    def test_try_success(self):
        result = try_type_inference({}, apply(select("y"), xy_record))
        assert result.ok
        assert result.unwrap() == TInt()
        assert str(result) == "Int"

    def test_try_failure_records_error(self, ctx):
        result = try_type_inference({}, Var("nope"), ctx)
        assert not result.ok
        assert isinstance(result.error, UnboundVariable)
        assert ctx.error is result.error
        assert str(result) == "error: unbound variable: nope"
        with pytest.raises(InferenceError):
            result.unwrap()

    def test_counter_starts_at_zero_each_run(self):
        first = type_inference({}, select("x"))
        second = type_inference({}, select("x"))
        assert first == second

    def test_inferencer_returns_substitution(self, ctx):
        subst, t = TypeInferencer(ctx).infer(TypeEnv.empty(), apply(select("y"), xy_record))
        assert subst.apply(t) == TInt()

    def test_accepts_type_env(self):
        env = TypeEnv.empty().extend("one", Scheme.mono(TInt()))
        assert type_inference(env, Var("one")) == TInt()

    def test_traced_run(self):
        ctx = InferenceContext(trace=True)
        assert type_inference({}, apply(select("y"), xy_record), ctx) == TInt()

    def test_unwrap_without_type_or_error(self):
        with pytest.raises(RuntimeError):
            InferenceResult().unwrap()
