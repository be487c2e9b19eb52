"""Core inference engine: types, substitutions, unification and Algorithm W."""

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
from rowpoly.core.errors import (
    DuplicateLabel,
    InferenceError,
    LabelNotFound,
    OccursCheck,
    RecursiveRowType,
    RowInvariantError,
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
from rowpoly.core.rows import constrain_row, decompose_row, rewrite_row, union_constraints, var_bind
from rowpoly.core.schemes import generalize, instantiate
from rowpoly.core.subst import Substitution
from rowpoly.core.types import (
    NO_CONSTRAINT,
    CNone,
    Constraint,
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
    Type,
    TypeEnv,
    lacks,
)
from rowpoly.core.unify import unify

__all__ = [
    # AST
    "Expr",
    "Var",
    "Prim",
    "App",
    "Abs",
    "Let",
    "PrimOp",
    "IntLit",
    "BoolLit",
    "RecordSelect",
    "RecordExtend",
    "RecordRestrict",
    "RecordEmpty",
    # Types
    "Type",
    "TVar",
    "TInt",
    "TBool",
    "TFun",
    "TRecord",
    "TRowEmpty",
    "TRowExtend",
    "TyVar",
    "Constraint",
    "CNone",
    "RowLacks",
    "NO_CONSTRAINT",
    "lacks",
    "Scheme",
    "TypeEnv",
    # Substitution and context
    "Substitution",
    "InferenceContext",
    # Rows and unification
    "decompose_row",
    "union_constraints",
    "var_bind",
    "constrain_row",
    "rewrite_row",
    "unify",
    # Schemes
    "generalize",
    "instantiate",
    # Inference
    "TypeInferencer",
    "InferenceResult",
    "type_inference",
    "try_type_inference",
    "principal_scheme",
    # Errors
    "InferenceError",
    "UnboundVariable",
    "TypeMismatch",
    "OccursCheck",
    "DuplicateLabel",
    "LabelNotFound",
    "RecursiveRowType",
    "RowInvariantError",
]
