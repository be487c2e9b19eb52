"""Per-run inference state: fresh variable supply and error channel."""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING, NoReturn

from loguru import logger

from rowpoly.core.errors import InferenceError
from rowpoly.core.types import NO_CONSTRAINT, Constraint, TVar, TyVar

if TYPE_CHECKING:
    from rowpoly.config.settings import RowpolySettings


class InferenceContext:
    """State owned by exactly one top-level inference run.

    - fresh variable names are ``prefix + counter``, counter starting at 0
    - ``error`` holds the failure that ended the run, if any

    Never share one context between concurrent runs.
    """

    def __init__(self, *, trace: bool = False, type_prefix: str = "a", row_prefix: str = "r"):
        self._supply = itertools.count(0)
        self.error: InferenceError | None = None
        self.trace = trace
        self.type_prefix = type_prefix
        self.row_prefix = row_prefix

    @classmethod
    def from_settings(cls, settings: RowpolySettings) -> InferenceContext:
        return cls(
            trace=settings.trace,
            type_prefix=settings.fresh_type_prefix,
            row_prefix=settings.fresh_row_prefix,
        )

    def fresh(self, prefix: str | None = None) -> TVar:
        """Fresh unconstrained type variable."""
        return self.fresh_with(NO_CONSTRAINT, prefix)

    def fresh_with(self, constraint: Constraint, prefix: str | None = None) -> TVar:
        """Fresh type variable carrying ``constraint``."""
        name = f"{prefix or self.type_prefix}{next(self._supply)}"
        if self.trace:
            logger.debug("context.fresh name={} constraint={}", name, constraint)
        return TVar(TyVar(name, constraint))

    def fail(self, error: InferenceError) -> NoReturn:
        """Record ``error`` on the error channel and abort the run."""
        self.error = error
        if self.trace:
            logger.debug("context.fail error={}", error)
        raise error
