"""Type inference for extensible records with constrained rows."""

__version__ = "0.1.0"
