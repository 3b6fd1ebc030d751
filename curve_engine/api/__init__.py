"""HTTP service exposing the curve engine."""
