"""
Python kernels.

These modules are designed to be:
- deterministic (integer-only, no floats),
- overflow-checked against the unsigned 256-bit range,
- easy to audit (explicit intermediate variables),
- small surface-area (pure functions, typed results).
"""
