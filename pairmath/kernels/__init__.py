"""
Kernel layer.

- `pairmath/kernels/python/` contains the integer-only kernels (fixed-point
  primitives, CPMM swap, LP math) that the quoting API in `pairmath/core/`
  is built on.
- `pairmath/kernels/params/` contains the default engine parameters (.yaml).
"""
