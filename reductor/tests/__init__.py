"""
Test suite for reductor.

Focus areas:
- Shape catalog construction and declaration defects
- Handler resolution diagnostics (exact message formats)
- Constructor selection
- Generated dispatcher behaviour and golden rendered source
- Runtime fallback builders and their cache
"""
