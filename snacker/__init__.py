"""
Snacker - Source Package

A local-first personal finance tracker: income and expense transactions,
categories, monthly summaries and an expense distribution.

DESIGN PRINCIPLES:
1. One stored document, always replaced as a whole
2. Missing or corrupt storage is never fatal
3. Derived views are recomputed, never cached
4. State is created once and passed to consumers explicitly
"""

__version__ = "1.0.0"
