"""
Fintrack - Source Package

A personal financial tracker built around a pure Financial Computation
Engine: interest and amortization figures, reconciled account balances,
investment evaluation and aggregate financial summaries.

DESIGN PRINCIPLES:
1. The engine is pure: collections in, new values out
2. Balances are derived from the ledger, never trusted as stored
3. Configuration is passed explicitly, never read from ambient state
4. Every ledger mutation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Fintrack Team"
