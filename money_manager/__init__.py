"""
Money Manager - Source Package

A personal finance tracker: income/expense transactions, transfers
between accounts, and dashboards over personal and office spending.

DESIGN PRINCIPLES:
1. The ledger store is the only writer of balances
2. Fail early, fail visibly
3. Locked transactions stay locked
4. Every mutation is audited
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Money Manager Team"
