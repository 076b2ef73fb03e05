"""
Expense Tracker - Source Package

A small personal expense ledger driven from the command line.
The ledger lives in a single JSON file on disk.

DESIGN PRINCIPLES:
1. One invocation = load → change → save
2. Fail early, fail visibly
3. No silent corrections
4. Every step must be auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
