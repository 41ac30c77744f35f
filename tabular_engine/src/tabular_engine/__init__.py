"""
Tabular Engine - In-memory typed-column tables

A small single-node table engine providing typed schemas, row storage,
stable sorting, first-match lookup, validated cell updates, and a
two-table projection merge.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"
