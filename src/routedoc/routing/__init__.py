"""Routing: node variants, path compilation, and the registration API.

Routes are registered during setup into a tree of nodes; the walker
reads that tree, it never changes it.
"""
