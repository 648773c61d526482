"""
Core primitives: errors, configuration, numerical math, domain models and contracts.

This module contains the foundational building blocks shared by the plain and
currency pipelines; nothing here performs I/O.
"""
