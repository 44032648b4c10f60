"""
Catalog - named scale formulas, chord formulas and stringed instruments.

The built-in library is YAML shipped in catalog/library/.
"""

from bach_theory.catalog.registry import KeyedCollection, Registry

__all__ = ["KeyedCollection", "Registry"]
