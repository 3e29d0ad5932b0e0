"""Core business logic layer.

Subpackages:
- comparison: best store for a cart
- deals: discount ranking
- pricing: catalog assembly and live price snapshots
"""
__all__ = ["comparison", "deals", "pricing"]
