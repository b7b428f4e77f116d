"""
Explicit relation accessors.

Each accessor loads exactly the rows a caller needs, already scoped to
the viewer, so callers never assemble joins ad hoc.
"""

from brandhub.repositories.brand_repository import BrandRepository, BrandWithAccess

__all__ = ["BrandRepository", "BrandWithAccess"]
