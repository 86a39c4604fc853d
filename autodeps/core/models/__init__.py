"""
Domain models — Pydantic types for the scanner.

All models are re-exported here for convenient access:

    from autodeps.core.models import Action, Outcome, ScanOptions
"""

from autodeps.core.models.action import Action, Outcome
from autodeps.core.models.manifest import Category, ManifestDescriptor
from autodeps.core.models.options import ScanOptions, category_allowed, parse_only

__all__ = [
    # action.py
    "Action",
    # manifest.py
    "Category",
    "ManifestDescriptor",
    "Outcome",
    # options.py
    "ScanOptions",
    "category_allowed",
    "parse_only",
]
