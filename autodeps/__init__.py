"""autodeps — install dependencies for every subproject in a tree."""

__version__ = "0.1.0"
