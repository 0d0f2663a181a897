"""Concrete adapters for the interfaces in ``jutsudex.interfaces``."""
