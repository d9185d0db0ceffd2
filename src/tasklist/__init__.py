"""
Tasklist - JSON-file backed to-do REST service.

A small FastAPI service that manages a flat list of tasks persisted in a
single JSON document.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
