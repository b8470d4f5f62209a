"""
Application package initializer.

The project is organised in layers: ``domain`` holds the memo entity
and its lifecycle rules, ``repositories`` adapts the document store,
``services`` orchestrates reads and writes, and ``api`` exposes the
HTTP routes grouped under ``api/<version>/``.  ``core`` carries the
shared plumbing (configuration, logging, storage, dependency
container and the error taxonomy).
"""

from .main import app  # noqa: F401
