"""
API package containing versioned routes.

A version subpackage (``v1``) exposes a top‑level ``router`` which
includes all of its endpoints; ``deps`` provides the FastAPI
dependencies shared by every version.
"""
