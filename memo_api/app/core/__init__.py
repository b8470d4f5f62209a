"""
Shared infrastructure: settings, logging, storage engine, dependency
container and the error taxonomy.
"""
