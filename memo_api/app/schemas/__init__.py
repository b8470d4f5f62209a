"""
Pydantic schema definitions for API payloads.

Schemas are separated from the domain entity to decouple the wire
representation (camelCase, response envelopes) from the memo rules.
"""
