"""
Domain model: the memo entity and its lifecycle rules.
"""
