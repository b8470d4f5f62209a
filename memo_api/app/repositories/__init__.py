"""
Storage adapters.  Repositories translate between the document store
and the plain records the service layer works with.
"""
