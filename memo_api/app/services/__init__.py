"""
Service layer.

Validation, read and write concerns are kept in separate services.
Read and write services receive the repository through their
constructor; the validation service is stateless and depends only on
the memo rules.
"""
