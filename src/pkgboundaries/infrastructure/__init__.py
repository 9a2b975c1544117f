"""Infrastructure layer — policy file I/O and Python source analysis.

This layer depends on stdlib, pydantic, and the domain layer.
It must never import from services, commands, or output.
"""
