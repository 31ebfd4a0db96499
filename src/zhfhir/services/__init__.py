"""Service layer — operations returning ServiceResult.

Services may import from primitives, domain and infrastructure layers.
They must never import from commands or output.
"""
