"""Domain layer — FHIR records built from primitive value types.

This layer depends only on stdlib, pydantic and :mod:`zhfhir.primitives`.
It must never import from services, infrastructure, commands, or config.
"""
