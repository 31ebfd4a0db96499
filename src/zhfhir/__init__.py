"""zhfhir — FHIR temporal primitives, extensions and terminology tooling."""

__version__ = "0.1.0"
