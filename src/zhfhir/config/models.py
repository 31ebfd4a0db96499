"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, zhfhir.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel


class IgConfig(BaseModel):
    """[ig] section — where the implementation guide checkout lives."""

    model_config = {"frozen": True}

    path: str = "./BD-Core-FHIR-IG"
    fsh_dir: str = "input/fsh"


class TerminologyConfig(BaseModel):
    """[terminology] section."""

    model_config = {"frozen": True}

    case_sensitive_filter: bool = False
