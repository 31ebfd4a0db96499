"""Definition-file loader — CodeSystem and ValueSet records from FSH sources.

Reads the small subset of FHIR Shorthand used by the implementation guide's
terminology folders::

    CodeSystem: BDDivisionsCS
    Id: bd-divisions
    Title: "Bangladesh Divisions"
    Description: "Administrative divisions of Bangladesh"
    * ^url = "https://health.zarishsphere.com/fhir/CodeSystem/bd-divisions"
    * ^date = "2024-05-01"
    * #DH "Dhaka"
    * #CH "Chattogram"

Each ``CodeSystem:`` or ``ValueSet:`` line opens a block; the block becomes
a record when the next one opens or the text ends, and is registered under
its url. Blocks without a url are dropped. Everything else is ignored.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from zhfhir.domain.terminology import CodeSystem, CodeSystemConcept, ValueSet
from zhfhir.domain.types import PublicationStatus
from zhfhir.primitives.datetime import DateTime
from zhfhir.primitives.errors import FormatError

logger = logging.getLogger(__name__)

CODE_SYSTEMS_DIR = "codeSystems"
VALUE_SETS_DIR = "valueSets"
FSH_SUFFIX = ".fsh"

_KEYWORD_PATTERN = re.compile(r"([A-Za-z]+)\s*:\s*(.*)")
_CARET_PATTERN = re.compile(r"\*\s*\^(\w+)\s*=\s*(.*)")
_CONCEPT_PATTERN = re.compile(r'\*\s*#(\S+)(?:\s+"([^"]*)")?')


class IgLoadError(Exception):
    """A definition file could not be read or turned into a record."""


@dataclass
class _Block:
    """Fields collected for one CodeSystem or ValueSet block."""

    kind: str
    fields: dict[str, Any]
    concepts: list[CodeSystemConcept] = field(default_factory=list)


def _unquote(value: str) -> str:
    return value.strip().strip('"')


class IgLoader:
    """Loads terminology records from an implementation guide checkout.

    Attributes:
        code_systems: Loaded code systems keyed by canonical url.
        value_sets: Loaded value sets keyed by canonical url.
    """

    def __init__(self) -> None:
        self.code_systems: dict[str, CodeSystem] = {}
        self.value_sets: dict[str, ValueSet] = {}

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def load_from_ig(self, ig_path: Path, *, fsh_dir: str = "input/fsh") -> None:
        """Load every ``*.fsh`` file under the guide's terminology folders.

        Missing folders are skipped.
        """
        root = Path(ig_path) / fsh_dir
        for folder in (root / CODE_SYSTEMS_DIR, root / VALUE_SETS_DIR):
            if not folder.is_dir():
                logger.debug("Skipping missing folder %s", folder)
                continue
            for path in sorted(folder.rglob(f"*{FSH_SUFFIX}")):
                if path.is_file():
                    self.load_fsh_file(path)

    def load_fsh_file(self, path: Path) -> None:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Cannot read {path}: {exc}"
            raise IgLoadError(msg) from exc
        self.load_fsh_text(text, source=str(path))
        logger.debug("Loaded definitions from %s", path)

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def load_fsh_text(self, text: str, *, source: str = "<text>") -> None:
        """Parse FSH *text* and register the records it defines."""
        current: _Block | None = None

        for lineno, raw_line in enumerate(text.splitlines(), start=1):
            line = raw_line.strip()
            if not line or line.startswith("//"):
                continue

            concept = _CONCEPT_PATTERN.match(line)
            if concept is not None:
                if current is not None and current.kind == "CodeSystem":
                    code, display = concept.groups()
                    current.concepts.append(CodeSystemConcept(code=code, display=display))
                continue

            caret = _CARET_PATTERN.match(line)
            if caret is not None:
                if current is not None:
                    rule, value = caret.group(1), _unquote(caret.group(2))
                    self._apply_caret_rule(current, rule, value, source, lineno)
                continue

            keyword = _KEYWORD_PATTERN.fullmatch(line)
            if keyword is None:
                continue
            key, value = keyword.group(1), keyword.group(2).strip()
            if key in ("CodeSystem", "ValueSet"):
                self._register(current, source)
                current = _Block(kind=key, fields={"name": value})
            elif current is None:
                continue
            elif key == "Id":
                current.fields["id"] = value
            elif key == "Title":
                current.fields["title"] = _unquote(value)
            elif key == "Description":
                current.fields["description"] = _unquote(value)

        self._register(current, source)

    def _apply_caret_rule(
        self, block: _Block, rule: str, value: str, source: str, lineno: int
    ) -> None:
        if rule == "url":
            block.fields["url"] = value
        elif rule == "status":
            try:
                block.fields["status"] = PublicationStatus(value.lstrip("#"))
            except ValueError:
                logger.warning("Ignoring ^status at %s:%d: %r", source, lineno, value)
        elif rule == "date":
            try:
                block.fields["date"] = DateTime(value)
            except FormatError as exc:
                logger.warning("Ignoring ^date at %s:%d: %s", source, lineno, exc)

    def _register(self, block: _Block | None, source: str) -> None:
        if block is None:
            return
        url = block.fields.get("url")
        if not url:
            logger.debug(
                "Dropping %s %r without url in %s", block.kind, block.fields.get("name"), source
            )
            return
        try:
            if block.kind == "CodeSystem":
                self.code_systems[url] = CodeSystem(**block.fields, concept=block.concepts)
            else:
                self.value_sets[url] = ValueSet(**block.fields)
        except ValidationError as exc:
            msg = f"Invalid {block.kind} {url} in {source}: {exc}"
            raise IgLoadError(msg) from exc
