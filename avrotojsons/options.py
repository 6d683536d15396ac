"""
Conversion options and JSON Schema draft selection.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class JsonSchemaDraft(Enum):
    """
    Supported JSON Schema drafts.

    Each member fixes the `$schema` URL and the keyword of the definitions
    table; the `$ref` prefix is derived from the keyword.
    """
    DRAFT_07 = ("http://json-schema.org/draft-07/schema#", "definitions")
    DRAFT_2020_12 = ("https://json-schema.org/draft/2020-12/schema", "$defs")

    def __init__(self, schema_url: str, definitions_keyword: str) -> None:
        self.schema_url = schema_url
        self.definitions_keyword = definitions_keyword
        self.ref_prefix = f"#/{definitions_keyword}/"

    @classmethod
    def from_string(cls, name: Optional[str]) -> 'JsonSchemaDraft':
        """
        Resolve a draft identifier such as 'draft-07' or 'draft-2020-12'.
        Unknown identifiers fall back to draft-07.
        """
        if name == 'draft-2020-12':
            return cls.DRAFT_2020_12
        return cls.DRAFT_07


PRESET_STRICT = 'strict'
PRESET_POJO_OPTIMIZED = 'pojo-optimized'
PRESETS = [PRESET_POJO_OPTIMIZED, PRESET_STRICT]


@dataclass(frozen=True)
class ConverterOptions:
    """
    Immutable set of toggles for a conversion.

    Use the `strict()` or `pojo_optimized()` presets and override single
    fields with `with_draft()` or `with_overrides()`.
    """
    flatten_nullable_unions: bool = True
    additional_properties_false: bool = True
    omit_empty_required: bool = True
    java_type_hints: bool = True
    draft: JsonSchemaDraft = JsonSchemaDraft.DRAFT_07

    @classmethod
    def pojo_optimized(cls) -> 'ConverterOptions':
        """Output shaped for downstream code generation."""
        return cls(True, True, True, True, JsonSchemaDraft.DRAFT_07)

    @classmethod
    def strict(cls) -> 'ConverterOptions':
        """Plain JSON Schema output without generator hints."""
        return cls(False, False, False, False, JsonSchemaDraft.DRAFT_07)

    @classmethod
    def from_preset(cls, preset: Optional[str] = None) -> 'ConverterOptions':
        """
        Resolve a preset name. None selects the default 'pojo-optimized' preset.

        Raises:
            ValueError: If the preset name is unknown.
        """
        if preset is None or preset == PRESET_POJO_OPTIMIZED:
            return cls.pojo_optimized()
        if preset == PRESET_STRICT:
            return cls.strict()
        raise ValueError(f"Unknown preset '{preset}', expected one of {', '.join(PRESETS)}")

    def with_draft(self, draft: JsonSchemaDraft) -> 'ConverterOptions':
        return replace(self, draft=draft)

    def with_overrides(self, **toggles) -> 'ConverterOptions':
        """Return a copy with the given fields replaced."""
        return replace(self, **toggles)
