"""
Module: core.models

Purpose:
    Immutable value types shared by every stage of the engine.

Key Classes:
    - PageSize: Physical page geometry in millimeters
    - ParsedPage: One page of source text and its rendered HTML

Key Functions:
    - get_preset(): Look up a named page size
    - preset_name_for(): Reverse lookup of a page size to its preset name
"""

from .page_size import (
    PageSize,
    PAGE_PRESETS,
    DEFAULT_PAGE_SIZE,
    CUSTOM_PRESET,
    get_preset,
    preset_name_for,
)
from .pages import ParsedPage

__all__ = [
    "PageSize",
    "PAGE_PRESETS",
    "DEFAULT_PAGE_SIZE",
    "CUSTOM_PRESET",
    "get_preset",
    "preset_name_for",
    "ParsedPage",
]
