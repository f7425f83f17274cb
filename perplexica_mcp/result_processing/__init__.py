"""Result processing module."""

from .formatter import NO_SOURCES_LINE, format_providers_blocks, format_search_markdown

__all__ = ["NO_SOURCES_LINE", "format_providers_blocks", "format_search_markdown"]
