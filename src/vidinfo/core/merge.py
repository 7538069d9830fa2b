"""Merging of primary formats with manifest stubs."""

from typing import Dict, List, Iterable

from .models import Format


def format_key(fmt: Format) -> str:
    return str(fmt['itag'])


def merge_formats(primary: Iterable[Format], *aux_maps: Dict[str, Format]) -> List[Format]:
    """Merge auxiliary ``itag -> stub`` maps into the primary list.

    The first writer for an itag wins: primary entries are never replaced and
    a later map only fills itags no earlier source provided. The order is that
    of first occurrence.
    """
    merged: Dict[str, Format] = {}
    for fmt in primary:
        merged.setdefault(format_key(fmt), fmt)
    for formats_map in aux_maps:
        if not formats_map:
            continue
        for itag, stub in formats_map.items():
            merged.setdefault(str(itag), stub)
    return list(merged.values())
