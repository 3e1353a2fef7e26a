"""Grapheme segmentation and terminal cell widths.

A grapheme cluster occupies two cells when any of its code points is wide or
fullwidth, and one cell otherwise. Ambiguous-width, zero-width and control
clusters all count as one cell so that every cursor stop advances the
display column.
"""

from __future__ import annotations

import grapheme
import wcwidth as _wcwidth

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 1024


def segment(text: str) -> list[str]:
    """Split ``text`` into extended grapheme clusters."""

    if text.isascii():
        return list(text)
    return list(grapheme.graphemes(text))


def cluster_width(cluster: str) -> int:
    """Display width (1 or 2) of a single grapheme cluster."""

    if not cluster:
        return 0
    if len(cluster) == 1 and cluster.isascii():
        return 1
    cached = _width_cache.get(cluster)
    if cached is not None:
        return cached

    width = 2 if any(_wcwidth.wcwidth(cp) == 2 for cp in cluster) else 1

    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[cluster] = width
    return width


def text_width(text: str) -> int:
    return sum(cluster_width(cluster) for cluster in segment(text))


def clip_to_width(text: str, width: int) -> str:
    """Longest grapheme prefix of ``text`` that fits in ``width`` cells."""

    used = 0
    end = 0
    for cluster in segment(text):
        used += cluster_width(cluster)
        if used > width:
            break
        end += len(cluster)
    return text[:end]


__all__ = ["segment", "cluster_width", "text_width", "clip_to_width"]
