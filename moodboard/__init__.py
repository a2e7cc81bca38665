"""
Moodboard Studio — turns room photos and free-text preferences into
structured design attributes and a moodboard generation prompt.
"""

from .records import AttributeRecord, DesignHints, StyleOverrides
from .pipeline import MoodboardPipeline, MoodboardResult, SummaryResult

__all__ = [
    "AttributeRecord",
    "DesignHints",
    "StyleOverrides",
    "MoodboardPipeline",
    "MoodboardResult",
    "SummaryResult",
]
