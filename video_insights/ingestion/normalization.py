"""Segment normalization: stable ordering and id assignment."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from video_insights.ingestion.models import Segment


def normalize_segments(segments: Iterable[Segment]) -> list[Segment]:
    """Return segments sorted by start time with every id filled in.

    The sort is stable, so segments sharing a start time keep their input
    order. A segment with an empty id receives its position in the sorted
    output (as a string); non-empty ids are kept as they are. The input is
    never modified.
    """
    ordered = sorted(segments, key=lambda seg: seg.start)
    return [seg if seg.id else replace(seg, id=str(index)) for index, seg in enumerate(ordered)]
