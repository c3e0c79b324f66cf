"""Fuzzy task search and match highlighting.

Tasks are matched against the query on two weighted fields, ``name`` and
``description``. Matching is case-insensitive, tolerant of typos and not
tied to the start of a field. An exact substring scores 0 outright.

Otherwise the query is cut into short grams (trigrams, or bigrams for
queries under six characters) and every occurrence of a gram in the field
anchors a candidate window aligned with the query. Each window is compared
with :class:`difflib.SequenceMatcher` and trimmed to its matched
characters; the field's score is ``1 - ratio`` of its best window. Only
anchored windows are examined, so the cost follows the number of gram hits
rather than the length of the field.

A task's score is the weighted product of its matching fields' scores,
which keeps it in ``[0, 1]`` and rewards matching on both fields.
"""

from __future__ import annotations

import sys
from bisect import bisect_left, bisect_right
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from difflib import SequenceMatcher

from tasklens.models import FieldMatch, HighlightSegment, SearchResult, Task

SEARCH_KEYS: tuple[tuple[str, float], ...] = (
    ("name", 0.7),
    ("description", 0.3),
)
DEFAULT_THRESHOLD = 0.4
MIN_QUERY_LENGTH = 2

_EPSILON = sys.float_info.epsilon


@dataclass(frozen=True, slots=True)
class _IndexedField:
    text: str
    lowered: str


def _index_field(text: str) -> _IndexedField:
    lowered = text.lower()
    # lower() can change length for a few code points; fall back to the
    # original so offsets keep pointing into the displayed text.
    if len(lowered) != len(text):
        lowered = text
    return _IndexedField(text=text, lowered=lowered)


def _merge_spans(spans: Iterable[tuple[int, int]]) -> list[tuple[int, int]]:
    """Sort inclusive spans and fuse the ones that overlap or touch."""
    merged: list[tuple[int, int]] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1] + 1:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


class _QueryMatcher:
    """Scores one query against indexed fields."""

    def __init__(self, query: str, threshold: float):
        self.needle = query.lower()
        self.threshold = threshold
        size = len(self.needle)
        self.slack = max(1, size // 4)
        # Query characters allowed to go unmatched.
        self.max_errors = int(size * threshold)
        self.min_ratio = 1.0 - threshold

        gram = 3 if size >= 6 else 2
        self.grams: dict[str, list[int]] = {}
        for offset in range(size - gram + 1):
            self.grams.setdefault(self.needle[offset : offset + gram], []).append(offset)
        # Longer queries need two grams agreeing on roughly the same alignment
        self.min_support = 2 if size - gram + 1 >= 6 else 1

        self._matcher = SequenceMatcher(None, autojunk=False)
        self._matcher.set_seq2(self.needle)

    def _anchors(self, lowered: str) -> list[int]:
        """Field offsets where the query would start, backed by gram hits."""
        hits = []
        for gram, offsets in self.grams.items():
            position = lowered.find(gram)
            while position != -1:
                hits.extend(position - offset for offset in offsets)
                position = lowered.find(gram, position + 1)
        if not hits:
            return []

        hits.sort()
        if self.min_support == 1:
            return sorted(set(hits))
        slack = self.slack
        return [
            start
            for start in sorted(set(hits))
            if bisect_right(hits, start + slack) - bisect_left(hits, start - slack)
            >= self.min_support
        ]

    def match(self, field: _IndexedField) -> tuple[float, list[tuple[int, int]]] | None:
        needle = self.needle
        size = len(needle)
        lowered = field.lowered

        position = lowered.find(needle)
        if position != -1:
            spans = []
            while position != -1:
                spans.append((position, position + size - 1))
                position = lowered.find(needle, position + size)
            return 0.0, spans

        if self.max_errors == 0:
            return None

        matcher = self._matcher
        needed = size - self.max_errors
        best_ratio = 0.0
        best_spans: list[tuple[int, int]] = []
        for anchor in self._anchors(lowered):
            begin = max(0, anchor - self.slack)
            window = lowered[begin : anchor + size + self.slack]
            matcher.set_seq1(window)
            # quick_ratio bounds the number of matched characters
            if matcher.quick_ratio() * (len(window) + size) / 2 < needed - 1e-9:
                continue
            blocks = [block for block in matcher.get_matching_blocks() if block.size]
            matched = sum(block.size for block in blocks)
            if matched < needed:
                continue
            first = blocks[0].a
            last = blocks[-1].a + blocks[-1].size
            ratio = 2.0 * matched / ((last - first) + size)
            if ratio > best_ratio:
                best_ratio = ratio
                best_spans = [
                    (begin + block.a, begin + block.a + block.size - 1)
                    for block in blocks
                ]

        if not best_spans or best_ratio < self.min_ratio:
            return None
        return 1.0 - best_ratio, _merge_spans(best_spans)


class SearchIndex:
    """Caller-owned search index over a task snapshot.

    Holds the lower-cased field text so repeated searches over the same
    snapshot (search-as-you-type) skip re-reading the task models. Call
    :meth:`rebuild` when the snapshot changes.
    """

    def __init__(self, tasks: Iterable[Task] = ()):
        self._entries: list[tuple[Task, dict[str, _IndexedField]]] = []
        self.rebuild(tasks)

    def rebuild(self, tasks: Iterable[Task]) -> None:
        """Replace the indexed snapshot."""
        entries = []
        for task in tasks:
            fields = {}
            for key, _weight in SEARCH_KEYS:
                value = getattr(task, key, None)
                if value:
                    fields[key] = _index_field(value)
            entries.append((task, fields))
        self._entries = entries

    def __len__(self) -> int:
        return len(self._entries)

    def search(
        self,
        query: str,
        threshold: float = DEFAULT_THRESHOLD,
        limit: int | None = None,
        min_length: int = MIN_QUERY_LENGTH,
    ) -> list[SearchResult]:
        """Rank the indexed tasks against *query*, best match first.

        Queries shorter than *min_length* characters after trimming match
        nothing.
        """
        query = (query or "").strip()
        if not query or len(query) < min_length:
            return []

        scorer = _QueryMatcher(query, threshold)
        results = []
        for task, fields in self._entries:
            total = 1.0
            matches = []
            for key, weight in SEARCH_KEYS:
                field = fields.get(key)
                if field is None:
                    continue
                found = scorer.match(field)
                if found is None:
                    continue
                score, spans = found
                total *= max(score, _EPSILON) ** weight
                matches.append(FieldMatch(key=key, value=field.text, indices=spans))
            if matches:
                results.append(
                    SearchResult(task=task, matches=matches, score=min(total, 1.0))
                )

        # Stable sort keeps snapshot order among equal scores
        results.sort(key=lambda result: result.score)
        if limit is not None:
            results = results[:limit]
        return results


def search_tasks(
    tasks: Iterable[Task],
    query: str,
    threshold: float = DEFAULT_THRESHOLD,
    limit: int | None = None,
    min_length: int = MIN_QUERY_LENGTH,
) -> list[SearchResult]:
    """Fuzzy-search tasks by name and description.

    Args:
        tasks: Task snapshot to search
        query: Free-text query
        threshold: Highest field score still counted as a match
        limit: Maximum number of results
        min_length: Shortest trimmed query that is searched at all

    Returns:
        Results in ascending score order (best first)
    """
    return SearchIndex(tasks).search(
        query, threshold=threshold, limit=limit, min_length=min_length
    )


def highlight_matches(
    text: str, indices: Sequence[Sequence[int]] | None
) -> list[HighlightSegment]:
    """Split *text* into highlighted and plain segments.

    Spans are inclusive ``[start, end]`` pairs and may be unsorted or
    overlapping. Out-of-range spans are clamped to the text, and spans that
    end up empty are dropped. Concatenating the segment texts always gives
    back *text*.
    """
    if not text:
        return []

    last = len(text) - 1
    spans = []
    for span in indices or ():
        if len(span) < 2:
            continue
        start, end = max(int(span[0]), 0), min(int(span[1]), last)
        if start <= end:
            spans.append((start, end))

    if not spans:
        return [HighlightSegment(text=text, highlighted=False)]

    segments = []
    cursor = 0
    for start, end in _merge_spans(spans):
        if start > cursor:
            segments.append(HighlightSegment(text=text[cursor:start], highlighted=False))
        segments.append(HighlightSegment(text=text[start : end + 1], highlighted=True))
        cursor = end + 1

    if cursor < len(text):
        segments.append(HighlightSegment(text=text[cursor:], highlighted=False))

    return segments
