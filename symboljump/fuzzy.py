"""Symbol label matching: contiguous substrings first, then scored subsequences."""

from __future__ import annotations

_WORD_BOUNDARIES = "._- /"


def substring_index(query: str, candidate: str) -> int | None:
    if not query:
        return 0
    idx = candidate.casefold().find(query.casefold())
    return None if idx < 0 else idx


def fuzzy_score(query: str, candidate: str) -> int | None:
    """Score ``query`` as an in-order subsequence of ``candidate``.

    Consecutive runs and matches at word boundaries (dots included, so module
    segments count) score higher; gaps and long candidates score lower.
    """
    if not query:
        return 0
    candidate_folded = candidate.casefold()

    score = 0
    prev_idx = -1
    run = 0
    for needle in query.casefold():
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            run = 0
            score -= min(40, (idx - prev_idx - 1) * 2)
        if idx == 0 or candidate_folded[idx - 1] in _WORD_BOUNDARIES:
            score += 35
        prev_idx = idx

    return score - len(candidate_folded) // 5


def match_labels(query: str, labels: list[str], limit: int = 200) -> list[tuple[int, int]]:
    """Return ``(label_index, score)`` pairs, best first, at most ``limit`` long.

    Any substring hit suppresses subsequence matching entirely. Substring hits
    rank by position, then by label length.
    """
    max_results = max(1, limit)
    hits: list[tuple[int, int, str, int]] = []
    for idx, label in enumerate(labels):
        position = substring_index(query, label)
        if position is not None:
            hits.append((position, len(label), label, idx))
    if hits:
        hits.sort(key=lambda item: (item[0], item[1], item[2]))
        return [(idx, 10_000 - position * 50 - length) for position, length, _, idx in hits[:max_results]]

    scored: list[tuple[int, int, str, int]] = []
    for idx, label in enumerate(labels):
        score = fuzzy_score(query, label)
        if score is not None:
            scored.append((score, len(label), label, idx))
    scored.sort(key=lambda item: (-item[0], item[1], item[2]))
    return [(idx, score) for score, _, _, idx in scored[:max_results]]
