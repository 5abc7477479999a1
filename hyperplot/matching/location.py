"""Fuzzy place-name matching between an input area and a catalog label.

Area names drift between sources by pluralisation, abbreviation and partial
naming ("Dubai Sports City" vs "Sport City"). Matching is word based:
substring containment first, then a per-word check with plural/singular
forms and a stem-style prefix.
"""

import math
import re

MIN_WORD_LENGTH = 3          # words shorter than this are ignored
PREFIX_MIN_WORD_LENGTH = 4
PREFIX_MIN_LENGTH = 4
PREFIX_RATIO = 0.7
REQUIRED_WORD_RATIO = 0.6

_NON_ALNUM_PATTERN = re.compile(r"[^a-z0-9 ]")


def normalize_place(text: str) -> str:
    """Lowercase, drop everything outside ``[a-z0-9 ]``, trim."""
    return _NON_ALNUM_PATTERN.sub("", (text or "").lower()).strip()


def _word_matches(word: str, candidate: str, candidate_words: list[str]) -> bool:
    if word in candidate:
        return True
    if word + "s" in candidate:
        return True
    if word.endswith("s") and word[:-1] in candidate:
        return True
    if len(word) >= PREFIX_MIN_WORD_LENGTH:
        prefix = word[:max(PREFIX_MIN_LENGTH, math.floor(PREFIX_RATIO * len(word)))]
        if any(cw.startswith(prefix) for cw in candidate_words):
            return True
    return False


def location_matches(input_area: str, candidate_label: str) -> bool:
    """True if ``input_area`` plausibly names the same place as ``candidate_label``."""
    source = normalize_place(input_area)
    candidate = normalize_place(candidate_label)
    if not source or not candidate:
        return False

    if candidate in source or source in candidate:
        return True

    words = [w for w in source.split() if len(w) >= MIN_WORD_LENGTH]
    if not words:
        return False

    candidate_words = candidate.split()
    matched = sum(1 for w in words if _word_matches(w, candidate, candidate_words))
    return matched >= math.ceil(REQUIRED_WORD_RATIO * len(words))


def any_label_matches(input_area: str, labels: list[str]) -> bool:
    return any(location_matches(input_area, label) for label in labels)
