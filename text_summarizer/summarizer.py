"""Extractive summarizer (no LLM).

Pipeline: segment -> frequency -> score -> select. Every stage is a plain
function so it can be exercised on its own.
"""
from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Sequence

DEFAULT_MAX_SENTENCES = 3

FREQUENCY_WEIGHT = 0.5
LENGTH_WEIGHT = 0.3
LENGTH_CAP = 20

EDGE_POSITION_BOOST = 1.5
NEAR_EDGE_POSITION_BOOST = 1.2
NEAR_START_FRACTION = 0.2
NEAR_END_FRACTION = 0.8

# space separators, line terminators and BOM; unlike \s this excludes
# U+001C-U+001F and U+0085 and includes U+FEFF
_WHITESPACE_CHARS = "\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
_WHITESPACE = re.compile(f"[{_WHITESPACE_CHARS}]+")
_BLANK = re.compile(f"[{_WHITESPACE_CHARS}]*")
_SENTENCE_BOUNDARY = re.compile(f"(?<=[.!?])[{_WHITESPACE_CHARS}]+")
_STRIP_PUNCTUATION = str.maketrans("", "", ".,!?;:()[]{}'\"")


@dataclass(frozen=True)
class ScoredSentence:
    sentence: str
    score: float
    index: int


def segment_sentences(text: str) -> List[str]:
    """Split text after terminal punctuation that is followed by whitespace."""
    return [segment for segment in _SENTENCE_BOUNDARY.split(text) if not _BLANK.fullmatch(segment)]


def tokenize(text: str) -> List[str]:
    normalized = text.lower().translate(_STRIP_PUNCTUATION)
    return [word for word in _WHITESPACE.split(normalized) if word]


def build_frequency(text: str) -> Mapping[str, int]:
    """Count every normalized word across the whole text (read-only result)."""
    return MappingProxyType(Counter(tokenize(text)))


def position_score(index: int, total: int) -> float:
    if index == 0 or index == total - 1:
        return EDGE_POSITION_BOOST
    if index < total * NEAR_START_FRACTION or index > total * NEAR_END_FRACTION:
        return NEAR_EDGE_POSITION_BOOST
    return 1.0


def score_sentence(sentence: str, frequency: Mapping[str, int], index: int, total: int) -> float:
    words = tokenize(sentence)
    # repeated words count their global frequency once per occurrence
    frequency_score = sum(frequency.get(word, 0) for word in words)
    length_score = min(len(words), LENGTH_CAP) / LENGTH_CAP
    return (frequency_score * FREQUENCY_WEIGHT + length_score * LENGTH_WEIGHT) * position_score(index, total)


def score_sentences(sentences: Sequence[str], frequency: Mapping[str, int]) -> List[ScoredSentence]:
    total = len(sentences)
    return [
        ScoredSentence(sentence=sentence, score=score_sentence(sentence, frequency, index, total), index=index)
        for index, sentence in enumerate(sentences)
    ]


def select_sentences(scored: Sequence[ScoredSentence], max_count: int) -> List[str]:
    """Pick the top ``max_count`` sentences and return them in document order.

    Equal scores are broken by ascending original index.
    """
    ranked = sorted(scored, key=lambda item: (-item.score, item.index))
    chosen = sorted(ranked[:max_count], key=lambda item: item.index)
    return [item.sentence for item in chosen]


def summarize(text: str, max_sentences: int = DEFAULT_MAX_SENTENCES) -> str:
    """Return an extractive summary of ``text``.

    When the text has no more than ``max_sentences`` sentences the original
    string is returned untouched. ``max_sentences`` is applied as given;
    callers clamp it.
    """
    sentences = segment_sentences(text)
    if len(sentences) <= max_sentences:
        return text

    frequency = build_frequency(text)
    scored = score_sentences(sentences, frequency)
    return " ".join(select_sentences(scored, max_sentences))
