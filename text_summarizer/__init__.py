"""Local extractive text summarization with a small tool-serving boundary."""

from text_summarizer.summarizer import (
    ScoredSentence,
    build_frequency,
    score_sentence,
    score_sentences,
    segment_sentences,
    select_sentences,
    summarize,
)

__version__ = "0.1.0"

__all__ = [
    "ScoredSentence",
    "build_frequency",
    "score_sentence",
    "score_sentences",
    "segment_sentences",
    "select_sentences",
    "summarize",
]
