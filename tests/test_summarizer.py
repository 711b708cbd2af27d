import pytest

from text_summarizer.summarizer import (
    ScoredSentence,
    build_frequency,
    position_score,
    score_sentence,
    score_sentences,
    segment_sentences,
    select_sentences,
    summarize,
    tokenize,
)


ARTICLE = (
    "Solar power is growing quickly across Europe. "
    "Many households now install panels on their roofs. "
    "Grid operators worry about evening demand peaks. "
    "Battery storage helps shift solar power into the evening. "
    "Prices for batteries fell sharply last year. "
    "Some regions still lack the cables to move power. "
    "Policy makers are debating new grid investments. "
    "Solar power and storage together could cover most daytime demand."
)


def test_segment_splits_on_terminal_punctuation():
    assert segment_sentences("One. Two! Three? Four") == ["One.", "Two!", "Three?", "Four"]


def test_segment_without_terminal_punctuation_is_single_segment():
    assert segment_sentences("no punctuation here at all") == ["no punctuation here at all"]


def test_segment_punctuation_run_is_one_boundary():
    assert segment_sentences("Wait?! Really. Yes") == ["Wait?!", "Really.", "Yes"]


def test_segment_requires_whitespace_after_punctuation():
    assert segment_sentences("Version 2.5 shipped. e.g.this stays") == ["Version 2.5 shipped.", "e.g.this stays"]


def test_segment_keeps_internal_spacing_and_drops_blank_segments():
    text = "  First line\ncontinues.   \n\n Next one.  "
    assert segment_sentences(text) == ["  First line\ncontinues.", "Next one."]


def test_segment_pipe_is_ordinary_text():
    assert segment_sentences("left | right. done") == ["left | right.", "done"]


def test_segment_empty_and_whitespace_text():
    assert segment_sentences("") == []
    assert segment_sentences("   \n\t ") == []


def test_tokenize_strips_fixed_punctuation_set():
    assert tokenize("(Hello) [World] {x} 'y' \"z\" a;b:c well-known!") == [
        "hello",
        "world",
        "x",
        "y",
        "z",
        "abc",
        "well-known",
    ]


def test_frequency_is_case_and_punctuation_insensitive():
    frequency = build_frequency("Cat cat, CAT! dog")
    assert dict(frequency) == {"cat": 3, "dog": 1}


def test_frequency_is_read_only():
    frequency = build_frequency("a b a")
    with pytest.raises(TypeError):
        frequency["a"] = 10


def test_frequency_of_empty_text():
    assert dict(build_frequency("")) == {}


@pytest.mark.parametrize(
    "index,total,expected",
    [
        (0, 1, 1.5),
        (0, 2, 1.5),
        (1, 2, 1.5),
        (0, 10, 1.5),
        (9, 10, 1.5),
        (1, 10, 1.2),
        (2, 10, 1.0),
        (8, 10, 1.0),
        (5, 10, 1.0),
        (17, 20, 1.2),
        (16, 20, 1.0),
    ],
)
def test_position_score(index, total, expected):
    assert position_score(index, total) == expected


def test_score_counts_repeated_words_with_global_frequency():
    frequency = {"a": 2, "b": 1}
    # tokens a, a, b -> 2 + 2 + 1; three tokens; index 1 of 10 is near the start
    assert score_sentence("A a b.", frequency, 1, 10) == pytest.approx((5 * 0.5 + 0.15 * 0.3) * 1.2)


def test_score_length_is_capped():
    long_sentence = " ".join(["word"] * 25) + "."
    assert score_sentence(long_sentence, {}, 5, 10) == pytest.approx(0.3)


def test_score_unknown_words_count_zero():
    assert score_sentence("unseen words.", {"other": 4}, 4, 10) == pytest.approx(2 / 20 * 0.3)


def test_score_sentences_keeps_index_and_text():
    scored = score_sentences(["A.", "B."], build_frequency("A. B."))
    assert [(item.sentence, item.index) for item in scored] == [("A.", 0), ("B.", 1)]
    assert all(item.score == pytest.approx(0.515 * 1.5) for item in scored)


def test_select_restores_document_order():
    scored = [
        ScoredSentence("a", 1.0, 0),
        ScoredSentence("b", 3.0, 1),
        ScoredSentence("c", 2.0, 2),
        ScoredSentence("d", 3.0, 3),
    ]
    assert select_sentences(scored, 2) == ["b", "d"]
    assert select_sentences(scored, 3) == ["b", "c", "d"]


def test_select_breaks_ties_by_index():
    scored = [ScoredSentence(text, 1.0, index) for index, text in enumerate("wxyz")]
    assert select_sentences(scored, 2) == ["w", "x"]


def test_select_zero_count():
    assert select_sentences([ScoredSentence("a", 1.0, 0)], 0) == []


def test_summarize_first_and_last_of_uniform_sentences():
    assert summarize("A. B. C. D. E.", 2) == "A. E."


def test_summarize_short_text_is_returned_verbatim():
    assert summarize("Hello world.", 3) == "Hello world."
    text = "  First.\n\nSecond.  "
    assert summarize(text, 2) is text


def test_summarize_empty_text():
    assert summarize("") == ""
    assert summarize("", 0) == ""


def test_summarize_zero_max_sentences_returns_empty():
    assert summarize("One. Two. Three.", 0) == ""


def test_summarize_default_max_sentences():
    result = summarize(ARTICLE)
    assert len(segment_sentences(result)) == 3


def test_summarize_returns_exact_count_in_document_order():
    sentences = segment_sentences(ARTICLE)
    for max_sentences in range(1, len(sentences)):
        picked = segment_sentences(summarize(ARTICLE, max_sentences))
        assert len(picked) == max_sentences
        positions = [sentences.index(sentence) for sentence in picked]
        assert positions == sorted(positions)


def test_summarize_does_not_clamp_large_counts():
    text = " ".join(f"Sentence {i}." for i in range(12))
    assert len(segment_sentences(summarize(text, 11))) == 11


def test_position_boost_beats_more_frequent_interior_sentence():
    # x appears twice, y three times; the edge sentences still win
    assert summarize("X. Y. Y. Y. X.", 2) == "X. X."
    assert summarize("X. Y. Y. Y. X.", 3) == "X. Y. X."


def test_frequency_drives_interior_choice():
    text = "Intro here. Apples are red. Apples and apples again. Filler. The end."
    assert summarize(text, 2) == "Apples are red. Apples and apples again."


@pytest.mark.parametrize(
    "text,expected",
    [
        ("One.\ufeffTwo.", ["One.", "Two."]),
        ("A.\u00a0B.\u2028C.\u3000D.", ["A.", "B.", "C.", "D."]),
        ("One.\x1cTwo.", ["One.\x1cTwo."]),
        ("One.\x85Two.", ["One.\x85Two."]),
        ("Hi.\ufeff", ["Hi."]),
        ("\ufeff \ufeff", []),
        ("\x1c", ["\x1c"]),
    ],
)
def test_segment_whitespace_set(text, expected):
    assert segment_sentences(text) == expected


@pytest.mark.parametrize(
    "text,expected",
    [
        ("a\x1cb", ["a\x1cb"]),
        ("x\x85y", ["x\x85y"]),
        ("a\ufeffb\u3000c\u00a0d", ["a", "b", "c", "d"]),
        ("\ufeff", []),
    ],
)
def test_tokenize_whitespace_set(text, expected):
    assert tokenize(text) == expected
