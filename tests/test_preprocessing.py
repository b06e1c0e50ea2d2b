"""
Tests for text cleaning, tokenization and stop-word filtering.
"""
from document_sequencing.preprocessing import (
    ENGLISH_STOP_WORDS,
    StopWordFilter,
    TextPreprocessor,
    Tokenizer,
)


def test_preprocess_strips_markup_urls_and_emails():
    """HTML, URLs, emails and punctuation are removed and case is folded."""
    text = "Hello <b>World</b>! Visit http://example.com or mail someone@example.com"
    cleaned, proper_nouns = TextPreprocessor().preprocess(text)

    assert cleaned == "hello world visit or mail"
    assert proper_nouns == {"hello", "world", "visit"}


def test_preprocess_empty_inputs():
    """None, empty and blank text give an empty string."""
    preprocessor = TextPreprocessor()
    assert preprocessor.preprocess(None) == ("", set())
    assert preprocessor.preprocess("") == ("", set())
    assert preprocessor.preprocess("   \n\t") == ("", set())


def test_preprocess_without_lowercase_collects_no_proper_nouns():
    cleaned, proper_nouns = TextPreprocessor(lowercase=False).preprocess("Alice met Bob.")
    assert cleaned == "Alice met Bob"
    assert proper_nouns == set()


def test_preprocess_flags_can_be_disabled():
    """Punctuation survives when its removal is switched off."""
    cleaned, _ = TextPreprocessor(remove_punctuation=False).preprocess("end. stop!")
    assert cleaned == "end. stop!"


def test_preprocess_all_merges_proper_nouns():
    cleaned, protected = TextPreprocessor().preprocess_all(["Paris is big", None, "I like London"])
    assert cleaned == ["paris is big", "", "i like london"]
    assert protected == {"paris", "london"}


def test_tokenize_min_length():
    tokenizer = Tokenizer(min_token_length=3)
    assert tokenizer.tokenize("a bb ccc dddd") == ["ccc", "dddd"]
    assert tokenizer.tokenize(None) == []
    assert tokenizer.tokenize("   ") == []


def test_tokenize_collapses_whitespace():
    assert Tokenizer().tokenize("  one \t two\n\nthree ") == ["one", "two", "three"]


def test_unique_tokens_keeps_first_occurrence_order():
    assert Tokenizer().unique_tokens("b a b c a") == ["b", "a", "c"]


def test_known_words():
    assert Tokenizer.known_words([["a", "b"], ["b", "c"], []]) == {"a", "b", "c"}


def test_builtin_stop_word_list():
    """The built-in English list has 126 entries."""
    assert len(ENGLISH_STOP_WORDS) == 126
    assert "the" in ENGLISH_STOP_WORDS
    assert "cat" not in ENGLISH_STOP_WORDS


def test_stop_word_filter_is_case_insensitive_and_keeps_order():
    stop_filter = StopWordFilter()
    assert stop_filter.filter(["The", "cat", "is", "here", "Dog"]) == ["cat", "Dog"]


def test_add_stop_words():
    stop_filter = StopWordFilter()
    stop_filter.add_stop_words("Cat", "DOG")
    assert stop_filter.filter_all([["cat", "sat"], ["dog"]]) == [["sat"], []]


def test_custom_stop_words():
    stop_filter = StopWordFilter({"foo"})
    assert stop_filter.filter(["foo", "the", "bar"]) == ["the", "bar"]
