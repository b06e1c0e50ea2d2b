"""
Tests for the shared vocabulary and the integer encoder.
"""
import numpy as np
import pytest

from document_sequencing.exceptions import ConfigError
from document_sequencing.vocabulary import PAD_TOKEN, UNK_TOKEN, IntegerEncoder, Vocabulary


@pytest.fixture
def vocabulary(tokenized_docs):
    return Vocabulary().build_from_documents(tokenized_docs)


def test_reserved_indices():
    vocab = Vocabulary()
    assert vocab.padding_index == 0
    assert vocab.unknown_index == 1
    assert vocab.get_token(0) == PAD_TOKEN
    assert vocab.get_token(1) == UNK_TOKEN
    assert vocab.size == 2


def test_tokens_ordered_by_frequency(vocabulary):
    """a and b both occur twice; a was seen first."""
    assert vocabulary.tokens() == [PAD_TOKEN, UNK_TOKEN, "a", "b", "c"]
    assert vocabulary.frequency("a") == 2
    assert vocabulary.frequency("c") == 1
    assert vocabulary.frequency("zzz") == 0


def test_ties_keep_first_seen_order():
    vocab = Vocabulary().build_from_documents([["y", "x"], ["z"]])
    assert vocab.tokens()[2:] == ["y", "x", "z"]


def test_unknown_tokens_share_one_index(vocabulary):
    assert vocabulary.get_index("missing") == vocabulary.unknown_index
    assert vocabulary.get_index("other") == vocabulary.unknown_index


def test_out_of_range_index_gives_unknown_token(vocabulary):
    assert vocabulary.get_token(99) == UNK_TOKEN
    assert vocabulary.get_token(-1) == UNK_TOKEN


def test_index_round_trip(vocabulary):
    for i in range(vocabulary.size):
        assert vocabulary.get_index(vocabulary.get_token(i)) == i


def test_min_frequency_filters_rare_tokens(tokenized_docs):
    vocab = Vocabulary(min_frequency=2).build_from_documents(tokenized_docs)
    assert vocab.size == 4
    assert "c" not in vocab
    assert vocab.get_index("c") == vocab.unknown_index


def test_invalid_min_frequency():
    with pytest.raises(ConfigError):
        Vocabulary(min_frequency=0)


def test_reserved_token_in_corpus_is_not_duplicated():
    vocab = Vocabulary().build_from_documents([[PAD_TOKEN, "a"]])
    assert vocab.size == 3
    assert vocab.get_index(PAD_TOKEN) == 0


def test_container_protocol(vocabulary):
    assert len(vocabulary) == 5
    assert "a" in vocabulary
    assert list(vocabulary) == vocabulary.tokens()


def test_statistics(vocabulary):
    stats = vocabulary.get_statistics()
    assert stats["vocabulary_size"] == 5
    assert stats["min_frequency"] == 1


def test_encode_decode(vocabulary):
    encoder = IntegerEncoder(vocabulary)
    tokens = ["c", "a", "b"]
    assert encoder.encode(tokens) == [4, 2, 3]
    assert encoder.decode(encoder.encode(tokens)) == tokens
    assert encoder.encode(["nope"]) == [1]
    assert encoder.decode_all(encoder.encode_all([["a"], ["b", "c"]])) == [["a"], ["b", "c"]]


def test_pad_sequence(vocabulary):
    encoder = IntegerEncoder(vocabulary)
    assert encoder.pad_sequence([5, 6, 7], 2) == [5, 6]
    assert encoder.pad_sequence([5], 3) == [5, 0, 0]
    assert encoder.pad_sequence([5], 0) == []
    with pytest.raises(ConfigError):
        encoder.pad_sequence([5], -1)


def test_pad_all_defaults_to_longest(vocabulary):
    encoder = IntegerEncoder(vocabulary)
    assert encoder.pad_all([[2], [3, 4, 2]]) == [[2, 0, 0], [3, 4, 2]]
    assert encoder.pad_all([]) == []


def test_to_array(vocabulary):
    encoder = IntegerEncoder(vocabulary)
    matrix = encoder.to_array([[2], [3, 4]])
    assert matrix.shape == (2, 2)
    np.testing.assert_array_equal(matrix, [[2, 0], [3, 4]])
    assert encoder.to_array([]).shape == (0, 0)
