"""
End-to-end tests for the sequencing pipeline.
"""
import math

import pytest

from document_sequencing.config import PipelineConfiguration
from document_sequencing.exceptions import InputError
from document_sequencing.formulas import IDFFormula, TFFormula
from document_sequencing.metrics import PerformanceMonitor
from document_sequencing.models import VectorizationType
from document_sequencing.pipeline import SequencingPipeline
from document_sequencing.preprocessing import StopWordFilter


def test_simple_corpus_vocabulary(plain_result):
    """Five corpus tokens plus padding and unknown."""
    assert plain_result.vocabulary.size == 7
    assert plain_result.vocabulary.tokens()[2] == "the"


def test_simple_corpus_bow(plain_result):
    bow = plain_result.bow_vectors[0]
    assert bow.kind is VectorizationType.BAG_OF_WORDS
    assert dict(bow.sparse_vector) == {0: 1.0, 1: 1.0, 2: 1.0}
    assert bow.metadata["vocabulary_size"] == 5


def test_simple_corpus_sequences(plain_result):
    first, second = plain_result.sequences
    assert first.document_id == "doc_0"
    assert second.document_id == "doc_1"
    assert first.tokens == ("the", "cat", "sat")
    assert first.integer_sequence == (2, 3, 4)
    assert second.integer_sequence == (2, 5, 6)
    assert first.original_text == "the cat sat"
    assert first.metadata["preprocessed"] == "the cat sat"
    assert first.metadata["original_token_count"] == 3
    assert first.metadata["filtered_token_count"] == 3


def test_decode_round_trip(plain_result):
    from document_sequencing.vocabulary import IntegerEncoder

    encoder = IntegerEncoder(plain_result.vocabulary)
    for seq in plain_result.sequences:
        assert tuple(encoder.decode(seq.integer_sequence)) == seq.tokens


def test_tfidf_vectors(plain_result):
    for vector in plain_result.tfidf_vectors:
        assert vector.kind is VectorizationType.TF_IDF
        assert vector.l2_norm == pytest.approx(1.0)
        assert all(k < vector.metadata["vocabulary_size"] for k in vector.sparse_vector)


def test_calculator_uses_shared_vocabulary(plain_result):
    calculator = plain_result.tfidf_calculator
    the = plain_result.vocabulary.get_index("the")
    cat = plain_result.vocabulary.get_index("cat")
    assert calculator.vocabulary is plain_result.vocabulary
    assert calculator.get_idf(the, IDFFormula.IDF) == 0.0
    assert calculator.get_idf(the, IDFFormula.IDF_SMOOTH) > 0.0
    assert calculator.get_tfidf(0, cat, TFFormula.RAW_COUNT, IDFFormula.IDF) == pytest.approx(math.log(2))


def test_default_configuration_filters_and_stems():
    result = SequencingPipeline(verbose=False).execute(["The cats are running!"])
    seq = result.sequences[0]
    assert seq.tokens == ("cat", "run")
    assert seq.metadata["original_token_count"] == 4
    assert seq.metadata["filtered_token_count"] == 2


def test_proper_nouns_are_not_stemmed():
    result = SequencingPipeline(verbose=False).execute(["Paris hosts games"])
    assert result.sequences[0].tokens[0] == "paris"


def test_custom_stop_word_filter():
    pipeline = SequencingPipeline(verbose=False, stop_word_filter=StopWordFilter({"cat"}))
    result = pipeline.execute(["the cat sat"])
    assert "cat" not in result.sequences[0].tokens
    assert "the" in result.sequences[0].tokens


def test_min_frequency_maps_rare_tokens_to_unknown():
    config = PipelineConfiguration(remove_stopwords=False, apply_stemming=False, min_frequency=2)
    result = SequencingPipeline(config, verbose=False).execute(["a b", "a c"])
    vocab = result.vocabulary
    assert vocab.size == 3
    assert result.sequences[0].integer_sequence == (2, vocab.unknown_index)


@pytest.mark.parametrize("documents", [None, []])
def test_empty_input_gives_empty_result(documents):
    result = SequencingPipeline(verbose=False).execute(documents)
    assert result.sequences == ()
    assert result.bow_vectors == ()
    assert result.tfidf_vectors == ()
    assert result.vocabulary.size == 2
    assert result.tfidf_calculator.total_documents == 0


def test_empty_documents_are_kept():
    result = SequencingPipeline(verbose=False).execute(["", "cat"])
    assert len(result.sequences) == 2
    assert result.sequences[0].tokens == ()
    assert dict(result.tfidf_vectors[0].sparse_vector) == {}


def test_non_string_document_rejected():
    with pytest.raises(InputError, match="position 1"):
        SequencingPipeline(verbose=False).execute(["ok", 42])


def test_pipeline_is_reusable(simple_corpus, plain_config):
    pipeline = SequencingPipeline(plain_config, verbose=False)
    first = pipeline.execute(simple_corpus)
    second = pipeline.execute(["other words"])
    assert first.vocabulary.size == 7
    assert second.vocabulary.size == 4


def test_verbose_prints_stages(simple_corpus, capsys):
    SequencingPipeline(verbose=True).execute(simple_corpus)
    out = capsys.readouterr().out
    assert "[Step 1/7]" in out
    assert "[Step 7/7]" in out


def test_quiet_pipeline_prints_nothing(simple_corpus, capsys):
    SequencingPipeline(verbose=False).execute(simple_corpus)
    assert capsys.readouterr().out == ""


def test_monitor_records_stages(simple_corpus):
    monitor = PerformanceMonitor()
    monitor.start_processing()
    SequencingPipeline(verbose=False, monitor=monitor).execute(simple_corpus)
    monitor.end_processing()
    assert "Tokenization" in monitor.durations
    assert len(monitor.durations) == 7


def test_result_summary(plain_result, plain_config, capsys):
    summary = plain_result.summary()
    assert summary["documents_processed"] == 2
    assert summary["vocabulary_size"] == 7
    assert summary["configuration"] == plain_config.to_dict()
    plain_result.print_summary()
    assert "Vocabulary size: 7" in capsys.readouterr().out


def test_min_frequency_does_not_inflate_calculator_statistics():
    config = PipelineConfiguration(remove_stopwords=False, apply_stemming=False, min_frequency=2)
    result = SequencingPipeline(config, verbose=False).execute(["a x y z", "a b"])
    calculator = result.tfidf_calculator
    a = result.vocabulary.get_index("a")
    assert calculator.get_tf(0, result.vocabulary.unknown_index, TFFormula.RAW_COUNT) == 0.0
    assert calculator.get_max_term_count_in_document(0) == 1
    assert calculator.get_tf(0, a, TFFormula.DOUBLE_NORMALIZATION_05) == pytest.approx(1.0)


class FailingStopWordFilter(StopWordFilter):
    def filter_all(self, tokenized_documents):
        raise RuntimeError("stop list unavailable")


def test_failed_stage_is_still_timed(simple_corpus):
    monitor = PerformanceMonitor()
    pipeline = SequencingPipeline(verbose=False, monitor=monitor,
                                  stop_word_filter=FailingStopWordFilter())
    with pytest.raises(RuntimeError):
        pipeline.execute(simple_corpus)
    assert "Stop Word Filtering" in monitor.durations
    assert "Stemming" not in monitor.durations
