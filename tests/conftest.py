import matplotlib
matplotlib.use("Agg")

import pytest

from document_sequencing.config import PipelineConfiguration
from document_sequencing.pipeline import SequencingPipeline


@pytest.fixture
def simple_corpus():
    return ["the cat sat", "the dog ran"]


@pytest.fixture
def plain_config():
    """No stop-word removal and no stemming, so tokens pass through untouched."""
    return PipelineConfiguration(remove_stopwords=False, apply_stemming=False)


@pytest.fixture
def plain_result(simple_corpus, plain_config):
    return SequencingPipeline(plain_config, verbose=False).execute(simple_corpus)


@pytest.fixture
def tokenized_docs():
    return [["a", "b", "a"], ["b", "c"]]
