from abc import ABC, abstractmethod
from collections import Counter
from typing import Dict, List

import numpy as np


class FitVocabulary(ABC):
    """
    Base for vectorizers that learn their own feature space at `fit` time.

    NOTE: this index space is NOT the pipeline's shared Vocabulary. Features are
    numbered in first-occurrence order across the fitted documents, with no reserved
    padding/unknown slots, so feature i here and index i in the shared Vocabulary
    usually name different tokens. The divergence is intentional; map through
    `feature_names()` when comparing the two.
    """
    def __init__(self):
        self.vocabulary: List[str] = []
        self.vocabulary_index: Dict[str, int] = {}

    def _fit_vocabulary(self, tokenized_documents: List[List[str]]):
        self.vocabulary = list(dict.fromkeys(t for tokens in tokenized_documents for t in tokens))
        self.vocabulary_index = {t: i for i, t in enumerate(self.vocabulary)}

    @abstractmethod
    def fit(self, tokenized_documents: List[List[str]]) -> 'FitVocabulary':
        pass

    @abstractmethod
    def transform_single(self, tokens: List[str]) -> Dict[int, float]:
        pass

    def transform(self, tokenized_documents: List[List[str]]) -> List[Dict[int, float]]:
        return [self.transform_single(tokens) for tokens in tokenized_documents]

    def fit_transform(self, tokenized_documents: List[List[str]]) -> List[Dict[int, float]]:
        self.fit(tokenized_documents)
        return self.transform(tokenized_documents)

    def feature_names(self) -> List[str]:
        return list(self.vocabulary)

    @property
    def vocabulary_size(self) -> int:
        return len(self.vocabulary)

    def to_dense(self, sparse_vector: Dict[int, float]) -> np.ndarray:
        dense = np.zeros(self.vocabulary_size, dtype=float)
        for index, value in sparse_vector.items():
            dense[index] = value
        return dense


class BagOfWordsVectorizer(FitVocabulary):
    """Raw token counts per document, or 1.0 presence flags when `binary`."""
    def __init__(self, binary: bool = False):
        super().__init__()
        self.binary = binary

    def fit(self, tokenized_documents: List[List[str]]) -> 'BagOfWordsVectorizer':
        self._fit_vocabulary(tokenized_documents)
        return self

    def transform_single(self, tokens: List[str]) -> Dict[int, float]:
        vector: Dict[int, float] = {}
        for token in tokens:
            index = self.vocabulary_index.get(token)
            if index is None:
                continue
            vector[index] = 1.0 if self.binary else vector.get(index, 0.0) + 1.0
        return vector

    def get_statistics(self) -> Dict:
        return {
            'vocabulary_size': self.vocabulary_size,
            'binary_mode': self.binary,
            'vectorization_type': 'Bag-of-Words',
        }


class TfidfVectorizer(FitVocabulary):
    """
    L2-normalized TF-IDF with the smoothed idf = ln((N + 1) / (df + 1)) + 1.

    TF is count / document length, or 1 + ln(count) when `sublinear_tf`. A document
    whose weights are all zero (e.g. empty) is returned without normalization.
    """
    def __init__(self, sublinear_tf: bool = False):
        super().__init__()
        self.sublinear_tf = sublinear_tf
        self.idf_scores: Dict[str, float] = {}

    def fit(self, tokenized_documents: List[List[str]]) -> 'TfidfVectorizer':
        self._fit_vocabulary(tokenized_documents)
        self.idf_scores = {}

        total_documents = len(tokenized_documents)
        document_frequency = Counter()
        for tokens in tokenized_documents:
            document_frequency.update(set(tokens))

        for token in self.vocabulary:
            self.idf_scores[token] = float(np.log((total_documents + 1) / (document_frequency[token] + 1)) + 1.0)
        return self

    def transform_single(self, tokens: List[str]) -> Dict[int, float]:
        counts = Counter(tokens)
        total_terms = len(tokens)

        vector: Dict[int, float] = {}
        for token, count in counts.items():
            index = self.vocabulary_index.get(token)
            if index is None:
                continue
            if self.sublinear_tf:
                tf = 1.0 + np.log(count)
            else:
                tf = count / total_terms
            vector[index] = float(tf * self.idf_scores.get(token, 1.0))

        return self._normalize_l2(vector)

    @staticmethod
    def _normalize_l2(vector: Dict[int, float]) -> Dict[int, float]:
        norm = np.sqrt(sum(v * v for v in vector.values()))
        if norm == 0.0:
            return vector
        return {i: float(v / norm) for i, v in vector.items()}

    def get_idf_scores(self) -> Dict[str, float]:
        return dict(self.idf_scores)

    def get_statistics(self) -> Dict:
        stats = {
            'vocabulary_size': self.vocabulary_size,
            'sublinear_tf': self.sublinear_tf,
            'vectorization_type': 'TF-IDF',
        }
        if self.idf_scores:
            values = np.array(list(self.idf_scores.values()))
            stats['idf_mean'] = float(values.mean())
            stats['idf_min'] = float(values.min())
            stats['idf_max'] = float(values.max())
        return stats
