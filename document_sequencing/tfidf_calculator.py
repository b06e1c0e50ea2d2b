from collections import Counter
from typing import Dict, List, Optional, Union

from document_sequencing.exceptions import ConfigError
from document_sequencing.formulas import IDFFormula, TFFormula, calculate_idf, calculate_tf
from document_sequencing.vocabulary import Vocabulary


class TFIDFCalculator:
    """
    Term and document statistics plus every TF and IDF variant, over the shared Vocabulary.

    Everything is computed once in `fit`; the getters only look values up. Term indices
    are the shared vocabulary's indices, so reserved tokens occupy 0 and 1 here too.

    Sample usage:
        calculator = TFIDFCalculator()
        calculator.fit(stemmed_docs, result.vocabulary)
        calculator.get_tfidf(0, 5, TFFormula.LOG_NORMALIZATION, IDFFormula.IDF_SMOOTH)
    """
    def __init__(self):
        self._vocabulary: Optional[Vocabulary] = None
        self.k = 0.5

        self._term_counts: List[Dict[str, int]] = []
        self._total_terms: List[int] = []
        self._max_term_counts: List[int] = []
        self._document_frequency: Dict[str, int] = {}
        self._max_document_frequency = 0

        self._tf_tables: Dict[TFFormula, List[Dict[int, float]]] = {}
        self._idf_tables: Dict[IDFFormula, Dict[int, float]] = {}

    def fit(self, tokenized_documents: List[List[str]], vocabulary: Vocabulary,
            k: float = 0.5) -> 'TFIDFCalculator':
        """
        Counts are taken over the raw tokens, so tokens left out of the vocabulary
        (e.g. by min_frequency) still count toward document length, the max term count
        and the max document frequency. They never get a TF entry of their own.
        """
        if not 0.0 <= k <= 1.0:
            raise ConfigError(f"k must be within [0, 1], got {k}")

        self._vocabulary = vocabulary
        self.k = k

        self._term_counts = []
        self._total_terms = []
        self._max_term_counts = []
        document_frequency = Counter()

        for tokens in tokenized_documents:
            counts = Counter(tokens)
            self._term_counts.append(dict(counts))
            self._total_terms.append(len(tokens))
            self._max_term_counts.append(max(counts.values(), default=0))
            document_frequency.update(counts.keys())

        self._document_frequency = dict(document_frequency)
        self._max_document_frequency = max(document_frequency.values(), default=0)

        self._build_tf_tables()
        self._build_idf_tables()
        return self

    def _build_tf_tables(self):
        vocabulary = self._vocabulary
        self._tf_tables = {}
        for formula in TFFormula:
            table = []
            for doc_index, counts in enumerate(self._term_counts):
                total = self._total_terms[doc_index]
                max_count = self._max_term_counts[doc_index]
                table.append({
                    vocabulary.get_index(token): calculate_tf(formula, count, total, max_count, self.k)
                    for token, count in counts.items()
                    if vocabulary.contains(token)
                })
            self._tf_tables[formula] = table

    def _build_idf_tables(self):
        total_documents = self.total_documents
        self._idf_tables = {}
        for formula in IDFFormula:
            self._idf_tables[formula] = {
                index: calculate_idf(formula, total_documents,
                                     self._document_frequency.get(token, 0),
                                     self._max_document_frequency)
                for index, token in enumerate(self._vocabulary.tokens())
            }

    def _valid_document(self, doc_index: int) -> bool:
        return 0 <= doc_index < len(self._term_counts)

    def _valid_term(self, term_index: int) -> bool:
        return 0 <= term_index < self.vocabulary_size

    # Weights

    def get_tf(self, doc_index: int, term_index: int, formula: TFFormula) -> float:
        if not self._valid_document(doc_index) or not self._valid_term(term_index):
            return 0.0
        return self._tf_tables[formula][doc_index].get(term_index, 0.0)

    def get_idf(self, term_index: int, formula: IDFFormula) -> float:
        if not self._valid_term(term_index):
            return 0.0
        return self._idf_tables[formula][term_index]

    def get_tfidf(self, doc_index: int, term_index: int,
                  tf_formula: TFFormula, idf_formula: IDFFormula) -> float:
        return self.get_tf(doc_index, term_index, tf_formula) * self.get_idf(term_index, idf_formula)

    def get_tf_vector(self, doc_index: int, formula: TFFormula) -> Dict[int, float]:
        if not self._valid_document(doc_index):
            return {}
        return dict(self._tf_tables[formula][doc_index])

    def get_idf_vector(self, formula: IDFFormula) -> Dict[int, float]:
        return dict(self._idf_tables.get(formula, {}))

    def get_all_tf_vectors_for_document(self, doc_index: int) -> Dict[TFFormula, Dict[int, float]]:
        return {formula: self.get_tf_vector(doc_index, formula) for formula in TFFormula}

    def get_all_idf_vectors(self) -> Dict[IDFFormula, Dict[int, float]]:
        return {formula: self.get_idf_vector(formula) for formula in IDFFormula}

    def calculate_tfidf_vector(self, doc_index: int, tf_formula: TFFormula,
                               idf_formula: IDFFormula) -> Dict[int, float]:
        """Sparse TF x IDF for the terms present in the document."""
        if not self._valid_document(doc_index):
            return {}
        idf = self._idf_tables[idf_formula]
        return {term: tf * idf[term] for term, tf in self._tf_tables[tf_formula][doc_index].items()}

    # Structure

    @property
    def vocabulary(self) -> Optional[Vocabulary]:
        return self._vocabulary

    @property
    def vocabulary_size(self) -> int:
        return self._vocabulary.size if self._vocabulary is not None else 0

    @property
    def total_documents(self) -> int:
        return len(self._term_counts)

    def get_token(self, term_index: int) -> Optional[str]:
        if not self._valid_term(term_index):
            return None
        return self._vocabulary.get_token(term_index)

    def get_token_index(self, token: str) -> int:
        if self._vocabulary is None or not self._vocabulary.contains(token):
            return -1
        return self._vocabulary.get_index(token)

    def _as_token(self, term: Union[str, int]) -> Optional[str]:
        return term if isinstance(term, str) else self.get_token(term)

    def get_document_frequency(self, term: Union[str, int]) -> int:
        """Documents containing `term`, given as a token or a vocabulary index."""
        return self._document_frequency.get(self._as_token(term), 0)

    def get_term_count(self, doc_index: int, term: Union[str, int]) -> int:
        if not self._valid_document(doc_index):
            return 0
        return self._term_counts[doc_index].get(self._as_token(term), 0)

    def get_total_terms_in_document(self, doc_index: int) -> int:
        return self._total_terms[doc_index] if self._valid_document(doc_index) else 0

    def get_max_term_count_in_document(self, doc_index: int) -> int:
        return self._max_term_counts[doc_index] if self._valid_document(doc_index) else 0

    @property
    def max_document_frequency(self) -> int:
        return self._max_document_frequency

    def __repr__(self):
        return f"TFIDFCalculator(documents={self.total_documents}, vocabulary_size={self.vocabulary_size})"
