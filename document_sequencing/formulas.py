"""
Term-frequency and inverse-document-frequency weighting schemes.

Definitions follow https://en.wikipedia.org/wiki/Tf%E2%80%93idf. Each enum member
carries its display name and formula text; the arithmetic lives in `calculate_tf` and
`calculate_idf`, which handle every member explicitly.
"""
import math
from enum import Enum


class TFFormula(Enum):
    BINARY = ("Binary", "1 if t ∈ d else 0")
    RAW_COUNT = ("Raw Count", "f(t,d)")
    TERM_FREQUENCY = ("Term Frequency", "f(t,d) / Σf(t',d)")
    LOG_NORMALIZATION = ("Log Normalization", "log(1 + f(t,d))")
    DOUBLE_NORMALIZATION_05 = ("Double Normalization 0.5", "0.5 + 0.5 × f(t,d) / max{f(t',d)}")
    DOUBLE_NORMALIZATION_K = ("Double Normalization K", "K + (1-K) × f(t,d) / max{f(t',d)}")

    def __init__(self, display_name: str, formula: str):
        self.display_name = display_name
        self.formula = formula

    def calculate(self, term_count: int, total_terms: int, max_term_count: int, k: float = 0.5) -> float:
        return calculate_tf(self, term_count, total_terms, max_term_count, k)


class IDFFormula(Enum):
    UNARY = ("Unary", "1")
    IDF = ("Inverse Document Frequency", "log(N / n(t))")
    IDF_SMOOTH = ("Inverse Document Frequency Smooth", "log((N+1) / (n(t)+1)) + 1")
    IDF_MAX = ("Inverse Document Frequency Max", "log(max{n(t')} / n(t))")
    IDF_PROBABILISTIC = ("Probabilistic Inverse Document Frequency", "log((N - n(t)) / n(t))")

    def __init__(self, display_name: str, formula: str):
        self.display_name = display_name
        self.formula = formula

    def calculate(self, total_documents: int, document_frequency: int, max_document_frequency: int = 0) -> float:
        return calculate_idf(self, total_documents, document_frequency, max_document_frequency)


def calculate_tf(formula: TFFormula, term_count: int, total_terms: int,
                 max_term_count: int, k: float = 0.5) -> float:
    """
    Args:
        term_count: f, occurrences of the term in the document
        total_terms: T, number of tokens in the document
        max_term_count: M, count of the most frequent term in the document
        k: weight of DOUBLE_NORMALIZATION_K
    """
    if formula is TFFormula.BINARY:
        return 1.0 if term_count > 0 else 0.0
    elif formula is TFFormula.RAW_COUNT:
        return float(term_count)
    elif formula is TFFormula.TERM_FREQUENCY:
        return term_count / total_terms if total_terms > 0 else 0.0
    elif formula is TFFormula.LOG_NORMALIZATION:
        return math.log(1.0 + term_count)
    elif formula is TFFormula.DOUBLE_NORMALIZATION_05:
        return 0.5 + 0.5 * (term_count / max_term_count) if max_term_count > 0 else 0.0
    elif formula is TFFormula.DOUBLE_NORMALIZATION_K:
        return k + (1.0 - k) * (term_count / max_term_count) if max_term_count > 0 else 0.0
    raise ValueError(f"Unknown TF formula: {formula}")


def calculate_idf(formula: IDFFormula, total_documents: int, document_frequency: int,
                  max_document_frequency: int = 0) -> float:
    """
    Args:
        total_documents: N
        document_frequency: n(t), documents containing the term. 0 is read as 1.
        max_document_frequency: largest n(t') over the vocabulary, used by IDF_MAX
    """
    df = document_frequency if document_frequency > 0 else 1

    if formula is IDFFormula.UNARY:
        return 1.0
    elif formula is IDFFormula.IDF:
        return math.log(total_documents / df) if total_documents > 0 else 0.0
    elif formula is IDFFormula.IDF_SMOOTH:
        return math.log((total_documents + 1) / (df + 1)) + 1.0
    elif formula is IDFFormula.IDF_MAX:
        return math.log(max_document_frequency / df) if max_document_frequency > 0 else 0.0
    elif formula is IDFFormula.IDF_PROBABILISTIC:
        numerator = total_documents - df
        return math.log(numerator / df) if numerator > 0 else 0.0
    raise ValueError(f"Unknown IDF formula: {formula}")
