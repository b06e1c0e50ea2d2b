from typing import Mapping, Sequence

import numpy as np


def cosine_similarity_sparse(vector1: Mapping[int, float], vector2: Mapping[int, float]) -> float:
    dot = sum(value * vector2[index] for index, value in vector1.items() if index in vector2)
    norm1 = np.sqrt(sum(v * v for v in vector1.values()))
    norm2 = np.sqrt(sum(v * v for v in vector2.values()))
    if norm1 == 0.0 or norm2 == 0.0:
        return 0.0
    return float(dot / (norm1 * norm2))


def _same_shape(vector1, vector2):
    a = np.asarray(vector1, dtype=float)
    b = np.asarray(vector2, dtype=float)
    if a.shape != b.shape:
        raise ValueError(f"Vectors must have same dimension, got {a.shape} and {b.shape}")
    return a, b


def cosine_similarity(vector1: Sequence[float], vector2: Sequence[float]) -> float:
    a, b = _same_shape(vector1, vector2)
    norm1 = np.linalg.norm(a)
    norm2 = np.linalg.norm(b)
    if norm1 == 0.0 or norm2 == 0.0:
        return 0.0
    return float(np.dot(a, b) / (norm1 * norm2))


def euclidean_distance(vector1: Sequence[float], vector2: Sequence[float]) -> float:
    a, b = _same_shape(vector1, vector2)
    return float(np.linalg.norm(a - b))


def normalize_l2(vector: Sequence[float]) -> np.ndarray:
    """Unit-length copy of `vector`; a zero vector comes back unchanged."""
    a = np.array(vector, dtype=float)
    norm = np.linalg.norm(a)
    if norm == 0.0:
        return a
    return a / norm


def mean(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))


def standard_deviation(values: Sequence[float]) -> float:
    """Sample standard deviation (n - 1). 0.0 for fewer than two values."""
    if len(values) < 2:
        return 0.0
    return float(np.std(values, ddof=1))


def entropy(probabilities: Sequence[float]) -> float:
    """Shannon entropy in bits; zero probabilities contribute nothing."""
    p = np.asarray(probabilities, dtype=float)
    p = p[p > 0]
    return float(-np.sum(p * np.log2(p)))
