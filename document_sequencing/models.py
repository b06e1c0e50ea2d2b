from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence

import numpy as np

from document_sequencing.exceptions import InternalInvariantViolation


class VectorizationType(Enum):
    BAG_OF_WORDS = 1
    TF_IDF = 2
    CUSTOM = 3


def _frozen_mapping(data: Optional[Mapping]) -> Mapping:
    return MappingProxyType(dict(data or {}))


@dataclass(frozen=True)
class DocumentSequence:
    """One input document after conversion. `integer_sequence` is encoded once, at pipeline time."""
    document_id: str
    original_text: str
    tokens: Sequence[str]
    integer_sequence: Sequence[int]
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'tokens', tuple(self.tokens))
        object.__setattr__(self, 'integer_sequence', tuple(self.integer_sequence))
        object.__setattr__(self, 'metadata', _frozen_mapping(self.metadata))
        if len(self.tokens) != len(self.integer_sequence):
            raise InternalInvariantViolation(
                f"{self.document_id}: {len(self.tokens)} tokens but {len(self.integer_sequence)} indices")

    @property
    def token_count(self) -> int:
        return len(self.tokens)

    @property
    def sequence_length(self) -> int:
        return len(self.integer_sequence)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.document_id,
            'token_count': self.token_count,
            'sequence_length': self.sequence_length,
            'tokens': list(self.tokens),
            'integer_sequence': list(self.integer_sequence),
            'metadata': dict(self.metadata),
        }

    def to_formatted_string(self) -> str:
        lines = [
            f"Document ID: {self.document_id}",
            f"Original Text: {self.original_text}",
            f"Token Count: {self.token_count}",
            f"Tokens: {list(self.tokens)}",
            f"Sequence Length: {self.sequence_length}",
            f"Integer Sequence: {list(self.integer_sequence)}",
        ]
        if self.metadata:
            lines.append("Metadata:")
            lines.extend(f"  {k}: {v}" for k, v in self.metadata.items())
        return "\n".join(lines) + "\n"

    def __repr__(self):
        return f"DocumentSequence(id={self.document_id!r}, token_count={self.token_count}, sequence_length={self.sequence_length})"


@dataclass(frozen=True)
class SequenceVector:
    """
    A document as a numeric vector, sparse (`feature index -> weight`) and optionally dense.

    `metadata['vocabulary_size']` is the dimension of the index space the vector was
    built in; every sparse key must fall inside it.
    """
    document_id: str
    sparse_vector: Mapping[int, float]
    kind: VectorizationType = VectorizationType.CUSTOM
    metadata: Mapping[str, Any] = field(default_factory=dict)
    dense_vector: Optional[np.ndarray] = field(default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'sparse_vector', _frozen_mapping(self.sparse_vector))
        object.__setattr__(self, 'metadata', _frozen_mapping(self.metadata))
        if self.dense_vector is not None:
            dense = np.array(self.dense_vector, dtype=float)
            dense.setflags(write=False)
            object.__setattr__(self, 'dense_vector', dense)

        size = self.metadata.get('vocabulary_size')
        if size is not None:
            bad = [i for i in self.sparse_vector if not 0 <= i < size]
            if bad:
                raise InternalInvariantViolation(
                    f"{self.document_id}: feature indices {sorted(bad)} outside vocabulary of size {size}")

    @property
    def dimension(self) -> int:
        if self.dense_vector is not None:
            return len(self.dense_vector)
        return self.metadata.get('vocabulary_size', 0)

    @property
    def sparsity(self) -> float:
        size = self.metadata.get('vocabulary_size')
        if not size:
            return 0.0
        return 1.0 - len(self.sparse_vector) / size

    @property
    def l2_norm(self) -> float:
        if self.dense_vector is not None:
            return float(np.linalg.norm(self.dense_vector))
        return float(np.sqrt(sum(v * v for v in self.sparse_vector.values())))

    @property
    def non_zero_count(self) -> int:
        if self.sparse_vector:
            return len(self.sparse_vector)
        if self.dense_vector is not None:
            return int(np.count_nonzero(self.dense_vector))
        return 0

    def top_features(self, n: int) -> Dict[int, float]:
        ranked = sorted(self.sparse_vector.items(), key=lambda kv: kv[1], reverse=True)
        return dict(ranked[:n])

    def to_dense(self, vocabulary_size: Optional[int] = None) -> np.ndarray:
        if self.dense_vector is not None:
            return self.dense_vector.copy()
        size = self.dimension if vocabulary_size is None else vocabulary_size
        dense = np.zeros(size, dtype=float)
        for index, value in self.sparse_vector.items():
            if index < size:
                dense[index] = value
        return dense

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.document_id,
            'type': self.kind.name,
            'dimension': self.dimension,
            'vector': {str(k): v for k, v in self.sparse_vector.items()},
            'metadata': dict(self.metadata),
        }

    def to_formatted_string(self, max_features: int = 10) -> str:
        lines = [
            f"Document ID: {self.document_id}",
            f"Vectorization Type: {self.kind.name}",
            f"Dimension: {self.dimension}",
            f"L2 Norm: {self.l2_norm:.6f}",
        ]
        if self.sparse_vector:
            lines.append(f"Sparsity: {self.sparsity * 100:.2f}%")
            lines.append(f"Non-zero features: {len(self.sparse_vector)}")
            lines.append("Top features (index: value):")
            lines.extend(f"  {i}: {v:.6f}" for i, v in self.top_features(max_features).items())
        elif self.dense_vector is not None:
            shown = self.dense_vector[:max_features]
            lines.append(f"Dense vector (first {len(shown)} values):")
            lines.append("  " + ", ".join(f"{v:.6f}" for v in shown))
        if self.metadata:
            lines.append("Metadata:")
            lines.extend(f"  {k}: {v}" for k, v in self.metadata.items())
        return "\n".join(lines) + "\n"

    def __repr__(self):
        return (f"SequenceVector(id={self.document_id!r}, type={self.kind.name}, "
                f"dimension={self.dimension}, sparsity={self.sparsity * 100:.2f}%)")
