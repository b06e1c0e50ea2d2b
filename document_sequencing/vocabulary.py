from collections import Counter
from typing import Dict, Iterable, Iterator, List, Optional

import numpy as np

from document_sequencing.exceptions import ConfigError, InternalInvariantViolation

PAD_TOKEN = '<PAD>'
UNK_TOKEN = '<UNK>'


class Vocabulary:
    """
    Shared token <-> index mapping of a pipeline run.

    Padding is always index 0 and unknown index 1. Corpus tokens follow in descending
    frequency; tokens with equal frequency keep the order in which they were first
    seen in the corpus. The IntegerEncoder and the TFIDFCalculator both read this
    mapping; the BoW and TF-IDF vectorizers deliberately keep their own (see
    vectorizers.FitVocabulary).
    """
    def __init__(self, min_frequency: int = 1, unknown_token: str = UNK_TOKEN,
                 padding_token: str = PAD_TOKEN):
        if min_frequency < 1:
            raise ConfigError(f"min_frequency must be >= 1, got {min_frequency}")
        if unknown_token == padding_token:
            raise ConfigError("unknown_token and padding_token must differ")

        self.min_frequency = min_frequency
        self.unknown_token = unknown_token
        self.padding_token = padding_token

        self._token_to_index: Dict[str, int] = {}
        self._index_to_token: List[str] = []
        self._frequencies: Counter = Counter()

        self._add(padding_token)
        self._add(unknown_token)

    def _add(self, token: str):
        if token in self._token_to_index:
            return
        self._token_to_index[token] = len(self._index_to_token)
        self._index_to_token.append(token)

    def build_from_documents(self, tokenized_documents: Iterable[List[str]]) -> 'Vocabulary':
        frequencies = Counter()
        for tokens in tokenized_documents:
            frequencies.update(tokens)
        self._frequencies.update(frequencies)

        # sorted() is stable, so equal counts keep Counter's first-seen order
        kept = [t for t, c in frequencies.items() if c >= self.min_frequency]
        for token in sorted(kept, key=lambda t: -frequencies[t]):
            self.add_token(token)

        self._check_bijection()
        return self

    def add_token(self, token: str):
        if token in (self.unknown_token, self.padding_token):
            return
        self._add(token)

    def _check_bijection(self):
        if len(self._token_to_index) != len(self._index_to_token):
            raise InternalInvariantViolation(
                f"token map has {len(self._token_to_index)} entries, index map {len(self._index_to_token)}")
        for token, index in self._token_to_index.items():
            if self._index_to_token[index] != token:
                raise InternalInvariantViolation(f"index {index} maps back to {self._index_to_token[index]!r}, not {token!r}")

    def get_index(self, token: str) -> int:
        return self._token_to_index.get(token, self.unknown_index)

    def get_token(self, index: int) -> str:
        if 0 <= index < len(self._index_to_token):
            return self._index_to_token[index]
        return self.unknown_token

    def contains(self, token: str) -> bool:
        return token in self._token_to_index

    def frequency(self, token: str) -> int:
        return self._frequencies.get(token, 0)

    def tokens(self) -> List[str]:
        """All tokens in index order, reserved tokens included."""
        return list(self._index_to_token)

    @property
    def size(self) -> int:
        return len(self._index_to_token)

    @property
    def unknown_index(self) -> int:
        return self._token_to_index[self.unknown_token]

    @property
    def padding_index(self) -> int:
        return self._token_to_index[self.padding_token]

    def get_statistics(self) -> Dict:
        return {
            'vocabulary_size': self.size,
            'min_frequency': self.min_frequency,
            'unknown_token': self.unknown_token,
            'padding_token': self.padding_token,
        }

    def __contains__(self, token: str) -> bool:
        return self.contains(token)

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[str]:
        return iter(self._index_to_token)

    def __repr__(self):
        return f"Vocabulary(size={self.size}, min_frequency={self.min_frequency})"


class IntegerEncoder:
    def __init__(self, vocabulary: Vocabulary):
        self.vocabulary = vocabulary

    def encode(self, tokens: Iterable[str]) -> List[int]:
        return [self.vocabulary.get_index(t) for t in tokens]

    def encode_all(self, tokenized_documents: Iterable[List[str]]) -> List[List[int]]:
        return [self.encode(tokens) for tokens in tokenized_documents]

    def decode(self, indices: Iterable[int]) -> List[str]:
        return [self.vocabulary.get_token(i) for i in indices]

    def decode_all(self, sequences: Iterable[List[int]]) -> List[List[str]]:
        return [self.decode(seq) for seq in sequences]

    def pad_sequence(self, sequence: List[int], max_length: int) -> List[int]:
        """Keeps the first `max_length` indices, or right-pads with the padding index."""
        if max_length < 0:
            raise ConfigError(f"max_length must be >= 0, got {max_length}")
        padded = list(sequence[:max_length])
        padded.extend([self.vocabulary.padding_index] * (max_length - len(padded)))
        return padded

    def pad_all(self, sequences: List[List[int]], max_length: Optional[int] = None) -> List[List[int]]:
        if max_length is None:
            max_length = max((len(s) for s in sequences), default=0)
        return [self.pad_sequence(s, max_length) for s in sequences]

    def to_array(self, sequences: List[List[int]], max_length: Optional[int] = None) -> np.ndarray:
        padded = self.pad_all(sequences, max_length)
        width = len(padded[0]) if padded else (max_length or 0)
        return np.array(padded, dtype=np.int64).reshape(len(padded), width)
