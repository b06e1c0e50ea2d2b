from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from document_sequencing.config import PipelineConfiguration
from document_sequencing.exceptions import InputError
from document_sequencing.metrics import PerformanceMonitor
from document_sequencing.models import DocumentSequence, SequenceVector, VectorizationType
from document_sequencing.preprocessing import StopWordFilter, TextPreprocessor, Tokenizer
from document_sequencing.stemmer import PorterStemmer
from document_sequencing.tfidf_calculator import TFIDFCalculator
from document_sequencing.vectorizers import BagOfWordsVectorizer, TfidfVectorizer
from document_sequencing.vocabulary import IntegerEncoder, Vocabulary

TOTAL_STEPS = 7


@dataclass(frozen=True)
class PipelineResult:
    sequences: Sequence[DocumentSequence]
    bow_vectors: Sequence[SequenceVector]
    tfidf_vectors: Sequence[SequenceVector]
    vocabulary: Vocabulary
    tfidf_calculator: TFIDFCalculator
    configuration: PipelineConfiguration = field(default_factory=PipelineConfiguration)

    def __post_init__(self):
        object.__setattr__(self, 'sequences', tuple(self.sequences))
        object.__setattr__(self, 'bow_vectors', tuple(self.bow_vectors))
        object.__setattr__(self, 'tfidf_vectors', tuple(self.tfidf_vectors))

    @property
    def document_count(self) -> int:
        return len(self.sequences)

    def summary(self) -> Dict:
        return {
            'documents_processed': self.document_count,
            'vocabulary_size': self.vocabulary.size,
            'total_tokens': sum(s.token_count for s in self.sequences),
            'configuration': self.configuration.to_dict(),
        }

    def print_summary(self):
        print("\n=== PIPELINE RESULTS SUMMARY ===")
        print(f"Documents processed: {self.document_count}")
        print(f"Vocabulary size: {self.vocabulary.size}")
        print("\nConfiguration:")
        for key, value in self.configuration.to_dict().items():
            print(f"  {key}: {value}")


class SequencingPipeline:
    """
    Runs the seven conversion stages over a list of raw documents.

    Sample usage:
        pipeline = SequencingPipeline(PipelineConfiguration(remove_stopwords=False))
        result = pipeline.execute(["The cat sat.", "The dog ran."])
        result.sequences[0].integer_sequence

    Every call to `execute` builds fresh components from the configuration, so one
    pipeline can be reused across corpora.
    """
    def __init__(self, config: Optional[PipelineConfiguration] = None, verbose: bool = True,
                 monitor: Optional[PerformanceMonitor] = None,
                 stop_word_filter: Optional[StopWordFilter] = None):
        self.config = config or PipelineConfiguration()
        self.verbose = verbose
        self.monitor = monitor
        self.stop_word_filter = stop_word_filter

    def _log(self, message: str = ""):
        if self.verbose:
            print(message, flush=True)

    @contextmanager
    def _stage(self, number: int, name: str):
        self._log(f"[Step {number}/{TOTAL_STEPS}] {name}...")
        if self.monitor:
            self.monitor.start_operation(name)
        try:
            yield
        finally:
            if self.monitor:
                self.monitor.end_operation(name)

    @staticmethod
    def _validate(documents) -> List[str]:
        if documents is None:
            return []
        documents = list(documents)
        for i, doc in enumerate(documents):
            if not isinstance(doc, str):
                raise InputError(f"Document at position {i} is {type(doc).__name__}, expected str")
        return documents

    def execute(self, documents: Optional[Sequence[str]]) -> PipelineResult:
        documents = self._validate(documents)
        cfg = self.config

        vocabulary = Vocabulary(cfg.min_frequency)
        calculator = TFIDFCalculator()
        if not documents:
            self._log("No documents to process.")
            return PipelineResult((), (), (), vocabulary, calculator, cfg)

        self._log("\n" + "=" * 80)
        self._log("DOCUMENT-TO-SEQUENCE CONVERSION PIPELINE")
        self._log("=" * 80)
        self._log(f"Processing {len(documents)} documents...\n")

        with self._stage(1, "Text Preprocessing"):
            preprocessor = TextPreprocessor(cfg.lowercase, cfg.remove_html, cfg.remove_urls,
                                            cfg.remove_emails, cfg.remove_punctuation)
            preprocessed, protected_words = preprocessor.preprocess_all(documents)
            self._log(f"  Completed: {len(protected_words)} proper nouns protected from stemming\n")

        with self._stage(2, "Tokenization"):
            tokenized = Tokenizer(cfg.min_token_length).tokenize_all(preprocessed)
            known_words = Tokenizer.known_words(tokenized)
            self._log(f"  Completed: Generated {sum(len(t) for t in tokenized)} tokens\n")

        with self._stage(3, "Stop Word Filtering"):
            if cfg.remove_stopwords:
                stop_filter = self.stop_word_filter or StopWordFilter()
                filtered = stop_filter.filter_all(tokenized)
            else:
                filtered = tokenized
            self._log(f"  Completed: Retained {sum(len(t) for t in filtered)} tokens\n")

        with self._stage(4, "Stemming"):
            if cfg.apply_stemming:
                stemmer = PorterStemmer(protected_words, known_words)
                stemmed = stemmer.stem_documents(filtered)
                self._log("  Completed: Applied Porter Stemmer\n")
            else:
                stemmed = filtered
                self._log("  Skipped\n")

        with self._stage(5, "Vocabulary Construction & Integer Encoding"):
            vocabulary.build_from_documents(stemmed)
            integer_sequences = IntegerEncoder(vocabulary).encode_all(stemmed)
            self._log(f"  Completed: Vocabulary of {vocabulary.size} tokens\n")

        with self._stage(6, "Bag-of-Words Vectorization"):
            bow = BagOfWordsVectorizer(cfg.binary_bow)
            bow_vectors = bow.fit_transform(stemmed)
            self._log(f"  Completed: {bow.vocabulary_size} features\n")

        with self._stage(7, "TF-IDF Vectorization"):
            tfidf = TfidfVectorizer(cfg.sublinear_tf)
            tfidf_vectors = tfidf.fit_transform(stemmed)
            calculator.fit(stemmed, vocabulary)
            self._log("  Completed: Generated TF-IDF vectors and all formula calculations\n")

        sequences = []
        bow_results = []
        tfidf_results = []
        for i, text in enumerate(documents):
            doc_id = f"doc_{i}"
            sequences.append(DocumentSequence(
                document_id=doc_id,
                original_text=text,
                tokens=stemmed[i],
                integer_sequence=integer_sequences[i],
                metadata={
                    'preprocessed': preprocessed[i],
                    'original_token_count': len(tokenized[i]),
                    'filtered_token_count': len(stemmed[i]),
                },
            ))
            bow_results.append(SequenceVector(
                doc_id, bow_vectors[i], VectorizationType.BAG_OF_WORDS,
                {'vocabulary_size': bow.vocabulary_size}))
            tfidf_results.append(SequenceVector(
                doc_id, tfidf_vectors[i], VectorizationType.TF_IDF,
                {'vocabulary_size': tfidf.vocabulary_size}))

        self._log("=" * 80)
        self._log("PIPELINE EXECUTION COMPLETED SUCCESSFULLY")
        self._log("=" * 80 + "\n")

        return PipelineResult(sequences, bow_results, tfidf_results, vocabulary, calculator, cfg)
