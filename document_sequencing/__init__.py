from .config import PipelineConfiguration
from .exceptions import SequencingError, InputError, ConfigError, InternalInvariantViolation
from .preprocessing import TextPreprocessor, Tokenizer, StopWordFilter
from .stemmer import PorterStemmer
from .vocabulary import Vocabulary, IntegerEncoder
from .vectorizers import BagOfWordsVectorizer, TfidfVectorizer
from .formulas import TFFormula, IDFFormula
from .tfidf_calculator import TFIDFCalculator
from .models import DocumentSequence, SequenceVector, VectorizationType
from .pipeline import SequencingPipeline, PipelineResult

__all__ = [
    'PipelineConfiguration',
    'SequencingError',
    'InputError',
    'ConfigError',
    'InternalInvariantViolation',
    'TextPreprocessor',
    'Tokenizer',
    'StopWordFilter',
    'PorterStemmer',
    'Vocabulary',
    'IntegerEncoder',
    'BagOfWordsVectorizer',
    'TfidfVectorizer',
    'TFFormula',
    'IDFFormula',
    'TFIDFCalculator',
    'DocumentSequence',
    'SequenceVector',
    'VectorizationType',
    'SequencingPipeline',
    'PipelineResult',
]
