import re
from typing import Iterable, List, Optional, Set, Tuple

import nltk

HTML_TAG_PATTERN = re.compile(r'<[^>]+>')
URL_PATTERN = re.compile(r'https?://\S+|www\.\S+')
EMAIL_PATTERN = re.compile(r'\S+@\S+')
NON_WORD_PATTERN = re.compile(r'[^a-zA-Z0-9\s]')
MULTI_SPACE_PATTERN = re.compile(r'\s+')
PROPER_NOUN_PATTERN = re.compile(r'\b([A-Z][a-z]+)\b')

ENGLISH_STOP_WORDS = frozenset([
    "a", "about", "above", "after", "again", "against", "all", "am", "an", "and",
    "any", "are", "as", "at", "be", "because", "been", "before", "being", "below",
    "between", "both", "but", "by", "can", "did", "do", "does", "doing", "down",
    "during", "each", "few", "for", "from", "further", "had", "has", "have",
    "having", "he", "her", "here", "hers", "herself", "him", "himself", "his",
    "how", "i", "if", "in", "into", "is", "it", "its", "itself", "just", "me",
    "might", "more", "most", "my", "myself", "no", "nor", "not", "now", "of",
    "off", "on", "once", "only", "or", "other", "our", "ours", "ourselves", "out",
    "over", "own", "same", "she", "should", "so", "some", "such", "than", "that",
    "the", "their", "theirs", "them", "themselves", "then", "there", "these",
    "they", "this", "those", "through", "to", "too", "under", "until", "up",
    "very", "was", "we", "were", "what", "when", "where", "which", "while",
    "who", "whom", "why", "will", "with", "would", "you", "your", "yours",
    "yourself", "yourselves",
])


class TextPreprocessor:
    """
    Cleans raw documents before tokenization.

    Cleaning order is fixed: HTML tags, URLs, emails, non-word characters, proper noun
    extraction (on the text before lowercasing), lowercasing, whitespace collapsing.
    Proper nouns are handed back to the caller so the stemmer can leave them alone.
    """
    def __init__(self, lowercase: bool = True, remove_html: bool = True,
                 remove_urls: bool = True, remove_emails: bool = True,
                 remove_punctuation: bool = True):
        self.lowercase = lowercase
        self.remove_html = remove_html
        self.remove_urls = remove_urls
        self.remove_emails = remove_emails
        self.remove_punctuation = remove_punctuation

    def preprocess(self, text: Optional[str]) -> Tuple[str, Set[str]]:
        """Returns the cleaned text and the proper nouns found in it (lowercased)."""
        if not text or not text.strip():
            return "", set()

        processed = text
        if self.remove_html:
            processed = HTML_TAG_PATTERN.sub(' ', processed)
        if self.remove_urls:
            processed = URL_PATTERN.sub(' ', processed)
        if self.remove_emails:
            processed = EMAIL_PATTERN.sub(' ', processed)
        if self.remove_punctuation:
            processed = NON_WORD_PATTERN.sub(' ', processed)

        proper_nouns = set()
        if self.lowercase:
            proper_nouns = {m.lower() for m in PROPER_NOUN_PATTERN.findall(processed)}
            processed = processed.lower()

        processed = MULTI_SPACE_PATTERN.sub(' ', processed)
        return processed.strip(), proper_nouns

    def preprocess_all(self, documents: Iterable[Optional[str]]) -> Tuple[List[str], Set[str]]:
        cleaned = []
        protected_words: Set[str] = set()
        for doc in documents:
            text, proper_nouns = self.preprocess(doc)
            cleaned.append(text)
            protected_words |= proper_nouns
        return cleaned, protected_words


class Tokenizer:
    def __init__(self, min_token_length: int = 1):
        self.min_token_length = min_token_length

    def tokenize(self, text: Optional[str]) -> List[str]:
        if not text or not text.strip():
            return []
        return [t for t in MULTI_SPACE_PATTERN.split(text.strip()) if len(t) >= self.min_token_length]

    def tokenize_all(self, documents: Iterable[Optional[str]]) -> List[List[str]]:
        return [self.tokenize(doc) for doc in documents]

    def unique_tokens(self, text: Optional[str]) -> List[str]:
        return list(dict.fromkeys(self.tokenize(text)))

    @staticmethod
    def known_words(tokenized_documents: Iterable[List[str]]) -> Set[str]:
        """Every token of the corpus, used by the stemmer to validate its output."""
        return {token for tokens in tokenized_documents for token in tokens}


class StopWordFilter:
    def __init__(self, stop_words: Optional[Iterable[str]] = None):
        self.stop_words = set(ENGLISH_STOP_WORDS if stop_words is None else stop_words)

    @classmethod
    def from_nltk(cls, language: str = 'english') -> 'StopWordFilter':
        try:
            nltk.data.find('corpora/stopwords')
        except LookupError:
            nltk.download('stopwords', quiet=True)

        from nltk.corpus import stopwords
        return cls(stopwords.words(language))

    def add_stop_words(self, *words: str):
        self.stop_words.update(w.lower() for w in words)

    def filter(self, tokens: Iterable[str]) -> List[str]:
        return [t for t in tokens if t.lower() not in self.stop_words]

    def filter_all(self, tokenized_documents: Iterable[List[str]]) -> List[List[str]]:
        return [self.filter(tokens) for tokens in tokenized_documents]
