"""
Porter-style suffix stripping with a repair pass.

The five reduction steps follow Porter (1980) in a simplified form: `y` is always
treated as a consonant and the measure of a stem is the number of vowel groups it
contains. Plain suffix stripping happily produces non-words ("flies" -> "fli"), so
every candidate goes through `ensure_meaningful`, which tries a fixed, ordered list of
morphological fallbacks keyed on the suffix of the original word. The order of those
rules decides the output for ambiguous words and must not be rearranged.
"""
from typing import Iterable, List, Optional, Set

VOWELS = 'aeiou'

STEP2_SUFFIXES = [
    ('ational', 'ate'), ('tional', 'tion'), ('enci', 'ence'), ('anci', 'ance'),
    ('izer', 'ize'), ('abli', 'able'), ('alli', 'al'), ('entli', 'ent'),
    ('eli', 'e'), ('ousli', 'ous'), ('ization', 'ize'), ('ation', 'ate'),
    ('ator', 'ate'), ('alism', 'al'), ('iveness', 'ive'), ('fulness', 'ful'),
    ('ousness', 'ous'), ('aliti', 'al'), ('iviti', 'ive'), ('biliti', 'ble'),
]

STEP3_SUFFIXES = [
    ('icate', 'ic'), ('ative', ''), ('alize', 'al'),
    ('iciti', 'ic'), ('ical', 'ic'), ('ful', ''), ('ness', ''),
]

STEP4_SUFFIXES = [
    'al', 'ance', 'ence', 'er', 'ic', 'able', 'ible', 'ant',
    'ement', 'ment', 'ent', 'ion', 'ou', 'ism', 'ate', 'iti', 'ous', 'ive', 'ize',
]

SILENT_E_ENDINGS = 'dgklmprtvc'


def is_consonant(ch: str) -> bool:
    return ch not in VOWELS


def contains_vowel(word: str) -> bool:
    return any(not is_consonant(ch) for ch in word)


def ends_with_double_consonant(word: str) -> bool:
    return len(word) >= 2 and word[-1] == word[-2] and is_consonant(word[-1])


def ends_with_cvc(word: str) -> bool:
    if len(word) < 3:
        return False
    return (is_consonant(word[-3]) and not is_consonant(word[-2])
            and is_consonant(word[-1]) and word[-1] not in 'wxy')


def measure(word: str) -> int:
    """Number of vowel groups in `word`."""
    m = 0
    prev_was_vowel = False
    for ch in word:
        vowel = not is_consonant(ch)
        if vowel and not prev_was_vowel:
            m += 1
        prev_was_vowel = vowel
    return m


def is_meaningful_string(word: Optional[str]) -> bool:
    """Plausible English word shape: 3+ letters, a vowel, no stray trailing `i`."""
    if word is None or len(word) < 3:
        return False
    if not word.isalpha():
        return False
    if not contains_vowel(word):
        return False
    if word.endswith('i') and not word.endswith(('ai', 'ei', 'oi')):
        return False
    return True


def should_prefer_silent_e(stem: str) -> bool:
    """Whether `stem + 'e'` is the likelier base form (e.g. "make" from "mak")."""
    if not stem:
        return False
    if stem.endswith(('ch', 'sh', 'ss')):
        return False
    last = stem[-1]
    if last in 'xz':
        return False
    if last == 's':
        return not (len(stem) >= 2 and stem[-2] in 'us')
    return last in SILENT_E_ENDINGS


class PorterStemmer:
    """
    Sample usage:
        stemmer = PorterStemmer(protected_words={'paris'}, known_words=corpus_tokens)
        stemmer.stem('running')   # 'run'
        stemmer.stem('Paris')     # 'paris'

    Protected words (proper nouns) are returned lowercased without stemming. Known words
    (the corpus's own tokens) let the repair pass accept a candidate that looks odd but
    really occurs in the text.
    """
    def __init__(self, protected_words: Optional[Iterable[str]] = None,
                 known_words: Optional[Iterable[str]] = None):
        self.protected_words: Set[str] = set(protected_words or ())
        self.known_words: Set[str] = set(known_words or ())

    def with_words(self, protected_words: Iterable[str] = (),
                   known_words: Iterable[str] = ()) -> 'PorterStemmer':
        return PorterStemmer(self.protected_words | set(protected_words),
                             self.known_words | set(known_words))

    def stem(self, word: Optional[str]) -> Optional[str]:
        if word is None or len(word) < 3:
            return word

        lower_word = word.lower()
        if lower_word in self.protected_words:
            return lower_word

        candidate = self._step1a(lower_word)
        candidate = self._step1b(candidate)
        candidate = self._step1c(candidate)
        candidate = self._step2(candidate)
        candidate = self._step3(candidate)
        candidate = self._step4(candidate)
        candidate = self._step5(candidate)

        return self.ensure_meaningful(lower_word, candidate)

    def stem_all(self, tokens: Iterable[str]) -> List[str]:
        return [self.stem(t) for t in tokens]

    def stem_documents(self, tokenized_documents: Iterable[List[str]]) -> List[List[str]]:
        return [self.stem_all(tokens) for tokens in tokenized_documents]

    # Reduction steps

    @staticmethod
    def _step1a(word: str) -> str:
        if word.endswith('sses'):
            return word[:-2]
        if word.endswith('ies'):
            return word[:-2]
        if word.endswith('ss'):
            return word
        if word.endswith('s'):
            return word[:-1]
        return word

    def _step1b(self, word: str) -> str:
        if word.endswith('eed'):
            if measure(word[:-3]) > 0:
                return word[:-1]
        elif word.endswith('ed'):
            stem = word[:-2]
            if contains_vowel(stem):
                return self._adjust_step1b(stem)
        elif word.endswith('ing'):
            stem = word[:-3]
            if contains_vowel(stem):
                return self._adjust_step1b(stem)
        return word

    @staticmethod
    def _adjust_step1b(word: str) -> str:
        if word.endswith(('at', 'bl', 'iz')):
            return word + 'e'
        if ends_with_double_consonant(word) and word[-1] not in 'lsz':
            return word[:-1]
        if measure(word) == 1 and ends_with_cvc(word):
            return word + 'e'
        return word

    @staticmethod
    def _step1c(word: str) -> str:
        if word.endswith('y') and contains_vowel(word[:-1]):
            return word[:-1] + 'i'
        return word

    @staticmethod
    def _replace_first(word: str, table) -> str:
        # A suffix whose stem fails the measure check does not stop the scan.
        for suffix, replacement in table:
            if word.endswith(suffix):
                stem = word[:-len(suffix)]
                if measure(stem) > 0:
                    return stem + replacement
        return word

    def _step2(self, word: str) -> str:
        return self._replace_first(word, STEP2_SUFFIXES)

    def _step3(self, word: str) -> str:
        return self._replace_first(word, STEP3_SUFFIXES)

    @staticmethod
    def _step4(word: str) -> str:
        for suffix in STEP4_SUFFIXES:
            if word.endswith(suffix):
                stem = word[:-len(suffix)]
                if measure(stem) > 1:
                    return stem
        return word

    @staticmethod
    def _step5(word: str) -> str:
        if word.endswith('e'):
            stem = word[:-1]
            m = measure(stem)
            if m > 1 or (m == 1 and not ends_with_cvc(stem)):
                return stem
        if len(word) > 1 and ends_with_double_consonant(word) and word.endswith('l'):
            if measure(word) > 1:
                return word[:-1]
        return word

    # Repair pass

    def ensure_meaningful(self, original: str, candidate: Optional[str]) -> str:
        if not candidate:
            return original
        if candidate == original:
            return candidate
        if candidate in self.protected_words or candidate in self.known_words:
            return candidate

        if original.endswith('ies') and len(original) > 4:
            stem = original[:-3]
            for form in (stem + 'ie', stem + 'y'):
                if is_meaningful_string(form):
                    return form

        if original.endswith('ves') and len(original) > 4:
            repaired = self._repair_ves(original[:-3])
            if repaired:
                return repaired

        if original.endswith('es') and len(original) > 3:
            stem = original[:-2]
            with_e = stem + 'e'
            prefer_e = should_prefer_silent_e(stem)
            if prefer_e and is_meaningful_string(with_e):
                return with_e
            if is_meaningful_string(stem):
                return stem
            if not prefer_e and is_meaningful_string(with_e):
                return with_e

        if original.endswith('s') and len(original) > 3 and not original.endswith('ss'):
            stem = original[:-1]
            if is_meaningful_string(stem):
                return stem
            if is_meaningful_string(stem + 'e'):
                return stem + 'e'

        if original.endswith('ing') and len(original) > 4:
            repaired = self._repair_ing(original[:-3])
            if repaired:
                return repaired

        if original.endswith('ed') and len(original) > 4:
            stem = original[:-2]
            if is_meaningful_string(stem):
                return stem
            if stem.endswith('i') and len(stem) > 2:
                y_form = stem[:-1] + 'y'
                if is_meaningful_string(y_form):
                    return y_form

        if original.endswith('e') and not candidate.endswith('e') and is_meaningful_string(original):
            return original

        # agent nouns: "computer" -> "comput" only when "comput" itself occurs in the corpus
        if original in (candidate + 'er', candidate + 'or') and candidate not in self.known_words:
            return original

        if original.endswith('ll') and candidate.endswith('l') and len(original) == len(candidate) + 1:
            return original

        if not is_meaningful_string(candidate):
            return original if is_meaningful_string(original) else candidate

        return candidate

    @staticmethod
    def _repair_ves(stem: str) -> Optional[str]:
        f_form = stem + 'f'
        ve_form = stem + 've'
        fe_form = stem + 'fe'

        if stem.endswith('i') and is_meaningful_string(fe_form):
            return fe_form
        if f_form.endswith(('of', 'uf')) and is_meaningful_string(ve_form):
            return ve_form
        if is_meaningful_string(f_form) and f_form.endswith(('lf', 'rf', 'af', 'ef', 'ff')):
            return f_form
        for form in (ve_form, f_form, fe_form):
            if is_meaningful_string(form):
                return form
        return None

    @staticmethod
    def _repair_ing(base: str) -> Optional[str]:
        if len(base) > 2 and ends_with_double_consonant(base):
            reduced = base[:-1]
            if is_meaningful_string(reduced):
                return reduced

        with_e = base + 'e'
        prefer_e = should_prefer_silent_e(base)
        if len(base) <= 3 and prefer_e and is_meaningful_string(with_e):
            return with_e
        if is_meaningful_string(base):
            return base
        if prefer_e and is_meaningful_string(with_e):
            return with_e
        if is_meaningful_string(with_e):
            return with_e
        return None
