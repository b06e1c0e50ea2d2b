from collections import Counter
from pathlib import Path
from typing import Union

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from document_sequencing.formulas import IDFFormula
from document_sequencing.tfidf_calculator import TFIDFCalculator
from document_sequencing.vocabulary import Vocabulary


def vocabulary_frequencies(vocabulary: Vocabulary) -> Counter:
    """Corpus counts of the non-reserved vocabulary tokens."""
    reserved = {vocabulary.padding_token, vocabulary.unknown_token}
    return Counter({t: vocabulary.frequency(t) for t in vocabulary if t not in reserved})


class FrequencyAnalyzer:
    def __init__(self, output_dir: Union[str, Path]):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        sns.set_style("whitegrid")

    def plot_frequency_distribution(self,
                                    freq_counter: Counter,
                                    title: str,
                                    filename: str,
                                    top_n: int = 50,
                                    log_scale: bool = True) -> Path:
        most_common = freq_counter.most_common(top_n)
        words, counts = zip(*most_common) if most_common else ([], [])

        plt.figure(figsize=(15, 8))
        bars = plt.bar(range(len(words)), counts)

        for i, bar in enumerate(bars):
            if i < 10:
                bar.set_color('#e74c3c')
            elif i < 25:
                bar.set_color('#3498db')
            else:
                bar.set_color('#95a5a6')

        plt.xlabel('Stemmed tokens', fontsize=12)
        plt.ylabel('Corpus frequency', fontsize=12)
        plt.title(title, fontsize=14, fontweight='bold')
        plt.xticks(range(len(words)), words, rotation=45, ha='right')

        if log_scale and counts:
            plt.yscale('log')

        return self._save(filename)

    def plot_zipf_distribution(self, freq_counter: Counter, filename: str) -> Path:
        sorted_counts = sorted(freq_counter.values(), reverse=True)
        ranks = np.arange(1, len(sorted_counts) + 1)

        plt.figure(figsize=(12, 8))
        if sorted_counts:
            plt.loglog(ranks, sorted_counts, 'b-', alpha=0.6, linewidth=2)
        plt.xlabel('Rank (log scale)', fontsize=12)
        plt.ylabel('Frequency (log scale)', fontsize=12)
        plt.title("Zipf's Law Distribution", fontsize=14, fontweight='bold')
        plt.grid(True, alpha=0.3)

        return self._save(filename)

    def plot_idf_comparison(self, calculator: TFIDFCalculator, filename: str, top_n: int = 30) -> Path:
        """Grouped bars of every IDF variant for the `top_n` most document-frequent terms."""
        vocabulary = calculator.vocabulary
        reserved = {vocabulary.padding_index, vocabulary.unknown_index} if vocabulary else set()
        terms = [t for t in range(calculator.vocabulary_size) if t not in reserved]
        terms.sort(key=lambda t: -calculator.get_document_frequency(t))
        terms = terms[:top_n]

        formulas = list(IDFFormula)
        x = np.arange(len(terms))
        width = 0.8 / len(formulas)
        palette = sns.color_palette("husl", len(formulas))

        fig, ax = plt.subplots(figsize=(16, 8))
        for i, formula in enumerate(formulas):
            values = [calculator.get_idf(t, formula) for t in terms]
            ax.bar(x + (i - len(formulas) / 2) * width + width / 2, values, width,
                   label=formula.display_name, color=palette[i], alpha=0.85)

        ax.set_xlabel('Terms (by document frequency)', fontsize=12)
        ax.set_ylabel('IDF', fontsize=12)
        ax.set_title('IDF Formula Comparison', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels([vocabulary.get_token(t) for t in terms] if vocabulary else [],
                           rotation=45, ha='right')
        ax.legend()

        return self._save(filename)

    def _save(self, filename: str) -> Path:
        path = self.output_dir / filename
        plt.tight_layout()
        plt.savefig(path, dpi=300, bbox_inches='tight')
        plt.close()
        print(f"Saved plot: {filename}", flush=True)
        return path
