import json
from enum import Enum
from pathlib import Path
from typing import Sequence, Union

import pandas as pd

from document_sequencing.formulas import IDFFormula, TFFormula
from document_sequencing.models import DocumentSequence, SequenceVector
from document_sequencing.tfidf_calculator import TFIDFCalculator


class OutputFormat(Enum):
    PLAIN_TEXT = 'txt'
    NUMERIC_SEQUENCES = 'numeric'
    CSV = 'csv'
    JSON = 'json'


def get_output_format(name: Union[str, OutputFormat]) -> OutputFormat:
    if isinstance(name, OutputFormat):
        return name
    for fmt in OutputFormat:
        if name.lower() in (fmt.value, fmt.name.lower()):
            return fmt
    raise ValueError(f"Unknown output format: {name}")


class SequenceWriter:
    """
    Writes pipeline output to a single file. Parent directories are created as needed.

    Sample usage:
        SequenceWriter('output/sequences.csv', 'csv').write_sequences(result.sequences)
        SequenceWriter('output/tfidf_all.txt').write_tfidf_all_formulas(result.tfidf_calculator)
    """
    def __init__(self, output_path: Union[str, Path],
                 output_format: Union[str, OutputFormat] = OutputFormat.PLAIN_TEXT):
        self.output_path = Path(output_path)
        self.output_format = get_output_format(output_format)

    def _prepare(self):
        self.output_path.parent.mkdir(parents=True, exist_ok=True)

    def write_sequences(self, sequences: Sequence[DocumentSequence]) -> Path:
        self._prepare()
        if self.output_format is OutputFormat.PLAIN_TEXT:
            self._write_plain_text(sequences)
        elif self.output_format is OutputFormat.NUMERIC_SEQUENCES:
            self._write_numeric(sequences)
        elif self.output_format is OutputFormat.CSV:
            self._write_csv(sequences)
        elif self.output_format is OutputFormat.JSON:
            self._write_json(sequences)
        print(f"Sequences written to {self.output_path}", flush=True)
        return self.output_path

    def _write_plain_text(self, sequences: Sequence[DocumentSequence]):
        with open(self.output_path, 'w', encoding='utf-8') as f:
            f.write("=== DOCUMENT TO SEQUENCE CONVERSION RESULTS ===\n\n")
            for i, seq in enumerate(sequences, start=1):
                f.write(f"--- Document {i} ---\n")
                f.write(seq.to_formatted_string())
                f.write("\n" + "=" * 80 + "\n\n")
            f.write(f"Total Documents Processed: {len(sequences)}\n")

    def _write_numeric(self, sequences: Sequence[DocumentSequence]):
        with open(self.output_path, 'w', encoding='utf-8') as f:
            for seq in sequences:
                f.write(' '.join(str(i) for i in seq.integer_sequence) + "\n")

    def _write_csv(self, sequences: Sequence[DocumentSequence]):
        rows = [{
            'document_id': seq.document_id,
            'token_count': seq.token_count,
            'sequence_length': seq.sequence_length,
            'tokens': ' '.join(seq.tokens),
            'integer_sequence': ' '.join(str(i) for i in seq.integer_sequence),
        } for seq in sequences]
        columns = ['document_id', 'token_count', 'sequence_length', 'tokens', 'integer_sequence']
        pd.DataFrame(rows, columns=columns).to_csv(self.output_path, index=False)

    def _write_json(self, sequences: Sequence[DocumentSequence]):
        payload = {
            'documents': [seq.to_dict() for seq in sequences],
            'total_documents': len(sequences),
        }
        with open(self.output_path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)

    def write_vectors(self, vectors: Sequence[SequenceVector], max_features: int = 10) -> Path:
        self._prepare()
        if self.output_format is OutputFormat.JSON:
            with open(self.output_path, 'w', encoding='utf-8') as f:
                json.dump({'vectors': [v.to_dict() for v in vectors], 'total_documents': len(vectors)},
                          f, indent=2)
        else:
            with open(self.output_path, 'w', encoding='utf-8') as f:
                f.write("=== DOCUMENT SEQUENCE VECTORS ===\n\n")
                for vector in vectors:
                    f.write(vector.to_formatted_string(max_features))
                    f.write("\n" + "=" * 80 + "\n\n")
                f.write(f"Total Documents: {len(vectors)}\n")
        print(f"Vectors written to {self.output_path}", flush=True)
        return self.output_path

    def write_tfidf_all_formulas(self, calculator: TFIDFCalculator) -> Path:
        """Every TF and IDF variant for every term of every document, as a readable report."""
        self._prepare()
        rule = "=" * 100
        with open(self.output_path, 'w', encoding='utf-8') as f:
            f.write(rule + "\n")
            f.write("TF-IDF ANALYSIS WITH ALL FORMULAS\n")
            f.write("Based on: https://en.wikipedia.org/wiki/Tf-idf\n")
            f.write(rule + "\n\n")
            f.write(f"Vocabulary Size: {calculator.vocabulary_size}\n")
            f.write(f"Total Documents: {calculator.total_documents}\n\n")

            f.write("=== TERM FREQUENCY (TF) FORMULAS ===\n\n")
            for tf in TFFormula:
                f.write(f"{tf.display_name:<30} : {tf.formula}\n")
            f.write("\n=== INVERSE DOCUMENT FREQUENCY (IDF) FORMULAS ===\n\n")
            for idf in IDFFormula:
                f.write(f"{idf.display_name:<45} : {idf.formula}\n")
            f.write("\n" + rule + "\n\n")

            for doc_index in range(calculator.total_documents):
                f.write(f"DOCUMENT {doc_index + 1}\n")
                f.write("-" * 100 + "\n")
                f.write(f"Total Terms in Document: {calculator.get_total_terms_in_document(doc_index)}\n")
                f.write(f"Max Term Count: {calculator.get_max_term_count_in_document(doc_index)}\n\n")

                term_indices = sorted(calculator.get_tf_vector(doc_index, TFFormula.RAW_COUNT))
                if not term_indices:
                    f.write("  (No terms in this document)\n\n")
                    continue

                for term_index in term_indices:
                    f.write(f"Term: \"{calculator.get_token(term_index)}\" (Index: {term_index})\n")
                    f.write(f"  Raw Count: {calculator.get_term_count(doc_index, term_index)}\n")
                    f.write(f"  Document Frequency: {calculator.get_document_frequency(term_index)}"
                            f" / {calculator.total_documents} documents\n")
                    f.write("  TERM FREQUENCY (TF) VALUES:\n")
                    for tf in TFFormula:
                        f.write(f"    {tf.display_name:<35} : {calculator.get_tf(doc_index, term_index, tf):.6f}\n")
                    f.write("  INVERSE DOCUMENT FREQUENCY (IDF) VALUES:\n")
                    for idf in IDFFormula:
                        f.write(f"    {idf.display_name:<45} : {calculator.get_idf(term_index, idf):.6f}\n")
                    f.write("\n")

            f.write(rule + "\n")
            f.write("END OF TF-IDF ANALYSIS\n")
            f.write(rule + "\n")
        print(f"TF-IDF analysis written to {self.output_path}", flush=True)
        return self.output_path
