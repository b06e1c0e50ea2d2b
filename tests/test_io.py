"""
Tests for reading documents and writing pipeline output.
"""
import json

import pandas as pd
import pytest

from document_sequencing.data_loader import (
    DocumentFormat,
    DocumentReader,
    get_document_format,
    read_folder,
    read_table,
)
from document_sequencing.writers import OutputFormat, SequenceWriter, get_output_format


@pytest.fixture
def text_file(tmp_path):
    path = tmp_path / "corpus.txt"
    path.write_text("first line\n\n  second line  \nthird\n\n\nfourth para\n", encoding="utf-8")
    return path


def test_read_single_document(text_file):
    documents = DocumentReader(text_file).read_documents()
    assert len(documents) == 1
    assert documents[0].startswith("first line")


def test_read_line_per_document(text_file):
    documents = DocumentReader(text_file, DocumentFormat.LINE_PER_DOCUMENT).read_documents()
    assert documents == ["first line", "second line", "third", "fourth para"]


def test_read_paragraph_per_document(text_file):
    documents = DocumentReader(text_file, "paragraph").read_documents()
    assert documents == ["first line", "second line   third", "fourth para"]


def test_missing_file(tmp_path):
    reader = DocumentReader(tmp_path / "missing.txt")
    assert not reader.file_exists()
    with pytest.raises(FileNotFoundError):
        reader.read_documents()


def test_unknown_document_format():
    assert get_document_format("LINE") is DocumentFormat.LINE_PER_DOCUMENT
    with pytest.raises(ValueError):
        get_document_format("xml")


def test_read_folder_sorted(tmp_path):
    (tmp_path / "b.txt").write_text("bravo", encoding="utf-8")
    (tmp_path / "a.txt").write_text("alpha", encoding="utf-8")
    (tmp_path / "skip.md").write_text("ignored", encoding="utf-8")
    documents = read_folder(tmp_path, show_progress=False)
    assert documents == [("a.txt", "alpha"), ("b.txt", "bravo")]


def test_read_folder_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_folder(tmp_path / "nope", show_progress=False)


def test_read_table_csv(tmp_path):
    path = tmp_path / "docs.csv"
    pd.DataFrame({"text": ["one doc", "", "two doc"], "id": [1, 2, 3]}).to_csv(path, index=False)
    assert read_table(path) == ["one doc", "two doc"]
    assert read_table(path, max_docs=1) == ["one doc"]
    with pytest.raises(KeyError):
        read_table(path, text_column="body")


def test_read_table_json(tmp_path):
    path = tmp_path / "docs.json"
    path.write_text(json.dumps([{"text": "alpha"}, {"text": "beta"}]), encoding="utf-8")
    assert read_table(path) == ["alpha", "beta"]


def test_read_table_unsupported(tmp_path):
    path = tmp_path / "docs.parquetx"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        read_table(path)


def test_write_numeric(plain_result, tmp_path):
    path = SequenceWriter(tmp_path / "out" / "seq.txt", "numeric").write_sequences(plain_result.sequences)
    assert path.read_text(encoding="utf-8") == "2 3 4\n2 5 6\n"


def test_write_plain_text(plain_result, tmp_path):
    path = SequenceWriter(tmp_path / "seq.txt").write_sequences(plain_result.sequences)
    content = path.read_text(encoding="utf-8")
    assert "--- Document 1 ---" in content
    assert "Total Documents Processed: 2" in content


def test_write_csv(plain_result, tmp_path):
    path = SequenceWriter(tmp_path / "seq.csv", OutputFormat.CSV).write_sequences(plain_result.sequences)
    df = pd.read_csv(path)
    assert list(df["document_id"]) == ["doc_0", "doc_1"]
    assert df.loc[0, "tokens"] == "the cat sat"
    assert df.loc[1, "integer_sequence"] == "2 5 6"


def test_write_json(plain_result, tmp_path):
    path = SequenceWriter(tmp_path / "seq.json", "json").write_sequences(plain_result.sequences)
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["total_documents"] == 2
    assert payload["documents"][0]["integer_sequence"] == [2, 3, 4]
    assert payload["documents"][0]["metadata"]["original_token_count"] == 3


def test_write_vectors(plain_result, tmp_path):
    path = SequenceWriter(tmp_path / "bow.txt").write_vectors(plain_result.bow_vectors)
    content = path.read_text(encoding="utf-8")
    assert "Vectorization Type: BAG_OF_WORDS" in content
    assert "Total Documents: 2" in content


def test_write_tfidf_all_formulas(plain_result, tmp_path):
    path = SequenceWriter(tmp_path / "tfidf.txt").write_tfidf_all_formulas(plain_result.tfidf_calculator)
    content = path.read_text(encoding="utf-8")
    assert "TF-IDF ANALYSIS WITH ALL FORMULAS" in content
    assert 'Term: "cat" (Index: 3)' in content
    assert "Double Normalization K" in content
    assert "Probabilistic Inverse Document Frequency" in content


def test_unknown_output_format():
    assert get_output_format("CSV") is OutputFormat.CSV
    with pytest.raises(ValueError):
        get_output_format("xml")
