from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

import pandas as pd
from tqdm import tqdm


class DocumentFormat(Enum):
    SINGLE_DOCUMENT = 'single'
    LINE_PER_DOCUMENT = 'line'
    PARAGRAPH_PER_DOCUMENT = 'paragraph'


def get_document_format(name: Union[str, DocumentFormat]) -> DocumentFormat:
    if isinstance(name, DocumentFormat):
        return name
    key = name.strip().upper()
    if key in ('SINGLE', 'SINGLE_DOCUMENT'):
        return DocumentFormat.SINGLE_DOCUMENT
    elif key in ('LINE', 'LINE_PER_DOCUMENT'):
        return DocumentFormat.LINE_PER_DOCUMENT
    elif key in ('PARAGRAPH', 'PARAGRAPH_PER_DOCUMENT'):
        return DocumentFormat.PARAGRAPH_PER_DOCUMENT
    else:
        raise ValueError(f"Unknown document format: {name}")


class DocumentReader:
    """Reads raw documents out of a text file."""
    def __init__(self, file_path: Union[str, Path],
                 document_format: Union[str, DocumentFormat] = DocumentFormat.SINGLE_DOCUMENT,
                 encoding: str = 'utf-8'):
        self.file_path = Path(file_path)
        self.document_format = get_document_format(document_format)
        self.encoding = encoding

    def file_exists(self) -> bool:
        return self.file_path.exists()

    def file_size(self) -> int:
        return self.file_path.stat().st_size

    def read_documents(self) -> List[str]:
        if not self.file_path.exists():
            raise FileNotFoundError(f"File not found: {self.file_path}")

        content = self.file_path.read_text(encoding=self.encoding)
        if self.document_format is DocumentFormat.SINGLE_DOCUMENT:
            return [content]
        elif self.document_format is DocumentFormat.LINE_PER_DOCUMENT:
            return [line.strip() for line in content.splitlines() if line.strip()]
        return self._split_paragraphs(content)

    @staticmethod
    def _split_paragraphs(content: str) -> List[str]:
        documents = []
        current: List[str] = []
        for line in content.splitlines():
            if line.strip():
                current.append(line)
            elif current:
                documents.append(' '.join(current).strip())
                current = []
        if current:
            documents.append(' '.join(current).strip())
        return documents


def iter_folder(folder: Union[str, Path], pattern: str = '*.txt',
                document_format: Union[str, DocumentFormat] = DocumentFormat.SINGLE_DOCUMENT,
                show_progress: bool = True) -> Iterator[Tuple[str, str]]:
    """Yields (file name, document) for every matching file, in sorted name order."""
    folder = Path(folder)
    if not folder.is_dir():
        raise FileNotFoundError(f"Input folder not found: {folder}")

    files = sorted(p for p in folder.glob(pattern) if p.is_file())
    for path in tqdm(files, desc=f"Reading {folder.name}", disable=not show_progress):
        try:
            documents = DocumentReader(path, document_format).read_documents()
        except UnicodeDecodeError as e:
            print(f"Warning: could not decode {path.name}, skipping: {e}", flush=True)
            continue
        for doc in documents:
            yield path.name, doc


def read_folder(folder: Union[str, Path], pattern: str = '*.txt',
                document_format: Union[str, DocumentFormat] = DocumentFormat.SINGLE_DOCUMENT,
                show_progress: bool = True) -> List[Tuple[str, str]]:
    documents = list(iter_folder(folder, pattern, document_format, show_progress))
    print(f"Total documents loaded: {len(documents)}", flush=True)
    return documents


def read_table(file_path: Union[str, Path], text_column: str = 'text',
               max_docs: Optional[int] = None) -> List[str]:
    """Documents from one column of a CSV or JSON file. Empty and non-string cells are skipped."""
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    suffix = file_path.suffix.lower()
    if suffix == '.csv':
        df = pd.read_csv(file_path)
    elif suffix == '.json':
        df = pd.read_json(file_path)
    elif suffix == '.jsonl':
        df = pd.read_json(file_path, lines=True)
    else:
        raise ValueError(f"Unsupported table format: {suffix}")

    if text_column not in df.columns:
        raise KeyError(f"Column '{text_column}' not found in {file_path.name}")

    if max_docs is not None:
        df = df.head(max_docs)
    return [text for text in df[text_column].tolist() if isinstance(text, str) and text.strip()]
