import hydra
from hydra.utils import to_absolute_path
from omegaconf import DictConfig
from pathlib import Path
from dotenv import load_dotenv

from document_sequencing.config import PipelineConfiguration
from document_sequencing.data_loader import read_folder, read_table
from document_sequencing.metrics import PerformanceMonitor
from document_sequencing.pipeline import SequencingPipeline
from document_sequencing.preprocessing import StopWordFilter
from document_sequencing.visualizer import FrequencyAnalyzer, vocabulary_frequencies
from document_sequencing.writers import SequenceWriter, get_output_format

load_dotenv()

OUTPUT_FILES = {
    'txt': 'sequences.txt',
    'numeric': 'sequences_numeric.txt',
    'csv': 'sequences.csv',
    'json': 'sequences.json',
}


def load_documents(cfg: DictConfig):
    table_file = cfg.data.get('table_file')
    if table_file:
        print(f"Loading documents from {table_file}...")
        return read_table(to_absolute_path(table_file), cfg.data.text_column)

    input_dir = Path(to_absolute_path(cfg.paths.input_dir))
    print(f"Loading documents from {input_dir}...")
    return [text for _, text in read_folder(input_dir, cfg.data.file_glob, cfg.data.document_format)]


def build_stop_word_filter(cfg: DictConfig) -> StopWordFilter:
    language = cfg.get('stopwords', 'builtin')
    if not language or language == 'builtin':
        return StopWordFilter()
    print(f"Using NLTK stop words: {language}")
    return StopWordFilter.from_nltk(language)


@hydra.main(version_base=None, config_path="config", config_name="config")
def main(cfg: DictConfig):
    print("=" * 80)
    print("Document to Sequence Conversion")
    print("=" * 80)

    output_dir = Path(to_absolute_path(cfg.paths.output_dir))
    output_dir.mkdir(parents=True, exist_ok=True)

    monitor = PerformanceMonitor()
    monitor.start_processing()

    print("\n[1/4] Loading documents...")
    monitor.start_operation('Loading')
    documents = load_documents(cfg)
    monitor.end_operation('Loading')
    if not documents:
        print("No documents found, nothing to do.")
        return

    print(f"\n[2/4] Running pipeline on {len(documents)} documents...")
    pipeline = SequencingPipeline(
        PipelineConfiguration.from_config(cfg.pipeline),
        verbose=cfg.get('verbose', True),
        monitor=monitor,
        stop_word_filter=build_stop_word_filter(cfg),
    )
    result = pipeline.execute(documents)
    result.print_summary()

    print("\n[3/4] Writing outputs...")
    monitor.start_operation('Writing')
    for name in cfg.output.formats:
        fmt = get_output_format(name)
        SequenceWriter(output_dir / OUTPUT_FILES[fmt.value], fmt).write_sequences(result.sequences)

    max_features = cfg.output.max_features
    SequenceWriter(output_dir / 'bow_vectors.txt').write_vectors(result.bow_vectors, max_features)
    SequenceWriter(output_dir / 'tfidf_vectors.txt').write_vectors(result.tfidf_vectors, max_features)
    if cfg.output.get('tfidf_all_formulas', True):
        SequenceWriter(output_dir / 'tfidf_all_formulas.txt').write_tfidf_all_formulas(result.tfidf_calculator)
    monitor.end_operation('Writing')

    if cfg.plots.enabled:
        print("\n[4/4] Generating plots...")
        monitor.start_operation('Plotting')
        analyzer = FrequencyAnalyzer(Path(to_absolute_path(cfg.paths.plots_dir)))
        frequencies = vocabulary_frequencies(result.vocabulary)
        analyzer.plot_frequency_distribution(
            frequencies,
            "Token Frequency Distribution (Stemmed)",
            "frequency_distribution.png",
            top_n=cfg.plots.top_n,
            log_scale=cfg.plots.log_scale,
        )
        analyzer.plot_zipf_distribution(frequencies, "zipf_distribution.png")
        analyzer.plot_idf_comparison(result.tfidf_calculator, "idf_comparison.png", top_n=30)
        monitor.end_operation('Plotting')
    else:
        print("\n[4/4] Plots disabled, skipping...")

    monitor.end_processing()
    monitor.print_report()

    print("\n" + "=" * 80)
    print("Conversion completed successfully!")
    print(f"Outputs saved to: {output_dir}")
    print(monitor.summary())
    print("=" * 80)


if __name__ == "__main__":
    main()
