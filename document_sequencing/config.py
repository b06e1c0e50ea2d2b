from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Optional, Union

from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import ConfigKeyError, ValidationError

from document_sequencing.exceptions import ConfigError


@dataclass(frozen=True)
class PipelineConfiguration:
    """
    Options consumed once when a SequencingPipeline is constructed.

    Sample usage:
        cfg = PipelineConfiguration(remove_stopwords=False, min_frequency=2)
        cfg = PipelineConfiguration.from_config(hydra_cfg.pipeline)
    """
    lowercase: bool = True
    remove_html: bool = True
    remove_urls: bool = True
    remove_emails: bool = True
    remove_punctuation: bool = True
    remove_stopwords: bool = True
    apply_stemming: bool = True
    min_token_length: int = 1
    min_frequency: int = 1
    binary_bow: bool = False
    sublinear_tf: bool = False

    def __post_init__(self):
        for name in ('min_token_length', 'min_frequency'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
        if self.min_token_length < 0:
            raise ConfigError(f"min_token_length must be >= 0, got {self.min_token_length}")
        if self.min_frequency < 1:
            raise ConfigError(f"min_frequency must be >= 1, got {self.min_frequency}")

    @classmethod
    def from_config(cls, cfg: Optional[Union[DictConfig, Mapping[str, Any]]]) -> 'PipelineConfiguration':
        """Validates a config node against this schema and builds the configuration.

        Args:
            cfg: The `pipeline` node of the Hydra config, or a plain mapping. Missing
                keys take the defaults above.
        """
        if cfg is None:
            return cls()
        schema = OmegaConf.structured(cls)
        try:
            merged = OmegaConf.merge(schema, cfg)
        except (ConfigKeyError, ValidationError) as e:
            raise ConfigError(f"Invalid pipeline configuration: {e}") from e
        return OmegaConf.to_object(merged)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
