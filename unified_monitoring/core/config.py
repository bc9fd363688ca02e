"""
Configuration management for unified-monitoring.

Configuration is resolved from a default snapshot plus an ordered list of
mutators. Environment variables and YAML files enter through the same
pipeline: ``Settings.to_mutators()`` turns every explicitly set value into a
mutator that is applied before the caller's own mutators.
"""

import os
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional
import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings
from unified_monitoring.core.errors import ConfigFileError
from unified_monitoring.models.schemas import MonitoringConfig

logger = logging.getLogger(__name__)

ConfigMutator = Callable[[MonitoringConfig], MonitoringConfig]

DEFAULT_CONFIG_FILE = "./monitoring.yaml"


def default_config() -> MonitoringConfig:
    """Return a fresh default configuration snapshot."""
    return MonitoringConfig()


def resolve(
    mutators: Iterable[ConfigMutator] = (),
    base: Optional[MonitoringConfig] = None
) -> MonitoringConfig:
    """
    Apply mutators left to right over a default snapshot.

    Args:
        mutators: Configuration mutators, applied strictly in order
        base: Starting snapshot (defaults to ``default_config()``)

    Returns:
        The resolved MonitoringConfig
    """
    config = base if base is not None else default_config()
    for mutator in mutators:
        config = mutator(config)
    return config


def with_fields(**updates: Any) -> ConfigMutator:
    """Mutator that overrides arbitrary snapshot fields."""
    def mutate(config: MonitoringConfig) -> MonitoringConfig:
        return config.model_copy(update=updates)
    return mutate


def with_service_name(name: str) -> ConfigMutator:
    """Set the service name (required by the orchestrator)."""
    return with_fields(service_name=name)


def with_environment(env: str) -> ConfigMutator:
    """Set the deployment environment, e.g. "production"."""
    return with_fields(environment=env)


def with_instance(name: str, host: str) -> ConfigMutator:
    """Set the instance name and host."""
    return with_fields(instance_name=name, instance_host=host)


def with_logger_level(level: str) -> ConfigMutator:
    """Set the minimum log level: debug, info, warn, error or fatal."""
    return with_fields(logger_level=level)


def with_logger_output_path(path: str) -> ConfigMutator:
    """Write logs to a file instead of stdout. An empty path means stdout."""
    return with_fields(logger_output_path=path)


def with_tracer_provider(provider: str, host: str = "", port: int = 0) -> ConfigMutator:
    """Select the span exporter ("stdout" or "otlp") and its collector address."""
    return with_fields(
        tracer_provider=provider,
        tracer_provider_host=host,
        tracer_provider_port=port
    )


def with_tracer_sample_ratio(ratio: float) -> ConfigMutator:
    """Set the sampling ratio. Values outside [0, 1] clamp to never/always."""
    return with_fields(tracer_sample_ratio=ratio)


def with_tracer_batch_timeout(seconds: float) -> ConfigMutator:
    """Set the maximum delay before a batch of spans is exported."""
    return with_fields(tracer_batch_timeout=seconds)


def with_tracer_insecure(insecure: bool) -> ConfigMutator:
    """Disable TLS for the OTLP span exporter."""
    return with_fields(tracer_insecure=insecure)


def with_metric_provider(provider: str, host: str = "", port: int = 0) -> ConfigMutator:
    """Select the metric exporter ("stdout", "otlp" or "prometheus") and its address."""
    return with_fields(
        metric_provider=provider,
        metric_provider_host=host,
        metric_provider_port=port
    )


def with_metric_interval(seconds: float) -> ConfigMutator:
    """Set the interval between metric exports."""
    return with_fields(metric_interval=seconds)


def with_metric_insecure(insecure: bool) -> ConfigMutator:
    """Disable TLS for the OTLP metric exporter."""
    return with_fields(metric_insecure=insecure)


class Settings(BaseSettings):
    """Monitoring settings loaded from environment and config files."""

    # Service identity
    service_name: str = ""
    environment: str = "development"
    instance_name: str = ""
    instance_host: str = ""

    # Logger
    logger_level: str = "info"
    logger_output_path: str = ""

    # Tracer
    tracer_provider: str = "stdout"
    tracer_provider_host: str = ""
    tracer_provider_port: int = 0
    tracer_sample_ratio: float = 1.0
    tracer_batch_timeout: float = 5.0
    tracer_insecure: bool = False

    # Metric
    metric_provider: str = "stdout"
    metric_provider_host: str = ""
    metric_provider_port: int = 0
    metric_interval: float = 60.0
    metric_insecure: bool = False

    # Config file path
    config_file: Optional[str] = None

    class Config:
        env_prefix = "MONITORING_"
        env_file = ".env"
        case_sensitive = False

    def to_mutators(self) -> List[ConfigMutator]:
        """Return mutators for the values that were explicitly provided."""
        explicit = self.model_fields_set - {"config_file"}
        if not explicit:
            return []
        return [with_fields(**self.model_dump(include=explicit))]


# YAML section -> {key: snapshot field}
_FILE_SECTIONS: Dict[str, Dict[str, str]] = {
    "service": {
        "name": "service_name",
        "environment": "environment",
        "instance_name": "instance_name",
        "instance_host": "instance_host",
    },
    "logger": {
        "level": "logger_level",
        "output_path": "logger_output_path",
    },
    "tracer": {
        "provider": "tracer_provider",
        "host": "tracer_provider_host",
        "port": "tracer_provider_port",
        "sample_ratio": "tracer_sample_ratio",
        "batch_timeout": "tracer_batch_timeout",
        "insecure": "tracer_insecure",
    },
    "metric": {
        "provider": "metric_provider",
        "host": "metric_provider_host",
        "port": "metric_provider_port",
        "interval": "metric_interval",
        "insecure": "metric_insecure",
    },
}


def load_config_from_file(config_path: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file

    Returns:
        Configuration dictionary (empty if the file does not exist)

    Raises:
        ConfigFileError: If the file cannot be read or parsed
    """
    if not os.path.exists(config_path):
        return {}

    try:
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigFileError(f"failed to load config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigFileError(f"config file {config_path} must contain a mapping")
    return data


def flatten_file_config(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert nested file config to flat snapshot field names.

    Raises:
        ConfigFileError: If a known section is not a mapping
    """
    flat_config = {}
    for section, keys in _FILE_SECTIONS.items():
        section_config = config_data.get(section)
        if section_config is None:
            continue
        if not isinstance(section_config, dict):
            raise ConfigFileError(f"config section {section!r} must be a mapping")
        for key, field in keys.items():
            if key in section_config:
                flat_config[field] = section_config[key]
    return flat_config


def get_config_file_path(config_file: Optional[str], settings: Settings) -> str:
    """Pick the config file in order of preference."""
    return config_file or settings.config_file or DEFAULT_CONFIG_FILE


def load_settings(config_file: Optional[str] = None) -> Settings:
    """
    Load settings from multiple sources with precedence:
    1. Caller mutators (applied later by the caller)
    2. Environment variables
    3. Configuration file
    4. Defaults

    Raises:
        ConfigFileError: If the file is unreadable or holds invalid values
    """
    try:
        env_settings = Settings()
        config_path = get_config_file_path(config_file, env_settings)
        file_config = flatten_file_config(load_config_from_file(config_path))

        env_config = env_settings.model_dump(include=env_settings.model_fields_set)
        settings = Settings(**{**file_config, **env_config})
    except ValidationError as e:
        raise ConfigFileError(f"invalid monitoring settings: {e}") from e

    logger.debug(
        "Loaded monitoring settings",
        extra={"config_file": config_path, "explicit_fields": sorted(settings.model_fields_set)}
    )
    return settings
