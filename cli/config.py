"""Configuration file handling for the drizzle2typeorm CLI.

The configuration lives in ``~/.drizzle2typeorm.yaml`` unless the
``DRIZZLE2TYPEORM_CONFIG`` environment variable points elsewhere.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

CONFIG_ENV_VAR = "DRIZZLE2TYPEORM_CONFIG"
DEFAULT_CONFIG_NAME = ".drizzle2typeorm.yaml"


class RepositoryRef(BaseModel):
    """A named Git repository holding schema files"""

    url: str = Field(description="SSH or HTTPS repository URL")
    subfolder: str = Field(description="Folder inside the repository holding the schema files")


class ConversionDefaults(BaseModel):
    """Defaults for conversion runs"""

    source_extension: str = Field(default=".ts", description="Extension of schema source files")
    output_extension: str = Field(default=".js", description="Extension of generated modules")


class OutputDefaults(BaseModel):
    """Defaults for command output"""

    directory: str = Field(default="entities", description="Default output directory for converted modules")
    format: str = Field(default="json", description="Output format of 'inspect': json or yaml")
    pretty: bool = Field(default=False, description="Pretty-print JSON output")


class Defaults(BaseModel):
    """Default settings"""

    conversion: ConversionDefaults = Field(default_factory=ConversionDefaults)
    output: OutputDefaults = Field(default_factory=OutputDefaults)


class Config(BaseModel):
    """Top-level configuration file"""

    version: str = Field(default="1.0", description="Config file format version")
    repositories: dict[str, RepositoryRef] = Field(default_factory=dict, description="Named schema repositories")
    defaults: Defaults = Field(default_factory=Defaults)


def get_config_path() -> Path:
    """Return the path of the configuration file."""
    custom = os.environ.get(CONFIG_ENV_VAR)
    if custom:
        return Path(custom)
    return Path.home() / DEFAULT_CONFIG_NAME


def load_config() -> Config:
    """Load the configuration file, falling back to defaults when it is missing.

    Raises:
        ValueError: If the file is not valid YAML or does not match the schema
    """
    config_path = get_config_path()
    if not config_path.exists():
        return Config()

    try:
        with config_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid config file {config_path}: {e}") from e


def save_config(config: Config) -> Path:
    """Write ``config`` to the configuration file and return its path."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with config_path.open("w", encoding="utf-8") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return config_path


def init_config(force: bool = False) -> Path:
    """Create a configuration file with default settings.

    Args:
        force: Overwrite an existing file

    Returns:
        Path of the created file

    Raises:
        FileExistsError: If the file exists and ``force`` is False
    """
    config_path = get_config_path()
    if config_path.exists() and not force:
        raise FileExistsError(f"Config file already exists: {config_path}")
    return save_config(Config())


def get_repository(name: str, config: Config | None = None) -> RepositoryRef:
    """Look up a named repository.

    Raises:
        KeyError: If no repository with that name is configured
    """
    config = config or load_config()
    if name not in config.repositories:
        raise KeyError(f"Repository '{name}' not found in config")
    return config.repositories[name]


def resolve_repository(
    repo: str, subfolder: str | None = None, config: Config | None = None
) -> tuple[str, str | None]:
    """Resolve ``@name`` repository references.

    Args:
        repo: Repository URL, or ``@name`` of a configured repository
        subfolder: Explicit subfolder; overrides the configured one
        config: Config to use (loaded from disk if omitted)

    Returns:
        Tuple of (repository URL, subfolder)
    """
    if not repo.startswith("@"):
        return repo, subfolder
    ref = get_repository(repo[1:], config)
    return ref.url, subfolder or ref.subfolder


def get_conversion_defaults(config: Config | None = None) -> ConversionDefaults:
    config = config or load_config()
    return config.defaults.conversion


def get_output_defaults(config: Config | None = None) -> OutputDefaults:
    config = config or load_config()
    return config.defaults.output


def validate_config(config: Config) -> list[str]:
    """Check values the schema alone cannot express.

    Returns:
        List of error messages (empty if valid)
    """
    errors = []
    if config.defaults.output.format not in ("json", "yaml"):
        errors.append("'defaults.output.format' must be 'json' or 'yaml'")
    for key in ("source_extension", "output_extension"):
        if not getattr(config.defaults.conversion, key).startswith("."):
            errors.append(f"'defaults.conversion.{key}' must start with '.'")
    if config.defaults.conversion.source_extension == config.defaults.conversion.output_extension:
        errors.append("'defaults.conversion' source and output extensions must differ")
    for name, ref in config.repositories.items():
        if not ref.url:
            errors.append(f"'repositories.{name}.url' must not be empty")
    return errors
