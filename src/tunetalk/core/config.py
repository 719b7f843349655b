"""
Configuration management for TuneTalk
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from loguru import logger


@dataclass
class AIConfig:
    """Configuration for the text-generation collaborator."""

    provider: str = "openai"  # 'openai' | 'ollama'
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    model: str = "gpt-4o-mini"
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.2:3b"
    temperature: float = 0.7
    top_p: float = 0.9
    top_k: int = 40
    max_tokens: int = 500
    timeout_seconds: float = 30.0

    def validate(self) -> None:
        """Validate AI configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        valid_providers = {"openai", "ollama"}
        if self.provider not in valid_providers:
            raise ValueError(
                f"Invalid AI provider: {self.provider!r}. "
                f"Valid providers are: {valid_providers}"
            )
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")


@dataclass
class LyricsConfig:
    """Configuration for the lyrics provider."""

    base_url: str = "https://lrclib.net"
    user_agent: str = "tunetalk/0.1"
    timeout_seconds: float = 15.0


@dataclass
class StateConfig:
    """Configuration for now-playing / history state."""

    history_size: int = 10


@dataclass
class MatcherConfig:
    """Configuration for mood-based song matching."""

    max_workers: int = 5  # Concurrent lyric/mood lookups in flight
    library_limit: int = 5  # Recommendations drawn from the user's library
    suggestion_limit: int = 10  # General per-mood suggestions
    match_threshold: float = 0.5  # Matches must score strictly above this
    timeout_seconds: Optional[float] = 60.0  # Whole-match deadline, None = wait forever


@dataclass
class CacheConfig:
    """Configuration for the lyrics/mood cache."""

    max_entries: Optional[int] = 512  # LRU bound, None = unbounded


@dataclass
class MoodHistoryConfig:
    """Configuration for the per-user mood history log."""

    data_dir: Optional[str] = None  # Default: get_data_dir()
    retention_days: int = 30  # Compaction window (compaction is not implemented yet)
    default_user_id: str = "default_user"


@dataclass
class ClassifierConfig:
    """Policy tables for query classification."""

    personal_indicators: List[str] = field(
        default_factory=lambda: ["i ", "i'm", "i am", "me ", "my ", "feel", "feeling"]
    )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/tunetalk/tunetalk.log)
    )
    max_file_size_mb: int = 10  # Maximum log file size before rotation
    backup_count: int = 5  # Number of backup files to keep
    console_output: bool = False  # Also output to console (for debugging)


@dataclass
class WebConfig:
    """Configuration for the HTTP surface."""

    host: str = "127.0.0.1"
    port: int = 8080
    allowed_origins: List[str] = field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"]
    )


@dataclass
class Config:
    """Main configuration object."""

    ai: AIConfig = field(default_factory=AIConfig)
    lyrics: LyricsConfig = field(default_factory=LyricsConfig)
    state: StateConfig = field(default_factory=StateConfig)
    matcher: MatcherConfig = field(default_factory=MatcherConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    mood_history: MoodHistoryConfig = field(default_factory=MoodHistoryConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    web: WebConfig = field(default_factory=WebConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "tunetalk"
    return Path.home() / ".config" / "tunetalk"


def get_data_dir() -> Path:
    """Get the data directory path."""
    override = os.environ.get("TUNETALK_DATA_DIR")
    if override:
        return Path(override).expanduser()
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "tunetalk"
    return Path.home() / ".local" / "share" / "tunetalk"


def _find_project_config() -> Optional[Path]:
    """Find config.toml in project root by looking for pyproject.toml.

    Returns:
        Path to config.toml in project root, or None if not found
    """
    current = Path(__file__).resolve().parent
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            config_path = parent / "config.toml"
            return config_path if config_path.exists() else None
    return None


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Project root (detected via pyproject.toml) - for development
    2. Current working directory
    3. XDG_CONFIG_HOME/tunetalk (or ~/.config/tunetalk)
    """
    project_config = _find_project_config()
    if project_config:
        return project_config

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def _section(data: dict, cls, defaults):
    """Build a config section dataclass, keeping defaults for missing keys."""
    known = {name: data[name] for name in defaults.__dataclass_fields__ if name in data}
    unknown = set(data) - set(known)
    if unknown:
        logger.warning(f"Ignoring unknown {cls.__name__} keys: {sorted(unknown)}")
    return cls(**{**defaults.__dict__, **known})


def parse_config(toml_data: dict) -> Config:
    """Build a Config from already-parsed TOML data.

    Raises:
        ValueError: If a section holds invalid values
    """
    config = Config()

    if "ai" in toml_data:
        config.ai = _section(toml_data["ai"], AIConfig, config.ai)
        config.ai.validate()

    if "lyrics" in toml_data:
        config.lyrics = _section(toml_data["lyrics"], LyricsConfig, config.lyrics)

    if "state" in toml_data:
        config.state = _section(toml_data["state"], StateConfig, config.state)
        if config.state.history_size < 0:
            raise ValueError("state.history_size must not be negative")

    if "matcher" in toml_data:
        config.matcher = _section(toml_data["matcher"], MatcherConfig, config.matcher)
        if config.matcher.max_workers < 1:
            raise ValueError("matcher.max_workers must be at least 1")

    if "cache" in toml_data:
        config.cache = _section(toml_data["cache"], CacheConfig, config.cache)

    if "mood_history" in toml_data:
        config.mood_history = _section(
            toml_data["mood_history"], MoodHistoryConfig, config.mood_history
        )

    if "classifier" in toml_data:
        config.classifier = _section(
            toml_data["classifier"], ClassifierConfig, config.classifier
        )
        config.classifier.personal_indicators = [
            indicator.lower() for indicator in config.classifier.personal_indicators
        ]

    if "logging" in toml_data:
        config.logging = _section(toml_data["logging"], LoggingConfig, config.logging)
        config.logging.level = config.logging.level.upper()
        if config.logging.log_file:
            config.logging.log_file = str(Path(config.logging.log_file).expanduser())

    if "web" in toml_data:
        config.web = _section(toml_data["web"], WebConfig, config.web)

    return config


def apply_env_overrides(config: Config) -> Config:
    """Override configuration values with environment variables if present."""
    api_key = os.environ.get("OPENAI_API_KEY")
    if api_key:
        config.ai.openai_api_key = api_key

    provider = os.environ.get("TUNETALK_AI_PROVIDER")
    if provider:
        config.ai.provider = provider.lower()
        config.ai.validate()

    ollama_url = os.environ.get("OLLAMA_BASE_URL")
    if ollama_url:
        config.ai.ollama_base_url = ollama_url

    ollama_model = os.environ.get("OLLAMA_MODEL")
    if ollama_model:
        config.ai.ollama_model = ollama_model

    data_dir = os.environ.get("TUNETALK_DATA_DIR")
    if data_dir:
        config.mood_history.data_dir = data_dir

    origins = os.environ.get("ALLOWED_ORIGINS")
    if origins:
        config.web.allowed_origins = [o.strip() for o in origins.split(",") if o.strip()]

    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, falling back to defaults.

    Environment variables override TOML values:
    - OPENAI_API_KEY
    - TUNETALK_AI_PROVIDER
    - OLLAMA_BASE_URL / OLLAMA_MODEL
    - TUNETALK_DATA_DIR
    - ALLOWED_ORIGINS
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = config_path or get_config_path()

    if not config_path.exists():
        logger.debug(f"No configuration at {config_path}, using defaults")
        return apply_env_overrides(Config())

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
        config = parse_config(toml_data)
    except (tomllib.TOMLDecodeError, ValueError, TypeError) as e:
        logger.warning(f"Error loading configuration from {config_path}: {e}")
        logger.warning("Using default configuration.")
        config = Config()

    return apply_env_overrides(config)


def get_mood_history_dir(config: Config) -> Path:
    """Directory holding per-user mood history logs."""
    base = (
        Path(config.mood_history.data_dir).expanduser()
        if config.mood_history.data_dir
        else get_data_dir()
    )
    return base / "mood_history"


def get_log_file_path(config: Config) -> Path:
    """Get the path to the log file."""
    if config.logging.log_file:
        return Path(config.logging.log_file)
    return get_data_dir() / "tunetalk.log"
