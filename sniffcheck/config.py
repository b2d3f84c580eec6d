"""Project configuration: defaults, TOML loading and saving, and validation."""

from __future__ import annotations

import dataclasses
import re
import tomllib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import tomli_w

CONFIG_FILE_NAMES = ("sniff.toml", "sniff-check.toml", ".sniff.toml", ".sniffrc.toml")
DEFAULT_CONFIG_FILE = "sniff.toml"


class ConfigError(Exception):
    """Raised when a configuration cannot be read, parsed or validated."""


class SeverityLevel(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class SeverityLevels:
    warning: int = 100
    error: int = 200
    critical: int = 400


@dataclass
class LargeFilesConfig:
    threshold: int = 100
    excluded_dirs: list[str] = field(
        default_factory=lambda: ["node_modules", ".next", "dist", ".git", "target", "build"]
    )
    excluded_files: list[str] = field(
        default_factory=lambda: ["*.min.js", "*.bundle.js", "package-lock.json", "yarn.lock"]
    )
    severity_levels: SeverityLevels = field(default_factory=SeverityLevels)


@dataclass
class TypeScriptConfig:
    strict_any_check: bool = True
    allow_ts_ignore: bool = False
    require_return_types: bool = True
    min_type_coverage: float = 80.0


@dataclass
class ImportsConfig:
    auto_fix: bool = False
    excluded_patterns: list[str] = field(default_factory=lambda: ["react", "@types/*"])
    check_dev_dependencies: bool = True


@dataclass
class BundleConfig:
    max_bundle_size_mb: float = 2.0
    max_chunk_size_mb: float = 0.5
    build_dirs: list[str] = field(default_factory=lambda: [".next", "dist", "build", "out"])
    warn_on_large_chunks: bool = True


@dataclass
class PerformanceConfig:
    lighthouse_enabled: bool = True
    min_performance_score: float = 75.0
    min_accessibility_score: float = 90.0
    server_urls: list[str] = field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:3001",
            "http://localhost:8000",
            "http://localhost:8080",
        ]
    )


@dataclass
class MemoryConfig:
    check_patterns: bool = True
    check_processes: bool = True
    max_process_memory_mb: float = 1000.0
    pattern_severity_threshold: str = "high"
    disabled_patterns: list[str] = field(default_factory=list)
    excluded_dirs: list[str] = field(
        default_factory=lambda: ["node_modules", ".next", "dist", "build", "coverage", ".cache"]
    )
    excluded_files: list[str] = field(
        default_factory=lambda: ["*.min.js", "*.bundle.js", "*.d.ts", "*.generated.*"]
    )


@dataclass
class EnvironmentConfig:
    required_vars: list[str] = field(default_factory=lambda: ["NODE_ENV", "NEXT_PUBLIC_APP_URL"])
    check_security: bool = True
    allow_empty_values: bool = False
    env_files: list[str] = field(
        default_factory=lambda: [".env", ".env.local", ".env.development", ".env.production"]
    )


def _convert(value: Any, kind: Any, where: str) -> Any:
    if dataclasses.is_dataclass(kind):
        if not isinstance(value, dict):
            raise ConfigError(f"invalid type for `{where}`: expected a table")
        return _build(kind, value, where)
    if kind is bool:
        if isinstance(value, bool):
            return value
    elif kind is int:
        if isinstance(value, int) and not isinstance(value, bool):
            if value < 0:
                raise ConfigError(f"invalid value for `{where}`: must not be negative")
            return value
    elif kind is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif kind is str:
        if isinstance(value, str):
            return value
    elif kind == list[str]:
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return list(value)
    raise ConfigError(f"invalid type for `{where}`")


def _build(cls: type, data: dict[str, Any], section: str) -> Any:
    values = {}
    for f in dataclasses.fields(cls):
        where = f"{section}.{f.name}" if section else f.name
        if f.name not in data:
            raise ConfigError(f"missing field `{where}`")
        values[f.name] = _convert(data[f.name], f.type, where)
    return cls(**values)


def _pattern_matches(pattern: str, name: str) -> bool:
    if "*" in pattern:
        return re.search(pattern.replace("*", ".*"), name) is not None
    return name == pattern


@dataclass
class Config:
    large_files: LargeFilesConfig = field(default_factory=LargeFilesConfig)
    typescript: TypeScriptConfig = field(default_factory=TypeScriptConfig)
    imports: ImportsConfig = field(default_factory=ImportsConfig)
    bundle: BundleConfig = field(default_factory=BundleConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)
    memory: MemoryConfig = field(default_factory=MemoryConfig)
    environment: EnvironmentConfig = field(default_factory=EnvironmentConfig)

    @classmethod
    def load(cls) -> Config:
        """Load the first config file found in the working directory, or the defaults."""
        path = find_config_path()
        if path is None:
            return cls()
        return cls.load_from_file(path)

    @classmethod
    def load_from_file(cls, path: str | Path) -> Config:
        try:
            content = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"cannot read {path}: {exc}") from exc
        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in {path}: {exc}") from exc
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Build a config from a mapping; every field must be present."""
        return _build(cls, data, "")

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)

    def to_toml(self) -> str:
        return tomli_w.dumps(self.to_dict())

    def save_to_file(self, path: str | Path) -> None:
        Path(path).write_text(self.to_toml(), encoding="utf-8")

    def is_dir_excluded(self, dir_name: str) -> bool:
        return any(_pattern_matches(p, dir_name) for p in self.large_files.excluded_dirs)

    def is_file_excluded(self, file_name: str) -> bool:
        return any(_pattern_matches(p, file_name) for p in self.large_files.excluded_files)

    @property
    def required_env_vars(self) -> list[str]:
        return self.environment.required_vars

    def severity_for_lines(self, line_count: int) -> SeverityLevel:
        levels = self.large_files.severity_levels
        if line_count >= levels.critical:
            return SeverityLevel.CRITICAL
        if line_count >= levels.error:
            return SeverityLevel.ERROR
        if line_count >= levels.warning:
            return SeverityLevel.WARNING
        return SeverityLevel.INFO


def find_config_path() -> Path | None:
    """Return the first existing config file in the working directory."""
    for name in CONFIG_FILE_NAMES:
        path = Path(name)
        if path.exists():
            return path
    return None


def create_default_config() -> None:
    Config().save_to_file(DEFAULT_CONFIG_FILE)


def init_config() -> None:
    if find_config_path() is not None:
        print("Configuration file already exists.")
        return
    create_default_config()
    print(f"Created default configuration file: {DEFAULT_CONFIG_FILE}")
    print("Edit this file to customize sniff-check behavior for your project.")


def show_config() -> None:
    config = Config.load()
    path = find_config_path()
    if path is not None:
        print(f"Configuration loaded from: {path}")
    else:
        print("Using default configuration (no config file found)")
    print("\nCurrent configuration:")
    print(config.to_toml())


def validate_config(config: Config | None = None) -> None:
    """Check thresholds and limits; raise ConfigError on the first problem."""
    if config is None:
        config = Config.load()
    if config.large_files.threshold == 0:
        raise ConfigError("Large files threshold cannot be 0")
    if not 0.0 <= config.typescript.min_type_coverage <= 100.0:
        raise ConfigError("TypeScript coverage must be between 0 and 100")
    if config.bundle.max_bundle_size_mb <= 0.0:
        raise ConfigError("Bundle size limit must be positive")
    levels = config.large_files.severity_levels
    if levels.warning >= levels.error or levels.error >= levels.critical:
        raise ConfigError(
            "Severity levels must be in ascending order: warning < error < critical"
        )
    print("✅ Configuration is valid")


_COMMAND_SECTIONS = {
    "large": "large_files",
    "types": "typescript",
    "imports": "imports",
    "bundle": "bundle",
    "perf": "performance",
    "memory": "memory",
    "env": "environment",
}


def command_config(command: str) -> str:
    """Return the TOML text of the config section used by a command."""
    section = _COMMAND_SECTIONS.get(command)
    if section is None:
        raise ConfigError(f"Unknown command: {command}")
    config = Config.load()
    return tomli_w.dumps(dataclasses.asdict(getattr(config, section)))