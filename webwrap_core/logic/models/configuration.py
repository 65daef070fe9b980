"""
Configuration domain models.

Contains the data structures for managing scan configuration and settings.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional
import json
from pathlib import Path

import yaml


# Scanner run order is fixed; it is also the order of traits in every entry.
DEFAULT_HEURISTIC_ORDER = [
    'markup_presence',
    'script_presence',
    'hybrid_framework',
    'webview_usage',
]


@dataclass
class HeuristicConfig:
    """Configuration for a single heuristic."""
    name: str
    enabled: bool = True
    parameters: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate heuristic configuration."""
        if not self.name:
            raise ValueError("Heuristic configuration must have a name")

        for key in ('amount', 'per_match'):
            value = self.parameters.get(key)
            if value is not None and float(value) < 0:
                raise ValueError(f"{key} cannot be negative for {self.name}")

        prefixes = self.parameters.get('prefixes')
        if isinstance(prefixes, str):
            self.parameters = {**self.parameters, 'prefixes': [prefixes]}
        elif prefixes is not None and not isinstance(prefixes, list):
            raise ValueError(f"prefixes must be a list of paths for {self.name}")

    def get_parameter(self, key: str, default: Any = None) -> Any:
        return self.parameters.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'enabled': self.enabled,
            'parameters': dict(self.parameters)
        }


@dataclass
class PathsConfig:
    """Where packages are read from and where artifacts and the report go."""
    packages_dir: str = "captures/apks"
    work_dir: str = "captures/zips"
    report_path: str = "captures/totals.json"
    package_extension: str = ".apk"
    log_directory: Optional[str] = None

    def __post_init__(self):
        if not self.package_extension.startswith('.'):
            raise ValueError(f"Package extension must start with '.', got {self.package_extension}")


@dataclass
class ToolsConfig:
    """External conversion tools used to materialize artifacts."""
    dex2jar_command: List[str] = field(default_factory=lambda: ["d2j-dex2jar.sh"])
    java_command: str = "java"
    ddx_jar: str = "ddx1.26.jar"
    # None keeps the historical behaviour: a hung tool blocks the batch
    step_timeout_seconds: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.dex2jar_command, str):
            self.dex2jar_command = self.dex2jar_command.split()

        if self.step_timeout_seconds is not None and self.step_timeout_seconds <= 0:
            raise ValueError("step_timeout_seconds must be positive when set")


@dataclass
class AnalysisConfig:
    """
    Main configuration for the scanner.

    This centralizes the trait weights and tool locations instead of having
    magic numbers scattered throughout the heuristics.
    """

    heuristics: Dict[str, HeuristicConfig] = field(default_factory=dict)
    paths: PathsConfig = field(default_factory=PathsConfig)
    tools: ToolsConfig = field(default_factory=ToolsConfig)

    def __post_init__(self):
        """Fill in any heuristic not mentioned explicitly."""
        for heuristic_name in DEFAULT_HEURISTIC_ORDER:
            if heuristic_name not in self.heuristics:
                self.heuristics[heuristic_name] = HeuristicConfig(name=heuristic_name)

    def get_heuristic_config(self, heuristic_name: str) -> HeuristicConfig:
        """Get configuration for a specific heuristic."""
        config = self.heuristics.get(heuristic_name)
        return config if config else HeuristicConfig(name=heuristic_name)

    def get_enabled_heuristics(self) -> List[str]:
        """Get enabled heuristic names in run order."""
        return [name for name in DEFAULT_HEURISTIC_ORDER
                if self.get_heuristic_config(name).enabled]

    @classmethod
    def from_file(cls, file_path: str) -> 'AnalysisConfig':
        """Load configuration from a file (JSON or YAML)."""
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() in ['.yml', '.yaml']:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

        config = cls.from_dict(data or {})
        config._source_file = str(path)
        return config

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AnalysisConfig':
        """Create configuration from dictionary."""
        heuristics = {}
        for name, config_data in (data.get('heuristics') or {}).items():
            config_data = config_data or {}
            heuristics[name] = HeuristicConfig(
                name=name,
                enabled=config_data.get('enabled', True),
                parameters=config_data.get('parameters', {}) or {}
            )

        paths_data = data.get('paths') or {}
        defaults = PathsConfig()
        paths = PathsConfig(
            packages_dir=paths_data.get('packages_dir', defaults.packages_dir),
            work_dir=paths_data.get('work_dir', defaults.work_dir),
            report_path=paths_data.get('report_path', defaults.report_path),
            package_extension=paths_data.get('package_extension', defaults.package_extension),
            log_directory=paths_data.get('log_directory')
        )

        tools_data = data.get('tools') or {}
        tool_defaults = ToolsConfig()
        tools = ToolsConfig(
            dex2jar_command=tools_data.get('dex2jar_command', tool_defaults.dex2jar_command),
            java_command=tools_data.get('java_command', tool_defaults.java_command),
            ddx_jar=tools_data.get('ddx_jar', tool_defaults.ddx_jar),
            step_timeout_seconds=tools_data.get('step_timeout_seconds')
        )

        return cls(heuristics=heuristics, paths=paths, tools=tools)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'heuristics': {
                name: config.to_dict()
                for name, config in self.heuristics.items()
            },
            'paths': {
                'packages_dir': self.paths.packages_dir,
                'work_dir': self.paths.work_dir,
                'report_path': self.paths.report_path,
                'package_extension': self.paths.package_extension,
                'log_directory': self.paths.log_directory
            },
            'tools': {
                'dex2jar_command': list(self.tools.dex2jar_command),
                'java_command': self.tools.java_command,
                'ddx_jar': self.tools.ddx_jar,
                'step_timeout_seconds': self.tools.step_timeout_seconds
            }
        }

    def save_to_file(self, file_path: str):
        """Save configuration to a file."""
        path = Path(file_path)

        with open(path, 'w', encoding='utf-8') as f:
            if path.suffix.lower() in ['.yml', '.yaml']:
                yaml.dump(self.to_dict(), f, default_flow_style=False, indent=2)
            else:
                json.dump(self.to_dict(), f, indent=2)
