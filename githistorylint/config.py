"""Configuration management for git-history-lint."""
from pathlib import Path
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
import tomli
import tomli_w
import os
import re

DEFAULT_CONFIG_FILENAME = ".githistorylint.toml"
CONFIG_SECTION = "githistorylint"

STRING_FIELDS = ['package_manager', 'manifest', 'log_file']
BOOL_FIELDS = ['strict_messages', 'restore_on_failure', 'always_log']
INT_FIELDS = ['max_subject_length', 'max_body_line_length']


class Config(BaseModel):
    """Configuration settings for git-history-lint.

    This class defines all configurable options that can be set either
    via the config file, environment variables or command line arguments.
    """

    package_manager: str = Field(
        default="npm",
        description="Executable used to run package scripts (npm, yarn, pnpm)"
    )

    manifest: str = Field(
        default="package.json",
        description="Project manifest that must exist in the repository root"
    )

    scripts: List[str] = Field(
        default_factory=lambda: ["lint", "test"],
        description="Package scripts run against every commit, in order"
    )

    max_subject_length: int = Field(
        default=50,
        description="Maximum length of the commit subject line"
    )

    max_body_line_length: int = Field(
        default=72,
        description="Maximum length of every line after the subject"
    )

    strict_messages: bool = Field(
        default=False,
        description="Whether commit message violations halt the walk"
    )

    restore_on_failure: bool = Field(
        default=False,
        description="Whether to restore the initial commit after a failing check"
    )

    always_log: bool = Field(
        default=False,
        description="Whether to always generate log files"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Path to log file (if not using automatic log file generation)"
    )

    @staticmethod
    def _sanitize_string(value: str) -> str:
        """Sanitize string values to prevent injection attacks."""
        if not value:
            return value

        # Remove control characters and null bytes
        value = re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', value)

        # Remove command injection patterns and split on them
        value = re.split(r'[;&|`$()]', value)[0]

        # Limit length
        if len(value) > 1000:
            value = value[:1000]

        return value.strip()

    @staticmethod
    def _is_safe_path(path: str) -> bool:
        """Check if a path is safe (no path traversal)."""
        if not path:
            return False

        # Check for path traversal patterns
        if '..' in path or path.startswith('/') or '\\' in path:
            return False

        # Check for absolute paths
        return not os.path.isabs(path)

    @classmethod
    def load(cls, repo_path: Path) -> 'Config':
        """Load configuration from the config file.

        Settings may sit at the top level of the file or in a
        ``[githistorylint]`` table; the table wins when both are present.

        Args:
            repo_path: Path to the git repository

        Returns:
            Config: Configuration object with values from file or defaults
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with config_path.open('rb') as f:
                config_data = tomli.load(f)

            section = config_data.pop(CONFIG_SECTION, {})
            config_data.update(section)

            # Sanitize string values
            for key in STRING_FIELDS:
                if key in config_data and isinstance(config_data[key], str):
                    config_data[key] = cls._sanitize_string(config_data[key])
            if isinstance(config_data.get('scripts'), list):
                config_data['scripts'] = [
                    cls._sanitize_string(str(script)) for script in config_data['scripts']
                ]

            # Validate log_file path
            if 'log_file' in config_data and config_data['log_file']:
                if not cls._is_safe_path(config_data['log_file']):
                    print(f"Warning: Unsafe log file path '{config_data['log_file']}', using default")
                    config_data['log_file'] = None

            return cls(**config_data)
        except Exception as e:
            # If there's any error reading the config, use defaults
            print(f"Warning: Error reading config file: {e}")
            return cls()

    def save(self, repo_path: Path) -> None:
        """Save configuration to the config file.

        Args:
            repo_path: Path to the git repository
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        try:
            # Convert to dict and remove None values
            config_dict = {k: v for k, v in self.model_dump().items() if v is not None}

            # Validate paths before saving
            if 'log_file' in config_dict and config_dict['log_file']:
                if not self._is_safe_path(config_dict['log_file']):
                    print(f"Warning: Unsafe log file path '{config_dict['log_file']}', not saving")
                    del config_dict['log_file']

            with config_path.open('wb') as f:
                tomli_w.dump(config_dict, f)
        except Exception as e:
            print(f"Error saving config file: {e}")

    def get_log_file(self) -> Optional[Path]:
        """Get the path to the log file.

        If always_log is True, generates a timestamped log file name.
        Otherwise, returns the configured log_file path if set.

        Returns:
            Optional[Path]: Path to the log file, or None if logging is disabled
        """
        if self.always_log:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            return Path(f"ghl_log-{timestamp}.log")
        elif self.log_file:
            # Validate the log file path
            if self._is_safe_path(self.log_file):
                return Path(self.log_file)
            else:
                print(f"Warning: Unsafe log file path '{self.log_file}', using default")
                return None
        return None

    def __init__(self, **data):
        """Initialize config with environment variable support and sanitization."""
        # Load from environment variables first
        env_data = {}

        # Map environment variables to config fields
        env_mapping = {
            'GIT_HISTORY_LINT_PACKAGE_MANAGER': 'package_manager',
            'GIT_HISTORY_LINT_MANIFEST': 'manifest',
            'GIT_HISTORY_LINT_SCRIPTS': 'scripts',
            'GIT_HISTORY_LINT_MAX_SUBJECT_LENGTH': 'max_subject_length',
            'GIT_HISTORY_LINT_MAX_BODY_LINE_LENGTH': 'max_body_line_length',
            'GIT_HISTORY_LINT_STRICT_MESSAGES': 'strict_messages',
            'GIT_HISTORY_LINT_RESTORE_ON_FAILURE': 'restore_on_failure',
            'GIT_HISTORY_LINT_ALWAYS_LOG': 'always_log',
            'GIT_HISTORY_LINT_LOG_FILE': 'log_file',
        }

        for env_var, field_name in env_mapping.items():
            if env_var in os.environ:
                value = os.environ[env_var]

                # Sanitize string values
                if field_name in STRING_FIELDS:
                    value = self._sanitize_string(value)

                # Comma separated list
                if field_name == 'scripts':
                    value = [
                        self._sanitize_string(script)
                        for script in value.split(',') if script.strip()
                    ]

                # Convert integer values, skipping ones that do not parse
                if field_name in INT_FIELDS:
                    try:
                        value = int(value)
                    except ValueError:
                        print(f"Warning: Ignoring {env_var}={value!r}, expected an integer")
                        continue

                # Convert boolean values
                if field_name in BOOL_FIELDS:
                    value = value.lower() in ['true', '1', 'yes', 'on']

                env_data[field_name] = value

        # Merge with provided data
        merged_data = {**env_data, **data}

        super().__init__(**merged_data)
