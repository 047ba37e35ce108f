"""
Configuration management for ytmusic-shell

This module handles loading, validation, and management of application settings
from multiple sources including YAML files and environment variables. It provides
a centralized configuration system that supports reloading and validation.

The configuration is organized into logical sections using dataclasses:
- YouTube Music client identity and parsing vocabulary
- Authentication cookie sources
- Network behavior (timeout, user agent)
- Logging output options
- Local storage locations

Session cookies are never stored in configuration files; only the path of a
cookies.txt export is configured, and it can be supplied through the
environment instead.
"""

import os
import sys
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Tuple
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Load environment variables from .env file if present
load_dotenv()


@dataclass
class YTMusicConfig:
    """
    YouTube Music client identity and response interpretation settings

    The client identity is sent with every request as the request context.
    The vocabulary lists drive text-based item classification and are
    locale dependent: the service localizes subtitles according to ``hl``,
    so terms for the configured locale must be present alongside English.
    """
    origin: str = "https://music.youtube.com"
    client_name: str = "WEB_REMIX"
    client_version: str = "1.20241023.01.00"
    hl: str = "tr"
    gl: str = "TR"
    # Opaque, service-defined token restricting search results to songs
    search_params: str = "EgWKAQIIAWoMEAMQBBAJEA4QChAF"
    home_shelf_fallback_title: str = "Öneriler"
    album_terms: List[str] = field(default_factory=lambda: ["albüm", "album", "single", "ep"])
    playlist_terms: List[str] = field(default_factory=lambda: ["çalma listesi", "playlist", "mix"])
    album_browse_prefixes: List[str] = field(default_factory=lambda: ["MPREb_", "OLAK"])
    thumbnail_min_width: int = 200
    thumbnail_max_width: int = 400


@dataclass
class AuthConfig:
    """
    Session cookie source settings

    The cookie file is a Netscape-format cookies.txt exported from a browser
    that is logged in to music.youtube.com. Signing-key cookie names are
    listed in order of preference.
    """
    cookie_file: str = ""
    cookie_domain: str = ".youtube.com"
    signing_key_cookies: List[str] = field(default_factory=lambda: ["__Secure-3PAPISID", "SAPISID"])


@dataclass
class NetworkConfig:
    """
    Network and HTTP configuration settings

    A single timeout bounds every request; there is no retry policy.
    """
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    request_timeout: int = 15


@dataclass
class LoggingConfig:
    """
    Logging configuration and output settings

    Controls application logging behavior including log levels, file output,
    rotation, and console formatting.
    """
    level: str = "INFO"
    file: str = ""
    max_size: str = "10MB"
    backup_count: int = 3
    console_output: bool = True
    colored_output: bool = True


@dataclass
class SecurityConfig:
    """Where local configuration lives"""
    config_directory: str = "~/.ytmusic-shell/"


class Settings:
    """
    Main settings class that manages all configuration

    This class serves as the central configuration manager, loading settings
    from multiple sources (YAML files, environment variables) and providing
    a unified interface for accessing configuration throughout the application.

    The class handles:
    - Loading configuration from YAML files
    - Overriding with environment variables
    - Creating the configuration directory
    - Validating configuration values
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize settings from config file or environment variables

        Args:
            config_path: Path to custom config file, if None uses default locations
        """
        self.config_path = config_path
        self.config_dir = Path.home() / ".ytmusic-shell"

        # Initialize all configuration objects with default values
        self.ytmusic = YTMusicConfig()
        self.auth = AuthConfig()
        self.network = NetworkConfig()
        self.logging = LoggingConfig()
        self.security = SecurityConfig()

        # Load configuration from various sources in order of precedence
        self._load_config()
        self._load_environment_variables()
        self._create_directories()

    def _load_config(self) -> None:
        """
        Load configuration from YAML file

        Searches for configuration files in multiple locations in order of
        precedence. The first file found will be used.
        """
        config_paths = [
            self.config_path,
            self.config_dir / "config.yaml",
            Path("config/config.yaml"),
            Path("config.yaml")
        ]

        config_data = {}
        for path in config_paths:
            if path and Path(path).exists():
                try:
                    with open(path, 'r', encoding='utf-8') as f:
                        config_data = yaml.safe_load(f) or {}
                    break
                except Exception as e:
                    print(f"Warning: Failed to load config from {path}: {e}")

        self._apply_config(config_data)

    def _sections(self) -> Dict[str, Any]:
        return {
            'ytmusic': self.ytmusic,
            'auth': self.auth,
            'network': self.network,
            'logging': self.logging,
            'security': self.security,
        }

    def _apply_config(self, config_data: Dict[str, Any]) -> None:
        """
        Apply configuration data to dataclass instances

        Only attributes that exist on the matching dataclass are updated,
        unknown sections and keys are ignored.

        Args:
            config_data: Dictionary containing configuration sections
        """
        config_mapping = self._sections()

        for section_name, section_data in config_data.items():
            if section_name in config_mapping and isinstance(section_data, dict):
                config_obj = config_mapping[section_name]
                for key, value in section_data.items():
                    if hasattr(config_obj, key):
                        setattr(config_obj, key, value)

    def _load_environment_variables(self) -> None:
        """
        Load overrides from environment variables

        Environment variables take precedence over file-based configuration.
        """
        env_mappings = {
            'YTMUSIC_COOKIE_FILE': lambda v: setattr(self.auth, 'cookie_file', v),
            'YTMUSIC_HL': lambda v: setattr(self.ytmusic, 'hl', v),
            'YTMUSIC_GL': lambda v: setattr(self.ytmusic, 'gl', v),
            'YTMUSIC_TIMEOUT': lambda v: setattr(self.network, 'request_timeout', int(v)),
            'YTMUSIC_LOG_LEVEL': lambda v: setattr(self.logging, 'level', v),
        }

        for env_var, setter in env_mappings.items():
            value = os.getenv(env_var)
            if value:
                try:
                    setter(value)
                except ValueError as e:
                    print(f"Warning: Ignoring invalid value for {env_var}: {e}")

    def _create_directories(self) -> None:
        """Create the configuration directory, warning on failure"""
        directory = Path(self.security.config_directory).expanduser()
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except Exception as e:
            print(f"Warning: Failed to create directory {directory}: {e}")

    def get_config_directory(self) -> Path:
        """
        Get the expanded config directory path

        Returns:
            Path object for the configuration directory
        """
        return Path(self.security.config_directory).expanduser()

    def get_cookie_file(self) -> Optional[Path]:
        """
        Get the expanded cookie file path

        Relative paths are resolved against the configuration directory.

        Returns:
            Path to the cookies.txt file, or None if not configured
        """
        if not self.auth.cookie_file:
            return None
        path = Path(self.auth.cookie_file).expanduser()
        if not path.is_absolute():
            path = self.get_config_directory() / path
        return path

    def get_thumbnail_band(self) -> Tuple[int, int]:
        """Preferred thumbnail width range as (min, max)"""
        return self.ytmusic.thumbnail_min_width, self.ytmusic.thumbnail_max_width

    def validation_errors(self) -> List[str]:
        """
        Check the current configuration for values the client cannot use

        Returns:
            List of human-readable problems, empty when the configuration is usable
        """
        errors = []

        if not self.ytmusic.origin.startswith("https://"):
            errors.append(f"Origin must be an https URL: {self.ytmusic.origin}")

        if not self.ytmusic.client_name or not self.ytmusic.client_version:
            errors.append("Client name and version are required")

        if self.network.request_timeout <= 0:
            errors.append(f"Invalid request timeout: {self.network.request_timeout}")

        if self.ytmusic.thumbnail_min_width > self.ytmusic.thumbnail_max_width:
            errors.append(
                f"Invalid thumbnail band: {self.ytmusic.thumbnail_min_width}"
                f"-{self.ytmusic.thumbnail_max_width}"
            )

        if not self.auth.signing_key_cookies:
            errors.append("At least one signing key cookie name is required")

        return errors

    def validate(self) -> bool:
        """
        Validate current configuration, reporting problems on stderr

        Returns:
            True if configuration is valid, False otherwise
        """
        errors = self.validation_errors()
        if errors:
            print("Configuration validation errors:", file=sys.stderr)
            for error in errors:
                print(f"  - {error}", file=sys.stderr)
            return False

        return True

    def __str__(self) -> str:
        sections = [
            f"Client: {self.ytmusic.client_name} {self.ytmusic.client_version}",
            f"Locale: {self.ytmusic.hl}-{self.ytmusic.gl}",
            f"Timeout: {self.network.request_timeout}s",
            f"Cookies: {self.auth.cookie_file or 'not configured'}",
        ]
        return f"Settings({', '.join(sections)})"


# Global settings instance for singleton pattern
settings = Settings()


def get_settings() -> Settings:
    """
    Get the global settings instance

    Returns:
        The global Settings instance
    """
    return settings


def reload_settings(config_path: Optional[str] = None) -> Settings:
    """
    Reload settings from configuration files

    Creates a new settings instance with updated configuration from files
    and environment variables.

    Args:
        config_path: Optional path to specific config file

    Returns:
        New Settings instance with reloaded configuration
    """
    global settings
    settings = Settings(config_path)
    return settings
