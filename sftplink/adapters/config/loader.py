"""
Configuration loader with priority: env > CLI > TOML > defaults
"""
import os
import tomllib
from pathlib import Path
from typing import Dict, Any, Optional

from ...core.config import ConnectionSettings
from ...core.constants import ENV_PREFIX
from ...core.exceptions import ConfigError

# Settings live under this table in the TOML file
TOML_SECTION = "connection"


class ConfigLoader:
    """Configuration loader with priority support"""
    
    def __init__(self, env_prefix: str = ENV_PREFIX):
        self._env_prefix = env_prefix
    
    def load_toml(self, path: Path) -> Dict[str, Any]:
        """Load the connection table of a TOML configuration file"""
        path = Path(path).expanduser()
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")
        
        try:
            data = tomllib.loads(path.read_text(encoding='utf-8'))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Failed to parse TOML configuration: {e}") from e
        
        section = data.get(TOML_SECTION, {})
        if not isinstance(section, dict):
            raise ConfigError(f"[{TOML_SECTION}] must be a table in {path}")
        return section
    
    def load_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables"""
        config = {}
        
        env_mappings = {
            f"{self._env_prefix}CONNECT_TIMEOUT_MS": "connect_timeout_ms",
            f"{self._env_prefix}DEFAULT_PORT": "default_port",
            f"{self._env_prefix}KNOWN_HOSTS": "known_hosts",
            f"{self._env_prefix}LOG_LEVEL": "log_level",
        }
        
        for env_key, config_key in env_mappings.items():
            value = os.getenv(env_key)
            if value:
                config[config_key] = self._convert_value(value)
        
        return config
    
    def _convert_value(self, value: str) -> Any:
        """Convert string value to appropriate type"""
        try:
            return int(value)
        except ValueError:
            return value
    
    def merge_configs(self, *configs: Dict[str, Any]) -> Dict[str, Any]:
        """Later configs override earlier ones, None values are skipped"""
        result: Dict[str, Any] = {}
        for config in configs:
            result.update({k: v for k, v in config.items() if v is not None})
        return result
    
    def load(
        self,
        toml_path: Optional[Path] = None,
        cli_overrides: Optional[Dict[str, Any]] = None,
        use_env: bool = True,
    ) -> Dict[str, Any]:
        """
        Load configuration with priority: env > CLI > TOML > defaults
        
        Args:
            toml_path: Path to TOML configuration file
            cli_overrides: CLI parameter overrides
            use_env: Whether to load from environment variables
        
        Returns:
            Merged configuration dictionary
        """
        configs = []
        
        if toml_path:
            configs.append(self.load_toml(toml_path))
        
        if cli_overrides:
            configs.append(cli_overrides)
        
        if use_env:
            env_config = self.load_env()
            if env_config:
                configs.append(env_config)
        
        return self.merge_configs(*configs)
    
    def load_settings(
        self,
        toml_path: Optional[Path] = None,
        cli_overrides: Optional[Dict[str, Any]] = None,
        use_env: bool = True,
    ) -> ConnectionSettings:
        return ConnectionSettings.from_dict(self.load(toml_path, cli_overrides, use_env))
