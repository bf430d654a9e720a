"""
Core utility functions
"""
import paramiko
from pathlib import Path
from typing import Dict, Any, Optional

from .constants import SSH_CONFIG_PATH
from .exceptions import ConfigError


# ============================================================
# SSH Config Management
# ============================================================

def load_ssh_config(hostname: str, config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration for specified Host from ~/.ssh/config.
    
    Args:
        hostname: Host name in SSH configuration
        config_path: Alternate ssh config file
    
    Returns:
        Dictionary containing host, user, port, key_file. ``port`` and
        ``user`` are None when the config does not set them.
    
    Raises:
        ConfigError: If the ssh config file doesn't exist
    """
    path = Path(config_path or SSH_CONFIG_PATH).expanduser()
    if not path.exists():
        raise ConfigError(f"{path} does not exist")

    ssh_config = paramiko.SSHConfig.from_path(str(path))
    entry = ssh_config.lookup(hostname)

    port = entry.get("port")
    return {
        "host": entry.get("hostname", hostname),
        "user": entry.get("user"),
        "port": int(port) if port else None,
        "key_file": entry.get("identityfile", [None])[0],
    }
