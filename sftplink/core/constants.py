"""
Project constants definitions
"""

# ============================================================
# Default Values
# ============================================================

DEFAULT_SSH_PORT = 22
DEFAULT_CONNECT_TIMEOUT_MS = 5 * 1000
DEFAULT_LOG_LEVEL = "INFO"

# ============================================================
# SFTP
# ============================================================

SFTP_SUBSYSTEM = "sftp"
SFTP_SCHEME = "sftp"

# Target property holding the path to a private key file
PRIVATE_KEY_PATH_PROPERTY = "privateKeyPath"

# 'Public key' SSH authentication method, not supported at the moment
PUBLIC_KEY_AUTH_METHOD = "publickey"
KEYBOARD_INTERACTIVE_AUTH_METHOD = "keyboard-interactive"

# ============================================================
# SSH Config
# ============================================================

SSH_CONFIG_PATH = "~/.ssh/config"
KNOWN_HOSTS_PATH = "~/.ssh/known_hosts"

# ============================================================
# Configuration
# ============================================================

ENV_PREFIX = "SFTPLINK_"
DEFAULT_CONFIG_PATH = "~/.sftplink.toml"
