"""Module defining various global constants."""

# sshexplorer version
VERSION = "1.0.0"

# Special exit code for when sshexplorer itself fails.
SSHEXPLORER_ERROR_CODE = 254

# Timeout in seconds for establishing the SSH connection.
DEFAULT_TIMEOUT = 30.0

# Default location of the config file.
DEFAULT_CONFIG_PATH = "~/.sshexplorer/config"

# Environment variable that can hold the password for the command-line interface.
PASSWORD_ENV_VAR = "SSHEXPLORER_PASSWORD"
