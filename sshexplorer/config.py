"""Module for configuration variables with defaults that are overridable by a file."""

from __future__ import annotations

from configparser import ConfigParser, SectionProxy
from dataclasses import dataclass, field
import os
from typing import Optional

from sshexplorer.constants import DEFAULT_TIMEOUT
from sshexplorer.logger import log


@dataclass
class BackendConfig:
    """Configuration variables related to the remote host."""

    # Address of the SSH server in host[:port] form.
    host: str = "localhost:22"

    # Paths outside of this prefix are refused, empty means no restriction.
    home: str = ""

    timeout: float = DEFAULT_TIMEOUT

    @staticmethod
    def load(section: SectionProxy) -> BackendConfig:
        """Load overridden variables from a section within a config file."""
        config = BackendConfig()

        config.host = section.get("host", fallback=config.host)
        config.home = section.get("home", fallback=config.home)
        config.timeout = section.getfloat("timeout", fallback=config.timeout)

        return config


@dataclass
class TransferConfig:
    """Configuration variables related to file content transfers."""

    # Directory for temporary staging files, None means the system default.
    staging_dir: Optional[str] = None

    @staticmethod
    def load(section: SectionProxy) -> TransferConfig:
        """Load overridden variables from a section within a config file."""
        config = TransferConfig()

        staging_dir = section.get("staging_dir", fallback=None)

        if staging_dir:
            config.staging_dir = os.path.expanduser(staging_dir)

        return config


@dataclass
class Config:
    """Configuration variables."""

    backend: BackendConfig = field(default_factory=BackendConfig)
    transfer: TransferConfig = field(default_factory=TransferConfig)

    @staticmethod
    def load(filename: str) -> Config:
        """Load overridden configuration variables from a config file."""
        parser = ConfigParser()

        config = Config()

        try:
            with open(filename, "r") as f:
                parser.read_string(f.read(), filename)

            if "backend" in parser:
                config.backend = BackendConfig.load(parser["backend"])
            if "transfer" in parser:
                config.transfer = TransferConfig.load(parser["transfer"])
        except FileNotFoundError:
            log.info(f"no config file at {filename}")
        except Exception as e:
            # An unreadable config file is not considered a fatal error since we can
            # fall back to defaults.
            log.error(f"failed to read config file {filename}: {e}")
        else:
            log.info(f"loaded config: {config}")

        return config
