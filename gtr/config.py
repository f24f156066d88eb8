"""Configuration handling for gtr"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Tuple

from gtr.constants import (
    AUTO_DETECT_DIR_NAME,
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_BRANCH_PREFIX,
    DEFAULT_WORKTREE_DIR,
    ENV_BRANCH_PREFIX,
    ENV_WORKTREE_DIR,
)
from gtr.logging_config import get_logger

logger = get_logger(__name__)


class BasePathSource(Enum):
    """Where the resolved base path came from."""

    ENV = "env"
    CONFIG_FILE = "config"
    AUTO_DETECTED = "auto-detected"
    DEFAULT = "default"


def default_config_file(env: Optional[Mapping[str, str]] = None) -> Path:
    """Location of the persisted base-path file."""
    env = os.environ if env is None else env
    config_home = env.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return Path(config_home) / CONFIG_DIR_NAME / CONFIG_FILE_NAME


class ConfigFile:
    """The one-line file holding the persisted base path."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else default_config_file()

    def read(self) -> Optional[str]:
        """Return the trimmed persisted path, or None when absent or blank."""
        try:
            content = self.path.read_text()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.debug(f"Could not read config file {self.path}: {e}")
            return None

        for line in content.splitlines():
            value = line.strip()
            if value:
                return value
        return None

    def write(self, base_path: str) -> str:
        """Overwrite the file with a single base path. Returns the stored value."""
        value = os.path.expanduser(base_path.strip())
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(value + "\n")
        logger.info(f"Persisted base path {value} to {self.path}")
        return value


def resolve_base_path(
    repo_root: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    config_file: Optional[ConfigFile] = None,
) -> Tuple[str, BasePathSource]:
    """
    Pick the directory under which worktrees live.

    First match wins: env override, persisted config file, a ``worktrees``
    directory next to the repository root, then ``~/code/worktrees``.
    Nothing is created here; the sibling existence check is the only probe.

    Args:
        repo_root: Repository root, or None when outside a repository
        env: Environment mapping (defaults to os.environ)
        config_file: Persisted config store (defaults to the per-user file)

    Returns:
        Tuple of (path, source)
    """
    env = os.environ if env is None else env
    config_file = config_file or ConfigFile(default_config_file(env))

    override = (env.get(ENV_WORKTREE_DIR) or "").strip()
    if override:
        return override, BasePathSource.ENV

    persisted = config_file.read()
    if persisted:
        return persisted, BasePathSource.CONFIG_FILE

    if repo_root:
        sibling = os.path.join(os.path.dirname(os.path.abspath(repo_root)), AUTO_DETECT_DIR_NAME)
        if os.path.isdir(sibling):
            return sibling, BasePathSource.AUTO_DETECTED

    return os.path.expanduser(DEFAULT_WORKTREE_DIR), BasePathSource.DEFAULT


def base_path_source(
    repo_root: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    config_file: Optional[ConfigFile] = None,
) -> BasePathSource:
    """Diagnostic view of resolve_base_path; always agrees with it."""
    return resolve_base_path(repo_root, env, config_file)[1]


def resolve_branch_prefix(env: Optional[Mapping[str, str]] = None) -> str:
    """Default branch prefix, honoring the env override."""
    env = os.environ if env is None else env
    prefix = (env.get(ENV_BRANCH_PREFIX) or "").strip()
    return prefix or DEFAULT_BRANCH_PREFIX


@dataclass
class Config:
    """Per-invocation configuration, computed once and passed down."""

    base_path: str
    base_path_source: BasePathSource = BasePathSource.DEFAULT
    branch_prefix: str = DEFAULT_BRANCH_PREFIX

    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_base_path()
        self._validate_branch_prefix()

    def _validate_base_path(self):
        """Validate base_path is not empty."""
        if not self.base_path or not self.base_path.strip():
            raise ValueError("base_path cannot be empty")

    def _validate_branch_prefix(self):
        """Validate branch_prefix is not empty."""
        if not self.branch_prefix or not self.branch_prefix.strip():
            raise ValueError("branch_prefix cannot be empty")

    @classmethod
    def load(
        cls,
        repo_root: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
        config_file: Optional[ConfigFile] = None,
        verbose: bool = False,
        debug: bool = False,
    ) -> "Config":
        """Resolve env, config file and auto-detection into a Config."""
        base_path, source = resolve_base_path(repo_root, env, config_file)
        return cls(
            base_path=base_path,
            base_path_source=source,
            branch_prefix=resolve_branch_prefix(env),
            verbose=verbose,
            debug=debug,
        )

    def worktree_path(self, name: str) -> str:
        """Filesystem location of the named worktree."""
        return os.path.join(os.path.expanduser(self.base_path), name)

    def to_dict(self) -> dict:
        """Convert config to dictionary for debug display."""
        return {
            "base_path": self.base_path,
            "base_path_source": self.base_path_source.value,
            "branch_prefix": self.branch_prefix,
            "verbose": self.verbose,
            "debug": self.debug,
        }
