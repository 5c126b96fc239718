"""Settings for term-palette from the environment and .env files.

Load order (first wins):
  1. Existing OS environment variables, never overwritten.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Recognised variables:

    TERM_PALETTE_ALLOW_TRANSPARENCY      true/false (default false)
    TERM_PALETTE_MINIMUM_CONTRAST_RATIO  float >= 1 (default 1, no adjustment)
    TERM_PALETTE_THEME                   default theme JSON file for `theme`/`palette`
    TERM_PALETTE_LOG_LEVEL               logging level name (default WARNING)

Bad values are logged and replaced by the default.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

PREFIX = 'TERM_PALETTE_'

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off', ''}


@dataclass
class Settings:
    allow_transparency: bool = False
    minimum_contrast_ratio: float = 1.0
    theme: str | None = None
    log_level: str = 'WARNING'


def find_dotenv(start: Path) -> Path | None:
    """Nearest .env at or above start, without crossing a repository root."""
    for directory in (start.resolve(), *start.resolve().parents):
        candidate = directory / '.env'
        if candidate.is_file():
            return candidate
        # .git is a dir in a normal clone and a file in a worktree
        if (directory / '.git').exists():
            return None
    return None


def read_dotenv(path: Path) -> dict[str, str]:
    """KEY=value pairs from a .env file. Comments, blanks and bare words are skipped."""
    values: dict[str, str] = {}
    for raw in path.read_text(encoding='utf-8').splitlines():
        line = raw.strip()
        if line.startswith('#') or '=' not in line:
            continue
        key, _, value = line.partition('=')
        key = key.strip()
        if key:
            values[key] = value.strip().strip('"').strip("'")
    return values


def load_env(env_file: str | None = None) -> Path | None:
    """Copy .env values into os.environ for keys not already set. Returns the file used."""
    path = Path(env_file) if env_file else find_dotenv(Path.cwd())
    if path is None or not path.is_file():
        return None
    for key, value in read_dotenv(path).items():
        os.environ.setdefault(key, value)
    logger.debug('Loaded environment from %s', path)
    return path


def _bool(name: str, default: bool) -> bool:
    raw = os.environ.get(PREFIX + name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    logger.warning('%s%s=%r is not a boolean, using %s', PREFIX, name, raw, default)
    return default


def _ratio(name: str, default: float) -> float:
    raw = os.environ.get(PREFIX + name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        value = 0.0
    if value < 1:
        logger.warning('%s%s=%r is not a contrast ratio >= 1, using %s', PREFIX, name, raw, default)
        return default
    return value


def _level(name: str, default: str) -> str:
    raw = os.environ.get(PREFIX + name)
    if raw is None:
        return default
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning('%s%s=%r is not a logging level, using %s', PREFIX, name, raw, default)
        return default
    return level


def load_settings(env_file: str | None = None) -> Settings:
    """Load .env (see load_env) and build Settings from the environment."""
    load_env(env_file)
    return Settings(
        allow_transparency=_bool('ALLOW_TRANSPARENCY', False),
        minimum_contrast_ratio=_ratio('MINIMUM_CONTRAST_RATIO', 1.0),
        theme=os.environ.get(PREFIX + 'THEME') or None,
        log_level=_level('LOG_LEVEL', 'WARNING'),
    )
