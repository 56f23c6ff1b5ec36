"""Default option values for the ``feedforge`` command.

Values are read, later sources winning, from ``~/.feedforge.yaml``,
``./feedforge.yaml`` (either may use ``.yml``) and ``FEEDFORGE_*``
environment variables.  They become argparse defaults, so a flag given on
the command line always takes precedence.
"""
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "FEEDFORGE_"


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


OPTION_TYPES: Dict[str, Callable[[Any], Any]] = {
    "format": str,
    "output": str,
    "indent": int,
    "quiet": _flag,
    "verbose": _flag,
}


def config_paths() -> List[Path]:
    home = Path.home()
    return [home / ".feedforge.yaml", home / ".feedforge.yml",
            Path("feedforge.yaml"), Path("feedforge.yml")]


def typed_options(raw: Mapping[Any, Any], origin: str) -> Dict[str, Any]:
    """Keep the known options from ``raw``, converted to their types.

    Keys are case-insensitive.  Unknown keys and values that fail conversion
    are skipped.
    """
    options: Dict[str, Any] = {}
    for key, value in raw.items():
        name = str(key).lower()
        convert = OPTION_TYPES.get(name)
        if convert is None:
            logger.debug(f"[Config] {origin}: unknown option {key!r}")
            continue
        if value is None:
            continue
        try:
            options[name] = convert(value)
        except (TypeError, ValueError):
            logger.warning(f"[Config] {origin}: bad value for {name}: {value!r}")
    return options


def read_config_file(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"[Config] Skipping {path}: {e}")
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning(f"[Config] Skipping {path}: expected a mapping of options")
        return {}
    logger.debug(f"[Config] Read {path}")
    return typed_options(data, str(path))


def read_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    environ = os.environ if environ is None else environ
    raw = {name[len(ENV_PREFIX):]: value for name, value in environ.items()
           if name.startswith(ENV_PREFIX)}
    return typed_options(raw, "environment")


def config_defaults(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Merged option defaults from every config file and the environment."""
    options: Dict[str, Any] = {}
    for path in config_paths():
        if path.is_file():
            options.update(read_config_file(path))
    options.update(read_env(environ))
    return options


STARTER_CONFIG = """\
# Defaults for the feedforge command. Flags given on the command line win.
#
# format: rss        # rss, atom, opml, json or html
# indent: 2          # spaces per nesting level
# output: feed.xml   # write here instead of stdout
# quiet: false       # no status line on stderr
# verbose: false     # debug logging
"""


def write_starter_config() -> Path:
    """Create ``~/.feedforge.yaml``; an existing file is left alone and the
    starter goes to ``~/.feedforge.yaml.new`` instead."""
    path = Path.home() / ".feedforge.yaml"
    if path.exists():
        path = path.with_name(path.name + ".new")
    path.write_text(STARTER_CONFIG, encoding="utf-8")
    return path
