# src/tktranslate/config/settings.py
"""
Settings Loader
---------------
Central utility for loading and accessing the YAML configuration file.

Lookup order for each setting: environment variable > config.yaml > default.
`${VAR}` / `${VAR:-default}` placeholders inside the YAML are expanded from
the environment, and a `.env` file in the working directory is loaded first.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger("tktranslate.config.settings")

load_dotenv()

# Project root and config path are constants for clarity and testability
PROJECT_ROOT = os.path.abspath(
    os.path.join(os.path.dirname(__file__), os.pardir, os.pardir, os.pardir)
)
CONFIG_PATH = os.path.join(PROJECT_ROOT, "config", "config.yaml")

_ENV_PAT = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")


def _expand_env(s: str) -> str:
    def repl(m):
        return os.environ.get(m.group(1), m.group(2) or "")

    return _ENV_PAT.sub(repl, s)


def _expand_obj(x: Any) -> Any:
    if isinstance(x, str):
        return _expand_env(x)
    if isinstance(x, dict):
        return {k: _expand_obj(v) for k, v in x.items()}
    if isinstance(x, list):
        return [_expand_obj(v) for v in x]
    return x


def _find_config_path() -> str:
    """Return absolute path to the config file (TKTRANSLATE_CONFIG wins)."""
    return os.getenv("TKTRANSLATE_CONFIG") or CONFIG_PATH


def load_config(path: Optional[str] = None, force: bool = False) -> Dict[str, Any]:
    """
    Safely load config.yaml.
    If force=True, update the global CONFIG in this module.
    """
    config_path = path or _find_config_path()
    logger.debug("Looking for config at: %s", config_path)

    if not os.path.exists(config_path):
        logger.warning("Config file not found at: %s", config_path)
        cfg: Dict[str, Any] = {}
    else:
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                cfg = yaml.safe_load(f) or {}
            if not isinstance(cfg, dict):
                logger.warning("Config file did not return a dict, forcing empty dict")
                cfg = {}
        except yaml.YAMLError as e:
            logger.error("Failed to parse YAML in %s: %s", config_path, e)
            cfg = {}
        except OSError as e:
            logger.error("Unexpected error reading %s: %s", config_path, e)
            cfg = {}

    cfg = _expand_obj(cfg)

    if force:
        global CONFIG  # noqa: PLW0603
        CONFIG = cfg

    return cfg


def get_config_value(*keys: str, default: Any = None) -> Any:
    """Retrieve a nested config value with a safe default."""
    node: Any = CONFIG
    for key in keys:
        if isinstance(node, dict) and key in node:
            node = node[key]
        else:
            return default
    return node


def _env_or(name: str, value: Any) -> Any:
    raw = os.getenv(name)
    return raw if raw not in (None, "") else value


def _as_float(value: Any, name: str, default: Optional[float]) -> Optional[float]:
    if value in (None, ""):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid number for %s: %r, using %r", name, value, default)
        return default


@dataclass
class Settings:
    server_addr: str = "http://translate.google.cn"
    timeout: float = 10.0
    proxy: Optional[str] = None
    user_agent: Optional[str] = None
    tkk_ttl: float = 600.0
    tkk_sweep_interval: float = 300.0
    result_ttl: Optional[float] = None
    log_level: str = "INFO"
    log_json: bool = True


def get_settings(cfg: Optional[Dict[str, Any]] = None) -> Settings:
    """Build Settings from the `translate` / `logging` sections plus env overrides."""
    cfg = CONFIG if cfg is None else cfg
    tr = cfg.get("translate") if isinstance(cfg.get("translate"), dict) else {}
    lg = cfg.get("logging") if isinstance(cfg.get("logging"), dict) else {}
    d = Settings()

    proxy = _env_or("TKTRANSLATE_PROXY", tr.get("proxy"))
    log_json = lg.get("json", d.log_json)
    if isinstance(log_json, str):
        log_json = log_json.strip().lower() in ("1", "true", "yes", "on")

    return Settings(
        server_addr=str(_env_or("TKTRANSLATE_SERVER_ADDR", tr.get("server_addr") or d.server_addr)),
        timeout=_as_float(_env_or("TKTRANSLATE_TIMEOUT", tr.get("timeout")), "timeout", d.timeout),
        proxy=str(proxy) if proxy else None,
        user_agent=tr.get("user_agent") or None,
        tkk_ttl=_as_float(tr.get("tkk_ttl"), "tkk_ttl", d.tkk_ttl),
        tkk_sweep_interval=_as_float(
            tr.get("tkk_sweep_interval"), "tkk_sweep_interval", d.tkk_sweep_interval
        ),
        result_ttl=_as_float(
            _env_or("TKTRANSLATE_RESULT_TTL", tr.get("result_ttl")), "result_ttl", None
        ),
        log_level=str(_env_or("LOG_LEVEL", lg.get("level") or d.log_level)).upper(),
        log_json=bool(log_json),
    )


# ---------------------------------------------------------------------
# Global CONFIG available at import time
# ---------------------------------------------------------------------
CONFIG: Dict[str, Any] = load_config()

__all__ = [
    "CONFIG",
    "Settings",
    "load_config",
    "get_config_value",
    "get_settings",
    "_find_config_path",
    "PROJECT_ROOT",
    "CONFIG_PATH",
]
