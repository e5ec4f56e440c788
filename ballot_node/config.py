# ballot_node/config.py
import copy
import os
import yaml
from typing import Any, Dict, List, Optional

CONFIG_FILENAME = "ballot_config.yaml"

# -------- Defaults (non-secret) --------
_DEFAULT: Dict[str, Any] = {
    "election": {
        # identity allowed to register voters and drive phase transitions
        "admin_id": "admin",
    },
    "security": {
        # request header carrying the caller identity (set by the auth proxy)
        "caller_header": "X-Caller-Id",
    },
    "logging": {"level": "INFO"},
    "server": {
        "host": "0.0.0.0",  # uvicorn bind address
        "port": 8000,  # uvicorn port
    },
    "cors": {
        "origins": [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]
    },
}

# -------- ENV overrides --------
_ENV_MAP = {
    ("election", "admin_id"): ("BALLOT_ADMIN_ID", str),
    ("security", "caller_header"): ("BALLOT_CALLER_HEADER", str),
    ("logging", "level"): ("BALLOT_LOG_LEVEL", str),
    ("server", "port"): ("BALLOT_PORT", int),
}


def _deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in (overlay or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _apply_env_overrides(cfg: Dict[str, Any]) -> Dict[str, Any]:
    for (section, key), (env_name, cast) in _ENV_MAP.items():
        val = os.getenv(env_name)
        if val is not None:
            try:
                casted = cast(val)
            except ValueError:
                casted = val
            cfg.setdefault(section, {})
            cfg[section][key] = casted
    return cfg


def default_config() -> Dict[str, Any]:
    return copy.deepcopy(_DEFAULT)


def load_config(repo_root: Optional[str] = None) -> Dict[str, Any]:
    """
    Loads the YAML config from repo_root/ballot_config.yaml.
    Returns defaults if the file doesn't exist or can't be parsed.
    Also applies ENV overrides for certain keys.
    """
    path = os.path.join(repo_root or os.getcwd(), CONFIG_FILENAME)
    cfg = default_config()

    if os.path.exists(path):
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
            if isinstance(data, dict):
                cfg = _deep_merge(cfg, data)
        except (OSError, yaml.YAMLError):
            # fall back to defaults
            pass

    cfg = _apply_env_overrides(cfg)

    origins = cfg.get("cors", {}).get("origins")
    if isinstance(origins, str):
        cfg["cors"]["origins"] = [origins]

    return cfg


# -------- Small helpers used by the app --------
def get_admin_id(cfg: Dict[str, Any]) -> str:
    return str(cfg.get("election", {}).get("admin_id", "admin"))


def get_caller_header(cfg: Dict[str, Any]) -> str:
    return str(cfg.get("security", {}).get("caller_header", "X-Caller-Id"))


def get_log_level(cfg: Dict[str, Any]) -> str:
    return str(cfg.get("logging", {}).get("level", "INFO")).upper()


def get_bind_host(cfg: Dict[str, Any]) -> str:
    return str(cfg.get("server", {}).get("host", "0.0.0.0"))


def get_bind_port(cfg: Dict[str, Any]) -> int:
    return int(cfg.get("server", {}).get("port", 8000))


def get_cors_origins(cfg: Dict[str, Any]) -> List[str]:
    return list(cfg.get("cors", {}).get("origins", []))
