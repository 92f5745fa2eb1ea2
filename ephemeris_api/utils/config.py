# ephemeris_api/utils/config.py
import os
import yaml

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
    "config", "defaults.yaml",
)

_DEFAULTS = {
    "service": "Swiss Ephemeris API",
    "ephe_path": None,
    "port": 3000,
    "log_level": "INFO",
    "cors_origin": "*",
}

# env var -> (key, cast)
_ENV_OVERRIDES = {
    "SE_EPHE_PATH": ("ephe_path", str),
    "PORT": ("port", int),
    "LOG_LEVEL": ("log_level", str),
    "CORS_ALLOW_ORIGIN": ("cors_origin", str),
}


class AttrDict(dict):
    """Dict that also supports attribute access: cfg.port and cfg['port'] both work."""
    def __getattr__(self, item):
        try:
            return self[item]
        except KeyError as e:
            raise AttributeError(item) from e
    def __setattr__(self, key, value):
        self[key] = value


def _to_attr(obj):
    if isinstance(obj, dict):
        return AttrDict({k: _to_attr(v) for k, v in obj.items()})
    if isinstance(obj, list):
        return [_to_attr(x) for x in obj]
    return obj


def load_config(path: str = None):
    """
    Load YAML config from `path` (default: EPHEM_API_CONFIG or config/defaults.yaml)
    over built-in defaults, then apply environment overrides:
      - SE_EPHE_PATH, PORT, LOG_LEVEL, CORS_ALLOW_ORIGIN
    A missing file is not an error. Returns an AttrDict.
    """
    path = path or os.getenv("EPHEM_API_CONFIG") or DEFAULT_CONFIG_PATH
    data = dict(_DEFAULTS)
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"config {path} must be a mapping")
        data.update(loaded)

    for env, (key, cast) in _ENV_OVERRIDES.items():
        raw = os.getenv(env)
        if raw:
            data[key] = cast(raw)

    return _to_attr(data)
