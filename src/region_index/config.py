import yaml
from pathlib import Path

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "region_index.yml"

DEFAULT_QUERY = {"code_length": 12, "name_limit": 5}
DEFAULT_INDEX = {"retain_code_index": True, "root_name": None}


class RIConfig:
    def __init__(self, data):
        self.paths = data.get("paths", {}) or {}
        self.logging = data.get("logging", {}) or {}
        self.query = {**DEFAULT_QUERY, **(data.get("query", {}) or {})}
        self.index = {**DEFAULT_INDEX, **(data.get("index", {}) or {})}
        self.debug = data.get("debug", False)


def load_config(path: Path = CONFIG_PATH) -> 'RIConfig':
    # Without a config file every section falls back to its defaults.
    if not path.exists():
        return RIConfig({})

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return RIConfig(data)

_config_cache = None

def get_config() -> 'RIConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache


def reset_config() -> None:
    global _config_cache
    _config_cache = None
