from __future__ import annotations

import copy
import os
import platform
from pathlib import Path
from typing import Any, Iterable

import yaml

from tplname.constants import UPLOAD_EXTENSIONS, VALID_OUTPUT_FORMATS

CONFIG_ENV_VAR = "TPLNAME_CONFIG"

DEFAULT_CONFIG: dict[str, Any] = {
    "log_level": "info",
    "output_format": "json",
    "extensions": sorted(UPLOAD_EXTENSIONS),
    "strict": False,
}


def get_user_data_dir() -> Path:
    """返回用户可写的配置目录。"""
    system_name = platform.system().lower()
    if system_name == "windows":
        base = (
            os.environ.get("APPDATA")
            or os.environ.get("LOCALAPPDATA")
            or str(Path.home() / "AppData" / "Roaming")
        )
        return Path(base) / "tplname"
    if system_name == "darwin":
        return Path.home() / "Library" / "Application Support" / "tplname"

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home) / "tplname"
    return Path.home() / ".config" / "tplname"


def get_config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return get_user_data_dir() / "Config" / "config.yaml"


def _deep_merge(base: dict[str, Any], incoming: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in incoming.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Path | None = None) -> dict[str, Any]:
    cfg_path = path or get_config_path()
    if not cfg_path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    text = cfg_path.read_text(encoding="utf-8")
    loaded = yaml.safe_load(text) or {}
    if not isinstance(loaded, dict):
        loaded = {}
    return _normalize_config(_deep_merge(DEFAULT_CONFIG, loaded))


def _normalize_config(cfg: dict[str, Any]) -> dict[str, Any]:
    """统一配置取值：扩展名带点小写、输出格式校验、strict 转 bool。

    output_format 非法时抛 ValueError。
    """
    cfg["log_level"] = str(cfg.get("log_level") or "info").strip().lower()
    cfg["output_format"] = resolve_output_format(cfg.get("output_format") or "json")
    extensions = cfg.get("extensions")
    if isinstance(extensions, str):
        extensions = extensions.split(",")
    cfg["extensions"] = sorted(normalize_extensions(extensions))
    cfg["strict"] = bool(cfg.get("strict", False))
    return cfg


def write_default_config(path: Path | None = None, force: bool = False) -> Path:
    cfg_path = path or get_config_path()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    if cfg_path.exists() and not force:
        return cfg_path
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    cfg_path.write_text(yaml.safe_dump(cfg, sort_keys=False, allow_unicode=True), encoding="utf-8")
    return cfg_path


def resolve_output_format(value: str) -> str:
    fmt = str(value).strip().lower()
    if fmt not in VALID_OUTPUT_FORMATS:
        raise ValueError(f"output format must be json or text, got: {value!r}")
    return fmt


def normalize_extensions(extensions: Iterable[str] | None) -> set[str]:
    normalized: set[str] = set()
    for ext in extensions or ():
        ext = str(ext).strip().lower()
        if not ext:
            continue
        normalized.add(ext if ext.startswith(".") else f".{ext}")
    return normalized
