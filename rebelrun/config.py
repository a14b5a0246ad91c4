# rebelrun/config.py
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import ACTOR_LIVES, FPS, HIT_WIDTH

logger = logging.getLogger(__name__)

PKG_DIR = Path(__file__).resolve().parent
CONFIG_PATH = PKG_DIR / "config.json"
CONFIG_ENV = "REBELRUN_CONFIG"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _abs(path: str) -> str:
    p = Path(path)
    return str(p) if p.is_absolute() else str((PKG_DIR / p).resolve())


DEFAULT_CFG: Dict[str, Any] = {
    "display": {"fullscreen": False, "fps": FPS},
    "audio": {"music_volume": 0.5, "sfx_volume": 0.8},
    "images": {
        "stormtrooper-color": "assets/images/stormtrooper-color.png",
        "vader-color": "assets/images/vader-color.png",
        "kyloren-color": "assets/images/kyloren-color.png",
        "bb8-color": "assets/images/bb8-color.png",
        "r2d2-color": "assets/images/r2d2-color.png",
        "chewie-color": "assets/images/chewie-color.png",
        "rebelSymbol": "assets/images/rebelSymbol.png",
        "jediOrder-color": "assets/images/jediOrder-color.png",
        "phoenix-color": "assets/images/phoenix-color.png",
    },
    "sounds": {
        "rebelTheme": "assets/sounds/rebelTheme.ogg",
        "winLevel": "assets/sounds/winLevel.ogg",
        "winGame": "assets/sounds/winGame.ogg",
        "lose": "assets/sounds/lose.ogg",
        "lastLife": "assets/sounds/lastLife.ogg",
        "token": "assets/sounds/token.ogg",
        "jediOrder": "assets/sounds/jediOrder.ogg",
        "phoenix": "assets/sounds/phoenix.ogg",
        "bb8": "assets/sounds/bb8.ogg",
        "r2d2": "assets/sounds/r2d2.ogg",
        "chewie": "assets/sounds/chewie.ogg",
    },
    "lives": ACTOR_LIVES,
    "gameplay": {"hazard_collisions": True, "hit_width": HIT_WIDTH},
    "levels": {},
    "log_level": "INFO",
}


def _deepcopy(obj):
    return json.loads(json.dumps(obj))


def _merge(dst: dict, src: dict) -> dict:
    for k, v in src.items():
        if isinstance(v, dict) and isinstance(dst.get(k), dict):
            _merge(dst[k], v)
        else:
            dst[k] = v
    return dst


def _sanitize_cfg(cfg: dict) -> dict:
    d = cfg.setdefault("display", {})
    d["fullscreen"] = bool(d.get("fullscreen", False))
    d["fps"] = int(max(30, min(240, int(d.get("fps", FPS)))))

    a = cfg.setdefault("audio", {})
    a["music_volume"] = float(max(0.0, min(1.0, float(a.get("music_volume", 0.5)))))
    a["sfx_volume"] = float(max(0.0, min(1.0, float(a.get("sfx_volume", 0.8)))))

    cfg["lives"] = int(max(1, min(9, int(cfg.get("lives", ACTOR_LIVES)))))

    g = cfg.setdefault("gameplay", {})
    g["hazard_collisions"] = bool(g.get("hazard_collisions", True))
    g["hit_width"] = float(max(1.0, min(200.0, float(g.get("hit_width", HIT_WIDTH)))))

    level = str(cfg.get("log_level", "INFO")).upper()
    cfg["log_level"] = level if level in LOG_LEVELS else "INFO"

    if not isinstance(cfg.get("levels"), dict):
        cfg["levels"] = {}

    for section in ("images", "sounds"):
        d = cfg.get(section, {})
        for k, v in list(d.items()):
            if isinstance(v, str):
                d[k] = _abs(v)
    return cfg


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV)
    return Path(override) if override else CONFIG_PATH


def load_config(path: Optional[Path] = None) -> dict:
    path = Path(path) if path is not None else config_path()
    cfg = _deepcopy(DEFAULT_CFG)
    try:
        with open(path, "r", encoding="utf-8") as f:
            user = json.load(f)
        if isinstance(user, dict):
            _merge(cfg, user)
        else:
            logger.warning("ignoring %s: top level must be an object", path)
    except FileNotFoundError:
        logger.debug("no config at %s, using defaults", path)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("ignoring unreadable config %s: %s", path, e)
    cfg = _sanitize_cfg(cfg)
    cfg["config_path"] = str(path.resolve())
    return cfg


__all__ = ["DEFAULT_CFG", "CONFIG_PATH", "CONFIG_ENV", "config_path", "load_config"]
