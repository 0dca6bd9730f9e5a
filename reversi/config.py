# reversi/config.py
from dataclasses import dataclass, field
from typing import Optional
import os
import tomllib  # python >=3.11

@dataclass
class SearchConfig:
    playouts: int = 500
    time_limit_s: Optional[float] = 10.0  # None means playouts-only
    threads: int = 1
    policy: str = "heuristic"  # "random" or "heuristic"
    seed: Optional[int] = None

@dataclass
class GameConfig:
    first_mover: str = "dark"
    # self-play: which rollout policy each colour searches with
    light_policy: str = "random"
    dark_policy: str = "heuristic"

@dataclass
class UIConfig:
    engine_name: str = "ReversiMC"

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    game: GameConfig = field(default_factory=GameConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "game", "ui"):
            target = getattr(cfg, section)
            for k, v in raw.get(section, {}).items():
                if hasattr(target, k):
                    setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = raw["log_level"]
        return cfg

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("REVERSI_CONFIG_TOML", "config.toml"))
# allow env override of the playout budget for quick debugging
override_playouts = os.environ.get("REVERSI_PLAYOUTS")
if override_playouts:
    CONFIG.search.playouts = int(override_playouts)
