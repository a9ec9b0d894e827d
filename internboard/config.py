"""Load profile and env configuration."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from internboard.log import get_logger

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = ROOT_DIR / "config"
PROFILE_PATH: Path = CONFIG_DIR / "profile.yaml"
DATA_DIR: Path = ROOT_DIR / "data"
EXPORTS_DIR: Path = ROOT_DIR / "exports"

DEFAULT_FEED_URL = (
    "https://raw.githubusercontent.com/"
    "SimplifyJobs/Summer2026-Internships/dev/.github/scripts/listings.json"
)


def load_profile(path: Path | None = None) -> dict[str, Any]:
    """Read the keyword profile; a missing or empty file yields an empty dict."""
    path = path or PROFILE_PATH
    if not path.exists():
        log.debug("No profile at %s — using built-in defaults", path)
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Profile {path} must be a mapping, got {type(data).__name__}")

    keywords = data.get("resume_keywords")
    if keywords is not None:
        data["resume_keywords"] = [str(k).strip().lower() for k in keywords if str(k).strip()]
    data.setdefault("default_filters", {})
    return data


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def get_state_path() -> Path:
    raw = get_env("STATE_PATH")
    return Path(raw) if raw else DATA_DIR / "state.json"


def ensure_dirs() -> None:
    for d in (DATA_DIR, EXPORTS_DIR):
        d.mkdir(parents=True, exist_ok=True)
