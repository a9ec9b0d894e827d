"""Tests for profile loading."""
from __future__ import annotations

import pytest

from internboard.config import get_state_path, load_profile
from internboard.filters import FilterConfig


def test_missing_profile_is_empty(tmp_path) -> None:
    assert load_profile(tmp_path / "nope.yaml") == {}


def test_profile_keywords_are_normalized(tmp_path) -> None:
    path = tmp_path / "profile.yaml"
    path.write_text(
        "resume_keywords:\n  - Python\n  - ' Rust '\n  - ''\n"
        "default_filters:\n  job_type: quant\n  posted_within: 30\n",
        encoding="utf-8",
    )
    profile = load_profile(path)
    assert profile["resume_keywords"] == ["python", "rust"]
    config = FilterConfig.from_dict(profile["default_filters"])
    assert (config.job_type, config.posted_within) == ("quant", 30)


def test_profile_without_filters_gets_empty_defaults(tmp_path) -> None:
    path = tmp_path / "profile.yaml"
    path.write_text("resume_keywords: [go]\n", encoding="utf-8")
    assert load_profile(path)["default_filters"] == {}


def test_non_mapping_profile_is_rejected(tmp_path) -> None:
    path = tmp_path / "profile.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_profile(path)


def test_state_path_from_env(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("STATE_PATH", str(tmp_path / "s.json"))
    assert get_state_path() == tmp_path / "s.json"
    monkeypatch.delenv("STATE_PATH")
    assert get_state_path().name == "state.json"
