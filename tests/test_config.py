from __future__ import annotations

import logging
from pathlib import Path

import pytest

from pairmath.config import EngineConfig, default_params_path, load_config, resolve_config


def test_packaged_params_match_dataclass_defaults() -> None:
    assert default_params_path().is_file()
    assert load_config(environ={}) == EngineConfig()


def test_env_override() -> None:
    cfg = load_config(environ={"PAIRMATH_MAX_FEE_BPS": "80", "PAIRMATH_FEE_CURVE": "exponential"})
    assert cfg.max_fee_bps == 80
    assert cfg.fee_curve == "exponential"


def test_bad_env_value_falls_back(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="pairmath.config"):
        cfg = load_config(environ={"PAIRMATH_BASE_FEE_BPS": "thirty"})
    assert cfg.base_fee_bps == 30
    assert "PAIRMATH_BASE_FEE_BPS" in caplog.text


def test_env_value_still_validated() -> None:
    with pytest.raises(ValueError):
        load_config(environ={"PAIRMATH_FEE_CURVE": "quadratic"})


def test_config_validation() -> None:
    with pytest.raises(ValueError):
        EngineConfig(base_fee_bps=200, max_fee_bps=100)
    with pytest.raises(ValueError):
        EngineConfig(max_route_hops=0)
    with pytest.raises(TypeError):
        EngineConfig(max_fee_bps="100")  # type: ignore[arg-type]


def test_resolve_config_prefers_explicit() -> None:
    cfg = EngineConfig(base_fee_bps=1)
    assert resolve_config(cfg) is cfg


# ---------------------------------------------------------------------------
# params files
# ---------------------------------------------------------------------------

def test_custom_params_file(tmp_path: Path) -> None:
    p = tmp_path / "engine.yaml"
    p.write_text("version: 1\nfees:\n  base_fee_bps: 10\n  max_fee_bps: 50\n", encoding="utf-8")
    cfg = load_config(p, environ={})
    assert cfg.base_fee_bps == 10
    assert cfg.max_fee_bps == 50
    assert cfg.max_route_hops == EngineConfig().max_route_hops


def test_unknown_parameter_rejected(tmp_path: Path) -> None:
    p = tmp_path / "engine.yaml"
    p.write_text("version: 1\nfees:\n  surge_bps: 10\n", encoding="utf-8")
    with pytest.raises(ValueError, match="unknown"):
        load_config(p, environ={})


def test_wrong_version_rejected(tmp_path: Path) -> None:
    p = tmp_path / "engine.yaml"
    p.write_text("version: 2\nfees:\n  base_fee_bps: 10\n", encoding="utf-8")
    with pytest.raises(ValueError, match="version"):
        load_config(p, environ={})
