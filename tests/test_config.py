"""Tests for settings."""

import pytest
from pydantic import ValidationError

from svg2polylines.config import DEFAULT_FLATTENING_TOLERANCE, Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("SVG2POLYLINES_FLATTENING_TOLERANCE", raising=False)
    monkeypatch.delenv("SVG2POLYLINES_PREFILTER_TOLERANCE", raising=False)
    settings = Settings(_env_file=None)
    assert settings.flattening_tolerance == DEFAULT_FLATTENING_TOLERANCE == 0.15
    assert settings.prefilter_tolerance is None


def test_environment_override(monkeypatch):
    monkeypatch.setenv("SVG2POLYLINES_FLATTENING_TOLERANCE", "0.5")
    monkeypatch.setenv("SVG2POLYLINES_PREFILTER_TOLERANCE", "0.01")
    settings = Settings(_env_file=None)
    assert settings.flattening_tolerance == 0.5
    assert settings.prefilter_tolerance == 0.01


@pytest.mark.parametrize("field", ["flattening_tolerance", "simplify_tolerance"])
def test_non_positive_tolerance_rejected(field):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: 0})


def test_prefilter_zero_allowed_negative_rejected():
    assert Settings(_env_file=None, prefilter_tolerance=0).prefilter_tolerance == 0
    with pytest.raises(ValidationError):
        Settings(_env_file=None, prefilter_tolerance=-0.1)
