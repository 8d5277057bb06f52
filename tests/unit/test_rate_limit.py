# tests/unit/test_rate_limit.py  # Ventana deslizante en memoria.

from apen_contact import rate_limit


def _clock(monkeypatch, t):
    monkeypatch.setattr(rate_limit, "_now", lambda: t)


def test_blocks_after_max_within_window(monkeypatch):
    _clock(monkeypatch, 1000.0)
    assert rate_limit.is_allowed("1.2.3.4:/api/contact", 2, 60)
    assert rate_limit.is_allowed("1.2.3.4:/api/contact", 2, 60)
    assert not rate_limit.is_allowed("1.2.3.4:/api/contact", 2, 60)
    assert rate_limit.is_allowed("5.6.7.8:/api/contact", 2, 60)


def test_window_expiry_allows_again(monkeypatch):
    _clock(monkeypatch, 1000.0)
    rate_limit.is_allowed("k", 1, 60)
    assert not rate_limit.is_allowed("k", 1, 60)
    _clock(monkeypatch, 1061.0)
    assert rate_limit.is_allowed("k", 1, 60)
    assert len(rate_limit._BUCKETS["k"]) == 1


def test_zero_limit_never_tracks_keys():
    assert rate_limit.is_allowed("k", 0, 60)
    assert rate_limit._BUCKETS == {}


def test_expired_keys_are_dropped_instead_of_accumulating(monkeypatch):
    monkeypatch.setattr(rate_limit, "_SWEEP_AT", 3)
    _clock(monkeypatch, 1000.0)
    for i in range(3):
        rate_limit.is_allowed(f"10.0.0.{i}:/api/contact", 5, 60)
    assert len(rate_limit._BUCKETS) == 3

    _clock(monkeypatch, 2000.0)
    rate_limit.is_allowed("10.0.0.99:/api/contact", 5, 60)
    assert list(rate_limit._BUCKETS) == ["10.0.0.99:/api/contact"]


def test_get_limits_from_env_falls_back_on_garbage(monkeypatch):
    monkeypatch.setenv("X_RATE_MAX", "abc")
    assert rate_limit.get_limits_from_env("X_RATE", 5, 600) == (5, 600)
    monkeypatch.setenv("X_RATE_MAX", "3")
    monkeypatch.setenv("X_RATE_WINDOW", "30")
    assert rate_limit.get_limits_from_env("X_RATE", 5, 600) == (3, 30)
