"""Settings validation tests."""

import pytest
from pydantic import ValidationError

from app.core.config import PAGE_SIZE_LIMIT, Settings


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, jwt_secret="secret", **overrides)


def test_page_size_bounds_accept_the_limit() -> None:
    settings = _settings(max_page_size=PAGE_SIZE_LIMIT, default_page_size=20)
    assert settings.max_page_size == 100


@pytest.mark.parametrize("max_page_size", [0, PAGE_SIZE_LIMIT + 1, 1000])
def test_max_page_size_out_of_bounds_is_rejected(max_page_size: int) -> None:
    with pytest.raises(ValidationError, match="MAX_PAGE_SIZE"):
        _settings(max_page_size=max_page_size, default_page_size=1)


def test_default_page_size_above_max_is_rejected() -> None:
    with pytest.raises(ValidationError, match="DEFAULT_PAGE_SIZE"):
        _settings(max_page_size=10, default_page_size=20)


def test_missing_jwt_secret_is_rejected() -> None:
    with pytest.raises(ValidationError, match="JWT_SECRET"):
        Settings(_env_file=None, jwt_secret="")


def test_issuer_derived_from_supabase_url() -> None:
    settings = _settings(supabase_url="https://demo.supabase.co/")
    assert settings.expected_issuer == "https://demo.supabase.co/auth/v1"
