"""Pytest configuration and fixtures for aidd tests."""
import pytest


@pytest.fixture(autouse=True)
def _isolate_aidd_environment(monkeypatch):
    """Keep a developer's scaffold override and GitHub token out of every test."""
    monkeypatch.delenv("AIDD_CUSTOM_CREATE_URI", raising=False)
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
