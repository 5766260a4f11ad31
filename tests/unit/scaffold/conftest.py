"""Shared fixtures for scaffold pipeline tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from aidd.config import AiddEnvironment

PLACEHOLDER_MANIFEST = "steps:\n  - run: echo hello\n"
PLACEHOLDER_README = "# Remote Scaffold\n"


def write_scaffold(
    root: Path,
    *,
    manifest: str | None = PLACEHOLDER_MANIFEST,
    readme: str | None = PLACEHOLDER_README,
    extension: str | None = None,
) -> Path:
    """Write scaffold artifacts into ``root`` and return it."""
    root.mkdir(parents=True, exist_ok=True)
    if manifest is not None:
        (root / "SCAFFOLD-MANIFEST.yml").write_text(manifest, encoding="utf-8")
    if readme is not None:
        (root / "README.md").write_text(readme, encoding="utf-8")
    if extension is not None:
        (root / "bin").mkdir(exist_ok=True)
        (root / "bin" / "extension.js").write_text(extension, encoding="utf-8")
    return root


class FakeDownload:
    """Download double that records calls and writes placeholder artifacts."""

    def __init__(self, *, manifest: str | None = PLACEHOLDER_MANIFEST) -> None:
        self.calls: list[tuple[str, Path]] = []
        self.manifest = manifest

    def __call__(self, url: str, dest: Path) -> None:
        self.calls.append((url, dest))
        write_scaffold(dest, manifest=self.manifest, extension="console.log('hi');\n")


@pytest.fixture
def make_scaffold() -> Callable[..., Path]:
    return write_scaffold


@pytest.fixture
def make_download() -> type[FakeDownload]:
    return FakeDownload


@pytest.fixture
def no_env() -> AiddEnvironment:
    return AiddEnvironment()


@pytest.fixture
def fake_download() -> FakeDownload:
    return FakeDownload()


@pytest.fixture
def always_confirm() -> Callable[[str], bool]:
    return lambda _message: True


@pytest.fixture
def resolve_options(no_env, always_confirm) -> dict:
    """Keyword arguments that keep resolve_extension off the network and terminal."""

    def unexpected_release(owner: str, repo: str) -> str:
        raise AssertionError(f"release lookup not expected for {owner}/{repo}")

    return {
        "env": no_env,
        "confirm": always_confirm,
        "resolve_release": unexpected_release,
        "read_config": lambda: {},
        "log": lambda _message: None,
    }
