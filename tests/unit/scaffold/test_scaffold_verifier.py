"""Tests for static scaffold verification."""

from __future__ import annotations

from pathlib import Path

import pytest

from aidd.scaffold.errors import ScaffoldCancelledError
from aidd.scaffold.types import ResolvedPaths, VerifyResult
from aidd.scaffold.verifier import run_verify_scaffold, verify_scaffold


def test_valid_manifest(tmp_path: Path, make_scaffold) -> None:
    scaffold = make_scaffold(tmp_path / "scaffold")

    result = verify_scaffold(scaffold / "SCAFFOLD-MANIFEST.yml")

    assert result == VerifyResult(valid=True, errors=[])


def test_missing_manifest(tmp_path: Path) -> None:
    result = verify_scaffold(tmp_path / "SCAFFOLD-MANIFEST.yml")

    assert result.valid is False
    assert "not found" in result.errors[0]


def test_invalid_manifest_cites_parser_message(tmp_path: Path, make_scaffold) -> None:
    scaffold = make_scaffold(tmp_path / "scaffold", manifest="steps:\n  - bogus: step\n")

    result = verify_scaffold(scaffold / "SCAFFOLD-MANIFEST.yml")

    assert result.valid is False
    assert result.errors[0].startswith("Invalid manifest:")
    assert "unknown keys" in result.errors[0]


def test_empty_manifest_without_extension_would_do_nothing(tmp_path: Path, make_scaffold) -> None:
    scaffold = make_scaffold(tmp_path / "scaffold", manifest="steps: []\n")

    result = verify_scaffold(scaffold / "SCAFFOLD-MANIFEST.yml")

    assert result.valid is False
    assert "would do nothing" in result.errors[0]


def test_empty_manifest_with_extension_is_valid(tmp_path: Path, make_scaffold) -> None:
    scaffold = make_scaffold(
        tmp_path / "scaffold",
        manifest="steps: []\n",
        extension="console.log('all behaviour lives here');\n",
    )

    result = verify_scaffold(scaffold / "SCAFFOLD-MANIFEST.yml")

    assert result.valid is True
    assert result.errors == []


def test_bundled_scaffold_example_is_valid(tmp_path: Path, resolve_options) -> None:
    result = run_verify_scaffold("scaffold-example", folder=tmp_path, **resolve_options)

    assert result.valid is True


def test_run_verify_suppresses_readme_and_uses_folder(tmp_path: Path) -> None:
    calls: list[dict] = []
    manifest = tmp_path / "SCAFFOLD-MANIFEST.yml"

    def fake_resolve(type, **kwargs) -> ResolvedPaths:
        calls.append({"type": type, **kwargs})
        kwargs["log"]("README text that should go nowhere")
        return ResolvedPaths(
            extension_js_path=tmp_path / "bin" / "extension.js",
            manifest_path=manifest,
            readme_path=tmp_path / "README.md",
        )

    verified: list[Path] = []

    def fake_verify(path: Path) -> VerifyResult:
        verified.append(path)
        return VerifyResult(valid=True, errors=[])

    result = run_verify_scaffold(
        "scaffold-example",
        folder=tmp_path,
        resolve_fn=fake_resolve,
        verify_fn=fake_verify,
    )

    assert result.valid is True
    assert calls[0]["type"] == "scaffold-example"
    assert calls[0]["folder"] == tmp_path
    assert verified == [manifest]


def test_run_verify_propagates_resolution_errors(tmp_path: Path, resolve_options) -> None:
    resolve_options["confirm"] = lambda _message: False

    with pytest.raises(ScaffoldCancelledError):
        run_verify_scaffold("https://example.com/scaffold", folder=tmp_path, **resolve_options)
