"""Tests for the command-line front end."""

from pathlib import Path

import pytest
import yaml

from dotnetdocs.accessibility import Accessibility
from dotnetdocs.cli import build_parser, context_from_args, main
from dotnetdocs.file_naming import NamespaceMode


def test_main_documents_fixture(shared_path: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """A run over DocFX metadata writes Markdown pages and reports a summary."""
    out = tmp_path / "site"
    assert main([str(shared_path), "-o", str(out)]) == 0
    assert "Documented" in capsys.readouterr().out
    assert (out / "api-reference" / "toc.yml").exists()
    assert (out / "api-reference" / "CloudNimble-DotNetDocs-Tests-Shared-BasicScenarios.SimpleClass.md").exists()


def test_main_multiple_renderers(shared_path: Path, tmp_path: Path) -> None:
    out = tmp_path / "site"
    assert main([str(shared_path), "-o", str(out), "--renderer", "yaml", "--renderer", "json"]) == 0
    assert (out / "api-reference" / "documentation.yaml").exists()
    assert (out / "api-reference" / "documentation.json").exists()
    assert not (out / "api-reference" / "toc.yml").exists()


def test_main_missing_assembly(tmp_path: Path) -> None:
    assert main([str(tmp_path / "Missing.dll"), "-o", str(tmp_path)]) == 1


def test_unknown_renderer_is_rejected() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["Demo.dll", "--renderer", "pdf"])


def test_context_from_args_overrides_config(tmp_path: Path) -> None:
    """Command-line flags win over the configuration file."""
    config = tmp_path / "dotnetdocs.yml"
    config.write_text(
        yaml.safe_dump(
            {
                "included_members": ["Public"],
                "output": {"path": "from-config", "namespace_mode": "folder"},
                "conceptual": {"show_placeholders": True},
            }
        ),
        encoding="utf-8",
    )
    args = build_parser().parse_args(
        [
            "Demo.dll",
            "--config",
            str(config),
            "-o",
            str(tmp_path / "out"),
            "--conceptual",
            str(tmp_path / "conceptual"),
            "--include",
            "Public",
            "--include",
            "Protected",
            "--no-show-placeholders",
            "--create-placeholders",
            "--no-external-references",
            "--no-include-object-members",
        ]
    )
    context = context_from_args(args)
    assert context.output_path == str(tmp_path / "out")
    assert context.conceptual_path == str(tmp_path / "conceptual")
    assert context.included_members == [Accessibility.PUBLIC, Accessibility.PROTECTED]
    assert not context.show_placeholders
    assert context.create_placeholder_files
    assert not context.create_external_type_references
    assert not context.include_system_object_inheritance
    assert context.file_naming_options.namespace_mode == NamespaceMode.FOLDER


def test_context_from_args_defaults() -> None:
    args = build_parser().parse_args(["Demo.dll"])
    context = context_from_args(args)
    assert context.output_path == "docs"
    assert context.show_placeholders
    assert context.include_system_object_inheritance
    assert args.renderer == []
    assert args.xml == []
