"""Command-line front end for the documentation pipeline."""

import argparse
import logging
from pathlib import Path

from dotnetdocs.documentation_manager import DocumentationManager
from dotnetdocs.errors import DocumentationError
from dotnetdocs.load_config import load_config
from dotnetdocs.project_context import ProjectContext
from dotnetdocs.renderers import RENDERERS
from dotnetdocs.transformers import MarkdownXmlTransformer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="dotnetdocs",
        description=(
            "Generate API documentation from a .NET assembly (or DocFX metadata) "
            "and its XML documentation comments."
        ),
    )
    ap.add_argument(
        "assemblies",
        nargs="+",
        type=Path,
        help="Assembly (.dll/.exe) or directory of DocFX ManagedReference *.yml files",
    )
    ap.add_argument(
        "--xml",
        action="append",
        type=Path,
        default=[],
        help="Documentation comment file, one per assembly in order (default: next to it)",
    )
    ap.add_argument("--config", type=Path, help="Path to a YAML configuration file")
    ap.add_argument("-o", "--output", type=Path, help="Output directory")
    ap.add_argument("--conceptual", type=Path, help="Root of conceptual content")
    ap.add_argument(
        "--renderer",
        action="append",
        choices=sorted(RENDERERS),
        default=[],
        help="Output format; repeat for several (default: markdown)",
    )
    ap.add_argument(
        "--include",
        action="append",
        default=[],
        help="Accessibility to document (Public, Protected, Internal, Private); repeatable",
    )
    ap.add_argument(
        "--show-placeholders",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Keep conceptual files that still carry the placeholder marker",
    )
    ap.add_argument(
        "--create-placeholders",
        action="store_true",
        help="Write conceptual placeholder files where none exist",
    )
    ap.add_argument(
        "--no-external-references",
        action="store_true",
        help="Leave extension methods on external types where they are declared",
    )
    ap.add_argument(
        "--include-object-members",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="List members inherited from System.Object",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def context_from_args(args: argparse.Namespace) -> ProjectContext:
    """Config file values, overridden by command-line flags."""
    config = load_config(args.config)
    if args.include:
        config["included_members"] = args.include
    if args.output:
        config["output"]["path"] = str(args.output)
    if args.conceptual:
        config["conceptual"]["path"] = str(args.conceptual)
    if args.show_placeholders is not None:
        config["conceptual"]["show_placeholders"] = args.show_placeholders
    if args.create_placeholders:
        config["conceptual"]["create_placeholders"] = True
    if args.no_external_references:
        config["model"]["create_external_type_references"] = False
    if args.include_object_members is not None:
        config["model"]["include_system_object_inheritance"] = args.include_object_members
    return ProjectContext.from_config(config)


def run(args: argparse.Namespace) -> int:
    context = context_from_args(args)
    xml_paths = list(args.xml) + [None] * (len(args.assemblies) - len(args.xml))
    pairs = list(zip(args.assemblies, xml_paths))

    renderers = [RENDERERS[name](context) for name in args.renderer or ["markdown"]]
    manager = DocumentationManager(
        context,
        transformers=[MarkdownXmlTransformer(context)],
        renderers=renderers,
    )
    model = manager.process(pairs)

    for diagnostic in manager.diagnostics:
        if diagnostic.is_warning:
            logger.warning("%s", diagnostic)
    types = sum(len(ns.types) for ns in model.namespaces)
    print(
        f"Documented {types} types in {len(model.namespaces)} namespaces into: "
        f"{Path(context.output_path).resolve()}"
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and run the pipeline."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )
    try:
        return run(args)
    except (DocumentationError, FileNotFoundError, ValueError, TypeError) as exc:
        logger.error("%s", exc)
        return 1
