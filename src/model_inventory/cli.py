from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from model_inventory.compat import evaluate_compatibility
from model_inventory.core.config import load_settings
from model_inventory.core.errors import InventoryError, ProbeError
from model_inventory.core.logs import configure_logging
from model_inventory.core.types import ModelDiscoveryResult, ModelSource, bytes_to_gb
from model_inventory.discovery import derive_name, discover_models
from model_inventory.ollama import detect_ollama
from model_inventory.probe import probe_resources

EXIT_INCOMPATIBLE = 1
EXIT_PROBE_FAILED = 2


def _print_json(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2))


def _render_inventory(result: ModelDiscoveryResult) -> str:
    lines: list[str] = []
    for model in result.models:
        fmt = model.format or "-"
        lines.append(
            f"{model.source.value:<10} {fmt:<12} {bytes_to_gb(model.size_bytes):>8.2f}GB  "
            f"{model.name}  ({model.path})"
        )
    lines.append(
        f"{result.total_count} models, {bytes_to_gb(result.total_size_bytes):.2f}GB total"
    )
    for error in result.errors:
        lines.append(f"error: {error}")
    return "\n".join(lines)


def _discover_command(args: argparse.Namespace) -> int:
    result = discover_models(load_settings())
    if args.json:
        _print_json(result.to_dict())
    else:
        print(_render_inventory(result))
    return 0


def _system_command(args: argparse.Namespace) -> int:
    try:
        resources = probe_resources(settings=load_settings())
    except ProbeError as exc:
        raise SystemExit(f"resource probe failed: {exc}") from exc
    _print_json(resources.to_dict())
    return 0


def _check_command(args: argparse.Namespace) -> int:
    if args.path:
        path = Path(args.path)
        try:
            size_bytes = path.stat().st_size
        except OSError as exc:
            raise SystemExit(f"cannot read {path}: {exc}") from exc
        name = args.name or derive_name(str(path), ModelSource.OTHER)
    else:
        if args.size_bytes is None or not args.name:
            raise SystemExit("check requires --path, or --size-bytes with --name")
        size_bytes = args.size_bytes
        name = args.name
    if size_bytes < 0:
        raise SystemExit("--size-bytes must be non-negative")

    try:
        verdict = evaluate_compatibility(size_bytes, name, settings=load_settings())
    except ProbeError as exc:
        print(f"resource probe failed: {exc}", file=sys.stderr)
        return EXIT_PROBE_FAILED
    _print_json(verdict.to_dict())
    return 0 if verdict.is_compatible else EXIT_INCOMPATIBLE


def _ollama_command(args: argparse.Namespace) -> int:
    _print_json(detect_ollama(load_settings()).to_dict())
    return 0


def _serve_command(args: argparse.Namespace) -> int:
    from model_inventory.api.app import serve

    return serve(args.host, args.port)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="model-inventory")
    parser.add_argument("--log-level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    discover_parser = subparsers.add_parser("discover", help="List local model files")
    discover_parser.add_argument("--json", action="store_true")
    discover_parser.set_defaults(func=_discover_command)

    system_parser = subparsers.add_parser("system", help="Show host resources")
    system_parser.set_defaults(func=_system_command)

    check_parser = subparsers.add_parser("check", help="Check whether a model fits this host")
    check_parser.add_argument("--path")
    check_parser.add_argument("--size-bytes", type=int)
    check_parser.add_argument("--name")
    check_parser.set_defaults(func=_check_command)

    ollama_parser = subparsers.add_parser("ollama", help="Detect an Ollama installation")
    ollama_parser.set_defaults(func=_ollama_command)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=9100)
    serve_parser.set_defaults(func=_serve_command)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level or load_settings().log_level)
    try:
        return args.func(args)
    except InventoryError as exc:
        raise SystemExit(f"model-inventory: {exc}") from exc


if __name__ == "__main__":
    raise SystemExit(main())
