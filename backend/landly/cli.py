#!/usr/bin/env python3
"""
Landly command line: validate, render, generate and publish landing schemas.

Usage:
  # Normalize an AI-produced schema and list the auto-fixes applied
  landly validate schema.json

  # Render a normalized schema into <RENDER_OUTPUT_DIR>/<project_id>
  landly render 1a2b3c4d schema.json --output-dir ./builds

  # Generate a schema with the offline mock provider
  landly generate "Онлайн-школа английского" --payment-url https://pay.example

  # Render and upload to the configured publisher (STORAGE_BACKEND=local|s3)
  landly publish 1a2b3c4d "My Shop" schema.json

Exit codes:
  0 - success
  1 - schema, render, generation or publish error
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from landly.config import settings
from landly.exceptions import AppException
from landly.services.ai_client import MockAIClient
from landly.services.generate_service import GenerateService
from landly.services.page_schema_validator import PageSchemaValidator
from landly.services.publish_service import PublishService
from landly.services.static_renderer import StaticRenderer
from landly.services.storage import get_publisher
from landly.utils.logging import configure_logging


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as handle:
        return handle.read()


def _print_json(payload) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def cmd_validate(args: argparse.Namespace, validator: PageSchemaValidator) -> int:
    result = validator.validate(_read_source(args.schema))
    _print_json({"schema": json.loads(result.normalized), "auto_fixes": result.auto_fixes})
    return 0


def cmd_render(args: argparse.Namespace, validator: PageSchemaValidator) -> int:
    renderer = StaticRenderer(output_root=args.output_dir)
    build_dir = renderer.render_static(args.project_id, _read_source(args.schema))
    _print_json({"build_dir": build_dir})
    return 0


def cmd_generate(args: argparse.Namespace, validator: PageSchemaValidator) -> int:
    service = GenerateService(MockAIClient(), validator)
    result = service.generate(args.prompt, args.payment_url)
    _print_json({"schema": json.loads(result.schema_json), "auto_fixes": result.auto_fixes})
    return 0


def cmd_publish(args: argparse.Namespace, validator: PageSchemaValidator) -> int:
    service = PublishService(StaticRenderer(output_root=args.output_dir), get_publisher())
    result = service.publish(args.project_id, args.name, _read_source(args.schema))
    _print_json({
        "subdomain": result.subdomain,
        "public_url": result.public_url,
        "published_at": result.published_at,
        "files_uploaded": result.files_uploaded,
    })
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="landly", description="Landing page schema tools")
    sub = p.add_subparsers(dest="command", required=True)

    v = sub.add_parser("validate", help="Validate and normalize a schema file ('-' for stdin)")
    v.add_argument("schema")
    v.set_defaults(handler=cmd_validate)

    r = sub.add_parser("render", help="Render a normalized schema to a static build directory")
    r.add_argument("project_id")
    r.add_argument("schema")
    r.add_argument("--output-dir", default=None, help="Build root (default: RENDER_OUTPUT_DIR)")
    r.set_defaults(handler=cmd_render)

    g = sub.add_parser("generate", help="Generate a schema with the mock AI provider")
    g.add_argument("prompt")
    g.add_argument("--payment-url", default="", help="Payment link used for CTA buttons")
    g.set_defaults(handler=cmd_generate)

    pub = sub.add_parser("publish", help="Render and upload a schema to the configured publisher")
    pub.add_argument("project_id")
    pub.add_argument("name", help="Project name used for the subdomain")
    pub.add_argument("schema")
    pub.add_argument("--output-dir", default=None, help="Build root (default: RENDER_OUTPUT_DIR)")
    pub.set_defaults(handler=cmd_publish)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings.log_level_value)
    try:
        validator = PageSchemaValidator()
        return args.handler(args, validator)
    except AppException as exc:
        print(json.dumps(exc.to_dict(), ensure_ascii=False), file=sys.stderr)
        return 1
    except OSError as exc:
        print(json.dumps({"error_code": "IO_ERROR", "message": str(exc), "details": {}}), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
