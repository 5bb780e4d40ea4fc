from __future__ import annotations

import argparse
import asyncio
import json
import logging
from dataclasses import asdict
from pathlib import Path

from linealign.alignment.mapping_generator import summarize_mappings
from linealign.config import Settings
from linealign.exceptions import LinealignError
from linealign.models.segment import Side
from linealign.models.serializers import (
    deserialize_external_annotation,
    serialize_publish_document,
    serialize_records,
)
from linealign.providers import get_annotation_provider
from linealign.utils.logging_setup import setup_logging
from linealign.views.memory import TextBufferView
from linealign.workspace import Workspace

logger = logging.getLogger("linealign.scripts.align_texts")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Align a source text and its translation line by line.")
    parser.add_argument("--source", required=True, help="Path to the source text")
    parser.add_argument("--target", required=True, help="Path to the target text")
    annotation = parser.add_mutually_exclusive_group()
    annotation.add_argument("--annotation", default=None, help="Path to an alignment annotation JSON file")
    annotation.add_argument(
        "--text-id",
        default=None,
        help="Fetch the alignment annotation for this id from the configured provider",
    )
    parser.add_argument(
        "--reconstruct",
        action="store_true",
        help="Treat --source/--target as raw contents and rebuild their lines from the annotation",
    )
    parser.add_argument(
        "--format",
        choices=["summary", "mappings", "publish"],
        default="summary",
        help="Output format",
    )
    parser.add_argument("--resolve", type=int, default=None, help="Resolve this document offset")
    parser.add_argument(
        "--side",
        choices=[s.value for s in Side],
        default=Side.SOURCE.value,
        help="Side of the --resolve offset",
    )
    return parser.parse_args()


def _read(path_str: str) -> str:
    path = Path(path_str)
    if not path.is_file():
        raise SystemExit(f"File not found: {path}")
    return path.read_text(encoding="utf-8")


async def _load_annotation(args: argparse.Namespace, settings: Settings):
    if args.annotation:
        payload = json.loads(_read(args.annotation))
        return deserialize_external_annotation(payload)
    if args.text_id:
        provider = get_annotation_provider(settings.annotation_config())
        try:
            return await provider.fetch_annotation(str(args.text_id))
        finally:
            await provider.close()
    return None


async def _run() -> int:
    args = _parse_args()
    settings = Settings()
    setup_logging(settings)

    source_text = _read(args.source)
    target_text = _read(args.target)
    ws = Workspace(TextBufferView("source", source_text), TextBufferView("target", target_text), settings)
    ws.capture_originals()

    try:
        annotation = await _load_annotation(args, settings)
    except (LinealignError, json.JSONDecodeError) as exc:
        raise SystemExit(f"Failed to load annotation: {exc}") from exc

    if annotation is not None:
        if args.reconstruct:
            ws.load_alignment(annotation, source_text, target_text)
        else:
            ws.set_external_annotation(annotation)
    elif args.reconstruct:
        raise SystemExit("--reconstruct requires --annotation or --text-id")

    if args.resolve is not None:
        side = Side(args.side)
        position = ws.resolve(int(args.resolve), side)
        print(json.dumps({"side": side.value, "click": int(args.resolve), "position": position}))
        return 0

    if args.format == "mappings":
        out = serialize_records(ws.generate_mappings())
    elif args.format == "publish":
        check, doc = ws.build_publish()
        if doc is None:
            logger.warning("publish blocked: %s", check.error)
            print(json.dumps({"is_valid": False, "error": check.error}, ensure_ascii=False))
            return 1
        out = serialize_publish_document(doc)
    else:
        out = asdict(summarize_mappings(ws.generate_mappings()))

    print(json.dumps(out, ensure_ascii=False, indent=2))
    return 0


def main() -> None:
    raise SystemExit(asyncio.run(_run()))


if __name__ == "__main__":
    main()
