"""Translate a JSON locale file into one file per target language."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Mapping, Sequence

from shipi18n_proxy.integrations.shipi18n import (
    ConfigProvider,
    ExecutionContext,
    Shipi18nClient,
    Shipi18nError,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shipi18n-translate-file",
        description=(
            "Translate a JSON locale file with the Shipi18n API and write one "
            "<language>.json file per target language."
        ),
    )
    parser.add_argument("input", type=Path, help="Path to the source locale JSON file.")
    parser.add_argument(
        "--target",
        "-t",
        dest="targets",
        nargs="+",
        required=True,
        help="Target language codes, e.g. --target es fr de.",
    )
    parser.add_argument(
        "--source",
        default="en",
        help="Language code of the source file (default: en).",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for translated files (default: the input file's directory).",
    )
    parser.add_argument(
        "--no-placeholders",
        action="store_true",
        help="Do not ask the API to preserve {placeholders}.",
    )
    parser.add_argument(
        "--no-pluralization",
        action="store_true",
        help="Do not generate CLDR plural variants.",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the combined translations as JSON instead of writing files.",
    )
    return parser


def load_locale_file(path: Path) -> Any:
    """Read and decode ``path``; raises ValueError when it is not valid JSON."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc


def write_translations(translations: Mapping[str, Any], output_dir: Path) -> list[Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for language, document in translations.items():
        target = output_dir / f"{language}.json"
        target.write_text(
            json.dumps(document, ensure_ascii=False, indent=2) + "\n",
            encoding="utf-8",
        )
        written.append(target)
    return written


async def _run(args: argparse.Namespace, content: Any) -> int:
    client = Shipi18nClient(ConfigProvider(ExecutionContext.TRUSTED))
    try:
        translations = await client.translate_locale_file(
            content,
            source_language=args.source,
            target_languages=args.targets,
            preserve_placeholders=not args.no_placeholders,
            enable_pluralization=not args.no_pluralization,
        )
    except Shipi18nError as exc:
        print(f"Translation failed: {exc}", file=sys.stderr)
        return 1

    missing = [language for language in args.targets if language not in translations]
    if missing:
        print(f"No translation returned for: {', '.join(missing)}", file=sys.stderr)

    if args.stdout:
        print(json.dumps(translations, ensure_ascii=False, indent=2))
        return 0

    output_dir = args.output_dir or args.input.parent
    for path in write_translations(translations, output_dir):
        print(f"Wrote {path}")
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        content = load_locale_file(args.input)
    except (OSError, ValueError) as exc:
        parser.error(str(exc))
    exit_code = asyncio.run(_run(args, content))
    raise SystemExit(exit_code)


if __name__ == "__main__":  # pragma: no cover - script entry point
    main()
