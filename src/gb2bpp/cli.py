"""Command line interface for the Game Boy 2bpp converter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, List

from .converter import BYTES_PER_TILE, ConversionError, convert_png_to_2bpp

OUTPUT_EXTENSION = "2bpp"


def iter_pngs(paths: Iterable[str]) -> List[Path]:
    results: List[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_file():
            if path.suffix.lower() != ".png":
                raise ConversionError(f"Unsupported file type (expected .png): {path}")
            results.append(path)
        elif path.is_dir():
            for entry in sorted(path.iterdir()):
                if entry.is_file() and entry.suffix.lower() == ".png":
                    results.append(entry)
        else:
            raise ConversionError(f"Input path does not exist: {path}")
    if not results:
        raise ConversionError("No PNG files were found in the provided inputs.")
    return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gb2bpp",
        description=(
            "Convert PNG files into Game Boy 2bpp tile data (.2bpp).\n"
            "Pixels are reduced to four shades by luminance: 0-63 black, 64-127 dark gray,\n"
            "128-191 light gray, 192-255 white. Width and height must be multiples of 8."
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        help="PNG files or folders containing PNGs (non-recursive)",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        required=True,
        help="Destination directory for .2bpp files",
    )
    parser.add_argument("--prefix", default="", help="Optional prefix for output filenames")
    parser.add_argument("--suffix", default="", help="Optional suffix for output filenames")
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite existing files without prompting",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not print a line for each written file",
    )
    return parser


def ensure_unique_names(paths: List[Path], prefix: str, suffix: str) -> List[str]:
    names: List[str] = []
    seen = set()
    for path in paths:
        name = f"{prefix}{path.stem}{suffix}.{OUTPUT_EXTENSION}"
        if name in seen:
            raise ConversionError(f"Duplicate output name would occur: {name}")
        seen.add(name)
        names.append(name)
    return names


def write_outputs(
    inputs: List[Path],
    names: List[str],
    output_dir: Path,
    force: bool,
    quiet: bool = False,
) -> None:
    conflicts = []
    for name in names:
        target = output_dir / name
        if target.exists() and not force:
            conflicts.append(str(target))
    if conflicts:
        raise ConversionError(
            "Output files already exist (use --force to overwrite):\n" + "\n".join(conflicts)
        )

    converted = [convert_png_to_2bpp(src) for src in inputs]

    output_dir.mkdir(parents=True, exist_ok=True)

    for name, data in zip(names, converted):
        target = output_dir / name
        target.write_bytes(data)
        if not quiet:
            print(f"wrote {target} ({len(data) // BYTES_PER_TILE} tiles)")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        inputs = iter_pngs(args.inputs)
        names = ensure_unique_names(inputs, args.prefix, args.suffix)
        write_outputs(inputs, names, Path(args.output_dir), args.force, args.quiet)
        return 0
    except ConversionError as exc:
        print(exc, file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
