"""
Command Line Interface
======================
    glyphpack <font> [<N>pt] [8bpp] [tex] [options]

Examples:
    # 8pt monochrome byte stream, writes DejaVuSans8pt1bpp.{hpp,cpp}
    glyphpack fonts/DejaVuSans.ttf

    # 12pt grayscale texture atlas
    glyphpack fonts/DejaVuSans.ttf 12pt 8bpp tex

    # Bitmap font, preview a few glyphs, also dump the atlas as PNG
    glyphpack spleen-6x12.bdf tex --preview "Ag°" --png atlas.png
"""

import argparse
import sys
from pathlib import Path

from .builder import build_font
from .config import BuildOptions, SpaceWidthPolicy, parse_mode_tokens, DEFAULT_DPI, DEFAULT_GAP_WIDTH
from .emit import DEFAULT_POSTLUDE, DEFAULT_PRELUDE, write_font
from .errors import GlyphPackError
from .raster import open_rasterizer
from .text.metadata import LayoutKind

EXIT_OK = 0
EXIT_FAILURE = 1


class UsageArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        sys.stderr.write(f"{self.prog}: error: {message}\n")
        sys.exit(EXIT_FAILURE)


def build_parser() -> argparse.ArgumentParser:
    parser = UsageArgumentParser(
        prog="glyphpack",
        description="Pack a font's glyphs into C++ byte arrays for embedded renderers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Mode words:
  <N>pt   point size (default: 8)
  8bpp    8-bit grayscale glyphs (default: 1-bit monochrome)
  tex     shelf-packed 2D texture atlas (default: linear byte stream)
        """,
    )
    parser.add_argument("font", type=Path, help="Input font file (TTF, OTF or BDF)")
    parser.add_argument("modes", nargs="*", metavar="mode",
                        help="Mode words: <N>pt, 8bpp, tex")

    parser.add_argument("--dpi", type=int, default=DEFAULT_DPI,
                        help=f"Rendering resolution (default: {DEFAULT_DPI})")
    parser.add_argument("--gap-width", type=int, default=DEFAULT_GAP_WIDTH,
                        help=f"Pixels between glyphs (default: {DEFAULT_GAP_WIDTH})")
    parser.add_argument("--space-width", type=int,
                        help="Fixed space advance in pixels (default: size // 10 + 1)")
    parser.add_argument("--output-dir", "-o", type=Path,
                        help="Output directory (default: beside the font)")
    parser.add_argument("--prelude", default=DEFAULT_PRELUDE,
                        help=f"File included at the top of the output (default: {DEFAULT_PRELUDE})")
    parser.add_argument("--postlude", default=DEFAULT_POSTLUDE,
                        help=f"File included at the bottom of the output (default: {DEFAULT_POSTLUDE})")
    parser.add_argument("--preview", type=str,
                        help="Preview specific characters after packing")
    parser.add_argument("--png", type=Path,
                        help="Also write the packed data as a PNG image")
    parser.add_argument("--dry-run", action="store_true",
                        help="Pack and report, but write no files")
    return parser


def run(args) -> None:
    """Build and emit one font from parsed arguments."""
    # imported here so a usage error never pays for Pillow
    from .preview import png_bytes, print_preview

    point_size, depth, layout = parse_mode_tokens(args.modes)
    options = BuildOptions(
        args.font,
        point_size=point_size,
        dpi=args.dpi,
        depth=depth,
        layout=layout,
        gap_width=args.gap_width,
        space=SpaceWidthPolicy(fixed=args.space_width),
        output_dir=args.output_dir,
    )

    print(f"Loading font: {args.font} ({point_size}pt, {depth} bpp, "
          f"{LayoutKind.name(layout)})")
    with open_rasterizer(options.font_path, point_size, options.dpi) as rasterizer:
        font = build_font(rasterizer, options)

    if args.preview:
        print_preview(font, args.preview)

    if args.dry_run:
        print("Dry run, no files written")
        return

    # the image is encoded up front and committed together with the sources
    extra = {args.png: png_bytes(font)} if args.png else None
    write_font(font, options.output_dir, args.prelude, args.postlude, extra)


def main(argv=None) -> int:
    """
    Entry point.

    Returns:
        Process exit status
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    if not argv:
        parser.print_usage(sys.stderr)
        return EXIT_FAILURE

    args = parser.parse_args(argv)
    try:
        run(args)
    except GlyphPackError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
