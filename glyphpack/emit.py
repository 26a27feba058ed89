"""
C++ Source Emitter
==================
Writes a packed font as a header/source pair of array initializers.

Header (<name>.hpp):
    extern declaration of the font descriptor

Source (<name>.cpp):
    <name>Data[]    packed bytes, one glyph row (linear) or atlas row per line
    <name>Glyphs[]  one {X, Y} metadata word pair per glyph
    <name>          descriptor: gap width, line height, data, size or atlas
                    dimensions, glyphs, glyph count

All numbers are integers. Both files appear together or not at all: they
are written to temporaries beside the targets and renamed when complete.
"""

import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Union

from .buffer.bitmap import get_pixel
from .errors import OutputError
from .text.metadata import LayoutKind

DEFAULT_PRELUDE = "header.hpp"
DEFAULT_POSTLUDE = "footer.hpp"

# Atlas rows are long; wrap them at this many bytes per line
_BYTES_PER_LINE = 16

# Coverage ramp for 8-bit row comments, no ink to full ink
_SHADES = " .:+#"


def _hex_bytes(data) -> str:
    return "".join(f"0x{b:02x}, " for b in data)


def _art(data: bytes, width: int, depth: int, y: int) -> str:
    if depth == 1:
        return "".join("#" if get_pixel(data, width, 1, x, y) else " " for x in range(width))
    top = len(_SHADES) - 1
    return "".join(_SHADES[get_pixel(data, width, 8, x, y) * top // 255] for x in range(width))


# =============================================================================
# Source Text
# =============================================================================


def _linear_data_lines(font) -> List[str]:
    lines = []
    for g in font.glyphs:
        if not g.printable:
            continue
        lines.append(f"\t// {g.key.label}")
        stride = g.row_bytes
        for y in range(g.height):
            row = g.data[y * stride:(y + 1) * stride]
            lines.append(f"\t{_hex_bytes(row)}// {_art(g.data, g.width, g.depth, y)}")
    return lines


def _atlas_data_lines(font) -> List[str]:
    lines = []
    stride = len(font.data) // font.atlas_height if font.atlas_height else 0
    for y in range(font.atlas_height):
        row = font.data[y * stride:(y + 1) * stride]
        lines.append(f"\t// row {y}")
        for i in range(0, len(row), _BYTES_PER_LINE):
            lines.append(f"\t{_hex_bytes(row[i:i + _BYTES_PER_LINE]).rstrip()}")
    return lines


def render_source(font, prelude: str = DEFAULT_PRELUDE,
                  postlude: str = DEFAULT_POSTLUDE) -> str:
    """
    Render the source file text.

    Args:
        font: FontData
        prelude: File included before the definitions
        postlude: File included after the definitions

    Returns:
        Complete file contents
    """
    name = font.name
    atlas = font.kind == LayoutKind.ATLAS
    font_type = "TextureFont" if atlas else "Font"

    out = [f'#include "{prelude}"', ""]

    out.append(f"const uint8_t {name}Data[] = {{")
    out.extend(_atlas_data_lines(font) if atlas else _linear_data_lines(font))
    out.append("};")
    out.append("")

    out.append(f"const {font_type}::Glyph {name}Glyphs[] = {{")
    for g, (x_word, y_word) in zip(font.glyphs, font.words):
        out.append(f"\t{{0x{x_word:08x}, 0x{y_word:08x}}}, // {g.key.label}")
    out.append("};")
    out.append("")

    if atlas:
        size = f"{font.atlas_width}, {font.atlas_height}"
    else:
        size = f"{font.data_size}"
    out.append(f"extern const {font_type} {name} = {{")
    out.append(f"\t{font.gap_width}, {font.line_height}, {name}Data, {size}, "
               f"{name}Glyphs, {font.glyph_count},")
    out.append("};")
    out.append("")
    out.append(f'#include "{postlude}"')
    out.append("")
    return "\n".join(out)


def render_header(font, prelude: str = DEFAULT_PRELUDE,
                  postlude: str = DEFAULT_POSTLUDE) -> str:
    """Render the header file text."""
    font_type = "TextureFont" if font.kind == LayoutKind.ATLAS else "Font"
    return "\n".join([
        "#pragma once",
        "",
        f'#include "{prelude}"',
        "",
        f"extern const {font_type} {font.name};",
        "",
        f'#include "{postlude}"',
        "",
    ])


# =============================================================================
# Writing
# =============================================================================


def write_atomic(files: Dict[Path, Union[str, bytes]]) -> List[Path]:
    """
    Write several files so that either all or none are replaced.

    Every file is staged beside its target before the first one is
    renamed into place. Target directories must already exist.

    Args:
        files: Mapping of target path to contents (text or bytes)

    Returns:
        Target paths in the order given

    Raises:
        OutputError: If a file cannot be staged or renamed
    """
    staged = []
    target = None
    try:
        for target, content in files.items():
            path = Path(target)
            if isinstance(content, bytes):
                f = tempfile.NamedTemporaryFile("wb", dir=path.parent, prefix=f".{path.name}.",
                                                suffix=".tmp", delete=False)
            else:
                f = tempfile.NamedTemporaryFile("w", encoding="utf-8", newline="\n",
                                                dir=path.parent, prefix=f".{path.name}.",
                                                suffix=".tmp", delete=False)
            with f:
                staged.append((Path(f.name), path))
                f.write(content)
        for tmp, target in staged:
            os.replace(tmp, target)
    except BaseException as e:
        for tmp, _ in staged:
            if tmp.exists():
                tmp.unlink()
        if isinstance(e, OSError):
            raise OutputError(f"Unable to write {target}: {e.strerror or e}") from e
        raise
    return [Path(p) for p in files]


def write_font(font, output_dir, prelude: str = DEFAULT_PRELUDE,
               postlude: str = DEFAULT_POSTLUDE,
               extra: Optional[Dict[Path, bytes]] = None) -> List[Path]:
    """
    Emit <name>.hpp and <name>.cpp into output_dir.

    Args:
        font: FontData
        output_dir: Destination directory, created if missing
        prelude: File included at the top of both files
        postlude: File included at the bottom of both files
        extra: Further artifacts (e.g. a PNG) committed together with the
            source pair

    Returns:
        [header_path, source_path, *extra paths]
    """
    output_dir = Path(output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(f"Unable to create {output_dir}: {e.strerror or e}") from e

    files = {
        output_dir / f"{font.name}.hpp": render_header(font, prelude, postlude),
        output_dir / f"{font.name}.cpp": render_source(font, prelude, postlude),
    }
    files.update(extra or {})

    paths = write_atomic(files)
    for path in paths:
        size_kb = path.stat().st_size / 1024
        print(f"Created: {path} ({size_kb:.1f} KB)")
    return paths
