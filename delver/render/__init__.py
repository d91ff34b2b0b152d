"""Rendering collaborators. They read a finished Dungeon and never mutate it."""
from __future__ import annotations
import os

from .ascii import render_ascii
from .json_dump import dungeon_to_dict, render_json
from .obj import build_mesh, render_mtl, render_obj
from .svg import render_svg

FORMATS = ("svg", "json", "ascii", "obj")
_EXTENSIONS = {".svg": "svg", ".json": "json", ".txt": "ascii", ".obj": "obj"}


def format_for(filename: str, fmt: str | None = None) -> str:
    if fmt:
        fmt = fmt.lower()
        if fmt not in FORMATS:
            raise ValueError(f"Unknown output format `{fmt}`; expected one of {', '.join(FORMATS)}")
        return fmt
    ext = os.path.splitext(filename)[1].lower()
    return _EXTENSIONS.get(ext, "svg")


def render(dungeon, fmt: str, cell_size: int = 32) -> str:
    if fmt == "svg":
        return render_svg(dungeon, cell_size)
    if fmt == "json":
        return render_json(dungeon)
    if fmt == "obj":
        return render_obj(dungeon)
    return render_ascii(dungeon, show_numbers=True)


def write_output(dungeon, filename: str, fmt: str | None = None, cell_size: int = 32) -> str:
    """Render ``dungeon`` and write it to ``filename``. Returns the format used.

    The obj format writes ``<base>.obj`` and its ``<base>.mtl`` material
    library side by side, whatever extension ``filename`` carries.
    """
    fmt = format_for(filename, fmt)
    if fmt == "obj":
        base = os.path.splitext(filename)[0]
        mtl_path = base + ".mtl"
        with open(mtl_path, "w", encoding="utf-8") as f:
            f.write(render_mtl())
        with open(base + ".obj", "w", encoding="utf-8") as f:
            f.write(render_obj(dungeon, mtl_name=os.path.basename(mtl_path)))
        return fmt
    with open(filename, "w", encoding="utf-8") as f:
        f.write(render(dungeon, fmt, cell_size))
    return fmt


__all__ = [
    "FORMATS",
    "build_mesh",
    "dungeon_to_dict",
    "format_for",
    "render",
    "render_ascii",
    "render_json",
    "render_mtl",
    "render_obj",
    "render_svg",
    "write_output",
]
