"""Wavefront OBJ/MTL export of a finished dungeon.

Every solid is an axis-aligned box: a floor slab per room and per corridor
cell, a full-height block per rock cell, a slab for each closed door, plus an
optional subfloor under the whole map and an optional roof over it. The grid
maps onto the x/z plane (grid y grows along +z), y is up, and the model is
centred on the origin.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..dungeon.tiles import CORRIDOR, DOOR_CLOSED, EAST, NORTH, ROCK, SOUTH, WEST

CELL_SIZE = 2.0
WALL_HEIGHT = 4.0
DOOR_HEIGHT = WALL_HEIGHT * 0.9
FLOOR_DEPTH = CELL_SIZE / 1.25
DOOR_THICKNESS = 1.2
WALL_INSET = 0.015
SUBFLOOR_THICKNESS = CELL_SIZE / 2.0
ROOF_THICKNESS = SUBFLOOR_THICKNESS

_ROCK_GREY = min(0.2 * 1.75, 1.0)

MATERIALS: Dict[str, Tuple[float, float, float]] = {
    "room_floor": (0.9 * 0.85,) * 3,
    "corridor_floor": (0.6 * 0.85,) * 3,
    "room_wall": (0.9 * 0.8,) * 3,
    "corridor_wall": (0.6 * 0.8,) * 3,
    "rock": (0.2,) * 3,
    "outer_rock": (_ROCK_GREY,) * 3,
    "door": (0.7, 0.4, 0.2),
    "roof": (0.9 * 0.85,) * 3,
}

# Box corner order: bottom ring (y=min) then top ring (y=max), both
# (minx,minz) (maxx,minz) (maxx,maxz) (minx,maxz).
_FACES = (
    ("bottom", (0, 1, 2, 3)),
    ("top", (4, 5, 6, 7)),
    (NORTH, (0, 4, 5, 1)),
    (EAST, (1, 5, 6, 2)),
    (SOUTH, (2, 6, 7, 3)),
    (WEST, (3, 7, 4, 0)),
)

Vertex = Tuple[float, float, float]


@dataclass
class Mesh:
    vertices: List[Vertex] = field(default_factory=list)
    # (0-based vertex indices, material)
    faces: List[Tuple[Tuple[int, int, int, int], str]] = field(default_factory=list)
    boxes: int = 0

    def box(self, lo: Vertex, hi: Vertex, material: str, sides: Optional[Dict[str, str]] = None) -> None:
        """Append a box spanning ``lo``..``hi``; ``sides`` overrides per-face materials."""
        (x0, y0, z0), (x1, y1, z1) = lo, hi
        base = len(self.vertices)
        self.vertices.extend([
            (x0, y0, z0), (x1, y0, z0), (x1, y0, z1), (x0, y0, z1),
            (x0, y1, z0), (x1, y1, z0), (x1, y1, z1), (x0, y1, z1),
        ])
        for name, corners in _FACES:
            mat = sides.get(name, material) if sides else material
            self.faces.append((tuple(base + c for c in corners), mat))
        self.boxes += 1


def _side_material(neighbor) -> str:
    if neighbor is None:
        return "outer_rock"
    if neighbor.cell_type == ROCK:
        return "rock"
    return "corridor_wall" if neighbor.cell_type == CORRIDOR else "room_wall"


def _door_boxes(mesh: Mesh, grid, room) -> None:
    """Closed doors sit in the corridor cell just outside the room edge."""
    s = CELL_SIZE
    min_x, min_z = room.x * s, room.y * s
    max_x, max_z = (room.x + room.width) * s, (room.y + room.height) * s
    north, south, west, east = room.walls()
    # (wall cells, side of the corridor cell facing the room, box for one cell index)
    spans = (
        (north, SOUTH, lambda x, y: ((x * s + WALL_INSET, 0.0, min_z - DOOR_THICKNESS),
                                     ((x + 1) * s - WALL_INSET, DOOR_HEIGHT, min_z))),
        (south, NORTH, lambda x, y: ((x * s + WALL_INSET, 0.0, max_z),
                                     ((x + 1) * s - WALL_INSET, DOOR_HEIGHT, max_z + DOOR_THICKNESS))),
        (east, WEST, lambda x, y: ((max_x, 0.0, y * s + WALL_INSET),
                                   (max_x + DOOR_THICKNESS, DOOR_HEIGHT, (y + 1) * s - WALL_INSET))),
        (west, EAST, lambda x, y: ((min_x - DOOR_THICKNESS, 0.0, y * s + WALL_INSET),
                                   (min_x, DOOR_HEIGHT, (y + 1) * s - WALL_INSET))),
    )
    for cells, facing, extent in spans:
        for x, y in cells:
            cell = grid.cell(x, y)
            if cell is not None and cell.cell_type == CORRIDOR and cell.door(facing) == DOOR_CLOSED:
                lo, hi = extent(x, y)
                mesh.box(lo, hi, "door")


def build_mesh(dungeon, subfloor: bool = True, roof: bool = False) -> Mesh:
    grid = dungeon.grid
    s = CELL_SIZE
    mesh = Mesh()

    for room in dungeon.rooms:
        mesh.box(
            (room.x * s, -FLOOR_DEPTH, room.y * s),
            ((room.x + room.width) * s, 0.0, (room.y + room.height) * s),
            "room_floor",
        )
        _door_boxes(mesh, grid, room)

    for cell in grid.iter_cells():
        lo_x, lo_z = cell.x * s, cell.y * s
        hi_x, hi_z = lo_x + s, lo_z + s
        if cell.cell_type == CORRIDOR:
            mesh.box((lo_x, -FLOOR_DEPTH, lo_z), (hi_x, 0.0, hi_z), "corridor_floor")
        elif cell.cell_type == ROCK:
            sides = {d: _side_material(n) for d, n in _neighbors_or_none(grid, cell.x, cell.y)}
            mesh.box((lo_x, -FLOOR_DEPTH, lo_z), (hi_x, WALL_HEIGHT, hi_z), "rock", sides)

    full_x, full_z = grid.width * s, grid.height * s
    if subfloor:
        mesh.box((0.0, -FLOOR_DEPTH - SUBFLOOR_THICKNESS, 0.0), (full_x, -FLOOR_DEPTH, full_z), "room_floor")
    if roof:
        mesh.box((0.0, WALL_HEIGHT, 0.0), (full_x, WALL_HEIGHT + ROOF_THICKNESS, full_z), "roof")

    dx, dz = -full_x / 2, -full_z / 2
    mesh.vertices = [(x + dx, y, z + dz) for x, y, z in mesh.vertices]
    return mesh


def _neighbors_or_none(grid, x: int, y: int):
    yield NORTH, grid.cell(x, y - 1)
    yield EAST, grid.cell(x + 1, y)
    yield SOUTH, grid.cell(x, y + 1)
    yield WEST, grid.cell(x - 1, y)


def _num(v: float) -> str:
    text = f"{v:.4f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def render_mtl() -> str:
    lines = ["# Delver dungeon materials"]
    for name, (r, g, b) in MATERIALS.items():
        lines += [f"newmtl {name}", f"Kd {_num(r)} {_num(g)} {_num(b)}", "d 1.0", "illum 1"]
    return "\n".join(lines) + "\n"


def render_obj(dungeon, mtl_name: str = "dungeon.mtl", subfloor: bool = True, roof: bool = False) -> str:
    mesh = build_mesh(dungeon, subfloor=subfloor, roof=roof)
    lines = ["# Delver dungeon mesh", f"mtllib {mtl_name}"]
    lines.extend(f"v {_num(x)} {_num(y)} {_num(z)}" for x, y, z in mesh.vertices)
    current = None
    for corners, material in mesh.faces:
        if material != current:
            current = material
            lines.append(f"usemtl {material}")
        # OBJ indices are 1-based
        lines.append("f " + " ".join(str(i + 1) for i in corners))
    return "\n".join(lines) + "\n"
