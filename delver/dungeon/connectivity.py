"""Connectivity utilities: sealed-room tunnelling, region merging and flood searches.

Region merging picks random connector cells (rock touching two or more
regions) and folds regions together through a flat union-find mapping until a
single region remains. Reachability checks are plain searches over the grid
each time they are needed; no adjacency structure is maintained.
"""
from __future__ import annotations
from collections import deque
from typing import Dict, List, Optional, Set, Tuple

from ..logging_utils import get_logger
from .tiles import CORRIDOR, DIRECTIONS, NO_REGION, ROCK, ROOM

Coord2D = Tuple[int, int]

log = get_logger("delver.connectivity")


class RegionMap:
    """Flat union-find over region ids.

    ``merge`` relabels every id pointing at a source root, so ``find`` is a
    single lookup and the mapping never holds chains.
    """

    def __init__(self, count: int):
        self.parent = list(range(count))

    def find(self, region: int) -> int:
        return self.parent[region]

    def merge(self, dest: int, sources: List[int]) -> None:
        if not sources:
            return
        doomed = set(sources)
        for i, root in enumerate(self.parent):
            if root in doomed:
                self.parent[i] = dest

    def canonical(self, regions) -> List[int]:
        """Distinct canonical ids of ``regions``, first-seen order preserved."""
        out: List[int] = []
        for r in regions:
            root = self.parent[r]
            if root not in out:
                out.append(root)
        return out

    def roots(self) -> Set[int]:
        return set(self.parent)


def ensure_room_connectivity(session) -> int:
    """Tunnel every room sealed in rock to the nearest corridor.

    Breadth-first search starts from all perimeter cells at once and may cut
    straight through rock. The carved path joins the region of the corridor
    it reaches. Returns the number of cells carved.
    """
    grid = session.grid
    dug = 0
    for room in grid.rooms:
        perimeter = [(x, y) for x, y in room.perimeter() if grid.in_bounds(x, y)]
        if any(grid.cells[x][y].cell_type != ROCK for x, y in perimeter):
            continue

        came_from: Dict[Coord2D, Optional[Coord2D]] = {}
        queue = deque()
        for pos in perimeter:
            if pos not in came_from:
                came_from[pos] = None
                queue.append(pos)

        target: Optional[Coord2D] = None
        while queue and target is None:
            cx, cy = queue.popleft()
            for _name, dx, dy in DIRECTIONS:
                nx, ny = cx + dx, cy + dy
                if not grid.in_bounds(nx, ny) or (nx, ny) in came_from:
                    continue
                ncell = grid.cells[nx][ny]
                if ncell.cell_type == CORRIDOR:
                    came_from[(nx, ny)] = (cx, cy)
                    target = (nx, ny)
                    break
                if ncell.cell_type == ROCK:
                    came_from[(nx, ny)] = (cx, cy)
                    queue.append((nx, ny))

        if target is None:
            log.debug(event="room_unreachable", room=room.number, seed=session.seed)
            continue

        region = grid.cells[target[0]][target[1]].region
        step = came_from[target]
        while step is not None:
            cell = grid.cells[step[0]][step[1]]
            if cell.cell_type == ROCK:
                cell.cell_type = CORRIDOR
                cell.region = region
                dug += 1
            step = came_from[step]
    session.bump('tunnels_dug', dug)
    return dug


def find_connectors(grid) -> List[Tuple[int, int, List[int]]]:
    """Interior rock cells bordering two or more distinct regions.

    Returns ``(x, y, regions)`` with regions in N, E, S, W discovery order.
    """
    connectors = []
    for y in range(1, grid.height - 1):
        for x in range(1, grid.width - 1):
            if grid.cells[x][y].cell_type != ROCK:
                continue
            regions: List[int] = []
            for _d, neighbor in grid.neighbors(x, y):
                if neighbor.region != NO_REGION and neighbor.region not in regions:
                    regions.append(neighbor.region)
            if len(regions) >= 2:
                connectors.append((x, y, regions))
    return connectors


def connect_regions(session) -> RegionMap:
    """Merge every region into one by opening random connectors.

    After each merge the remaining connectors are re-canonicalised; those no
    longer spanning two regions are dropped, except that one in
    ``extra_connector_chance`` is opened anyway to add a loop. Running out of
    connectors with several regions still open is reported, not raised.
    """
    grid = session.grid
    rng = session.rng
    extra_chance = session.config.extra_connector_chance

    connectors = find_connectors(grid)
    regions = RegionMap(session.region_count)
    open_regions = set(range(session.region_count))
    opened = extra = 0

    while len(open_regions) > 1 and connectors:
        x, y, touching = connectors.pop(rng.randrange(len(connectors)))
        merged = regions.canonical(touching)
        dest, sources = merged[0], merged[1:]
        regions.merge(dest, sources)
        open_regions.difference_update(sources)
        session.carve(x, y, region=dest)
        opened += 1

        remaining = []
        for cx, cy, ctouching in connectors:
            now = regions.canonical(ctouching)
            if len(now) > 1:
                remaining.append((cx, cy, now))
            elif rng.randrange(extra_chance) == 0:
                session.carve(cx, cy, region=now[0])
                extra += 1
        connectors = remaining

    session.regions = regions
    session.bump('connectors_opened', opened)
    session.bump('extra_connectors', extra)
    if len(open_regions) > 1:
        if session.metrics:
            session.metrics['connector_exhausted'] = True
            session.metrics['open_regions'] = len(open_regions)
        log.warn(event="connector_exhausted", open_regions=len(open_regions), seed=session.seed)
    elif session.metrics:
        session.metrics['open_regions'] = len(open_regions)
    return regions


def room_reaches_corridor(grid, room) -> bool:
    """Depth-first search from the room origin through room cells.

    Succeeds as soon as any corridor cell is touched.
    """
    visited: Set[Coord2D] = set()
    stack = [(room.x, room.y)]
    while stack:
        pos = stack.pop()
        if pos in visited:
            continue
        visited.add(pos)
        cell = grid.cell(*pos)
        if cell is None:
            continue
        if cell.cell_type == CORRIDOR:
            return True
        if cell.cell_type != ROOM:
            continue
        for _name, dx, dy in DIRECTIONS:
            nx, ny = pos[0] + dx, pos[1] + dy
            if grid.in_bounds(nx, ny):
                stack.append((nx, ny))
    return False


def neighbors_joined(grid, x: int, y: int) -> bool:
    """True if the open neighbours of (x, y) still reach each other without it.

    Used after a cell has been filled with rock: when its former neighbours
    remain mutually reachable, filling it cannot have split the dungeon.
    """
    targets = [(n.x, n.y) for _d, n in grid.neighbors(x, y) if n.is_open]
    if len(targets) < 2:
        return True
    missing = set(targets[1:])
    seen = {targets[0]}
    q = deque([targets[0]])
    while q and missing:
        cx, cy = q.popleft()
        for _name, dx, dy in DIRECTIONS:
            nx, ny = cx + dx, cy + dy
            if (nx, ny) in seen or not grid.in_bounds(nx, ny) or not grid.cells[nx][ny].is_open:
                continue
            seen.add((nx, ny))
            missing.discard((nx, ny))
            q.append((nx, ny))
    return not missing


def flood_open(grid, start: Coord2D) -> Set[Coord2D]:
    """All non-rock cells reachable from ``start`` through non-rock cells."""
    sx, sy = start
    if not grid.in_bounds(sx, sy) or not grid.cells[sx][sy].is_open:
        return set()
    seen = {start}
    q = deque([start])
    while q:
        cx, cy = q.popleft()
        for _name, dx, dy in DIRECTIONS:
            nx, ny = cx + dx, cy + dy
            if (nx, ny) not in seen and grid.in_bounds(nx, ny) and grid.cells[nx][ny].is_open:
                seen.add((nx, ny))
                q.append((nx, ny))
    return seen


def open_components(grid) -> int:
    """Number of separate non-rock components in the grid."""
    seen: Set[Coord2D] = set()
    components = 0
    for cell in grid.iter_cells():
        pos = (cell.x, cell.y)
        if cell.is_open and pos not in seen:
            seen |= flood_open(grid, pos)
            components += 1
    return components
