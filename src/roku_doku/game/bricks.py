from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, FrozenSet, Iterable, Iterator, List, Protocol, Sequence, Tuple

from .errors import ContractViolation, require


BOARD_SIZE = 9

Offset = Tuple[int, int]


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int:
        ...


@dataclass(frozen=True)
class Brick:
    """A polyomino given as a set of (x, y) offsets.

    Offsets are non-negative. A brick is normalized when its minimum x and minimum y
    are both 0; only normalized bricks may be placed on a board. ``mask`` is the brick
    laid out on the 9-wide board bit rows with its origin at cell (0, 0).
    """

    offsets: FrozenSet[Offset]
    max_x: int = field(init=False, compare=False, repr=False)
    max_y: int = field(init=False, compare=False, repr=False)
    min_x: int = field(init=False, compare=False, repr=False)
    min_y: int = field(init=False, compare=False, repr=False)
    mask: int = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        offsets = frozenset((int(x), int(y)) for x, y in self.offsets)
        require(len(offsets) > 0, "a brick needs at least one cell")
        require(all(x >= 0 and y >= 0 for x, y in offsets), f"negative offset in {sorted(offsets)}")
        object.__setattr__(self, "offsets", offsets)
        object.__setattr__(self, "max_x", max(x for x, _ in offsets))
        object.__setattr__(self, "max_y", max(y for _, y in offsets))
        object.__setattr__(self, "min_x", min(x for x, _ in offsets))
        object.__setattr__(self, "min_y", min(y for _, y in offsets))
        mask = 0
        for x, y in offsets:
            if x < BOARD_SIZE and y < BOARD_SIZE:
                mask |= 1 << (y * BOARD_SIZE + x)
        object.__setattr__(self, "mask", mask)

    @classmethod
    def of(cls, *offsets: Offset) -> "Brick":
        return cls(frozenset(offsets))

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Brick":
        """Build a brick from a picture, e.g. ``["XXX", " X "]``."""
        cells = [(x, y) for y, row in enumerate(rows) for x, c in enumerate(row) if c not in " .0"]
        return cls(frozenset(cells))

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    @property
    def size(self) -> int:
        return len(self.offsets)

    @property
    def is_normalized(self) -> bool:
        return self.min_x == 0 and self.min_y == 0

    def cells(self) -> List[Offset]:
        """Offsets in row-major order (y, then x)."""
        return sorted(self.offsets, key=lambda v: (v[1], v[0]))

    def cells_at(self, origin_x: int, origin_y: int) -> List[Offset]:
        return [(origin_x + dx, origin_y + dy) for dx, dy in self.cells()]

    def rows(self) -> List[str]:
        lines: List[str] = []
        for y in range(self.min_y, self.max_y + 1):
            lines.append("".join("X" if (x, y) in self.offsets else " " for x in range(self.min_x, self.max_x + 1)))
        return lines


def normalize_brick(brick: Brick) -> Brick:
    if brick.is_normalized:
        return brick
    return Brick(frozenset((x - brick.min_x, y - brick.min_y) for x, y in brick.offsets))


def rotate_clockwise(brick: Brick) -> Brick:
    """Rotate a brick by 90 degrees clockwise (y axis pointing down).

    Inside a bounding box of height ``h`` the cell (x, y) moves to (h - 1 - y, x); the
    result is normalized again.
    """
    brick = normalize_brick(brick)
    h = brick.height
    return normalize_brick(Brick(frozenset((h - 1 - y, x) for x, y in brick.offsets)))


def all_rotations(brick: Brick) -> List[Brick]:
    """The 0, 90, 180 and 270 degree rotations, symmetric duplicates included."""
    rotations = [normalize_brick(brick)]
    for _ in range(3):
        rotations.append(rotate_clockwise(rotations[-1]))
    return rotations


class BrickShape(IntEnum):
    SINGLE = 0
    DOMINO = 1
    LINE3 = 2
    LINE4 = 3
    LINE5 = 4
    CORNER = 5
    TEE = 6
    TALL_TEE = 7
    ARCH = 8
    RING = 9
    ZIG = 10


BASE_SHAPES: Dict[BrickShape, Brick] = {
    BrickShape.SINGLE: Brick.from_rows(["X"]),
    BrickShape.DOMINO: Brick.from_rows(["XX"]),
    BrickShape.LINE3: Brick.from_rows(["XXX"]),
    BrickShape.LINE4: Brick.from_rows(["XXXX"]),
    BrickShape.LINE5: Brick.from_rows(["XXXXX"]),
    BrickShape.CORNER: Brick.from_rows(["XX", "X "]),
    BrickShape.TEE: Brick.from_rows(["XXX", " X "]),
    BrickShape.TALL_TEE: Brick.from_rows(["XXX", " X ", " X "]),
    BrickShape.ARCH: Brick.from_rows(["XXX", "X X"]),
    BrickShape.RING: Brick.from_rows(["XXX", "X X", "X X"]),
    BrickShape.ZIG: Brick.from_rows(["XX ", " XX"]),
}


class BrickLibrary:
    """Ordered, read-only catalogue of playable bricks.

    The standard library holds all four rotations of every base shape, including
    duplicates produced by rotational symmetry, so a uniform draw weights each
    orientation equally (the single cell is four entries, the 2-line two pairs).
    """

    def __init__(self, bricks: Iterable[Brick]) -> None:
        bricks = tuple(bricks)
        if not bricks:
            raise ContractViolation("a brick library cannot be empty")
        for brick in bricks:
            require(brick.is_normalized, f"library brick {sorted(brick.offsets)} is not normalized")
            require(
                brick.max_x < BOARD_SIZE and brick.max_y < BOARD_SIZE,
                f"library brick {sorted(brick.offsets)} does not fit on the board",
            )
        self._bricks: Tuple[Brick, ...] = bricks

    @classmethod
    def standard(cls) -> "BrickLibrary":
        bricks: List[Brick] = []
        for shape in BrickShape:
            bricks.extend(all_rotations(BASE_SHAPES[shape]))
        return cls(bricks)

    @classmethod
    def from_shapes(cls, shapes: Iterable[Brick]) -> "BrickLibrary":
        bricks: List[Brick] = []
        for shape in shapes:
            bricks.extend(all_rotations(shape))
        return cls(bricks)

    def unique(self) -> "BrickLibrary":
        """Same catalogue with duplicate orientations removed, first occurrence kept."""
        seen = set()
        bricks: List[Brick] = []
        for brick in self._bricks:
            if brick not in seen:
                seen.add(brick)
                bricks.append(brick)
        return BrickLibrary(bricks)

    @property
    def bricks(self) -> Tuple[Brick, ...]:
        return self._bricks

    def __len__(self) -> int:
        return len(self._bricks)

    def __getitem__(self, index: int) -> Brick:
        return self._bricks[index]

    def __iter__(self) -> Iterator[Brick]:
        return iter(self._bricks)

    def __contains__(self, brick: object) -> bool:
        return brick in self._bricks

    def index(self, brick: Brick) -> int:
        return self._bricks.index(brick)

    def draw(self, rng: RandomSource) -> Brick:
        return self._bricks[rng.randrange(len(self._bricks))]

    def draw_batch(self, rng: RandomSource, count: int) -> Tuple[Brick, ...]:
        return tuple(self.draw(rng) for _ in range(count))
