"""testing piece tables"""
import dataclasses

import numpy as np
import pytest

from tetris_core.game.pieces import (
    PIECE_IDS,
    PIECE_TYPES,
    WALL_KICKS_I,
    WALL_KICKS_O,
    WALL_KICKS_STANDARD,
    NextPiece,
    Piece,
    all_piece_types,
    color_of,
    rgb_of,
    shape_of,
    spawn_pose,
    wall_kicks,
)


class TestShapes:
    """Tests for the static shape tables."""

    @pytest.mark.parametrize("piece_type", PIECE_TYPES)
    @pytest.mark.parametrize("rotation", range(4))
    def test_every_rotation_is_a_tetromino(self, piece_type, rotation):
        """Every rotation state is a 4x4 matrix with exactly four cells."""
        shape = shape_of(piece_type, rotation)
        assert shape.shape == (4, 4)
        assert shape.dtype == bool
        assert int(shape.sum()) == 4

    def test_o_piece_is_the_same_in_every_rotation(self):
        """All four O rotations are identical."""
        first = shape_of("O", 0)
        for rotation in range(1, 4):
            assert np.array_equal(shape_of("O", rotation), first)

    def test_t_spawn_shape(self):
        """T spawns pointing up."""
        expected = np.array([
            [0, 1, 0, 0],
            [1, 1, 1, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ], dtype=bool)
        assert np.array_equal(shape_of("T", 0), expected)

    def test_i_vertical_uses_third_column(self):
        """I rotation 1 fills column 2 of its box."""
        shape = shape_of("I", 1)
        assert shape[:, 2].all()
        assert int(shape.sum()) == 4

    def test_shapes_are_read_only(self):
        """Shape matrices cannot be modified by callers."""
        with pytest.raises(ValueError):
            shape_of("T", 0)[0, 0] = True

    def test_all_piece_types(self):
        """The seven tags come back in table order."""
        assert all_piece_types() == ("I", "O", "T", "S", "Z", "J", "L")

    def test_unknown_type_raises(self):
        """An unknown tag is a precondition violation."""
        with pytest.raises(ValueError):
            shape_of("X", 0)
        with pytest.raises(ValueError):
            color_of("X")
        with pytest.raises(ValueError):
            spawn_pose("X")

    @pytest.mark.parametrize("rotation", [-1, 4])
    def test_rotation_out_of_range_raises(self, rotation):
        """Rotation indices outside 0-3 are rejected."""
        with pytest.raises(ValueError):
            shape_of("T", rotation)


class TestColorsAndSpawn:
    """Tests for colors and spawn poses."""

    def test_colors_are_distinct_and_nonzero(self):
        """Each type has its own non-empty color identifier."""
        colors = [color_of(t) for t in PIECE_TYPES]
        assert len(set(colors)) == 7
        assert 0 not in colors

    def test_rgb_for_every_color(self):
        """Every color identifier has a display color."""
        for t in PIECE_TYPES:
            r, g, b = rgb_of(color_of(t))
            assert all(0 <= v <= 255 for v in (r, g, b))
        assert rgb_of(PIECE_IDS["I"]) == (0, 240, 240)

    def test_rgb_unknown_raises(self):
        with pytest.raises(ValueError):
            rgb_of(0)

    @pytest.mark.parametrize("piece_type", PIECE_TYPES)
    def test_spawn_pose(self, piece_type):
        """O spawns at x=4, everything else at x=3, all at y=0 rotation 0."""
        pose = spawn_pose(piece_type)
        assert pose.x == (4 if piece_type == "O" else 3)
        assert pose.y == 0
        assert pose.rotation == 0


class TestWallKicks:
    """Tests for the kick tables."""

    def test_families(self):
        """I has its own table, O has none, the rest share one."""
        assert wall_kicks("I") is WALL_KICKS_I
        assert wall_kicks("O") is WALL_KICKS_O
        for t in "TSZJL":
            assert wall_kicks(t) is WALL_KICKS_STANDARD

    def test_o_table_is_empty(self):
        assert WALL_KICKS_O == {}

    @pytest.mark.parametrize("table", [WALL_KICKS_I, WALL_KICKS_STANDARD])
    def test_tables_cover_all_transitions(self, table):
        """Both tables cover the 8 single-step transitions with 5 kicks each."""
        expected = {(r, (r + 1) % 4) for r in range(4)} | {(r, (r + 3) % 4) for r in range(4)}
        assert set(table) == expected
        for kicks in table.values():
            assert len(kicks) == 5
            assert kicks[0] == (0, 0)

    def test_standard_zero_to_one(self):
        assert WALL_KICKS_STANDARD[(0, 1)] == ((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2))

    def test_i_zero_to_one(self):
        assert WALL_KICKS_I[(0, 1)] == ((0, 0), (-2, 0), (1, 0), (-2, -1), (1, 2))


class TestPiece:
    """Tests for the Piece and NextPiece values."""

    def test_spawn(self):
        """Piece.spawn places the piece at its spawn pose with its color."""
        p = Piece.spawn("T")
        assert (p.type, p.rotation, p.x, p.y) == ("T", 0, 3, 0)
        assert p.color == color_of("T")

    def test_cells_T_rot0(self):
        """Tests the cell coordinates for a 'T' piece at rotation 0."""
        p = Piece("T", 0, 4, 0, color_of("T"))
        assert set(p.cells()) == {(5, 0), (4, 1), (5, 1), (6, 1)}

    def test_cells_O_skip_first_column(self):
        """O occupies columns 1-2 of its box."""
        p = Piece.spawn("O")
        assert set(p.cells()) == {(5, 0), (6, 0), (5, 1), (6, 1)}

    def test_moved_returns_new_piece(self):
        """moved() leaves the original untouched."""
        p = Piece.spawn("L")
        q = p.moved(-1, 2)
        assert (q.x, q.y) == (p.x - 1, p.y + 2)
        assert (p.x, p.y) == (3, 0)

    def test_rotated_to(self):
        p = Piece.spawn("J")
        q = p.rotated_to(3, dx=1, dy=-2)
        assert (q.rotation, q.x, q.y) == (3, 4, -2)
        assert p.rotation == 0

    def test_piece_is_frozen(self):
        p = Piece.spawn("S")
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.x = 7

    def test_next_piece_of(self):
        n = NextPiece.of("Z")
        assert n.type == "Z"
        assert n.color == color_of("Z")
