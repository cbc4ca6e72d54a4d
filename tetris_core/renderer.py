"""
Pygame renderer for the Tetris game.

Draws the board grid, ghost piece (optional), active piece, next piece
preview, and a sidebar with score / level / lines information. The
renderer only ever sees GameSnapshot values: it subscribes to the
StateManager and redraws from the latest snapshot.
"""

from __future__ import annotations

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from tetris_core.game.pieces import NextPiece, Piece, rgb_of, shape_of
from tetris_core.game.rotation import ghost_position
from tetris_core.game.state import GameSnapshot, GameStatus, StateManager


# ── Color constants ───────────────────────────────────────────────────────
BACKGROUND_COLOR = (30, 30, 30)
GRID_LINE_COLOR = (60, 60, 60)
BORDER_COLOR = (200, 200, 200)
TEXT_COLOR = (255, 255, 255)
GHOST_ALPHA = 80  # transparency for ghost piece (0-255)
SIDEBAR_BG_COLOR = (20, 20, 20)
EMPTY_CELL_COLOR = (40, 40, 40)


def _darker(color: tuple[int, int, int]) -> tuple[int, int, int]:
    return tuple(max(0, c - 40) for c in color)  # type: ignore[return-value]


class TetrisRenderer:
    """Pygame-based renderer for a StateManager's snapshots.

    The window is divided into:
      - Left: main board area (cell_size * width) x (cell_size * height)
      - Right: sidebar with next piece, score, level, lines

    Attributes:
        snapshot: The latest snapshot received.
        cell_size: Pixel size of each grid cell.
        show_ghost: Whether to draw the landing preview.
        screen: Pygame display surface (created on first render).
    """

    # Sidebar dimensions
    SIDEBAR_WIDTH_CELLS: int = 7  # sidebar width in cell units

    def __init__(
        self,
        state_manager: StateManager,
        cell_size: int = 30,
        show_ghost: bool = True,
    ) -> None:
        """Initialize the renderer and subscribe to state changes.

        Does NOT create the Pygame window yet; that happens on the first
        call to render().

        Args:
            state_manager: The session to render.
            cell_size: Size of each grid cell in pixels.
            show_ghost: Draw the ghost piece under the active piece.
        """
        if pygame is None:
            raise ImportError("pygame is required for rendering. Install it: pip install pygame")

        self.snapshot: GameSnapshot = state_manager.get_state()
        self._unsubscribe = state_manager.subscribe(self._on_state)
        self.cell_size = cell_size
        self.show_ghost = show_ghost

        board = self.snapshot.board
        self.board_pixel_width = cell_size * board.width
        self.board_pixel_height = cell_size * board.height
        self.sidebar_width = cell_size * self.SIDEBAR_WIDTH_CELLS
        self.window_width = self.board_pixel_width + self.sidebar_width
        self.window_height = self.board_pixel_height

        self.screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._initialized: bool = False

    def _on_state(self, snapshot: GameSnapshot) -> None:
        self.snapshot = snapshot

    def render(self, fps: int = 60) -> None:
        """Draw the latest snapshot to the screen.

        Initializes Pygame on the first call.

        Args:
            fps: Target frames per second for the display clock.
        """
        if not self._initialized:
            self._init_pygame()

        self.screen.fill(BACKGROUND_COLOR)
        self._draw_board()
        if self.show_ghost:
            self._draw_ghost_piece()
        self._draw_current_piece()
        self._draw_sidebar()

        # Draw border around the board
        pygame.draw.rect(
            self.screen,
            BORDER_COLOR,
            (0, 0, self.board_pixel_width, self.board_pixel_height),
            2,
        )

        if self.snapshot.game_status is GameStatus.PAUSED:
            self._draw_overlay("PAUSED", "Press P to resume", (255, 220, 80))
        elif self.snapshot.game_status is GameStatus.GAME_OVER:
            self._draw_overlay("GAME OVER", "Press R to restart", (255, 50, 50))

        pygame.display.flip()
        self._clock.tick(fps)

    def _init_pygame(self) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("Tetris")
        self._clock = pygame.time.Clock()
        self._font = pygame.font.SysFont("monospace", 20)
        self._initialized = True

    def _draw_cell(self, color: tuple[int, int, int], x: int, y: int, size: int) -> None:
        pygame.draw.rect(self.screen, color, (x, y, size, size))
        # Slightly darker border for a 3D effect
        pygame.draw.rect(self.screen, _darker(color), (x, y, size, size), 1)

    def _draw_board(self) -> None:
        """Draw the locked cells and grid lines."""
        board = self.snapshot.board
        for row in range(board.height):
            for col in range(board.width):
                x = col * self.cell_size
                y = row * self.cell_size
                color_id = board.cell(col, row)
                if color_id:
                    self._draw_cell(rgb_of(color_id), x, y, self.cell_size)
                else:
                    pygame.draw.rect(
                        self.screen, EMPTY_CELL_COLOR, (x, y, self.cell_size, self.cell_size)
                    )

                # Grid lines
                pygame.draw.rect(
                    self.screen, GRID_LINE_COLOR, (x, y, self.cell_size, self.cell_size), 1
                )

    def _visible_cells(self, piece: Piece):
        board = self.snapshot.board
        for board_x, board_y in piece.cells():
            if 0 <= board_y < board.height and 0 <= board_x < board.width:
                yield board_x * self.cell_size, board_y * self.cell_size

    def _draw_current_piece(self) -> None:
        piece = self.snapshot.current_piece
        if piece is None:
            return
        color = rgb_of(piece.color)
        for x, y in self._visible_cells(piece):
            self._draw_cell(color, x, y, self.cell_size)

    def _draw_ghost_piece(self) -> None:
        """Draw the ghost piece (drop preview) with transparency.

        Shows where the current piece would land if hard-dropped.
        """
        if self.snapshot.game_status is GameStatus.GAME_OVER:
            return
        piece = self.snapshot.current_piece
        ghost_y = ghost_position(self.snapshot.board, piece)

        # Don't draw ghost if it's at the same position as the piece
        if ghost_y == piece.y:
            return

        color = rgb_of(piece.color)
        ghost_surface = pygame.Surface((self.cell_size, self.cell_size), pygame.SRCALPHA)
        ghost_surface.fill((*color, GHOST_ALPHA))
        for x, y in self._visible_cells(piece.moved(0, ghost_y - piece.y)):
            self.screen.blit(ghost_surface, (x, y))
            pygame.draw.rect(self.screen, color, (x, y, self.cell_size, self.cell_size), 1)

    def _draw_sidebar(self) -> None:
        """Draw the sidebar with next piece, score, level, and lines."""
        sidebar_x = self.board_pixel_width
        pygame.draw.rect(
            self.screen,
            SIDEBAR_BG_COLOR,
            (sidebar_x, 0, self.sidebar_width, self.window_height),
        )
        pygame.draw.line(
            self.screen,
            BORDER_COLOR,
            (sidebar_x, 0),
            (sidebar_x, self.window_height),
            2,
        )

        margin = 15
        text_x = sidebar_x + margin

        self._draw_piece_preview(self.snapshot.next_piece, text_x, 20, "NEXT")

        text_y = 170
        for label, value in (
            ("SCORE", self.snapshot.score),
            ("LEVEL", self.snapshot.level),
            ("LINES", self.snapshot.lines_cleared),
        ):
            self._draw_text(label, text_x, text_y)
            self._draw_text(str(value), text_x, text_y + 25)
            text_y += 65

    def _draw_piece_preview(
        self,
        piece: NextPiece,
        x_offset: int,
        y_offset: int,
        label: str,
    ) -> None:
        """Draw a small preview of the next piece in its spawn rotation.

        Args:
            piece: The lookahead piece.
            x_offset: Pixel X position for the preview box.
            y_offset: Pixel Y position for the preview box.
            label: Text label to display above the preview.
        """
        preview_cell = self.cell_size * 2 // 3  # smaller cells for preview
        box_size = preview_cell * 5

        self._draw_text(label, x_offset, y_offset)

        box_y = y_offset + 25
        pygame.draw.rect(self.screen, EMPTY_CELL_COLOR, (x_offset, box_y, box_size, box_size))
        pygame.draw.rect(self.screen, BORDER_COLOR, (x_offset, box_y, box_size, box_size), 1)

        shape = shape_of(piece.type, 0)
        color = rgb_of(piece.color)
        # 4x4 box centred in the 5x5 preview
        offset = (box_size - 4 * preview_cell) // 2
        for r in range(4):
            for c in range(4):
                if shape[r, c]:
                    px = x_offset + offset + c * preview_cell
                    py = box_y + offset + r * preview_cell
                    self._draw_cell(color, px, py, preview_cell)

    def _draw_overlay(self, title: str, hint: str, title_color: tuple[int, int, int]) -> None:
        """Draw a semi-transparent overlay over the board with a message."""
        overlay = pygame.Surface(
            (self.board_pixel_width, self.board_pixel_height), pygame.SRCALPHA
        )
        overlay.fill((0, 0, 0, 150))
        self.screen.blit(overlay, (0, 0))

        font_large = pygame.font.SysFont("monospace", 36, bold=True)
        text_title = font_large.render(title, True, title_color)
        text_hint = self._font.render(hint, True, TEXT_COLOR)

        cx = self.board_pixel_width // 2
        cy = self.board_pixel_height // 2
        self.screen.blit(text_title, (cx - text_title.get_width() // 2, cy - 40))
        self.screen.blit(text_hint, (cx - text_hint.get_width() // 2, cy + 10))

    def _draw_text(self, text: str, x: int, y: int, color: tuple[int, int, int] = TEXT_COLOR) -> None:
        surface = self._font.render(text, True, color)
        self.screen.blit(surface, (x, y))

    def close(self) -> None:
        """Unsubscribe, shut down Pygame and close the window."""
        self._unsubscribe()
        if self._initialized:
            pygame.quit()
            self._initialized = False
