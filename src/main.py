"""Entry point for the Emoji Link puzzle.

Sets up the ECS world, event bus, session controller, and Arcade window.
"""
import logging

import arcade
from arcade import Window, run, set_background_color, color

from emojilink.components.game_state import GameMode
from emojilink.constants import TILE_MARGIN, WINDOW_HEIGHT, WINDOW_WIDTH
from emojilink.events.bus import EVENT_CELL_CLICK, EVENT_TICK, EventBus
from emojilink.systems.session import SessionController
from emojilink.ui.layout import cell_at_point, cell_center, compute_board_geometry
from emojilink.ui.presenter import PresentationState
from emojilink.utils.connectivity import path_segments
from emojilink.world import create_world


class EmojiLinkWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "Emoji Link")
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus)
        self.presentation = PresentationState()
        self.session = SessionController(self.world, self.event_bus, self.presentation.callbacks())
        set_background_color(color.DARK_SLATE_GRAY)

    def _board_size(self) -> int:
        if self.session.board is None:
            return 0
        return self.session.board.grid.size

    def on_draw(self):
        self.clear()
        self._draw_hud()
        size = self._board_size()
        if size:
            self._draw_board(size)
            self._draw_connection(size)
        if self.session.mode == GameMode.IDLE:
            self._draw_banner("Press SPACE to start")
        elif self.session.mode == GameMode.PAUSED:
            self._draw_banner("Paused - press P to resume")
        elif self.presentation.game_over:
            self._draw_banner(
                f"Game over {self.presentation.rating}  score {self.presentation.score}  (SPACE to play again)"
            )

    def _draw_hud(self):
        arcade.draw_text(
            f"Score: {self.presentation.score}",
            20,
            self.height - 32,
            color.WHITE,
            18,
            bold=True,
        )
        arcade.draw_text(
            f"Pairs: {self.presentation.match_count}",
            self.width / 2,
            self.height - 32,
            color.WHITE,
            18,
            anchor_x="center",
        )
        arcade.draw_text(
            f"Time: {self.presentation.time_remaining}",
            self.width - 20,
            self.height - 32,
            color.WHITE,
            18,
            anchor_x="right",
            bold=True,
        )

    def _draw_board(self, size: int):
        tile_size, start_x, start_y = compute_board_geometry(self.width, self.height, size)
        flash = self.presentation.flash or ()
        for coord, symbol in self.session.board.grid.occupied():
            left = start_x + coord.col * tile_size
            bottom = start_y + (size - 1 - coord.row) * tile_size
            if coord == self.presentation.selected:
                fill = color.YELLOW
            elif coord in flash:
                fill = color.LIGHT_CORAL
            else:
                fill = color.WHITE
            arcade.draw_lbwh_rectangle_filled(left + TILE_MARGIN, bottom + TILE_MARGIN, tile_size - 2 * TILE_MARGIN, tile_size - 2 * TILE_MARGIN, fill)
            x, y = cell_center(coord, self.width, self.height, size)
            arcade.draw_text(symbol, x, y, color.BLACK, tile_size * 0.5, anchor_x="center", anchor_y="center")

    def _draw_connection(self, size: int):
        path = self.presentation.connection
        if not path:
            return
        for start, end in path_segments(path):
            x1, y1 = cell_center(start, self.width, self.height, size)
            x2, y2 = cell_center(end, self.width, self.height, size)
            arcade.draw_line(x1, y1, x2, y2, color.YELLOW, 3)

    def _draw_banner(self, text: str):
        arcade.draw_lrbt_rectangle_filled(0, self.width, self.height / 2 - 30, self.height / 2 + 30, (0, 0, 0, 180))
        arcade.draw_text(
            text,
            self.width / 2,
            self.height / 2,
            color.WHITE,
            20,
            anchor_x="center",
            anchor_y="center",
            bold=True,
        )

    def on_update(self, delta_time: float):
        self.presentation.advance(delta_time)
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        if button != arcade.MOUSE_BUTTON_LEFT or self.session.mode != GameMode.PLAYING:
            return
        coord = cell_at_point(x, y, self.width, self.height, self._board_size())
        if coord is None:
            return
        self.event_bus.emit(EVENT_CELL_CLICK, row=coord.row, col=coord.col)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol in (arcade.key.SPACE, arcade.key.ENTER):
            if self.session.mode in (GameMode.IDLE, GameMode.OVER):
                self.presentation.reset()
                self.session.start()
        elif symbol == arcade.key.P:
            if not self.session.pause():
                self.session.resume()

    def on_close(self):
        self.session.shutdown()
        super().on_close()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    window = EmojiLinkWindow()
    run()

if __name__ == "__main__":
    main()
