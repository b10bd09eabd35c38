import os
import unittest
from unittest import mock

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt, QPoint
from PySide6.QtTest import QTest

from tictactoe.game_logic import BoardEngine, PLAYER_X, EMPTY
from tictactoe.ui.board_widget import BoardWidget
from tictactoe.ui.main_window import TicTacToeWindow

import main

TIE_MOVES = [0, 1, 2, 4, 3, 5, 7, 6, 8]


def cell_center(widget, index):
    """widget coords of the middle of a cell"""
    ox, oy, side = widget._geometry()
    r, c = divmod(index, 3)
    step = side / 3
    return QPoint(int(ox + c*step + step/2), int(oy + r*step + step/2))


def setUpModule():
    global _app
    _app = QApplication.instance() or QApplication([])


class TestTicTacToeWindow(unittest.TestCase):
    def setUp(self):
        self.engine = BoardEngine()
        self.window = TicTacToeWindow(engine=self.engine)

    def tearDown(self):
        self.window.close()
        self.window.deleteLater()

    def click(self, *indices):
        for index in indices:
            self.window._on_cell_clicked(index)

    def test_first_round_started_on_open(self):
        self.assertTrue(self.engine.running)
        self.assertEqual(self.window.message_label.text(), "Player X's Turn")
        self.assertEqual(self.window.x_wins_label.text(), "0 wins")
        self.assertEqual(self.window.o_wins_label.text(), "0 wins")
        self.assertEqual(self.window.ties_label.text(), "0")

    def test_turn_text_follows_player(self):
        self.click(4)
        self.assertEqual(self.window.message_label.text(), "Player O's Turn")
        self.assertIn("#61efff", self.window.message_label.styleSheet())
        self.assertEqual(self.engine.board[4], PLAYER_X)

    def test_rejected_click_changes_nothing(self):
        self.click(4)
        self.click(4)
        self.assertEqual(self.window.message_label.text(), "Player O's Turn")
        self.assertEqual(self.engine.board.count(EMPTY), 8)

    def test_win_updates_status_stats_and_highlight(self):
        self.click(0, 4, 1, 3, 2)
        self.assertEqual(self.window.message_label.text(), "Player X Wins!")
        self.assertEqual(self.window.x_wins_label.text(), "1 wins")
        self.assertEqual(self.window.board_widget.highlighted_cells(), (0, 1, 2))
        self.assertFalse(self.window.board_widget.accepts_clicks())

    def test_tie_updates_counter(self):
        self.click(*TIE_MOVES)
        self.assertEqual(self.window.message_label.text(), "Game Tied!")
        self.assertEqual(self.window.ties_label.text(), "1")
        self.assertEqual(self.window.board_widget.highlighted_cells(), ())

    def test_restart_clears_board_but_keeps_stats(self):
        self.click(0, 4, 1, 3, 2)
        self.window.restart_button.click()
        self.assertEqual(self.engine.board, (EMPTY,) * 9)
        self.assertEqual(self.window.message_label.text(), "Player X's Turn")
        self.assertEqual(self.window.x_wins_label.text(), "1 wins")
        self.assertEqual(self.window.board_widget.highlighted_cells(), ())
        self.assertTrue(self.window.board_widget.accepts_clicks())

    def test_new_round_menu_action(self):
        self.click(4)
        self.window.new_round_action.trigger()
        self.assertEqual(self.engine.board, (EMPTY,) * 9)

    def test_placed_cell_flashes(self):
        self.click(5)
        self.assertIn(5, self.window.board_widget.flashing_cells())
        widget = self.window.board_widget
        widget._end_flash(5, widget._flashing[5])
        self.assertNotIn(5, widget.flashing_cells())

    def test_mouse_click_places_mark(self):
        self.window.resize(400, 500)
        self.window.show()
        QApplication.processEvents()
        widget = self.window.board_widget
        QTest.mouseClick(widget, Qt.LeftButton, pos=cell_center(widget, 4))
        self.assertEqual(self.engine.board[4], PLAYER_X)
        self.assertEqual(self.window.message_label.text(), "Player O's Turn")

    def test_mouse_click_ignored_when_disabled(self):
        self.window.resize(400, 500)
        self.window.show()
        QApplication.processEvents()
        widget = self.window.board_widget
        widget.set_accept_clicks(False)
        QTest.mouseClick(widget, Qt.LeftButton, pos=cell_center(widget, 0))
        self.assertEqual(self.engine.board, (EMPTY,) * 9)
        self.assertEqual(self.window.message_label.text(), "Player X's Turn")

    def test_default_engine(self):
        window = TicTacToeWindow()
        try:
            self.assertIsInstance(window.engine, BoardEngine)
            self.assertTrue(window.engine.running)
        finally:
            window.close()


class TestBoardWidget(unittest.TestCase):
    def setUp(self):
        self.engine = BoardEngine()
        self.widget = BoardWidget(self.engine)
        self.widget.resize(300, 300)

    def tearDown(self):
        self.widget.deleteLater()

    def test_cell_at_maps_row_major(self):
        self.assertEqual(self.widget.cell_at(10, 10), 0)
        self.assertEqual(self.widget.cell_at(150, 150), 4)
        self.assertEqual(self.widget.cell_at(290, 10), 2)
        self.assertEqual(self.widget.cell_at(10, 290), 6)
        self.assertEqual(self.widget.cell_at(299, 299), 8)

    def test_cell_at_outside_grid(self):
        self.widget.resize(400, 300)
        # grid is centred, 50px margin each side
        self.assertIsNone(self.widget.cell_at(20, 150))
        self.assertEqual(self.widget.cell_at(60, 10), 0)

    def test_release_emits_cell_index(self):
        clicked = []
        self.widget.cell_clicked.connect(clicked.append)
        QTest.mouseClick(self.widget, Qt.LeftButton, pos=QPoint(150, 150))
        QTest.mouseClick(self.widget, Qt.LeftButton, pos=QPoint(290, 290))
        self.assertEqual(clicked, [4, 8])

    def test_no_emit_while_disabled(self):
        clicked = []
        self.widget.cell_clicked.connect(clicked.append)
        self.widget.set_accept_clicks(False)
        QTest.mouseClick(self.widget, Qt.LeftButton, pos=QPoint(150, 150))
        self.assertEqual(clicked, [])

    def test_stale_flash_timer_keeps_newer_flash(self):
        self.widget.flash_cell(3)
        old = self.widget._flashing[3]
        self.widget.clear_highlights()
        self.widget.flash_cell(3)
        self.widget._end_flash(3, old)
        self.assertIn(3, self.widget.flashing_cells())
        self.widget._end_flash(3, self.widget._flashing[3])
        self.assertEqual(self.widget.flashing_cells(), frozenset())

    def test_square_aspect(self):
        self.assertTrue(self.widget.hasHeightForWidth())
        self.assertEqual(self.widget.heightForWidth(240), 240)


class TestCommandLine(unittest.TestCase):
    def test_log_level_flag(self):
        args, rest = main.parse_args(["--log-level", "debug"])
        self.assertEqual(args.log_level, "DEBUG")
        self.assertEqual(rest, [])

    def test_log_level_from_environment(self):
        with mock.patch.dict(os.environ, {"TICTACTOE_LOG_LEVEL": "info"}):
            args, _ = main.parse_args([])
        self.assertEqual(args.log_level, "INFO")

    def test_unknown_args_left_for_qt(self):
        _, rest = main.parse_args(["-style", "--log-level", "ERROR"])
        self.assertEqual(rest, ["-style"])

    def test_bad_log_level_in_environment(self):
        with mock.patch.dict(os.environ, {"TICTACTOE_LOG_LEVEL": "verbose"}):
            with mock.patch("sys.stderr"):
                with self.assertRaises(SystemExit) as ctx:
                    main.parse_args([])
        self.assertEqual(ctx.exception.code, 2)

    def test_flag_overrides_bad_environment(self):
        with mock.patch.dict(os.environ, {"TICTACTOE_LOG_LEVEL": "verbose"}):
            args, _ = main.parse_args(["--log-level", "error"])
        self.assertEqual(args.log_level, "ERROR")

    def test_palette_greys_disabled_text(self):
        palette = main.build_palette()
        color = palette.color(main.QPalette.Disabled, main.QPalette.Text)
        self.assertEqual(color, main.DISABLED_COLOR)


if __name__ == "__main__":
    unittest.main()
