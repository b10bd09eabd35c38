import logging

from ..game_logic import BoardEngine, PLAYER_X, PLAYER_O, WIN, TIE, CONTINUE
from ..ui.board_widget import BoardWidget, mark_color

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QLabel, QMenuBar, QMenu, QSizePolicy
)
from PySide6.QtGui import QAction, QFont
from PySide6.QtCore import Qt, Slot

logger = logging.getLogger(__name__)

TIE_COLOR = "#eee"


class TicTacToeWindow(QMainWindow):
    """
    main window: renders engine state and forwards clicks/restarts into it
    """
    def __init__(self, engine=None):
        """
        init engine, ui widgets, signals; first round starts right away
        """
        super().__init__()
        self.engine = engine if engine is not None else BoardEngine()
        self.board_widget = BoardWidget(self.engine, parent=self)

        self._setup_ui()
        self.start_round()

    def _setup_ui(self):
        '''window look + layout'''
        self.setWindowTitle("Tic-Tac-Toe")
        self.setStyleSheet("""
            QMainWindow { background-color: #222; }
            QLabel { color: #eee; }
        """)
        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.main_layout = QVBoxLayout(self.central_widget)

        self._create_menu_bar()            # top menu
        self._create_stats_bar()           # win/tie counters
        self.main_layout.addWidget(self.stats_widget)
        self.main_layout.addWidget(self.board_widget, 1)
        self.board_widget.cell_clicked.connect(self._on_cell_clicked)

        self._create_bottom_controls()     # status + restart
        self.main_layout.addWidget(self.controls_bottom_widget)

    def _create_menu_bar(self):
        '''game menu actions'''
        menu_bar = QMenuBar()
        game_menu = QMenu("Game", self)
        self.new_round_action = QAction("New Round", self)
        self.new_round_action.triggered.connect(self.start_round)
        quit_action = QAction("Quit", self)
        quit_action.triggered.connect(self.close)
        game_menu.addAction(self.new_round_action)
        game_menu.addSeparator(); game_menu.addAction(quit_action)
        menu_bar.addMenu(game_menu)
        self.setMenuBar(menu_bar)

    def _create_stats_bar(self):
        # one label per counter, X / ties / O
        self.stats_widget = QWidget()
        hl = QHBoxLayout(self.stats_widget)
        self.x_wins_label = QLabel(); self.o_wins_label = QLabel(); self.ties_label = QLabel()
        self.x_wins_label.setStyleSheet(f"color: {mark_color(PLAYER_X).name()};")
        self.o_wins_label.setStyleSheet(f"color: {mark_color(PLAYER_O).name()};")
        for title, label in (("Player X", self.x_wins_label),
                             ("Ties", self.ties_label),
                             ("Player O", self.o_wins_label)):
            box = QVBoxLayout()
            box.addWidget(QLabel(title), alignment=Qt.AlignCenter)
            box.addWidget(label, alignment=Qt.AlignCenter)
            hl.addLayout(box)
        self._update_stats()

    def _create_bottom_controls(self):
        # status label + restart button
        self.controls_bottom_widget = QWidget()
        hl = QHBoxLayout(self.controls_bottom_widget)
        self.controls_bottom_widget.setStyleSheet("background: transparent;")
        self.message_label = QLabel("")
        f = QFont(); f.setPointSize(12); f.setBold(True); self.message_label.setFont(f)
        self.message_label.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        self.message_label.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        self.restart_button = QPushButton("Restart"); self.restart_button.clicked.connect(self.start_round)
        hl.addWidget(self.message_label); hl.addStretch(1); hl.addWidget(self.restart_button)

    def _update_message(self, text, color):
        # set status text + color
        self.message_label.setStyleSheet(f"color: {color};")
        self.message_label.setText(text)

    def _show_turn(self, player):
        self._update_message(f"Player {player}'s Turn", mark_color(player).name())

    def _update_stats(self):
        stats = self.engine.get_stats()
        self.x_wins_label.setText(f"{stats.wins_for(PLAYER_X)} wins")
        self.o_wins_label.setText(f"{stats.wins_for(PLAYER_O)} wins")
        self.ties_label.setText(str(stats.ties))

    @Slot()
    def start_round(self):
        # clear board, x starts
        event = self.engine.start_round()
        self.board_widget.clear_highlights()
        self.board_widget.set_accept_clicks(True)
        self._show_turn(event.next_player)
        logger.debug("round started, player %s to move", event.next_player)

    def _handle_game_over(self, text, color):
        # end-of-round ui updates
        self._update_message(text, color)
        self.board_widget.set_accept_clicks(False)
        self._update_stats()

    @Slot(int)
    def _on_cell_clicked(self, index):
        res = self.engine.apply_move(index)
        if not res.accepted:
            return  # taken cell or finished round, nothing to show

        self.board_widget.flash_cell(index)
        if res.outcome == WIN:
            self.board_widget.highlight_cells(res.winning_line)
            self._handle_game_over(f"Player {res.winner} Wins!", mark_color(res.winner).name())
            logger.info("player %s won on line %s", res.winner, res.winning_line)
        elif res.outcome == TIE:
            self._handle_game_over("Game Tied!", TIE_COLOR)
            logger.info("round tied")
        elif res.outcome == CONTINUE:
            self._show_turn(res.next_player)
