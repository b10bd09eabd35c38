import argparse
import logging
import os
import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt
from PySide6.QtGui import QPalette, QColor
from tictactoe.ui.main_window import TicTacToeWindow

# -----------------------------------------------------------------------------
# PALETTE
# -----------------------------------------------------------------------------

# (role, color) for the active/inactive groups
DARK_PALETTE = (
    (QPalette.Window, QColor(53, 53, 53)),
    (QPalette.WindowText, Qt.white),
    (QPalette.Base, QColor(35, 35, 35)),
    (QPalette.AlternateBase, QColor(53, 53, 53)),
    (QPalette.ToolTipBase, Qt.white),
    (QPalette.ToolTipText, Qt.black),
    (QPalette.Text, Qt.white),
    (QPalette.Button, QColor(66, 66, 66)),
    (QPalette.ButtonText, Qt.white),
    (QPalette.BrightText, Qt.red),
    (QPalette.Highlight, QColor(42, 130, 218)),
    (QPalette.HighlightedText, Qt.white),
)

DISABLED_COLOR = QColor(127, 127, 127)
DISABLED_ROLES = (QPalette.Text, QPalette.ButtonText, QPalette.WindowText)


def build_palette():
    """
    dark theme used by the whole app
    """
    palette = QPalette()
    for role, color in DARK_PALETTE:
        palette.setColor(role, color)
    # greyed-out text for disabled widgets
    for role in DISABLED_ROLES:
        palette.setColor(QPalette.Disabled, role, DISABLED_COLOR)
    return palette


# -----------------------------------------------------------------------------
# COMMAND LINE / LOGGING
# -----------------------------------------------------------------------------

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def parse_args(argv):
    """
    split our flags from the ones Qt understands (-style, -platform, ...)
    """
    parser = argparse.ArgumentParser(description="Two-player Tic-Tac-Toe")
    parser.add_argument('--log-level', type=str.upper, choices=LOG_LEVELS,
                        default=os.environ.get('TICTACTOE_LOG_LEVEL', 'WARNING').upper(),
                        help='logging verbosity (default: %(default)s)')
    args, rest = parser.parse_known_args(argv)
    # choices only checks the command line, not the env default
    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid TICTACTOE_LOG_LEVEL {args.log_level!r} "
                     f"(choose from {', '.join(LOG_LEVELS)})")
    return args, rest


# -----------------------------------------------------------------------------
# ENTRY POINT
# -----------------------------------------------------------------------------

def main(argv=None):
    argv = sys.argv if argv is None else argv
    args, qt_args = parse_args(argv[1:])
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    app = QApplication(argv[:1] + qt_args)
    app.setStyle('Fusion')
    app.setPalette(build_palette())

    window = TicTacToeWindow()
    window.show()
    return app.exec()


if __name__ == '__main__':
    sys.exit(main())
