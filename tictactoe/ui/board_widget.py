from itertools import count

from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import QSize, Signal, QPointF, QRectF, QTimer
from PySide6.QtGui import QPainter, QColor, QPen

from ..game_logic import BOARD_CELLS, PLAYER_X

BOARD_SIZE = 3

# -----------------------------------------------------------------------------
# COLOR / TIMING CONSTANTS
# -----------------------------------------------------------------------------

X_COLOR = QColor("#ff61ef")
O_COLOR = QColor("#61efff")
BACKGROUND_COLOR = QColor("#333")
GRID_COLOR = QColor("#555")
HIGHLIGHT_COLOR = QColor("#4a4a22")
MOVE_FLASH_COLOR = QColor("#444")
MOVE_ANIMATION_MS = 300


def mark_color(mark):
    return X_COLOR if mark == PLAYER_X else O_COLOR


class BoardWidget(QWidget):
    """
    custom widget to draw and click on the 3x3 board
    """
    cell_clicked = Signal(int)  # emits cell index 0-8 on click

    def __init__(self, engine, parent=None):
        super().__init__(parent)
        self.engine = engine            # read-only use, never mutated here
        self.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        self.setMinimumSize(QSize(150, 150))
        self._accept_clicks = True      # toggle click handling
        self._highlighted = ()          # winning line cells
        self._flashing = {}             # cell -> token of its pending flash timer
        self._flash_tokens = count(1)

    def set_accept_clicks(self, accept):
        # enable/disable user input
        self._accept_clicks = accept

    def accepts_clicks(self):
        return self._accept_clicks

    def highlighted_cells(self):
        return tuple(self._highlighted)

    def flashing_cells(self):
        return frozenset(self._flashing)

    def highlight_cells(self, cells):
        self._highlighted = tuple(cells)
        self.update()

    def clear_highlights(self):
        # new round: drop winning line + pending flashes
        self._highlighted = ()
        self._flashing.clear()
        self.update()

    def flash_cell(self, index):
        """
        briefly mark a freshly placed cell
        """
        token = next(self._flash_tokens)
        self._flashing[index] = token
        self.update()
        # bound to this widget, never fires after it is gone
        QTimer.singleShot(MOVE_ANIMATION_MS, self, lambda: self._end_flash(index, token))

    def _end_flash(self, index, token):
        # a newer flash on the same cell owns it now
        if self._flashing.get(index) != token:
            return
        del self._flashing[index]
        self.update()

    def heightForWidth(self, width):
        # keep square shape
        return width

    def hasHeightForWidth(self):
        return True

    def _geometry(self):
        w, h = self.width(), self.height()
        side = min(w, h)
        return (w - side) / 2, (h - side) / 2, side

    def cell_at(self, x, y):
        """
        map widget coords to a cell index, None if outside the grid
        """
        ox, oy, side = self._geometry()
        if side <= 0 or not (ox <= x < ox + side and oy <= y < oy + side):
            return None
        cell = side / BOARD_SIZE
        col = int((x - ox) // cell); row = int((y - oy) // cell)
        # clamp to valid range
        row = max(0, min(row, BOARD_SIZE - 1)); col = max(0, min(col, BOARD_SIZE - 1))
        return row * BOARD_SIZE + col

    def paintEvent(self, event):
        """
        draw cell highlights, grid and X/O marks
        """
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.Antialiasing, True)
            offset_x, offset_y, side = self._geometry()
            painter.fillRect(self.rect(), BACKGROUND_COLOR)
            cell_size = side / BOARD_SIZE
            board = self.engine.board

            # cell backgrounds first so grid + marks sit on top
            for index in range(BOARD_CELLS):
                if index in self._highlighted:
                    fill = HIGHLIGHT_COLOR
                elif index in self._flashing:
                    fill = MOVE_FLASH_COLOR
                else:
                    continue
                r, c = divmod(index, BOARD_SIZE)
                painter.fillRect(QRectF(offset_x + c*cell_size, offset_y + r*cell_size,
                                        cell_size, cell_size), fill)

            # grid lines
            painter.setPen(QPen(GRID_COLOR, 2))
            for i in range(1, BOARD_SIZE):
                x = offset_x + i*cell_size
                painter.drawLine(int(x), int(offset_y), int(x), int(offset_y+side))
                y = offset_y + i*cell_size
                painter.drawLine(int(offset_x), int(y), int(offset_x+side), int(y))

            # marks
            for index, sym in enumerate(board):
                if not sym: continue
                r, c = divmod(index, BOARD_SIZE)
                cx = offset_x + c*cell_size + cell_size/2
                cy = offset_y + r*cell_size + cell_size/2
                rad = cell_size/2 * 0.6
                painter.setPen(QPen(mark_color(sym), 4))
                if sym == PLAYER_X:
                    # two crossing lines
                    painter.drawLine(QPointF(cx-rad, cy-rad), QPointF(cx+rad, cy+rad))
                    painter.drawLine(QPointF(cx+rad, cy-rad), QPointF(cx-rad, cy+rad))
                else:
                    painter.drawEllipse(QPointF(cx, cy), rad, rad)
        finally:
            painter.end()

    def mouseReleaseEvent(self, event):
        """
        handle clicks: map coords to a cell and emit
        """
        if not self._accept_clicks:
            return
        pos = event.position()
        index = self.cell_at(pos.x(), pos.y())
        if index is not None:
            self.cell_clicked.emit(index)  # notify main window
