#!/usr/bin/env python3
"""
History Calculator - a small four-function calculator with a replayable history.
Keypad and keyboard input feed a single controller; past results can be reused
from the history panel.
"""

import sys
import ctypes
from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QGridLayout, QPushButton, QLabel, QDialog, QDialogButtonBox,
    QFontDialog, QScrollArea, QFrame, QMessageBox, QSpinBox
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont, QKeyEvent, QAction
import qdarktheme

from calc_controller import CalculatorController
from calc_settings import Settings, default_config_path, setup_logging

if sys.platform == "win32":
    ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID(
        "histocalc.histocalc"
    )

# (label, token, row, col)
KEYPAD = [
    ("7", "7", 0, 0), ("8", "8", 0, 1), ("9", "9", 0, 2), ("÷", "/", 0, 3),
    ("4", "4", 1, 0), ("5", "5", 1, 1), ("6", "6", 1, 2), ("×", "*", 1, 3),
    ("1", "1", 2, 0), ("2", "2", 2, 1), ("3", "3", 2, 2), ("-", "-", 2, 3),
    ("0", "0", 3, 0), (".", ".", 3, 1), ("=", "=", 3, 2), ("+", "+", 3, 3),
]

KEY_TOKENS = {
    Qt.Key.Key_Plus: "+",
    Qt.Key.Key_Minus: "-",
    Qt.Key.Key_Asterisk: "*",
    Qt.Key.Key_Slash: "/",
    Qt.Key.Key_Period: ".",
    Qt.Key.Key_Return: "=",
    Qt.Key.Key_Enter: "=",
    Qt.Key.Key_Equal: "=",
    Qt.Key.Key_Backspace: "<",
    Qt.Key.Key_Escape: "ac",
    Qt.Key.Key_Delete: "ac",
}


class SettingsDialog(QDialog):
    """Settings dialog for calculator preferences"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.resize(275, 120)

        layout = QVBoxLayout()

        # History size
        limit_layout = QHBoxLayout()
        limit_layout.addWidget(QLabel("History entries shown:"))
        self.history_limit_spin = QSpinBox()
        self.history_limit_spin.setRange(1, 500)
        self.history_limit_spin.setValue(parent.settings.history_limit)
        limit_layout.addWidget(self.history_limit_spin)
        layout.addLayout(limit_layout)

        # Font selection
        font_layout = QHBoxLayout()
        font_label = QLabel("Display Font:")
        self.font_button = QPushButton("Choose Font...")
        self.font_button.clicked.connect(self.choose_font)
        font_layout.addWidget(font_label)
        font_layout.addWidget(self.font_button)
        font_layout.addStretch()
        layout.addLayout(font_layout)

        layout.addStretch()

        button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok |
            QDialogButtonBox.StandardButton.Cancel
        )
        button_box.accepted.connect(self.accept)
        button_box.rejected.connect(self.reject)
        layout.addWidget(button_box)

        self.setLayout(layout)
        self.selected_font = None

    def choose_font(self):
        """Open font dialog"""
        current_font = self.parent().display.font()
        font, ok = QFontDialog.getFont(current_font, self)
        if ok:
            self.selected_font = font


class HistoryPanel(QFrame):
    """History panel listing past calculations, newest first"""

    def __init__(self, on_use, limit=50, parent=None):
        super().__init__(parent)
        self.on_use = on_use
        self.limit = limit
        self.setFrameStyle(QFrame.Shape.StyledPanel | QFrame.Shadow.Sunken)
        self.setMaximumWidth(320)
        self.setMinimumWidth(320)

        layout = QVBoxLayout()
        layout.setContentsMargins(8, 8, 8, 8)

        title = QLabel("History")
        title_font = QFont()
        title_font.setBold(True)
        title.setFont(title_font)
        layout.addWidget(title)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)

        self.history_widget = QWidget()
        self.history_layout = QVBoxLayout()
        self.history_layout.setSpacing(4)
        self.history_layout.addStretch()
        self.history_widget.setLayout(self.history_layout)

        scroll.setWidget(self.history_widget)
        layout.addWidget(scroll)

        self.setLayout(layout)
        self.history_rows = []
        self.shown = ()

    def make_row(self, index, text):
        row = QWidget()
        row_layout = QHBoxLayout()
        row_layout.setContentsMargins(0, 0, 0, 0)

        label = QLabel(text)
        label.setWordWrap(True)
        label.setStyleSheet("padding: 4px; background-color: #101010; border-radius: 3px;")
        font = QFont()
        font.setPointSize(9)
        label.setFont(font)
        row_layout.addWidget(label, 1)

        use_btn = QPushButton("Use")
        use_btn.setMaximumWidth(50)
        use_btn.clicked.connect(lambda checked, i=index: self.on_use(i))
        row_layout.addWidget(use_btn)

        row.setLayout(row_layout)
        return row

    def set_entries(self, history):
        """Rebuild the rows from a history snapshot"""
        if tuple(history) == self.shown:
            return
        self.clear_rows()

        first = max(0, len(history) - self.limit)
        for index in range(first, len(history)):
            row = self.make_row(index, history[index])
            # Insert at the top (before stretch)
            self.history_layout.insertWidget(0, row)
            self.history_rows.append(row)
        self.shown = tuple(history)

    def clear_rows(self):
        for row in self.history_rows:
            self.history_layout.removeWidget(row)
            row.deleteLater()
        self.history_rows.clear()
        self.shown = ()


class HistoryCalculator(QMainWindow):
    """Main calculator window"""

    def __init__(self, controller=None, config_file=None, settings=None):
        super().__init__()

        self.config_file = config_file or default_config_path()
        self.settings = settings or Settings.load(self.config_file)

        self.controller = controller or CalculatorController()
        self.controller.subscribe(self.render)
        self.controller.subscribe_errors(self.show_error)

        self.init_ui()
        self.apply_settings()
        self.render(self.controller.snapshot())

    def init_ui(self):
        """Initialize the user interface"""
        self.setWindowTitle("History Calculator")

        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QHBoxLayout()
        main_layout.setSpacing(10)

        # Left side - calculator
        calc_layout = QVBoxLayout()
        calc_layout.setSpacing(8)

        display_frame = QFrame()
        display_frame.setFrameStyle(QFrame.Shape.StyledPanel | QFrame.Shadow.Sunken)
        display_layout = QVBoxLayout()
        display_layout.setContentsMargins(5, 5, 5, 5)

        # Pending Operation Indicator
        self.op_label = QLabel("")
        self.op_label.setAlignment(Qt.AlignmentFlag.AlignRight)
        op_font = QFont("Consolas", 12)
        op_font.setBold(True)
        self.op_label.setFont(op_font)
        self.op_label.setStyleSheet("color: #ffa500;")
        display_layout.addWidget(self.op_label)

        self.display = QLabel("0")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        self.display.setFont(QFont("Consolas", 24))
        self.display.setMinimumHeight(60)
        display_layout.addWidget(self.display)

        display_frame.setLayout(display_layout)
        calc_layout.addWidget(display_frame)

        button_layout = QGridLayout()
        button_layout.setSpacing(4)

        for text, token, row, col in KEYPAD:
            btn = self.make_button(text, token)
            if token in "+-*/":
                btn.setStyleSheet(btn.styleSheet() + "QPushButton { background-color: #243036; }")
            elif token == "=":
                btn.setStyleSheet(btn.styleSheet() + "QPushButton { background-color: #1f2b27; font-weight: bold; }")
            button_layout.addWidget(btn, row, col)

        calc_layout.addLayout(button_layout)

        control_layout = QHBoxLayout()
        control_layout.addWidget(self.make_button("AC", "ac"))
        control_layout.addWidget(self.make_button("⬅", "<"))
        calc_layout.addLayout(control_layout)

        main_layout.addLayout(calc_layout)

        # Right side - history panel
        self.history_panel = HistoryPanel(self.use_history_entry, self.settings.history_limit)
        main_layout.addWidget(self.history_panel)

        central.setLayout(main_layout)

        menubar = self.menuBar()

        edit_menu = menubar.addMenu("&Edit")

        copy_action = QAction("&Copy", self)
        copy_action.setShortcut("Ctrl+C")
        copy_action.triggered.connect(self.copy_to_clipboard)
        edit_menu.addAction(copy_action)

        edit_menu.addSeparator()

        settings_action = QAction("&Settings...", self)
        settings_action.triggered.connect(self.show_settings)
        edit_menu.addAction(settings_action)

        help_menu = menubar.addMenu("&Help")

        shortcuts_action = QAction("&Keyboard Shortcuts", self)
        shortcuts_action.triggered.connect(self.show_shortcuts)
        help_menu.addAction(shortcuts_action)

        self.statusBar()
        self.setFixedSize(640, 420)
        self.setWindowFlags(self.windowFlags() & ~Qt.WindowType.WindowMaximizeButtonHint)

    def make_button(self, text, token):
        btn = QPushButton(text)
        btn.setMinimumSize(50, 40)
        btn.setStyleSheet("""
            QPushButton {
                border: 1px solid #a0a0a0;
                border-radius: 3px;
                font-size: 12pt;
            }
        """)
        btn.clicked.connect(lambda checked, t=token: self.controller.send(t))
        return btn

    def render(self, snapshot):
        """Redraw display and history from a controller snapshot"""
        self.display.setText(snapshot.display)
        self.op_label.setText(snapshot.pending)
        self.history_panel.set_entries(snapshot.history)
        self.statusBar().clearMessage()

    def show_error(self, message):
        self.statusBar().showMessage(message, 3000)

    def use_history_entry(self, index):
        self.controller.replay(index)

    def copy_to_clipboard(self):
        """Copy the displayed value"""
        QApplication.clipboard().setText(self.display.text())

    def apply_settings(self):
        font_str = self.settings.display_font
        if font_str:
            font = QFont()
            if font.fromString(font_str):
                self.display.setFont(font)

        self.history_panel.limit = self.settings.history_limit
        self.history_panel.clear_rows()
        self.history_panel.set_entries(self.controller.snapshot().history)

    def show_settings(self):
        """Show settings dialog"""
        dialog = SettingsDialog(self)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            self.settings.history_limit = dialog.history_limit_spin.value()
            if dialog.selected_font:
                self.settings.display_font = dialog.selected_font.toString()
            self.apply_settings()

    def show_shortcuts(self):
        """Show keyboard shortcuts help"""
        shortcuts = """
<h3>Keyboard Shortcuts</h3>
<table>
<tr><td><b>0-9 .</b></td><td>Number entry (numpad supported)</td></tr>
<tr><td><b>+, -, *, /</b></td><td>Basic operations (numpad supported)</td></tr>
<tr><td><b>Enter, =</b></td><td>Equals</td></tr>
<tr><td><b>Backspace</b></td><td>Delete last digit</td></tr>
<tr><td><b>ESC, Delete</b></td><td>Clear all</td></tr>
<tr><td><b>Ctrl+C</b></td><td>Copy display</td></tr>
</table>
        """
        msg = QMessageBox(self)
        msg.setWindowTitle("Keyboard Shortcuts")
        msg.setTextFormat(Qt.TextFormat.RichText)
        msg.setText(shortcuts)
        msg.exec()

    def keyPressEvent(self, event: QKeyEvent):
        """Handle keyboard input"""
        key = event.key()
        text = event.text()

        if text.isdigit() and len(text) == 1:
            self.controller.send(text)
        elif text == "*":
            # Shift+8 on most layouts
            self.controller.send("*")
        elif text == "+":
            self.controller.send("+")
        elif key in KEY_TOKENS:
            self.controller.send(KEY_TOKENS[key])
        else:
            super().keyPressEvent(event)

    def closeEvent(self, event):
        """Handle window close"""
        self.settings.display_font = self.display.font().toString()
        self.settings.save(self.config_file)
        event.accept()


def main():
    config_file = default_config_path()
    settings = Settings.load(config_file)
    setup_logging(settings.log_level)

    app = QApplication(sys.argv)
    qdarktheme.setup_theme()

    calculator = HistoryCalculator(config_file=config_file, settings=settings)
    calculator.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
