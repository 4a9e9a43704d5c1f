from PyQt6.QtWidgets import QDialog, QVBoxLayout, QHBoxLayout, QLabel, QComboBox, QPushButton
from PyQt6.QtCore import pyqtSignal

from graphpresenter.config import THEMES
from graphpresenter.ui.theme import get_theme


class PreferencesDialog(QDialog):
    settings_applied = pyqtSignal(str) # theme

    def __init__(self, parent=None, current_theme="Dark"):
        super().__init__(parent)
        self.setWindowTitle("Preferences")
        self.resize(300, 120)

        self.layout = QVBoxLayout(self)

        # Theme
        theme_layout = QHBoxLayout()
        theme_layout.addWidget(QLabel("Theme:"))
        self.theme_combo = QComboBox()
        self.theme_combo.addItems(list(THEMES))
        self.theme_combo.setCurrentIndex(THEMES.index(current_theme) if current_theme in THEMES else 0)
        theme_layout.addWidget(self.theme_combo)
        self.layout.addLayout(theme_layout)

        # Buttons
        btn_layout = QHBoxLayout()
        self.btn_save = QPushButton("Save")
        self.btn_save.clicked.connect(self.on_save)
        self.btn_cancel = QPushButton("Cancel")
        self.btn_cancel.clicked.connect(self.close)

        btn_layout.addStretch()
        btn_layout.addWidget(self.btn_cancel)
        btn_layout.addWidget(self.btn_save)
        self.layout.addLayout(btn_layout)

        self.apply_style(current_theme)

        # Preview the choice before it is saved
        self.theme_combo.currentTextChanged.connect(self.apply_style)

    def on_save(self):
        self.settings_applied.emit(self.theme_combo.currentText())
        self.accept()

    def apply_style(self, theme_name):
        theme = get_theme(theme_name)
        self.setStyleSheet(f"""
            QDialog {{ background-color: {theme.background.name()}; }}
            QLabel {{ color: {theme.text.name()}; }}
            QComboBox {{ background-color: {theme.button_background.name()}; color: {theme.button_text.name()}; padding: 5px; }}
            QPushButton {{ background-color: {theme.node_border.name()}; color: white; padding: 5px 15px; border: none; }}
        """)
