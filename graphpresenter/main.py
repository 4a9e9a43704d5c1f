import logging
import os
import sys

from PyQt6.QtWidgets import QApplication, QFileDialog, QHBoxLayout, QLabel, QMainWindow, QMessageBox, QPushButton, QVBoxLayout, QWidget
from PyQt6.QtGui import QAction, QColor, QPalette
from PyQt6.QtCore import Qt

from graphpresenter.common import ClickTarget
from graphpresenter.config import APP_NAME, Settings
from graphpresenter.demo_service import DemoGraphService
from graphpresenter.graph_loader import SUPPORTED_EXTENSIONS, GraphLoadError, layout_positions, load_graph
from graphpresenter.ui.graph_widget import GraphWidget
from graphpresenter.ui.preferences import PreferencesDialog

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, settings=None):
        super().__init__()
        self.settings = settings or Settings()
        self.setWindowTitle(f"{APP_NAME} - Graph Explorer")
        self.resize(1200, 800)

        # State
        self.current_theme = self.settings.theme

        # Setup UI
        self.init_ui()
        self.setup_theme(self.current_theme)

        # Setup Logic
        size = (self.graph_widget.width(), self.graph_widget.height())
        self.service = DemoGraphService(*size)
        self._unsubscribe = [
            self.graph_widget.events.subscribe_to_node_clicks(self.on_node_clicked),
            self.graph_widget.events.subscribe_to_link_clicks(self.on_link_clicked),
        ]
        self.update_graph()

    def init_ui(self):
        # Central Widget
        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)

        # Main Layout
        self.main_layout = QVBoxLayout(self.central_widget)
        self.main_layout.setContentsMargins(0, 0, 0, 0)
        self.main_layout.setSpacing(0)

        # Command bar
        self.command_bar = QWidget()
        command_layout = QHBoxLayout(self.command_bar)
        command_layout.setContentsMargins(5, 5, 5, 5)

        self.btn_clear_all = QPushButton("Remove all nodes")
        self.btn_clear_all.clicked.connect(lambda: self.clear_graph(False))
        command_layout.addWidget(self.btn_clear_all)

        self.btn_clear_unpinned = QPushButton("Remove unpinned nodes")
        self.btn_clear_unpinned.clicked.connect(lambda: self.clear_graph(True))
        command_layout.addWidget(self.btn_clear_unpinned)

        command_layout.addStretch()
        self.main_layout.addWidget(self.command_bar)

        # Graph
        self.graph_widget = GraphWidget(size=(1200, 740), frame_ms=self.settings.frame_ms, theme=self.current_theme)
        self.main_layout.addWidget(self.graph_widget, 1)

        # Info Bar
        self.info_label = QLabel("Hover a node and click an arrow to expand it. Drag a node to pin it, click it to release.")
        self.main_layout.addWidget(self.info_label)

        # Menu
        self.create_menu()

    def create_menu(self):
        menu = self.menuBar()
        menu.clear()

        file_menu = menu.addMenu("&File")

        open_action = QAction("&Open graph file...", self)
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self.open_file_dialog)
        file_menu.addAction(open_action)

        exit_action = QAction("E&xit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        edit_menu = menu.addMenu("&Edit")
        pref_action = QAction("&Preferences...", self)
        pref_action.triggered.connect(self.open_preferences)
        edit_menu.addAction(pref_action)

        view_menu = menu.addMenu("&View")
        reset_action = QAction("&Reset view", self)
        reset_action.triggered.connect(self.graph_widget.reset_view)
        view_menu.addAction(reset_action)

    def update_graph(self):
        self.graph_widget.update_graph(self.service.graph_data())

    def clear_graph(self, keep_pinned):
        self.service.clear(keep_pinned)
        self.update_graph()
        self.info_label.setText("Removed unpinned nodes." if keep_pinned else "Removed all nodes.")

    def on_node_clicked(self, event):
        if event.click_target == ClickTarget.CENTER:
            self.info_label.setText(event.node.details)
            return

        self.service.expand(event.node, event.click_target)
        self.update_graph()
        self.info_label.setText(f"Expanded {event.node.label} {event.click_target.value}.")

    def on_link_clicked(self, event):
        self.info_label.setText(event.link.details or event.link.label or f"Link {event.link.id}")

    def open_preferences(self):
        dlg = PreferencesDialog(self, self.current_theme)
        dlg.settings_applied.connect(self.apply_preferences)
        dlg.exec()

    def apply_preferences(self, theme):
        if theme != self.current_theme:
            self.setup_theme(theme)
            self.current_theme = theme

    def setup_theme(self, theme_name):
        app = QApplication.instance()
        app.setStyle("Fusion")

        palette = QPalette()
        if theme_name == "Dark":
            palette.setColor(QPalette.ColorRole.Window, QColor(53, 53, 53))
            palette.setColor(QPalette.ColorRole.WindowText, Qt.GlobalColor.white)
            palette.setColor(QPalette.ColorRole.Base, QColor(25, 25, 25))
            palette.setColor(QPalette.ColorRole.Text, Qt.GlobalColor.white)
            palette.setColor(QPalette.ColorRole.Button, QColor(53, 53, 53))
            palette.setColor(QPalette.ColorRole.ButtonText, Qt.GlobalColor.white)
            palette.setColor(QPalette.ColorRole.ToolTipBase, Qt.GlobalColor.black)
            palette.setColor(QPalette.ColorRole.ToolTipText, Qt.GlobalColor.white)
            palette.setColor(QPalette.ColorRole.Highlight, QColor(42, 130, 218))
            bg, fg, bd = "#252526", "#ccc", "#3e3e3e"
        else:
            palette.setColor(QPalette.ColorRole.Window, QColor(240, 240, 240))
            palette.setColor(QPalette.ColorRole.WindowText, Qt.GlobalColor.black)
            palette.setColor(QPalette.ColorRole.Base, Qt.GlobalColor.white)
            palette.setColor(QPalette.ColorRole.Text, Qt.GlobalColor.black)
            palette.setColor(QPalette.ColorRole.Button, QColor(240, 240, 240))
            palette.setColor(QPalette.ColorRole.ButtonText, Qt.GlobalColor.black)
            palette.setColor(QPalette.ColorRole.ToolTipBase, Qt.GlobalColor.white)
            palette.setColor(QPalette.ColorRole.ToolTipText, Qt.GlobalColor.black)
            palette.setColor(QPalette.ColorRole.Highlight, QColor(76, 163, 224))
            bg, fg, bd = "#e0e0e0", "#333", "#ccc"

        app.setPalette(palette)
        self.graph_widget.set_theme(theme_name)
        self.info_label.setStyleSheet(f"padding: 5px; background-color: {bg}; color: {fg}; border-top: 1px solid {bd};")

    def open_file_dialog(self):
        patterns = " ".join(f"*{ext}" for ext in SUPPORTED_EXTENSIONS)
        fname, _ = QFileDialog.getOpenFileName(self, "Open graph file", "", f"Graphs ({patterns});;All Files (*)")
        if fname:
            self.load_graph_file(fname)

    def load_graph_file(self, path):
        self.info_label.setText(f"Loading {os.path.basename(path)}...")
        QApplication.processEvents() # Force update

        try:
            graph = load_graph(path)
        except GraphLoadError as e:
            logger.exception("Graph import failed")
            QMessageBox.critical(self, "Error", str(e))
            self.info_label.setText("Error")
            return

        positions = layout_positions(graph, self.graph_widget.width(), self.graph_widget.height())
        self.service.import_graph(graph, positions)
        self.update_graph()
        self.graph_widget.reset_view()
        self.info_label.setText(f"Loaded {os.path.basename(path)}: {graph.number_of_nodes()} nodes, {graph.number_of_edges()} edges")

    def closeEvent(self, event):
        for dispose in self._unsubscribe:
            dispose()
        super().closeEvent(event)


def main():
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    window = MainWindow(settings)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
