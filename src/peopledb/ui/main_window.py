"""
Main application window.

A table editor for one people file. Menu and toolbar actions build commands
and run them through the command layer; the window only renders the results.
"""

from pathlib import Path
from typing import Optional

from PySide6.QtCore import Slot
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QAbstractItemView,
    QApplication,
    QFileDialog,
    QHeaderView,
    QMainWindow,
    QMessageBox,
    QTableView,
)
from qt_material import apply_stylesheet

from peopledb import __version__
from peopledb.config.settings import get_settings, get_settings_manager
from peopledb.core.commands import DeleteCommand, EditCommand, NewCommand, RecordRef, execute
from peopledb.core.errors import CommandError, CorruptRowError, StoreError
from peopledb.core.models import Person
from peopledb.core.store import PeopleStore
from peopledb.infrastructure.logging_config import get_logger
from peopledb.infrastructure.paths import get_default_database_path
from peopledb.ui.person_dialog import PersonDialog
from peopledb.ui.view_models import PersonTableModel


logger = get_logger(__name__)

APP_NAME = "People DB"
CSV_FILTER = "CSV files (*.csv);;All files (*)"


class MainWindow(QMainWindow):
    """
    Main application window.

    Owns the store of the currently open file. Opening another file replaces
    the store; nothing outside this window holds on to it.
    """

    def __init__(self, parent=None):
        """Initialize the main window."""
        super().__init__(parent)

        self._store: Optional[PeopleStore] = None
        self._model = PersonTableModel(parent=self)

        self._setup_ui()
        self._connect_signals()
        self._update_ui()

        logger.info("MainWindow initialized")

    def _setup_ui(self):
        """Setup the user interface."""
        self.setWindowTitle(APP_NAME)

        settings = get_settings()
        self.resize(settings.window_width, settings.window_height)

        self.table_view = QTableView(self)
        self.table_view.setModel(self._model)
        self.table_view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table_view.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.table_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table_view.setSortingEnabled(False)
        self.table_view.verticalHeader().setVisible(False)
        self.table_view.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        self.setCentralWidget(self.table_view)

        # File menu
        self.action_new = QAction("&New", self)
        self.action_new.setShortcut(QKeySequence.StandardKey.New)
        self.action_open = QAction("&Open...", self)
        self.action_open.setShortcut(QKeySequence.StandardKey.Open)
        self.action_exit = QAction("E&xit", self)
        self.action_exit.setShortcut(QKeySequence.StandardKey.Quit)

        file_menu = self.menuBar().addMenu("&File")
        file_menu.addAction(self.action_new)
        file_menu.addAction(self.action_open)
        self.recent_menu = file_menu.addMenu("Open &Recent")
        file_menu.addSeparator()
        file_menu.addAction(self.action_exit)

        # People menu
        self.action_add = QAction("&Add", self)
        self.action_add.setShortcut("Ctrl+Shift+A")
        self.action_edit = QAction("&Edit", self)
        self.action_edit.setShortcut("Ctrl+E")
        self.action_delete = QAction("&Delete", self)
        self.action_delete.setShortcut(QKeySequence.StandardKey.Delete)

        people_menu = self.menuBar().addMenu("&People")
        people_menu.addAction(self.action_add)
        people_menu.addAction(self.action_edit)
        people_menu.addAction(self.action_delete)

        # Help menu
        self.action_about = QAction("&About", self)
        help_menu = self.menuBar().addMenu("&Help")
        help_menu.addAction(self.action_about)

        toolbar = self.addToolBar("People")
        toolbar.setObjectName("peopleToolbar")
        toolbar.addAction(self.action_add)
        toolbar.addAction(self.action_edit)
        toolbar.addAction(self.action_delete)

        self._update_recent_menu()

    def _connect_signals(self):
        """Connect signals and slots."""
        self.action_new.triggered.connect(self.new_file)
        self.action_open.triggered.connect(self.open_file_dialog)
        self.action_exit.triggered.connect(self.close)
        self.action_add.triggered.connect(self.add_person)
        self.action_edit.triggered.connect(self.edit_person)
        self.action_delete.triggered.connect(self.delete_person)
        self.action_about.triggered.connect(self.show_about)

        self.table_view.doubleClicked.connect(lambda _index: self.edit_person())
        self.table_view.selectionModel().selectionChanged.connect(lambda *_: self._update_actions())

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def _update_recent_menu(self):
        """Rebuild the Open Recent submenu from settings."""
        self.recent_menu.clear()
        recent_files = get_settings().recent_files

        for path in recent_files:
            action = self.recent_menu.addAction(path)
            action.triggered.connect(lambda checked=False, p=path: self.open_file(Path(p)))

        self.recent_menu.setEnabled(bool(recent_files))

    @Slot()
    def new_file(self):
        """Ask for a location and start an empty people file there."""
        path, _ = QFileDialog.getSaveFileName(
            self, "New People File", str(get_default_database_path()), CSV_FILTER
        )
        if not path:
            return

        try:
            store = PeopleStore.create(Path(path))
        except StoreError as e:
            logger.error(f"Failed to create {path}: {e}")
            QMessageBox.critical(self, "Error", f"Failed to create file:\n{e}")
            return

        self._set_store(store)

    @Slot()
    def open_file_dialog(self):
        """Show a file picker and open the selected file."""
        path, _ = QFileDialog.getOpenFileName(self, "Open People File", "", CSV_FILTER)
        if path:
            self.open_file(Path(path))

    def open_file(self, path: Path):
        """
        Load a people file and show it.

        A corrupt file is never partially shown; the user may start a new
        file instead.

        Args:
            path: CSV file to open.
        """
        logger.info(f"Opening {path}")
        try:
            store = PeopleStore.load(path)
        except CorruptRowError as e:
            logger.error(f"Corrupt people file {path}: {e}")
            reply = QMessageBox.question(
                self,
                "Corrupt File",
                f"The file could not be read:\n{e}\n\nCreate a new file instead?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                QMessageBox.StandardButton.No,
            )
            if reply == QMessageBox.StandardButton.Yes:
                self.new_file()
            return
        except StoreError as e:
            logger.error(f"Failed to open {path}: {e}")
            QMessageBox.critical(self, "Error", f"Failed to open file:\n{e}")
            return

        self._set_store(store)

    def _set_store(self, store: PeopleStore):
        self._store = store
        get_settings_manager().add_recent_file(str(store.path))
        self._update_recent_menu()
        self._update_ui()

    # ------------------------------------------------------------------
    # People
    # ------------------------------------------------------------------

    def _selected_person(self) -> Optional[Person]:
        rows = self.table_view.selectionModel().selectedRows()
        if not rows:
            return None
        return self._model.person_at(rows[0].row())

    def _run_fields_command(self, command) -> Person:
        """Execute an add/edit command for PersonDialog and refresh the table."""
        result = execute(self._store, command)
        self._update_ui(select_id=result.record.id)
        return result.record

    @Slot()
    def add_person(self):
        """Open the dialog for a new person."""
        if self._store is None:
            return

        dialog = PersonDialog(lambda fields: self._run_fields_command(NewCommand(fields)), parent=self)
        if dialog.exec() and dialog.result_person:
            logger.info(f"Added person {dialog.result_person.id}")

    @Slot()
    def edit_person(self):
        """Open the dialog for the selected person."""
        person = self._selected_person()
        if self._store is None or person is None:
            return

        target = RecordRef.by_id(person.id)
        dialog = PersonDialog(
            lambda fields: self._run_fields_command(EditCommand(target, fields)),
            person=person,
            parent=self,
        )
        if dialog.exec() and dialog.result_person:
            logger.info(f"Edited person {person.id}")

    @Slot()
    def delete_person(self):
        """Delete the selected person after confirmation."""
        person = self._selected_person()
        if self._store is None or person is None:
            return

        reply = QMessageBox.question(
            self,
            "Delete Person",
            f"Are you sure you want to delete {person.full_name}?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        if reply != QMessageBox.StandardButton.Yes:
            return

        try:
            execute(self._store, DeleteCommand(RecordRef.by_id(person.id)))
        except CommandError as e:
            logger.error(f"Failed to delete person {person.id}: {e}")
            QMessageBox.critical(self, "Error", f"Failed to delete:\n{e}")
        self._update_ui()

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def _update_ui(self, select_id: Optional[int] = None):
        """Refresh table, title, status bar and action states from the store."""
        records = self._store.list_records() if self._store else ()
        self._model.set_records(records)

        if select_id is not None:
            row = self._model.row_of(select_id)
            if row >= 0:
                self.table_view.selectRow(row)

        if self._store is None:
            self.setWindowTitle(APP_NAME)
            self.statusBar().showMessage("No people loaded")
        else:
            self.setWindowTitle(f"{self._store.path.name} - {APP_NAME}")
            noun = "person" if len(records) == 1 else "people"
            self.statusBar().showMessage(f"{self._store.path}  |  {len(records)} {noun}")

        self._update_actions()

    def _update_actions(self):
        has_store = self._store is not None
        has_selection = has_store and self._selected_person() is not None
        self.action_add.setEnabled(has_store)
        self.action_edit.setEnabled(has_selection)
        self.action_delete.setEnabled(has_selection)

    def apply_theme(self, theme: str):
        """
        Apply a qt_material theme to the application.

        Args:
            theme: Theme file name, e.g. 'dark_teal.xml'.
        """
        app = QApplication.instance()
        if app is None:
            return

        if not theme.endswith('.xml'):
            theme = f"{theme}.xml"

        try:
            apply_stylesheet(app, theme=theme, invert_secondary=theme.startswith('light_'))
            logger.info(f"Theme applied: {theme}")
        except (OSError, ValueError, KeyError) as e:
            logger.error(f"Failed to apply theme {theme}: {e}")

    @Slot()
    def show_about(self):
        """Show the About box."""
        QMessageBox.about(
            self,
            f"About {APP_NAME}",
            f"<b>{APP_NAME}</b> {__version__}<br>"
            "A small personal-records database stored as CSV.",
        )

    def closeEvent(self, event):
        """Handle window close event."""
        settings_manager = get_settings_manager()
        settings_manager.update(
            window_width=self.width(),
            window_height=self.height()
        )

        logger.info(f"Main window closing (size: {self.width()}x{self.height()})")
        event.accept()
