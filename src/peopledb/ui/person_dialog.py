"""
Add/edit person dialog.

The dialog collects raw field values and hands them to a submit callback,
which is expected to run a command. Validation errors coming back
are shown inside the dialog, which stays open until the data is accepted.
"""

from datetime import date
from typing import Callable, Optional

from PySide6.QtCore import QDate, Slot
from PySide6.QtWidgets import (
    QComboBox,
    QDateEdit,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QVBoxLayout,
)

from peopledb.core.errors import CommandError, ValidationError
from peopledb.core.models import Person, PersonFields
from peopledb.core.sports import Sport, all_sports
from peopledb.infrastructure.logging_config import get_logger


logger = get_logger(__name__)

FIELD_LABELS = {
    "first_name": "First Name",
    "last_name": "Last Name",
    "date_of_birth": "Date of Birth",
    "favorite_sport": "Favorite Sport",
}


class PersonDialog(QDialog):
    """
    Dialog for adding a new person or editing an existing one.
    """

    def __init__(self, submit: Callable[[PersonFields], Person], person: Optional[Person] = None, parent=None):
        """
        Initialize the dialog.

        Args:
            submit: Called with the entered fields when OK is pressed. It must
                return the saved Person or raise CommandError.
            person: Record to edit, or None to add a new one.
            parent: Parent widget.
        """
        super().__init__(parent)

        self._submit = submit
        self._person = person
        self.result_person: Optional[Person] = None

        self._setup_ui()
        if person is not None:
            self._load_person(person)

    def _setup_ui(self):
        """Setup the user interface."""
        self.setWindowTitle("Edit Person" if self._person else "Add Person")
        self.setModal(True)

        layout = QVBoxLayout(self)
        form = QFormLayout()

        self.first_name_edit = QLineEdit(self)
        self.last_name_edit = QLineEdit(self)

        self.date_edit = QDateEdit(self)
        self.date_edit.setCalendarPopup(True)
        self.date_edit.setDisplayFormat("yyyy-MM-dd")
        self.date_edit.setMinimumDate(QDate(1, 1, 1))
        self.date_edit.setMaximumDate(QDate.currentDate())
        self.date_edit.setDate(QDate.currentDate())

        self.sport_combo = QComboBox(self)
        for sport in all_sports():
            self.sport_combo.addItem(sport.display, sport.value)

        form.addRow(FIELD_LABELS["first_name"], self.first_name_edit)
        form.addRow(FIELD_LABELS["last_name"], self.last_name_edit)
        form.addRow(FIELD_LABELS["date_of_birth"], self.date_edit)
        form.addRow(FIELD_LABELS["favorite_sport"], self.sport_combo)
        layout.addLayout(form)

        self.error_label = QLabel(self)
        self.error_label.setWordWrap(True)
        self.error_label.setStyleSheet("color: #e57373;")
        self.error_label.hide()
        layout.addWidget(self.error_label)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel,
            parent=self,
        )
        buttons.accepted.connect(self._on_ok)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        self.resize(380, self.sizeHint().height())

    def _load_person(self, person: Person):
        """Fill the widgets with an existing record."""
        self.first_name_edit.setText(person.first_name)
        self.last_name_edit.setText(person.last_name)
        dob: date = person.date_of_birth
        self.date_edit.setDate(QDate(dob.year, dob.month, dob.day))
        self.sport_combo.setCurrentIndex(self.sport_combo.findData(person.favorite_sport.value))

    def fields(self) -> PersonFields:
        """Current widget values as raw fields."""
        return PersonFields(
            first_name=self.first_name_edit.text(),
            last_name=self.last_name_edit.text(),
            date_of_birth=self.date_edit.date().toString("yyyy-MM-dd"),
            favorite_sport=self.sport_combo.currentData() or Sport.OTHER.value,
        )

    def show_errors(self, messages: list[str]):
        """Show validation messages below the form."""
        self.error_label.setText("\n".join(messages))
        self.error_label.setVisible(bool(messages))

    @Slot()
    def _on_ok(self):
        """Submit the fields; close only if they were accepted."""
        try:
            self.result_person = self._submit(self.fields())
        except CommandError as e:
            if isinstance(e.cause, ValidationError):
                logger.info(f"Person rejected: {e.cause}")
                self.show_errors([self._describe(err.field, err.message) for err in e.cause.errors])
            else:
                logger.error(f"Failed to save person: {e}")
                QMessageBox.critical(self, "Error", f"Failed to save:\n{e}")
            return

        self.accept()

    @staticmethod
    def _describe(field: str, message: str) -> str:
        return f"{FIELD_LABELS.get(field, field)}: {message}"
