"""
View models for presenting data in the UI.

View models bridge the gap between domain models and UI components,
providing data in formats suitable for display.
"""

from datetime import date
from typing import Optional

from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex

from peopledb.core.models import Person
from peopledb.infrastructure.logging_config import get_logger


logger = get_logger(__name__)


class PersonTableModel(QAbstractTableModel):
    """
    Table model for displaying people in a QTableView.

    Columns: ID, First Name, Last Name, Age, Favorite Sport
    """

    COLUMNS = ["ID", "First Name", "Last Name", "Age", "Favorite Sport"]

    def __init__(self, records: tuple[Person, ...] = (), parent=None):
        """
        Initialize the table model.

        Args:
            records: Records to display, in order.
            parent: Parent QObject.
        """
        super().__init__(parent)
        self._records: tuple[Person, ...] = tuple(records)
        self._today: Optional[date] = None

    def set_records(self, records: tuple[Person, ...]) -> None:
        """Replace the displayed records with a new snapshot."""
        self.beginResetModel()
        self._records = tuple(records)
        self._today = date.today()
        self.endResetModel()
        logger.debug(f"Table model holds {len(self._records)} records")

    def person_at(self, row: int) -> Optional[Person]:
        """Get the record shown in a row, or None."""
        if 0 <= row < len(self._records):
            return self._records[row]
        return None

    def row_of(self, record_id: int) -> int:
        """Row showing the given id, or -1."""
        for row, person in enumerate(self._records):
            if person.id == record_id:
                return row
        return -1

    def rowCount(self, parent=QModelIndex()) -> int:
        """Return the number of rows."""
        if parent.isValid():
            return 0
        return len(self._records)

    def columnCount(self, parent=QModelIndex()) -> int:
        """Return the number of columns."""
        if parent.isValid():
            return 0
        return len(self.COLUMNS)

    def data(self, index: QModelIndex, role=Qt.ItemDataRole.DisplayRole):
        """Return data for the given index and role."""
        if not index.isValid():
            return None

        person = self._records[index.row()]
        column = index.column()

        if role == Qt.ItemDataRole.DisplayRole:
            if column == 0:
                return str(person.id)
            elif column == 1:
                return person.first_name
            elif column == 2:
                return person.last_name
            elif column == 3:
                return str(person.age(self._today))
            elif column == 4:
                return person.display_sport

        elif role == Qt.ItemDataRole.ToolTipRole and column == 3:
            return f"Born {person.date_of_birth.isoformat()}"

        elif role == Qt.ItemDataRole.TextAlignmentRole and column in (0, 3):
            return int(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)

        return None

    def headerData(self, section: int, orientation: Qt.Orientation, role=Qt.ItemDataRole.DisplayRole):
        """Return header data."""
        if role == Qt.ItemDataRole.DisplayRole:
            if orientation == Qt.Orientation.Horizontal:
                return self.COLUMNS[section]
            else:
                return str(section + 1)

        return None
