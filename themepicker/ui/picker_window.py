"""Theme picker window: a single-selection list with a details panel."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtCore import QEvent, QObject, Qt, Signal
from PySide6.QtGui import QKeyEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from themepicker.errors import format_error_for_user

if TYPE_CHECKING:
    from themepicker.core.switcher import SwitchReport, ThemeSwitcher
    from themepicker.themes.models import ThemeDirectory
    from themepicker.themes.registry import ThemeRegistry


class ThemePickerWindow(QWidget):
    """Lists installed themes and applies the selected one."""

    theme_applied = Signal(str)

    def __init__(
        self,
        registry: ThemeRegistry,
        switcher: ThemeSwitcher,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._registry = registry
        self._switcher = switcher
        self.setWindowTitle("Theme Picker")
        self.setMinimumSize(480, 360)
        self._setup_ui()
        self.reload_themes()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)

        self._theme_list = QListWidget()
        self._theme_list.currentRowChanged.connect(self._update_details)
        self._theme_list.installEventFilter(self)
        self._theme_list.itemActivated.connect(lambda _item: self.apply_selected())
        layout.addWidget(self._theme_list, 1)

        self._details = QLabel("")
        self._details.setObjectName("StatusDetail")
        self._details.setWordWrap(True)
        self._details.setMinimumHeight(60)
        layout.addWidget(self._details)

        self._status = QLabel("j/k to move, g/G for top/bottom, Enter to select, q to quit")
        self._status.setObjectName("StatusMessage")
        self._status.setWordWrap(True)

        self._reload_btn = QPushButton("Reload Themes")
        self._reload_btn.clicked.connect(self.reload_themes)
        self._apply_btn = QPushButton("Apply")
        self._apply_btn.clicked.connect(self.apply_selected)

        row = QHBoxLayout()
        row.setContentsMargins(0, 0, 0, 0)
        row.addWidget(self._status, 1)
        row.addWidget(self._reload_btn)
        row.addWidget(self._apply_btn)
        layout.addLayout(row)

    def reload_themes(self) -> list[str]:
        self._registry.reload()
        self._theme_list.clear()
        for theme in self._registry.list_themes():
            item = QListWidgetItem(theme.name)
            item.setData(Qt.ItemDataRole.UserRole, theme.dir_name)
            item.setData(Qt.ItemDataRole.ToolTipRole, theme.description)
            self._theme_list.addItem(item)
        if self._theme_list.count():
            self._theme_list.setCurrentRow(0)
        self._apply_btn.setEnabled(self._theme_list.count() > 0)
        self._update_details()
        return self._registry.load_errors()

    def selected_theme(self) -> ThemeDirectory | None:
        item = self._theme_list.currentItem()
        if item is None:
            return None
        return self._registry.get_theme(item.data(Qt.ItemDataRole.UserRole))

    def select_row(self, row: int) -> None:
        count = self._theme_list.count()
        if count:
            self._theme_list.setCurrentRow(max(0, min(row, count - 1)))

    def apply_selected(self) -> SwitchReport | None:
        theme = self.selected_theme()
        if theme is None:
            return None
        report = self._switcher.switch(theme.path)
        if report.error is not None:
            self._status.setText(f"Error setting theme: {format_error_for_user(report.error)}")
            return report
        if report.warnings:
            self._status.setText(
                f"Applied {theme.name} with warnings: "
                + "; ".join(format_error_for_user(item) for item in report.warnings)
            )
        else:
            self._status.setText(f"Applied theme: {theme.name}")
        self.theme_applied.emit(theme.dir_name)
        return report

    def status_text(self) -> str:
        return self._status.text()

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if not self._handle_key(event):
            super().keyPressEvent(event)

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        # The list has focus most of the time; take the picker keys before it does.
        if watched is self._theme_list and event.type() == QEvent.Type.KeyPress:
            if self._handle_key(event):
                return True
        return super().eventFilter(watched, event)

    def _handle_key(self, event: QKeyEvent) -> bool:
        key = event.key()
        row = self._theme_list.currentRow()
        if key in (Qt.Key.Key_Q, Qt.Key.Key_Escape):
            self.close()
        elif key == Qt.Key.Key_J:
            self.select_row(row + 1)
        elif key == Qt.Key.Key_K:
            self.select_row(row - 1)
        elif key == Qt.Key.Key_G and event.modifiers() & Qt.KeyboardModifier.ShiftModifier:
            self.select_row(self._theme_list.count() - 1)
        elif key == Qt.Key.Key_G:
            self.select_row(0)
        elif key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self.apply_selected()
        else:
            return False
        return True

    def _update_details(self, *_args) -> None:
        theme = self.selected_theme()
        self._details.setText(theme.description if theme is not None else "")
