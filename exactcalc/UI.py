# UI.py
""""PySide6 front end of the exact calculator.

Widgets
-------
- CalculatorPrototype: display line plus a 7 x 5 button grid
- SettingsDialog: modal dialog, one row per entry in config.json

Flow
----
A button press (or key press) edits the input string. ENTER hands the string to a
Worker running in a threading.Thread; the Worker calls MathEngine.calculate_exact() and
emits job_finished with either the result or the MathError. Calc_result() runs back
on the UI thread and shows the result ('=' exact, '≈' cut off) or an error box with
a caret under the offending character.

'Ans' is replaced by the last exact result (in brackets) before evaluation.
The clipboard button pastes, or copies the display while Shift is held (pyperclip).
"""""

from PySide6 import QtWidgets
from PySide6.QtCore import Qt, QObject, Signal
import html
import sys
import threading
import pyperclip
from . import error as E
from . import config_manager as config_manager
from . import MathEngine as MathEngine


# Settings that are edited with a drop-down instead of a checkbox / input field
SETTING_CHOICES = {
    "decimal_separator": [".", ","],
    "output_format": ["decimal", "fraction", "mixed"],
}

ENTER = "⏎"
SETTINGS = "⚙️"
COPY = "📋"
PASTE = "📑"
UNDO = "↶"
REDO = "↷"
BACKSPACE = "<"
CLEAR = "C"

# Keys that continue a calculation with the previous result
OPERATOR_KEYS = ("+", "-", "*", "/", "^", "!", "^2")

# Characters accepted from the keyboard as they are
TYPED_KEYS = "0123456789.,+-*/^!|() "

# (text, row, column)
BUTTON_LAYOUT = [
    (SETTINGS, 0, 0), (PASTE, 0, 1), (REDO, 0, 2), (UNDO, 0, 3), (BACKSPACE, 0, 4),
    ('pi', 1, 0), ('e', 1, 1), ('|', 1, 2), ('abs(', 1, 3), ('/', 1, 4),
    ('(', 2, 0), (')', 2, 1), ('^', 2, 2), ('!', 2, 3), ('*', 2, 4),
    ('10^(', 3, 0), ('7', 3, 1), ('8', 3, 2), ('9', 3, 3), ('-', 3, 4),
    ('^2', 4, 0), ('4', 4, 1), ('5', 4, 2), ('6', 4, 3), ('+', 4, 4),
    ('1/(', 5, 0), ('1', 5, 1), ('2', 5, 2), ('3', 5, 3), ('Ans', 5, 4),
    (CLEAR, 6, 0), (',', 6, 1), ('0', 6, 2), ('.', 6, 3), (ENTER, 6, 4)
]

# --- Stylesheets ---
ENTER_IDLE_STYLE = "background-color: #007bff; color: white; font-weight: bold;"
ENTER_BUSY_STYLE = "background-color: #FF0000; color: white; font-weight: bold;"

DARK_WIDGET_STYLE = "background-color: #121212; color: white; font-weight: bold;"
DARK_WINDOW_STYLE = "background-color: #121212;"

DARK_DIALOG_STYLE = """
    QDialog {background-color: #121212;}
    QLabel {color: white;}
    QCheckBox {color: white;}
    QComboBox {background-color: #444444; color: white;}
    QLineEdit {background-color: #444444; color: white; border: 1px solid #666666;}
    QDialogButtonBox QPushButton {background-color: #666666; color: white;}"""

DARK_MESSAGE_BOX_STYLE = """
    QMessageBox { background-color: #121212; color: white; }
    QLabel { color: white; }
    QPushButton { background-color: #2e2e2e; color: white; border: 1px solid #444444; padding: 5px 15px; }"""


class Worker(QObject):
    """""

    Lives for one calculation. run_Calc() is the thread target; the outcome goes back
    to the window through job_finished (result or MathError, equation, mode, exact value or None).

    """""

    job_finished = Signal(object, str, int, object)

    def __init__(self, problem):
        super().__init__()
        self.problem = problem

    def run_Calc(self):
        try:
            ausgabe, mode, ergebnis = MathEngine.calculate_exact(self.problem)
        except E.MathError as e:
            # Mode 0: the first argument is the error, not a result
            self.job_finished.emit(e, self.problem, 0, None)
            return
        self.job_finished.emit(ausgabe, self.problem, mode, ergebnis)


class SettingsDialog(QtWidgets.QDialog):
    """""

    Edits config.json. Every setting gets a widget matching its value:
    bool -> checkbox, entry in SETTING_CHOICES -> drop-down, int -> input field.
    Nothing is written unless MathEngine accepts the new combination.

    """""

    settings_saved = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}

        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(320, 260)
        self.main_layout = QtWidgets.QVBoxLayout(self)

        self.setting_value_list = config_manager.load_setting_value("all")
        descriptions = config_manager.load_setting_description("all")

        for key_value, value in self.setting_value_list.items():
            description = descriptions.get(key_value, key_value)
            if isinstance(value, bool):
                self.add_checkbox(key_value, description, value)
            elif key_value in SETTING_CHOICES:
                self.add_choice(key_value, description, value)
            elif isinstance(value, int):
                self.add_number_field(key_value, description, value)

        # --- OK / Cancel ---
        button_box = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel)
        self.main_layout.addWidget(button_box)
        self.main_layout.addStretch(1)
        button_box.accepted.connect(self.save_settings)
        button_box.rejected.connect(self.reject)

        self.setStyleSheet(DARK_DIALOG_STYLE if self.setting_value_list["darkmode"] == True else "")

    # --- Row builders ---
    def add_row(self, label_text, widget):
        row = QtWidgets.QHBoxLayout()
        row.addWidget(QtWidgets.QLabel(label_text))
        row.addWidget(widget)
        row.setStretch(1, 1)
        self.main_layout.addLayout(row)

    def add_checkbox(self, key_value, description, value):
        checkbox = QtWidgets.QCheckBox(description)
        checkbox.setChecked(value)
        self.main_layout.addWidget(checkbox)
        self.widgets[key_value] = checkbox

    def add_choice(self, key_value, description, value):
        combo = QtWidgets.QComboBox()
        combo.addItems(SETTING_CHOICES[key_value])
        combo.setCurrentText(str(value))
        self.add_row(description + ":", combo)
        self.widgets[key_value] = combo

    def add_number_field(self, key_value, description, value):
        input_field = QtWidgets.QLineEdit()
        input_field.setPlaceholderText(str(value))  # empty field keeps the current value
        self.add_row(description + " (min. 0):", input_field)
        self.widgets[key_value] = input_field

    def read_widgets(self):
        """Collect the edited values; raises ValueError for a bad number field."""
        new_settings = dict(self.setting_value_list)
        for key_value, widget in self.widgets.items():
            if isinstance(widget, QtWidgets.QCheckBox):
                new_settings[key_value] = widget.isChecked()
            elif isinstance(widget, QtWidgets.QComboBox):
                new_settings[key_value] = widget.currentText()
            else:
                eingabe = widget.text().strip()
                if eingabe == "":
                    continue
                try:
                    zahl = int(eingabe)
                except ValueError:
                    raise ValueError(f"'{key_value}': '{eingabe}' is not a whole number.")
                if zahl < 0:
                    raise ValueError(f"'{key_value}': {zahl} is too small. Minimum is 0.")
                new_settings[key_value] = zahl
        return new_settings

    def save_settings(self):
        try:
            new_settings = self.read_widgets()
            # The engine must accept the combination before it is written to disk
            MathEngine.Options.from_settings(new_settings)
        except ValueError as e:
            QtWidgets.QMessageBox.critical(self, "Invalid Input", f"{e}\n\nPlease correct your input.")
            return
        except E.ConfigurationError as e:
            QtWidgets.QMessageBox.critical(self, "Invalid Input", f"Error {e.code}: {e.message}")
            return

        if config_manager.save_setting(new_settings) == {}:
            QtWidgets.QMessageBox.critical(self, "Error", f"Error 5002: {E.ERROR_MESSAGES['5002']}config.json")
            return

        self.setting_value_list = new_settings
        self.settings_saved.emit()
        self.accept()


class CalculatorPrototype(QtWidgets.QWidget):
    shift_is_held = False

    def __init__(self):
        super().__init__()

        self.setting_value_list = config_manager.load_setting_value("all")

        # --- State ---
        self.calculator_result = ""  # last result as displayed
        self.ans_value = None  # last exact result, substituted for "Ans"
        self.thread_active = False
        self.undo = ["0"]
        self.redo = []
        self.display_text = "0"
        self.worker_instance = None  # keeps the Worker alive until its signal arrives
        self.button_objects = {}

        # --- Window ---
        self.setWindowTitle("Exact Calculator")
        self.resize(400, 540)
        window_layout = QtWidgets.QVBoxLayout(self)
        grow = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- Display ---
        self.display = QtWidgets.QLineEdit(self.display_text)
        self.display.setReadOnly(True)
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        display_font = self.display.font()
        display_font.setPointSize(28)
        self.display.setFont(display_font)
        self.display.setSizePolicy(grow)
        window_layout.addWidget(self.display, 1)

        # --- Buttons ---
        grid_widget = QtWidgets.QWidget()
        grid = QtWidgets.QGridLayout(grid_widget)
        grid.setSpacing(0)
        grid.setContentsMargins(0, 0, 0, 0)
        window_layout.addWidget(grid_widget, 3)

        for text, row, col in BUTTON_LAYOUT:
            button = QtWidgets.QPushButton(text)
            button.setSizePolicy(grow)
            if text == SETTINGS:
                button.clicked.connect(self.open_settings)
            else:
                button.clicked.connect(lambda checked=False, val=text: self.handle_button_press(val))
            grid.addWidget(button, row, col)
            self.button_objects[text] = button

        self.apply_theme()

    # --- Keyboard ---
    def keyPressEvent(self, event):
        key = event.key()
        if key == Qt.Key.Key_Shift:
            self.set_shift(True)
        elif key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self.handle_button_press(ENTER)
        elif key == Qt.Key.Key_Backspace:
            self.handle_button_press(BACKSPACE)
        elif key == Qt.Key.Key_Escape:
            self.handle_button_press(CLEAR)
        elif event.text() and event.text() in TYPED_KEYS:
            self.handle_button_press(event.text())
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event):
        if event.key() == Qt.Key.Key_Shift:
            self.set_shift(False)
        super().keyReleaseEvent(event)

    def set_shift(self, held):
        """Shift held: the clipboard button copies (📋), otherwise it pastes (📑)."""
        self.shift_is_held = held
        clipboard_button = self.button_objects.get(PASTE)
        if clipboard_button:
            clipboard_button.setText(COPY if held else PASTE)

    # --- Input editing ---
    def handle_button_press(self, value):
        if value == ENTER:
            self.start_calculation()
            return
        if value in (COPY, PASTE):
            self.clipboard_action()
            return

        if value == UNDO:
            if len(self.undo) > 1:
                self.redo.append(self.undo.pop())
                self.display_text = self.undo[-1]
        elif value == REDO:
            if self.redo:
                self.undo.append(self.redo.pop())
                self.display_text = self.undo[-1]
        else:
            if value == BACKSPACE:
                self.display_text = self.display_text[:-1] or "0"
            elif value == CLEAR:
                self.display_text = "0"
            else:
                self.append_input(value)
            self.push_undo()

        self.display.setText(self.display_text)

    def append_input(self, value):
        # After a result, operators continue with 'Ans', anything else starts over
        if self.is_result_shown():
            self.display_text = "Ans" if value in OPERATOR_KEYS else "0"
        if self.display_text == "0" and value not in OPERATOR_KEYS:
            self.display_text = ""
        self.display_text += value

    def clipboard_action(self):
        if self.shift_is_held:
            pyperclip.copy(self.display.text())
            return

        clipboard_text = pyperclip.paste().strip()
        if not clipboard_text:
            return
        if self.display_text == "0" or self.is_result_shown():
            self.display_text = clipboard_text
        else:
            self.display_text += clipboard_text
        self.push_undo()
        self.display.setText(self.display_text)

        if self.setting_value_list["after_paste_enter"] == True:
            self.start_calculation()

    def is_result_shown(self):
        return self.display_text.startswith(("= ", "≈ ")) or " = " in self.display_text or " ≈ " in self.display_text

    def push_undo(self):
        if self.display_text != self.undo[-1]:
            self.undo.append(self.display_text)
            self.redo.clear()

    # --- Calculation ---
    def start_calculation(self):
        if self.thread_active:
            QtWidgets.QMessageBox.warning(self, "Calculator", f"Error 4002: {E.ERROR_MESSAGES['4002']}")
            return
        if self.is_result_shown():
            return

        problem = self.display_text
        if "Ans" in problem:
            if self.ans_value is None:
                QtWidgets.QMessageBox.warning(self, "Calculator", f"Error 4003: {E.ERROR_MESSAGES['4003']}")
                return
            # The exact value, not the display text: "1 1/2" or a cut-off decimal would not read back
            problem = MathEngine.substitute_ans(problem, self.ans_value)

        self.thread_active = True
        self.update_return_button()
        self.display.setText("...")
        QtWidgets.QApplication.processEvents()

        self.worker_instance = Worker(problem)
        self.worker_instance.job_finished.connect(self.Calc_result)
        threading.Thread(target=self.worker_instance.run_Calc, daemon=True).start()

    def Calc_result(self, result, equation, mode, value):
        # mode: 0 error, MODE_ROUNDED ('≈'), MODE_EXACT ('=')
        self.thread_active = False
        self.worker_instance = None
        self.update_return_button()

        if isinstance(result, E.MathError):
            self.show_error(result)
            self.display.setText(self.display_text)
            return

        self.calculator_result = result.strip()
        self.ans_value = value
        sign = "≈" if mode == MathEngine.MODE_ROUNDED else "="
        if self.setting_value_list["show_equation"] == True:
            self.display_text = f"{equation} {sign} {self.calculator_result}"
        else:
            self.display_text = f"{sign} {self.calculator_result}"

        self.display.setText(self.display_text)
        self.push_undo()

    def show_error(self, error):
        headline = E.ERROR_MESSAGES.get(error.code, "Unknown error")
        diagnostic = E.format_diagnostic(error.equation, error.offset)

        error_box = QtWidgets.QMessageBox(self)
        error_box.setIcon(QtWidgets.QMessageBox.Critical)
        error_box.setWindowTitle(E.error_area(error.code))
        error_box.setText(f"Error {error.code}: {headline}")
        # <pre> keeps the caret under the right character
        error_box.setInformativeText(f"Details: {html.escape(error.message)}"
                                     f"<pre>{html.escape(diagnostic)}</pre>")
        error_box.setStandardButtons(QtWidgets.QMessageBox.Ok)
        if self.setting_value_list["darkmode"] == True:
            error_box.setStyleSheet(DARK_MESSAGE_BOX_STYLE)
        error_box.exec()

    # --- Appearance ---
    def update_return_button(self):
        return_button = self.button_objects.get(ENTER)
        if not return_button:
            return
        # Red "X" while busy, blue "⏎" when idle
        if self.thread_active == True:
            return_button.setStyleSheet(ENTER_BUSY_STYLE)
            return_button.setText("X")
        else:
            return_button.setStyleSheet(ENTER_IDLE_STYLE)
            return_button.setText(ENTER)

    def apply_theme(self):
        dark = self.setting_value_list["darkmode"] == True
        button_style = DARK_WIDGET_STYLE if dark else "font-weight: normal;"
        for text, button in self.button_objects.items():
            if text != ENTER:
                button.setStyleSheet(button_style)
        self.setStyleSheet(DARK_WINDOW_STYLE if dark else "")
        self.display.setStyleSheet(DARK_WIDGET_STYLE if dark else "font-weight: bold;")
        self.update_return_button()

    def open_settings(self):
        SettingsDialog(self).exec()  # modal
        # Reload so changes apply immediately
        self.setting_value_list = config_manager.load_setting_value("all")
        self.apply_theme()


def main():
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorPrototype()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
