# Main.py
""""" Entry point for the Exact Calculator.

   Responsibilities:
   - With arguments: evaluate each expression on the command line and print the result
   - Detect run mode (script vs PyInstaller.exe)
   - Verify required files exist in development mode
   - Load configuration and start the Qt GUI

"""""
import sys
from pathlib import Path
from exactcalc import config_manager as config_manager, MathEngine as MathEngine, error as E


# Resolve project root depending on run mode (Script or .exe)

if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent


def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.

      In production (.exe) the files are embedded by the bundler, so this check is skipped.
    """

    package_dir = PROJECT_ROOT / "exactcalc"

    REQUIRED = [
        package_dir / "UI.py",
        package_dir / "MathEngine.py",
        package_dir / "Scanner.py",
        package_dir / "Normalizer.py",
        package_dir / "Evaluator.py",
        package_dir / "Rational.py",
        package_dir / "ScientificEngine.py",
        package_dir / "Formatter.py",
        package_dir / "config_manager.py",
        package_dir / "config.json",
        package_dir / "ui_strings.json",
    ]

    missing_files = []
    for file_path in REQUIRED:
        if not file_path.exists():
            missing_files.append(file_path.name)

    if missing_files:
        print("Error: The following files are missing or in the wrong location:")
        for file_name in missing_files:
            print(f"- {file_name}")
        sys.exit(1)


def run_expressions(problems):
    """Evaluate every problem, print results; returns the exit status (1 if any failed)."""
    exit_status = 0
    for problem in problems:
        try:
            ergebnis, mode = MathEngine.calculate(problem)
        except E.MathError as e:
            print(E.format_diagnostic(e.equation, e.offset), file=sys.stderr)
            print(f"Error {e.code}: {e}", file=sys.stderr)
            exit_status = 1
            continue
        print(("≈ " if mode == MathEngine.MODE_ROUNDED else "") + ergebnis)
    return exit_status


def main():

    """
    Load configuration and start the GUI.
    - Keep this thin: no business logic here.
    """

    all_settings = config_manager.load_setting_value("all")
    print("Config loaded:", all_settings)

    # Imported here so command line evaluation works without a display / Qt
    from exactcalc import UI as UI

    # Delegate control to the UI layer; the UI owns the event loop.
    UI.main()


if __name__ == "__main__":
    if len(sys.argv) > 1:
        sys.exit(run_expressions(sys.argv[1:]))

    # Two explicit modes aid debugging & packaging clarity.
    is_running_as_exe = getattr(sys, 'frozen', False)

    if not is_running_as_exe:
        print("Developer Mode: Checking file paths...")
        check_files_exist()
    else:
        print("Production mode (.exe) is starting...")
    main()
