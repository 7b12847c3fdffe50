# Qt entry for `python -m app`
from qt.qt_app import run_qt

def main() -> None:
    run_qt()

if __name__ == "__main__":
    main()
