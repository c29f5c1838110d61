import sys
from ticky.common.logger import log

# Entry point for `python -m ticky` and the `ticky` console script
def run() -> None:
    try:
        # Qt is only needed for the desktop window, not for the library
        from ticky.ui.app import main
        main()
    except SystemExit:
        raise
    except Exception:
        # Full stack trace, always
        log.exception("Uncaught exception in entrypoint, exiting")
        sys.exit(1)

if __name__ == "__main__":
    run()
