"""Main entry point for the SimpleEdit Markdown editor."""

import asyncio
from datetime import datetime, timezone
import glob
import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from types import TracebackType

from qasync import QEventLoop, QApplication  # type: ignore[import-untyped]

from simpleedit.app_context import AppContext
from simpleedit.main_window import MainWindow
from simpleedit.user_manager import UserManager


def setup_logging() -> None:
    """Configure application logging with timestamped files and rotation."""
    log_dir = os.path.join(os.path.expanduser(f"~/{UserManager.USER_DIR}"), "logs")
    os.makedirs(log_dir, exist_ok=True)

    # Generate timestamp for log filename
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d-%H-%M-%S-%f")[:23]
    log_file = os.path.join(log_dir, f"{timestamp}.log")

    # Keep up to 50 log files, max 1MB each
    handler = RotatingFileHandler(
        log_file,
        maxBytes=1024*1024,
        backupCount=49,
        encoding='utf-8'
    )

    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[handler]
    )

    cleanup_old_logs(log_dir, max_logs=50)


def cleanup_old_logs(log_dir: str, max_logs: int) -> None:
    """Remove oldest log files if we exceed maximum count."""
    log_files = glob.glob(os.path.join(log_dir, "*.log*"))
    log_files.sort(key=os.path.getctime)

    while len(log_files) > max_logs:
        oldest = log_files.pop(0)
        try:
            os.remove(oldest)

        except OSError as e:
            logging.getLogger("SimpleEdit").warning("Could not remove old log %s: %s", oldest, str(e))


def install_global_exception_handler() -> None:
    """Install a global exception handler for uncaught exceptions."""
    logger = logging.getLogger('GlobalExceptionHandler')

    def handle_exception(
        exc_type: type[BaseException],
        exc_value: BaseException,
        exc_traceback: TracebackType | None
    ) -> None:
        """Handle uncaught exceptions and log them."""
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        logger.critical(
            "Uncaught exception",
            exc_info=(exc_type, exc_value, exc_traceback),
            stack_info=True
        )

    sys.excepthook = handle_exception


def main() -> int:
    """Main function to run the editor."""
    setup_logging()
    install_global_exception_handler()

    app = QApplication(sys.argv)
    app.setApplicationName("SimpleEdit")

    # Create and set event loop
    loop = QEventLoop(app)
    asyncio.set_event_loop(loop)

    context = AppContext.create()
    window = MainWindow(context)
    if len(sys.argv) > 1:
        window.open_file(sys.argv[1])

    window.show()

    try:
        with loop:
            loop.run_forever()

    except KeyboardInterrupt:
        return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
