import logging
from pathlib import Path
from logging.handlers import RotatingFileHandler
from ticky.common.setup import PATHS, ensure_directory, env_flag
from datetime import datetime

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Maps a level name from settings ("debug", "INFO", ...) to a logging level, falling back to INFO.
def resolve_log_level(name):
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO

def get_logger(
        name = "ticky",
        level = logging.INFO,
        log_dir: Path | None = None,
        max_bytes = 5 * 1024 * 1024,
        backup_count = 5,
        persistent = False,
        console = False,
        historical_debugs: int = 0
) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(level)

    log_dir = log_dir or PATHS.logs
    fmt = logging.Formatter(LOG_FORMAT,LOG_DATE_FORMAT)

    # Setup persistent handler, plus a latest-only handler that is overwritten each run
    persistent_handler_name = f"{name}:persistent"
    if persistent and not any(h.get_name() == persistent_handler_name for h in logger.handlers):
        ensure_directory(log_dir)
        persistent_handler = RotatingFileHandler(
            filename=log_dir / f"{name}.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
            delay=False,
        )
        persistent_handler.setLevel(level)
        persistent_handler.setFormatter(fmt)
        persistent_handler.set_name(persistent_handler_name)
        logger.addHandler(persistent_handler)

    latest_handler_name = f"{name}:latest"
    if persistent and not any(h.get_name() == latest_handler_name for h in logger.handlers):
        latest_handler = logging.FileHandler(
            filename=log_dir / "latest.log",
            mode="w",             # overwrite on each run
            encoding="utf-8",
            delay=False
        )
        latest_handler.setLevel(level)
        latest_handler.setFormatter(fmt)
        latest_handler.set_name(latest_handler_name)
        logger.addHandler(latest_handler)

    # Setup historical debug handler
    historical_debug_handler_name = f"{name}:historical_debug"
    if historical_debugs > 0 and not any(h.get_name() == historical_debug_handler_name for h in logger.handlers):
        historical_debug_path = ensure_directory(log_dir / "debug")
        this_historical_debug_log_path =  historical_debug_path / f"{name}_{datetime.now():%Y-%m-%d_%H-%M-%S}.log"

        historical_debug_handler = logging.FileHandler(
            filename=this_historical_debug_log_path,
            encoding="utf-8",
            delay=False
        )
        historical_debug_handler.setLevel(logging.DEBUG)
        historical_debug_handler.setFormatter(fmt)
        historical_debug_handler.set_name(historical_debug_handler_name)
        logger.addHandler(historical_debug_handler)
        # The debug file wants every record, regardless of the level the other handlers run at.
        logger.setLevel(logging.DEBUG)

        # Prune oldest runs
        runs = sorted(historical_debug_path.glob(f"{name}_*.log"),key=lambda p: p.stat().st_mtime,reverse=True)
        for run in runs[historical_debugs:]:
            try: run.unlink()
            except OSError: pass

    # Setup console handler
    console_handler_name = f"{name}:console"
    if console and not any(h.get_name() == console_handler_name for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(fmt)
        console_handler.set_name(console_handler_name)
        logger.addHandler(console_handler)

    # A library stays silent unless someone asked for output
    null_handler_name = f"{name}:null"
    real_handlers = [h for h in logger.handlers if h.get_name() != null_handler_name]
    if not real_handlers and not any(h.get_name() == null_handler_name for h in logger.handlers):
        null_handler = logging.NullHandler()
        null_handler.set_name(null_handler_name)
        logger.addHandler(null_handler)

    return logger

log = get_logger(
    level=logging.DEBUG if env_flag("TICKY_DEBUG") else logging.INFO,
    persistent=env_flag("TICKY_LOG_FILE"),
    console=env_flag("TICKY_LOG_CONSOLE"),
)
