import os
import sys
from pathlib import Path
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}

# Lil helper function to create missing directories if missing, and optionally error out when a path
# doesn't exist.
def ensure_directory(path: Path,must_exist=False):
    if must_exist:
        if not path.exists():
            raise FileNotFoundError(f"Required directory is missing: {path}")
        if not path.is_dir():
            raise NotADirectoryError(f"Expected a directory, got a file: {path}")
    else:
        path.mkdir(parents=True,exist_ok=True)
    return path

# Reads an on/off switch from the environment, e.g. TICKY_LOG_CONSOLE=1.
def env_flag(name, default=False):
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY

# Dataclass for accessing paths across the package. Nothing is created here, since importing a stopwatch
# should never touch the disk; writers call ensure_directory() themselves.
@dataclass(frozen=False)
class ProjectPaths:

    data: Path
    logs: Path

    @staticmethod
    def build():
        # Explicit override wins, then the platform's usual per-user data folder.
        home = os.getenv("TICKY_HOME")
        if home:
            data = Path(home).expanduser()
        elif sys.platform == "win32" and os.getenv("APPDATA"):
            data = Path(os.getenv("APPDATA")) / "Ticky"
        else:
            xdg = os.getenv("XDG_DATA_HOME")
            base = Path(xdg) if xdg else Path.home() / ".local" / "share"
            data = base / "ticky"

        return ProjectPaths(
            data = data,
            logs = data / "logs",
        )
PATHS = ProjectPaths.build()
