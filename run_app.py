#!/usr/bin/env python3
"""
Launcher for a one-click local experience:
- Starts the Streamlit calculator on 127.0.0.1:8501.
- Waits for Streamlit to become reachable, then opens the browser.
- Cleans up the child process on exit (best effort).
"""

from __future__ import annotations

import atexit
import logging
import os
import signal
import subprocess
import sys
import tempfile
import threading
import time
import webbrowser
from pathlib import Path

import requests

from core.log_config import configure_logging
from core.settings import get_settings

IS_FROZEN = bool(getattr(sys, "frozen", False))
BASE_DIR = Path(getattr(sys, "_MEIPASS", Path(__file__).resolve().parent))
STREAMLIT_URL = "http://127.0.0.1:8501"

STREAMLIT_ENV = {
    "STREAMLIT_SERVER_HEADLESS": "true",
    "STREAMLIT_SERVER_RUN_ON_SAVE": "false",
    "STREAMLIT_SERVER_FILE_WATCHER_TYPE": "none",
    "STREAMLIT_BROWSER_GATHER_USAGE_STATS": "false",
}

logger = logging.getLogger("run_app")


def _pid_alive(pid: int) -> bool:
    if pid <= 0:
        return False
    if os.name != "nt":
        try:
            os.kill(pid, 0)
        except OSError:
            return False
        return True

    import ctypes

    PROCESS_QUERY_LIMITED_INFORMATION = 0x1000
    handle = ctypes.windll.kernel32.OpenProcess(PROCESS_QUERY_LIMITED_INFORMATION, False, pid)
    if not handle:
        return False
    exit_code = ctypes.c_ulong()
    ctypes.windll.kernel32.GetExitCodeProcess(handle, ctypes.byref(exit_code))
    ctypes.windll.kernel32.CloseHandle(handle)
    return exit_code.value == 259  # STILL_ACTIVE


def _lock_path() -> Path:
    if os.name == "nt":
        base = Path(
            os.environ.get("LOCALAPPDATA")
            or os.environ.get("APPDATA")
            or (Path.home() / "AppData" / "Local")
        )
        lock_dir = base / "PrintCost"
    else:
        base = Path(os.environ.get("XDG_RUNTIME_DIR") or tempfile.gettempdir())
        lock_dir = base / "printcost"
    lock_dir.mkdir(parents=True, exist_ok=True)
    return lock_dir / "launcher.lock"


def acquire_lock() -> Path | None:
    path = _lock_path()
    if path.exists():
        try:
            pid = int(path.read_text().strip() or "0")
        except (OSError, ValueError):
            pid = 0
        if _pid_alive(pid):
            logger.warning("Another instance is already running (PID %s); exiting.", pid)
            return None
        path.unlink(missing_ok=True)

    try:
        path.write_text(str(os.getpid()))
    except OSError as exc:
        logger.error("Unable to create lock file: %s", exc)
        return None
    atexit.register(release_lock, path)
    return path


def release_lock(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.debug("Lock file %s could not be removed", path, exc_info=True)


def _process_kwargs() -> dict:
    """Put the child in its own group so it can be terminated cleanly."""
    if os.name == "nt":
        return {"creationflags": subprocess.CREATE_NEW_PROCESS_GROUP}
    return {"start_new_session": True}


def start_streamlit() -> subprocess.Popen:
    streamlit_env = os.environ.copy()
    streamlit_env.update(STREAMLIT_ENV)
    cmd = [
        sys.executable,
        "-m",
        "streamlit",
        "run",
        str(BASE_DIR / "streamlit_app.py"),
        "--server.port",
        "8501",
        "--server.address",
        "127.0.0.1",
    ]
    logger.info("Starting Streamlit UI on %s ...", STREAMLIT_URL)
    return subprocess.Popen(cmd, cwd=BASE_DIR, env=streamlit_env, **_process_kwargs())


def run_streamlit_in_process() -> None:
    os.environ.update(STREAMLIT_ENV)
    argv = [
        "streamlit",
        "run",
        str(BASE_DIR / "streamlit_app.py"),
        "--server.port=8501",
        "--server.address=127.0.0.1",
    ]
    original_argv = sys.argv[:]
    sys.argv = argv
    logger.info("Starting Streamlit UI (in-process) on %s ...", STREAMLIT_URL)
    try:
        from streamlit.web import cli as stcli

        stcli.main()
    except SystemExit:
        pass
    finally:
        sys.argv = original_argv


def wait_for_streamlit(proc: subprocess.Popen | None = None, timeout: int = 60) -> bool:
    """Poll until Streamlit is reachable or times out."""
    start = time.time()
    while time.time() - start < timeout:
        if proc is not None and proc.poll() is not None:
            logger.error("Streamlit process exited before becoming ready.")
            return False
        try:
            resp = requests.get(STREAMLIT_URL, timeout=1)
            if resp.status_code < 500:
                return True
        except requests.RequestException:
            pass
        time.sleep(1)
    logger.error("Timed out waiting for Streamlit to be ready.")
    return False


def open_browser_when_ready(proc: subprocess.Popen | None = None) -> None:
    if wait_for_streamlit(proc):
        logger.info("Streamlit is ready; opening browser ...")
        webbrowser.open_new_tab(STREAMLIT_URL)
    else:
        logger.warning("Streamlit not reachable; browser will not be opened.")


def terminate_process(proc: subprocess.Popen | None, name: str) -> None:
    if proc is None or proc.poll() is not None:
        return

    logger.info("Stopping %s ...", name)
    try:
        if os.name != "nt":
            os.killpg(os.getpgid(proc.pid), signal.SIGTERM)
        else:
            proc.terminate()
        proc.wait(timeout=5)
    except (OSError, subprocess.TimeoutExpired):
        if os.name != "nt":
            os.killpg(os.getpgid(proc.pid), signal.SIGKILL)
        else:
            proc.kill()


def main() -> None:
    configure_logging(get_settings().log_level)
    lock_path = acquire_lock()
    if lock_path is None:
        return

    streamlit_proc = None
    try:
        if IS_FROZEN:
            threading.Thread(target=open_browser_when_ready, daemon=True).start()
            run_streamlit_in_process()
        else:
            streamlit_proc = start_streamlit()
            threading.Thread(target=open_browser_when_ready, args=(streamlit_proc,), daemon=True).start()
            # Keep script alive while Streamlit runs.
            while streamlit_proc.poll() is None:
                time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Interrupted; shutting down ...")
    finally:
        terminate_process(streamlit_proc, "Streamlit")
        release_lock(lock_path)


if __name__ == "__main__":
    main()
