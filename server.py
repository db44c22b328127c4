# server.py

from flask import Flask
from flask import jsonify
from threading import Thread, Lock
import traceback
import os
import time

from locsync.config import load_config
from locsync.errors import ConfigError
from locsync.runner import run_download, run_upload


app = Flask(__name__)
run_lock = Lock()

run_started_at = None
run_command = None
last_run_finished_at = None
last_run_ok = None


def _sync(command: str) -> bool:
    config = load_config(require_languages=command == "download")
    if command == "upload":
        run_upload(config)
        return True
    return run_download(config).ok


def safe_run_sync(command: str):
    global run_started_at, run_command, last_run_finished_at, last_run_ok
    try:
        last_run_ok = _sync(command)
    except Exception:
        last_run_ok = False
        print(f"❌ {command} run crashed:", flush=True)
        traceback.print_exc()
    finally:
        last_run_finished_at = time.time()
        run_started_at = None
        run_command = None
        try:
            run_lock.release()
        except RuntimeError:
            pass


def _trigger(command: str):
    global run_started_at, run_command
    try:
        load_config(require_languages=command == "download")
    except ConfigError as e:
        return f"❌ Configuration error: {e}", 400

    acquired = run_lock.acquire(blocking=False)
    if not acquired:
        return f"🛑 A {run_command or 'sync'} run is already in progress; skipped.", 200

    try:
        run_started_at = time.time()
        run_command = command
        t = Thread(target=safe_run_sync, args=(command,), daemon=True)
        t.start()
        return f"✅ {command} triggered. Check logs for progress.", 200
    except Exception as e:
        run_started_at = None
        run_command = None
        run_lock.release()
        print(f"❌ Error starting {command} thread: {e}", flush=True)
        return f"❌ Error: {str(e)}", 500


@app.route("/")
def index():
    return (
        "✅ locsync server is running. "
        "Try /upload to push source strings or /download to pull translations. "
        "Use /health for keepalive."
    )


@app.route("/health")
def health():
    now = time.time()
    running = run_started_at is not None
    run_age = int(now - run_started_at) if running else 0

    payload = {
        "ok": True,
        "run_in_progress": running,
        "run_command": run_command,
        "run_age_seconds": run_age,
        "last_run_finished_at": last_run_finished_at,
        "last_run_ok": last_run_ok,
    }
    return jsonify(payload), 200


@app.route("/upload")
def upload():
    return _trigger("upload")


@app.route("/download")
def download():
    return _trigger("download")


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 10000))
    app.run(host="0.0.0.0", port=port)
