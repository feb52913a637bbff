from datetime import datetime

import chatshell_config

LOG_FILE = chatshell_config.LOG_FILE


def _stamp(args):
    message = " ".join(str(arg) for arg in args)
    timestamp = datetime.now().strftime("[%Y-%m-%d %H:%M:%S]")
    return f"{timestamp} {message}\n"


def log_event(*args):
    """Append a timestamped line to the history log without printing it."""
    if not LOG_FILE:
        return
    with open(LOG_FILE, "a", encoding="utf-8") as f:
        f.write(_stamp(args))


def log_print(*args, **kwargs):
    log_event(*args)
    print(*args, **kwargs)
