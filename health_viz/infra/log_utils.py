from datetime import datetime, timezone

from health_viz.config import settings

# WARN is the spelling used throughout the app; WARNING is accepted in config.
LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "WARNING": 30, "ERROR": 40}


def should_log(level: str) -> bool:
    threshold = LEVELS.get(settings.LOG_LEVEL.upper(), LEVELS["INFO"])
    return LEVELS.get(level.upper(), LEVELS["INFO"]) >= threshold


def log_message(msg: str, level: str = "INFO") -> None:
    """
    Append a timestamped message to the health-viz log.

    Messages below settings.LOG_LEVEL are dropped. Lines look like
    `[2025-03-15T08:00:00+00:00] [WARN] [dashboard] Skipping ...`.
    """
    if not should_log(level):
        return
    log_file = settings.log_path
    log_file.parent.mkdir(parents=True, exist_ok=True)

    stamp = datetime.now(timezone.utc).isoformat(timespec="seconds")
    with log_file.open("a", encoding="utf-8") as f:
        f.write(f"[{stamp}] [{level.upper()}] {msg}\n")
