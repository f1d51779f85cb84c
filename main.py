"""
Student Burnout Monitor — entry point.

Loads the stored session and prints the weekly report. A UI would create a
StudentService the same way and call into it.
"""

import logging
import sys
from pathlib import Path

# Ensure the package is importable when run from another directory
sys.path.insert(0, str(Path(__file__).resolve().parent))

from burnout_monitor.config import load_config, resolve_data_dir
from burnout_monitor.services.student_service import StudentService


def setup_logging(config: dict) -> None:
    logging.basicConfig(
        level=getattr(logging, str(config["log_level"]).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(config["log_file"], encoding="utf-8"),
        ],
    )


def main() -> None:
    config = load_config()
    setup_logging(config)
    logger = logging.getLogger(__name__)

    data_dir = resolve_data_dir(config)
    logger.info("Starting Student Burnout Monitor (data: %s)...", data_dir)

    service = StudentService.open(
        data_dir,
        analysis_days=config["analysis_days"],
        upcoming_days=config["upcoming_days"],
        upcoming_limit=config["upcoming_limit"],
    )
    if service.last_error is not None:
        logger.warning("Some data could not be loaded: %s", service.last_error)

    print(service.weekly_report())


if __name__ == "__main__":
    main()


# ---------------------------------------------------------------------------
# Explanation
# ---------------------------------------------------------------------------
# What this file does:
#   The entry point. Reads config, sets up logging (console + file), opens
#   a session on the data directory and prints the weekly report.
#
# Key points:
#   - sys.path manipulation: imports work whether you run from the repo
#     root or another directory.
#   - Storage problems on load do not stop the program; the affected
#     collection is simply empty and a warning is logged.
