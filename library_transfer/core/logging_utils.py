import logging

LOGGER_NAME = "library_transfer"

# Global project logger (can be tuned via logging_config)
logger = logging.getLogger(LOGGER_NAME)


def get_logger(name: str) -> logging.Logger:
    """
    Child logger under the project logger, for module-level debug output.

    Example:
      get_logger("pagination") -> logger named "library_transfer.pagination"
    """
    return logger.getChild(name)


def log_section(title: str) -> None:
    """
    Log a top-level section header.
    """
    logger.info("=== %s ===", title)


def log_info(message: str) -> None:
    logger.info("%s", message)


def log_step(message: str) -> None:
    """
    Action step / ongoing work.
    """
    logger.info("→ %s", message)


def log_success(message: str) -> None:
    logger.info("✅ %s", message)


def log_warning(message: str) -> None:
    """
    Non-fatal problem: a failed batch, a skipped item.
    """
    logger.warning("⚠️ %s", message)


def log_error(message: str) -> None:
    """
    Failure that aborts the whole operation.
    """
    logger.error("❌ %s", message)


def log_progress(
    current: int,
    total: int,
    prefix: str = "",
) -> None:
    """
    Progress line driven by real completion counts.

    Example:
      log_progress(3, 12, prefix="Transfer")
      -> "Transfer 3/12 (25.0%)"
    """
    if total <= 0:
        total = 1

    percent = max(0.0, min(1.0, current / total)) * 100

    if prefix:
        logger.info("%s %d/%d (%.1f%%)", prefix, current, total, percent)
    else:
        logger.info("%d/%d (%.1f%%)", current, total, percent)
