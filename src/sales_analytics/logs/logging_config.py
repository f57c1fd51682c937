# ============================================================
# 📦 src/sales_analytics/logs/logging_config.py
# ============================================================

import sys
from loguru import logger


def setup_logging(level: str = "INFO"):
    """Reconfigura o loguru com um único sink em stdout."""
    logger.remove()
    logger.add(
        sys.stdout,
        colorize=True,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{message}</level>",
    )
    return logger
