"""
Utility modules.
"""

from report_export.utils.logger import setup_logger, apply_logging_settings

__all__ = ["setup_logger", "apply_logging_settings"]
