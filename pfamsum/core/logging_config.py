# pfamsum/core/logging_config.py
import logging
import os
from datetime import datetime
from typing import Optional, Dict, Any, List

from pfamsum.utils.file import ensure_dir


class LoggingManager:
    """Logging setup for pfamsum runs"""

    DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
    # Plotting libraries log font and backend lookups at INFO/DEBUG
    QUIET_LOGGERS = ('matplotlib', 'PIL', 'fontTools')

    @staticmethod
    def resolve_level(verbose: bool, logging_config: Dict[str, Any]) -> int:
        """DEBUG when verbose, else the configured level name (INFO if unknown)"""
        if verbose:
            return logging.DEBUG
        level = logging.getLevelName(str(logging_config.get('level', 'INFO')).upper())
        return level if isinstance(level, int) else logging.INFO

    @staticmethod
    def log_file_path(log_file: Optional[str], log_dir: Optional[str], component: str) -> Optional[str]:
        """An explicit file wins; otherwise <log_dir>/<component>_<timestamp>.log"""
        if log_file:
            ensure_dir(os.path.dirname(log_file))
            return log_file
        if not log_dir:
            return None
        ensure_dir(log_dir)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return os.path.join(log_dir, f"{component}_{timestamp}.log")

    @staticmethod
    def configure(
        verbose: bool = False,
        log_file: Optional[str] = None,
        component: str = "pfamsum",
        log_dir: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None
    ) -> logging.Logger:
        """Configure root logging for a run

        Args:
            verbose: Enable debug logging for pfamsum loggers
            log_file: Log file path (overrides log_dir naming)
            component: Logger name and log file prefix
            log_dir: Directory for timestamped log files; falls back to
                logging.log_dir from config
            config: Full configuration dictionary

        Returns:
            The component logger
        """
        logging_config = (config or {}).get('logging', {})
        log_level = LoggingManager.resolve_level(verbose, logging_config)
        log_format = logging_config.get('format', LoggingManager.DEFAULT_FORMAT)
        log_file = LoggingManager.log_file_path(log_file, log_dir or logging_config.get('log_dir'), component)

        handlers: List[logging.Handler] = [logging.StreamHandler()]
        if log_file:
            handlers.append(logging.FileHandler(log_file))

        logging.basicConfig(
            level=log_level,
            format=log_format,
            datefmt=LoggingManager.DEFAULT_DATE_FORMAT,
            handlers=handlers,
            force=True
        )
        for name in LoggingManager.QUIET_LOGGERS:
            logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

        logger = logging.getLogger(component)
        logger.info(f"Logging initialized for {component} at level {logging.getLevelName(log_level)}")
        if log_file:
            logger.info(f"Log file: {log_file}")
        return logger
