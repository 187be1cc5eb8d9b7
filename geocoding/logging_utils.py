"""
Logging utilities for geocoding applications.

The library itself only emits records through module loggers; applications
(and the bundled CLI) call initLogging() with the [logging] config section.
"""
import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def getLogLevelByStr(levelStr: str, default: Optional[int] = None) -> Optional[int]:
    """Get log level by string."""
    level = getattr(logging, str(levelStr).upper(), None)
    if not isinstance(level, int):
        logger.error(f"Invalid log level '{levelStr}'")
        return default
    return level


def configureLogger(localLogger: logging.Logger, config: Dict[str, Any]) -> None:
    """Configure individual logger from config file settings.

    Supported keys: propagate, level, format, console, console-level, file,
    file-level, rotate.
    """

    if "propagate" in config:
        localLogger.propagate = bool(config["propagate"])

    if "level" in config:
        logLevel = getLogLevelByStr(config["level"])
        if logLevel is not None:
            localLogger.setLevel(logLevel)

    logLevel = localLogger.getEffectiveLevel()
    formatter = logging.Formatter(config.get("format", DEFAULT_LOG_FORMAT))

    # Clear existing handlers to avoid duplicates
    for handler in localLogger.handlers[:]:
        localLogger.removeHandler(handler)

    if config.get("console", False):
        consoleLogLevel = logLevel
        if "console-level" in config:
            consoleLogLevel = getLogLevelByStr(config["console-level"], logLevel)
        consoleHandler = logging.StreamHandler()
        consoleHandler.setLevel(consoleLogLevel or logLevel)
        consoleHandler.setFormatter(formatter)
        localLogger.addHandler(consoleHandler)
        logger.debug(f"Logging {localLogger.name} to console, logLevel: {consoleLogLevel}")

    if "file" in config:
        logFile = config["file"]
        Path(logFile).parent.mkdir(parents=True, exist_ok=True)

        fileLogLevel = logLevel
        if "file-level" in config:
            fileLogLevel = getLogLevelByStr(config["file-level"], logLevel)

        fileHandler: logging.Handler
        if config.get("rotate", False):
            fileHandler = TimedRotatingFileHandler(
                filename=logFile,
                when="midnight",
                interval=1,
                backupCount=7,
                encoding="utf-8",
            )
        else:
            fileHandler = logging.FileHandler(logFile, encoding="utf-8")

        fileHandler.setLevel(fileLogLevel or logLevel)
        fileHandler.setFormatter(formatter)
        localLogger.addHandler(fileHandler)
        logger.debug(f"Logging {localLogger.name} to file: {logFile}, logLevel: {fileLogLevel}")


def initLogging(config: Dict[str, Any]) -> None:
    """Configure logging from the [logging] config section.

    Example:
        [logging]
        level = "INFO"
        console = true

        [logging.logger."geocoding.transport"]
        level = "DEBUG"
    """
    rootLogger = logging.getLogger()
    rootLogger.setLevel(logging.INFO)

    configureLogger(rootLogger, config)
    logLevel = rootLogger.getEffectiveLevel()

    # httpx logs every request at INFO, transport already logs what matters
    if logLevel < logging.WARNING:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)

    logConfigs = config.get("logger", {})
    for loggerName, loggerConfig in logConfigs.items():
        logger.debug(f"Configuring logger '{loggerName}' with config {loggerConfig}")
        configureLogger(logging.getLogger(loggerName), loggerConfig)

    logger.info(f"Logging configured: root level={logging.getLevelName(logLevel)}")
