#!filepath: rm_preprocessor/utils/logger.py
import os
from functools import wraps
from time import perf_counter
from loguru import logger
from typing import Callable

from rm_preprocessor.utils.errors import UserInputError


class Logging:
    """
    Process-wide logging facade over loguru
    ---------------------------------------
    - daily log files under ``log_dir``
    - rotation / retention from LogConfig
    - warnings and errors are echoed to the console
    - ``catch`` decorator for call-level exception logging
    ---------------------------------------
    """

    def __init__(
        self,
        log_dir: str = "logs",
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level

        os.makedirs(self.log_dir, exist_ok=True)
        self._configure()

    def _configure(self) -> None:
        """
        Replace every loguru sink with the file sink of this instance.
        """

        logger.remove()

        logger.add(
            sink=f"{self.log_dir}/{{time:YYYY-MM-DD}}.log",
            rotation=self.rotation,
            retention=self.retention,
            level=self.level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
            enqueue=True,  # safe across worker processes
            backtrace=True,
            diagnose=True,
        )

        logger.info("-----------Logger initialized successfully.-----------")

    # ---------- plain log methods ----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        print(msg)
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        print(msg)
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        print(msg)
        logger.exception(msg, *args, **kwargs)

    # ---------- decorators ----------
    def catch(
        self,
        msg: str = "Exception occurred",
        log_time: bool = True,
    ) -> Callable:
        """
        Log any exception raised by the wrapped call and re-raise it.
        UserInputError is logged as one line, anything else with its
        traceback. Optionally log the wall time of successful calls.
        """

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):
                start = perf_counter()

                try:
                    result = func(*args, **kwargs)
                except UserInputError as e:
                    # user mistakes are reported without a traceback
                    logger.error(f"[ERROR] {func.__name__}: {msg}: {e}")
                    raise
                except Exception:
                    logger.exception(f"[ERROR] {func.__name__}: {msg}")
                    raise

                if log_time:
                    cost = perf_counter() - start
                    logger.info(f"[TIME] {func.__name__} took {cost:.4f}s")

                return result

            return wrapper

        return decorator


def init_logging(
    log_dir: str = "logs",
    rotation: str = "1 day",
    retention: str = "30 days",
    log_level: str = "INFO",
) -> Logging:
    """
    Reconfigure the global sinks (e.g. from AppConfig.log) and return the
    shared ``logs`` facade.
    """
    logs.log_dir = log_dir
    logs.rotation = rotation
    logs.retention = retention
    logs.level = log_level

    os.makedirs(log_dir, exist_ok=True)
    logs._configure()
    return logs


# default global facade (reconfigured by init_logging)
logs = Logging()
