import logging
import sys

_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None))
) | {"message", "asctime"}


class _ContextFormatter(logging.Formatter):
    """Appends keyword context passed to Log.* as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS
        }
        if not context:
            return message
        pairs = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        return f"{message} | {pairs}"


def _as_extra(context: dict[str, object]) -> dict[str, object]:
    # LogRecord refuses extra keys that shadow its own attributes (e.g. "filename").
    return {
        (f"ctx_{key}" if key in _RESERVED_ATTRS else key): value
        for key, value in context.items()
    }


class Log:
    """Centralized logging for the submission pipeline."""

    _logger: logging.Logger = logging.getLogger("originality")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level and attach a single stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                _ContextFormatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        cls._logger.info(message, extra=_as_extra(context))

    @classmethod
    def error(cls, message: str, **context: object) -> None:
        cls._logger.error(message, extra=_as_extra(context))

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        cls._logger.warning(message, extra=_as_extra(context))

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        cls._logger.debug(message, extra=_as_extra(context))
