import json
import logging
import sys


class CustomJSONFormatter(logging.Formatter):
    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "name": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": "fetchgate",
        }

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        # Anything passed through `extra=`
        extra_attributes = set(record.__dict__.keys()) \
            - set(logging.LogRecord(None, None, None, None, '', (), None).__dict__.keys()) \
            - {"exc_info", "message"}
        for key in extra_attributes:
            if key not in log_record:
                log_record[key] = record.__dict__.get(key)

        return json.dumps(log_record, default=str)


def setup_logging(log_level: str = "INFO"):
    formatter = CustomJSONFormatter()

    logger = logging.getLogger("fetchgate")
    logger.setLevel(log_level)

    # Repeated calls would otherwise print every line twice
    if any(isinstance(h.formatter, CustomJSONFormatter) for h in logger.handlers):
        return

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
