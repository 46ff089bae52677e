"""Logging setup for the terminal commands and the dashboard server.

logging.level in config.yaml (or LOGGING_LEVEL) selects the threshold:
DEBUG, INFO, WARNING or ERROR; anything else means INFO. At DEBUG the
adapter writes one line per GitLab request and urllib3 connection chatter
is kept; at other levels urllib3 is limited to warnings.
"""

import logging

from gitlab_issues.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Third-party loggers that are only useful when debugging requests
NOISY_LOGGERS = ("urllib3",)


def level_from_name(name: str | None) -> int:
    if not name:
        return LEVELS[DEFAULT_LEVEL]
    return LEVELS.get(name.strip().upper(), LEVELS[DEFAULT_LEVEL])


class IssueManagerLogging:
    """Applies LoggingConfig to the root logger."""

    def __init__(self, config: LoggingConfig) -> None:
        self.level = level_from_name(config.level)
        self.format = config.format or DEFAULT_FORMAT

    def setup(self) -> None:
        logging.basicConfig(level=self.level, format=self.format, force=True)
        noisy_level = logging.DEBUG if self.level == logging.DEBUG else logging.WARNING
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(noisy_level)
