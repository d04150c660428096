# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Splunk compatible JSON log output.

Every record is rendered as a single line JSON object. Structured log entries
(`SplunkExtendedLogEntry`) additionally contribute their fields as top level keys.
"""

import json
import logging
from datetime import datetime

from pydantic import BaseModel


class SplunkExtendedLogEntry(BaseModel):
    """Base container for structured log messages.

    The entry can be handed to any logger call as message. Plain formatters render
    it through `__str__`, the `SplunkFormatter` also adds every field to the JSON output.
    """

    message: str

    def extended_fields(self) -> dict:
        """All fields except the message, enums resolved to their values, unset fields omitted."""
        return self.model_dump(mode="json", exclude={"message"}, exclude_none=True)

    def __str__(self) -> str:
        details = " ".join(f"{key}={value}" for key, value in self.extended_fields().items())
        return f"{self.message} {details}" if details else self.message


class SplunkFormatter(logging.Formatter):
    """Formats log records as JSON lines to be ingested by splunk."""

    def __init__(self, *args, defaults: dict | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._defaults = defaults or {}

    def _timestamp(self, record: logging.LogRecord) -> str:
        # e.g. 2024-02-07T14:38:19.565+01:00
        return datetime.fromtimestamp(record.created).astimezone().isoformat(timespec="milliseconds")

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "@timestamp": self._timestamp(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "app": getattr(record, "app_name", self._defaults.get("app_name")),
            "hash": getattr(record, "correlation_id", None) or self._defaults.get("correlation_id"),
        }
        if isinstance(record.msg, SplunkExtendedLogEntry):
            data.update(record.msg.extended_fields())
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        elif record.exc_text:
            data["exception"] = record.exc_text
        return json.dumps(data, default=str)
