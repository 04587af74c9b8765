"""Read collected log events from disk."""
import json
import logging
from pathlib import Path
from typing import List

from pydantic import ValidationError

from schemas.events import ProfileEvent

logger = logging.getLogger(__name__)


def load_events(path: Path) -> List[ProfileEvent]:
    """
    Load log events from a JSON array or a JSON-lines file.

    Each record needs message and timestamp; level defaults to "profile" and
    category to "application". Blank lines in JSON-lines files are skipped.

    Raises:
        ValidationError: If a record does not match the ProfileEvent schema
        json.JSONDecodeError: If the file is not valid JSON / JSON lines
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")

    if text.lstrip().startswith("["):
        records = list(enumerate(json.loads(text), start=1))
    else:
        records = [
            (lineno, json.loads(line))
            for lineno, line in enumerate(text.splitlines(), start=1)
            if line.strip()
        ]

    events = []
    for lineno, record in records:
        try:
            events.append(ProfileEvent.model_validate(record))
        except ValidationError:
            logger.error(f"Invalid event at {path.name}:{lineno}")
            raise

    logger.debug(f"Loaded {len(events)} events from {path}")
    return events
