from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .paint_session import PaintSession

logger = logging.getLogger(__name__)


# event name -> required arguments, in call order
EVENT_ARGS: Dict[str, tuple] = {
    "pointer_primary_down": (),
    "pointer_primary_up": (),
    "cell_pointer_down": ("x", "y"),
    "cell_pointer_over": ("x", "y"),
    "select_mode": ("mode",),
    "clear_all": (),
    "load_from_encoded": ("text",),
}


@dataclass
class EventScript:
    """A recorded sequence of inbound session commands.

    Attributes:
    - events: List of {"event": name, **args} mappings
    - initial: Optional encoded canvas loaded before the first event
    """

    events: List[Dict[str, Any]] = field(default_factory=list)
    initial: Optional[str] = None


def parse_script(raw: Any) -> EventScript:
    """Build an EventScript from parsed YAML.

    Accepts either a bare list of events or a mapping with `events:` and an
    optional `initial:` encoded string.

    Raises:
    - ValueError if the structure, an event name, or an argument is invalid.
    """
    if raw is None:
        return EventScript()
    if isinstance(raw, list):
        events, initial = raw, None
    elif isinstance(raw, dict):
        events = raw.get("events") or []
        initial = raw.get("initial")
        if initial is not None and not isinstance(initial, str):
            raise ValueError("'initial' must be an encoded canvas string")
    else:
        raise ValueError("event script must be a list or a mapping with 'events'")

    if not isinstance(events, list):
        raise ValueError("'events' must be a list")

    checked: List[Dict[str, Any]] = []
    for i, ev in enumerate(events):
        if not isinstance(ev, dict) or "event" not in ev:
            raise ValueError(f"event #{i}: expected a mapping with an 'event' key")
        name = str(ev["event"])
        if name not in EVENT_ARGS:
            raise ValueError(f"event #{i}: unknown event '{name}'")
        missing = [a for a in EVENT_ARGS[name] if a not in ev]
        if missing:
            raise ValueError(f"event #{i} ({name}): missing {', '.join(missing)}")
        for coord in ("x", "y"):
            if coord in EVENT_ARGS[name] and (
                isinstance(ev[coord], bool) or not isinstance(ev[coord], int)
            ):
                raise ValueError(f"event #{i} ({name}): {coord} must be an integer")
        checked.append(dict(ev))
    return EventScript(events=checked, initial=initial)


def load_script(path: str | Path) -> EventScript:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    script = parse_script(raw)
    logger.info(f"Loaded event script {p} ({len(script.events)} events)")
    return script


def apply_event(session: PaintSession, event: Dict[str, Any]) -> None:
    """Dispatch one event mapping to the matching PaintSession command."""
    name = event["event"]
    args = [event[a] for a in EVENT_ARGS[name]]
    getattr(session, name)(*args)


def replay(session: PaintSession, script: EventScript) -> str:
    """Apply a script to a session and return the final encoded canvas.

    Raises:
    - InvalidEncodingError if `initial` or a load_from_encoded event is bad.
    - ValueError for an unknown draw mode.
    """
    if script.initial is not None:
        session.load_from_encoded(script.initial)
    for event in script.events:
        apply_event(session, event)
    return session.encoded
