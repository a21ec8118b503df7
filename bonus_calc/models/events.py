"""
Marketing event catalog for the pharmacy bonus program.

Each event attributes a share of the pharmacy's purchase volume and applies
a profitability rate to it. The catalog is plain data owned by the caller;
the helpers below never mutate it and always return a new tuple.

Example usage:
    >>> events = (MarketingEvent('vmt', 'VMT', True, 6, 22),)
    >>> events = toggle_event(events, 'vmt')
    >>> events[0].enabled
    False
"""
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Tuple


@dataclass(frozen=True)
class MarketingEvent:
    """Program component eligible to contribute to the bonus"""
    id: str
    name: str
    enabled: bool
    share_of_purchase: float   # % of total purchase volume (0-100)
    profitability: float       # % bonus rate on the attributed amount

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MarketingEvent":
        return cls(
            id=str(data['id']),
            name=str(data['name']),
            enabled=bool(data.get('enabled', True)),
            share_of_purchase=float(data['share_of_purchase']),
            profitability=float(data['profitability']),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'enabled': self.enabled,
            'share_of_purchase': self.share_of_purchase,
            'profitability': self.profitability,
        }


def ensure_unique_ids(events: Iterable[MarketingEvent]) -> None:
    """
    Check that every event id appears once in the catalog.

    Raises:
        ValueError: If an id is repeated
    """
    seen = set()
    for event in events:
        if event.id in seen:
            raise ValueError(f"Duplicate marketing event id: {event.id}")
        seen.add(event.id)


def find_event(events: Iterable[MarketingEvent], event_id: str) -> MarketingEvent:
    """Return the event with the given id, or raise KeyError."""
    for event in events:
        if event.id == event_id:
            return event
    raise KeyError(f"Unknown marketing event: {event_id}")


def _replace_event(events: Iterable[MarketingEvent], event_id: str,
                   **changes: Any) -> Tuple[MarketingEvent, ...]:
    events = tuple(events)
    find_event(events, event_id)
    return tuple(
        replace(e, **changes) if e.id == event_id else e
        for e in events
    )


def toggle_event(events: Iterable[MarketingEvent], event_id: str) -> Tuple[MarketingEvent, ...]:
    """Flip the enabled flag of one event."""
    events = tuple(events)
    event = find_event(events, event_id)
    return _replace_event(events, event_id, enabled=not event.enabled)


def set_event_enabled(events: Iterable[MarketingEvent], event_id: str,
                      enabled: bool) -> Tuple[MarketingEvent, ...]:
    return _replace_event(events, event_id, enabled=bool(enabled))


def update_event_share(events: Iterable[MarketingEvent], event_id: str,
                       share: float) -> Tuple[MarketingEvent, ...]:
    """Set the share of purchase (%) for one event."""
    return _replace_event(events, event_id, share_of_purchase=float(share))


def update_event_profitability(events: Iterable[MarketingEvent], event_id: str,
                               profitability: float) -> Tuple[MarketingEvent, ...]:
    """Set the profitability (%) for one event."""
    return _replace_event(events, event_id, profitability=float(profitability))
