"""Activities that can be launched in a voice channel."""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Activity:
    """A first-party embedded application."""
    id: str
    name: str


ACTIVITIES = MappingProxyType({
    'poker': Activity(id='755827207812677713', name='Poker Night'),
    'betrayal': Activity(id='773336526917861400', name='Betrayal.io'),
    'youtube': Activity(id='755600276941176913', name='YouTube Together'),
    'fishing': Activity(id='814288819477020702', name='Fishington.io'),
})


def get_activity(key: Optional[str]) -> Optional[Activity]:
    """Look up an activity by its short key. Anything but a string finds nothing."""
    if not isinstance(key, str):
        return None
    return ACTIVITIES.get(key)


def activity_choices() -> List[Dict[str, str]]:
    """Slash command choices for the activity option."""
    return [{'name': activity.name, 'value': key} for key, activity in ACTIVITIES.items()]
