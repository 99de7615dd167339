"""Built-in festival catalog: the games on the programme and the faculties
competing in them.  Used to seed a fresh snapshot."""
from typing import Dict, List

GAME_TYPES = ('individual', 'team')

DEFAULT_GAMES: List[Dict[str, str]] = [
    {'id': 'acting',             'name': 'Acting',             'icon': '🎭', 'type': 'individual'},
    {'id': 'arm_wrestling',      'name': 'Arm Wrestling',      'icon': '💪', 'type': 'individual'},
    {'id': 'billiards',          'name': 'Billiards',          'icon': '🎱', 'type': 'individual'},
    {'id': 'chess',              'name': 'Chess',              'icon': '♟️', 'type': 'individual'},
    {'id': 'drawing',            'name': 'Drawing',            'icon': '🎨', 'type': 'individual'},
    {'id': 'fitness',            'name': 'Fitness',            'icon': '🏋️', 'type': 'individual'},
    {'id': 'football',           'name': 'Football',           'icon': '⚽', 'type': 'team'},
    {'id': 'handcrafting',       'name': 'Hand Crafting',      'icon': '✂️', 'type': 'individual'},
    {'id': 'music',              'name': 'Music Performance',  'icon': '🎹', 'type': 'individual'},
    {'id': 'nasheed',            'name': 'Religious Chanting', 'icon': '🎵', 'type': 'individual'},
    {'id': 'playstation',        'name': 'PlayStation',        'icon': '🎮', 'type': 'individual'},
    {'id': 'poetry',             'name': 'Poetry',             'icon': '📝', 'type': 'individual'},
    {'id': 'quran_memorization', 'name': 'Quran Memorization', 'icon': '📖', 'type': 'individual'},
    {'id': 'quran_recitation',   'name': 'Quran Recitation',   'icon': '🕌', 'type': 'individual'},
    {'id': 'quiz',               'name': 'Quiz Competition',   'icon': '🧠', 'type': 'individual'},
    {'id': 'running',            'name': 'Running',            'icon': '🏃', 'type': 'individual'},
    {'id': 'singing',            'name': 'Singing',            'icon': '🎤', 'type': 'individual'},
    {'id': 'table_tennis',       'name': 'Table Tennis',       'icon': '🏓', 'type': 'individual'},
    {'id': 'tug_of_war',         'name': 'Tug of War',         'icon': '🪢', 'type': 'team'},
]

DEFAULT_FACULTIES: List[str] = [
    'Agriculture', 'Archaeology', 'Arts', 'Arts & Humanities', 'Commerce',
    'Computer Science', 'Computers & IT', 'Dentistry', 'Education',
    'Engineering', 'Girls College', 'Home Economics', 'Law',
    'Mass Communication', 'Medicine', 'Nursing', 'Pharmacy',
    'Science', 'Technical Education', 'Veterinary Medicine',
]


def default_state() -> Dict:
    """Return a fresh ``{games, faculties, results}`` snapshot with an empty
    ledger.  Every call returns new lists, so callers may mutate freely."""
    return {
        'games': [dict(g) for g in DEFAULT_GAMES],
        'faculties': list(DEFAULT_FACULTIES),
        'results': [],
    }


def collation_key(text: str):
    """Sort key for display names: case-insensitive first, then exact text
    so that ``"a"`` and ``"A"`` still order deterministically."""
    text = text or ''
    return (text.casefold(), text)
