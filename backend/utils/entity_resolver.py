"""Resolve free-text names from import files to existing record ids.

Lookup maps are built from one bulk fetch per import call and carried in an
:class:`ImportContext`; nothing here is cached between requests.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional
import re

from utils.schedule_parser import extract_year_group

# Substring matches shorter than this are ignored ("Art" must not land on "Dramatic Arts")
MIN_PARTIAL_MATCH_LENGTH = 4

# Alias trigger -> extra keys registered for every subject whose name contains the trigger
SUBJECT_ALIASES = {
    'math': ('mathematics', 'maths'),
}

_YEAR_NUMBER = re.compile(r'Y(?:ear)?\s*(\d+)', re.IGNORECASE)


def normalize_name(name):
    return (name or '').strip().lower()


class NameIndex:
    """Case-insensitive name -> id map that remembers insertion order.

    The first id registered under a name keeps it; later duplicates are ignored.
    """

    def __init__(self, entries=()):
        self._ids = {}
        for name, entity_id in entries:
            self.add(name, entity_id)

    def add(self, name, entity_id):
        key = normalize_name(name)
        if key and key not in self._ids:
            self._ids[key] = entity_id

    def get(self, name):
        return self._ids.get(normalize_name(name))

    def items(self):
        return self._ids.items()

    def __contains__(self, name):
        return normalize_name(name) in self._ids

    def __len__(self):
        return len(self._ids)


def build_subject_index(subjects, aliases=None):
    """Index ``(name, id)`` pairs, adding alias keys from ``aliases``.

    Real names are registered before any alias so an alias never takes the
    exact name of a later subject.
    """
    if aliases is None:
        aliases = SUBJECT_ALIASES
    subjects = list(subjects)
    index = NameIndex(subjects)
    for name, subject_id in subjects:
        lowered = normalize_name(name)
        for trigger, alias_names in aliases.items():
            if trigger in lowered:
                for alias in alias_names:
                    index.add(alias, subject_id)
    return index


def build_year_group_index(year_groups):
    """Index year groups under their name plus 'year N' and 'yN'."""
    index = NameIndex()
    for name, year_group_id in year_groups:
        index.add(name, year_group_id)
        match = _YEAR_NUMBER.search(name or '')
        if match:
            number = int(match.group(1))
            index.add(f'year {number}', year_group_id)
            index.add(f'y{number}', year_group_id)
    return index


def resolve_subject(index, name, min_length=MIN_PARTIAL_MATCH_LENGTH):
    """Exact match first, then the first entry that contains or is contained in ``name``.

    The fallback is plain substring containment scanned in insertion order,
    not a ranked similarity search.
    """
    candidate = normalize_name(name)
    if not candidate:
        return None
    subject_id = index.get(candidate)
    if subject_id is not None:
        return subject_id
    for stored, stored_id in index.items():
        if min(len(stored), len(candidate)) < min_length:
            continue
        if stored in candidate or candidate in stored:
            return stored_id
    return None


def resolve_year_group(index, label):
    if not label:
        return None
    for candidate in (extract_year_group(label), label):
        if candidate:
            year_group_id = index.get(candidate)
            if year_group_id is not None:
                return year_group_id
    return None


@dataclass
class ImportContext:
    """Reference lookups for one import call."""
    teachers: NameIndex = field(default_factory=NameIndex)
    students: NameIndex = field(default_factory=NameIndex)
    subjects: NameIndex = field(default_factory=NameIndex)
    year_groups: NameIndex = field(default_factory=NameIndex)
    teacher_departments: Dict[int, Optional[int]] = field(default_factory=dict)

    def teacher_id(self, name):
        return self.teachers.get(name)

    def student_id(self, name):
        return self.students.get(name)

    def subject_id(self, name):
        return resolve_subject(self.subjects, name)

    def year_group_id(self, label):
        return resolve_year_group(self.year_groups, label)
