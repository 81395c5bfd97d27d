"""
Participants Module

This module defines the people taking part in a journey.

Data Model:
    Person:
        - id: string (unique within a journey's roster)
        - name: string (display only, not guaranteed unique)
        - phone: string or None
        - email: string or None
        - is_from_contacts: bool

Functions:
    build_name_index: Case-insensitive name lookup for a roster.
    roster_ids: Roster ids in order, without duplicates.
    person_name: Display name for an id.
"""

from typing import Optional


class Person:
    """
    Represents a participant in a journey.

    Attributes:
        id (str): Unique identifier within the roster.
        name (str): Display name.
        phone (str | None): Optional phone number.
        email (str | None): Optional email address.
        is_from_contacts (bool): Whether the person was imported from contacts.
    """

    def __init__(
        self,
        id: str,
        name: str,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        is_from_contacts: bool = False
    ):
        self.id = id
        self.name = name
        self.phone = phone
        self.email = email
        self.is_from_contacts = is_from_contacts

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "is_from_contacts": self.is_from_contacts
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Person":
        """Create a Person instance from a dictionary."""
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            phone=data.get("phone"),
            email=data.get("email"),
            is_from_contacts=bool(data.get("is_from_contacts", False))
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Person):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Person(id='{self.id}', name='{self.name}')"


def build_name_index(roster: list[Person]) -> dict[str, Person]:
    """
    Build a case-insensitive name lookup for a roster.

    If two people share a name, the first one in the roster wins.

    Args:
        roster: List of Person objects.

    Returns:
        dict[str, Person]: Lower-cased, trimmed name -> Person.
    """
    index = {}
    for person in roster:
        index.setdefault(person.name.strip().lower(), person)
    return index


def roster_ids(roster: list[Person]) -> list[str]:
    """Return roster ids in roster order, dropping repeats."""
    return list(dict.fromkeys(person.id for person in roster))


def person_name(person_id: str, roster: list[Person], default: str = "Unknown") -> str:
    for person in roster:
        if person.id == person_id:
            return person.name
    return default
