"""Tutor persona data model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Persona:
    """A named tutor identity bound to one discipline."""

    id: str
    display_name: str
    discipline: str
    specialty_label: str
    background_blurb: str
    system_prompt_fragment: str
    traits: tuple[str, ...] = ()
    avatar: str = ""

    def __post_init__(self):
        if not self.id:
            raise ValueError("id must not be empty")
        if not self.discipline:
            raise ValueError("discipline must not be empty")
        if not isinstance(self.traits, tuple):
            object.__setattr__(self, "traits", tuple(self.traits))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.display_name,
            "discipline": self.discipline,
            "specialty": self.specialty_label,
            "avatar": self.avatar,
            "background": self.background_blurb,
            "traits": list(self.traits),
        }
