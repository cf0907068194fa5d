from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple

DEFAULT_GENRE = "Other"


@dataclass(frozen=True)
class GenreRule:
    label: str
    keywords: Tuple[str, ...]


def default_rules() -> Tuple[GenreRule, ...]:
    # evaluated top to bottom; first match wins
    return (
        GenreRule(
            "Sci-Fi",
            (
                "robot",
                "alien",
                "spaceship",
                "spacecraft",
                "space station",
                "planet",
                "galaxy",
                "time travel",
                "android",
                "cyborg",
                "astronaut",
            ),
        ),
        GenreRule(
            "Horror",
            (
                "ghost",
                "haunted",
                "demon",
                "vampire",
                "zombie",
                "monster",
                "possessed",
                "exorcism",
                "curse",
                "witch",
            ),
        ),
        GenreRule(
            "War",
            (
                "war",
                "soldier",
                "army",
                "battle",
                "military",
                "enemy",
                "troop",
                "platoon",
                "invasion",
                "regiment",
            ),
        ),
        GenreRule(
            "Crime",
            (
                "murder",
                "detective",
                "police",
                "crime",
                "gang",
                "heist",
                "robbery",
                "mafia",
                "criminal",
                "kidnap",
            ),
        ),
        GenreRule(
            "Western",
            (
                "cowboy",
                "sheriff",
                "outlaw",
                "ranch",
                "frontier",
                "saloon",
                "gunslinger",
            ),
        ),
        GenreRule(
            "Fantasy",
            ("wizard", "magic", "dragon", "sorcerer", "kingdom", "enchanted", "elf"),
        ),
        GenreRule(
            "Romance",
            (
                "love",
                "romance",
                "romantic",
                "lover",
                "marriage",
                "wedding",
                "affair",
                "fall in love",
            ),
        ),
        GenreRule(
            "Comedy",
            ("comedy", "hilarious", "prank", "funny", "misadventure", "comic"),
        ),
    )


@dataclass(frozen=True)
class GenreRulesConfig:
    rules: Tuple[GenreRule, ...] = field(default_factory=default_rules)
    default_label: str = DEFAULT_GENRE
    # keywords match whole words, optionally followed by a plural suffix
    allow_plural: bool = True
