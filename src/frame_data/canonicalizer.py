from typing import List, Tuple
from urllib.parse import urlparse

from .models import Character, Move

# Label -> Move attribute, in display order (three per row)
DISPLAY_FIELDS = [
    ("Guard", "guard"), ("Damage", "damage"), ("Properties", "properties"),
    ("Meter", "meter"), ("On Hit", "on_hit"), ("On Block", "on_block"),
    ("Startup", "startup"), ("Active", "active"), ("Recovery", "recovery"),
    ("Hitstun", "hitstun"), ("Blockstun", "blockstun"), ("Hitstop", "hitstop"),
]


def is_valid_http_url(value: str) -> bool:
    """True for absolute http(s) URLs; placeholders like "-" are rejected."""
    if not value or value == "-":
        return False
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class MoveCanonicalizer:
    @staticmethod
    def title(character: Character, move: Move) -> str:
        return f"{character.pretty_name} - {move.move_name}"

    @staticmethod
    def to_fields(move: Move) -> List[Tuple[str, str]]:
        return [(label, getattr(move, attr)) for label, attr in DISPLAY_FIELDS]

    @staticmethod
    def to_text(character: Character, move: Move) -> str:
        parts = [MoveCanonicalizer.title(character, move)]
        parts.extend(f"{label}: {value}" for label, value in MoveCanonicalizer.to_fields(move) if value)

        if move.footer:
            parts.append(move.footer)

        return "\n".join(parts)

    @staticmethod
    def images(move: Move) -> dict:
        """Thumbnail and footer image URLs that are safe to render."""
        images = {}
        if is_valid_http_url(move.thumbnail_url):
            images["thumbnail"] = move.thumbnail_url
        if is_valid_http_url(move.footer_url):
            images["image"] = move.footer_url
        return images
