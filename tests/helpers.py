from datetime import date


def location_id(response) -> str:
    """Entity id at the end of a redirect's Location header."""
    return response.headers["Location"].rstrip("/").rsplit("/", 1)[-1]


AUSTEN_BIRTH = date(1775, 12, 16)
AUSTEN_DEATH = date(1817, 7, 18)
