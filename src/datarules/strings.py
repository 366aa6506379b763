"""String casing helpers used by string rules."""


def title_case(value: str) -> str:
    """Capitalize the first letter of each space-separated word."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in value.split(" "))


def first_case(value: str) -> str:
    """Capitalize the first letter and lowercase the rest."""
    if not value:
        return value
    return value[:1].upper() + value[1:].lower()


CASINGS = {
    "upper": str.upper,
    "lower": str.lower,
    "title": title_case,
    "first": first_case,
}
