"""
Utility functions for JSON Schema to JVM model generator.
"""

_WORD_DELIMITERS = (" ", "_", "-")


def capitalize(text: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    if not text:
        return text
    return text[0].upper() + text[1:]


def to_pascal_case(text: str) -> str:
    """Convert space-, snake- or kebab-separated text to PascalCase.

    Only the first delimiter found is used to split the text, and each word
    keeps its original casing apart from the first character.

    Examples:
        "order-item-v1" -> "OrderItemV1"
        "user_type" -> "UserType"
        "UserV1" -> "UserV1"
        "address" -> "Address"

    Args:
        text: The text to convert

    Returns:
        PascalCase string
    """
    if not text:
        return ""
    delimiter = next((d for d in _WORD_DELIMITERS if d in text), None)
    if delimiter is None:
        return capitalize(text)
    return "".join(capitalize(word) for word in text.split(delimiter))


def is_blank(text: str | None) -> bool:
    """True for None, empty and whitespace-only strings."""
    return text is None or not text.strip()


def plural_suffix(count: int) -> str:
    return "" if count == 1 else "s"


def class_name_from_fqn(fqn: str) -> str:
    """Return the simple class name of a fully qualified name.

    Raises:
        ValueError: If the name has no package part
    """
    idx = fqn.rfind(".")
    if idx == -1:
        raise ValueError(f"Unexpected fully qualified class name: {fqn}")
    return fqn[idx + 1 :]


def package_of_fqn(fqn: str) -> str:
    idx = fqn.rfind(".")
    return fqn[:idx] if idx != -1 else ""


def dir_path_to_package_path(dir_path: str) -> str:
    """Convert a relative directory path ("a/b") to a package path ("a.b")."""
    return dir_path.strip("/").replace("/", ".")


def join_params(params: list[str]) -> str:
    return ", ".join(params)
