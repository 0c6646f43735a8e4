"""Reference normalization and extension-key rules.

A ``$ref`` may be written as a bare component name ("Pet") or as a canonical
pointer ("#/components/schemas/Pet"). Bare names are expanded with the
canonical prefix of the section that owns the referencing entity; anything
that already looks qualified is stored unchanged, so normalization is
idempotent.

Schemas use a stricter notion of "bare" than the other sections: a schema
reference is bare only if it has no leading "#" and contains neither "." nor
"/". Every other section treats any string without "." or "/" as bare.
"""

from typing import Optional

from oaspec.types import ComponentSection

EXTENSION_PREFIX = "x-"


def is_valid_extension_name(name: Optional[str]) -> bool:
    """True if ``name`` is a usable specification-extension key.

    >>> is_valid_extension_name("x-internal")
    True
    >>> is_valid_extension_name("internal")
    False
    """
    return bool(name) and isinstance(name, str) and name.startswith(EXTENSION_PREFIX)


def is_plain_reference(ref: Optional[str], section: ComponentSection) -> bool:
    """True if ``ref`` is a bare name that still needs a section prefix."""
    if not isinstance(ref, str):
        return False
    if "." in ref or "/" in ref:
        return False
    if section is ComponentSection.SCHEMAS and ref.startswith("#"):
        return False
    return True


def normalize_reference(ref: Optional[str], section: ComponentSection) -> Optional[str]:
    """Expand a bare component name into its canonical pointer.

    Args:
        ref: A bare name, a canonical pointer, or None
        section: Section owning the referencing entity

    Returns:
        The canonical pointer, the unchanged input if it is already qualified,
        or None for None.

    Examples:
        >>> normalize_reference("Pet", ComponentSection.SCHEMAS)
        '#/components/schemas/Pet'
        >>> normalize_reference("#/components/schemas/Pet", ComponentSection.SCHEMAS)
        '#/components/schemas/Pet'
        >>> normalize_reference("limit", ComponentSection.PARAMETERS)
        '#/components/parameters/limit'
    """
    if is_plain_reference(ref, section):
        return section.prefix + ref
    return ref


def schema_ref(name: str) -> str:
    """Canonical pointer to a named component schema."""
    return ComponentSection.SCHEMAS.prefix + name


__all__ = [
    "EXTENSION_PREFIX",
    "is_valid_extension_name",
    "is_plain_reference",
    "normalize_reference",
    "schema_ref",
]
