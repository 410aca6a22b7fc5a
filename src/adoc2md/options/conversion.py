#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2md/options/conversion.py
"""Options accepted by :func:`adoc2md.convert`."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional

from adoc2md.exceptions import InvalidOptionsError, ValidationError
from adoc2md.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class ConversionOptions(CloneFrozenMixin):
    """Configuration options for a single conversion.

    Parameters
    ----------
    attributes : Mapping[str, str or None], default empty
        Seed document attributes. Seeded names take precedence over
        attribute entries declared in the document, except ``doctitle``,
        which is always set from the parsed document title. A value of
        ``None`` seeds the attribute as unset, so the document cannot
        define it either.

    Raises
    ------
    InvalidOptionsError
        If ``attributes`` is not a mapping
    ValidationError
        If an attribute name is not a non-empty string, or a value is not
        a string or ``None``

    Examples
    --------
    Seed attributes used by the document:

        >>> options = ConversionOptions(attributes={"product": "ACME"})
        >>> options.create_updated(attributes={"product": "Widget"}).attributes["product"]
        'Widget'

    """

    attributes: Mapping[str, Optional[str]] = field(
        default_factory=dict,
        metadata={
            "help": "Seed a document attribute; NAME alone sets an empty value, NAME! unsets it (repeatable)",
            "cli_name": "attribute",
        },
    )

    def __post_init__(self) -> None:
        """Validate the attribute seed and freeze a private copy of it."""
        if not isinstance(self.attributes, Mapping):
            raise InvalidOptionsError(
                "ConversionOptions",
                Mapping,
                type(self.attributes),
                parameter_name="attributes",
            )

        for name, value in self.attributes.items():
            if not isinstance(name, str) or not name:
                raise ValidationError(
                    f"Attribute names must be non-empty strings, got {name!r}",
                    parameter_name="attributes",
                    parameter_value=name,
                )
            if value is not None and not isinstance(value, str):
                raise ValidationError(
                    f"Value of attribute '{name}' must be a string or None, got {type(value).__name__}",
                    parameter_name="attributes",
                    parameter_value=value,
                )

        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
