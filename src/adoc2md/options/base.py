#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2md/options/base.py
"""Base classes for conversion options.

Options are frozen dataclasses: a conversion call can never mutate the
options it was given, and the same options object can safely be reused for
any number of conversions.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from adoc2md.exceptions import InvalidOptionsError, ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, and to build instances from plain mappings such as the ones
    read from a configuration file.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def from_mapping(cls, values: Any) -> Self:
        """Build an instance from a mapping of field names to values.

        Parameters
        ----------
        values : Mapping[str, Any]
            Field values keyed by field name

        Returns
        -------
        Self
            New options instance

        Raises
        ------
        InvalidOptionsError
            If ``values`` is not a mapping
        ValidationError
            If ``values`` names a field the options class does not have

        """
        if not isinstance(values, Mapping):
            raise InvalidOptionsError(cls.__name__, Mapping, type(values))

        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in values if key not in known)
        if unknown:
            raise ValidationError(
                f"Unknown option(s) for {cls.__name__}: {', '.join(unknown)}",
                parameter_name="options",
                parameter_value=unknown,
            )
        return cls(**values)
