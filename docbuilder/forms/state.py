"""Form state controller.

Owns the value map and the error map for one open template and mediates
every mutation of them.

Editing a field clears that field's error immediately but does not
re-validate it. Errors are recomputed in full only by validate_all, which the
generation dispatcher calls before every request. Re-validating on each
keystroke would interrupt typing with half-entered values.
"""

import logging
from collections.abc import Iterable, Sequence

from docbuilder.forms.models import VariableDefinition
from docbuilder.forms.validation import validate_form

logger = logging.getLogger(__name__)


def _unique(definitions: Iterable[VariableDefinition]) -> tuple[VariableDefinition, ...]:
    definitions = tuple(definitions)
    names = [d.name for d in definitions]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ValueError(f"Duplicate variable names: {', '.join(duplicates)}")
    return definitions


class FormState:
    """Values and validation errors for the variables of one template."""

    def __init__(self, definitions: Iterable[VariableDefinition] | None = None) -> None:
        self._definitions: tuple[VariableDefinition, ...] = ()
        self._values: dict[str, str] = {}
        self._errors: dict[str, str] = {}
        if definitions is not None:
            self.initialize(definitions)

    def initialize(self, definitions: Iterable[VariableDefinition]) -> None:
        """Load a template's definitions and reset values to their defaults.

        Args:
            definitions: Variable definitions fetched for the template.

        Raises:
            ValueError: If two definitions share a name.
        """
        definitions = _unique(definitions)
        self._definitions = definitions
        self._values = {
            d.name: d.default_value for d in definitions if d.default_value is not None
        }
        self._errors = {}
        logger.debug(f"Form initialized with {len(definitions)} variables")

    @property
    def definitions(self) -> Sequence[VariableDefinition]:
        return self._definitions

    @property
    def values(self) -> dict[str, str]:
        """Copy of the current value map."""
        return dict(self._values)

    @property
    def errors(self) -> dict[str, str]:
        """Copy of the current error map."""
        return dict(self._errors)

    @property
    def is_valid(self) -> bool:
        """Whether the last validation left no errors outstanding."""
        return not self._errors

    def get_value(self, name: str) -> str:
        return self._values.get(name, "")

    def error_for(self, name: str) -> str | None:
        return self._errors.get(name)

    def set_value(self, name: str, value: str) -> None:
        """Store a new value and drop any error shown for the field.

        Raises:
            KeyError: If no definition with that name is loaded.
        """
        if not any(d.name == name for d in self._definitions):
            raise KeyError(f"Unknown variable: {name}")

        self._values[name] = value
        self._errors.pop(name, None)

    def validate_all(self, definitions: Iterable[VariableDefinition] | None = None) -> bool:
        """Recompute the error map from scratch.

        Args:
            definitions: Definitions to validate against. Defaults to the
                ones passed to initialize. Passing a different set
                replaces the loaded one: values of fields that remain are
                kept, new fields start from their defaults, and dropped
                fields are forgotten, so every error stays editable.

        Returns:
            True if no field fails validation.
        """
        if definitions is not None:
            self._adopt(definitions)
        self._errors = validate_form(self._definitions, self._values)
        if self._errors:
            logger.info(f"Form validation failed for fields: {sorted(self._errors)}")
        return not self._errors

    def _adopt(self, definitions: Iterable[VariableDefinition]) -> None:
        definitions = _unique(definitions)
        names = {d.name for d in definitions}
        values = {name: v for name, v in self._values.items() if name in names}
        for d in definitions:
            if d.name not in values and d.default_value is not None:
                values[d.name] = d.default_value
        self._definitions = definitions
        self._values = values

    def reset(self) -> None:
        """Restore default values and clear all errors."""
        self.initialize(self._definitions)
