"""
Text suggestions.

Editors ask a TextSuggester for filler text (a profile bio, an experience
description). The bundled implementation picks uniformly at random from a fixed
list of templates and fills in fields from the edit buffer.
"""

import random
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Sequence

from resumeai.utils.config import load_config


class MissingSuggestionContextError(ValueError):
    """Raised when the context lacks the field a suggestion needs."""

    pass


class TextSuggester(ABC):
    """Produces suggested text for a form field from the surrounding context."""

    @abstractmethod
    def suggest(self, context: Mapping[str, Any]) -> str:
        """Return a suggestion for the given context."""


class RandomTemplateSuggester(TextSuggester):
    """
    Picks one template at random and formats it with the context.

    Attributes:
        templates: str.format templates (e.g., "Results-driven {title} ...")
        required_field: Context key that must be non-empty before suggesting
        missing_message: Error message used when required_field is empty
    """

    def __init__(
        self,
        templates: Sequence[str],
        required_field: Optional[str] = None,
        missing_message: str = None,
        rng: random.Random = None,
    ):
        if not templates:
            raise ValueError("At least one template is required")
        self.templates = list(templates)
        self.required_field = required_field
        self.missing_message = missing_message or f"Please enter your {required_field} first"
        self.rng = rng or random.Random()

    @classmethod
    def from_config(cls, kind: str, config: Dict[str, Any] = None, rng: random.Random = None):
        """
        Build a suggester from the `suggestions.<kind>` config block.

        Args:
            kind: Config key, e.g. "bio" or "experience_description"
            config: Application config (defaults to load_config())
            rng: Random generator (seed it for reproducible picks)
        """
        block = (config or load_config())["suggestions"][kind]
        return cls(
            block["templates"],
            required_field=block.get("required_field"),
            missing_message=block.get("missing_message"),
            rng=rng,
        )

    def suggest(self, context: Mapping[str, Any]) -> str:
        if self.required_field and not context.get(self.required_field):
            raise MissingSuggestionContextError(self.missing_message)
        template = self.rng.choice(self.templates)
        return template.format(**context)
