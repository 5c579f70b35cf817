"""Errors raised while resolving the anagram counter's settings.

Settings come from config.yaml, the ANAGRAMS_* environment variables and the
command line; any of them can produce a ConfigurationError.
"""

from typing import List, Optional


class ConfigurationError(Exception):
    """
    The counter cannot start with the settings it was given.

    ``errors`` lists every offending field (all of them, not just the first);
    ``suggestions`` says where to fix them. The CLI prints str(error) as is.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.errors = list(errors or [])
        self.suggestions = list(suggestions or [])
        super().__init__(message)

    def __str__(self) -> str:
        lines = [self.message]
        if self.errors:
            lines.append("\nValidation Errors:")
            lines.extend(f"  {number}. {error}" for number, error in enumerate(self.errors, 1))
        if self.suggestions:
            lines.append("\nSuggestions:")
            lines.extend(f"  - {hint}" for hint in self.suggestions)
        return "\n".join(lines)
