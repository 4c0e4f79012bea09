"""
Message resolution.

- MessageFormatter: substitutes ``{Placeholder}`` tokens in templates
- LanguageManager: culture-keyed catalogs of templates by error code
- resolve_message: applies override > catalog > default precedence
"""

import re
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Set

from fluentrules.core.base import ConfigurationError

PLACEHOLDER_PATTERN = re.compile(r"\{(\w+)\}")

#: Placeholders the engine supplies for every failure
STANDARD_PLACEHOLDERS = frozenset({"PropertyName", "PropertyValue", "PropertyPath"})

#: Supplied only while validating collection elements
COLLECTION_PLACEHOLDERS = frozenset({"CollectionIndex"})


def placeholder_names(template: str) -> Set[str]:
    """
    Parse the placeholder names used by a template.

    Raises:
        ConfigurationError: If the template has unbalanced braces
    """
    stripped = PLACEHOLDER_PATTERN.sub("", template)
    if "{" in stripped or "}" in stripped:
        raise ConfigurationError(f"Malformed placeholder in message template: {template!r}")
    return set(PLACEHOLDER_PATTERN.findall(template))


def check_template(template: str, available: Iterable[str]) -> None:
    """
    Fail fast on templates that reference placeholders no rule can supply.

    Args:
        template: Message template
        available: Placeholder names that will be present at runtime

    Raises:
        ConfigurationError: On malformed or unknown placeholders
    """
    unknown = placeholder_names(template) - set(available)
    if unknown:
        raise ConfigurationError(
            f"Unknown placeholder(s) {sorted(unknown)} in message template: {template!r}"
        )


class MessageFormatter:
    """
    Placeholder substitution for message templates.

    Unknown tokens are left untouched so that literal text such as
    ``{Id}`` survives templates coming from catalogs.
    """

    def __init__(self, placeholders: Optional[Mapping[str, Any]] = None):
        self.placeholders: Dict[str, Any] = dict(placeholders or {})

    def append(self, name: str, value: Any) -> "MessageFormatter":
        self.placeholders[name] = value
        return self

    def format(self, template: str) -> str:
        def replace(match: "re.Match") -> str:
            name = match.group(1)
            if name not in self.placeholders:
                return match.group(0)
            return _stringify(self.placeholders[name])

        return PLACEHOLDER_PATTERN.sub(replace, template)


class LanguageManager:
    """
    Catalog of message templates keyed by culture and error code.

    This is the hook point for localized messages; storing and editing
    translations belongs to the application. A culture such as ``tr-TR``
    falls back to ``tr`` when it has no entry of its own.

    Example:
        languages = LanguageManager()
        languages.add_translations("tr", {"NotEmptyValidator": "'{PropertyName}' boş olmamalıdır."})
        languages.get_string("NotEmptyValidator", "tr-TR")
    """

    def __init__(self, catalogs: Optional[Mapping[str, Mapping[str, str]]] = None):
        self._catalogs: Dict[str, Dict[str, str]] = {}
        for culture, entries in (catalogs or {}).items():
            self.add_translations(culture, entries)

    def add_translations(self, culture: str, entries: Mapping[str, str]) -> None:
        """
        Register templates for a culture.

        Raises:
            ConfigurationError: If a template is malformed
        """
        catalog = self._catalogs.setdefault(_normalize_culture(culture), {})
        for code, template in entries.items():
            placeholder_names(str(template))
            catalog[str(code)] = str(template)

    def get_string(self, key: str, culture: Optional[str]) -> Optional[str]:
        """
        Look up a template.

        Args:
            key: Error code (or any custom key)
            culture: Culture name; None disables lookup

        Returns:
            Template or None if not found
        """
        if not culture:
            return None
        for candidate in _culture_chain(culture):
            template = self._catalogs.get(candidate, {}).get(key)
            if template is not None:
                return template
        return None

    @property
    def cultures(self) -> Set[str]:
        return set(self._catalogs)

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._catalogs.values())


def resolve_message(
    override: Optional[Callable[..., str]],
    error_code: str,
    default_template: str,
    formatter: MessageFormatter,
    languages: Optional[LanguageManager],
    culture: Optional[str]
) -> str:
    """
    Produce the final text for a failed rule.

    Precedence: explicit override, then catalog entry for the error code
    in the active culture, then the rule's default template.
    """
    if override is not None:
        template = override()
    else:
        template = None
        if languages is not None:
            template = languages.get_string(error_code, culture)
        if template is None:
            template = default_template
    return formatter.format(str(template))


def default_display_name(property_name: str) -> str:
    """
    Turn a property identifier into display text.

    ``first_name`` and ``FirstName`` both become ``First Name``; nested
    names such as ``Address.Town`` become ``Address Town``.
    """
    if not property_name:
        return property_name
    words = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", re.sub(r"[._]", " ", property_name)).split()
    return " ".join(word[:1].upper() + word[1:] for word in words)


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _normalize_culture(culture: str) -> str:
    return culture.replace("_", "-").lower()


def _culture_chain(culture: str):
    normalized = _normalize_culture(culture)
    yield normalized
    if "-" in normalized:
        yield normalized.split("-", 1)[0]
