"""
Process-wide validator options.

Options hold the active culture, the language catalog and the default
cascade mode. They are initialised from environment settings on first
use, or explicitly with configure_options() at application startup.

Options are write-once-before-use: configure them before any concurrent
validation begins. Each validate() call captures the current options
object by reference, so replacing it mid-flight only affects later calls.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional

from fluentrules.core.base import CascadeMode
from fluentrules.core.messages import LanguageManager, default_display_name
from shared.utils.config import get_settings
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class ValidatorOptions:
    """Immutable snapshot of engine-wide settings"""
    culture: Optional[str] = None
    language_manager: LanguageManager = field(default_factory=LanguageManager)
    default_cascade_mode: CascadeMode = CascadeMode.STOP
    display_name_resolver: Callable[[str], str] = default_display_name


_options: Optional[ValidatorOptions] = None


def load_options_from_settings() -> ValidatorOptions:
    """
    Build options from environment settings.

    Reads VALIDATION_CULTURE, VALIDATION_CASCADE_MODE and, when set,
    loads the YAML catalog at VALIDATION_CATALOG_PATH.
    """
    settings = get_settings()
    languages = LanguageManager()

    if settings.VALIDATION_CATALOG_PATH:
        from fluentrules.core.config_loader import CatalogLoader

        CatalogLoader(settings.VALIDATION_CATALOG_PATH).load_into(languages)

    return ValidatorOptions(
        culture=settings.VALIDATION_CULTURE,
        language_manager=languages,
        default_cascade_mode=CascadeMode.parse(settings.VALIDATION_CASCADE_MODE),
    )


def get_options() -> ValidatorOptions:
    """
    Get the process-wide options, initialising them on first use.

    Returns:
        Current ValidatorOptions
    """
    global _options
    if _options is None:
        _options = load_options_from_settings()
        logger.info(
            f"Validator options initialised (culture={_options.culture}, "
            f"cascade={_options.default_cascade_mode.value})"
        )
    return _options


def configure_options(**overrides: Any) -> ValidatorOptions:
    """
    Replace process-wide options. Call once at startup.

    Usage:
        configure_options(culture="tr", language_manager=languages)

    Args:
        **overrides: Fields of ValidatorOptions to change

    Returns:
        New ValidatorOptions
    """
    global _options
    if "default_cascade_mode" in overrides:
        overrides["default_cascade_mode"] = CascadeMode.parse(overrides["default_cascade_mode"])
    _options = replace(get_options(), **overrides)
    logger.info(f"Validator options configured: {sorted(overrides)}")
    return _options


def reset_options() -> None:
    """Forget configured options so the next call reloads from settings."""
    global _options
    _options = None
