"""
Language registry: maps target-language names and aliases to generators.

The package registers its own C++ generator on first use; other generators
can be added with :meth:`GeneratorRegistry.register` on :func:`get_registry`.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Type, Union

from ..logging_config import get_logger
from .core.config import GeneratorConfig, load_config
from .core.generator import CodeGenerator

logger = get_logger(__name__)

ConfigSource = Union[GeneratorConfig, Dict[str, Any], str, Path, None]


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


@dataclass(frozen=True)
class LanguageEntry:
    """One registered target language."""

    name: str
    generator_class: Type[CodeGenerator]
    aliases: tuple = ()


class GeneratorRegistry:
    """Case-insensitive table of target languages.

    Every primary name and alias maps to exactly one :class:`LanguageEntry`;
    a name can never point at two languages at once.
    """

    def __init__(self):
        self._entries: Dict[str, LanguageEntry] = {}
        self._names: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[Iterable[str]] = None,
        replace: bool = False,
    ) -> None:
        """
        Register ``generator_class`` under ``language`` and ``aliases``.

        Registering a language twice is a no-op unless ``replace`` is set.

        Raises:
            RegistryError: If the class is not a CodeGenerator, or an alias
                already names another language
        """
        if not (
            isinstance(generator_class, type)
            and issubclass(generator_class, CodeGenerator)
        ):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        key = language.lower()
        if key in self._entries and not replace:
            return

        alias_keys = tuple(
            dict.fromkeys(a.lower() for a in aliases or () if a.lower() != key)
        )
        if not replace:
            for alias in alias_keys:
                if alias in self._entries:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing primary language"
                    )
                owner = self._names.get(alias)
                if owner is not None and owner != key:
                    raise RegistryError(f"Alias '{alias}' already points to '{owner}'")

        self.unregister(key)
        self._entries[key] = LanguageEntry(key, generator_class, alias_keys)
        for name in (key,) + alias_keys:
            self._names[name] = key
        logger.debug("Registered %s generator %s", key, generator_class.__name__)

    def unregister(self, language: str) -> None:
        """Remove a language and every alias pointing at it."""
        key = self._names.get(language.lower(), language.lower())
        self._entries.pop(key, None)
        self._names = {n: k for n, k in self._names.items() if k != key}

    def resolve_language(self, language: str) -> str:
        """
        Return the primary name for a language or alias.

        Raises:
            RegistryError: If the name is not registered
        """
        try:
            return self._names[language.lower()]
        except KeyError:
            raise RegistryError(
                f"No generator registered for language: {language}. "
                f"Available: {', '.join(self.list_languages())}"
            ) from None

    def entry(self, language: str) -> LanguageEntry:
        return self._entries[self.resolve_language(language)]

    def create_generator(
        self, language: str, config: ConfigSource = None
    ) -> CodeGenerator:
        """
        Instantiate the generator for ``language``.

        Args:
            language: Language name or alias
            config: GeneratorConfig, dict of overrides, config file path or None

        Raises:
            RegistryError: If the language is unknown or the config is invalid
        """
        entry = self.entry(language)

        try:
            if isinstance(config, GeneratorConfig):
                final_config = config
            elif isinstance(config, (str, Path)):
                final_config = load_config(entry.name, config_file=config)
            elif isinstance(config, dict) or config is None:
                final_config = load_config(entry.name, custom_config=config)
            else:
                raise RegistryError(f"Invalid config type: {type(config)}")
            return entry.generator_class(final_config)
        except RegistryError:
            raise
        except Exception as e:
            raise RegistryError(f"Failed to create {language} generator: {e}") from e

    def list_languages(self) -> List[str]:
        return sorted(self._entries)

    def is_supported(self, language: str) -> bool:
        return language.lower() in self._names

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """
        Describe a registered language.

        Raises:
            RegistryError: If language not found
        """
        entry = self.entry(language)
        generator = entry.generator_class(load_config(entry.name))
        return {
            "name": generator.language_name,
            "class": entry.generator_class.__name__,
            "file_extension": generator.file_extension,
            "aliases": sorted(entry.aliases),
            "module": entry.generator_class.__module__,
        }


_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Return the process-wide registry, registering built-in generators once."""
    global _global_registry
    if _global_registry is None:
        from .languages.cpp import CppGenerator

        _global_registry = GeneratorRegistry()
        _global_registry.register("cpp", CppGenerator, aliases=["c++", "cxx"])
    return _global_registry


def get_generator(language: str, config: ConfigSource = None) -> CodeGenerator:
    return get_registry().create_generator(language, config)


def list_supported_languages() -> List[str]:
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    return get_registry().get_language_info(language)
