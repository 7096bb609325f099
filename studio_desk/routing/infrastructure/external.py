"""
Routing Rule Configuration
==========================

Loads the routing rule book once at startup, optionally overriding the
built-in tables from a YAML file.

Example file (every top-level key is optional; a key replaces the whole
built-in table of the same name)::

    escalation_rules:
      Theft:
        escalate_to: Security
        priority: critical
        immediate: true
        notify_level: management
    member_experience_keywords: [class, trainer, instructor]
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from studio_desk.core import ConfigurationException
from studio_desk.routing.application.services import IRuleBookProvider
from studio_desk.routing.domain import DEFAULT_RULEBOOK, RuleBook
from studio_desk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

OVERRIDABLE_TABLES = frozenset(RuleBook.model_fields)


class RuleBookManager(IRuleBookProvider):
    """
    Holds the process-wide rule book.

    The rule book is loaded once and never reloaded, so readers need no
    locking.
    """

    def __init__(self, base: RuleBook = DEFAULT_RULEBOOK):
        self._base = base
        self._rulebook: Optional[RuleBook] = None
        self._path: Optional[Path] = None

    def load(self, path: Optional[Path] = None) -> RuleBook:
        """
        Build the rule book, applying overrides from ``path`` when it exists.

        Raises:
            ConfigurationException: If the file is unreadable or the resulting
                tables fail validation
        """
        self._path = path
        self._rulebook = self._load_from_file(path)
        logger.info(
            "Routing rules loaded",
            extra={
                "rules_path": str(path) if path else None,
                "categories": len(self._rulebook.category_keywords),
                "escalation_rules": len(self._rulebook.escalation_rules),
            }
        )
        return self._rulebook

    def _load_from_file(self, path: Optional[Path]) -> RuleBook:
        if path is None:
            return self._base

        if not path.exists():
            logger.warning(f"Routing rules file not found: {path}, using defaults")
            return self._base

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationException(
                f"Failed to read routing rules from {path}: {e}",
                {"path": str(path)}
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationException(
                f"Routing rules file must contain a mapping, got {type(data).__name__}",
                {"path": str(path)}
            )

        unknown = sorted(set(data) - OVERRIDABLE_TABLES)
        if unknown:
            raise ConfigurationException(
                f"Unknown routing tables in {path}: {unknown}",
                {"path": str(path), "unknown": unknown}
            )

        try:
            return self._base.with_overrides(data)
        except ValidationError as e:
            raise ConfigurationException(
                f"Invalid routing rules in {path}: {e}",
                {"path": str(path), "errors": e.errors(include_url=False, include_context=False, include_input=False)}
            ) from e

    @property
    def path(self) -> Optional[Path]:
        return self._path

    @property
    def rulebook(self) -> RuleBook:
        """Get the loaded rule book."""
        if self._rulebook is None:
            raise ConfigurationException("Routing rules not loaded. Call load() first.")
        return self._rulebook

    def get_rulebook(self) -> RuleBook:
        return self.rulebook
