"""Rule adapters — transform rules once, at registration time.

An adapter sees every rule discovered for a property before the rule is
stored in the builder's registry. The usual use is rewriting messages, e.g.
looking them up in a per-view-model message catalog.
"""

from abc import ABC, abstractmethod
from typing import Callable, Mapping

import structlog

from viewmodel_validation.validators.rules.base import Rule

logger = structlog.get_logger()

# Returns the message catalog (original message -> replacement) for a view-model type
CatalogProvider = Callable[[type], Mapping[str, str]]


class RuleAdapter(ABC):
    """Transforms a discovered rule before it is attached to a property."""

    @abstractmethod
    def adapt(self, rule: Rule, view_model_type: type) -> Rule:
        """Return the rule to store in place of `rule`.

        Implementations must not mutate `rule`: declared rules are shared by
        every instance of the view-model class.
        """
        ...


class MessageCatalogAdapter(RuleAdapter):
    """Replaces rule messages with entries from a per-type message catalog.

    The lookup key is the rule's explicit error_message, or its default
    template when none was given. Messages absent from the catalog pass
    through unchanged.
    """

    def __init__(self, catalog_provider: CatalogProvider):
        self._catalog_provider = catalog_provider

    def adapt(self, rule: Rule, view_model_type: type) -> Rule:
        catalog = self._catalog_provider(view_model_type)
        key = rule.error_message if rule.error_message is not None else rule.default_error_message
        replacement = catalog.get(key)
        if replacement is None:
            return rule

        logger.debug(
            "rule_message_adapted",
            rule=rule.name,
            view_model_type=view_model_type.__name__,
        )
        return rule.with_error_message(replacement)
