"""Results presenters — sinks that receive per-property validation outcomes.

A presenter is any callable `(property_name, errors) -> None`. It is called
once per property per validation pass; an empty `errors` list means the
property is valid and any previously shown error should be cleared.
"""

from typing import Callable, Sequence

ResultsPresenter = Callable[[str, Sequence[str]], None]


def null_results_presenter(property_name: str, errors: Sequence[str]) -> None:
    """Discard all results."""


class ResultsCollector:
    """Presenter that remembers the latest errors reported for each property.

    Usage:
        collector = ResultsCollector()
        validator = builder.with_results_presenter(collector).build()
        validator.validate_all()
        collector.errors_for("first_name")
    """

    def __init__(self):
        self.results: dict[str, list[str]] = {}

    def __call__(self, property_name: str, errors: Sequence[str]) -> None:
        self.results[property_name] = list(errors)

    def errors_for(self, property_name: str) -> list[str]:
        return list(self.results.get(property_name, []))

    @property
    def has_errors(self) -> bool:
        return any(self.results.values())

    def clear(self) -> None:
        self.results.clear()


def joined_message_presenter(
    callback: Callable[[str, str], None],
    separator: str = ", ",
) -> ResultsPresenter:
    """Adapt a single-message sink (e.g. a form field's message slot).

    The returned presenter joins all errors for a property into one string;
    an empty string means the property is valid.
    """

    def present(property_name: str, errors: Sequence[str]) -> None:
        callback(property_name, separator.join(errors))

    return present
