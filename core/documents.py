# core/documents.py

"""
Packages a computed result view for the external document generator.

`build_results_document()` only selects: it picks the rows and statistics belonging to the
chosen `ResultView` and bundles them with a translated title and the caller's label
translation function. Rendering, layout, and localization all belong to the generator.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from models.results import ResultSet
from models.schedule import TERM_VIEWS, ResultView, Term

logger = logging.getLogger(__name__)

Translate = Callable[[str], str]


class ResultsDocument:

    def __init__(
        self,
        title: str,
        rows: list,
        class_average: float,
        pass_percentage: float,
        is_annual: bool,
        translate: Translate,
    ):
        self._title = title
        self._rows = list(rows)
        self._class_average = class_average
        self._pass_percentage = pass_percentage
        self._is_annual = is_annual
        self._translate = translate

    # === properties ===

    @property
    def title(self) -> str:
        return self._title

    @property
    def rows(self) -> list:
        return list(self._rows)

    @property
    def class_average(self) -> float:
        return self._class_average

    @property
    def pass_percentage(self) -> float:
        return self._pass_percentage

    @property
    def is_annual(self) -> bool:
        return self._is_annual

    @property
    def translate(self) -> Translate:
        return self._translate

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "title": self._title,
            "rows": [row.to_dict() for row in self._rows],
            "class_average": self._class_average,
            "pass_percentage": self._pass_percentage,
            "is_annual": self._is_annual,
        }

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"ResultsDocument({self._title}, {len(self._rows)} rows, {self._is_annual})"


def select_result_set(
    view: ResultView,
    sequence_results: ResultSet | None,
    term_results: Mapping[Term, ResultSet] | None,
    annual_results: ResultSet | None,
) -> ResultSet:
    """
    Returns the result set shown by `view`, or an empty `ResultSet` if it has not been computed.
    """
    match view:
        case ResultView.SEQUENCE:
            selected = sequence_results
        case ResultView.ANNUAL:
            selected = annual_results
        case _:
            selected = (term_results or {}).get(TERM_VIEWS[view])

    return selected if selected is not None else ResultSet([])


def build_results_document(
    view: ResultView | str,
    sequence_results: ResultSet | None,
    term_results: Mapping[Term, ResultSet] | None,
    annual_results: ResultSet | None,
    translate: Translate = str,
) -> ResultsDocument:
    """
    Builds the payload for rendering one result view as a document.

    Args:
        view (ResultView | str): The result view to render.
        sequence_results (ResultSet | None): The latest sequence results, if computed.
        term_results (Mapping[Term, ResultSet] | None): The latest term results, if computed.
        annual_results (ResultSet | None): The latest annual results, if computed.
        translate (Callable[[str], str]): Label translation function; the title is `translate(view.value)`.

    Returns:
        ResultsDocument: The title, ordered rows, class average, pass percentage, annual flag,
        and translation function for the generator.

    Raises:
        ValueError: If `view` is not a valid result view label.
    """
    view = ResultView(view)
    selected = select_result_set(view, sequence_results, term_results, annual_results)

    logger.debug("Built %s results document with %d rows.", view.value, len(selected))

    return ResultsDocument(
        title=translate(view.value),
        rows=selected.rows,
        class_average=selected.class_average,
        pass_percentage=selected.pass_percentage,
        is_annual=view is ResultView.ANNUAL,
        translate=translate,
    )
