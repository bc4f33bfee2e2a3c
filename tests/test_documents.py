# tests/test_documents.py

import pytest

from core.documents import build_results_document, select_result_set
from models.results import AnnualResult, ResultSet, SequenceResult, TermResult
from models.schedule import ResultView, Term


@pytest.fixture
def sequence_results():
    return ResultSet(
        [SequenceResult("A", 34, 17.0, 1), SequenceResult("B", 18, 9.0, 2)], 13.0, 50.0
    )


@pytest.fixture
def term_results():
    return {
        Term.FIRST: ResultSet([TermResult("A", 34, 17.0, 1)], 17.0, 100.0),
        Term.SECOND: ResultSet([TermResult("A", 0, 0.0, 1)]),
    }


@pytest.fixture
def annual_results():
    return ResultSet([AnnualResult("A", 17.0, 0.0, 0.0, 17.0, 1)], 17.0, 100.0)


def test_sequence_document(sequence_results, term_results, annual_results):
    document = build_results_document(
        "sequence", sequence_results, term_results, annual_results
    )

    assert document.title == "sequence"
    assert [row.student for row in document.rows] == ["A", "B"]
    assert document.class_average == 13.0
    assert document.pass_percentage == 50.0
    assert not document.is_annual


def test_term_document_uses_translated_title(sequence_results, term_results, annual_results):
    labels = {"firstTerm": "Premier Trimestre"}

    document = build_results_document(
        ResultView.FIRST_TERM,
        sequence_results,
        term_results,
        annual_results,
        translate=lambda key: labels.get(key, key),
    )

    assert document.title == "Premier Trimestre"
    assert document.rows == term_results[Term.FIRST].rows
    assert document.translate("firstTerm") == "Premier Trimestre"


def test_annual_document(sequence_results, term_results, annual_results):
    document = build_results_document(
        ResultView.ANNUAL, sequence_results, term_results, annual_results
    )

    assert document.is_annual
    assert document.to_dict() == {
        "title": "annual",
        "rows": [annual_results.rows[0].to_dict()],
        "class_average": 17.0,
        "pass_percentage": 100.0,
        "is_annual": True,
    }


def test_view_not_yet_computed_is_empty(sequence_results, term_results):
    selected = select_result_set(ResultView.THIRD_TERM, sequence_results, term_results, None)

    assert len(selected) == 0
    assert selected.class_average == 0.0

    document = build_results_document("annual", None, None, None)
    assert document.rows == []
    assert document.pass_percentage == 0.0


def test_invalid_view_raises():
    with pytest.raises(ValueError):
        build_results_document("fourthTerm", None, None, None)
