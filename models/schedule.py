# models/schedule.py

"""
Holds the fixed grading schedule for a school year.

A year is split into six grading periods ("sequences"), grouped pairwise into three terms.
The term-to-sequence table is static and shared by every aggregator, so adding logic for a
new term never requires branching on the term itself.

Also holds the grading constants used across the program:
- `PASSING_MARK`: the minimum average (out of `MAX_AVERAGE`) counted as a pass.
- `MAX_AVERAGE`: the scale every average is normalized to.
"""

from enum import Enum

PASSING_MARK = 10

MAX_AVERAGE = 20


class Sequence(str, Enum):
    FIRST = "firstSequence"
    SECOND = "secondSequence"
    THIRD = "thirdSequence"
    FOURTH = "fourthSequence"
    FIFTH = "fifthSequence"
    SIXTH = "sixthSequence"


class Term(str, Enum):
    FIRST = "firstTerm"
    SECOND = "secondTerm"
    THIRD = "thirdTerm"


class ResultView(str, Enum):
    SEQUENCE = "sequence"
    FIRST_TERM = "firstTerm"
    SECOND_TERM = "secondTerm"
    THIRD_TERM = "thirdTerm"
    ANNUAL = "annual"


TERM_SEQUENCES: dict[Term, tuple[Sequence, Sequence]] = {
    Term.FIRST: (Sequence.FIRST, Sequence.SECOND),
    Term.SECOND: (Sequence.THIRD, Sequence.FOURTH),
    Term.THIRD: (Sequence.FIFTH, Sequence.SIXTH),
}

TERM_VIEWS: dict[ResultView, Term] = {
    ResultView.FIRST_TERM: Term.FIRST,
    ResultView.SECOND_TERM: Term.SECOND,
    ResultView.THIRD_TERM: Term.THIRD,
}


def to_sequence(sequence: Sequence | str) -> Sequence:
    """
    Normalizes a sequence label to a `Sequence` member.

    Raises:
        ValueError: If the label is not one of the six sequence values.
    """
    return sequence if isinstance(sequence, Sequence) else Sequence(sequence)
