"""
Tests for session-level aggregation of item results.
"""

from src.rules import (
    AggregatedResult,
    HangingResult,
    PhraseResult,
    WordSearchResult,
    aggregate_results,
)


class TestAggregateResults:
    """Folding item results."""

    def test_three_hangman_words(self):
        """Scores, correctness, errors and the mean percentage are folded."""
        results = [
            HangingResult(score=10, is_correct=True, errors_count=0, percentage=100, correct_word="SOL"),
            HangingResult(score=0, is_correct=False, errors_count=4, percentage=0, correct_word="LUNA"),
            HangingResult(score=10, is_correct=True, errors_count=1, percentage=100, correct_word="MAR"),
        ]
        aggregate = aggregate_results(results)

        assert aggregate.total_score == 20
        assert aggregate.total_correct == 2
        assert aggregate.total_incorrect == 1
        assert aggregate.total_errors == 5
        assert aggregate.percentage == 66.67
        assert aggregate.total_items == 3

    def test_items_kept_in_order(self):
        """The per-item results are retained in order."""
        results = [HangingResult(correct_word="A", is_correct=True), HangingResult(correct_word="B")]
        aggregate = aggregate_results(results)
        assert [r.correct_word for r in aggregate.items] == ["A", "B"]

    def test_empty(self):
        """No results aggregate to zeros."""
        assert aggregate_results([]) == AggregatedResult()

    def test_missing_percentage_uses_correctness(self):
        """Items without a percentage count as 100 or 0."""
        results = [HangingResult(is_correct=True), HangingResult(is_correct=False)]
        assert aggregate_results(results).percentage == 50.0

    def test_unweighted_mean(self):
        """Each item weighs the same, whatever its number of blanks."""
        results = [
            PhraseResult(percentage=50, total_blanks=2, correct_blanks=1, incorrect_blanks=1),
            PhraseResult(percentage=100, total_blanks=10, correct_blanks=10, is_perfect=True),
        ]
        assert aggregate_results(results).percentage == 75.0

    def test_word_search_counts(self):
        """A grid with missing words is not correct; incorrect picks are errors."""
        result = WordSearchResult(score=5, correct=2, incorrect=1, missing=1)
        aggregate = aggregate_results([result])
        assert aggregate.total_correct == 0
        assert aggregate.total_errors == 1

    def test_serializes_subclass_fields(self):
        """Dumped items keep their game-specific fields in camelCase."""
        aggregate = aggregate_results([HangingResult(correct_word="SOL", is_correct=True)])
        dumped = aggregate.model_dump(by_alias=True)
        assert dumped["items"][0]["correctWord"] == "SOL"
        assert dumped["totalCorrect"] == 1
