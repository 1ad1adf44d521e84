"""
Complete the phrase.

A phrase template such as "El {0} es el rey de la {1}" has one blank per
index. Each phrase is submitted explicitly once every blank is answered.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from ..models import PhraseItem, SessionStatus
from ..session import GameRules, GameSession
from ...rules.models import PhraseResult
from ...rules.template import TemplateSlot, layout_template


class PhraseBoard(BaseModel):
    """Answers for the blanks of one phrase, keyed by blank id."""

    item: PhraseItem
    answers: Dict[int, str] = Field(default_factory=dict)

    def model_post_init(self, __context) -> None:
        """Start with an empty answer for every blank."""
        for blank in self.item.blanks:
            self.answers.setdefault(blank.id, "")

    def set_answer(self, blank_id: int, value: str) -> None:
        """
        Overwrite the answer for a blank.

        Raises:
            ValueError: for an unknown blank, or a choice that is not among its options
        """
        blank = self.item.blank(blank_id)
        if blank is None:
            raise ValueError(f"Phrase has no blank with id {blank_id}")
        if blank.is_choice and blank.options and value and value not in {o.text for o in blank.options}:
            raise ValueError(f"'{value}' is not an option for blank {blank_id}")
        self.answers[blank_id] = value

    def is_complete(self) -> bool:
        return all(answer.strip() for answer in self.answers.values())

    def missing_blanks(self) -> List[int]:
        return [blank_id for blank_id, answer in self.answers.items() if not answer.strip()]

    def answer_list(self) -> List[Dict[str, Any]]:
        return [{"blankId": blank.id, "answer": self.answers.get(blank.id, "")} for blank in self.item.blanks]

    def layout(self) -> List[TemplateSlot]:
        return layout_template(self.item.phrase, {blank.id: blank for blank in self.item.blanks})


class CompletePhraseRules(GameRules):
    game_type = "complete_phrase"

    def parse_item(self, data: Dict[str, Any]) -> PhraseItem:
        return PhraseItem.model_validate(data)

    def parse_result(self, data: Dict[str, Any]) -> PhraseResult:
        return PhraseResult.model_validate(data)

    def new_board(self, item: PhraseItem) -> PhraseBoard:
        return PhraseBoard(item=item)

    def can_submit(self, board: PhraseBoard) -> bool:
        return board.is_complete()

    def build_submission(self, board: PhraseBoard, item_index: int, hints_used: int) -> Dict[str, Any]:
        return {
            "phraseIndex": item_index,
            "answers": board.answer_list(),
            "hintsUsed": hints_used,
        }


class CompletePhraseSession(GameSession):
    """Complete-phrase session over one or more phrases."""

    rules: GameRules = Field(default_factory=CompletePhraseRules)

    def set_answer(self, blank_id: int, value: str) -> bool:
        """
        Answer a blank of the current phrase.

        Returns:
            False if no phrase is being played
        """
        if self.status != SessionStatus.PLAYING or self.board is None:
            return False
        self.board.set_answer(blank_id, value)
        return True
