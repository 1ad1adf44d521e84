"""
Hangman ("guess the word").

Each word is validated on its own. The word is submitted automatically as
soon as every distinct letter is guessed or the player runs out of
attempts; between words the session pauses in `word_completed`.
"""

import unicodedata
from typing import Any, Dict, List, Optional, Set

from pydantic import BaseModel, Field

from ..models import HangingItem, SessionStatus
from ..session import GameRules, GameSession
from ...rules.models import HangingResult
from ...rules.text import is_letter_in_word, normalize_text, unique_letters


class HangingBoard(BaseModel):
    """
    Letters guessed so far for one word.

    Guesses are compared in normalized form (case and accents ignored, Ñ kept);
    `guessed_letters` keeps them as the player entered them.
    """

    item: HangingItem
    guessed_letters: List[str] = Field(default_factory=list)
    errors: int = 0

    @property
    def max_attempts(self) -> int:
        return self.item.max_attempts

    @property
    def attempts_left(self) -> int:
        return max(self.max_attempts - self.errors, 0)

    @property
    def is_exhausted(self) -> bool:
        return self.errors >= self.max_attempts

    def _normalized_guesses(self) -> Set[str]:
        return {normalize_text(letter) for letter in self.guessed_letters}

    def has_guessed(self, letter: str) -> bool:
        return normalize_text(letter) in self._normalized_guesses()

    def guess(self, letter: str) -> bool:
        """
        Record a guessed letter.

        A letter missing from the word costs exactly one attempt. Repeated
        letters and guesses after the attempts ran out are ignored.

        Returns:
            True if the guess was recorded

        Raises:
            ValueError: if `letter` is not a single letter
        """
        letter = unicodedata.normalize("NFC", letter.strip())
        if len(letter) != 1 or not letter.isalpha():
            raise ValueError(f"Guess must be a single letter, got {letter!r}")

        if self.is_exhausted or self.has_guessed(letter):
            return False

        self.guessed_letters.append(letter)
        if not is_letter_in_word(letter, self.item.word):
            self.errors += 1
        return True

    def is_word_guessed(self) -> bool:
        return unique_letters(self.item.word) <= self._normalized_guesses()

    def correct_letters(self) -> List[str]:
        return [l for l in self.guessed_letters if is_letter_in_word(l, self.item.word)]

    def wrong_letters(self) -> List[str]:
        return [l for l in self.guessed_letters if not is_letter_in_word(l, self.item.word)]

    def masked_word(self, revealed_position: Optional[int] = None, mask: str = "_") -> str:
        """The word with unguessed letters masked; spaces and punctuation stay visible."""
        guesses = self._normalized_guesses()
        shown = []
        for position, char in enumerate(self.item.word):
            if not char.isalpha() or normalize_text(char) in guesses or position == revealed_position:
                shown.append(char)
            else:
                shown.append(mask)
        return "".join(shown)


class HangingRules(GameRules):
    game_type = "hanging"
    supports_auto_advance = True

    def parse_item(self, data: Dict[str, Any]) -> HangingItem:
        return HangingItem.model_validate(data)

    def parse_result(self, data: Dict[str, Any]) -> HangingResult:
        return HangingResult.model_validate(data)

    def new_board(self, item: HangingItem) -> HangingBoard:
        return HangingBoard(item=item)

    def completion_predicate(self, board: HangingBoard) -> bool:
        return board.is_word_guessed() or board.is_exhausted

    def can_submit(self, board: HangingBoard) -> bool:
        return len(board.guessed_letters) > 0

    def build_submission(self, board: HangingBoard, item_index: int, hints_used: int) -> Dict[str, Any]:
        return {
            "wordIndex": item_index,
            "guessedLetters": list(board.guessed_letters),
            "hintsUsed": hints_used,
        }


class HangingSession(GameSession):
    """Hangman session over one or more words."""

    rules: GameRules = Field(default_factory=HangingRules)

    async def guess_letter(self, letter: str) -> bool:
        """
        Guess a letter and submit the word if that finished it.

        Returns:
            True if the guess was recorded
        """
        if self.status != SessionStatus.PLAYING or self.board is None:
            return False
        if not self.board.guess(letter):
            return False
        await self.after_input()
        return True

    @property
    def revealed_position(self) -> Optional[int]:
        hint = self.hints.get(self.current_index)
        return hint.revealed_position if hint else None

    def masked_word(self) -> str:
        if self.board is None:
            return ""
        return self.board.masked_word(self.revealed_position)
