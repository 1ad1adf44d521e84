"""
Text-mode driver for playing a session in a terminal.

Commands while playing:
    ?            hint (hangman)        ?N   hint for word / blank N
    !            submit                q    quit
    hangman:     a letter
    word search: R1 C1 R2 C2  (1-based cells, start and end of a drag)
    phrase:      N answer     (answer blank N)

After an item: n = next, r = retry, q = quit.
"""

from typing import Callable, List, Optional

from .games import CompletePhraseSession, HangingSession, WordSearchSession
from .models import SessionStatus
from .session import GameSession
from ..rules.models import CellPosition, HangingResult, PhraseResult, WordSearchResult


Reader = Callable[[str], str]
Writer = Callable[[str], None]


class ConsoleDriver:
    """Reads commands, feeds them to a session and prints its state."""

    def __init__(self, session: GameSession, read: Reader = input, write: Writer = print) -> None:
        self.session = session
        self.read = read
        self.write = write

    async def run(self) -> GameSession:
        """Play until the player quits or leaves a finished session."""
        await self.session.start()

        while True:
            status = self.session.status
            if status == SessionStatus.PLAYING:
                self.render()
                if not await self.handle(self.read("> ").strip()):
                    break
            elif status == SessionStatus.ERROR:
                self.write(f"Error: {self.session.error}")
                if self.read("[r]etry or [q]uit? ").strip().lower() != "r":
                    break
                await self.session.retry()
            elif status in (SessionStatus.WORD_COMPLETED, SessionStatus.COMPLETED):
                self.render_result()
                if not await self.after_item():
                    break
            else:
                break

        return self.session

    async def after_item(self) -> bool:
        options = "[n]ext, [r]etry or [q]uit? " if self.session.can_advance else "[r]etry or [q]uit? "
        choice = self.read(options).strip().lower()
        if choice == "n" and self.session.can_advance:
            await self.session.next_item()
            return True
        if choice == "r":
            await self.session.retry()
            return True
        return False

    async def handle(self, command: str) -> bool:
        """Apply one command. Returns False to stop playing."""
        session = self.session
        if command == "q":
            return False
        if command == "!":
            await session.submit()
        elif command.startswith("?"):
            try:
                sub_unit = self._parse_sub_unit(command[1:])
            except ValueError as e:
                self.write(str(e))
                return True
            hint = await session.request_hint(sub_unit)
            if hint is None:
                self.write("No hint available.")
        else:
            try:
                await self.play(command)
            except ValueError as e:
                self.write(str(e))

        if session.error and session.status == SessionStatus.PLAYING:
            self.write(f"Error: {session.error}")
        return True

    def _parse_sub_unit(self, text: str) -> Optional[int]:
        text = text.strip()
        if not text:
            return None
        if not text.isdigit() or int(text) < 1:
            raise ValueError("Ask for a hint as: ?NUMBER (1 or more)")
        # word indices and blank ids are 0-based, labels are 1-based
        return int(text) - 1

    async def play(self, command: str) -> None:
        session = self.session
        if isinstance(session, HangingSession):
            await session.guess_letter(command)
        elif isinstance(session, WordSearchSession):
            numbers = [int(part) - 1 for part in command.split()]
            if len(numbers) != 4:
                raise ValueError("Enter a selection as: ROW COL ROW COL")
            found = session.select_word(CellPosition(*numbers[:2]), CellPosition(*numbers[2:]))
            self.write(f"Found {found.word}!" if found else "No new word there.")
        elif isinstance(session, CompletePhraseSession):
            label, _, answer = command.partition(" ")
            if not label.isdigit():
                raise ValueError("Enter an answer as: BLANK_NUMBER ANSWER")
            session.set_answer(int(label) - 1, answer.strip())

    def render(self) -> None:
        session = self.session
        header = f"Item {session.current_index + 1} of {session.total_items}"
        self.write(header)

        if isinstance(session, HangingSession):
            board = session.board
            if board.item.category:
                self.write(f"Category: {board.item.category}")
            self.write(" ".join(session.masked_word()))
            self.write(f"Errors: {board.errors}/{board.max_attempts}  Tried: {' '.join(board.guessed_letters)}")
            hint = session.hints.get(session.current_index)
            if hint and hint.hint:
                self.write(f"Hint: {hint.hint}")

        elif isinstance(session, WordSearchSession):
            board = session.board
            for r, row in enumerate(board.item.grid):
                cells = []
                for c, letter in enumerate(row):
                    cells.append(letter.lower() if board.is_cell_found(CellPosition(r, c)) else letter)
                self.write(" ".join(cells))
            if board.item.configuration.show_word_list:
                self.write("Words: " + ", ".join(self._word_list()))
            self.write(f"Found: {len(board.found_words)}")

        elif isinstance(session, CompletePhraseSession):
            board = session.board
            parts = []
            for slot in board.layout():
                if not slot.is_blank:
                    parts.append(slot.text)
                elif slot.blank is None:
                    parts.append("[____]")
                else:
                    answer = board.answers.get(slot.index) or "____"
                    parts.append(f"[{slot.index + 1}: {answer}]")
            self.write("".join(parts))
            for blank in board.item.blanks:
                if blank.is_choice:
                    self.write(f"  {blank.id + 1}: " + " / ".join(o.text for o in blank.options))
                hint = session.hints.get(blank.id)
                if hint and (hint.hint or hint.first_letter):
                    self.write(f"  Hint {blank.id + 1}: {hint.hint or ''} {hint.first_letter or ''}".rstrip())

    def _word_list(self) -> List[str]:
        session = self.session
        words = []
        for index, clue in enumerate(session.board.item.words):
            label = clue.word or clue.clue or f"word {index + 1}"
            if clue.word and session.board.found(clue.word):
                label += " ✓"
            words.append(label)
        return words

    def render_result(self) -> None:
        result = self.session.last_result
        if isinstance(result, HangingResult):
            verdict = "Correct!" if result.is_correct else "Out of attempts."
            self.write(f"{verdict} The word was {result.correct_word}. Score: {result.score}  Errors: {result.errors_count}")
        elif isinstance(result, WordSearchResult):
            self.write(f"Score: {result.score}  ({result.correct} found, {result.missing} missing)")
        elif isinstance(result, PhraseResult):
            self.write(f"Score: {result.score}  ({result.correct_blanks}/{result.total_blanks} blanks)")
            for detail in result.details:
                if not detail.is_correct:
                    self.write(f"  Blank {detail.blank_id + 1}: correct answer is {detail.correct_answer}")

        aggregate = self.session.aggregate
        if aggregate is not None and self.session.status == SessionStatus.COMPLETED:
            self.write(
                f"Session: {aggregate.total_score} pts, {aggregate.total_correct}/{aggregate.total_items} correct, "
                f"{aggregate.percentage}%"
            )
