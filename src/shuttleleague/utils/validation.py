"""Validation result types for Shuttle League.

Every rule check in the engine returns one of these objects instead of
raising, so a caller can show the message and leave its data unchanged.
"""

from typing import List, Optional

from shuttleleague.type_hints import MaybeSide


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
    """

    def __init__(self, is_valid: bool, error_message: Optional[str] = None):
        self.is_valid = is_valid
        self.error_message = error_message

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def fail(cls, error_message: str) -> "ValidationResult":
        return cls(is_valid=False, error_message=error_message)

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self) -> str:
        if self.is_valid:
            return "ValidationResult(VALID)"
        return f"ValidationResult(INVALID, {self.error_message!r})"


class GameScoreResult(ValidationResult):
    """Verdict on a single game score.

    Attributes:
        is_valid: Whether the score pair is legal
        winner: ``"team1"``/``"team2"`` when the game is decided, else None
        error_message: Reason the score pair is illegal
    """

    def __init__(
        self,
        is_valid: bool,
        winner: MaybeSide = None,
        error_message: Optional[str] = None,
    ):
        super().__init__(is_valid, error_message)
        self.winner = winner if is_valid else None

    @property
    def is_decided(self) -> bool:
        return self.winner is not None

    def __repr__(self) -> str:
        if self.is_valid:
            return f"GameScoreResult(VALID, winner={self.winner!r})"
        return f"GameScoreResult(INVALID, {self.error_message!r})"


class RoundValidationResult:
    """Every rule violation found in a round's player assignments.

    Attributes:
        errors: Display-ready messages, in a deterministic order
    """

    def __init__(self, errors: Optional[List[str]] = None):
        self.errors: List[str] = list(errors or [])

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def error_message(self) -> Optional[str]:
        """All errors joined with newlines, as the caller displays them."""
        if not self.errors:
            return None
        return "\n".join(self.errors)

    def __bool__(self) -> bool:
        return self.is_valid

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RoundValidationResult):
            return NotImplemented
        return self.errors == other.errors

    def __repr__(self) -> str:
        if self.is_valid:
            return "RoundValidationResult(VALID)"
        return f"RoundValidationResult(INVALID, {len(self.errors)} errors)"
