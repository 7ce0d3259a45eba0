"""
strength.py -- Scores a password, classifies it, and explains what to fix.

Pure logic: no I/O, no state between calls. The common-pattern matchers are
compiled once at import and handed to PasswordEvaluator as an immutable tuple;
evaluate() is a module-level shortcut over a default evaluator.

Scoring is additive and capped at 100. The common-pattern criterion is worth
only 10 points, so a long, varied password that contains e.g. "password"
still scores in the Very Strong tier. Keep it that way unless the weighting is
deliberately redesigned.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional

from .models import (
    MIN_PASSWORD_LENGTH,
    RECOMMENDED_PASSWORD_LENGTH,
    CriteriaSet,
    ScoreResult,
    StrengthLabel,
)

logger = logging.getLogger(__name__)


class InvalidInputError(TypeError):
    """Raised when the candidate is not a string. Nothing is scored."""


# ---------------------------------------------------------------------------
# Character classes
# ---------------------------------------------------------------------------

SYMBOLS = '!@#$%^&*(),.?":{}|<>'

_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")
_SYMBOL = re.compile("[" + re.escape(SYMBOLS) + "]")
_WHITESPACE = re.compile(r"\s")


# ---------------------------------------------------------------------------
# Common patterns
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CommonPattern:
    """A named matcher. full=True means the whole password must match."""

    name: str
    regex: re.Pattern
    full: bool = False

    def matches(self, password: str) -> bool:
        if self.full:
            return self.regex.fullmatch(password) is not None
        return self.regex.search(password) is not None


DEFAULT_PATTERNS: tuple[CommonPattern, ...] = (
    CommonPattern("empty", re.compile(r""), full=True),
    CommonPattern("repeated", re.compile(r"(.)\1{2,}", re.DOTALL)),
    CommonPattern("sequence", re.compile(r"123|abc|qwerty|password|admin", re.IGNORECASE)),
    CommonPattern("digits_only", re.compile(r"[0-9]+"), full=True),
    CommonPattern("letters_only", re.compile(r"[a-zA-Z]+"), full=True),
)


# ---------------------------------------------------------------------------
# Score table
# ---------------------------------------------------------------------------

_LENGTH_TIERS: tuple[tuple[int, int], ...] = (
    (MIN_PASSWORD_LENGTH, 25),
    (RECOMMENDED_PASSWORD_LENGTH, 15),
    (16, 10),
)
_LONG_PASSWORD_BONUS_OVER = 20

# criterion name -> (points, remediation line when the criterion fails)
_CRITERION_RULES: dict[str, tuple[int, str]] = {
    "has_min_length": (0, f"Password should be at least {MIN_PASSWORD_LENGTH} characters long"),
    "has_lowercase": (10, "Add lowercase letters (a-z)"),
    "has_uppercase": (10, "Add uppercase letters (A-Z)"),
    "has_digit": (10, "Add numbers (0-9)"),
    "has_symbol": (15, "Add special characters (!@#$%^&*)"),
    "has_no_whitespace": (5, "Remove spaces from password"),
    "has_no_common_pattern": (10, 'Avoid common patterns like "123", "abc", or "password"'),
}

LENGTH_SUGGESTION = f"Consider using {RECOMMENDED_PASSWORD_LENGTH}+ characters for better security"
AFFIRMATION = "Excellent! Your password meets all security criteria"

# Top-down, first match wins.
_THRESHOLDS: tuple[tuple[int, StrengthLabel], ...] = (
    (80, StrengthLabel.VERY_STRONG),
    (60, StrengthLabel.STRONG),
    (40, StrengthLabel.MEDIUM),
    (20, StrengthLabel.WEAK),
)


def classify_score(score: int) -> StrengthLabel:
    """Map a 0-100 score to its strength tier."""
    for floor, label in _THRESHOLDS:
        if score >= floor:
            return label
    return StrengthLabel.VERY_WEAK


# ---------------------------------------------------------------------------
# Evaluator
# ---------------------------------------------------------------------------


class PasswordEvaluator:
    """Scores passwords against a fixed, injected set of common patterns.

    Usage:
        evaluator = PasswordEvaluator()
        result = evaluator.evaluate("Tr0ub4dor&3xyz")
        result.score, result.strength, result.feedback
    """

    def __init__(self, patterns: Optional[Iterable[CommonPattern]] = None) -> None:
        self._patterns: tuple[CommonPattern, ...] = DEFAULT_PATTERNS if patterns is None else tuple(patterns)

    @property
    def patterns(self) -> tuple[CommonPattern, ...]:
        return self._patterns

    def evaluate(self, password: str) -> ScoreResult:
        """Return the ScoreResult for password.

        Raises InvalidInputError if password is not a str. Any str is valid,
        including the empty string.
        """
        if not isinstance(password, str):
            raise InvalidInputError(f"password must be a str, got {type(password).__name__}")

        criteria = self.check_criteria(password)
        score = _calculate_score(password, criteria)
        result = ScoreResult(
            score=score,
            strength=classify_score(score),
            feedback=_build_feedback(password, criteria),
            criteria=criteria,
        )
        logger.debug("Evaluated password (length=%d): score=%d", len(password), score)
        return result

    def check_criteria(self, password: str) -> CriteriaSet:
        return CriteriaSet(
            has_min_length=len(password) >= MIN_PASSWORD_LENGTH,
            has_lowercase=_LOWER.search(password) is not None,
            has_uppercase=_UPPER.search(password) is not None,
            has_digit=_DIGIT.search(password) is not None,
            has_symbol=_SYMBOL.search(password) is not None,
            has_no_whitespace=_WHITESPACE.search(password) is None,
            has_no_common_pattern=not self.matched_patterns(password),
        )

    def matched_patterns(self, password: str) -> list[str]:
        """Names of every common pattern found in password."""
        return [p.name for p in self._patterns if p.matches(password)]


def _calculate_score(password: str, criteria: CriteriaSet) -> int:
    length = len(password)
    score = sum(points for floor, points in _LENGTH_TIERS if length >= floor)
    for name, (points, _) in _CRITERION_RULES.items():
        if getattr(criteria, name):
            score += points
    if length > _LONG_PASSWORD_BONUS_OVER:
        score += 5
    return min(score, 100)


def _build_feedback(password: str, criteria: CriteriaSet) -> tuple[str, ...]:
    feedback = [message for name, (_, message) in _CRITERION_RULES.items() if not getattr(criteria, name)]
    if len(password) < RECOMMENDED_PASSWORD_LENGTH:
        feedback.append(LENGTH_SUGGESTION)
    if not feedback:
        feedback.append(AFFIRMATION)
    return tuple(feedback)


_default_evaluator = PasswordEvaluator()


def evaluate(password: str) -> ScoreResult:
    """Score password with the default pattern set."""
    return _default_evaluator.evaluate(password)
