"""
Business-rule validation for records and query strings.

Each validator builds an ordered list of (condition, error_message) pairs and
reports the first rule that fails. Later rules are never evaluated, so a rule
may rely on every rule before it having passed.
"""

import math
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, List, Optional, Tuple

DATE_FORMAT = "%Y-%m-%d"
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# DynamoDB numbers: 38 significant digits, magnitude between 1e-130 and 1e126.
MAX_INT_DIGITS = 38
MIN_MAGNITUDE = Decimal("1e-130")
MAX_MAGNITUDE = Decimal("1e126")

Rule = Tuple[Callable[[], bool], str]


def first_violation(rules: List[Rule]) -> Tuple[bool, Optional[str]]:
    """
    Run rules in order.

    Returns:
        Tuple of (is_valid, error_message)
    """
    for check_condition, error_message in rules:
        if check_condition():
            return False, error_message
    return True, None


def parse_date(value: str) -> Optional[date]:
    """Parse a zero-padded YYYY-MM-DD string, returning None when it does not match."""
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return None


def is_storable_number(value) -> bool:
    """True when DynamoDB can hold ``value`` as a Number attribute."""
    if isinstance(value, int):
        return abs(value) < 10 ** MAX_INT_DIGITS
    if not math.isfinite(value):
        return False
    number = abs(Decimal(str(value)))
    return number.is_zero() or MIN_MAGNITUDE <= number < MAX_MAGNITUDE


def _workouts_storable(workouts) -> bool:
    return all(is_storable_number(workout.difficulty_estimate) for workout in workouts)


def validate_program(program) -> Tuple[bool, Optional[str]]:
    validation_rules = [
        (lambda: not program.name,
         "name is required in request body"),
        (lambda: program.num_weeks < 1,
         "numWeeks must be a number greater than 0"),
        (lambda: not is_storable_number(program.num_weeks),
         "numWeeks is out of range"),
        (lambda: not any(program.workouts),
         "workouts must not be empty"),
        (lambda: not all(_workouts_storable(week) for week in program.workouts),
         "workout difficulty_estimate must be a finite number"),
    ]
    return first_violation(validation_rules)


def validate_challenge(challenge, today: date) -> Tuple[bool, Optional[str]]:
    """
    Validate a challenge against the calendar as of ``today``.

    A challenge may start today but not earlier, and may end on the day it
    starts.
    """
    start = parse_date(challenge.start_date)
    end = parse_date(challenge.end_date)

    validation_rules = [
        (lambda: not challenge.name,
         "name is required in request body"),
        (lambda: challenge.difficulty <= 0,
         "difficulty must be a number greater than 0"),
        (lambda: not is_storable_number(challenge.difficulty),
         "difficulty is out of range"),
        (lambda: challenge.num_workout_goal < 1,
         "numWorkoutGoal must be a number greater than 0"),
        (lambda: not is_storable_number(challenge.num_workout_goal),
         "numWorkoutGoal is out of range"),
        (lambda: not challenge.start_date,
         "startDate is required in request body"),
        (lambda: start is None,
         "startDate must be in the format of YYYY-MM-DD"),
        (lambda: start < today,
         "startDate must not be before today"),
        (lambda: not challenge.end_date,
         "endDate is required in request body"),
        (lambda: end is None,
         "endDate must be in the format of YYYY-MM-DD"),
        (lambda: end < start,
         "endDate must not be before startDate"),
        (lambda: not challenge.workout_types,
         "workoutTypes must not be empty"),
    ]
    return first_violation(validation_rules)


def validate_recommendation(recommendation) -> Tuple[bool, Optional[str]]:
    validation_rules = [
        (lambda: not recommendation.recommended_for,
         "recommendedFor is required in request body"),
        (lambda: recommendation.recommended_for == recommendation.created_by,
         "Unable to recommend a class to yourself."),
        (lambda: not recommendation.workout.id,
         "workout is required in request body"),
        (lambda: not is_storable_number(recommendation.workout.difficulty_estimate),
         "workout difficulty_estimate must be a finite number"),
    ]
    return first_violation(validation_rules)


_TRUE_VALUES = {"1", "t", "true"}
_FALSE_VALUES = {"0", "f", "false"}


def parse_bool(value: str) -> Optional[bool]:
    """Parse true/false, t/f or 1/0 in any case; None when unrecognised."""
    normalized = (value or "").strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return None


def parse_int(value: str, minimum: int) -> Optional[int]:
    """Parse an integer no smaller than ``minimum``; None otherwise."""
    try:
        number = int((value or "").strip())
    except ValueError:
        return None
    return number if number >= minimum else None
