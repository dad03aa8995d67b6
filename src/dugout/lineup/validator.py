"""Hard-rule checks for a complete or hand-edited lineup."""

from __future__ import annotations

from typing import List, Mapping, Optional

from dugout.models import (
    INFIELD_POSITIONS,
    NON_BATTERY_POSITIONS,
    POSITIONS,
    GenerateLineupInput,
    InningAssignment,
    Lineup,
    Position,
    RuleViolation,
    playing_players,
)


INFIELD_MINIMUM_WINDOW = 4
INFIELD_MINIMUM_COUNT = 2


def infield_window(innings: int) -> int:
    """Last inning counted toward the infield minimum."""

    return min(INFIELD_MINIMUM_WINDOW, innings)


def validate_lineup(lineup: Mapping[int, InningAssignment], input: GenerateLineupInput) -> List[RuleViolation]:
    """Check every rule and return all violations; an empty list means valid."""

    return [
        *_validate_grid_complete(lineup, input),
        *_validate_no_duplicates(lineup, input),
        *_validate_battery_match(lineup, input, "P"),
        *_validate_battery_match(lineup, input, "C"),
        *_validate_no_consecutive_bench(lineup, input),
        *_validate_infield_minimum(lineup, input),
        *_validate_no_consecutive_position(lineup, input),
        *_validate_position_blocks(lineup, input),
    ]


def _inning(lineup: Mapping[int, InningAssignment], inning: int) -> Optional[InningAssignment]:
    return lineup.get(inning)


def _validate_grid_complete(lineup: Lineup, input: GenerateLineupInput) -> List[RuleViolation]:
    errors: List[RuleViolation] = []
    for inning in range(1, input.innings + 1):
        assignment = _inning(lineup, inning) or {}
        for pos in POSITIONS:
            if not assignment.get(pos):
                errors.append(
                    RuleViolation(
                        rule="GRID_COMPLETE",
                        message=f"Inning {inning} is missing a {pos}.",
                        inning=inning,
                        position=pos,
                    )
                )
    return errors


def _validate_no_duplicates(lineup: Lineup, input: GenerateLineupInput) -> List[RuleViolation]:
    errors: List[RuleViolation] = []
    for inning in range(1, input.innings + 1):
        assignment = _inning(lineup, inning)
        if not assignment:
            continue
        seen: dict[str, Position] = {}
        for pos in POSITIONS:
            player_id = assignment.get(pos)
            if not player_id:
                continue
            previous = seen.get(player_id)
            if previous is not None:
                errors.append(
                    RuleViolation(
                        rule="NO_DUPLICATES",
                        message=(
                            f"{input.player_name(player_id)} is assigned to both {previous} "
                            f"and {pos} in inning {inning}."
                        ),
                        inning=inning,
                        player_id=player_id,
                    )
                )
            else:
                seen[player_id] = pos
    return errors


def _validate_battery_match(lineup: Lineup, input: GenerateLineupInput, position: Position) -> List[RuleViolation]:
    if position == "P":
        expected_by_inning, rule, role = input.pitcher_assignments, "PITCHER_MATCH", "pitcher"
    else:
        expected_by_inning, rule, role = input.catcher_assignments, "CATCHER_MATCH", "catcher"

    errors: List[RuleViolation] = []
    for inning in range(1, input.innings + 1):
        expected_id = expected_by_inning.get(inning)
        if not expected_id:
            continue
        actual_id = (_inning(lineup, inning) or {}).get(position)
        if actual_id == expected_id:
            continue
        actual_name = input.player_name(actual_id) if actual_id else "no one"
        errors.append(
            RuleViolation(
                rule=rule,
                message=(
                    f"Inning {inning} {role} should be {input.player_name(expected_id)} "
                    f"but {actual_name} is assigned."
                ),
                inning=inning,
                player_id=expected_id,
                position=position,
            )
        )
    return errors


def _validate_no_consecutive_bench(lineup: Lineup, input: GenerateLineupInput) -> List[RuleViolation]:
    errors: List[RuleViolation] = []
    playing_by_inning = {
        inning: playing_players(_inning(lineup, inning)) for inning in range(1, input.innings + 1)
    }
    for player in input.present_players:
        streak = 0
        for inning in range(1, input.innings + 1):
            if player.player_id in playing_by_inning[inning]:
                streak = 0
                continue
            streak += 1
            if streak > 1:
                errors.append(
                    RuleViolation(
                        rule="NO_CONSECUTIVE_BENCH",
                        message=(
                            f"{player.name} sits out innings {inning - 1} and {inning} in a row. "
                            "Every player should get to play each inning."
                        ),
                        inning=inning,
                        player_id=player.player_id,
                    )
                )
    return errors


def _validate_infield_minimum(lineup: Lineup, input: GenerateLineupInput) -> List[RuleViolation]:
    errors: List[RuleViolation] = []
    window = infield_window(input.innings)
    for player in input.present_players:
        count = 0
        for inning in range(1, window + 1):
            assignment = _inning(lineup, inning)
            if assignment and any(assignment.get(pos) == player.player_id for pos in INFIELD_POSITIONS):
                count += 1
        if count < INFIELD_MINIMUM_COUNT:
            plural = "" if count == 1 else "s"
            errors.append(
                RuleViolation(
                    rule="INFIELD_MINIMUM",
                    message=(
                        f"{player.name} only has {count} infield position{plural} in the first "
                        f"{window} innings. Every player needs at least {INFIELD_MINIMUM_COUNT}."
                    ),
                    player_id=player.player_id,
                )
            )
    return errors


def _validate_no_consecutive_position(lineup: Lineup, input: GenerateLineupInput) -> List[RuleViolation]:
    # P and C may repeat.
    errors: List[RuleViolation] = []
    for player in input.present_players:
        for inning in range(2, input.innings + 1):
            previous = _inning(lineup, inning - 1)
            current = _inning(lineup, inning)
            if not previous or not current:
                continue
            for pos in NON_BATTERY_POSITIONS:
                if previous.get(pos) == player.player_id and current.get(pos) == player.player_id:
                    errors.append(
                        RuleViolation(
                            rule="NO_CONSECUTIVE_POSITION",
                            message=f"{player.name} plays {pos} in both innings {inning - 1} and {inning}.",
                            inning=inning,
                            player_id=player.player_id,
                            position=pos,
                        )
                    )
    return errors


def _validate_position_blocks(lineup: Lineup, input: GenerateLineupInput) -> List[RuleViolation]:
    errors: List[RuleViolation] = []
    for player_id, blocked in input.position_blocks.items():
        if not blocked:
            continue
        for inning in range(1, input.innings + 1):
            assignment = _inning(lineup, inning)
            if not assignment:
                continue
            for pos in blocked:
                if assignment.get(pos) == player_id:
                    errors.append(
                        RuleViolation(
                            rule="POSITION_BLOCK",
                            message=(
                                f"{input.player_name(player_id)} is blocked from playing {pos} "
                                f"but is assigned there in inning {inning}."
                            ),
                            inning=inning,
                            player_id=player_id,
                            position=pos,
                        )
                    )
    return errors
