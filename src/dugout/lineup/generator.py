"""Randomized retry construction of fielding lineups."""

from __future__ import annotations

import logging
import math
import random
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from dugout.config import max_attempts as _configured_max_attempts
from dugout.config import multi_attempt_factor
from dugout.models import (
    FIELD_POSITION_COUNT,
    INFIELD_POSITIONS,
    NON_BATTERY_INFIELD,
    OUTFIELD_POSITIONS,
    POSITIONS,
    GenerateLineupInput,
    InningAssignment,
    Lineup,
    LineupGenerationResult,
    Position,
    RuleViolation,
    benched_players,
)

from .scorer import score_lineup
from .validator import INFIELD_MINIMUM_COUNT, infield_window, validate_lineup


logger = logging.getLogger(__name__)

EXHAUSTED_MESSAGE = (
    "Could not generate a valid lineup with these settings. "
    "Try adjusting pitcher/catcher assignments or position blocks."
)


@dataclass(frozen=True)
class _Slot:
    inning: int
    position: Position


def distribute_across_innings(player_ids: Sequence[str], innings: int) -> Dict[int, str]:
    """Give each chosen player one block of ``ceil(innings / n)`` consecutive innings.

    The last player absorbs any shortfall, so 3 pitchers over 6 innings pitch
    1-2, 3-4 and 5-6, and 2 pitchers over 5 innings pitch 1-3 and 4-5.
    """

    if not player_ids:
        return {}
    per_player = math.ceil(innings / len(player_ids))
    return {
        inning: player_ids[min((inning - 1) // per_player, len(player_ids) - 1)]
        for inning in range(1, innings + 1)
    }


def pre_validate(input: GenerateLineupInput) -> List[str]:
    """Return coach-readable reasons the input cannot work; empty means feasible."""

    errors: List[str] = []
    player_count = len(input.present_players)
    present_ids = set(input.player_ids())

    if player_count < FIELD_POSITION_COUNT:
        errors.append(
            f"Need at least {FIELD_POSITION_COUNT} present players to fill all positions. "
            f"Currently {player_count} present."
        )

    for inning, player_id in sorted(input.pitcher_assignments.items()):
        if player_id not in present_ids:
            errors.append(f"Pitcher for inning {inning} is not in the active roster.")

    for inning, player_id in sorted(input.catcher_assignments.items()):
        if player_id not in present_ids:
            errors.append(f"Catcher for inning {inning} is not in the active roster.")

    for inning in range(1, input.innings + 1):
        pitcher_id = input.pitcher_assignments.get(inning)
        if pitcher_id and pitcher_id == input.catcher_assignments.get(inning):
            errors.append(f"Same player assigned as both pitcher and catcher in inning {inning}.")

    for pos in POSITIONS:
        if pos in ("P", "C"):
            continue
        for inning in range(1, input.innings + 1):
            battery = {input.pitcher_assignments.get(inning), input.catcher_assignments.get(inning)}
            eligible = [
                player_id
                for player_id in input.player_ids()
                if not input.is_blocked(player_id, pos) and player_id not in battery
            ]
            if not eligible:
                errors.append(f"Not enough players eligible for {pos}. Consider removing some {pos} blocks.")
                break

    return errors


def _failure(message: str, attempt_count: int) -> LineupGenerationResult:
    return LineupGenerationResult(
        lineup={},
        valid=False,
        errors=(RuleViolation(rule="GRID_COMPLETE", message=message),),
        attempt_count=attempt_count,
    )


def generate_lineup(
    input: GenerateLineupInput,
    *,
    rng: Optional[random.Random] = None,
    max_attempts: Optional[int] = None,
) -> LineupGenerationResult:
    """Build one lineup that passes every rule, retrying random constructions."""

    pre_errors = pre_validate(input)
    if pre_errors:
        logger.info("Lineup input rejected before generation: %s", "; ".join(pre_errors))
        return LineupGenerationResult(
            lineup={},
            valid=False,
            errors=tuple(RuleViolation(rule="GRID_COMPLETE", message=msg) for msg in pre_errors),
            attempt_count=0,
        )

    rng = rng or random.Random()
    attempts = max_attempts if max_attempts is not None else _configured_max_attempts()
    if input.bench_priority:
        logger.debug("bench_priority supplied for %s players; construction does not weight it", len(input.bench_priority))

    for attempt in range(attempts):
        lineup = attempt_build(input, rng)
        if lineup is None:
            logger.debug("Attempt %s aborted: no eligible candidate for a slot", attempt + 1)
            continue
        violations = validate_lineup(lineup, input)
        if not violations:
            logger.debug("Valid lineup found on attempt %s/%s", attempt + 1, attempts)
            return LineupGenerationResult(lineup=lineup, valid=True, errors=(), attempt_count=attempt + 1)
        logger.debug(
            "Attempt %s rejected with %s violations (first: %s)",
            attempt + 1,
            len(violations),
            violations[0].rule,
        )

    logger.warning(
        "No valid lineup after %s attempts (%s players, %s innings)",
        attempts,
        len(input.present_players),
        input.innings,
    )
    return _failure(EXHAUSTED_MESSAGE, attempts)


def _battery_innings(player_id: str, pitchers: Dict[int, str], catchers: Dict[int, str], last_inning: int) -> int:
    return sum(
        1
        for inning in range(1, last_inning + 1)
        if pitchers.get(inning) == player_id or catchers.get(inning) == player_id
    )


def _resolve_battery(
    input: GenerateLineupInput,
    player_ids: Sequence[str],
    rng: random.Random,
) -> Optional[tuple[Dict[int, str], Dict[int, str]]]:
    pitchers: Dict[int, str] = {}
    catchers: Dict[int, str] = {}
    for inning in range(1, input.innings + 1):
        pitchers[inning] = input.pitcher_assignments.get(inning, "")
        catchers[inning] = input.catcher_assignments.get(inning, "")

    for inning in range(1, input.innings + 1):
        if not pitchers[inning]:
            candidates = [
                pid for pid in player_ids if pid != catchers[inning] and not input.is_blocked(pid, "P")
            ]
            if not candidates:
                return None
            pitchers[inning] = rng.choice(candidates)
        if not catchers[inning]:
            candidates = [
                pid for pid in player_ids if pid != pitchers[inning] and not input.is_blocked(pid, "C")
            ]
            if not candidates:
                return None
            catchers[inning] = rng.choice(candidates)
    return pitchers, catchers


def _place_infield_quota(
    input: GenerateLineupInput,
    player_ids: Sequence[str],
    pitchers: Dict[int, str],
    catchers: Dict[int, str],
    rng: random.Random,
) -> Dict[_Slot, str]:
    window = infield_window(input.innings)
    needs = {
        pid: max(0, INFIELD_MINIMUM_COUNT - _battery_innings(pid, pitchers, catchers, window))
        for pid in player_ids
    }

    available = [_Slot(inning, pos) for inning in range(1, window + 1) for pos in NON_BATTERY_INFIELD]
    placed: Dict[str, List[_Slot]] = defaultdict(list)
    owners: Dict[_Slot, str] = {}

    # Heavier battery duty leaves fewer open innings, so those players pick first.
    by_priority = sorted(
        player_ids,
        key=lambda pid: _battery_innings(pid, pitchers, catchers, window),
        reverse=True,
    )

    for pid in by_priority:
        while needs[pid] > 0 and available:
            valid = [
                slot
                for slot in available
                if pitchers[slot.inning] != pid
                and catchers[slot.inning] != pid
                and not input.is_blocked(pid, slot.position)
                and not any(
                    prev.position == slot.position and abs(prev.inning - slot.inning) == 1
                    for prev in placed[pid]
                )
                and not any(prev.inning == slot.inning for prev in placed[pid])
            ]
            if not valid:
                break
            slot = rng.choice(valid)
            placed[pid].append(slot)
            owners[slot] = pid
            needs[pid] -= 1
            available.remove(slot)

    return owners


def _eligible(
    candidates: Iterable[str],
    position: Position,
    used: set[str],
    previous: Optional[InningAssignment],
    input: GenerateLineupInput,
) -> List[str]:
    return [
        pid
        for pid in candidates
        if pid not in used
        and not input.is_blocked(pid, position)
        and not (previous is not None and previous.get(position) == pid)
    ]


def attempt_build(input: GenerateLineupInput, rng: random.Random) -> Optional[Lineup]:
    """Run one randomized construction; ``None`` means this attempt hit a dead end."""

    player_ids = input.player_ids()
    rng.shuffle(player_ids)

    battery = _resolve_battery(input, player_ids, rng)
    if battery is None:
        return None
    pitchers, catchers = battery

    window = infield_window(input.innings)
    owners = _place_infield_quota(input, player_ids, pitchers, catchers, rng)

    lineup: Lineup = {}
    for inning in range(1, input.innings + 1):
        previous = lineup.get(inning - 1)
        assignment: InningAssignment = {"P": pitchers[inning], "C": catchers[inning]}
        used = {pitchers[inning], catchers[inning]}

        for pos in NON_BATTERY_INFIELD:
            owner = owners.get(_Slot(inning, pos)) if inning <= window else None
            if owner and owner not in used:
                pick = owner
            else:
                eligible = _eligible(player_ids, pos, used, previous, input)
                if not eligible:
                    return None
                pick = rng.choice(eligible)
            assignment[pos] = pick
            used.add(pick)

        sat_last_inning = benched_players(previous, player_ids) if previous is not None else []
        for pos in OUTFIELD_POSITIONS:
            eligible = _eligible(sat_last_inning, pos, used, previous, input)
            if not eligible:
                eligible = _eligible(player_ids, pos, used, previous, input)
            if not eligible:
                return None
            pick = rng.choice(eligible)
            assignment[pos] = pick
            used.add(pick)

        lineup[inning] = assignment

    return lineup


def lineups_meaningfully_different(a: Lineup, b: Lineup, input: GenerateLineupInput) -> bool:
    """True when the bench or any infield spot differs in some inning."""

    player_ids = input.player_ids()
    for inning in range(1, input.innings + 1):
        left = a.get(inning) or {}
        right = b.get(inning) or {}
        if set(benched_players(left, player_ids)) != set(benched_players(right, player_ids)):
            return True
        for pos in INFIELD_POSITIONS:
            if left.get(pos) != right.get(pos):
                return True
    return False


def _collect_lineups(
    input: GenerateLineupInput,
    count: int,
    rng: random.Random,
) -> tuple[List[LineupGenerationResult], int]:
    results: List[LineupGenerationResult] = []
    budget = count * multi_attempt_factor()
    spent = 0

    while len(results) < count and spent < budget:
        result = generate_lineup(input, rng=rng)
        spent += result.attempt_count
        if result.valid and all(
            lineups_meaningfully_different(existing.lineup, result.lineup, input) for existing in results
        ):
            results.append(result)
        if not results and spent >= budget / 2:
            logger.warning("No valid lineup after %s attempts; giving up early", spent)
            break

    logger.info("Generated %s/%s distinct lineups using %s attempts", len(results), count, spent)
    return results, spent


def generate_multiple_lineups(
    input: GenerateLineupInput,
    count: int = 3,
    *,
    rng: Optional[random.Random] = None,
) -> List[LineupGenerationResult]:
    """Collect up to ``count`` distinct valid lineups within a shared attempt budget."""

    if count <= 0 or pre_validate(input):
        return []

    results, _ = _collect_lineups(input, count, rng or random.Random())
    return results


def generate_best_lineup(
    input: GenerateLineupInput,
    candidates: int = 10,
    *,
    rng: Optional[random.Random] = None,
) -> LineupGenerationResult:
    """Return the fairest of several distinct candidates, or a failure result."""

    if pre_validate(input):
        return generate_lineup(input, rng=rng)

    options, spent = _collect_lineups(input, max(1, candidates), rng or random.Random())
    if not options:
        return _failure(EXHAUSTED_MESSAGE, spent)

    best = max(options, key=lambda option: score_lineup(option.lineup, input).total)
    logger.info("Picked best of %s candidate lineups", len(options))
    return best
