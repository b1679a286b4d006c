from __future__ import annotations

from collections.abc import Hashable, Iterable, Sequence
from dataclasses import dataclass

from league.course import COURSE_LAYOUT, MAX_GROSS_HOLE_SCORE, CourseLayout
from league.errors import ValidationError

HoleScores = tuple[int | None, ...]


@dataclass(frozen=True)
class NetScoreResult:
    gross_holes: HoleScores
    net_holes: HoleScores
    gross_total: int
    net_total: int
    strokes_given: int
    stroke_holes: tuple[int, ...]


@dataclass(frozen=True)
class RingerScorecard:
    holes: HoleScores
    net_holes: HoleScores
    holes_played: int
    net_holes_played: int
    total_score: int
    net_total_score: int


@dataclass(frozen=True)
class RoundResult:
    user_id: Hashable
    name: str
    gross_total: int
    net_total: int


@dataclass(frozen=True)
class Standing:
    rank: int
    user_id: Hashable
    name: str
    rounds: int
    gross_average: float
    net_average: float
    best_gross: int
    best_net: int


def normalize_gross_holes(holes: Sequence[int | None], hole_count: int) -> HoleScores:
    """Validate raw hole entries; ``0`` and ``None`` both mean the hole was not played."""
    if len(holes) != hole_count:
        raise ValidationError(f"Expected {hole_count} hole scores, got {len(holes)}.")
    normalized: list[int | None] = []
    for index, value in enumerate(holes, start=1):
        if value is None or value == 0:
            normalized.append(None)
            continue
        if value < 0 or value > MAX_GROSS_HOLE_SCORE:
            raise ValidationError(
                f"Hole {index} score must be between 1 and {MAX_GROSS_HOLE_SCORE}, got {value}."
            )
        normalized.append(value)
    return tuple(normalized)


def stroke_allocation_order(difficulty_ranks: Sequence[int]) -> list[int]:
    # Hardest first; equal ranks fall back to hole order.
    return sorted(range(len(difficulty_ranks)), key=lambda index: (difficulty_ranks[index], index))


def compute_net_scores(
    gross_holes: Sequence[int | None],
    strokes_given: int,
    layout: CourseLayout = COURSE_LAYOUT,
) -> NetScoreResult:
    """Deduct one stroke on each of the ``strokes_given`` hardest holes.

    Strokes that fall on an unplayed hole are not moved elsewhere; the hole
    simply stays unrecorded in the net card.
    """
    gross = normalize_gross_holes(gross_holes, layout.hole_count)
    if strokes_given < 0 or strokes_given > layout.hole_count:
        raise ValidationError(
            f"strokes_given must be between 0 and {layout.hole_count}, got {strokes_given}."
        )

    selected = set(stroke_allocation_order(layout.difficulty_ranks)[:strokes_given])
    net: list[int | None] = []
    stroke_holes: list[int] = []
    for index, value in enumerate(gross):
        if value is None:
            net.append(None)
        elif index in selected:
            net.append(value - 1)
            stroke_holes.append(index + 1)
        else:
            net.append(value)

    return NetScoreResult(
        gross_holes=gross,
        net_holes=tuple(net),
        gross_total=sum(value for value in gross if value is not None),
        net_total=sum(value for value in net if value is not None),
        strokes_given=strokes_given,
        stroke_holes=tuple(stroke_holes),
    )


def ringer_scorecard(
    cards: Iterable[tuple[Sequence[int | None], Sequence[int | None]]],
    hole_count: int = COURSE_LAYOUT.hole_count,
) -> RingerScorecard:
    """Best gross and best net per hole over ``(gross, net)`` card pairs."""
    best: list[int | None] = [None] * hole_count
    best_net: list[int | None] = [None] * hole_count
    for gross, net in cards:
        for index in range(hole_count):
            gross_value = gross[index]
            net_value = net[index] if net[index] is not None else gross_value
            if gross_value:
                current = best[index]
                if current is None or gross_value < current:
                    best[index] = gross_value
            if net_value:
                current_net = best_net[index]
                if current_net is None or net_value < current_net:
                    best_net[index] = net_value

    played = [value for value in best if value is not None]
    net_played = [value for value in best_net if value is not None]
    return RingerScorecard(
        holes=tuple(best),
        net_holes=tuple(best_net),
        holes_played=len(played),
        net_holes_played=len(net_played),
        total_score=sum(played),
        net_total_score=sum(net_played),
    )


def build_standings(results: Iterable[RoundResult]) -> list[Standing]:
    grouped: dict[Hashable, list[RoundResult]] = {}
    for result in results:
        grouped.setdefault(result.user_id, []).append(result)

    rows: list[Standing] = []
    for user_id, player_results in grouped.items():
        rounds = len(player_results)
        gross_totals = [item.gross_total for item in player_results]
        net_totals = [item.net_total for item in player_results]
        rows.append(
            Standing(
                rank=0,
                user_id=user_id,
                name=player_results[0].name,
                rounds=rounds,
                gross_average=round(sum(gross_totals) / rounds, 2),
                net_average=round(sum(net_totals) / rounds, 2),
                best_gross=min(gross_totals),
                best_net=min(net_totals),
            )
        )

    rows.sort(key=lambda row: (row.net_average, -row.rounds, row.name.lower()))
    ranked: list[Standing] = []
    rank = 0
    previous_average: float | None = None
    for row in rows:
        if row.net_average != previous_average:
            rank += 1
            previous_average = row.net_average
        ranked.append(
            Standing(
                rank=rank,
                user_id=row.user_id,
                name=row.name,
                rounds=row.rounds,
                gross_average=row.gross_average,
                net_average=row.net_average,
                best_gross=row.best_gross,
                best_net=row.best_net,
            )
        )
    return ranked
