from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, datetime, timezone
from uuid import UUID

from api.db.models import Round, Score, Season, User
from api.modules.scores.repository import ScoreRepository
from api.modules.scores.schemas import (
    CourseResponse,
    NetScoreResponse,
    PlayerScoreRequest,
    RingerResponse,
    RoundResponse,
    ScoreResponse,
    StandingResponse,
)
from league.course import COURSE_LAYOUT, HOLE_COUNT, CourseLayout
from league.errors import NotFoundError, ValidationError
from league.scoring import (
    HoleScores,
    NetScoreResult,
    RoundResult,
    build_standings,
    compute_net_scores,
    ringer_scorecard,
)

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def score_holes(score: Score) -> HoleScores:
    return tuple(getattr(score, f"hole_{number}") for number in range(1, HOLE_COUNT + 1))


def score_net_holes(score: Score) -> HoleScores:
    return tuple(getattr(score, f"net_hole_{number}") for number in range(1, HOLE_COUNT + 1))


def apply_result(score: Score, result: NetScoreResult) -> None:
    for number, (gross, net) in enumerate(zip(result.gross_holes, result.net_holes), start=1):
        setattr(score, f"hole_{number}", gross)
        setattr(score, f"net_hole_{number}", net)
    score.total_score = result.gross_total
    score.net_total_score = result.net_total
    score.strokes_given = result.strokes_given


class ScoreService:
    def __init__(self, repository: ScoreRepository, layout: CourseLayout = COURSE_LAYOUT) -> None:
        self.repository = repository
        self.layout = layout

    def course(self) -> CourseResponse:
        layout = self.layout
        return CourseResponse(
            name=layout.name,
            pars=list(layout.pars),
            difficulty_ranks=list(layout.difficulty_ranks),
            front_nine_par=layout.front_nine_par,
            back_nine_par=layout.back_nine_par,
            total_par=layout.total_par,
        )

    def compute_net(self, holes: Sequence[int | None], strokes_given: int) -> NetScoreResponse:
        result = compute_net_scores(holes, self._effective_strokes(strokes_given), self.layout)
        return NetScoreResponse(
            holes=list(result.gross_holes),
            net_holes=list(result.net_holes),
            total_score=result.gross_total,
            net_total_score=result.net_total,
            strokes_given=result.strokes_given,
            stroke_holes=list(result.stroke_holes),
        )

    async def submit_round(
        self,
        *,
        play_date: date,
        season_id: UUID | None,
        submitted_by: UUID,
        players: Sequence[PlayerScoreRequest],
    ) -> RoundResponse:
        if not players:
            raise ValidationError("A round needs at least one player.")
        user_ids = [player.user_id for player in players]
        if len(set(user_ids)) != len(user_ids):
            raise ValidationError("Each player can only appear once per round.")

        season = await self._resolve_season(season_id)
        users = await self.repository.get_users(user_ids)
        missing = [str(user_id) for user_id in user_ids if user_id not in users]
        if missing:
            raise NotFoundError("Players not found.", details={"user_ids": missing})

        results: list[tuple[User, NetScoreResult]] = []
        for player in players:
            user = users[player.user_id]
            # Handicap is frozen at submission time.
            result = compute_net_scores(
                player.holes, self._effective_strokes(user.strokes_given), self.layout
            )
            if not any(value is not None for value in result.gross_holes):
                raise ValidationError(f"{user.name or user.username} has no holes recorded.")
            results.append((user, result))

        now = utcnow()
        round_ = Round(
            date=play_date,
            season_id=season.id,
            submitted_by=submitted_by,
            created_at=now,
        )
        try:
            self.repository.add(round_)
            await self.repository.flush()
            for user, result in results:
                score = Score(round_id=round_.id, user_id=user.id, created_at=now, updated_at=now)
                apply_result(score, result)
                self.repository.add(score)
            await self.repository.commit()
        except Exception:
            await self.repository.rollback()
            raise
        logger.info(
            "round_submitted",
            extra={
                "round_id": str(round_.id),
                "season_id": str(season.id),
                "submitted_by": str(submitted_by),
                "players": len(results),
            },
        )
        return await self.get_round(round_.id)

    async def list_league_rounds(self, season_id: UUID | None = None) -> list[RoundResponse]:
        season = await self._resolve_season(season_id)
        rounds = await self.repository.list_rounds(season.id)
        return await self._round_responses(rounds)

    async def list_my_rounds(
        self, user_id: UUID, season_id: UUID | None = None
    ) -> list[RoundResponse]:
        season = await self._resolve_season(season_id)
        rounds = await self.repository.list_rounds(season.id, user_id=user_id)
        return await self._round_responses(rounds)

    async def get_round(self, round_id: UUID) -> RoundResponse:
        round_ = await self.repository.get_round(round_id)
        if round_ is None:
            raise NotFoundError(f"Round not found: {round_id}")
        responses = await self._round_responses([round_])
        return responses[0]

    async def edit_score(self, score_id: UUID, holes: Sequence[int | None]) -> ScoreResponse:
        score = await self.repository.get_score(score_id)
        if score is None:
            raise NotFoundError(f"Score not found: {score_id}")
        # Recompute against the snapshot, not the member's current handicap.
        result = compute_net_scores(holes, score.strokes_given, self.layout)
        if not any(value is not None for value in result.gross_holes):
            raise ValidationError("A score needs at least one hole recorded.")
        apply_result(score, result)
        score.updated_at = utcnow()
        self.repository.add(score)
        await self.repository.commit()
        user = await self.repository.get_user(score.user_id)
        logger.info("score_edited", extra={"score_id": str(score_id)})
        return _score_response(score, user)

    async def delete_round(self, round_id: UUID) -> None:
        round_ = await self.repository.get_round(round_id)
        if round_ is None:
            raise NotFoundError(f"Round not found: {round_id}")
        try:
            await self.repository.delete_round(round_)
            await self.repository.commit()
        except Exception:
            await self.repository.rollback()
            raise
        logger.info("round_deleted", extra={"round_id": str(round_id)})

    async def leaderboard(self, season_id: UUID | None = None) -> list[StandingResponse]:
        season = await self._resolve_season(season_id)
        rows = await self.repository.season_scores(season.id)
        standings = build_standings(
            RoundResult(
                user_id=user.id,
                name=user.name or user.username,
                gross_total=score.total_score,
                net_total=score.net_total_score,
            )
            for score, user in rows
        )
        return [
            StandingResponse(
                rank=row.rank,
                user_id=row.user_id,
                name=row.name,
                rounds=row.rounds,
                gross_average=row.gross_average,
                net_average=row.net_average,
                best_gross=row.best_gross,
                best_net=row.best_net,
            )
            for row in standings
        ]

    async def ringer(self, user_id: UUID, season_id: UUID | None = None) -> RingerResponse:
        if await self.repository.get_user(user_id) is None:
            raise NotFoundError(f"User not found: {user_id}")
        season = await self._resolve_season(season_id)
        rows = await self.repository.season_scores(season.id, user_id=user_id)
        card = ringer_scorecard(
            ((score_holes(score), score_net_holes(score)) for score, _ in rows),
            self.layout.hole_count,
        )
        return RingerResponse(
            user_id=user_id,
            season_id=season.id,
            rounds=len(rows),
            holes=list(card.holes),
            net_holes=list(card.net_holes),
            holes_played=card.holes_played,
            net_holes_played=card.net_holes_played,
            total_score=card.total_score,
            net_total_score=card.net_total_score,
        )

    def _effective_strokes(self, strokes_given: int) -> int:
        # Handicaps above the hole count get one stroke on every hole.
        return min(strokes_given, self.layout.hole_count)

    async def _resolve_season(self, season_id: UUID | None) -> Season:
        if season_id is None:
            season = await self.repository.get_active_season()
            if season is None:
                raise NotFoundError("No active season.")
            return season
        season = await self.repository.get_season(season_id)
        if season is None:
            raise NotFoundError(f"Season not found: {season_id}")
        return season

    async def _round_responses(self, rounds: Sequence[Round]) -> list[RoundResponse]:
        rows = await self.repository.scores_for_rounds(round_.id for round_ in rounds)
        by_round: dict[UUID, list[ScoreResponse]] = {}
        for score, user in rows:
            by_round.setdefault(score.round_id, []).append(_score_response(score, user))
        return [
            RoundResponse(
                id=round_.id,
                date=round_.date,
                season_id=round_.season_id,
                submitted_by=round_.submitted_by,
                created_at=round_.created_at,
                scores=by_round.get(round_.id, []),
            )
            for round_ in rounds
        ]


def _score_response(score: Score, user: User | None) -> ScoreResponse:
    name = (user.name or user.username) if user is not None else ""
    return ScoreResponse(
        id=score.id,
        round_id=score.round_id,
        user_id=score.user_id,
        name=name,
        holes=list(score_holes(score)),
        net_holes=list(score_net_holes(score)),
        total_score=score.total_score,
        net_total_score=score.net_total_score,
        strokes_given=score.strokes_given,
    )
