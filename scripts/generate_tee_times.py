from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from uuid import UUID

# Allow running from the repository root.
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))


async def generate(*, season_id: UUID | None, template_id: UUID | None) -> int:
    from api.config import get_settings
    from api.db.session import get_sessionmaker
    from api.modules.schedule.repository import ScheduleRepository
    from api.modules.schedule.service import ScheduleService
    from api.modules.seasons.repository import SeasonRepository
    from league.errors import LeagueError

    sessionmaker = get_sessionmaker()
    async with sessionmaker() as session:
        service = ScheduleService(
            repository=ScheduleRepository(session=session),
            settings=get_settings(),
        )
        try:
            if template_id is not None:
                result = await service.generate_slots(template_id)
            else:
                if season_id is None:
                    active = await SeasonRepository(session=session).get_active()
                    if active is None:
                        print("No active season; pass --season-id.", file=sys.stderr)
                        return 1
                    season_id = active.id
                result = await service.generate_for_season(season_id)
        except LeagueError as exc:
            print(f"{exc.kind}: {exc.message}", file=sys.stderr)
            if exc.details:
                print(f"  details={exc.details}", file=sys.stderr)
            return 2

    print(f"created={result.created_count} updated={result.updated_count} dates={len(result.dates)}")
    return 0


async def main_async() -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Regenerate tee times from weekly templates. Safe to run repeatedly: "
            "existing tee times keep their reservations and availability flag."
        )
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--season-id", type=UUID, default=None, help="Defaults to the active season.")
    target.add_argument("--template-id", type=UUID, default=None)
    args = parser.parse_args()

    from api.config import get_settings
    from api.db.session import get_engine
    from api.observability import configure_logging

    configure_logging(get_settings())
    try:
        return await generate(season_id=args.season_id, template_id=args.template_id)
    finally:
        await get_engine().dispose()


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main_async()))
