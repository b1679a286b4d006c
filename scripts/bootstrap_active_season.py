from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import date
from pathlib import Path

# Allow running from the repository root.
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD.") from exc


async def ensure_active_season(
    *, year: int, name: str | None, start_date: date | None, end_date: date | None
) -> None:
    from api.db.session import get_sessionmaker
    from api.modules.seasons.repository import SeasonRepository
    from api.modules.seasons.schemas import SeasonCreateRequest
    from api.modules.seasons.service import SeasonService

    sessionmaker = get_sessionmaker()
    async with sessionmaker() as session:
        repository = SeasonRepository(session=session)
        service = SeasonService(repository=repository)
        season = await repository.get_by_year(year)
        if season is None:
            season = await service.create_season(
                SeasonCreateRequest(
                    year=year,
                    name=name or f"{year} Season",
                    start_date=start_date or date(year, 5, 1),
                    end_date=end_date or date(year, 9, 30),
                )
            )
        elif start_date is not None or end_date is not None:
            season = await service.update_season_dates(
                season.id,
                start_date or season.start_date,
                end_date or season.end_date,
            )
        season = await service.activate_season(season.id)

    print("Active season ready:")
    print(f"  id={season.id}")
    print(f"  year={season.year}")
    print(f"  name={season.name}")
    print(f"  start_date={season.start_date.isoformat()}")
    print(f"  end_date={season.end_date.isoformat()}")


async def main_async() -> None:
    parser = argparse.ArgumentParser(description="Create or activate the league season for a year.")
    parser.add_argument("--year", type=int, default=date.today().year, help="Season year.")
    parser.add_argument("--name", default=None, help="Name used when the season is created.")
    parser.add_argument("--start-date", type=_parse_date, default=None)
    parser.add_argument("--end-date", type=_parse_date, default=None)
    args = parser.parse_args()

    from api.config import get_settings
    from api.db.session import get_engine
    from api.observability import configure_logging

    configure_logging(get_settings())
    try:
        await ensure_active_season(
            year=args.year,
            name=args.name,
            start_date=args.start_date,
            end_date=args.end_date,
        )
    finally:
        await get_engine().dispose()


if __name__ == "__main__":
    asyncio.run(main_async())
