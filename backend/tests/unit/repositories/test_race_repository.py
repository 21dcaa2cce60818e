"""Tests for race repository."""

from datetime import datetime, timedelta, timezone

import pytest

from app.repositories import RaceRepository
from tests.fixtures.factories import create_participant, create_race, create_segment_result


class TestRaceRepository:
    """Tests for RaceRepository queries."""

    @pytest.mark.asyncio
    async def test_get_loads_participants_eagerly(self, db_session, test_race, rider_participant):
        """A fetched race carries participants, their users and results."""
        db_session.add(create_segment_result(participant_id=rider_participant.id))
        await db_session.flush()
        repo = RaceRepository(db_session)

        race = await repo.get(test_race.id)

        assert race is not None
        assert len(race.participants) == 2
        rider_row = race.participants[1]
        assert rider_row.user.display_name == "Rory Rider"
        assert [r.segment_id for r in rider_row.segment_results] == [111]
        assert race.organiser.id == test_race.organiser_id

    @pytest.mark.asyncio
    async def test_get_all_races_newest_start_first(self, db_session, organiser):
        """Races are ordered by start date, most recent first."""
        now = datetime.now(timezone.utc)
        older = create_race(organiser_id=organiser.id, race_name="Older",
                            start_date=now - timedelta(days=30),
                            end_date=now - timedelta(days=20))
        newer = create_race(organiser_id=organiser.id, race_name="Newer",
                            start_date=now - timedelta(days=2),
                            end_date=now + timedelta(days=2))
        db_session.add_all([older, newer])
        await db_session.flush()
        repo = RaceRepository(db_session)

        races = await repo.get_all_races()

        assert [r.race_name for r in races] == ["Newer", "Older"]

    @pytest.mark.asyncio
    async def test_get_by_participant(self, db_session, test_race, rider, organiser):
        """Only races the user has joined are returned."""
        other = create_race(organiser_id=organiser.id, race_name="Other Race")
        db_session.add(other)
        await db_session.flush()
        db_session.add(create_participant(race_id=other.id, user_id=rider.id))
        await db_session.flush()
        repo = RaceRepository(db_session)

        rider_races = await repo.get_by_participant(rider.id)
        organiser_races = await repo.get_by_participant(organiser.id)

        assert [r.id for r in rider_races] == [other.id]
        assert [r.id for r in organiser_races] == [test_race.id]
