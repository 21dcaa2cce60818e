"""Tests for races API endpoints."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from app.models import Participant, SegmentResult
from tests.fixtures.factories import create_segment_result


def race_payload(**overrides) -> dict:
    now = datetime.now(timezone.utc)
    payload = {
        "raceName": "Sunday Hill Climb",
        "description": "Two climbs",
        "startDate": (now - timedelta(days=1)).isoformat(),
        "endDate": (now + timedelta(days=6)).isoformat(),
        "segmentIds": [111, 222],
        "password": "abcd",
    }
    payload.update(overrides)
    return payload


class TestRacesAPI:
    """Tests for /api/races endpoints."""

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client):
        """Without a session every race endpoint is unauthenticated."""
        response = await client.get("/api/races")

        assert response.status_code == 401
        assert response.json()["kind"] == "UNAUTHENTICATED"

    @pytest.mark.asyncio
    async def test_create_race(self, client, login_as, organiser):
        """POST /api/races makes a private race with the organiser joined."""
        login_as(organiser.id)

        response = await client.post("/api/races", json=race_payload())

        assert response.status_code == 201
        data = response.json()
        assert data["isPrivate"] is True
        assert data["participantCount"] == 1
        assert data["participants"][0]["user"]["stravaId"] == organiser.id
        assert data["organiser"]["stravaId"] == organiser.id
        assert data["password"] == "abcd"
        assert data["status"] == "ongoing"

    @pytest.mark.asyncio
    async def test_create_race_unknown_user(self, client, login_as):
        """A session for a user that is not stored is unauthenticated."""
        login_as(424242)

        response = await client.post("/api/races", json=race_payload())

        assert response.status_code == 401

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"password": "abc"},
            {"password": None},
            {"segmentIds": []},
            {"raceName": ""},
            {"segmentIds": ["not-a-number"]},
            {"startDate": "yesterday"},
        ],
    )
    async def test_create_race_validation(self, client, login_as, organiser, overrides):
        """Invalid bodies are VALIDATION_ERROR."""
        login_as(organiser.id)

        response = await client.post("/api/races", json=race_payload(**overrides))

        assert response.status_code == 400
        assert response.json()["kind"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_create_race_end_before_start(self, client, login_as, organiser):
        """End must come after start."""
        login_as(organiser.id)
        now = datetime.now(timezone.utc)

        response = await client.post("/api/races", json=race_payload(
            startDate=now.isoformat(), endDate=(now - timedelta(hours=1)).isoformat(),
        ))

        assert response.status_code == 400
        assert response.json()["detail"] == "End date must be after start date"

    @pytest.mark.asyncio
    async def test_get_races(self, client, login_as, test_race, rider):
        """GET /api/races lists summaries without participants."""
        login_as(rider.id)

        response = await client.get("/api/races")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["id"] == test_race.id
        assert data["items"][0]["participantCount"] == 1
        assert data["items"][0]["participants"] is None
        assert "password" not in data["items"][0]

    @pytest.mark.asyncio
    async def test_get_participating_races(self, client, login_as, test_race, rider, organiser):
        """GET /api/races/participating filters by membership."""
        login_as(rider.id)
        rider_view = await client.get("/api/races/participating")
        login_as(organiser.id)
        organiser_view = await client.get("/api/races/participating")

        assert rider_view.json()["total"] == 0
        assert [r["id"] for r in organiser_view.json()["items"]] == [test_race.id]

    @pytest.mark.asyncio
    async def test_get_race(self, client, login_as, test_race, rider):
        """GET /api/races/{id} hides the password from non-organisers."""
        login_as(rider.id)

        response = await client.get(f"/api/races/{test_race.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["raceName"] == test_race.race_name
        assert data["segmentIds"] == [111, 222]
        assert "password" not in data

    @pytest.mark.asyncio
    async def test_get_race_not_found(self, client, login_as, rider):
        """GET /api/races/{id} with unknown ID returns 404."""
        login_as(rider.id)

        response = await client.get("/api/races/99999")

        assert response.status_code == 404
        assert response.json() == {"kind": "NOT_FOUND", "detail": "Race not found with ID: 99999"}

    @pytest.mark.asyncio
    async def test_hidden_times_for_other_viewers(
        self, client, login_as, db_session, test_race, rider_participant, outsider
    ):
        """While a hide-until-finish race runs, others see names but no times."""
        test_race.hide_leaderboard_until_finish = True
        rider_participant.submitted_ride = True
        db_session.add(create_segment_result(participant_id=rider_participant.id,
                                             segment_id=111, segment_name="Hill",
                                             elapsed_time_seconds=300))
        await db_session.flush()

        login_as(outsider.id)
        outsider_view = (await client.get(f"/api/races/{test_race.id}")).json()
        login_as(rider_participant.user_id)
        own_view = (await client.get(f"/api/races/{test_race.id}")).json()

        def results_of(view):
            row = next(p for p in view["participants"] if p["id"] == rider_participant.id)
            return row["segmentResults"]

        assert results_of(outsider_view) == [
            {"segmentId": 111, "segmentName": "Hill", "elapsedTimeSeconds": None}
        ]
        assert results_of(own_view)[0]["elapsedTimeSeconds"] == 300

    @pytest.mark.asyncio
    async def test_update_race(self, client, login_as, test_race, organiser):
        """PUT /api/races/{id} edits the race and keeps the password."""
        login_as(organiser.id)

        response = await client.put(
            f"/api/races/{test_race.id}",
            json=race_payload(raceName="Renamed", password=None, useSexCategories=True),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["raceName"] == "Renamed"
        assert data["useSexCategories"] is True
        assert data["password"] == "abcd"

    @pytest.mark.asyncio
    async def test_update_race_forbidden(self, client, login_as, test_race, rider):
        """Only the organiser may edit."""
        login_as(rider.id)

        response = await client.put(f"/api/races/{test_race.id}", json=race_payload())

        assert response.status_code == 403
        assert response.json()["kind"] == "FORBIDDEN"

    @pytest.mark.asyncio
    async def test_delete_race(
        self, client, login_as, db_session, test_race, organiser, rider_participant
    ):
        """DELETE removes the race with participants and results."""
        db_session.add(create_segment_result(participant_id=rider_participant.id))
        await db_session.flush()
        login_as(organiser.id)

        response = await client.delete(f"/api/races/{test_race.id}")
        after = await client.get(f"/api/races/{test_race.id}")

        assert response.status_code == 204
        assert after.status_code == 404
        assert await db_session.scalar(select(func.count()).select_from(Participant)) == 0
        assert await db_session.scalar(select(func.count()).select_from(SegmentResult)) == 0

    @pytest.mark.asyncio
    async def test_delete_race_forbidden(self, client, login_as, test_race, rider):
        """Only the organiser may delete."""
        login_as(rider.id)

        response = await client.delete(f"/api/races/{test_race.id}")

        assert response.status_code == 403
