"""Tests for participant API endpoints."""

import pytest

from tests.fixtures.factories import create_participant, create_race


class TestJoinRaceAPI:
    """Tests for POST /api/races/{id}/join."""

    @pytest.mark.asyncio
    async def test_join_then_join_again(self, client, login_as, test_race, rider):
        """Correct password joins; a repeat join conflicts."""
        login_as(rider.id)

        first = await client.post(f"/api/races/{test_race.id}/join", json={"password": "abcd"})
        second = await client.post(f"/api/races/{test_race.id}/join", json={"password": "abcd"})

        assert first.status_code == 200
        assert first.json()["participantCount"] == 2
        assert second.status_code == 409
        assert second.json()["kind"] == "CONFLICT"

    @pytest.mark.asyncio
    async def test_join_wrong_password(self, client, login_as, test_race, rider, organiser):
        """A wrong password is unauthenticated and leaves the count unchanged."""
        login_as(rider.id)

        response = await client.post(f"/api/races/{test_race.id}/join", json={"password": "nope"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Incorrect password for private race."
        login_as(organiser.id)
        race = (await client.get(f"/api/races/{test_race.id}")).json()
        assert race["participantCount"] == 1

    @pytest.mark.asyncio
    async def test_join_without_body(self, client, login_as, test_race, rider):
        """No body means no password."""
        login_as(rider.id)

        response = await client.post(f"/api/races/{test_race.id}/join")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_join_unknown_race(self, client, login_as, rider):
        login_as(rider.id)

        response = await client.post("/api/races/99999/join", json={"password": "abcd"})

        assert response.status_code == 404


class TestRemoveParticipantAPI:
    """Tests for DELETE /api/races/{id}/participants/{participantId}."""

    @pytest.mark.asyncio
    async def test_organiser_removes_participant(
        self, client, login_as, test_race, organiser, rider_participant
    ):
        login_as(organiser.id)

        response = await client.delete(
            f"/api/races/{test_race.id}/participants/{rider_participant.id}"
        )

        assert response.status_code == 204
        race = (await client.get(f"/api/races/{test_race.id}")).json()
        assert race["participantCount"] == 1

    @pytest.mark.asyncio
    async def test_participant_leaves(self, client, login_as, test_race, rider, rider_participant):
        login_as(rider.id)

        response = await client.delete(
            f"/api/races/{test_race.id}/participants/{rider_participant.id}"
        )

        assert response.status_code == 204

    @pytest.mark.asyncio
    async def test_third_party_forbidden(
        self, client, login_as, test_race, outsider, rider_participant
    ):
        login_as(outsider.id)

        response = await client.delete(
            f"/api/races/{test_race.id}/participants/{rider_participant.id}"
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_participant_from_other_race(
        self, client, login_as, db_session, test_race, organiser, rider
    ):
        """A participant of a different race is a bad request."""
        other = create_race(organiser_id=rider.id, race_name="Other")
        db_session.add(other)
        await db_session.flush()
        stranger = create_participant(race_id=other.id, user_id=rider.id)
        db_session.add(stranger)
        await db_session.flush()
        login_as(organiser.id)

        response = await client.delete(f"/api/races/{test_race.id}/participants/{stranger.id}")

        assert response.status_code == 400
        assert response.json()["kind"] == "VALIDATION_ERROR"
