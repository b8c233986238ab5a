"""
Smart Tourism Backend — Itinerary Service Unit Tests
======================================================

What we test:
    ✅ First save creates, later saves replace spots/totalCost/updatedAt
    ✅ createdAt and emailId are kept from the first save
    ✅ A body that fails the document model is a failed save
    ✅ Fetching a user without an itinerary yields the empty shape
    ✅ remove_spot drops every entry for a spot and re-sums prices
"""

import pytest
from unittest.mock import AsyncMock
from pymongo.errors import AutoReconnect

from smart_tourism.exceptions import DatabaseError
from smart_tourism.models.itinerary import EmptyItinerary, Itinerary, remove_spot
from smart_tourism.services.itinerary_service import SAVE_FAILED_MESSAGE, ItineraryService


def make_itinerary(**overrides):
    body = {
        "emailId": "test@example.com",
        "spots": [
            {"spotId": 1, "title": "Burj Khalifa", "price": 150, "date": "2024-03-01", "status": "pending"},
            {"spotId": 2, "title": "Grand Mosque", "price": 0, "date": "2024-03-02", "status": "pending"},
        ],
        "totalCost": 150,
        "createdAt": "2024-01-15T10:00:00.000Z",
        "updatedAt": "2024-01-15T10:00:00.000Z",
    }
    body.update(overrides)
    return body


class TestSaveItinerary:

    def setup_method(self):
        self.service = ItineraryService()

    @pytest.mark.asyncio
    async def test_first_save_creates_document(self, database):
        await self.service.save_itinerary(database, make_itinerary())

        stored = await database.itineraries.find_one({"emailId": "test@example.com"})
        assert stored["totalCost"] == 150
        assert [s["spotId"] for s in stored["spots"]] == [1, 2]
        assert stored["createdAt"] == "2024-01-15T10:00:00.000Z"

    @pytest.mark.asyncio
    async def test_second_save_replaces_but_keeps_created_at(self, database):
        await self.service.save_itinerary(database, make_itinerary())
        await self.service.save_itinerary(database, make_itinerary(
            spots=[{"spotId": 3, "title": "Louvre", "price": 63, "date": "2024-04-01", "status": "booked"}],
            totalCost=63,
            createdAt="2030-01-01T00:00:00.000Z",
            updatedAt="2024-02-01T00:00:00.000Z",
        ))

        assert await database.itineraries.count_documents({"emailId": "test@example.com"}) == 1
        stored = await database.itineraries.find_one({"emailId": "test@example.com"})
        assert [s["spotId"] for s in stored["spots"]] == [3]
        assert stored["totalCost"] == 63
        assert stored["updatedAt"] == "2024-02-01T00:00:00.000Z"
        assert stored["createdAt"] == "2024-01-15T10:00:00.000Z"

    @pytest.mark.asyncio
    async def test_save_with_no_spots(self, database):
        await self.service.save_itinerary(database, make_itinerary(spots=[], totalCost=0))

        stored = await database.itineraries.find_one({"emailId": "test@example.com"})
        assert stored["spots"] == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        make_itinerary(emailId=None),
        make_itinerary(totalCost="lots"),
        make_itinerary(spots=[{"spotId": 1}]),
        {"emailId": "test@example.com"},
    ])
    async def test_invalid_body_is_failed_save(self, database, body):
        with pytest.raises(DatabaseError) as exc_info:
            await self.service.save_itinerary(database, body)

        assert exc_info.value.message == SAVE_FAILED_MESSAGE
        assert await database.itineraries.count_documents({}) == 0

    @pytest.mark.asyncio
    async def test_driver_error_is_failed_save(self, database):
        database.itineraries.update_one = AsyncMock(side_effect=AutoReconnect("connection reset"))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.save_itinerary(database, make_itinerary())
        assert exc_info.value.message == SAVE_FAILED_MESSAGE


class TestGetItinerary:

    def setup_method(self):
        self.service = ItineraryService()

    @pytest.mark.asyncio
    async def test_missing_itinerary_is_empty(self, database):
        result = await self.service.get_itinerary(database, "nobody@example.com")

        assert isinstance(result, EmptyItinerary)
        assert result.model_dump(by_alias=True) == {"spots": [], "totalCost": 0}

    @pytest.mark.asyncio
    async def test_existing_itinerary_returned(self, database):
        await self.service.save_itinerary(database, make_itinerary())

        result = await self.service.get_itinerary(database, "test@example.com")

        assert isinstance(result, Itinerary)
        assert result.id is not None
        assert result.total_cost == 150
        assert result.spots[0].title == "Burj Khalifa"


class TestRemoveSpot:

    def test_removes_every_entry_and_resums(self):
        spots = [
            {"spotId": 1, "price": 100},
            {"spotId": 2, "price": 40},
            {"spotId": 1, "price": 100},
            {"spotId": 3, "price": 10},
        ]

        remaining, total = remove_spot(spots, 1)

        assert [s["spotId"] for s in remaining] == [2, 3]
        assert total == 50

    def test_absent_spot_leaves_list_unchanged(self):
        spots = [{"spotId": 2, "price": 40}]

        remaining, total = remove_spot(spots, 9)

        assert remaining == spots
        assert total == 40

    def test_null_price_counts_as_zero(self):
        remaining, total = remove_spot([{"spotId": 1, "price": None}, {"spotId": 2, "price": 30}], 9)

        assert len(remaining) == 2
        assert total == 30

    def test_last_spot_removed(self):
        remaining, total = remove_spot([{"spotId": 5, "price": 25}], 5)
        assert remaining == []
        assert total == 0
