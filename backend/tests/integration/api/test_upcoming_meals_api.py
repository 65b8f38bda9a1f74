"""HTTP tests for /upcoming-meals: voting and promotion (threshold 3 in tests)."""

import pytest

ADMIN = "chef@bitelog.io"
VOTERS = ["ann@example.com", "bob@example.com", "cy@example.com"]


async def _submit(client, headers_for, title="Bibimbap"):
    response = await client.post(
        "/upcoming-meals",
        json={"title": title, "category": "Dinner", "price": 13, "ingredients": ["rice"]},
        headers=headers_for(ADMIN),
    )
    assert response.status_code == 201, response.text
    return response.json()["upcomingMeal"]


async def _like(client, headers_for, upcoming_id, email):
    return await client.post(
        f"/upcoming-meals/{upcoming_id}/like", json={"email": email}, headers=headers_for(email)
    )


@pytest.mark.asyncio
async def test_submit_requires_admin(client, headers_for, user):
    response = await client.post(
        "/upcoming-meals",
        json={"title": "Bibimbap", "category": "Dinner", "price": 13},
        headers=headers_for("jane@example.com"),
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_listing_orders_by_likes(client, headers_for, admin):
    quiet = await _submit(client, headers_for, title="Quiet")
    popular = await _submit(client, headers_for, title="Popular")
    await _like(client, headers_for, popular["_id"], VOTERS[0])

    response = await client.get("/upcoming-meals")

    assert [item["_id"] for item in response.json()] == [popular["_id"], quiet["_id"]]
    assert response.json()[0]["likes"] == 1


@pytest.mark.asyncio
async def test_like_toggles_below_threshold(client, headers_for, admin):
    upcoming = await _submit(client, headers_for)

    liked = await _like(client, headers_for, upcoming["_id"], VOTERS[0])
    unliked = await _like(client, headers_for, upcoming["_id"], VOTERS[0])

    assert liked.json() == {"likes": 1, "liked": True, "promoted": False, "mealId": None}
    assert unliked.json()["likes"] == 0
    assert unliked.json()["liked"] is False


@pytest.mark.asyncio
async def test_reaching_threshold_promotes_meal(client, headers_for, admin):
    upcoming = await _submit(client, headers_for)

    for voter in VOTERS[:2]:
        await _like(client, headers_for, upcoming["_id"], voter)
    final = await _like(client, headers_for, upcoming["_id"], VOTERS[2])

    body = final.json()
    assert body["promoted"] is True
    assert body["likes"] == 3
    assert (await client.get(f"/upcoming-meals/{upcoming['_id']}")).status_code == 404

    detail = await client.get(f"/meals/{body['mealId']}")
    assert detail.status_code == 200
    assert detail.json()["meal"]["likes"] == 3
    assert sorted(detail.json()["meal"]["likedBy"]) == sorted(VOTERS)

    profile = await client.get(f"/users/{ADMIN}", headers=headers_for(ADMIN))
    assert profile.json()["mealsAdded"] == 1


@pytest.mark.asyncio
async def test_admin_publishes_early(client, headers_for, admin):
    upcoming = await _submit(client, headers_for)
    await _like(client, headers_for, upcoming["_id"], VOTERS[0])

    response = await client.post(
        f"/upcoming-meals/{upcoming['_id']}/publish", headers=headers_for(ADMIN)
    )

    assert response.status_code == 201
    meal = response.json()["meal"]
    assert meal["title"] == "Bibimbap"
    assert meal["likes"] == 1
    assert (await client.get("/upcoming-meals")).json() == []


@pytest.mark.asyncio
async def test_publishing_twice(client, headers_for, admin):
    upcoming = await _submit(client, headers_for)
    url = f"/upcoming-meals/{upcoming['_id']}/publish"

    await client.post(url, headers=headers_for(ADMIN))
    again = await client.post(url, headers=headers_for(ADMIN))

    assert again.status_code == 404


@pytest.mark.asyncio
async def test_like_on_unknown_upcoming_meal(client, headers_for):
    response = await _like(client, headers_for, "missing", VOTERS[0])

    assert response.status_code == 404
