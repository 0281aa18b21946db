"""Idea submission, the public listing and voting."""

import asyncio

import pytest
from sqlalchemy import func, select

from ideaboard.models import BusinessIdea

from helpers import DESCRIPTION, approve, submit


@pytest.mark.asyncio
async def test_description_length_boundary(alice, db):
    r = await alice.post("/api/ideas", json={"title": "Solar panel rental", "description": "x" * 19})
    assert r.status_code == 400
    assert any(err["field"] == "description" for err in r.json()["errors"])
    assert (await db.execute(select(func.count(BusinessIdea.id)))).scalar() == 0

    r = await alice.post("/api/ideas", json={"title": "Solar panel rental", "description": "x" * 20})
    assert r.status_code == 201


@pytest.mark.asyncio
async def test_title_length_bounds(alice):
    r = await alice.post("/api/ideas", json={"title": "Shop", "description": DESCRIPTION})
    assert r.status_code == 400

    r = await alice.post("/api/ideas", json={"title": "t" * 257, "description": DESCRIPTION})
    assert r.status_code == 400

    r = await alice.post("/api/ideas", json={"title": "t" * 256, "description": DESCRIPTION})
    assert r.status_code == 201


@pytest.mark.asyncio
async def test_submission_ignores_client_supplied_status_owner_and_votes(alice, bob):
    me = (await bob.get("/api/auth/user")).json()

    r = await bob.post(
        "/api/ideas",
        json={
            "title": "Solar panel rental",
            "description": DESCRIPTION,
            "status": "approved",
            "userId": "someone-else",
            "upvotes": 99,
        },
    )
    assert r.status_code == 201
    idea = r.json()
    assert idea["status"] == "pending"
    assert idea["userId"] == me["id"]
    assert idea["upvotes"] == 0
    assert idea["downvotes"] == 0


@pytest.mark.asyncio
async def test_submission_requires_login(client):
    r = await client.post("/api/ideas", json={"title": "Solar panel rental", "description": DESCRIPTION})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_approved_listing_filters_and_orders_by_upvotes(alice, bob, client):
    quiet = await submit(bob, title="Quiet approved idea")
    loud = await submit(bob, title="Loud approved idea")
    pending = await submit(bob, title="Still pending idea")
    rejected = await submit(bob, title="Rejected idea here")

    await approve(alice, quiet["id"])
    await approve(alice, loud["id"])
    await approve(alice, rejected["id"], "rejected")
    for _ in range(3):
        await bob.post(f"/api/ideas/{loud['id']}/upvote")
    await bob.post(f"/api/ideas/{quiet['id']}/upvote")

    # Listing is public
    r = await client.get("/api/ideas/approved")
    assert r.status_code == 200
    listed = r.json()
    assert [i["id"] for i in listed] == [loud["id"], quiet["id"]]
    assert all(i["status"] == "approved" for i in listed)
    assert pending["id"] not in [i["id"] for i in listed]


@pytest.mark.asyncio
async def test_upvote_and_downvote_increment_by_one(alice, bob):
    idea = await submit(bob)

    r = await alice.post(f"/api/ideas/{idea['id']}/upvote")
    assert r.status_code == 200
    assert r.json() == {"id": idea["id"], "upvotes": 1, "downvotes": 0}

    r = await alice.post(f"/api/ideas/{idea['id']}/downvote")
    assert r.status_code == 200
    assert r.json() == {"id": idea["id"], "upvotes": 1, "downvotes": 1}


@pytest.mark.asyncio
async def test_concurrent_upvotes_are_not_lost(alice, bob):
    idea = await submit(bob)
    await alice.post(f"/api/ideas/{idea['id']}/upvote")

    voters = [alice, bob]
    n = 8
    results = await asyncio.gather(
        *[voters[i % 2].post(f"/api/ideas/{idea['id']}/upvote") for i in range(n)]
    )
    assert all(r.status_code == 200 for r in results)

    r = await alice.get(f"/api/admin/ideas/{idea['id']}")
    assert r.json()["upvotes"] == 1 + n


@pytest.mark.asyncio
async def test_repeat_and_self_votes_are_counted(bob):
    # No per-user vote tracking: every request counts
    idea = await submit(bob)
    for _ in range(3):
        r = await bob.post(f"/api/ideas/{idea['id']}/upvote")
        assert r.status_code == 200
    assert r.json()["upvotes"] == 3


@pytest.mark.asyncio
async def test_voting_on_pending_idea_is_allowed(alice, bob):
    idea = await submit(bob)
    r = await alice.post(f"/api/ideas/{idea['id']}/downvote")
    assert r.status_code == 200
    assert r.json()["downvotes"] == 1


@pytest.mark.asyncio
async def test_vote_on_unknown_idea_is_not_found(alice):
    r = await alice.post("/api/ideas/9999/upvote")
    assert r.status_code == 404
    assert r.json() == {"message": "Idea not found"}

    r = await alice.post("/api/ideas/9999/downvote")
    assert r.status_code == 404

    r = await alice.post("/api/ideas/99999999999999999999/upvote")
    assert r.status_code == 404
    assert r.json() == {"message": "Idea not found"}


@pytest.mark.asyncio
async def test_voting_requires_login(bob, client):
    idea = await submit(bob)
    assert (await client.post(f"/api/ideas/{idea['id']}/upvote")).status_code == 401
    assert (await client.post(f"/api/ideas/{idea['id']}/downvote")).status_code == 401


@pytest.mark.asyncio
async def test_vote_does_not_change_review_fields(alice, bob):
    idea = await submit(bob)
    await bob.post(f"/api/ideas/{idea['id']}/upvote")

    r = await alice.get(f"/api/admin/ideas/{idea['id']}")
    body = r.json()
    assert body["status"] == "pending"
    assert body["updatedAt"] == idea["updatedAt"]
