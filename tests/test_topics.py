import pytest
from uuid import uuid4
from fastapi import status
from sqlalchemy import text

from models import Member


def test_create_topic(client, db_session, category, member):
    response = client.post("/topics", json={
        "name": "Hello World",
        "category_id": str(category.id),
        "member_id": str(member.id),
        "post_content": "First!",
        "tags": ["Python", "fastapi"],
    })
    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["slug"] == "hello-world"
    assert body["views"] == 0
    assert sorted(body["tags"]) == ["fastapi", "python"]

    count = db_session.connection().execute(
        text("SELECT COUNT(*) FROM post WHERE is_topic_starter = 1")
    ).scalar_one()
    assert count == 1

def test_create_topic_with_taken_name_gets_new_slug(client, category, member, make_topic):
    make_topic("Hello World")

    response = client.post("/topics", json={
        "name": "Hello World",
        "category_id": str(category.id),
        "member_id": str(member.id),
        "post_content": "Again",
    })
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["slug"] == "hello-world-1"

def test_create_topic_unknown_category(client, member):
    response = client.post("/topics", json={
        "name": "Lost",
        "category_id": str(uuid4()),
        "member_id": str(member.id),
        "post_content": "Where am I?",
    })
    assert response.status_code == status.HTTP_404_NOT_FOUND

def test_get_topic(client, make_topic):
    topic = make_topic("Readable", tags=["docker"])

    response = client.get(f"/topics/{topic.id}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "Readable"
    assert response.json()["tags"] == ["docker"]

def test_get_missing_topic(client):
    response = client.get(f"/topics/{uuid4()}")
    assert response.status_code == status.HTTP_404_NOT_FOUND

def test_get_topic_by_slug(client, make_topic):
    make_topic("Hello World")

    assert client.get("/topics/slug/hello-world").json()["name"] == "Hello World"
    assert client.get("/topics/slug/nope").status_code == status.HTTP_404_NOT_FOUND

def test_duplicate_slug_is_a_conflict(client, db_session, make_topic):
    db_session.connection().execute(text("DROP INDEX ix_topic_slug"))
    db_session.commit()
    make_topic("Hello World")
    make_topic("Hello World", slug="hello-world")

    response = client.get("/topics/slug/hello-world")
    assert response.status_code == status.HTTP_409_CONFLICT

def test_search_topics_by_slug(client, make_topic):
    make_topic("Docker tips")
    make_topic("Docker tricks")
    make_topic("Python")

    response = client.get("/topics/search", params={"slug": "docker"})
    assert sorted(t["slug"] for t in response.json()) == ["docker-tips", "docker-tricks"]

def test_paged_topics(client, make_topic):
    make_topic("T1", day=1, views=50)
    make_topic("T2", day=2, views=10, is_sticky=True)

    body = client.get("/topics", params={"page": 1, "page_size": 10}).json()
    assert [t["name"] for t in body["topics"]] == ["T2", "T1"]
    assert body["total_count"] == 2
    assert body["total_pages"] == 1
    assert not body["has_next_page"]

    popular = client.get("/topics/popular", params={"amount": 1}).json()
    assert [t["name"] for t in popular] == ["T1"]

def test_recent_and_rss_topics(client, make_topic):
    make_topic("Old", day=1, is_sticky=True)
    make_topic("New", day=2)

    recent = client.get("/topics/recent").json()
    assert [t["name"] for t in recent["topics"]] == ["New", "Old"]

    rss = client.get("/topics/rss", params={"amount": 1}).json()
    assert [t["name"] for t in rss] == ["New"]

def test_invalid_page_is_rejected(client):
    response = client.get("/topics", params={"page": 0})
    assert response.status_code == 422

def test_topic_count(client, make_topic):
    make_topic("One")
    make_topic("Two")

    assert client.get("/topics/count").json() == {"count": 2}

def test_track_topic_view(client, make_topic):
    topic = make_topic("Viewed", views=3)

    response = client.post(f"/topics/{topic.id}/view")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["views"] == 4

def test_update_topic(client, make_topic):
    topic = make_topic("Before")

    response = client.patch(f"/topics/{topic.id}", json={"name": "After", "is_sticky": True})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "After"
    assert response.json()["is_sticky"] is True
    assert client.get(f"/topics/{topic.id}").json()["name"] == "After"

def test_delete_topic(client, make_topic):
    topic = make_topic("Doomed")

    response = client.delete(f"/topics/{topic.id}")
    assert response.status_code == status.HTTP_200_OK
    assert client.get(f"/topics/{topic.id}").status_code == status.HTTP_404_NOT_FOUND
    assert client.delete(f"/topics/{topic.id}").status_code == status.HTTP_404_NOT_FOUND

def test_category_topics(client, make_topic, category):
    make_topic("Pinned", day=1, is_sticky=True)
    make_topic("Fresh", day=3)

    paged = client.get(f"/categories/{category.id}/topics").json()
    assert [t["name"] for t in paged["topics"]] == ["Pinned", "Fresh"]

    rss = client.get(f"/categories/{category.id}/topics/rss").json()
    assert [t["name"] for t in rss] == ["Fresh", "Pinned"]

    everything = client.get(f"/categories/{category.id}/topics/all").json()
    assert len(everything) == 2

    assert client.get(f"/categories/{uuid4()}/topics").json()["topics"] == []

def test_member_topics(client, db_session, make_topic, member):
    other = Member(username="other", email="other@example.com")
    db_session.add(other)
    db_session.commit()
    make_topic("Solved", solution=True)
    make_topic("Open")
    make_topic("Not mine", member_id=other.id, solution=True)

    started = client.get(f"/members/{member.id}/topics").json()
    assert sorted(t["name"] for t in started) == ["Open", "Solved"]

    solved = client.get(f"/members/{member.id}/topics/solved").json()
    assert [t["name"] for t in solved] == ["Solved"]

@pytest.mark.parametrize("page, expected", [(1, ["Sticky", "Newer"]), (2, ["Older"])])
def test_tag_topics(client, make_topic, page, expected):
    make_topic("Older", day=1, tags=["python"])
    make_topic("Newer", day=2, tags=["python"])
    make_topic("Sticky", day=0, tags=["python"], is_sticky=True)
    make_topic("Other", day=3, tags=["docker"])

    body = client.get("/tags/python/topics", params={"page": page, "page_size": 2}).json()
    assert [t["name"] for t in body["topics"]] == expected

def test_update_topic_rejects_blank_name(client, make_topic):
    topic = make_topic("Keep me")

    response = client.patch(f"/topics/{topic.id}", json={"name": "   "})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert client.get(f"/topics/{topic.id}").json()["name"] == "Keep me"

def test_tag_topics_ignore_tag_case(client, category, member):
    client.post("/topics", json={
        "name": "Typed",
        "category_id": str(category.id),
        "member_id": str(member.id),
        "post_content": "Hints everywhere",
        "tags": ["Python"],
    })

    body = client.get("/tags/Python/topics").json()
    assert [t["name"] for t in body["topics"]] == ["Typed"]
