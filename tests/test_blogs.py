import uuid

import pytest

from conftest import bearer, register


def _slug(prefix="cat"):
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


def make_category(client, headers, slug=None, name="Engineering"):
    response = client.post(
        "/v1/categories",
        json={"name": name, "slug": slug or _slug(), "description": "Posts about building things"},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["category"]


def make_blog(client, headers, category_id, title="Hello", path="", **extra):
    payload = {"title": title, "category": category_id, "content": "Body text"}
    payload.update(extra)
    response = client.post(f"/v1/blogs{path}", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]["blog"]


def get_category(client, category_id):
    return client.get(f"/v1/categories/{category_id}").json()["data"]["category"]


@pytest.fixture
def category(client, admin_headers):
    return make_category(client, admin_headers)


# =============================================================================
# Categories
# =============================================================================

def test_create_category(client, admin_headers):
    slug = _slug()
    category = make_category(client, admin_headers, slug=slug.upper())

    assert category["slug"] == slug
    assert category["postCount"] == 0


def test_duplicate_slug_rejected(client, admin_headers, category):
    response = client.post(
        "/v1/categories",
        json={"name": "Dup", "slug": category["slug"], "description": "Again"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Slug already taken"


def test_invalid_slug_rejected(client, admin_headers):
    response = client.post(
        "/v1/categories",
        json={"name": "Bad", "slug": "has spaces", "description": "Nope"},
        headers=admin_headers,
    )

    assert response.status_code == 400


def test_category_writes_require_admin(client, user_headers):
    response = client.post(
        "/v1/categories",
        json={"name": "Mine", "slug": _slug(), "description": "Mine"},
        headers=user_headers,
    )

    assert response.status_code == 403


def test_category_writes_require_authentication(client):
    response = client.post(
        "/v1/categories",
        json={"name": "Anon", "slug": _slug(), "description": "Anon"},
    )

    assert response.status_code == 401


def test_category_reads_are_public(client, category):
    listing = client.get("/v1/categories", params={"limit": 100})
    single = client.get(f"/v1/categories/{category['id']}")

    assert listing.status_code == 200
    assert single.status_code == 200
    assert single.json()["data"]["category"]["name"] == category["name"]


def test_update_category(client, admin_headers, category):
    response = client.put(
        f"/v1/categories/{category['id']}",
        json={"name": "Renamed"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["data"]["category"]["name"] == "Renamed"
    assert response.json()["data"]["category"]["slug"] == category["slug"]


def test_missing_category(client):
    response = client.get("/v1/categories/999999")

    assert response.status_code == 404
    assert response.json()["message"] == "Category not found"


def test_delete_category_with_posts_blocked(client, admin_headers, category):
    make_blog(client, admin_headers, category["id"])

    response = client.delete(f"/v1/categories/{category['id']}", headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Category still has posts"


def test_delete_empty_category(client, admin_headers, category):
    response = client.delete(f"/v1/categories/{category['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert client.get(f"/v1/categories/{category['id']}").status_code == 404


# =============================================================================
# Blogs
# =============================================================================

def test_create_blog_counts_post(client, admin_headers, category):
    blog = make_blog(client, admin_headers, category["id"], title="First")

    assert blog["status"] == "draft"
    assert blog["views"] == 0
    assert blog["category"]["id"] == category["id"]
    assert blog["author"]["email"] == "admin@inkpost.example.com"
    assert get_category(client, category["id"])["postCount"] == 1


def test_create_blog_unknown_category(client, admin_headers):
    response = client.post(
        "/v1/blogs",
        json={"title": "Orphan", "category": 999999, "content": "Body"},
        headers=admin_headers,
    )

    assert response.status_code == 404


def test_blog_writes_require_admin(client, user_headers, category):
    response = client.post(
        "/v1/blogs",
        json={"title": "Nope", "category": category["id"], "content": "Body"},
        headers=user_headers,
    )

    assert response.status_code == 403


def test_draft_then_publish(client, admin_headers, category):
    draft = make_blog(
        client, admin_headers, category["id"], path="/draft", status="published"
    )
    assert draft["status"] == "draft"

    published = client.patch(f"/v1/blogs/{draft['id']}/publish", headers=admin_headers)
    assert published.status_code == 200
    assert published.json()["data"]["blog"]["status"] == "published"

    again = client.patch(f"/v1/blogs/{draft['id']}/publish", headers=admin_headers)
    assert again.status_code == 400
    assert again.json()["message"] == "Blog is already published"


def test_reading_counts_views(client, admin_headers, category):
    blog = make_blog(client, admin_headers, category["id"])

    client.get(f"/v1/blogs/{blog['id']}")
    response = client.get(f"/v1/blogs/{blog['id']}")

    assert response.status_code == 200
    assert response.json()["data"]["blog"]["views"] == 2


def test_missing_blog(client):
    response = client.get("/v1/blogs/999999")

    assert response.status_code == 404
    assert response.json()["message"] == "Blog not found"


def test_update_blog_moves_post_count(client, admin_headers, category):
    other = make_category(client, admin_headers, name="Design")
    blog = make_blog(client, admin_headers, category["id"])

    response = client.put(
        f"/v1/blogs/{blog['id']}",
        json={"category": other["id"], "title": "Moved"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    updated = response.json()["data"]["blog"]
    assert updated["title"] == "Moved"
    assert updated["category"]["id"] == other["id"]
    assert get_category(client, category["id"])["postCount"] == 0
    assert get_category(client, other["id"])["postCount"] == 1


def test_update_blog_requires_a_field(client, admin_headers, category):
    blog = make_blog(client, admin_headers, category["id"])

    response = client.put(f"/v1/blogs/{blog['id']}", json={}, headers=admin_headers)

    assert response.status_code == 400


def test_delete_blog(client, admin_headers, category):
    blog = make_blog(client, admin_headers, category["id"])

    response = client.delete(f"/v1/blogs/{blog['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert client.get(f"/v1/blogs/{blog['id']}").status_code == 404
    assert get_category(client, category["id"])["postCount"] == 0


def test_list_blogs_filters(client, admin_headers, category):
    make_blog(client, admin_headers, category["id"], title="Draft one")
    make_blog(client, admin_headers, category["id"], title="Live one", status="published", featured=True)

    published = client.get(
        "/v1/blogs", params={"categoryId": category["id"], "status": "published"}
    ).json()["data"]
    everything = client.get(
        "/v1/blogs", params={"categoryId": category["id"], "status": "all"}
    ).json()["data"]
    featured = client.get(
        "/v1/blogs", params={"categoryId": category["id"], "featured": "true"}
    ).json()["data"]

    assert [b["title"] for b in published["results"]] == ["Live one"]
    assert everything["totalResults"] == 2
    assert [b["title"] for b in featured["results"]] == ["Live one"]
    assert "content" not in everything["results"][0]


def test_list_blogs_pagination(client, admin_headers, category):
    for i in range(3):
        make_blog(client, admin_headers, category["id"], title=f"Post {i}")

    page = client.get(
        "/v1/blogs",
        params={"categoryId": category["id"], "limit": 2, "page": 2, "sortBy": "title:asc"},
    ).json()["data"]

    assert page["totalResults"] == 3
    assert page["totalPages"] == 2
    assert [b["title"] for b in page["results"]] == ["Post 2"]


def test_list_blogs_rejects_unknown_sort(client):
    response = client.get("/v1/blogs", params={"sortBy": "password"})

    assert response.status_code == 400


def test_update_blog_rejects_null_title(client, admin_headers, category):
    blog = make_blog(client, admin_headers, category["id"], title="Keep me")

    response = client.put(f"/v1/blogs/{blog['id']}", json={"title": None}, headers=admin_headers)

    assert response.status_code == 400
    assert client.get(f"/v1/blogs/{blog['id']}").json()["data"]["blog"]["title"] == "Keep me"


def test_update_blog_can_clear_cover_image(client, admin_headers, category):
    blog = make_blog(
        client, admin_headers, category["id"], coverImage="https://cdn.example.com/a.png"
    )

    response = client.put(
        f"/v1/blogs/{blog['id']}", json={"coverImage": None}, headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json()["data"]["blog"]["coverImage"] is None


def test_update_category_rejects_null_name(client, admin_headers, category):
    response = client.put(
        f"/v1/categories/{category['id']}", json={"name": None}, headers=admin_headers
    )

    assert response.status_code == 400


def test_deleting_author_releases_post_counts(client, admin_headers, category):
    author = register(client)
    promoted = client.put(
        f"/v1/users/{author['user']['id']}", json={"role": "admin"}, headers=admin_headers
    )
    assert promoted.status_code == 200

    author_headers = bearer(author["tokens"]["access"]["token"])
    make_blog(client, author_headers, category["id"], title="One")
    make_blog(client, author_headers, category["id"], title="Two")
    make_blog(client, admin_headers, category["id"], title="Stays")
    assert get_category(client, category["id"])["postCount"] == 3

    response = client.delete(f"/v1/users/{author['user']['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert get_category(client, category["id"])["postCount"] == 1
    listing = client.get(
        "/v1/blogs", params={"categoryId": category["id"], "status": "all"}
    ).json()["data"]
    assert [b["title"] for b in listing["results"]] == ["Stays"]
