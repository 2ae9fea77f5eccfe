"""HTTP tests for the review endpoints and the response envelope."""

from restroom_finder_api.app.core.security import create_access_token


def post_review(client, headers, restroom_id, rating, content="Clean enough"):
    return client.post(
        "/api/review",
        json={"restroom_id": restroom_id, "review_content": content, "rating": rating},
        headers=headers,
    )


def test_create_and_get_review(client, auth_headers, user_id, restroom_id):
    response = post_review(client, auth_headers(user_id), restroom_id, 4, "  Spotless  ")

    assert response.status_code == 200
    body = response.json()
    assert body["code"] == "00"
    assert body["msg"] == "success"
    review = body["data"]
    assert review["review_content"] == "Spotless"
    assert review["rating"] == 4.0
    assert review["nickname"] == "alice"

    fetched = client.get(f"/api/review/get/{review['review_id']}").json()
    assert fetched["data"]["review_id"] == review["review_id"]

    restroom = client.get(f"/api/restroom/{restroom_id}").json()["data"]
    assert restroom["average_rating"] == 4.0


def test_create_requires_token(client, restroom_id):
    response = post_review(client, {}, restroom_id, 4)

    assert response.status_code == 401
    assert response.json()["code"] == "06"
    assert response.json()["data"]["status"] == "INVALID_TOKEN_EXCEPTION"


def test_create_with_garbage_token(client, restroom_id):
    response = post_review(client, {"Authorization": "Bearer not.a.token"}, restroom_id, 4)

    assert response.status_code == 401
    assert response.json()["code"] == "06"


def test_create_for_unknown_restroom(client, auth_headers, user_id):
    response = post_review(client, auth_headers(user_id), 999, 4)

    assert response.status_code == 404
    body = response.json()
    assert body == {
        "code": "17",
        "msg": "fail",
        "data": {"status": "RESTROOM_NOT_FOUND", "msg": "Restroom 999 not found"},
    }


def test_rating_out_of_range(client, auth_headers, user_id, restroom_id):
    response = post_review(client, auth_headers(user_id), restroom_id, 7)

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "23"
    assert body["data"]["status"] == "VALIDATION_EXCEPTION"
    assert body["data"]["msg"].startswith("rating:")


def test_blank_content(client, auth_headers, user_id, restroom_id):
    response = post_review(client, auth_headers(user_id), restroom_id, 3, "   ")

    assert response.status_code == 400
    assert response.json()["data"]["msg"] == "review_content: Review content must not be blank"


def test_malformed_json(client, auth_headers, user_id):
    headers = {**auth_headers(user_id), "Content-Type": "application/json"}
    response = client.post("/api/review", content="{not json", headers=headers)

    assert response.status_code == 400
    assert response.json()["code"] == "04"


def test_invalid_path_parameter(client):
    response = client.get("/api/review/get/abc")

    assert response.status_code == 400
    assert response.json()["code"] == "03"
    assert response.json()["data"]["status"] == "INVALID_PARAMETER"


def test_unknown_review(client):
    response = client.get("/api/review/get/42")

    assert response.status_code == 404
    assert response.json()["code"] == "16"
    assert response.json()["data"]["status"] == "REVIEW_NOT_FOUND"


def test_update_and_delete_by_owner(client, auth_headers, user_id, restroom_id):
    headers = auth_headers(user_id)
    review_id = post_review(client, headers, restroom_id, 1).json()["data"]["review_id"]
    post_review(client, headers, restroom_id, 3)

    updated = client.patch(
        f"/api/review/{review_id}",
        json={"review_content": "Cleaned up", "rating": 5},
        headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["review_content"] == "Cleaned up"
    assert client.get(f"/api/restroom/{restroom_id}").json()["data"]["average_rating"] == 4.0

    deleted = client.delete(f"/api/review/{review_id}", headers=headers)
    assert deleted.json() == {"code": "00", "msg": "success", "data": "Review deleted"}
    assert client.get(f"/api/restroom/{restroom_id}").json()["data"]["average_rating"] == 3.0
    assert client.get(f"/api/review/get/{review_id}").status_code == 404


def test_other_user_cannot_modify(client, auth_headers, user_id, other_user_id, restroom_id):
    review_id = post_review(client, auth_headers(user_id), restroom_id, 2).json()["data"]["review_id"]
    intruder = auth_headers(other_user_id)

    patched = client.patch(f"/api/review/{review_id}", json={"review_content": "hijack", "rating": 5}, headers=intruder)
    deleted = client.delete(f"/api/review/{review_id}", headers=intruder)

    for response in (patched, deleted):
        assert response.status_code == 403
        assert response.json()["code"] == "05"
        assert response.json()["data"]["status"] == "AUTH_EXCEPTION"
    assert client.get(f"/api/review/get/{review_id}").json()["data"]["rating"] == 2.0


def test_content_is_escaped(client, auth_headers, user_id, restroom_id):
    response = post_review(client, auth_headers(user_id), restroom_id, 3, "<script>alert(1)</script>")

    assert response.json()["data"]["review_content"] == "&lt;script&gt;alert(1)&lt;/script&gt;"


def test_list_orderings(client, auth_headers, user_id, other_user_id, restroom_id):
    ids = []
    for author, rating in ((user_id, 3), (other_user_id, 5), (user_id, 1), (other_user_id, 3)):
        ids.append(post_review(client, auth_headers(author), restroom_id, rating).json()["data"]["review_id"])

    def listed(kind):
        response = client.get(f"/api/review/list/{kind}/{restroom_id}")
        assert response.status_code == 200
        return [review["review_id"] for review in response.json()["data"]]

    assert listed("latest") == list(reversed(ids))
    assert listed("low-rating") == [ids[2], ids[0], ids[3], ids[1]]
    assert listed("high-rating") == [ids[1], ids[3], ids[0], ids[2]]


def test_list_for_unknown_restroom(client):
    response = client.get("/api/review/list/latest/31")

    assert response.status_code == 404
    assert response.json()["code"] == "17"


def test_list_for_restroom_without_reviews(client, restroom_id):
    response = client.get(f"/api/review/list/high-rating/{restroom_id}")

    assert response.json() == {"code": "00", "msg": "success", "data": []}


def test_list_my_reviews(client, auth_headers, user_id, other_user_id, restroom_id):
    mine = post_review(client, auth_headers(user_id), restroom_id, 4).json()["data"]["review_id"]
    post_review(client, auth_headers(other_user_id), restroom_id, 2)

    response = client.get("/api/review/list", headers=auth_headers(user_id))

    assert [review["review_id"] for review in response.json()["data"]] == [mine]


def test_rating_is_returned_as_integer(client, auth_headers, user_id, restroom_id):
    review = post_review(client, auth_headers(user_id), restroom_id, 4).json()["data"]

    assert review["rating"] == 4
    assert isinstance(review["rating"], int)


def test_ids_beyond_integer_range(client, auth_headers, user_id):
    too_big = 2**70

    for path in (f"/api/review/get/{too_big}", f"/api/review/list/latest/{too_big}", f"/api/restroom/{too_big}"):
        response = client.get(path)
        assert response.status_code == 400
        assert response.json()["code"] == "03"

    response = post_review(client, auth_headers(user_id), too_big, 4)
    assert response.status_code == 400
    assert response.json()["code"] == "23"

    response = client.delete(f"/api/review/{too_big}", headers=auth_headers(user_id))
    assert response.status_code == 400
    assert response.json()["code"] == "03"


def test_largest_id_is_simply_not_found(client):
    response = client.get(f"/api/review/get/{2**63 - 1}")

    assert response.status_code == 404
    assert response.json()["code"] == "16"


def test_token_subject_beyond_integer_range(client, restroom_id):
    headers = {"Authorization": f"Bearer {create_access_token({'sub': str(2**70)})}"}

    response = post_review(client, headers, restroom_id, 4)

    assert response.status_code == 401
    assert response.json()["code"] == "06"


def test_unknown_route(client):
    response = client.get("/api/review/nope/1")

    assert response.status_code == 404
    assert response.json() == {
        "code": "24",
        "msg": "fail",
        "data": {"status": "RESOURCE_NOT_FOUND", "msg": "Not Found"},
    }


def test_method_not_allowed(client):
    response = client.put("/api/review/1", json={})

    assert response.status_code == 405
    assert response.json()["code"] == "25"
    assert response.json()["data"]["status"] == "METHOD_NOT_ALLOWED"
    assert "PATCH" in response.headers["allow"]
