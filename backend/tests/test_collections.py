"""
Ordered collections (services, faqs, testimonials, trusted-by): visibility,
toggles and reorder.
"""

from unittest.mock import patch

import pytest

from tests.conftest import PNG


@pytest.fixture
def make_faq(client, auth_headers):
    def _make(question, **extra):
        body = {"question": question, "answer": f"Answer to {question}"}
        body.update(extra)
        response = client.post("/api/faqs", headers=auth_headers, json=body)
        assert response.status_code == 201, response.get_json()
        return response.get_json()["data"]
    return _make


class TestVisibility:

    def test_inactive_faq_hidden_from_public_only(self, client, auth_headers, make_faq):
        shown = make_faq("Shown?")
        hidden = make_faq("Hidden?", active=False)

        public = client.get("/api/faqs").get_json()
        admin = client.get("/api/faqs/admin/all", headers=auth_headers).get_json()

        assert [f["_id"] for f in public["data"]] == [shown["_id"]]
        assert public["count"] == 1
        assert {f["_id"] for f in admin["data"]} == {shown["_id"], hidden["_id"]}
        assert client.get(f"/api/faqs/{hidden['_id']}").status_code == 404
        assert client.get(f"/api/faqs/{shown['_id']}").status_code == 200

    def test_toggle_active_twice_restores(self, client, auth_headers, make_faq):
        faq = make_faq("Toggle?")

        first = client.patch(f"/api/faqs/{faq['_id']}/toggle-active", headers=auth_headers)
        second = client.patch(f"/api/faqs/{faq['_id']}/toggle-active", headers=auth_headers)

        assert first.get_json()["data"]["active"] is False
        assert second.get_json()["data"]["active"] is True

    def test_empty_public_list_is_not_an_error(self, client):
        response = client.get("/api/testimonials")

        assert response.status_code == 200
        assert response.get_json() == {"success": True, "data": [], "count": 0}

    def test_faq_category_is_lowercased_and_checked(self, client, auth_headers, make_faq):
        faq = make_faq("Cost?", category="Pricing")
        assert faq["category"] == "pricing"

        bad = client.post(
            "/api/faqs",
            headers=auth_headers,
            json={"question": "q", "answer": "a", "category": "weather"},
        )
        assert bad.status_code == 400

        listed = client.get("/api/faqs/category/pricing").get_json()["data"]
        assert [f["_id"] for f in listed] == [faq["_id"]]

    def test_faq_category_lookup_ignores_case(self, client, make_faq):
        faq = make_faq("Cost?", category="pricing")
        make_faq("Hours?")

        by_path = client.get("/api/faqs/category/Pricing").get_json()
        by_query = client.get("/api/faqs?category=PRICING").get_json()

        assert [f["_id"] for f in by_path["data"]] == [faq["_id"]]
        assert [f["_id"] for f in by_query["data"]] == [faq["_id"]]

    def test_testimonial_defaults_and_rating_bounds(self, client, auth_headers):
        created = client.post(
            "/api/testimonials",
            headers=auth_headers,
            json={"name": "Sam", "position": "CTO", "company": "Acme", "testimonial": "Great work"},
        ).get_json()["data"]

        assert created["rating"] == 5
        assert created["active"] is True
        assert created["image"] == ""

        bad = client.post(
            "/api/testimonials",
            headers=auth_headers,
            json={"name": "Sam", "position": "CTO", "company": "Acme", "testimonial": "Meh", "rating": 9},
        )
        assert bad.status_code == 400

    def test_trusted_by_requires_logo(self, client, auth_headers):
        response = client.post("/api/trusted-by", headers=auth_headers, json={"name": "Acme"})

        assert response.status_code == 400
        assert "logo" in response.get_json()["error"]


class TestReorder:

    def test_reorder_sets_list_order(self, client, auth_headers, make_faq):
        faqs = [make_faq(f"Q{n}?") for n in range(4)]
        wanted = [faqs[2], faqs[0], faqs[3], faqs[1]]

        response = client.patch(
            "/api/faqs/reorder",
            headers=auth_headers,
            json={"items": [{"id": f["_id"], "order": i + 1} for i, f in enumerate(wanted)]},
        )

        assert response.status_code == 200
        public = [f["_id"] for f in client.get("/api/faqs").get_json()["data"]]
        assert public == [f["_id"] for f in wanted]

    def test_resource_named_key_is_accepted(self, client, auth_headers):
        companies = []
        for name in ("A", "B"):
            companies.append(client.post(
                "/api/trusted-by",
                headers=auth_headers,
                json={"name": name, "logo": f"https://example.com/{name}.png"},
            ).get_json()["data"])

        response = client.patch(
            "/api/trusted-by/reorder",
            headers=auth_headers,
            json={"companies": [
                {"_id": companies[1]["_id"], "order": 0},
                {"_id": companies[0]["_id"], "order": 1},
            ]},
        )

        assert response.status_code == 200
        names = [c["name"] for c in client.get("/api/trusted-by").get_json()["data"]]
        assert names == ["B", "A"]

    def test_ties_break_by_creation_time(self, client, auth_headers, make_faq):
        first = make_faq("First?", order=1)
        second = make_faq("Second?", order=1)

        public = [f["_id"] for f in client.get("/api/faqs").get_json()["data"]]

        assert public == [first["_id"], second["_id"]]

    def test_unknown_ids_are_skipped(self, client, auth_headers, make_faq):
        faq = make_faq("Only?")

        response = client.patch(
            "/api/faqs/reorder",
            headers=auth_headers,
            json={"items": [{"id": "ghost", "order": 1}, {"id": faq["_id"], "order": 7}]},
        )

        assert response.status_code == 200
        assert response.get_json()["data"][0]["order"] == 7

    def test_partial_failure_reports_batch_failure(self, client, auth_headers, make_faq):
        faq = make_faq("Q?")

        with patch(
            "sitecms.application.content.repository.apply_order_pairs",
            return_value=([faq["_id"]], ["broken-id"]),
        ):
            response = client.patch(
                "/api/faqs/reorder",
                headers=auth_headers,
                json={"items": [{"id": faq["_id"], "order": 1}, {"id": "broken-id", "order": 2}]},
            )

        assert response.status_code == 500
        assert response.get_json()["success"] is False

    def test_empty_batch_is_400(self, client, auth_headers):
        response = client.patch("/api/faqs/reorder", headers=auth_headers, json={"items": []})

        assert response.status_code == 400

    def test_unordered_types_have_no_reorder_route(self, client, auth_headers):
        response = client.patch("/api/projects/reorder", headers=auth_headers, json={"items": []})

        assert response.status_code in (404, 405)


class TestServices:

    def test_service_crud_with_sub_services(self, client, auth_headers, cloud):
        created = client.post(
            "/api/services",
            headers=auth_headers,
            json={
                "title": "Structural Retrofitting",
                "description": "Strengthen what stands",
                "image": PNG,
                "subServices": [{"title": "Carbon wrap", "blogId": "no-such-blog"}],
            },
        )

        data = created.get_json()["data"]
        assert created.status_code == 201
        # blog references are soft links and are not checked
        assert data["subServices"] == [{"title": "Carbon wrap", "blogId": "no-such-blog"}]
        assert data["gradient"] == "from-blue-500 to-blue-700"
        assert data["slug"] == "structural-retrofitting"
        assert client.get("/api/services/structural-retrofitting").status_code == 200

    def test_sub_service_needs_title_and_blog_id(self, client, auth_headers, cloud):
        response = client.post(
            "/api/services",
            headers=auth_headers,
            json={
                "title": "S",
                "description": "D",
                "image": PNG,
                "subServices": [{"title": "Missing blog id"}],
            },
        )

        assert response.status_code == 400
        cloud.upload.assert_not_called()

    def test_empty_list_overwrites(self, client, auth_headers, cloud):
        created = client.post(
            "/api/services",
            headers=auth_headers,
            json={"title": "S", "description": "D", "image": PNG, "applications": ["roofs"]},
        ).get_json()["data"]

        response = client.put(
            f"/api/services/{created['_id']}",
            headers=auth_headers,
            json={"applications": []},
        )

        assert response.get_json()["data"]["applications"] == []
