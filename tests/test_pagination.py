from datetime import date

import pytest
from fastapi import HTTPException
from starlette.datastructures import URL

from myskool.models.program import Program
from myskool.utils.pagination import Page, PageRequest, Pageable, generate_pagination_headers, parse_sort


BASE_URL = URL("http://testserver/api/programs?page=1&size=2")


def _page(number, size, total):
    return Page(content=[], number=number, size=size, total_elements=total)


class TestParseSort:

    def test_defaults_to_ascending(self):
        assert parse_sort(["title"]) == (("title", "asc"),)

    def test_keeps_priority_order(self):
        assert parse_sort(["startDate,desc", "id"]) == (("startDate", "desc"), ("id", "asc"))

    def test_direction_is_case_insensitive(self):
        assert parse_sort(["id,DESC"]) == (("id", "desc"),)

    def test_rejects_unknown_direction(self):
        with pytest.raises(HTTPException) as exc_info:
            parse_sort(["id,sideways"])
        assert exc_info.value.status_code == 400

    def test_skips_empty_values(self):
        assert parse_sort(["", ","]) == ()

    def test_rejects_property_outside_sortable(self):
        with pytest.raises(HTTPException) as exc_info:
            parse_sort(["owner,asc"], sortable={"id", "title"})
        assert exc_info.value.status_code == 400

    def test_accepts_sortable_property(self):
        assert parse_sort(["title,desc"], sortable={"id", "title"}) == (("title", "desc"),)


class TestPageable:

    def test_builds_page_request(self):
        page_request = Pageable({"id"})(page=2, size=5, sort=["id,desc"])

        assert page_request == PageRequest(page=2, size=5, sort=(("id", "desc"),))
        assert page_request.offset == 10

    def test_unknown_property_is_rejected_before_the_store(self):
        with pytest.raises(HTTPException) as exc_info:
            Pageable({"id"})(page=0, size=5, sort=["cover"])
        assert exc_info.value.status_code == 400


class TestPaginationHeaders:

    def test_middle_page_has_every_link(self):
        headers = generate_pagination_headers(BASE_URL, _page(1, 2, 5))

        assert headers["X-Total-Count"] == "5"
        assert headers["Link"] == ",".join([
            '<http://testserver/api/programs?page=2&size=2>; rel="next"',
            '<http://testserver/api/programs?page=0&size=2>; rel="prev"',
            '<http://testserver/api/programs?page=2&size=2>; rel="last"',
            '<http://testserver/api/programs?page=0&size=2>; rel="first"',
        ])

    def test_first_page_has_no_prev(self):
        link = generate_pagination_headers(BASE_URL, _page(0, 2, 5))["Link"]

        assert 'rel="prev"' not in link
        assert 'page=1&size=2>; rel="next"' in link

    def test_last_page_has_no_next(self):
        link = generate_pagination_headers(BASE_URL, _page(2, 2, 5))["Link"]

        assert 'rel="next"' not in link
        assert 'page=1&size=2>; rel="prev"' in link

    def test_empty_result_points_last_at_first_page(self):
        headers = generate_pagination_headers(BASE_URL, _page(0, 20, 0))

        assert headers["X-Total-Count"] == "0"
        assert 'page=0&size=20>; rel="last"' in headers["Link"]
        assert 'rel="next"' not in headers["Link"]


@pytest.fixture()
def programs(db):
    rows = [
        Program(title=title, description="desc", start_date=date(2021, 1, day), end_date=date(2021, 2, 1))
        for day, title in enumerate(["Charlie", "Alpha", "Bravo"], start=1)
    ]
    db.add_all(rows)
    db.commit()
    return rows


class TestGetAllPaging:

    def test_returns_requested_page(self, client, programs):
        response = client.get("/api/programs?page=0&size=2")

        assert response.status_code == 200
        assert [p["title"] for p in response.json()] == ["Charlie", "Alpha"]
        assert response.headers["X-Total-Count"] == "3"
        assert 'page=1&size=2>; rel="next"' in response.headers["Link"]
        assert 'page=1&size=2>; rel="last"' in response.headers["Link"]

    def test_second_page(self, client, programs):
        response = client.get("/api/programs?page=1&size=2")

        assert [p["title"] for p in response.json()] == ["Bravo"]
        assert 'page=0&size=2>; rel="prev"' in response.headers["Link"]

    def test_sorts_by_json_property(self, client, programs):
        response = client.get("/api/programs?sort=title,asc")

        assert [p["title"] for p in response.json()] == ["Alpha", "Bravo", "Charlie"]

    def test_sorts_descending_by_date(self, client, programs):
        response = client.get("/api/programs?sort=startDate,desc")

        assert [p["title"] for p in response.json()] == ["Bravo", "Alpha", "Charlie"]

    def test_unknown_sort_property(self, client, programs):
        response = client.get("/api/programs?sort=owner,asc")

        assert response.status_code == 400

    def test_negative_page_is_rejected(self, client, programs):
        response = client.get("/api/programs?page=-1")

        assert response.status_code == 400
