import datetime as dt

import pytest

from post_manager.display import format_date, image_url, render_filters, render_posts
from post_manager.filters import FilterCriteria

pytestmark = pytest.mark.client


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, None),
        ("", None),
        ("/uploads/1.png", "/uploads/1.png"),
        ("uploads/1.png", "/uploads/1.png"),
        ("https://cdn.example.com/x.png", "https://cdn.example.com/x.png"),
        ("file:///tmp/post-preview-1.png", "file:///tmp/post-preview-1.png"),
    ],
)
def test_image_url(value, expected):
    assert image_url(value) == expected


def test_format_date_accepts_strings_and_dates():
    assert format_date("2024-01-05") == "05.01.2024"
    assert format_date("2024-01-05T00:00:00.000Z") == "05.01.2024"
    assert format_date(dt.date(2024, 1, 5)) == "05.01.2024"


def test_render_posts_lists_each_post():
    text = render_posts([
        {"id": "1", "title": "Hello", "description": "World", "status": "active",
         "date": "2024-01-01", "imageUrl": "/uploads/1.png"},
        {"id": "2", "title": "Bye", "description": "Moon", "status": "inactive",
         "date": "2024-02-01", "imageUrl": ""},
    ])

    assert "Hello  [Active]  01.01.2024" in text
    assert "image: /uploads/1.png" in text
    assert "Bye  [Inactive]" in text
    assert text.count("image:") == 1


def test_render_posts_empty_state():
    assert render_posts([]) == "No posts found."


def test_render_filters():
    assert render_filters(FilterCriteria()) == "Status: All | Date: any date"
    f = FilterCriteria(status="active", start_date="2024-01-01", end_date="2024-01-31")
    assert render_filters(f) == "Status: Active | Date: 2024-01-01 - 2024-01-31"
    # halber Datumsbereich zählt nicht
    assert render_filters(FilterCriteria(start_date="2024-01-01")).endswith("any date")
