import json

from business_finder.etl import export
from business_finder.models import Business


def test_to_csv_quotes_every_cell_and_doubles_quotes():
    businesses = [
        Business(
            name='The "Best" Movers',
            phone="050-1",
            address="Herzl 1, Haifa",
            website="https://best.co.il",
            rating=4.5,
            review_count=12,
            category="Moving company",
            hours="24h",
        ),
        Business(name="Bare"),
    ]

    lines = export.to_csv(businesses, headers=export.CSV_FIELDS).split("\n")

    assert lines[0] == '"name","phone","address","website","rating","reviewCount","category","hours"'
    assert lines[1] == (
        '"The ""Best"" Movers","050-1","Herzl 1, Haifa","https://best.co.il","4.5","12","Moving company","24h"'
    )
    assert lines[2] == '"Bare","","","","","","",""'
    assert len(lines) == 3


def test_to_csv_default_headers_are_hebrew():
    first_line = export.to_csv([]).split("\n")[0]
    assert first_line.startswith('"שם","טלפון"')


def test_to_json_export_fields():
    businesses = [
        Business(name="A", phone="1", address="Tel Aviv", rating=4.0, email="a@a.com"),
        Business(name="B"),
    ]

    records = json.loads(export.to_json_export(businesses))

    assert records == [
        {"name": "A", "phone": "1", "area": "Tel Aviv", "rating": 4.0, "email": "a@a.com"},
        {"name": "B", "phone": "", "area": "", "rating": "", "email": ""},
    ]


def test_to_json_export_keeps_hebrew_readable():
    assert "הובלות" in export.to_json_export([Business(name="הובלות")])


def test_to_csv_whole_number_rating_has_no_decimal():
    line = export.to_csv([Business(name="A", rating=4.0)], headers=None)
    assert line == '"A","","","","4","","",""'
