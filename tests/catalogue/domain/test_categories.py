from catalogue.category.categories import CATEGORIES, CategoryId, category_by_id


def test_four_static_categories():
    assert [c.id for c in CATEGORIES] == ["electronics", "clothing", "home-garden", "accessories"]


def test_category_ids_match_enum():
    assert {c.id for c in CATEGORIES} == {c.value for c in CategoryId}


def test_lookup_by_id():
    assert category_by_id("home-garden").name == "Home & Garden"


def test_lookup_unknown_id():
    assert category_by_id("toys") is None
