import pytest

from zeo_admin.listing import (
    ASC, DESC, TOURS, BLOG, ENQUIRIES, ListState, Paginator, SortState, apply,
    duration_key, filter_items, flag_key, number_key, page_window, sort_items, text_key,
    with_destination_names
)


def make_tours(count):
    return [
        {"id": i, "title": f"Tour {i:02d}", "price": i * 10, "destination": "Nepal" if i % 2 else "Tibet"}
        for i in range(1, count + 1)
    ]


# Filtering

def test_search_is_case_insensitive_substring():
    items = [{"title": "Everest Base Camp"}, {"title": "Kailash Yatra"}, {"title": None}]

    assert filter_items(items, "base", ("title",)) == [items[0]]
    assert filter_items(items, "YATRA", ("title",)) == [items[1]]


def test_search_any_field_matches():
    items = [{"title": "Trek", "location": "Khumbu"}, {"title": "Tour", "location": "Patan"}]

    assert filter_items(items, "khumbu", ("title", "location")) == [items[0]]


def test_empty_search_and_filters_keep_everything():
    items = make_tours(5)

    assert filter_items(items, "", ("title",), [(lambda item: item["destination"], "")]) == items


def test_filters_match_exactly_and_combine():
    items = make_tours(6)
    result = filter_items(
        items, "tour", ("title",),
        [(lambda item: item["destination"], "Tibet"), (lambda item: item["price"] > 20, True)]
    )

    assert [item["id"] for item in result] == [4, 6]


def test_filter_does_not_mutate_input():
    items = make_tours(3)
    before = list(items)

    filter_items(items, "01", ("title",))

    assert items == before


# Sorting

def test_sort_is_stable_in_both_directions():
    items = [
        {"id": 1, "category": "trek"},
        {"id": 2, "category": "tour"},
        {"id": 3, "category": "trek"},
        {"id": 4, "category": "tour"},
    ]
    key = text_key("category")

    assert [i["id"] for i in sort_items(items, key, ASC)] == [2, 4, 1, 3]
    assert [i["id"] for i in sort_items(items, key, DESC)] == [1, 3, 2, 4]


def test_duration_key_uses_first_number():
    items = [{"duration": "14 days"}, {"duration": "3 Days"}, {"duration": "flexible"}, {}]

    assert [duration_key()(item) for item in items] == [14, 3, 0, 0]


def test_number_key_treats_junk_as_zero():
    assert number_key("price")({"price": "abc"}) == 0
    assert number_key("price")({"price": "12.5"}) == 12.5
    assert number_key("price")({}) == 0


def test_flag_key_counts_absent_as_set():
    assert flag_key("listed")({}) == 1
    assert flag_key("listed")({"listed": True}) == 1
    assert flag_key("listed")({"listed": False}) == 0


def test_sort_toggle():
    state = SortState(field="title", direction=ASC)

    assert state.toggle("title") == SortState(field="title", direction=DESC)
    assert state.toggle("title").toggle("title").direction == ASC
    assert state.toggle("price") == SortState(field="price", direction=ASC)


# Pagination

def test_page_slices_cover_every_item_once():
    items = make_tours(45)
    paginator = Paginator(20)

    pages = [paginator.page_slice(items, page) for page in range(1, paginator.total_pages(45) + 1)]

    assert [len(page) for page in pages] == [20, 20, 5]
    assert [item for page in pages for item in page] == items


def test_page_past_the_end_is_empty():
    assert Paginator(10).page_slice(make_tours(5), 3) == []


def test_page_info():
    info = Paginator(20).info(45, 3)

    assert info.total_pages == 3
    assert (info.start_item, info.end_item) == (41, 45)
    assert info.has_previous and not info.has_next


def test_page_info_empty():
    info = Paginator(10).info(0, 1)

    assert info.total_pages == 0
    assert (info.start_item, info.end_item) == (0, 0)
    assert not info.has_previous and not info.has_next
    assert info.page_numbers == []


def test_previous_and_next_are_clamped():
    paginator = Paginator(10)

    assert Paginator.previous(1) == 1
    assert Paginator.previous(3) == 2
    assert paginator.next(2, 25) == 3
    assert paginator.next(3, 25) == 3


def test_paginator_rejects_zero_page_size():
    with pytest.raises(ValueError):
        Paginator(0)


@pytest.mark.parametrize("current,total,expected", [
    (1, 3, [1, 2, 3]),
    (1, 10, [1, 2, 3, 4, 5]),
    (2, 10, [1, 2, 3, 4, 5]),
    (6, 10, [4, 5, 6, 7, 8]),
    (9, 10, [6, 7, 8, 9, 10]),
    (10, 10, [6, 7, 8, 9, 10]),
])
def test_page_window(current, total, expected):
    assert page_window(current, total) == expected


# List state

def test_search_and_filter_changes_reset_page():
    state = ListState(page=4)
    state.set_search("nepal")
    assert state.page == 1

    state.go_to(3)
    state.set_search("nepal")
    assert state.page == 3

    state.set_filter("destination", "Tibet")
    assert state.page == 1


def test_go_to_never_below_one():
    state = ListState()
    state.go_to(0)

    assert state.page == 1


def test_apply_runs_whole_pipeline():
    items = make_tours(45)
    state = TOURS.new_state()
    state.set_filter("destination", "Nepal")
    state.toggle_sort("price")
    state.toggle_sort("price")

    view = apply(TOURS, state, items)

    assert len(view.matched) == 23
    assert view.info.total_pages == 2
    assert view.items[0]["id"] == 45
    assert [i["price"] for i in view.items] == sorted((i["price"] for i in view.items), reverse=True)


def test_apply_status_filter_on_tours():
    items = [{"id": 1, "title": "A"}, {"id": 2, "title": "B", "listed": False}]
    state = TOURS.new_state()
    state.set_filter("status", "unlisted")

    assert [i["id"] for i in apply(TOURS, state, items).items] == [2]


def test_filter_options_are_distinct_and_sorted():
    items = [{"category": "Trek"}, {"category": "Culture"}, {"category": "Trek"}, {}]

    assert BLOG.filter_options(items, "category") == ["Culture", "Trek"]


# Behaviour of the tours page as a whole

def test_search_kailash_only_returns_matches():
    items = [
        {"id": 1, "title": "Kailash Mansarovar Yatra"},
        {"id": 2, "title": "Everest Base Camp", "description": "Views toward KAILASH range"},
        {"id": 3, "title": "Kathmandu Valley Tour"},
    ]
    state = TOURS.new_state()
    state.set_search("kailash")

    assert [i["id"] for i in apply(TOURS, state, items).matched] == [1, 2]


def test_price_descending_is_reverse_of_ascending():
    items = [{"id": i, "price": price} for i, price in enumerate([500, 120, 980, 75, 300], start=1)]
    key = number_key("price")

    ascending = sort_items(items, key, ASC)
    descending = sort_items(items, key, DESC)

    assert descending == list(reversed(ascending))


def test_duration_sort_is_numeric():
    items = [{"id": 1, "duration": "12 days"}, {"id": 2, "duration": "3 days"}]

    assert [i["id"] for i in sort_items(items, duration_key(), ASC)] == [2, 1]


def test_twenty_five_items_ten_per_page():
    items = [{"id": i} for i in range(1, 26)]
    paginator = Paginator(10)

    assert [i["id"] for i in paginator.page_slice(items, 1)] == list(range(1, 11))
    assert [i["id"] for i in paginator.page_slice(items, 3)] == list(range(21, 26))

    info = paginator.info(len(items), 3)
    assert info.total_pages == 3
    assert not info.has_next


def test_absent_listed_counts_as_listed():
    items = [{"id": 1}, {"id": 2, "listed": True}, {"id": 3, "listed": False}]
    state = TOURS.new_state()
    state.set_filter("status", "listed")

    assert [i["id"] for i in apply(TOURS, state, items).matched] == [1, 2]


def test_resources_without_default_sort_keep_fetched_order():
    items = [{"id": 2, "created_at": "2024-03-01"}, {"id": 1, "created_at": "2024-01-01"}]
    state = ENQUIRIES.new_state()

    assert ENQUIRIES.sort_choices()[0] is None
    state.choose_sort(ENQUIRIES.sort_choices()[0])

    assert state.sort.field is None
    assert [i["id"] for i in apply(ENQUIRIES, state, items).items] == [2, 1]


def test_choose_sort_only_changes_on_a_new_field():
    state = TOURS.new_state()
    state.toggle_sort("title")

    state.choose_sort("title")
    assert state.sort == SortState(field="title", direction=DESC)

    state.choose_sort("price")
    assert state.sort == SortState(field="price", direction=ASC)

    state.choose_sort(None)
    assert state.sort.field is None
    assert TOURS.sort_choices()[0] == "title"


# Tour destinations

def test_tour_destination_resolved_from_destinations_list():
    destinations = [{"id": 10, "title": "Bhutan"}, {"id": 11, "title": "Tibet"}]
    tours = [
        {"id": 1, "title": "A", "primary_destination_id": 10, "location": "zzz"},
        {"id": 2, "title": "B", "primary_destination_id": 11, "location": "aaa"},
        {"id": 3, "title": "C", "destination": "Nepal", "location": "bbb"},
    ]
    items = with_destination_names(tours, destinations)

    state = TOURS.new_state()
    state.toggle_sort("destination")
    assert [i["id"] for i in apply(TOURS, state, items).items] == [1, 3, 2]

    state.set_filter("destination", "Tibet")
    assert [i["id"] for i in apply(TOURS, state, items).items] == [2]
    assert "destination" not in tours[0]
