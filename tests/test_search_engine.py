import pytest

from core.errors import ValidationError
from core.search import Page, PageRequest, ProfileSearchEngine, SearchFilters
from core.search.text import escape_like, tokenize


def _names(page):
    return [profile.display_name for profile in page.items]


def test_pagination_window_and_totals(test_session, make_profile):
    for _ in range(25):
        make_profile()

    page = ProfileSearchEngine(test_session).search(SearchFilters(), PageRequest(page=2, limit=10))

    assert page.total == 25
    assert page.total_pages == 3
    # Newest first: page 2 holds the 15th..6th created profiles
    assert _names(page) == [f"User {n}" for n in range(15, 5, -1)]
    assert page.pagination() == {"page": 2, "limit": 10, "total": 25, "totalPages": 3}


def test_page_past_the_end_is_empty_but_keeps_total(test_session, make_profile):
    for _ in range(3):
        make_profile()

    page = ProfileSearchEngine(test_session).search(SearchFilters(), PageRequest(page=5, limit=10))

    assert page.items == []
    assert page.total == 3


def test_skills_match_any_of_the_requested_values(test_session, make_profile):
    make_profile(display_name="Py", skills=["python"])
    make_profile(display_name="Go", skills=["go"])
    make_profile(display_name="Rust", skills=["rust"])

    filters = SearchFilters.build(skills=["python", "go"])
    page = ProfileSearchEngine(test_session).search(filters, PageRequest())

    assert sorted(_names(page)) == ["Go", "Py"]
    assert page.total == 2


def test_filters_are_combined(test_session, make_profile):
    make_profile(display_name="Tutor", skills=["python"], availability=["tutoring"], year="2025")
    make_profile(display_name="Builder", skills=["python"], availability=["projects"], year="2025")
    make_profile(display_name="Old tutor", skills=["python"], availability=["tutoring"], year="2023")

    filters = SearchFilters.build(skills=["python"], availability=["tutoring"], year="2025")
    page = ProfileSearchEngine(test_session).search(filters, PageRequest())

    assert _names(page) == ["Tutor"]


def test_search_term_orders_by_relevance(test_session, make_profile):
    make_profile(display_name="Bio match", bio="Studying at Stanford")
    make_profile(display_name="Stanford Sam")
    make_profile(display_name="Unrelated", bio="MIT")

    filters = SearchFilters.build(search_term="stanford")
    page = ProfileSearchEngine(test_session).search(filters, PageRequest())

    # Name hits weigh more than bio hits
    assert _names(page) == ["Stanford Sam", "Bio match"]
    assert page.total == 2


def test_search_term_without_words_matches_nothing(test_session, make_profile):
    make_profile()

    page = ProfileSearchEngine(test_session).search(SearchFilters.build(search_term="!!!"), PageRequest())

    assert page.items == []
    assert page.total == 0


def test_university_filter_treats_wildcards_literally(test_session, make_profile):
    make_profile(display_name="Literal", university="100% Online University")
    make_profile(display_name="Other", university="1000 Online University")

    filters = SearchFilters.build(university="100%")
    page = ProfileSearchEngine(test_session).search(filters, PageRequest())

    assert _names(page) == ["Literal"]


def test_university_filter_is_case_insensitive(test_session, make_profile):
    make_profile(display_name="Stan", university="Stanford University")

    page = ProfileSearchEngine(test_session).search(SearchFilters.build(university="stanford"), PageRequest())

    assert _names(page) == ["Stan"]


def test_count_ignores_pagination(test_session, make_profile):
    for _ in range(7):
        make_profile(skills=["go"])
    make_profile(skills=["python"])

    assert ProfileSearchEngine(test_session).count(SearchFilters.build(skills=["go"])) == 7


def test_build_drops_blank_values():
    filters = SearchFilters.build(skills=[" python ", "", "python"], university="  ", search_term=" ")

    assert filters.skills == ("python",)
    assert filters.university is None
    assert filters.search_term is None
    assert filters.is_empty is False
    assert SearchFilters.build().is_empty


@pytest.mark.parametrize("page, limit, fields", [(0, 10, ["page"]), (1, 0, ["limit"]), (-1, 500, ["page", "limit"])])
def test_page_request_rejects_out_of_range_values(page, limit, fields):
    with pytest.raises(ValidationError) as excinfo:
        PageRequest.validated(page=page, limit=limit, max_limit=100)

    assert [error.field for error in excinfo.value.errors] == fields


def test_page_total_pages_and_map():
    page = Page(items=[1, 2], page=1, limit=2, total=5)

    assert page.total_pages == 3
    assert page.map(str).items == ["1", "2"]
    assert Page(items=[], page=1, limit=10, total=0).total_pages == 0


def test_tokenize_and_escape():
    assert tokenize("Machine learning, MACHINE vision") == ["machine", "learning", "vision"]
    assert tokenize(None) == []
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"
