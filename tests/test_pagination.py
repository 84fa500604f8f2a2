from app.utils.pagination import (
    PagedResult,
    calculate_total_pages,
    normalize_paging,
    page_offset,
    split_filter_tokens,
)


def test_page_below_one_is_clamped_to_one():
    assert normalize_paging(0, 10) == (1, 10)
    assert normalize_paging(-5, 10) == (1, 10)


def test_non_positive_page_size_uses_default_not_one():
    assert normalize_paging(1, 0) == (1, 10)
    assert normalize_paging(1, -3) == (1, 10)
    assert normalize_paging(1, 0, default_page_size=25) == (1, 25)


def test_page_size_capped_at_maximum():
    assert normalize_paging(2, 500) == (2, 100)
    assert normalize_paging(2, 100) == (2, 100)
    assert normalize_paging(2, 1) == (2, 1)


def test_total_pages_rounds_up_and_guards_zero():
    assert calculate_total_pages(25, 10) == 3
    assert calculate_total_pages(20, 10) == 2
    assert calculate_total_pages(0, 10) == 0
    assert calculate_total_pages(7, 0) == 0


def test_page_offset():
    assert page_offset(1, 10) == 0
    assert page_offset(3, 5) == 10


def test_split_filter_tokens_trims_and_drops_empty():
    assert split_filter_tokens(" C# , Go,, ") == ["C#", "Go"]
    assert split_filter_tokens("Python") == ["Python"]


def test_split_filter_tokens_blank_input():
    assert split_filter_tokens(None) == []
    assert split_filter_tokens("   ") == []
    assert split_filter_tokens(" , ,") == []


def test_paged_result_total_pages():
    result = PagedResult(items=["a", "b"], total_count=11, page=2, page_size=5)
    assert result.total_pages == 3
    assert result.items == ["a", "b"]
