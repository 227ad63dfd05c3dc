import pytest

from catalog_api.crosscutting.pagination import MAX_OFFSET, PageRequest, total_pages

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "page,page_size,expected",
    [
        (None, None, (1, 10)),
        (0, 0, (1, 10)),
        (-2, -5, (1, 10)),
        (3, 25, (3, 25)),
        (1, 1000, (1, 100)),
    ],
)
def test_normalize(page, page_size, expected):
    request = PageRequest.normalize(page, page_size)
    assert (request.page, request.page_size) == expected


def test_offset_and_limit():
    request = PageRequest.normalize(3, 20)
    assert request.offset == 40
    assert request.limit == 20


def test_custom_bounds():
    request = PageRequest.normalize(None, None, default_size=7, max_size=8)
    assert request.page_size == 7
    assert PageRequest.normalize(None, 50, default_size=7, max_size=8).page_size == 8


@pytest.mark.parametrize(
    "total,size,expected", [(0, 10, 0), (-1, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2)]
)
def test_total_pages(total, size, expected):
    assert total_pages(total, size) == expected


@pytest.mark.parametrize("page_size", [1, 10, 100])
def test_huge_page_keeps_offset_in_bigint_range(page_size):
    request = PageRequest.normalize(10**18, page_size)

    assert 0 <= request.offset <= MAX_OFFSET
    assert request.offset + request.page_size > MAX_OFFSET - page_size


def test_reasonable_pages_are_not_clamped():
    assert PageRequest.normalize(10**6, 100).page == 10**6
