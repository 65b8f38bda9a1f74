"""Unit tests for offset pagination helpers."""

from dataclasses import dataclass

from domain.shared.pagination import PAGE_SIZE, Page, page_offset


@dataclass
class Item:
    n: int

    def to_dict(self):
        return {"n": self.n}


def test_page_offset():
    assert PAGE_SIZE == 10
    assert page_offset(1) == 0
    assert page_offset(3) == 20
    assert page_offset(0) == 0
    assert page_offset(-4) == 0


def test_total_pages_rounds_up():
    assert Page(items=[], total=25, page=1).total_pages == 3
    assert Page(items=[], total=20, page=1).total_pages == 2
    assert Page(items=[], total=0, page=1).total_pages == 0


def test_to_dict():
    page = Page(items=[Item(1), Item(2)], total=12, page=2)

    assert page.to_dict() == {
        "items": [{"n": 1}, {"n": 2}],
        "total": 12,
        "page": 2,
        "pageSize": 10,
        "totalPages": 2,
    }
