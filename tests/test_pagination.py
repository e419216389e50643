from dataclasses import dataclass

import pytest

from store2.core.errors import ScrollProtocolError
from store2.core.pagination import ScrollCursor, ScrollState, scroll_pages


@dataclass
class Page:
    page_token: str | None
    items: tuple = ()


def test_cursor_starts_without_token():
    cursor = ScrollCursor()
    assert cursor.state is ScrollState.START
    assert cursor.next_token() is None


def test_cursor_threads_token_verbatim():
    cursor = ScrollCursor()
    assert cursor.advance("T1/=+") is ScrollState.IN_PROGRESS
    assert cursor.next_token() == "T1/=+"


@pytest.mark.parametrize("last", ["", None])
def test_cursor_finishes_on_empty_token(last):
    cursor = ScrollCursor()
    cursor.advance("T1")
    assert cursor.advance(last) is ScrollState.DONE
    assert cursor.done
    assert cursor.pages == 2


def test_cursor_rejects_repeated_token():
    cursor = ScrollCursor()
    cursor.advance("T1")
    cursor.advance("T2")
    with pytest.raises(ScrollProtocolError):
        cursor.advance("T1")


def test_done_cursor_cannot_advance():
    cursor = ScrollCursor()
    cursor.advance("")
    with pytest.raises(ScrollProtocolError):
        cursor.advance("T9")
    with pytest.raises(ScrollProtocolError):
        cursor.next_token()


async def test_scroll_pages_two_calls():
    pages = {None: Page("T1", (1, 2)), "T1": Page("", (3,))}
    seen = []

    async def fetch(token):
        seen.append(token)
        return pages[token]

    items = [item async for page in scroll_pages(fetch) for item in page.items]
    assert seen == [None, "T1"]
    assert items == [1, 2, 3]


async def test_scroll_pages_single_empty_page():
    async def fetch(token):
        return Page("")

    result = [page async for page in scroll_pages(fetch)]
    assert len(result) == 1


async def test_scroll_pages_aborts_on_loop():
    async def fetch(token):
        return Page("T1")

    with pytest.raises(ScrollProtocolError):
        async for _ in scroll_pages(fetch):
            pass
