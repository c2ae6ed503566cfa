from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import PlainTextResponse

from .models import CounterState

logger = logging.getLogger(__name__)

HELP_TEXT = "This page does nothing, add a '/count' or a '/hello'"
NOT_FOUND_TEXT = "404 - not found"


def text_line(message: str, status_code: int = 200) -> PlainTextResponse:
    return PlainTextResponse(message + "\n", status_code=status_code)


class HelloHandler:
    def __init__(self, response: str) -> None:
        self.response = response

    def handle(self, request: Request) -> PlainTextResponse:
        return text_line(self.response)


class CounterHandler:
    """Counts calls to ``/count``.

    The read-increment-respond sequence is not locked. Requests served in
    parallel can lose updates.
    """

    def __init__(self, state: CounterState) -> None:
        self.state = state

    def handle(self, request: Request) -> PlainTextResponse:
        logger.debug("count=%d", self.state.count)
        self.state.count += 1
        return text_line(f"Counter: {self.state.count}")


class NotFoundHandler:
    def handle(self, request: Request) -> PlainTextResponse:
        if request.url.path != "/":
            # the not-found message goes out twice: raw bytes, then as a line
            body = [(NOT_FOUND_TEXT + "\n").encode("utf-8")]
            body.append(f"{NOT_FOUND_TEXT}\n".encode("utf-8"))
            return PlainTextResponse(b"".join(body), status_code=404)
        return text_line(HELP_TEXT)
