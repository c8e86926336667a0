from __future__ import annotations

import itertools
import secrets
from typing import Callable

IdFactory = Callable[[], str]


class IdGenerator:
    """Hands out property ids that are unique for the life of the generator.

    Ids carry a random session token plus a counter, so two generators in
    one process do not collide either. They never depend on node content.
    """

    def __init__(self, prefix: str = "prop", *, session: str | None = None):
        self.prefix = prefix
        self.session = session or secrets.token_hex(4)
        self._counter = itertools.count(1)

    def __call__(self) -> str:
        return f"{self.prefix}_{self.session}_{next(self._counter)}"


_default_generator = IdGenerator()


def generate_id() -> str:
    return _default_generator()
