from village.engine.state import Building, BuildingKind, Position
from village.narrators.base import Narrator


class FakeNarrator(Narrator):
    """Returns a canned response, or raises it if it is an exception."""

    def __init__(self, response):
        super().__init__("fake-narrator")
        self.response = response
        self.calls = []

    def narrate(self, troops: int) -> dict:
        self.calls.append(troops)
        if isinstance(self.response, BaseException):
            raise self.response
        return self.response


def make_building(kind, x, y, level=1, id=None):
    kind = BuildingKind(kind)
    return Building(id=id or f"{kind.slug}-{x}-{y}", kind=kind, level=level, position=Position(x, y))
