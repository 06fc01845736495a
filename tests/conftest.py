import pytest

from seat_map_designer.models import Person
from seat_map_designer.seat_map import SeatMap


@pytest.fixture
def people():
    return [
        Person(id="person-1", name="Ada Lovelace", company="Analytical Engines", title="Engineer", role="Speaker"),
        Person(id="person-2", name="Grace Hopper", company="Navy", title="Rear Admiral", role="VIP"),
        Person(id="person-3", name="Alan Turing", company="Bletchley Park", title="Cryptanalyst", role="Guest"),
        Person(id="person-4", name="Edsger Dijkstra", company="Eindhoven", title="Professor", role="Sponsor"),
        Person(id="person-5", name="Barbara Liskov", company="MIT", title="Professor", role="Guest"),
    ]


@pytest.fixture
def seat_map(people):
    return SeatMap(people)
