import pytest

from threadio.proxy_vector import ProxyVector


class Base:
    def value(self):
        raise NotImplementedError


class Concrete(Base):
    def __init__(self, number, label="x"):
        self.number = number
        self.label = label

    def value(self):
        return self.number


def test_emplace_back_builds_element_of_declared_type():
    vector = ProxyVector(Concrete)
    item = vector.emplace_back(4, "four")
    assert type(item) is Concrete
    assert (item.number, item.label) == (4, "four")
    assert vector[0] is item


def test_length_and_iteration_order():
    vector = ProxyVector(Concrete)
    for number in (3, 1, 2):
        vector.emplace_back(number)
    assert len(vector) == 3
    assert [item.value() for item in vector] == [3, 1, 2]
    assert [vector[i].number for i in range(len(vector))] == [3, 1, 2]


def test_empty_vector():
    vector = ProxyVector(Concrete)
    assert len(vector) == 0
    assert list(vector) == []
    with pytest.raises(IndexError):
        vector[0]


def test_reserve_sets_capacity_without_adding_elements():
    vector = ProxyVector(Concrete)
    vector.reserve(10)
    assert vector.capacity == 10
    assert len(vector) == 0
    vector.reserve(2)
    assert vector.capacity == 10


def test_capacity_grows_with_elements():
    vector = ProxyVector(Concrete)
    vector.reserve(1)
    vector.emplace_back(1)
    vector.emplace_back(2)
    assert vector.capacity == len(vector)


def test_reserve_negative_raises():
    with pytest.raises(ValueError):
        ProxyVector(Concrete).reserve(-1)


def test_element_type_must_be_a_class():
    with pytest.raises(TypeError):
        ProxyVector(5)


def test_element_type_is_reported():
    assert ProxyVector(Concrete).element_type is Concrete