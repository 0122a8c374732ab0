from threadio.factory import ComponentFactory, get_factory


class _Widget:
    def __init__(self, lanes, label):
        self.lanes = lanes
        self.label = label


def test_create_passes_arguments():
    factory = ComponentFactory()
    factory.register("widget", _Widget)
    made = factory.create("widget", 3, "x")
    assert isinstance(made, _Widget)
    assert (made.lanes, made.label) == (3, "x")


def test_unknown_name_gives_none():
    factory = ComponentFactory()
    assert factory.create("missing", 1) is None
    assert "missing" not in factory


def test_register_replaces_previous():
    factory = ComponentFactory()
    factory.register("thing", lambda: "first")
    factory.register("thing", lambda: "second")
    assert factory.create("thing") == "second"
    assert "thing" in factory


def test_get_factory_is_singleton_per_key():
    first = get_factory("test-factory-a")
    assert get_factory("test-factory-a") is first
    assert get_factory("test-factory-b") is not first
    first.register("w", _Widget)
    assert get_factory("test-factory-a").create("w", 1, "y").label == "y"
    assert get_factory("test-factory-b").create("w", 1, "y") is None