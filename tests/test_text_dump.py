from threadio.identifiers import EventIdentifier
from threadio.products import DataProductRetriever
from threadio.tasks import TaskGroup, TaskHolder, make_functor_task
from threadio.text_dump import TextDumpOutputer


def products():
    return [
        DataProductRetriever(0, [], "ints", "vector<int>", None),
        DataProductRetriever(1, [], "floats", "vector<float>", None),
    ]


def holder(group, ran, tag):
    return TaskHolder(group, make_functor_task(lambda: ran.append(tag)))


def test_uses_product_ready_async():
    assert TextDumpOutputer(True, False).uses_product_ready_async() is True


def test_per_event_dump_prints_products_and_events(capsys):
    outputer = TextDumpOutputer(True, False)
    retrievers = products()
    retrievers[0].size = 12
    outputer.setup_for_lane(0, retrievers)
    ran = []
    with TaskGroup() as group:
        outputer.product_ready_async(0, retrievers[0], holder(group, ran, "p"))
        outputer.output_async(1, EventIdentifier(1, 2, 3), holder(group, ran, "o"))
    lines = capsys.readouterr().out.splitlines()
    assert "lane: 0 product: ints size:12" in lines
    assert "lane: 1 finished event:1 2 3" in lines
    assert sorted(ran) == ["o", "p"]


def test_per_event_dump_keeps_push_order(capsys):
    outputer = TextDumpOutputer(True, False)
    ran = []
    with TaskGroup() as group:
        for event in range(1, 6):
            outputer.output_async(0, EventIdentifier(1, 1, event), holder(group, ran, event))
    lines = capsys.readouterr().out.splitlines()
    assert lines == [f"lane: 0 finished event:1 1 {e}" for e in range(1, 6)]
    assert sorted(ran) == [1, 2, 3, 4, 5]


def test_summary_only_prints_nothing_per_event_but_releases(capsys):
    outputer = TextDumpOutputer(False, True)
    retrievers = products()
    outputer.setup_for_lane(0, retrievers)
    ran = []
    with TaskGroup() as group:
        outputer.product_ready_async(0, retrievers[0], holder(group, ran, "p"))
        outputer.output_async(0, EventIdentifier(1, 1, 1), holder(group, ran, "o"))
    assert capsys.readouterr().out == ""
    assert sorted(ran) == ["o", "p"]


def test_summary_reports_average_sizes(capsys):
    outputer = TextDumpOutputer(False, True)
    retrievers = products()
    outputer.setup_for_lane(0, retrievers)
    ran = []
    with TaskGroup() as group:
        for ints_size in (10, 20):
            retrievers[0].size = ints_size
            retrievers[1].size = 8
            for product in retrievers:
                outputer.product_ready_async(0, product, holder(group, ran, "p"))
            outputer.output_async(0, EventIdentifier(1, 1, 1), holder(group, ran, "o"))
    outputer.print_summary()
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["product: ints ave size: 15", "product: floats ave size: 8"]
    assert len(ran) == 6


def test_summary_needs_lane_zero_setup(capsys):
    outputer = TextDumpOutputer(False, True)
    outputer.setup_for_lane(1, products())
    outputer.print_summary()
    assert capsys.readouterr().out == ""


def test_no_summary_when_disabled(capsys):
    outputer = TextDumpOutputer(False, False)
    outputer.setup_for_lane(0, products())
    ran = []
    with TaskGroup() as group:
        outputer.output_async(0, EventIdentifier(1, 1, 1), holder(group, ran, "o"))
    outputer.print_summary()
    assert capsys.readouterr().out == ""
    assert ran == ["o"]