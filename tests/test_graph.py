import pytest

from collection.ident import Identifier, ANY, ALL
from collection.graph import GraphConfig
from collection.defs import GraphDef

#-----------------------------------------------------------------------------

def cpu_file(plugin_instance, type_instance = "idle", host = "h1"):
    return Identifier(host, "cpu", plugin_instance, "cpu", type_instance)

class Collector:
    def __init__(self, stop_after = None):
        self.visited = []
        self.stop_after = stop_after

    def __call__(self, graph, instance):
        self.visited.append(instance)
        if self.stop_after is not None and \
           len(self.visited) >= self.stop_after:
            return "stop"
        return None

#-----------------------------------------------------------------------------

def test_selector_is_copied():
    selector = Identifier("", "cpu", ANY, "cpu", "")
    graph = GraphConfig(selector)
    selector.plugin = "memory"
    assert graph.selector.plugin == "cpu"
    graph.selector.plugin = "memory"
    assert graph.selector.plugin == "cpu"

def test_any_field_makes_separate_instances():
    graph = GraphConfig(Identifier("", "cpu", ANY, "cpu", ""))
    graph.add_file(Identifier("", "cpu", "0", "cpu", ""))
    graph.add_file(Identifier("", "cpu", "1", "cpu", ""))
    instances = graph.instances
    assert len(instances) == 2
    assert instances[0].ident.plugin_instance == "0"
    assert instances[1].ident.plugin_instance == "1"
    assert instances[0].ident.type_instance == instances[1].ident.type_instance

def test_all_field_collapses_instances():
    graph = GraphConfig(Identifier("", "cpu", ALL, "cpu", ""))
    graph.add_file(Identifier("", "cpu", "0", "cpu", ""))
    graph.add_file(Identifier("", "cpu", "1", "cpu", ""))
    assert len(graph) == 1
    instance = graph.instances[0]
    assert instance.ident.plugin_instance is ALL
    assert len(instance.files) == 2

def test_mixed_wildcards():
    graph = GraphConfig(Identifier(ANY, "cpu", ANY, "cpu", ALL))
    for host in ("h1", "h2"):
        for cpu in ("0", "1"):
            for state in ("idle", "user", "system"):
                graph.add_file(cpu_file(cpu, state, host))
    assert len(graph) == 4
    assert [i.ident.to_string() for i in graph] == [
        "h1/cpu-0/cpu-/all/",
        "h1/cpu-1/cpu-/all/",
        "h2/cpu-0/cpu-/all/",
        "h2/cpu-1/cpu-/all/",
    ]
    assert all(len(i.files) == 3 for i in graph)

def test_adding_same_file_twice_keeps_instance_count():
    graph = GraphConfig(Identifier(ANY, "cpu", ANY, "cpu", ALL))
    first = graph.add_file(cpu_file("0"))
    second = graph.add_file(cpu_file("0"))
    assert first is second
    assert len(graph) == 1
    assert len(first.files) == 2

def test_instances_keep_insertion_order():
    graph = GraphConfig(Identifier(ANY, "cpu", ANY, "cpu", ALL))
    for cpu in ("3", "1", "2", "1", "0"):
        graph.add_file(cpu_file(cpu))
    assert [i.ident.plugin_instance for i in graph] == ["3", "1", "2", "0"]

def test_clear_instances():
    graph = GraphConfig(Identifier(ANY, "cpu", ANY, "cpu", ALL))
    graph.add_file(cpu_file("0"))
    graph.clear_instances()
    assert len(graph) == 0
    assert graph.instances == []

#-----------------------------------------------------------------------------

def test_find_exact():
    graph = GraphConfig(Identifier("", "cpu", ANY, "cpu", ""))
    graph.add_file(Identifier("", "cpu", "0", "cpu", ""))
    graph.add_file(Identifier("", "cpu", "1", "cpu", ""))
    found = graph.find_exact(Identifier("", "cpu", "1", "cpu", ""))
    assert found is graph.instances[1]
    found = graph.find_exact(Identifier("", "cpu", "0", "cpu", ""))
    assert found is graph.instances[0]
    assert graph.find_exact(Identifier("", "cpu", "2", "cpu", "")) is None
    assert graph.find_exact(None) is None

def test_find_matching():
    graph = GraphConfig(Identifier(ANY, "cpu", ANY, "cpu", ALL))
    graph.add_file(cpu_file("0"))
    graph.add_file(cpu_file("1"))
    found = graph.find_matching(cpu_file("1", "user"))
    assert found is graph.instances[1]
    assert graph.find_matching(cpu_file("1", "user", host = "h9")) is None
    assert graph.find_matching(None) is None

def test_foreach_instance_stops_on_result():
    graph = GraphConfig(Identifier(ANY, "cpu", ANY, "cpu", ALL))
    for cpu in ("0", "1", "2"):
        graph.add_file(cpu_file(cpu))
    seen = []
    def callback(instance):
        seen.append(instance)
        if len(seen) == 2:
            return 17
    assert graph.foreach_instance(callback) == 17
    assert len(seen) == 2
    assert graph.foreach_instance(lambda i: None) == 0

#-----------------------------------------------------------------------------

def test_matches_ident_and_field():
    graph = GraphConfig(Identifier(ANY, "cpu", ALL, "cpu", ""))
    assert graph.matches_ident(Identifier("h", "CPU", "0", "cpu", ""))
    assert not graph.matches_ident(Identifier("h", "cpu", "0", "cpu", "x"))
    assert not graph.matches_ident(None)
    assert graph.matches_field("host", "anything")
    assert graph.matches_field("plugin_instance", "3")
    assert graph.matches_field("plugin", "Cpu")
    assert not graph.matches_field("plugin", "memory")
    assert not graph.matches_field("plugin", None)

def test_compare_with_selector():
    graph = GraphConfig(Identifier("", "cpu", ANY, "cpu", ""))
    assert graph.compare(Identifier("", "cpu", "/any/", "cpu", "")) == 0
    assert graph.compare(Identifier("", "load", "", "load", "")) < 0
    assert graph.compare(Identifier("", "a", "", "", "")) > 0

#-----------------------------------------------------------------------------

def test_search_field_with_literal_selector_field():
    graph = GraphConfig(Identifier(ANY, "cpu", ANY, "cpu", ALL))
    for cpu in ("0", "1"):
        graph.add_file(cpu_file(cpu))
    collector = Collector()
    assert graph.search_field("plugin", "CPU", collector) == 0
    assert len(collector.visited) == 2

    collector = Collector()
    assert graph.search_field("plugin", "memory", collector) == 0
    assert collector.visited == []

def test_search_field_with_wildcard_selector_field():
    graph = GraphConfig(Identifier(ANY, "cpu", ANY, "cpu", ALL))
    for cpu in ("0", "1", "2"):
        graph.add_file(cpu_file(cpu))
    collector = Collector()
    assert graph.search_field("plugin_instance", "1", collector) == 0
    assert [i.ident.plugin_instance for i in collector.visited] == ["1"]

    # collapsed field covers every value
    collector = Collector()
    graph.search_field("type_instance", "idle", collector)
    assert len(collector.visited) == 3

def test_search_field_short_circuits():
    graph = GraphConfig(Identifier(ANY, "cpu", ANY, "cpu", ALL))
    for cpu in ("0", "1", "2"):
        graph.add_file(cpu_file(cpu))
    collector = Collector(stop_after = 1)
    assert graph.search_field("plugin", "cpu", collector) == "stop"
    assert len(collector.visited) == 1

def test_search_field_requires_value_and_callback():
    graph = GraphConfig(Identifier(ANY, "cpu", ANY, "cpu", ALL))
    with pytest.raises(ValueError):
        graph.search_field("plugin", None, Collector())
    with pytest.raises(ValueError):
        graph.search_field("plugin", "cpu", None)

def test_search_by_title():
    graph = GraphConfig(Identifier(ANY, "cpu", ANY, "cpu", ALL),
                        title = "Processor Usage")
    for cpu in ("0", "1"):
        graph.add_file(cpu_file(cpu))
    collector = Collector()
    assert graph.search("processor", collector) == 0
    assert len(collector.visited) == 2

    collector = Collector()
    assert graph.search("USAGE", collector) == 0
    assert len(collector.visited) == 2

def test_search_by_instance():
    graph = GraphConfig(Identifier(ANY, "cpu", ANY, "cpu", ALL),
                        title = "Processor")
    graph.add_file(cpu_file("0", host = "web1"))
    graph.add_file(cpu_file("0", host = "db1"))
    collector = Collector()
    assert graph.search("web", collector) == 0
    assert [i.ident.host for i in collector.visited] == ["web1"]

    # type instance is only present in the data files
    collector = Collector()
    graph.search("idle", collector)
    assert len(collector.visited) == 2

def test_search_without_matches():
    graph = GraphConfig(Identifier(ANY, "cpu", ANY, "cpu", ALL),
                        title = "Processor")
    graph.add_file(cpu_file("0"))
    collector = Collector()
    assert graph.search("nothing-like-this", collector) == 0
    assert collector.visited == []

def test_search_skips_collapsed_fields():
    graph = GraphConfig(Identifier(ANY, "cpu", ANY, "cpu", ALL),
                        title = "Processor")
    graph.add_file(cpu_file("0"))
    # "/all/" is a wildcard, not a value of the instance
    for term in ("al", "/", "/all/"):
        collector = Collector()
        assert graph.search(term, collector) == 0
        assert collector.visited == []

def test_search_stops_on_callback_result():
    graph = GraphConfig(Identifier(ANY, "cpu", ANY, "cpu", ALL))
    for cpu in ("0", "1"):
        graph.add_file(cpu_file(cpu))
    collector = Collector(stop_after = 1)
    assert graph.search("cpu", collector) == "stop"
    assert len(collector.visited) == 1

#-----------------------------------------------------------------------------

def test_title_defaults_to_selector():
    graph = GraphConfig(Identifier(ANY, "cpu", ANY, "cpu", ALL))
    assert graph.get_title() == "/any//cpu-/any//cpu-/all/"
    assert graph.title is None
    graph.title = "CPU"
    assert graph.get_title() == "CPU"

def test_rrd_args():
    graph = GraphConfig(Identifier("", "load", "", "load", ""))
    instance = graph.add_file(Identifier("h", "load", "", "load", ""))
    assert graph.rrd_args(instance) == []
    graph.get_title()
    assert graph.rrd_args(instance) == []

    graph.show_zero = True
    assert graph.rrd_args(instance) == ["-l", "0"]
    graph.vertical_label = "load"
    graph.title = "System load"
    assert graph.rrd_args(instance) == \
        ["-t", "System load", "-v", "load", "-l", "0"]
    with pytest.raises(ValueError):
        graph.rrd_args(None)

def test_add_def():
    graph = GraphConfig(Identifier("", "load", "", "load", ""))
    first = GraphDef({"DSName": "shortterm"})
    second = GraphDef({"DSName": "longterm"})
    graph.add_def(first)
    graph.add_def(second)
    assert graph.defs == [first, second]
    with pytest.raises(ValueError):
        graph.add_def(None)

def test_params():
    graph = GraphConfig(Identifier("", "cpu", ANY, "cpu", ""))
    assert graph.params() == \
        "host=;plugin=cpu;plugin_instance=%2Fany%2F;type=cpu;type_instance="
